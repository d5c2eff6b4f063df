"""
Script Utilitário: relatorio_semanal.py
Envia o relatório semanal aos destinatários configurados.
Pensado para ser agendado (ex.: cron à segunda-feira de manhã).

$ python relatorio_semanal.py [email-do-utilizador]
"""

import sys

from edumanager import create_app
from edumanager.core.exceptions import ErroRemoto
from edumanager.dashboard.services import relatorio_semanal_atual
from edumanager.notifications import get_notificador

# Inicializa a aplicação para carregar configurações e o cliente Supabase
app = create_app()


def enviar(email_utilizador=None) -> int:
    print("--- Relatório semanal ---")

    # Precisamos do contexto da aplicação para aceder ao Supabase e ao Notificador
    with app.app_context():
        try:
            payload = relatorio_semanal_atual()
        except ErroRemoto as e:
            print(f"❌ ERRO: {e.mensagem}")
            return 1

        print(f"Professores ativos: {payload.professores} | Turmas ativas: {payload.turmas} | Contactos: {payload.contactos}")
        resultados = get_notificador().enviar_relatorio_semanal(payload, email_utilizador)

    if not resultados:
        print("⚠️  Relatórios semanais desativados ou sem destinatários. Nada enviado.")
        return 0

    for r in resultados:
        print(f"{'✅' if r.sucesso else '❌'} {r.destinatario}{'' if r.sucesso else ' - ' + r.erro}")
    return 0 if all(r.sucesso for r in resultados) else 1


if __name__ == "__main__":
    sys.exit(enviar(sys.argv[1] if len(sys.argv) > 1 else None))
