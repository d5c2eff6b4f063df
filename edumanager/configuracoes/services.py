"""
Camada de Serviço das Configurações

As preferências de interface ficam no armazém local (uma chave por
utilizador). As definições de notificação passam pelo repositório
injetado no Notificador.
"""

from flask import current_app

from edumanager.core.mirror import ValorPersistido, persistido
from edumanager.notifications import get_notificador
from edumanager.notifications.settings import RepositorioDefinicoes

SEPARADORES = [
    ('dashboard_bp.index', 'Dashboard'),
    ('professores_bp.lista', 'Professores'),
    ('turmas_bp.lista', 'Turmas'),
    ('contactos_bp.lista', 'Contactos'),
    ('dashboard_bp.relatorios', 'Relatórios'),
]

PREFERENCIAS_PADRAO = {'separador_inicial': 'dashboard_bp.index'}


def preferencias_utilizador(email: str) -> ValorPersistido:
    armazem = current_app.extensions['armazem_local']
    preferencias = persistido(f"preferencias:{email}", dict(PREFERENCIAS_PADRAO), armazem)
    validos = {endpoint for endpoint, _ in SEPARADORES}
    if not isinstance(preferencias.valor, dict) or preferencias.valor.get('separador_inicial') not in validos:
        preferencias.valor = dict(PREFERENCIAS_PADRAO)
    return preferencias


def repositorio() -> RepositorioDefinicoes:
    return get_notificador().repositorio


def adicionar_destinatario(email_utilizador: str, email: str) -> bool:
    """False se o email já estava na lista (nada é gravado)."""
    email = email.strip()
    definicoes = repositorio().carregar(email_utilizador)
    if email in definicoes.email_recipients:
        return False
    repositorio().atualizar(email_utilizador, email_recipients=definicoes.email_recipients + [email])
    return True


def remover_destinatario(email_utilizador: str, email: str):
    definicoes = repositorio().carregar(email_utilizador)
    return repositorio().atualizar(
        email_utilizador,
        email_recipients=[e for e in definicoes.email_recipients if e != email]
    )
