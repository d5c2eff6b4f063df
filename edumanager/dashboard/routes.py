"""
Rotas do Módulo Dashboard
"""

import json
from datetime import datetime

from flask import Response, abort, redirect, render_template, session, url_for

from . import dashboard_bp
from . import services
from edumanager.configuracoes.services import preferencias_utilizador
from edumanager.core.relations import com_nome_professor, com_nomes_contacto
from edumanager.core.sync import ConsultaRemota
from edumanager.core.logger import get_logger

logger = get_logger(__name__)

TIPOS_RELATORIO = ('geral', 'professores', 'turmas', 'contactos')


def _carregar_tudo():
    consultas = [ConsultaRemota(c) for c in ('professores', 'turmas', 'contactos')]
    erro = next((c.error for c in consultas if c.error), None)
    return [c.data for c in consultas], erro


@dashboard_bp.route('/')
def index():
    (professores, turmas, contactos), erro = _carregar_tudo()
    return render_template(
        'dashboard/index.html',
        estatisticas=services.estatisticas_dashboard(professores, turmas, contactos),
        atividades=services.atividades_recentes(professores, turmas, contactos),
        erro=erro
    )


@dashboard_bp.route('/inicio')
def inicio():
    """ Redireciona para o separador preferido do utilizador. """
    preferencias = preferencias_utilizador(session['user_profile']['email'])
    return redirect(url_for(preferencias.valor.get('separador_inicial', 'dashboard_bp.index')))


@dashboard_bp.route('/relatorios')
def relatorios():
    (professores, turmas, contactos), erro = _carregar_tudo()
    return render_template(
        'dashboard/relatorios.html',
        estatisticas=services.estatisticas_relatorio(professores, turmas, contactos),
        tipos=TIPOS_RELATORIO,
        erro=erro
    )


@dashboard_bp.route('/relatorios/download/<tipo>')
def download_relatorio(tipo):
    if tipo not in TIPOS_RELATORIO:
        abort(404)

    (professores, turmas, contactos), erro = _carregar_tudo()
    if erro:
        logger.error(f"Relatório '{tipo}' gerado com dados incompletos: {erro}")

    dados = {
        'tipo': tipo,
        'gerado_em': datetime.now().isoformat(timespec='seconds'),
        'estatisticas': services.estatisticas_relatorio(professores, turmas, contactos),
    }
    if tipo in ('geral', 'professores'):
        dados['professores'] = professores
    if tipo in ('geral', 'turmas'):
        dados['turmas'] = com_nome_professor(turmas, professores)
    if tipo in ('geral', 'contactos'):
        dados['contactos'] = com_nomes_contacto(contactos, professores)

    nome = f"relatorio-{tipo}-{datetime.now().strftime('%Y-%m-%d')}.json"
    return Response(
        json.dumps(dados, ensure_ascii=False, indent=2),
        mimetype='application/json',
        headers={'Content-Disposition': f'attachment; filename={nome}'}
    )
