"""
Rotas do Módulo Configurações
"""

from flask import flash, redirect, render_template, session, url_for

from . import configuracoes_bp
from . import services
from .forms import DefinicoesNotificacaoForm, DestinatarioForm, PreferenciasForm
from edumanager.core.exceptions import ErroRemoto
from edumanager.core.logger import get_logger
from edumanager.dashboard.services import relatorio_semanal_atual
from edumanager.notifications import get_notificador, resumo_falhas

logger = get_logger(__name__)


def _email():
    return session['user_profile']['email']


def _voltar():
    return redirect(url_for('configuracoes_bp.index'))


@configuracoes_bp.route('/')
def index():
    definicoes = services.repositorio().carregar(_email())
    preferencias = services.preferencias_utilizador(_email())
    return render_template(
        'configuracoes/index.html',
        utilizador=session['user_profile'],
        definicoes=definicoes,
        form_notificacoes=DefinicoesNotificacaoForm(data=definicoes.model_dump()),
        form_destinatario=DestinatarioForm(),
        form_preferencias=PreferenciasForm(data=preferencias.valor)
    )


@configuracoes_bp.route('/notificacoes', methods=['POST'])
def guardar_notificacoes():
    form = DefinicoesNotificacaoForm()
    if form.validate_on_submit():
        try:
            services.repositorio().atualizar(
                _email(),
                email_novo_professor=form.email_novo_professor.data,
                email_nova_turma=form.email_nova_turma.data,
                email_novo_contacto=form.email_novo_contacto.data,
                relatorios_semanais=form.relatorios_semanais.data
            )
            flash("Configurações guardadas.", "success")
        except OSError as e:
            logger.error(f"Erro ao guardar definições: {e}", exc_info=True)
            flash("Erro ao guardar configurações.", "error")
    return _voltar()


@configuracoes_bp.route('/destinatarios', methods=['POST'])
def adicionar_destinatario():
    form = DestinatarioForm()
    if not form.validate_on_submit():
        for erro in form.email.errors:
            flash(erro, "error")
        return _voltar()

    email = form.email.data.strip()
    try:
        if services.adicionar_destinatario(_email(), email):
            flash(f"Destinatário '{email}' adicionado.", "success")
        else:
            flash(f"O destinatário '{email}' já está na lista.", "warning")
    except OSError as e:
        logger.error(f"Erro ao guardar destinatários: {e}", exc_info=True)
        flash("Erro ao guardar destinatários.", "error")
    return _voltar()


@configuracoes_bp.route('/destinatarios/remover', methods=['POST'])
def remover_destinatario():
    form = DestinatarioForm()
    if form.validate_on_submit():
        try:
            services.remover_destinatario(_email(), form.email.data.strip())
            flash("Destinatário removido.", "success")
        except OSError as e:
            logger.error(f"Erro ao guardar destinatários: {e}", exc_info=True)
            flash("Erro ao guardar destinatários.", "error")
    return _voltar()


@configuracoes_bp.route('/preferencias', methods=['POST'])
def guardar_preferencias():
    form = PreferenciasForm()
    if form.validate_on_submit():
        preferencias = services.preferencias_utilizador(_email())
        preferencias.definir(lambda atual: {**atual, 'separador_inicial': form.separador_inicial.data})
        flash("Preferências guardadas.", "success")
    return _voltar()


@configuracoes_bp.route('/relatorio-semanal', methods=['POST'])
def enviar_relatorio_semanal():
    try:
        payload = relatorio_semanal_atual()
    except ErroRemoto as e:
        flash(e.mensagem, "error")
        return _voltar()

    resultados = get_notificador().enviar_relatorio_semanal(payload, _email())
    if not resultados:
        flash("Relatórios semanais desativados ou sem destinatários.", "warning")
    else:
        aviso = resumo_falhas(resultados)
        flash(aviso or "Relatório semanal enviado.", "warning" if aviso else "success")
    return _voltar()
