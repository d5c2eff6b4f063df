"""
Rotas do Módulo Turmas
"""

from datetime import date

from flask import abort, flash, redirect, render_template, request, session, url_for

from . import turmas_bp
from . import services
from .forms import TurmaForm
from edumanager.core.exceptions import ErroRemoto, RegistoNaoEncontrado
from edumanager.core.models import STATUS_TURMA
from edumanager.notifications import get_notificador, resumo_falhas
from edumanager.professores import services as professores_services


@turmas_bp.route('/')
def lista():
    professores = professores_services.listar()
    status = request.args.get('status')
    filtro = f"status.eq.{status}" if status in STATUS_TURMA else None
    consulta, turmas = services.listar(professores.data, filtro)
    return render_template(
        'turmas/lista.html',
        turmas=turmas,
        erro=consulta.error or professores.error,
        status=status
    )


def _form(professores, turma=None):
    dados = dict(turma) if turma else None
    if dados:
        dados['professor_id'] = dados.get('professor_id') or ''
        if dados.get('data_inicio'):
            dados['data_inicio'] = date.fromisoformat(dados['data_inicio'][:10])
    form = TurmaForm(data=dados)
    atual = {turma.get('professor_id')} if turma else set()
    form.preencher_opcoes(professores_services.ativos(professores, incluir=atual))
    return form


@turmas_bp.route('/novo', methods=['GET', 'POST'])
def novo():
    professores = professores_services.listar().data
    form = _form(professores)
    if form.validate_on_submit():
        try:
            turma = services.criar(form.dados())
        except ErroRemoto as e:
            flash(f"Erro ao guardar turma: {e.mensagem}", "error")
            return render_template('turmas/form.html', form=form, turma=None)

        flash(f"Turma '{turma['cod_formacao']}' criada.", "success")
        resultados = get_notificador().notificar_turma_criada(
            services.payload_notificacao(turma, professores),
            session['user_profile'].get('email')
        )
        aviso = resumo_falhas(resultados)
        if aviso:
            flash(aviso, "warning")
        return redirect(url_for('turmas_bp.lista'))

    return render_template('turmas/form.html', form=form, turma=None)


@turmas_bp.route('/<id_turma>/editar', methods=['GET', 'POST'])
def editar(id_turma):
    try:
        turma = services.obter(id_turma)
    except ErroRemoto as e:
        flash(f"Erro ao carregar turma: {e.mensagem}", "error")
        return redirect(url_for('turmas_bp.lista'))
    if turma is None:
        abort(404)

    form = _form(professores_services.listar().data, turma)
    if form.validate_on_submit():
        try:
            services.atualizar(id_turma, form.dados())
            flash("Turma atualizada.", "success")
            return redirect(url_for('turmas_bp.lista'))
        except RegistoNaoEncontrado:
            abort(404)
        except ErroRemoto as e:
            flash(f"Erro ao atualizar turma: {e.mensagem}", "error")

    return render_template('turmas/form.html', form=form, turma=turma)


@turmas_bp.route('/<id_turma>/eliminar', methods=['POST'])
def eliminar(id_turma):
    try:
        services.eliminar(id_turma)
        flash("Turma eliminada.", "success")
    except ErroRemoto as e:
        flash(f"Erro ao eliminar turma: {e.mensagem}", "error")
    return redirect(url_for('turmas_bp.lista'))
