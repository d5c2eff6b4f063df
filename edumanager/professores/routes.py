"""
Rotas do Módulo Professores
"""

from flask import abort, flash, redirect, render_template, request, session, url_for

from . import professores_bp
from . import services
from .forms import ProfessorForm
from edumanager.core.exceptions import ErroRemoto, RegistoNaoEncontrado
from edumanager.core.logger import get_logger
from edumanager.notifications import get_notificador, resumo_falhas

logger = get_logger(__name__)


def _email_utilizador():
    return session['user_profile'].get('email')


@professores_bp.route('/')
def lista():
    termo = request.args.get('q', '').strip()
    consulta = services.listar(termo)
    return render_template(
        'professores/lista.html',
        professores=consulta.data,
        erro=consulta.error,
        termo=termo
    )


@professores_bp.route('/novo', methods=['GET', 'POST'])
def novo():
    form = ProfessorForm()
    if form.validate_on_submit():
        try:
            professor = services.criar(form.dados())
        except ErroRemoto as e:
            # Mantém o formulário aberto com o erro
            flash(f"Erro ao guardar professor: {e.mensagem}", "error")
            return render_template('professores/form.html', form=form, professor=None)

        flash(f"Professor '{professor['nome']}' adicionado.", "success")
        resultados = get_notificador().notificar_professor_adicionado(
            services.payload_notificacao(professor), _email_utilizador()
        )
        aviso = resumo_falhas(resultados)
        if aviso:
            flash(aviso, "warning")
        return redirect(url_for('professores_bp.lista'))

    return render_template('professores/form.html', form=form, professor=None)


@professores_bp.route('/<id_professor>/editar', methods=['GET', 'POST'])
def editar(id_professor):
    try:
        professor = services.obter(id_professor)
    except ErroRemoto as e:
        flash(f"Erro ao carregar professor: {e.mensagem}", "error")
        return redirect(url_for('professores_bp.lista'))
    if professor is None:
        abort(404)

    form = ProfessorForm(data=professor)
    if form.validate_on_submit():
        try:
            services.atualizar(id_professor, form.dados())
            flash("Professor atualizado.", "success")
            return redirect(url_for('professores_bp.lista'))
        except RegistoNaoEncontrado:
            abort(404)
        except ErroRemoto as e:
            flash(f"Erro ao atualizar professor: {e.mensagem}", "error")

    return render_template('professores/form.html', form=form, professor=professor)


@professores_bp.route('/<id_professor>/eliminar', methods=['POST'])
def eliminar(id_professor):
    try:
        services.eliminar(id_professor)
        flash("Professor eliminado.", "success")
    except ErroRemoto as e:
        flash(f"Erro ao eliminar professor: {e.mensagem}", "error")
    return redirect(url_for('professores_bp.lista'))
