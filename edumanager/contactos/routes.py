"""
Rotas do Módulo Contactos
"""

from datetime import date, datetime

from flask import abort, flash, redirect, render_template, request, session, url_for

from . import contactos_bp
from . import services
from .forms import ContactoForm
from edumanager.core.exceptions import ErroRemoto, RegistoNaoEncontrado
from edumanager.notifications import get_notificador, resumo_falhas
from edumanager.professores import services as professores_services


@contactos_bp.route('/')
def lista():
    professores = professores_services.listar()
    estado = request.args.get('estado')
    consulta, contactos = services.listar(professores.data, estado)
    return render_template(
        'contactos/lista.html',
        contactos=contactos,
        erro=consulta.error or professores.error,
        estado=estado
    )


def _form(professores, contacto=None):
    if contacto:
        dados = dict(contacto)
        dados['data'] = date.fromisoformat(dados['data'][:10])
        dados['hora'] = datetime.strptime(dados['hora'][:5], '%H:%M').time()
        dados['emissor_id'] = dados.get('emissor_id') or ''
        dados['receptor_id'] = dados.get('receptor_id') or ''
    else:
        agora = datetime.now()
        dados = {'data': agora.date(), 'hora': agora.time().replace(second=0, microsecond=0)}

    form = ContactoForm(data=dados)
    # Os professores já gravados no contacto continuam disponíveis, mesmo inativos
    atuais = {contacto.get('emissor_id'), contacto.get('receptor_id')} if contacto else set()
    form.preencher_opcoes(professores_services.ativos(professores, incluir=atuais))
    return form


@contactos_bp.route('/novo', methods=['GET', 'POST'])
def novo():
    professores = professores_services.listar().data
    form = _form(professores)
    if form.validate_on_submit():
        try:
            contacto = services.criar(form.dados())
        except ErroRemoto as e:
            flash(f"Erro ao registar contacto: {e.mensagem}", "error")
            return render_template('contactos/form.html', form=form, contacto=None)

        flash("Contacto registado.", "success")
        resultados = get_notificador().notificar_contacto_registado(
            services.payload_notificacao(contacto, professores),
            session['user_profile'].get('email')
        )
        aviso = resumo_falhas(resultados)
        if aviso:
            flash(aviso, "warning")
        return redirect(url_for('contactos_bp.lista'))

    return render_template('contactos/form.html', form=form, contacto=None)


@contactos_bp.route('/<id_contacto>/editar', methods=['GET', 'POST'])
def editar(id_contacto):
    try:
        contacto = services.obter(id_contacto)
    except ErroRemoto as e:
        flash(f"Erro ao carregar contacto: {e.mensagem}", "error")
        return redirect(url_for('contactos_bp.lista'))
    if contacto is None:
        abort(404)

    form = _form(professores_services.listar().data, contacto)
    if form.validate_on_submit():
        try:
            services.atualizar(id_contacto, form.dados())
            flash("Contacto atualizado.", "success")
            return redirect(url_for('contactos_bp.lista'))
        except RegistoNaoEncontrado:
            abort(404)
        except ErroRemoto as e:
            flash(f"Erro ao atualizar contacto: {e.mensagem}", "error")

    return render_template('contactos/form.html', form=form, contacto=contacto)


@contactos_bp.route('/<id_contacto>/eliminar', methods=['POST'])
def eliminar(id_contacto):
    try:
        services.eliminar(id_contacto)
        flash("Contacto eliminado.", "success")
    except ErroRemoto as e:
        flash(f"Erro ao eliminar contacto: {e.mensagem}", "error")
    return redirect(url_for('contactos_bp.lista'))
