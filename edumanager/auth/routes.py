"""
Rotas do Módulo de Autenticação

Gerencia as rotas para /login, /registar, /recuperar-password e /logout.
"""

from flask import (
    render_template, 
    redirect, 
    url_for, 
    session, 
    flash
)

from . import services as auth_services
from . import auth_bp  
from edumanager.core.exceptions import ErroAutenticacao
from edumanager.core.extensions import limiter
from .forms import LoginForm, RecuperarPasswordForm, RegistoForm


@auth_bp.route('/login', methods=['GET', 'POST'])
@limiter.limit("10 per minute", methods=['POST'])
def login():
    """ Exibe e processa a página de login. """
    if auth_services.CHAVE_SESSAO in session:
        return redirect(url_for('dashboard_bp.inicio'))

    form = LoginForm()
    if form.validate_on_submit():
        try:
            auth_services.entrar(form.email.data.strip(), form.password.data)
            return redirect(url_for('dashboard_bp.inicio'))
        except ErroAutenticacao as e:
            flash(e.mensagem, "error")

    return render_template('auth/login.html', form=form)


@auth_bp.route('/registar', methods=['GET', 'POST'])
@limiter.limit("5 per minute", methods=['POST'])
def registar():
    form = RegistoForm()
    if form.validate_on_submit():
        try:
            auth_services.registar(
                form.email.data.strip(),
                form.password.data,
                form.nome_completo.data.strip()
            )
            flash("Conta criada! Verifique o seu email para confirmar o registo.", "success")
            return redirect(url_for('auth_bp.login'))
        except ErroAutenticacao as e:
            flash(e.mensagem, "error")

    return render_template('auth/registar.html', form=form)


@auth_bp.route('/recuperar-password', methods=['GET', 'POST'])
@limiter.limit("3 per minute", methods=['POST'])
def recuperar_password():
    form = RecuperarPasswordForm()
    if form.validate_on_submit():
        try:
            auth_services.recuperar_password(
                form.email.data.strip(),
                redirect_to=url_for('auth_bp.login', _external=True)
            )
            flash("Se o email existir, receberá instruções para redefinir a password.", "success")
            return redirect(url_for('auth_bp.login'))
        except ErroAutenticacao as e:
            flash(e.mensagem, "error")

    return render_template('auth/recuperar_password.html', form=form)


@auth_bp.route('/logout')
def logout():
    auth_services.sair()
    return redirect(url_for('auth_bp.login'))
