"""
Camada de Serviço (Service Layer) da Autenticação

Encapsula o Supabase Auth. O utilizador corrente fica na sessão Flask
como {'email': ..., 'full_name': ...}.
"""

from typing import Optional

from flask import redirect, session, url_for

from edumanager.core.database import CHAVE_TOKENS, get_auth_client
from edumanager.core.exceptions import ErroAutenticacao, mensagem_de
from edumanager.core.logger import get_logger

# Inicializa o logger para este módulo
logger = get_logger(__name__)

CHAVE_SESSAO = 'user_profile'


def _perfil(user) -> dict:
    metadados = getattr(user, 'user_metadata', None) or {}
    return {
        'email': user.email,
        'full_name': metadados.get('full_name'),
    }


def _tokens(resposta) -> dict:
    sessao = getattr(resposta, 'session', None)
    if not sessao:
        return {}
    return {'access_token': sessao.access_token, 'refresh_token': sessao.refresh_token}


def entrar(email: str, password: str) -> dict:
    """
    Autentica no Supabase e guarda o perfil na sessão.
    """
    try:
        resposta = get_auth_client().auth.sign_in_with_password({'email': email, 'password': password})
    except Exception as e:
        logger.warning(f"Falha no login de {email}: {mensagem_de(e)}")
        raise ErroAutenticacao(mensagem_de(e, 'Credenciais inválidas')) from e

    if not resposta or not resposta.user:
        raise ErroAutenticacao('Credenciais inválidas')

    perfil = _perfil(resposta.user)
    session[CHAVE_SESSAO] = perfil
    session[CHAVE_TOKENS] = _tokens(resposta)
    logger.info(f"Login efetuado: {email}")
    return perfil


def registar(email: str, password: str, nome_completo: str) -> dict:
    try:
        resposta = get_auth_client().auth.sign_up({
            'email': email,
            'password': password,
            'options': {'data': {'full_name': nome_completo}},
        })
    except Exception as e:
        logger.warning(f"Falha no registo de {email}: {mensagem_de(e)}")
        raise ErroAutenticacao(mensagem_de(e, 'Erro ao criar conta')) from e

    if not resposta or not resposta.user:
        raise ErroAutenticacao('Erro ao criar conta')

    logger.info(f"Nova conta criada: {email}")
    return _perfil(resposta.user)


def sair() -> None:
    perfil = session.pop(CHAVE_SESSAO, None)
    tokens = session.pop(CHAVE_TOKENS, None) or {}
    if tokens.get('access_token'):
        try:
            # Termina apenas a sessão deste utilizador, num cliente só para isso
            cliente = get_auth_client()
            cliente.auth.set_session(tokens['access_token'], tokens.get('refresh_token'))
            cliente.auth.sign_out()
        except Exception as e:
            # A sessão local já foi limpa; o erro remoto não impede o logout
            logger.warning(f"Erro ao terminar sessão no Supabase: {mensagem_de(e)}")
    if perfil:
        logger.info(f"Logout: {perfil.get('email')}")


def recuperar_password(email: str, redirect_to: Optional[str] = None) -> None:
    opcoes = {'redirect_to': redirect_to} if redirect_to else {}
    try:
        get_auth_client().auth.reset_password_for_email(email, opcoes)
    except Exception as e:
        logger.warning(f"Falha ao pedir recuperação de password para {email}: {mensagem_de(e)}")
        raise ErroAutenticacao(mensagem_de(e, 'Erro ao enviar email de recuperação')) from e
    logger.info(f"Pedido de recuperação de password: {email}")


def utilizador_atual() -> Optional[dict]:
    return session.get(CHAVE_SESSAO)


def exigir_login():
    """ 'before_request' dos Blueprints protegidos. """
    if CHAVE_SESSAO not in session:
        return redirect(url_for('auth_bp.login'))
