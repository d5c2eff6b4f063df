"""
Módulo de Conexão com o Banco de Dados (Core)

Há três usos do cliente Supabase:
- get_client(): consultas/mutações. Dentro de um pedido HTTP é um cliente
  próprio desse pedido, autenticado com o token do utilizador guardado na
  sessão Flask. Fora de um pedido (scripts) é o cliente anónimo da aplicação.
- get_auth_client(): um cliente novo para cada operação de autenticação,
  para que o login/logout de um utilizador não altere o estado de outro.
- get_client_de(app): o cliente anónimo da aplicação (Edge Functions).
"""

from typing import Callable, Optional

from flask import current_app, g, has_request_context, session
from supabase import Client, ClientOptions, create_client

from edumanager.core.logger import get_logger

logger = get_logger(__name__)

EXTENSAO = 'supabase_client'
EXTENSAO_FABRICA = 'supabase_fabrica'

# Chave da sessão Flask com {'access_token': ..., 'refresh_token': ...}
CHAVE_TOKENS = 'supabase_tokens'

Fabrica = Callable[[Optional[str]], Client]


def fabrica_supabase(url: str, chave: str) -> Fabrica:
    """
    Devolve uma função token -> cliente novo. Sem token, o cliente usa a
    chave anónima; com token, os pedidos PostgREST levam esse JWT.
    """
    def criar(token: Optional[str] = None) -> Client:
        cliente = create_client(url, chave, options=ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        ))
        if token:
            cliente.postgrest.auth(token)
        return cliente

    return criar


def init_app(app, cliente: Optional[Client] = None, fabrica: Optional[Fabrica] = None) -> None:
    """
    Regista o cliente anónimo e a fábrica de clientes na aplicação.
    Os testes injetam um cliente falso (usado para tudo) ou uma fábrica.
    """
    if cliente is not None:
        fabrica = lambda token=None: cliente
    elif fabrica is None:
        fabrica = fabrica_supabase(app.config['SUPABASE_URL'], app.config['SUPABASE_KEY'])

    try:
        app.extensions[EXTENSAO] = cliente if cliente is not None else fabrica(None)
        logger.info("Cliente Supabase criado com sucesso.")
    except Exception as e:
        logger.critical(f"ERRO AO CRIAR O CLIENTE SUPABASE: {e}", exc_info=True)
        raise
    app.extensions[EXTENSAO_FABRICA] = fabrica


def _token_da_sessao() -> Optional[str]:
    tokens = session.get(CHAVE_TOKENS) or {}
    return tokens.get('access_token')


def get_client() -> Client:
    """Cliente das consultas: por pedido HTTP, ou o anónimo fora de um pedido."""
    if not has_request_context():
        return get_client_de(current_app)

    if 'supabase_client' not in g:
        fabrica = current_app.extensions.get(EXTENSAO_FABRICA)
        if fabrica is None:
            return get_client_de(current_app)
        g.supabase_client = fabrica(_token_da_sessao())
    return g.supabase_client


def get_auth_client() -> Client:
    """Cliente descartável para uma operação de autenticação."""
    fabrica = current_app.extensions.get(EXTENSAO_FABRICA)
    if fabrica is None:
        return get_client_de(current_app)
    return fabrica(None)


def get_client_de(app) -> Client:
    cliente = app.extensions.get(EXTENSAO)
    if cliente is None:
        logger.critical("Tentativa de acesso ao Supabase falhou: cliente não inicializado.")
        raise ConnectionError("Não foi possível conectar ao Supabase.")
    return cliente
