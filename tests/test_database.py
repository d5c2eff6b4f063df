from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from flask import Flask, session

from edumanager.core import database


@pytest.fixture
def app_base():
    app = Flask(__name__)
    app.secret_key = 'teste'
    database.init_app(app, fabrica=lambda token=None: SimpleNamespace(token=token))
    return app


def test_cada_pedido_usa_o_token_do_seu_utilizador(app_base):
    with app_base.test_request_context():
        session[database.CHAVE_TOKENS] = {'access_token': 'jwt-a', 'refresh_token': 'r'}
        cliente_a = database.get_client()
        assert cliente_a.token == 'jwt-a'
        # Um cliente por pedido
        assert database.get_client() is cliente_a

    with app_base.test_request_context():
        session[database.CHAVE_TOKENS] = {'access_token': 'jwt-b', 'refresh_token': 'r'}
        assert database.get_client().token == 'jwt-b'

    assert cliente_a.token == 'jwt-a'


def test_sem_sessao_usa_a_chave_anonima(app_base):
    with app_base.test_request_context():
        assert database.get_client().token is None


def test_fora_de_um_pedido_usa_o_cliente_da_aplicacao(app_base):
    with app_base.app_context():
        assert database.get_client() is database.get_client_de(app_base)


def test_autenticacao_usa_um_cliente_novo_de_cada_vez(app_base):
    with app_base.test_request_context():
        session[database.CHAVE_TOKENS] = {'access_token': 'jwt-a', 'refresh_token': 'r'}
        dados = database.get_client()
        auth_1 = database.get_auth_client()
        auth_2 = database.get_auth_client()
    assert auth_1 is not auth_2
    assert dados not in (auth_1, auth_2)
    assert auth_1.token is None


def test_cliente_injetado_serve_para_tudo():
    app = Flask(__name__)
    app.secret_key = 'teste'
    falso = object()
    database.init_app(app, cliente=falso)
    with app.test_request_context():
        assert database.get_client() is falso
        assert database.get_auth_client() is falso


def test_fabrica_supabase_aplica_o_token_ao_postgrest():
    with patch.object(database, 'create_client') as create_client:
        create_client.side_effect = lambda *args, **kwargs: MagicMock()
        criar = database.fabrica_supabase('https://teste.supabase.co', 'chave')

        anonimo = criar(None)
        autenticado = criar('jwt-a')

    anonimo.postgrest.auth.assert_not_called()
    autenticado.postgrest.auth.assert_called_once_with('jwt-a')
    assert create_client.call_args.args == ('https://teste.supabase.co', 'chave')
