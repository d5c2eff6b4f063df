import os

# Variáveis obrigatórias antes de importar 'config' (Fail Fast)
os.environ.setdefault('SECRET_KEY', 'chave-de-teste')
os.environ.setdefault('SUPABASE_URL', 'https://teste.supabase.co')
os.environ.setdefault('SUPABASE_KEY', 'chave-supabase-teste')

import pytest

from config import Config
from edumanager import create_app
from fakes import FakeSupabase, FakeTransporte

PROFESSORES = [
    {
        'id': 'p1', 'nome': 'Ana Silva', 'telefone': '+351 21 123 4567', 'email': 'ana@escola.com',
        'cargo': 'Professora Auxiliar', 'departamento': 'Matemática', 'status': 'ativo',
        'created_at': '2024-09-01T10:00:00+00:00', 'updated_at': '2024-09-01T10:00:00+00:00',
    },
    {
        'id': 'p2', 'nome': 'Bruno Costa', 'telefone': '+351 21 765 4321', 'email': 'bruno@escola.com',
        'cargo': 'Professor Associado', 'departamento': 'Física', 'status': 'ativo',
        'created_at': '2024-09-02T10:00:00+00:00', 'updated_at': '2024-09-02T10:00:00+00:00',
    },
    {
        'id': 'p3', 'nome': 'Carla Dias', 'telefone': '+351 21 000 0000', 'email': 'carla@escola.com',
        'cargo': 'Professora', 'departamento': 'Matemática', 'status': 'inativo',
        'created_at': '2024-09-03T10:00:00+00:00', 'updated_at': '2024-09-03T10:00:00+00:00',
    },
]


class TestConfig(Config):
    TESTING = True
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
    APP_BASE_URL = 'https://edumanager.teste'


@pytest.fixture
def supabase():
    return FakeSupabase(professores=PROFESSORES, turmas=[], contactos=[])


@pytest.fixture
def transporte():
    return FakeTransporte()


@pytest.fixture
def app(tmp_path, supabase, transporte):
    config = type('ConfigTemporaria', (TestConfig,), {'LOCAL_STORE_PATH': str(tmp_path / 'local.json')})
    return create_app(config, supabase_client=supabase, transporte=transporte)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    """Cliente com um utilizador autenticado na sessão."""
    with client.session_transaction() as sessao:
        sessao['user_profile'] = {'email': 'admin@escola.com', 'full_name': 'Admin Escola'}
        sessao['supabase_tokens'] = {'access_token': 'jwt-admin', 'refresh_token': 'refresh'}
    return client
