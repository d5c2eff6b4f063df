import importlib.util
import os

import pytest

import config
from config import ErroConfiguracao, _validar_url

CAMINHO_CONFIG = os.path.abspath(config.__file__)


def _carregar_config_de_novo():
    """Executa de novo o corpo de 'config.py' com o ambiente atual."""
    spec = importlib.util.spec_from_file_location('config_recarregado', CAMINHO_CONFIG)
    modulo = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(modulo)
    return modulo


@pytest.mark.parametrize('url', [
    'https://abcd.supabase.co',
    'http://localhost:54321',
])
def test_url_valida(url):
    assert _validar_url(url) == url


def test_url_sem_barra_final():
    assert _validar_url('https://abcd.supabase.co/') == 'https://abcd.supabase.co'


@pytest.mark.parametrize('url', ['abcd.supabase.co', 'ftp://abcd.supabase.co', 'https://', ''])
def test_url_invalida(url):
    with pytest.raises(ErroConfiguracao):
        _validar_url(url)


@pytest.mark.parametrize('variavel', ['SECRET_KEY', 'SUPABASE_URL', 'SUPABASE_KEY'])
def test_variavel_obrigatoria_em_falta(monkeypatch, variavel):
    monkeypatch.delenv(variavel)
    with pytest.raises(ValueError):
        _carregar_config_de_novo()


def test_supabase_url_malformada(monkeypatch):
    monkeypatch.setenv('SUPABASE_URL', 'nao-e-uma-url')
    # O módulo recarregado define a sua própria classe ErroConfiguracao
    with pytest.raises(ValueError) as erro:
        _carregar_config_de_novo()
    assert type(erro.value).__name__ == 'ErroConfiguracao'
    assert 'SUPABASE_URL' in str(erro.value)


def test_valores_por_omissao(monkeypatch):
    for variavel in ('EMAIL_FUNCTION_NAME', 'LOCAL_STORE_PATH', 'LOG_LEVEL'):
        monkeypatch.delenv(variavel, raising=False)
    modulo = _carregar_config_de_novo()
    assert modulo.Config.EMAIL_FUNCTION_NAME == 'send-email'
    assert modulo.Config.LOCAL_STORE_PATH == 'edumanager_local.json'
    assert modulo.Config.LOG_LEVEL == 'INFO'
