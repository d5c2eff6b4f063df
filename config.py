"""
Módulo de Configuração (Blindado)

Define a classe de configuração principal. Implementa o padrão 'Fail Fast':
se uma variável crítica estiver faltando (ou for inválida), a aplicação nem inicia.
"""

import os
from urllib.parse import urlparse
from dotenv import load_dotenv

# Carrega variáveis do arquivo .env
load_dotenv()


class ErroConfiguracao(ValueError):
    """Configuração ausente ou malformada. Não há recuperação possível."""


def _validar_url(url: str) -> str:
    partes = urlparse(url)
    if partes.scheme not in ('http', 'https') or not partes.netloc:
        raise ErroConfiguracao(f"ERRO CRÍTICO: 'SUPABASE_URL' não é uma URL válida: {url!r}")
    return url.rstrip('/')


class Config:
    """
    Classe de configuração base da aplicação.
    """

    # === SEGURANÇA CRÍTICA (Fail Fast) ===
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ErroConfiguracao("ERRO CRÍTICO: 'SECRET_KEY' não encontrada no .env. A aplicação não pode iniciar insegura.")

    # === SUPABASE (Base de dados + Auth + Edge Functions) ===
    SUPABASE_URL = os.environ.get('SUPABASE_URL')
    SUPABASE_KEY = os.environ.get('SUPABASE_KEY')

    if not SUPABASE_URL or not SUPABASE_KEY:
        raise ErroConfiguracao("ERRO CRÍTICO: 'SUPABASE_URL' e 'SUPABASE_KEY' são obrigatórias.")
    SUPABASE_URL = _validar_url(SUPABASE_URL)

    # === NOTIFICAÇÕES POR EMAIL ===
    EMAIL_FUNCTION_NAME = os.environ.get('EMAIL_FUNCTION_NAME', 'send-email')
    # Link colocado nos emails ("Aceder ao Sistema")
    APP_BASE_URL = os.environ.get('APP_BASE_URL', 'http://localhost:5000')

    # === ARMAZENAMENTO LOCAL (preferências e definições de notificação) ===
    # Relativo à pasta 'instance' quando não for absoluto
    LOCAL_STORE_PATH = os.environ.get('LOCAL_STORE_PATH', 'edumanager_local.json')

    # === FLASK ===
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Em produção, idealmente usar Redis. Para dev/demo, memória é ok.
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
