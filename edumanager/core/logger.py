"""
Módulo de Logging Centralizado.

Todos os módulos usam get_logger(__name__); a saída vai para stdout
(padrão para containers/Docker). O nível vem de LOG_LEVEL.
"""

import logging
import os
import sys

FORMATO = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'


def _nivel(nivel=None) -> str:
    return (nivel or os.environ.get('LOG_LEVEL') or 'INFO').upper()


def get_logger(name: str, nivel: str = None) -> logging.Logger:
    """
    Devolve o logger do módulo, com um único handler para stdout.

    Args:
        name (str): Nome do módulo que regista (geralmente __name__).
        nivel (str): Nível explícito; por omissão usa LOG_LEVEL.
    """
    logger = logging.getLogger(name)

    # Um handler por logger, mesmo que o módulo seja importado várias vezes
    if not logger.handlers:
        logger.setLevel(_nivel(nivel))
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(FORMATO))
        logger.addHandler(handler)

    return logger


def configurar_logging(app) -> None:
    """Alinha o logger do Flask e os da aplicação com app.config['LOG_LEVEL']."""
    nivel = _nivel(app.config.get('LOG_LEVEL'))
    app.logger.setLevel(nivel)
    for nome, logger in logging.root.manager.loggerDict.items():
        if nome.startswith('edumanager') and isinstance(logger, logging.Logger):
            logger.setLevel(nivel)
