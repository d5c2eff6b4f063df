"""
Módulo de Notificações por Email.

Expõe o Notificador da aplicação corrente (criado em create_app).
"""

from flask import current_app

from .dispatcher import Notificador, ResultadoEnvio, despachar, resumo_falhas
from .payloads import TipoEvento

EXTENSAO = 'notificador'


def get_notificador() -> Notificador:
    return current_app.extensions[EXTENSAO]


__all__ = ['Notificador', 'ResultadoEnvio', 'TipoEvento', 'despachar', 'resumo_falhas', 'get_notificador']
