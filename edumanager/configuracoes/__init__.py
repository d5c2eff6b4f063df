"""
Módulo Configurações (Blueprint)

Conta, notificações por email e preferências de interface.
"""

from flask import Blueprint

from edumanager.auth.services import exigir_login

configuracoes_bp = Blueprint(
    'configuracoes_bp',
    __name__,
    url_prefix='/configuracoes'
)

configuracoes_bp.before_request(exigir_login)

from . import routes
