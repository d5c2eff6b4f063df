"""
Módulo Dashboard (Blueprint)

Resumo geral, atividade recente e relatórios.
"""

from flask import Blueprint

from edumanager.auth.services import exigir_login

dashboard_bp = Blueprint(
    'dashboard_bp',
    __name__
)

dashboard_bp.before_request(exigir_login)

from . import routes
