"""
Módulo Turmas (Blueprint)
"""

from flask import Blueprint

from edumanager.auth.services import exigir_login

turmas_bp = Blueprint(
    'turmas_bp',
    __name__,
    url_prefix='/turmas'
)

turmas_bp.before_request(exigir_login)

from . import routes
