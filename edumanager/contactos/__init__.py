"""
Módulo Contactos (Blueprint)

Registo de contactos entre professores (emissor -> receptor).
"""

from flask import Blueprint

from edumanager.auth.services import exigir_login

contactos_bp = Blueprint(
    'contactos_bp',
    __name__,
    url_prefix='/contactos'
)

contactos_bp.before_request(exigir_login)

from . import routes
