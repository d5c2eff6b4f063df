"""
Módulo Professores (Blueprint)

CRUD dos professores, persistidos na tabela 'professores' do Supabase.
"""

from flask import Blueprint

from edumanager.auth.services import exigir_login

professores_bp = Blueprint(
    'professores_bp',
    __name__,
    url_prefix='/professores'
)

professores_bp.before_request(exigir_login)

from . import routes
