from flask_wtf import FlaskForm
from wtforms import BooleanField, SelectField, StringField
from wtforms.validators import DataRequired, Regexp

from edumanager.core.models import EMAIL_REGEX
from .services import SEPARADORES


class DefinicoesNotificacaoForm(FlaskForm):
    email_novo_professor = BooleanField('Novo professor adicionado')
    email_nova_turma = BooleanField('Nova turma criada')
    email_novo_contacto = BooleanField('Novo contacto registado')
    relatorios_semanais = BooleanField('Relatórios semanais')


class DestinatarioForm(FlaskForm):
    email = StringField('Email', validators=[
        DataRequired(message="Email é obrigatório"),
        Regexp(EMAIL_REGEX, message="Email inválido")
    ])


class PreferenciasForm(FlaskForm):
    separador_inicial = SelectField('Separador inicial', choices=SEPARADORES)
