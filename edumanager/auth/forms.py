from flask_wtf import FlaskForm
from wtforms import PasswordField, StringField
from wtforms.validators import DataRequired, EqualTo, Length, Regexp

from edumanager.core.models import EMAIL_REGEX

_email_valido = Regexp(EMAIL_REGEX, message="Email inválido")


class LoginForm(FlaskForm):
    email = StringField('Email', validators=[DataRequired(message="Email é obrigatório"), _email_valido])
    password = PasswordField('Password', validators=[DataRequired(message="Password é obrigatória")])


class RegistoForm(FlaskForm):
    nome_completo = StringField('Nome completo', validators=[
        DataRequired(message="Nome é obrigatório"),
        Length(max=100, message="Nome demasiado longo")
    ])
    email = StringField('Email', validators=[DataRequired(message="Email é obrigatório"), _email_valido])
    password = PasswordField('Password', validators=[
        DataRequired(message="Password é obrigatória"),
        Length(min=6, message="A password deve ter pelo menos 6 caracteres")
    ])
    confirmar_password = PasswordField('Confirmar password', validators=[
        EqualTo('password', message="As passwords não coincidem")
    ])


class RecuperarPasswordForm(FlaskForm):
    email = StringField('Email', validators=[DataRequired(message="Email é obrigatório"), _email_valido])
