from flask_wtf import FlaskForm
from wtforms import SelectField, StringField
from wtforms.validators import DataRequired, Length, Regexp

from edumanager.core.models import EMAIL_REGEX


class ProfessorForm(FlaskForm):
    nome = StringField('Nome', validators=[
        DataRequired(message="Nome é obrigatório"),
        Length(max=100, message="Nome deve ter no máximo 100 caracteres")
    ])
    telefone = StringField('Telefone', validators=[DataRequired(message="Telefone é obrigatório")])
    email = StringField('Email', validators=[
        DataRequired(message="Email é obrigatório"),
        Regexp(EMAIL_REGEX, message="Email inválido")
    ])
    cargo = StringField('Cargo', validators=[DataRequired(message="Cargo é obrigatório")])
    departamento = StringField('Departamento', validators=[DataRequired(message="Departamento é obrigatório")])
    status = SelectField('Status', choices=[
        ('ativo', 'Ativo'),
        ('inativo', 'Inativo')
    ], default='ativo')

    def dados(self) -> dict:
        return {
            'nome': self.nome.data.strip(),
            'telefone': self.telefone.data.strip(),
            'email': self.email.data.strip(),
            'cargo': self.cargo.data.strip(),
            'departamento': self.departamento.data.strip(),
            'status': self.status.data,
        }
