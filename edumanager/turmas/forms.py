from datetime import date

from flask_wtf import FlaskForm
from wtforms import DateField, IntegerField, SelectField, StringField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, ValidationError


def anos_disponiveis(hoje=None):
    """Ano atual, os dois anteriores e os dois seguintes."""
    ano = (hoje or date.today()).year
    return [str(a) for a in range(ano - 2, ano + 3)]


class TurmaForm(FlaskForm):
    curso = StringField('Nome do Curso', validators=[
        DataRequired(message="Nome do curso é obrigatório"),
        Length(max=120)
    ])
    ano = SelectField('Ano', validators=[DataRequired(message="Ano é obrigatório")])
    # Vazio = gerado automaticamente ao guardar
    cod_formacao = StringField('Código de Formação', validators=[Optional(), Length(max=30)])
    professor_id = SelectField('Professor', validate_choice=False)
    total_alunos = IntegerField('Total de Alunos', default=0, validators=[
        Optional(),
        NumberRange(min=0, message="Número de alunos deve ser positivo")
    ])
    status = SelectField('Status', choices=[
        ('ativa', 'Ativa'),
        ('concluida', 'Concluída'),
        ('suspensa', 'Suspensa')
    ], default='ativa')
    data_inicio = DateField('Data de Início', validators=[DataRequired(message="Data de início é obrigatória")])

    def preencher_opcoes(self, professores, hoje=None):
        anos = anos_disponiveis(hoje)
        if self.ano.data and self.ano.data not in anos:
            anos.append(self.ano.data)
        self.ano.choices = [(a, a) for a in anos]
        if not self.ano.data:
            self.ano.data = str((hoje or date.today()).year)
        self.professor_id.choices = [('', 'Sem professor')] + [
            (p['id'], f"{p['nome']} - {p.get('departamento', '')}") for p in professores
        ]

    def validate_professor_id(self, field):
        validos = {valor for valor, _ in field.choices}
        if field.data not in validos:
            raise ValidationError("Professor inválido")

    def dados(self) -> dict:
        return {
            'curso': self.curso.data.strip(),
            'ano': self.ano.data,
            'cod_formacao': (self.cod_formacao.data or '').strip(),
            'professor_id': self.professor_id.data or None,
            'total_alunos': self.total_alunos.data or 0,
            'status': self.status.data,
            'data_inicio': self.data_inicio.data.isoformat(),
        }
