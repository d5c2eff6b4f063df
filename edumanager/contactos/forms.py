from flask_wtf import FlaskForm
from wtforms import DateField, IntegerField, SelectField, StringField, TextAreaField, TimeField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, ValidationError


class ContactoForm(FlaskForm):
    emissor_id = SelectField('Emissor', validate_choice=False, validators=[
        DataRequired(message="Emissor é obrigatório")
    ])
    receptor_id = SelectField('Receptor', validate_choice=False, validators=[
        DataRequired(message="Receptor é obrigatório")
    ])
    motivo = StringField('Motivo', validators=[
        DataRequired(message="Motivo é obrigatório"),
        Length(max=255)
    ])
    estado = SelectField('Estado', choices=[
        ('pendente', 'Pendente'),
        ('em_progresso', 'Em Progresso'),
        ('concluido', 'Concluído'),
        ('cancelado', 'Cancelado')
    ], default='pendente')
    data = DateField('Data', validators=[DataRequired(message="Data é obrigatória")])
    hora = TimeField('Hora', format='%H:%M', validators=[DataRequired(message="Hora é obrigatória")])
    duracao = IntegerField('Duração (minutos)', validators=[
        Optional(),
        NumberRange(min=0, message="Duração deve ser positiva")
    ])
    notas = TextAreaField('Notas', validators=[Optional(), Length(max=2000)])

    def preencher_opcoes(self, professores):
        opcoes = [('', 'Selecione')] + [
            (p['id'], f"{p['nome']} - {p.get('departamento', '')}") for p in professores
        ]
        self.emissor_id.choices = opcoes
        self.receptor_id.choices = opcoes

    def _validar_professor(self, field):
        if field.data not in {valor for valor, _ in field.choices}:
            raise ValidationError("Professor inválido")

    def validate_emissor_id(self, field):
        self._validar_professor(field)

    def validate_receptor_id(self, field):
        if field.data == self.emissor_id.data:
            raise ValidationError("Emissor e receptor devem ser diferentes")
        self._validar_professor(field)

    def dados(self) -> dict:
        return {
            'emissor_id': self.emissor_id.data,
            'receptor_id': self.receptor_id.data,
            'motivo': self.motivo.data.strip(),
            'estado': self.estado.data,
            'data': self.data.data.isoformat(),
            'hora': self.hora.data.strftime('%H:%M'),
            'duracao': self.duracao.data or None,
            'notas': (self.notas.data or '').strip() or None,
        }
