"""
Entidades do Domínio

Registos simples, sem comportamento. Os nomes dos campos seguem as colunas
das tabelas do Supabase (professores, turmas, contactos).
"""

import re
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

EMAIL_REGEX = r'\S+@\S+\.\S+'

STATUS_TURMA = ('ativa', 'concluida', 'suspensa')
ESTADOS_CONTACTO = ('pendente', 'em_progresso', 'concluido', 'cancelado')


class Professor(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: Optional[str] = None
    nome: str
    telefone: str
    email: str = Field(..., pattern=EMAIL_REGEX)
    cargo: str
    departamento: str
    status: Literal['ativo', 'inativo'] = 'ativo'
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Turma(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: Optional[str] = None
    curso: str
    ano: str
    cod_formacao: str
    professor_id: Optional[str] = None
    total_alunos: int = Field(0, ge=0)
    status: Literal['ativa', 'concluida', 'suspensa'] = 'ativa'
    data_inicio: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Contacto(BaseModel):
    model_config = ConfigDict(extra='ignore')

    id: Optional[str] = None
    emissor_id: Optional[str] = None
    receptor_id: Optional[str] = None
    motivo: str = Field(..., min_length=1)
    estado: Literal['pendente', 'em_progresso', 'concluido', 'cancelado'] = 'pendente'
    data: str
    hora: str
    duracao: Optional[int] = Field(None, ge=0)
    notas: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @model_validator(mode='after')
    def _emissor_diferente_do_receptor(self) -> 'Contacto':
        if self.emissor_id and self.emissor_id == self.receptor_id:
            raise ValueError('Emissor e receptor devem ser diferentes')
        return self


class DefinicoesNotificacao(BaseModel):
    """Um interruptor por tipo de evento + lista ordenada de destinatários."""

    email_novo_professor: bool = True
    email_nova_turma: bool = True
    email_novo_contacto: bool = False
    relatorios_semanais: bool = True
    email_recipients: List[str] = Field(default_factory=list)

    @field_validator('email_recipients')
    @classmethod
    def _normalizar_destinatarios(cls, valores: List[str]) -> List[str]:
        # Remove espaços e duplicados, preservando a ordem
        vistos = []
        for email in valores:
            email = email.strip()
            if not email:
                continue
            if not re.search(EMAIL_REGEX, email):
                raise ValueError(f"Email inválido: {email}")
            if email not in vistos:
                vistos.append(email)
        return vistos
