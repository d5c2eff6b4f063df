"""
Tipos de Evento e Payloads das Notificações

Cada evento tem o seu payload (união etiquetada pelo campo 'tipo'),
validado no ponto de chamada.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


class TipoEvento(str, Enum):
    PROFESSOR_ADDED = 'professor_added'
    TURMA_CREATED = 'turma_created'
    CONTACTO_REGISTERED = 'contacto_registered'
    WEEKLY_REPORT = 'weekly_report'


class PayloadProfessor(BaseModel):
    tipo: Literal['professor_added'] = 'professor_added'
    nome: str
    email: str
    departamento: str
    cargo: str


class PayloadTurma(BaseModel):
    tipo: Literal['turma_created'] = 'turma_created'
    curso: str
    cod_formacao: str
    professor: str = ''
    data_inicio: str


class PayloadContacto(BaseModel):
    tipo: Literal['contacto_registered'] = 'contacto_registered'
    motivo: str
    emissor: str = ''
    receptor: str = ''
    data: str
    hora: str


class PayloadRelatorio(BaseModel):
    tipo: Literal['weekly_report'] = 'weekly_report'
    professores: int = Field(0, ge=0)
    turmas: int = Field(0, ge=0)
    contactos: int = Field(0, ge=0)
    semana: Optional[str] = None


Payload = Union[PayloadProfessor, PayloadTurma, PayloadContacto, PayloadRelatorio]
