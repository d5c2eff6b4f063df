"""
Camada de Serviço dos Professores
"""

import re
from typing import Optional

from edumanager.core.models import Professor
from edumanager.core.sync import ConsultaRemota, MutacaoRemota, obter_registo
from edumanager.notifications.payloads import PayloadProfessor

COLECAO = 'professores'

# Caracteres com significado na sintaxe de filtros do PostgREST
_RESERVADOS = re.compile(r'[,()*%]')


def filtro_pesquisa(termo: Optional[str]) -> Optional[str]:
    """
    'ana' -> 'nome.ilike.*ana*,email.ilike.*ana*,departamento.ilike.*ana*'
    """
    termo = _RESERVADOS.sub(' ', termo or '').strip()
    if not termo:
        return None
    return ','.join(f"{campo}.ilike.*{termo}*" for campo in ('nome', 'email', 'departamento'))


def listar(termo: Optional[str] = None) -> ConsultaRemota:
    return ConsultaRemota(COLECAO, filtro_pesquisa(termo))


def obter(id_professor: str) -> Optional[dict]:
    return obter_registo(COLECAO, id_professor)


def ativos(professores, incluir=()) -> list:
    """Professores ativos, mais os ids em 'incluir' (ex.: o atualmente atribuído, mesmo inativo)."""
    return [p for p in professores if p.get('status') == 'ativo' or p.get('id') in incluir]


def criar(dados: dict, mutacao: Optional[MutacaoRemota] = None) -> dict:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    linha = Professor(**dados).model_dump(exclude_none=True)
    return mutacao.insert(linha)


def atualizar(id_professor: str, dados: dict, mutacao: Optional[MutacaoRemota] = None) -> dict:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    return mutacao.update(id_professor, Professor(**dados).model_dump(exclude_none=True))


def eliminar(id_professor: str, mutacao: Optional[MutacaoRemota] = None) -> bool:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    return mutacao.remove(id_professor)


def payload_notificacao(professor: dict) -> PayloadProfessor:
    return PayloadProfessor(
        nome=professor['nome'],
        email=professor['email'],
        departamento=professor['departamento'],
        cargo=professor['cargo'],
    )
