"""
Camada de Serviço das Turmas
"""

import random
from typing import Optional

from edumanager.core.models import Turma
from edumanager.core.relations import com_nome_professor
from edumanager.core.sync import ConsultaRemota, MutacaoRemota, obter_registo
from edumanager.notifications.payloads import PayloadTurma

COLECAO = 'turmas'


def gerar_cod_formacao(curso: str, ano: str, rng: random.Random = random) -> str:
    """
    'Matemática', '2024' -> 'MAT2024-042'
    """
    prefixo = curso.strip()[:3].upper()
    return f"{prefixo}{ano}-{rng.randint(0, 999):03d}"


def listar(professores: list, filtro: Optional[str] = None):
    consulta = ConsultaRemota(COLECAO, filtro)
    return consulta, com_nome_professor(consulta.data, professores)


def obter(id_turma: str) -> Optional[dict]:
    return obter_registo(COLECAO, id_turma)


def _linha(dados: dict) -> dict:
    dados = dict(dados)
    if not dados.get('cod_formacao'):
        dados['cod_formacao'] = gerar_cod_formacao(dados['curso'], dados['ano'])
    # professor_id=None tem de ser enviado para limpar a referência
    return Turma(**dados).model_dump(exclude={'id', 'created_at', 'updated_at'})


def criar(dados: dict, mutacao: Optional[MutacaoRemota] = None) -> dict:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    return mutacao.insert(_linha(dados))


def atualizar(id_turma: str, dados: dict, mutacao: Optional[MutacaoRemota] = None) -> dict:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    return mutacao.update(id_turma, _linha(dados))


def eliminar(id_turma: str, mutacao: Optional[MutacaoRemota] = None) -> bool:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    return mutacao.remove(id_turma)


def payload_notificacao(turma: dict, professores: list) -> PayloadTurma:
    turma = com_nome_professor([turma], professores)[0]
    return PayloadTurma(
        curso=turma['curso'],
        cod_formacao=turma['cod_formacao'],
        professor=turma['professor'],
        data_inicio=turma['data_inicio'],
    )
