"""
Camada de Serviço dos Contactos
"""

from typing import Optional

from edumanager.core.models import ESTADOS_CONTACTO, Contacto
from edumanager.core.relations import com_nomes_contacto
from edumanager.core.sync import ConsultaRemota, MutacaoRemota, obter_registo
from edumanager.notifications.payloads import PayloadContacto

COLECAO = 'contactos'
ESTADOS = ESTADOS_CONTACTO


def filtro_estado(estado: Optional[str]) -> Optional[str]:
    return f"estado.eq.{estado}" if estado in ESTADOS else None


def listar(professores: list, estado: Optional[str] = None):
    consulta = ConsultaRemota(COLECAO, filtro_estado(estado))
    return consulta, com_nomes_contacto(consulta.data, professores)


def obter(id_contacto: str) -> Optional[dict]:
    return obter_registo(COLECAO, id_contacto)


def _linha(dados: dict) -> dict:
    # emissor != receptor também é validado fora do formulário
    return Contacto(**dados).model_dump(exclude={'id', 'created_at', 'updated_at'})


def criar(dados: dict, mutacao: Optional[MutacaoRemota] = None) -> dict:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    return mutacao.insert(_linha(dados))


def atualizar(id_contacto: str, dados: dict, mutacao: Optional[MutacaoRemota] = None) -> dict:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    return mutacao.update(id_contacto, _linha(dados))


def eliminar(id_contacto: str, mutacao: Optional[MutacaoRemota] = None) -> bool:
    mutacao = mutacao or MutacaoRemota(COLECAO)
    return mutacao.remove(id_contacto)


def payload_notificacao(contacto: dict, professores: list) -> PayloadContacto:
    contacto = com_nomes_contacto([contacto], professores)[0]
    return PayloadContacto(
        motivo=contacto['motivo'],
        emissor=contacto['emissor'],
        receptor=contacto['receptor'],
        data=contacto['data'],
        hora=contacto['hora'],
    )
