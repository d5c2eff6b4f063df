"""
Despachante de Notificações por Email

Dado um evento, um payload e as definições (interruptores + destinatários),
envia um email por destinatário, sequencialmente. Uma falha num
destinatário é registada e não interrompe os seguintes.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from edumanager.core.logger import get_logger
from edumanager.core.models import DefinicoesNotificacao
from edumanager.core.exceptions import mensagem_de
from .payloads import (
    Payload,
    PayloadContacto,
    PayloadProfessor,
    PayloadRelatorio,
    PayloadTurma,
    TipoEvento,
)
from .settings import RepositorioDefinicoes
from .templates import renderizar

logger = get_logger(__name__)

# Interruptor das definições correspondente a cada evento
INTERRUPTORES = {
    TipoEvento.PROFESSOR_ADDED: 'email_novo_professor',
    TipoEvento.TURMA_CREATED: 'email_nova_turma',
    TipoEvento.CONTACTO_REGISTERED: 'email_novo_contacto',
    TipoEvento.WEEKLY_REPORT: 'relatorios_semanais',
}

MODELOS = {
    TipoEvento.PROFESSOR_ADDED: PayloadProfessor,
    TipoEvento.TURMA_CREATED: PayloadTurma,
    TipoEvento.CONTACTO_REGISTERED: PayloadContacto,
    TipoEvento.WEEKLY_REPORT: PayloadRelatorio,
}


@dataclass
class ResultadoEnvio:
    destinatario: str
    sucesso: bool
    erro: Optional[str] = None


def validar_payload(evento: TipoEvento, payload: Union[Payload, Dict[str, Any]]) -> Payload:
    """Aceita o modelo já construído ou um dicionário com os campos do evento."""
    modelo = MODELOS[evento]
    if isinstance(payload, BaseModel):
        if not isinstance(payload, modelo):
            raise ValueError(f"Payload '{type(payload).__name__}' não corresponde ao evento '{evento.value}'.")
        return payload
    return modelo(**payload)


def despachar(
    evento: Union[TipoEvento, str],
    payload: Union[Payload, Dict[str, Any]],
    definicoes: DefinicoesNotificacao,
    transporte,
    url_sistema: str = '',
) -> List[ResultadoEnvio]:
    evento = TipoEvento(evento)

    # Interruptor desligado: nada a fazer, qualquer que seja o payload
    if not getattr(definicoes, INTERRUPTORES[evento]) or not definicoes.email_recipients:
        logger.debug(f"Notificação '{evento.value}' desativada ou sem destinatários.")
        return []

    payload = validar_payload(evento, payload)

    assunto, html = renderizar(evento, payload, url_sistema)

    resultados = []
    for destinatario in definicoes.email_recipients:
        try:
            transporte.enviar(destinatario, assunto, html, evento.value)
            resultados.append(ResultadoEnvio(destinatario, True))
        except Exception as e:
            erro = mensagem_de(e, 'Erro ao enviar email')
            logger.error(f"Falha ao notificar {destinatario} ({evento.value}): {erro}")
            resultados.append(ResultadoEnvio(destinatario, False, erro))

    falhas = sum(1 for r in resultados if not r.sucesso)
    logger.info(f"Notificação '{evento.value}': {len(resultados) - falhas} enviadas, {falhas} falhadas.")
    return resultados


class Notificador:
    """
    Liga o despachante a um repositório de definições e a um transporte.
    """

    def __init__(self, repositorio: RepositorioDefinicoes, transporte, url_sistema: str = ''):
        self.repositorio = repositorio
        self.transporte = transporte
        self.url_sistema = url_sistema

    def _despachar(self, evento: TipoEvento, payload, email_utilizador: Optional[str]) -> List[ResultadoEnvio]:
        definicoes = self.repositorio.carregar(email_utilizador)
        return despachar(evento, payload, definicoes, self.transporte, self.url_sistema)

    def notificar_professor_adicionado(self, payload, email_utilizador: Optional[str] = None):
        return self._despachar(TipoEvento.PROFESSOR_ADDED, payload, email_utilizador)

    def notificar_turma_criada(self, payload, email_utilizador: Optional[str] = None):
        return self._despachar(TipoEvento.TURMA_CREATED, payload, email_utilizador)

    def notificar_contacto_registado(self, payload, email_utilizador: Optional[str] = None):
        return self._despachar(TipoEvento.CONTACTO_REGISTERED, payload, email_utilizador)

    def enviar_relatorio_semanal(self, payload, email_utilizador: Optional[str] = None):
        return self._despachar(TipoEvento.WEEKLY_REPORT, payload, email_utilizador)


def resumo_falhas(resultados: List[ResultadoEnvio]) -> Optional[str]:
    """Mensagem curta para o utilizador quando alguns envios falharam."""
    falhados = [r.destinatario for r in resultados if not r.sucesso]
    if not falhados:
        return None
    return f"Não foi possível notificar: {', '.join(falhados)}."
