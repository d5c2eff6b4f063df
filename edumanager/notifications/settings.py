"""
Repositório das Definições de Notificação

Os consumidores recebem o repositório por injeção (ver create_app) em vez
de acederem diretamente ao armazém local por chave.
"""

import abc
from typing import Optional

from pydantic import ValidationError

from edumanager.core.logger import get_logger
from edumanager.core.mirror import ArmazemLocal, persistido
from edumanager.core.models import DefinicoesNotificacao

logger = get_logger(__name__)

CHAVE_DEFINICOES = 'emailNotificationSettings'


class RepositorioDefinicoes(abc.ABC):

    @abc.abstractmethod
    def carregar(self, email_utilizador: Optional[str] = None) -> DefinicoesNotificacao:
        ...

    @abc.abstractmethod
    def guardar(self, definicoes: DefinicoesNotificacao) -> DefinicoesNotificacao:
        ...

    def atualizar(self, email_utilizador: Optional[str] = None, **parcial) -> DefinicoesNotificacao:
        """Aplica uma alteração parcial e persiste imediatamente."""
        atuais = self.carregar(email_utilizador)
        novas = DefinicoesNotificacao(**{**atuais.model_dump(), **parcial})
        return self.guardar(novas)


class RepositorioDefinicoesLocal(RepositorioDefinicoes):
    """Persiste as definições no armazém local (ficheiro JSON)."""

    def __init__(self, armazem: ArmazemLocal):
        self.armazem = armazem

    def carregar(self, email_utilizador: Optional[str] = None) -> DefinicoesNotificacao:
        valor = persistido(CHAVE_DEFINICOES, None, self.armazem).valor
        if valor is not None:
            try:
                return DefinicoesNotificacao(**valor)
            except (TypeError, ValidationError) as e:
                logger.warning(f"Definições de notificação inválidas no armazém, a usar o padrão: {e}")

        recipientes = [email_utilizador] if email_utilizador else []
        return DefinicoesNotificacao(email_recipients=recipientes)

    def guardar(self, definicoes: DefinicoesNotificacao) -> DefinicoesNotificacao:
        persistido(CHAVE_DEFINICOES, None, self.armazem).definir(definicoes.model_dump())
        logger.info("Definições de notificação guardadas.")
        return definicoes
