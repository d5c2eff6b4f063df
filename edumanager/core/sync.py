"""
Camada de Sincronização com o Supabase (Consultas e Mutações Remotas)

ConsultaRemota: busca todas as linhas de uma coleção (opcionalmente filtradas
por um predicado OR do PostgREST) e expõe 'data', 'loading', 'error' e 'refetch'.

MutacaoRemota: insert / update / remove sobre uma coleção, cada operação
controlando 'loading' e 'error'. Os erros são registados e relançados para
que o chamador decida (ex.: manter o formulário aberto).

Não existe cache partilhada: cada instância faz o seu próprio pedido.
"""

import threading
from typing import Any, Dict, List, Optional

from edumanager.core.database import get_client
from edumanager.core.exceptions import ErroRemoto, RegistoNaoEncontrado, mensagem_de
from edumanager.core.logger import get_logger

logger = get_logger(__name__)

Linha = Dict[str, Any]

# Campos atribuídos pelo armazenamento remoto
CAMPOS_GERADOS = ('id', 'created_at', 'updated_at')


def _sem_campos_gerados(linha: Linha) -> Linha:
    return {k: v for k, v in linha.items() if k not in CAMPOS_GERADOS}


class ConsultaRemota:
    """
    Equivalente a um hook de consulta: a construção faz a primeira busca.
    """

    def __init__(self, colecao: str, filtro: Optional[str] = None, cliente=None, imediato: bool = True):
        self._cliente = cliente
        self._lock = threading.Lock()
        self._geracao = 0

        self.colecao = colecao
        self.filtro = filtro
        self.data: List[Linha] = []
        self.loading = False
        self.error: Optional[str] = None

        if imediato:
            self.refetch()

    @property
    def cliente(self):
        return self._cliente if self._cliente is not None else get_client()

    def alterar(self, colecao: str, filtro: Optional[str] = None) -> None:
        """Troca a coleção/filtro e busca de novo, se algo mudou."""
        if colecao == self.colecao and filtro == self.filtro:
            return
        self.colecao = colecao
        self.filtro = filtro
        self.refetch()

    def encerrar(self) -> None:
        """Descarta qualquer resposta ainda em curso."""
        with self._lock:
            self._geracao += 1
            self.loading = False

    def _nova_geracao(self) -> int:
        with self._lock:
            self._geracao += 1
            self.loading = True
            self.error = None
            return self._geracao

    def _aplicar(self, geracao: int, data: List[Linha], error: Optional[str]) -> bool:
        with self._lock:
            if geracao != self._geracao:
                logger.debug(f"Resposta obsoleta descartada para '{self.colecao}' (pedido {geracao}).")
                return False
            self.data = data
            self.error = error
            self.loading = False
            return True

    def refetch(self) -> List[Linha]:
        geracao = self._nova_geracao()
        colecao, filtro = self.colecao, self.filtro

        try:
            consulta = self.cliente.table(colecao).select('*')
            if filtro:
                consulta = consulta.or_(filtro)
            resposta = consulta.execute()
            self._aplicar(geracao, list(resposta.data or []), None)
        except Exception as e:
            mensagem = mensagem_de(e)
            logger.error(f"Erro ao consultar '{colecao}': {mensagem}", exc_info=True)
            self._aplicar(geracao, [], mensagem)

        return self.data


def obter_registo(colecao: str, id_registo: str, cliente=None) -> Optional[Linha]:
    """
    Uma linha pelo id, ou None. O id vai num filtro 'eq' próprio, nunca
    concatenado numa expressão OR.
    """
    cliente = cliente if cliente is not None else get_client()
    try:
        resposta = cliente.table(colecao).select('*').eq('id', id_registo).execute()
    except Exception as e:
        mensagem = mensagem_de(e)
        logger.error(f"Erro ao obter '{id_registo}' de '{colecao}': {mensagem}", exc_info=True)
        raise ErroRemoto(mensagem) from e
    linhas = resposta.data or []
    return linhas[0] if linhas else None


class MutacaoRemota:
    """
    Equivalente a um hook de mutação. Não invalida consultas irmãs:
    quem chama é responsável por fazer 'refetch'.
    """

    def __init__(self, colecao: str, cliente=None):
        self._cliente = cliente
        self.colecao = colecao
        self.loading = False
        self.error: Optional[str] = None

    @property
    def cliente(self):
        return self._cliente if self._cliente is not None else get_client()

    def _executar(self, operacao: str, padrao: str, funcao):
        self.loading = True
        self.error = None
        try:
            return funcao()
        except ErroRemoto as e:
            self.error = e.mensagem
            logger.error(f"Erro ao {operacao} em '{self.colecao}': {e.mensagem}")
            raise
        except Exception as e:
            self.error = mensagem_de(e, padrao)
            logger.error(f"Erro ao {operacao} em '{self.colecao}': {self.error}", exc_info=True)
            raise ErroRemoto(self.error) from e
        finally:
            self.loading = False

    def insert(self, linha: Linha) -> Linha:
        def _inserir():
            resposta = self.cliente.table(self.colecao).insert(_sem_campos_gerados(linha)).execute()
            if not resposta.data:
                raise ErroRemoto('Erro ao inserir')
            return resposta.data[0]

        return self._executar('inserir', 'Erro ao inserir', _inserir)

    def update(self, id_registo: str, parcial: Linha) -> Linha:
        def _atualizar():
            resposta = (
                self.cliente.table(self.colecao)
                .update(_sem_campos_gerados(parcial))
                .eq('id', id_registo)
                .execute()
            )
            if not resposta.data:
                raise RegistoNaoEncontrado(self.colecao, id_registo)
            return resposta.data[0]

        return self._executar('atualizar', 'Erro ao atualizar', _atualizar)

    def remove(self, id_registo: str) -> bool:
        def _eliminar():
            resposta = self.cliente.table(self.colecao).delete().eq('id', id_registo).execute()
            if not resposta.data:
                raise RegistoNaoEncontrado(self.colecao, id_registo)
            return True

        return self._executar('eliminar', 'Erro ao eliminar', _eliminar)
