"""
Espelho Local Persistente

Mantém pequenos valores (preferências de interface, definições de
notificação) num ficheiro JSON chave -> texto, lido na primeira utilização
e reescrito a cada alteração.
"""

import json
import os
import tempfile
import threading
from typing import Any, Dict, Iterator, Optional

from edumanager.core.logger import get_logger

logger = get_logger(__name__)


class ArmazemLocal:
    """
    Armazenamento durável chave -> string (equivalente ao localStorage).
    Cada chave é uma célula independente; não há expiração.
    """

    def __init__(self, caminho: str):
        self.caminho = caminho
        self._lock = threading.Lock()

    def _carregar(self) -> Dict[str, str]:
        try:
            with open(self.caminho, 'r', encoding='utf-8') as f:
                conteudo = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Armazém local ilegível em {self.caminho}: {e}")
            return {}
        return conteudo if isinstance(conteudo, dict) else {}

    def ler(self, chave: str) -> Optional[str]:
        with self._lock:
            return self._carregar().get(chave)

    def escrever(self, chave: str, texto: str) -> None:
        with self._lock:
            dados = self._carregar()
            dados[chave] = texto
            self._gravar(dados)

    def remover(self, chave: str) -> None:
        with self._lock:
            dados = self._carregar()
            if dados.pop(chave, None) is not None:
                self._gravar(dados)

    def _gravar(self, dados: Dict[str, str]) -> None:
        # Escrita atómica: ficheiro temporário na mesma pasta + os.replace
        pasta = os.path.dirname(os.path.abspath(self.caminho))
        os.makedirs(pasta, exist_ok=True)
        fd, temporario = tempfile.mkstemp(dir=pasta, prefix='.armazem-', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(dados, f, ensure_ascii=False)
            os.replace(temporario, self.caminho)
        except Exception:
            if os.path.exists(temporario):
                os.remove(temporario)
            raise


class ValorPersistido:
    """
    Par (valor, definir) ligado a uma chave do armazém.
    """

    def __init__(self, chave: str, inicial: Any, armazem: ArmazemLocal):
        self.chave = chave
        self._armazem = armazem
        self.valor = self._ler_inicial(inicial)

    def _ler_inicial(self, inicial: Any) -> Any:
        texto = self._armazem.ler(self.chave)
        if texto is None:
            return inicial
        try:
            return json.loads(texto)
        except ValueError as e:
            logger.warning(f"Valor corrompido na chave '{self.chave}', a usar o valor inicial: {e}")
            return inicial

    def definir(self, valor_ou_funcao: Any) -> Any:
        """Aceita um valor direto ou uma função aplicada ao valor anterior."""
        if callable(valor_ou_funcao):
            novo = valor_ou_funcao(self.valor)
        else:
            novo = valor_ou_funcao
        texto = json.dumps(novo, ensure_ascii=False)
        self._armazem.escrever(self.chave, texto)
        self.valor = novo
        return novo

    def __iter__(self) -> Iterator[Any]:
        # Permite: valor, definir = persistido(...)
        return iter((self.valor, self.definir))


def persistido(chave: str, inicial: Any, armazem: ArmazemLocal) -> ValorPersistido:
    """Não escreve o valor inicial: a primeira escrita acontece em 'definir'."""
    return ValorPersistido(chave, inicial, armazem)


