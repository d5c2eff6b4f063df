"""
Taxonomia de Erros da Aplicação.

- Configuração: ver 'config.ErroConfiguracao' (fatal no arranque).
- Remotos: falhas de rede ou de restrições do Supabase.
- Autenticação: falhas devolvidas pelo Supabase Auth.
"""

from config import ErroConfiguracao


class ErroRemoto(Exception):
    """Falha numa chamada ao armazenamento remoto."""

    def __init__(self, mensagem: str) -> None:
        super().__init__(mensagem)
        self.mensagem = mensagem


class RegistoNaoEncontrado(ErroRemoto):
    """Nenhuma linha corresponde ao id pedido."""

    def __init__(self, colecao: str, id_registo: str) -> None:
        super().__init__(f"Registo '{id_registo}' não encontrado em '{colecao}'.")
        self.colecao = colecao
        self.id_registo = id_registo


class ErroEnvioEmail(ErroRemoto):
    """A função 'send-email' recusou ou falhou o envio."""


class ErroAutenticacao(Exception):
    """Falha devolvida pelo fornecedor de autenticação."""

    def __init__(self, mensagem: str) -> None:
        super().__init__(mensagem)
        self.mensagem = mensagem


def mensagem_de(erro: Exception, padrao: str = 'Erro desconhecido') -> str:
    """
    Extrai uma mensagem legível de uma exceção do cliente Supabase.
    O APIError do postgrest guarda o texto em '.message'.
    """
    mensagem = getattr(erro, 'mensagem', None) or getattr(erro, 'message', None) or str(erro)
    return mensagem or padrao


__all__ = [
    'ErroConfiguracao', 'ErroRemoto', 'RegistoNaoEncontrado',
    'ErroEnvioEmail', 'ErroAutenticacao', 'mensagem_de',
]
