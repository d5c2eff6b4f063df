"""
Transporte de Email via Supabase Edge Function ('send-email')

Contrato: recebe {to, subject, html, type}; devolve {success, message|error}.
"""

import json
from typing import Any, Dict

from edumanager.core.exceptions import ErroEnvioEmail, mensagem_de
from edumanager.core.logger import get_logger

logger = get_logger(__name__)


class TransporteEdgeFunction:

    def __init__(self, cliente, nome_funcao: str = 'send-email'):
        self.cliente = cliente
        self.nome_funcao = nome_funcao

    def enviar(self, to: str, subject: str, html: str, tipo: str) -> Dict[str, Any]:
        try:
            resposta = self.cliente.functions.invoke(
                self.nome_funcao,
                invoke_options={
                    'body': {'to': to, 'subject': subject, 'html': html, 'type': tipo},
                    'responseType': 'json',
                },
            )
        except Exception as e:
            raise ErroEnvioEmail(mensagem_de(e, 'Erro ao enviar email')) from e

        if isinstance(resposta, (bytes, str)):
            try:
                resposta = json.loads(resposta)
            except ValueError:
                raise ErroEnvioEmail(f"Resposta inválida da função '{self.nome_funcao}'.")

        if not resposta or not resposta.get('success'):
            erro = (resposta or {}).get('error') or 'Envio recusado'
            raise ErroEnvioEmail(erro)

        logger.info(f"Email enviado com sucesso para {to} ({tipo}).")
        return resposta
