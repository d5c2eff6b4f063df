"""
Duplo em memória do cliente Supabase usado nos testes.

Suporta o subconjunto usado pela aplicação: table().select/or_/eq/insert/
update/delete().execute(), functions.invoke() e auth.*.
"""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace


class ErroFalso(Exception):
    """Imita o APIError do postgrest (mensagem em '.message')."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


def _corresponde(linha, predicado):
    campo, operador, valor = predicado.split('.', 2)
    atual = linha.get(campo)
    if operador == 'eq':
        return str(atual) == valor
    if operador == 'ilike':
        return valor.strip('*').lower() in str(atual or '').lower()
    raise ValueError(f"Operador não suportado: {operador}")


class FakeQuery:

    def __init__(self, banco, tabela):
        self.banco = banco
        self.tabela = tabela
        self.operacao = 'select'
        self.payload = None
        self.filtros_or = None
        self.filtros_eq = []

    def select(self, colunas='*'):
        return self

    def or_(self, filtros):
        self.filtros_or = filtros
        return self

    def eq(self, campo, valor):
        self.filtros_eq.append((campo, valor))
        return self

    def insert(self, linha):
        self.operacao, self.payload = 'insert', dict(linha)
        return self

    def update(self, parcial):
        self.operacao, self.payload = 'update', dict(parcial)
        return self

    def delete(self):
        self.operacao = 'delete'
        return self

    def _filtradas(self):
        linhas = self.banco.tabelas.setdefault(self.tabela, [])
        resultado = [
            l for l in linhas
            if all(str(l.get(c)) == str(v) for c, v in self.filtros_eq)
        ]
        if self.filtros_or:
            predicados = self.filtros_or.split(',')
            resultado = [l for l in resultado if any(_corresponde(l, p) for p in predicados)]
        return resultado

    def execute(self):
        self.banco.chamadas.append((self.tabela, self.operacao, self.payload, self.filtros_or, list(self.filtros_eq)))
        erro = self.banco.falhas.get(self.tabela)
        if erro is not None:
            raise erro

        agora = datetime.now(timezone.utc).isoformat()
        linhas = self.banco.tabelas.setdefault(self.tabela, [])

        if self.operacao == 'select':
            return SimpleNamespace(data=[dict(l) for l in self._filtradas()])
        if self.operacao == 'insert':
            nova = {**self.payload, 'id': str(uuid.uuid4()), 'created_at': agora, 'updated_at': agora}
            linhas.append(nova)
            return SimpleNamespace(data=[dict(nova)])
        if self.operacao == 'update':
            alteradas = self._filtradas()
            for l in alteradas:
                l.update(self.payload)
                l['updated_at'] = agora
            return SimpleNamespace(data=[dict(l) for l in alteradas])
        if self.operacao == 'delete':
            removidas = self._filtradas()
            self.banco.tabelas[self.tabela] = [l for l in linhas if l not in removidas]
            return SimpleNamespace(data=[dict(l) for l in removidas])


class FakeFunctions:

    def __init__(self):
        self.chamadas = []
        self.resposta = {'success': True, 'message': 'Email enviado com sucesso'}

    def invoke(self, nome, invoke_options=None):
        self.chamadas.append((nome, invoke_options))
        return self.resposta


class FakeAuth:

    def __init__(self):
        self.utilizadores = {}
        self.pedidos_recuperacao = []
        self.sessoes_definidas = []
        self.saidas = 0

    def sign_up(self, credenciais):
        email = credenciais['email']
        if email in self.utilizadores:
            raise ErroFalso('User already registered')
        metadados = credenciais.get('options', {}).get('data', {})
        self.utilizadores[email] = (credenciais['password'], metadados)
        return SimpleNamespace(user=SimpleNamespace(email=email, user_metadata=metadados))

    def sign_in_with_password(self, credenciais):
        registo = self.utilizadores.get(credenciais['email'])
        if not registo or registo[0] != credenciais['password']:
            raise ErroFalso('Invalid login credentials')
        return SimpleNamespace(
            user=SimpleNamespace(email=credenciais['email'], user_metadata=registo[1]),
            session=SimpleNamespace(access_token=f"jwt-{credenciais['email']}", refresh_token='refresh'),
        )

    def set_session(self, access_token, refresh_token):
        self.sessoes_definidas.append(access_token)

    def sign_out(self):
        self.saidas += 1

    def reset_password_for_email(self, email, opcoes=None):
        self.pedidos_recuperacao.append((email, opcoes))


class FakeSupabase:

    def __init__(self, **tabelas):
        self.tabelas = {nome: [dict(l) for l in linhas] for nome, linhas in tabelas.items()}
        self.falhas = {}
        self.chamadas = []
        self.functions = FakeFunctions()
        self.auth = FakeAuth()

    def table(self, nome):
        return FakeQuery(self, nome)


class FakeTransporte:
    """Transporte de email que regista os envios e falha para os emails indicados."""

    def __init__(self, falhar_para=()):
        self.enviados = []
        self.falhar_para = set(falhar_para)

    def enviar(self, to, subject, html, tipo):
        self.enviados.append({'to': to, 'subject': subject, 'html': html, 'type': tipo})
        if to in self.falhar_para:
            raise ErroFalso(f'SMTP indisponível para {to}')
        return {'success': True}
