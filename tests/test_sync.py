import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from edumanager.core.exceptions import ErroRemoto, RegistoNaoEncontrado
from edumanager.core.sync import ConsultaRemota, MutacaoRemota, obter_registo
from fakes import ErroFalso, FakeSupabase

PROFESSOR_TESTE = {
    'nome': 'Prof. Teste',
    'email': 'teste@escola.com',
    'telefone': '+351 21 123 4567',
    'cargo': 'Professor Auxiliar',
    'departamento': 'Matemática',
    'status': 'ativo',
}


@pytest.fixture
def banco():
    return FakeSupabase(professores=[])


def test_insert_devolve_linha_com_id_e_timestamps(banco):
    mutacao = MutacaoRemota('professores', cliente=banco)
    professor = mutacao.insert(PROFESSOR_TESTE)

    for campo, valor in PROFESSOR_TESTE.items():
        assert professor[campo] == valor
    assert professor['id']
    assert professor['created_at']
    assert professor['updated_at']
    assert mutacao.loading is False
    assert mutacao.error is None


def test_insert_seguido_de_refetch_contem_uma_linha(banco):
    consulta = ConsultaRemota('professores', cliente=banco)
    assert consulta.data == []

    inserido = MutacaoRemota('professores', cliente=banco).insert(PROFESSOR_TESTE)
    consulta.refetch()

    iguais = [p for p in consulta.data if p['email'] == 'teste@escola.com']
    assert len(iguais) == 1
    assert iguais[0]['id'] == inserido['id']


def test_insert_nao_envia_campos_gerados(banco):
    MutacaoRemota('professores', cliente=banco).insert({**PROFESSOR_TESTE, 'id': 'x', 'created_at': 'ontem'})
    _, operacao, payload, _, _ = banco.chamadas[-1]
    assert operacao == 'insert'
    assert 'id' not in payload
    assert 'created_at' not in payload


def test_update_de_id_inexistente_falha(banco):
    mutacao = MutacaoRemota('professores', cliente=banco)
    with pytest.raises(RegistoNaoEncontrado):
        mutacao.update('nao-existe', {'nome': 'X'})
    assert mutacao.error
    assert mutacao.loading is False


def test_remove_de_id_inexistente_falha(banco):
    mutacao = MutacaoRemota('professores', cliente=banco)
    with pytest.raises(RegistoNaoEncontrado):
        mutacao.remove('nao-existe')
    assert 'nao-existe' in mutacao.error


def test_update_e_remove_de_linha_existente(banco):
    mutacao = MutacaoRemota('professores', cliente=banco)
    professor = mutacao.insert(PROFESSOR_TESTE)

    atualizado = mutacao.update(professor['id'], {'cargo': 'Professor Associado'})
    assert atualizado['cargo'] == 'Professor Associado'
    assert atualizado['nome'] == 'Prof. Teste'

    assert mutacao.remove(professor['id']) is True
    assert ConsultaRemota('professores', cliente=banco).data == []


def test_erro_remoto_na_mutacao_e_relancado_como_erro_remoto(banco):
    banco.falhas['professores'] = ErroFalso('duplicate key value violates unique constraint')
    mutacao = MutacaoRemota('professores', cliente=banco)

    with pytest.raises(ErroRemoto) as excinfo:
        mutacao.insert(PROFESSOR_TESTE)

    assert 'duplicate key' in excinfo.value.mensagem
    assert mutacao.error == excinfo.value.mensagem
    assert mutacao.loading is False


def test_consulta_com_falha_expoe_mensagem_e_lista_vazia(banco):
    banco.falhas['professores'] = ErroFalso('relation "professores" does not exist')
    consulta = ConsultaRemota('professores', cliente=banco)

    assert consulta.data == []
    assert consulta.error == 'relation "professores" does not exist'
    assert consulta.loading is False


def test_refetch_limpa_erro_anterior(banco):
    banco.falhas['professores'] = ErroFalso('timeout')
    consulta = ConsultaRemota('professores', cliente=banco)
    assert consulta.error

    del banco.falhas['professores']
    consulta.refetch()
    assert consulta.error is None


def test_filtro_disjuntivo_e_enviado(banco):
    MutacaoRemota('professores', cliente=banco).insert(PROFESSOR_TESTE)
    MutacaoRemota('professores', cliente=banco).insert({**PROFESSOR_TESTE, 'nome': 'Outro', 'email': 'o@e.pt', 'departamento': 'Física'})

    consulta = ConsultaRemota('professores', 'departamento.eq.Física,nome.eq.Nenhum', cliente=banco)

    assert [p['nome'] for p in consulta.data] == ['Outro']
    assert banco.chamadas[-1][3] == 'departamento.eq.Física,nome.eq.Nenhum'


def test_alterar_busca_de_novo_apenas_quando_muda(banco):
    consulta = ConsultaRemota('professores', cliente=banco)
    total = len(banco.chamadas)

    consulta.alterar('professores', None)
    assert len(banco.chamadas) == total

    consulta.alterar('turmas', None)
    assert len(banco.chamadas) == total + 1
    assert banco.chamadas[-1][0] == 'turmas'


class TestGeracaoDePedidos(unittest.TestCase):
    """Respostas de pedidos ultrapassados não podem sobrepor-se ao estado."""

    def _cliente(self, execute):
        cliente = MagicMock()
        cliente.table.return_value.select.return_value.execute.side_effect = execute
        return cliente

    def test_resposta_obsoleta_e_descartada(self):
        consulta = ConsultaRemota('professores', cliente=MagicMock(), imediato=False)
        respostas = iter([[{'id': 'novo'}]])

        def execute():
            if consulta._geracao == 1:
                # Um segundo refetch começa e termina antes de o primeiro responder
                segundo = next(respostas)
                consulta._cliente = self._cliente(lambda: SimpleNamespace(data=segundo))
                consulta.refetch()
            return SimpleNamespace(data=[{'id': 'antigo'}])

        consulta._cliente = self._cliente(execute)
        consulta.refetch()

        self.assertEqual(consulta.data, [{'id': 'novo'}])
        self.assertFalse(consulta.loading)

    def test_encerrar_descarta_resposta_em_curso(self):
        consulta = ConsultaRemota('professores', cliente=MagicMock(), imediato=False)

        def execute():
            consulta.encerrar()
            return SimpleNamespace(data=[{'id': 'tarde-demais'}])

        consulta._cliente = self._cliente(execute)
        consulta.refetch()

        self.assertEqual(consulta.data, [])
        self.assertFalse(consulta.loading)

    def test_sem_linhas_devolve_lista_vazia(self):
        consulta = ConsultaRemota('professores', cliente=self._cliente(lambda: SimpleNamespace(data=None)))
        self.assertEqual(consulta.data, [])
        self.assertIsNone(consulta.error)


if __name__ == '__main__':
    unittest.main()


def test_obter_registo_filtra_apenas_pelo_id(banco):
    criado = MutacaoRemota('professores', cliente=banco).insert(PROFESSOR_TESTE)

    assert obter_registo('professores', criado['id'], cliente=banco)['email'] == 'teste@escola.com'
    # Vírgulas no id não acrescentam predicados ao filtro
    assert obter_registo('professores', 'x,email.eq.teste@escola.com', cliente=banco) is None
    assert banco.chamadas[-1][3] is None
    assert banco.chamadas[-1][4] == [('id', 'x,email.eq.teste@escola.com')]


def test_obter_registo_com_erro_remoto(banco):
    banco.falhas['professores'] = ErroFalso('Failed to fetch')
    with pytest.raises(ErroRemoto) as erro:
        obter_registo('professores', 'p1', cliente=banco)
    assert erro.value.mensagem == 'Failed to fetch'
