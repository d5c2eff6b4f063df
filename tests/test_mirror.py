import json
import os

import pytest

from edumanager.core.mirror import ArmazemLocal, persistido


@pytest.fixture
def armazem(tmp_path):
    return ArmazemLocal(str(tmp_path / 'local.json'))


def test_valor_inicial_quando_chave_ausente(armazem):
    valor, _ = persistido('turmas', [], armazem)
    assert valor == []


def test_valor_inicial_nao_e_escrito(armazem):
    persistido('preferencias', {'tema': 'claro'}, armazem)
    assert not os.path.exists(armazem.caminho)


def test_definir_e_nova_leitura_devolve_o_mesmo_valor(armazem):
    _, definir = persistido('preferencias', {}, armazem)
    definir({'separador_inicial': 'turmas_bp.lista', 'itens': [1, 2, 3]})

    valor, _ = persistido('preferencias', {}, armazem)
    assert valor == {'separador_inicial': 'turmas_bp.lista', 'itens': [1, 2, 3]}


def test_definir_com_funcao_recebe_o_valor_anterior(armazem):
    contador = persistido('contador', 1, armazem)
    contador.definir(lambda anterior: anterior + 1)
    contador.definir(lambda anterior: anterior * 10)

    assert contador.valor == 20
    assert persistido('contador', 0, armazem).valor == 20


def test_valor_corrompido_usa_inicial_sem_falhar(armazem):
    armazem.escrever('definicoes', '{isto nao e json')
    assert persistido('definicoes', {'ok': True}, armazem).valor == {'ok': True}


def test_ficheiro_corrompido_nao_impede_escrita(armazem):
    with open(armazem.caminho, 'w', encoding='utf-8') as f:
        f.write('lixo')

    assert armazem.ler('qualquer') is None
    persistido('qualquer', None, armazem).definir('valor')
    assert armazem.ler('qualquer') == json.dumps('valor')


def test_chaves_sao_independentes(armazem):
    persistido('a', None, armazem).definir('primeiro')
    persistido('b', None, armazem).definir('segundo')
    armazem.remover('a')

    assert armazem.ler('a') is None
    assert persistido('b', None, armazem).valor == 'segundo'


def test_texto_com_acentos_preservado(armazem):
    persistido('nome', '', armazem).definir('Matemática Avançada')
    assert persistido('nome', '', armazem).valor == 'Matemática Avançada'
