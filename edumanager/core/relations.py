"""
Resolução dos nomes de professores em Turmas e Contactos.

Os nomes não são guardados nas linhas: são obtidos no momento da leitura
a partir da lista atual de professores, para nunca ficarem desatualizados.
"""

from typing import Dict, Iterable, List

SEM_PROFESSOR = ''


def mapa_nomes(professores: Iterable[dict]) -> Dict[str, str]:
    return {p['id']: p.get('nome', '') for p in professores if p.get('id')}


def com_nome_professor(turmas: Iterable[dict], professores: Iterable[dict]) -> List[dict]:
    nomes = mapa_nomes(professores)
    return [
        {**t, 'professor': nomes.get(t.get('professor_id'), SEM_PROFESSOR)}
        for t in turmas
    ]


def com_nomes_contacto(contactos: Iterable[dict], professores: Iterable[dict]) -> List[dict]:
    nomes = mapa_nomes(professores)
    return [
        {
            **c,
            'emissor': nomes.get(c.get('emissor_id'), SEM_PROFESSOR),
            'receptor': nomes.get(c.get('receptor_id'), SEM_PROFESSOR),
        }
        for c in contactos
    ]
