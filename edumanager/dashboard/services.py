"""
Estatísticas do Dashboard, dos Relatórios e do Relatório Semanal.

Funções puras sobre as listas já carregadas do Supabase, exceto
relatorio_semanal_atual, que faz as consultas.
"""

from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Optional

from edumanager.core.exceptions import ErroRemoto
from edumanager.core.relations import com_nome_professor, com_nomes_contacto
from edumanager.core.sync import ConsultaRemota
from edumanager.notifications.payloads import PayloadRelatorio


def _hoje(hoje: Optional[date]) -> str:
    return (hoje or date.today()).isoformat()


def _por_criacao(linhas: List[dict]) -> List[dict]:
    return sorted(linhas, key=lambda l: l.get('created_at') or '')


def estatisticas_dashboard(professores, turmas, contactos, hoje: Optional[date] = None) -> Dict[str, int]:
    dia = _hoje(hoje)
    return {
        'total_professores': len(professores),
        'turmas_ativas': sum(1 for t in turmas if t.get('status') == 'ativa'),
        'contactos_hoje': sum(1 for c in contactos if (c.get('data') or '')[:10] == dia),
        'contactos_pendentes': sum(1 for c in contactos if c.get('estado') == 'pendente'),
    }


def atividades_recentes(professores, turmas, contactos, por_tipo: int = 2) -> List[dict]:
    """Os dois registos mais recentes de cada entidade, do mais novo para o mais antigo."""
    atividades = []
    for p in _por_criacao(professores)[-por_tipo:]:
        atividades.append({
            'tipo': 'professor',
            'titulo': f"Professor {p.get('nome')} adicionado",
            'detalhe': p.get('departamento', ''),
            'quando': p.get('created_at'),
        })
    for t in com_nome_professor(_por_criacao(turmas)[-por_tipo:], professores):
        atividades.append({
            'tipo': 'turma',
            'titulo': f"Turma {t.get('cod_formacao')} criada",
            'detalhe': t.get('curso', ''),
            'quando': t.get('created_at'),
        })
    for c in com_nomes_contacto(_por_criacao(contactos)[-por_tipo:], professores):
        atividades.append({
            'tipo': 'contacto',
            'titulo': f"Contacto: {c.get('motivo')}",
            'detalhe': f"{c.get('emissor')} → {c.get('receptor')}",
            'quando': c.get('created_at'),
        })
    return sorted(atividades, key=lambda a: a['quando'] or '', reverse=True)


def estatisticas_relatorio(professores, turmas, contactos, hoje: Optional[date] = None) -> dict:
    dia = _hoje(hoje)
    return {
        'total_professores': len(professores),
        'professores_ativos': sum(1 for p in professores if p.get('status') == 'ativo'),
        'total_turmas': len(turmas),
        'turmas_ativas': sum(1 for t in turmas if t.get('status') == 'ativa'),
        'total_alunos': sum(t.get('total_alunos') or 0 for t in turmas),
        'total_contactos': len(contactos),
        'contactos_hoje': sum(1 for c in contactos if (c.get('data') or '')[:10] == dia),
        'contactos_concluidos': sum(1 for c in contactos if c.get('estado') == 'concluido'),
        'professores_por_departamento': dict(Counter(p.get('departamento') or '—' for p in professores)),
        'contactos_por_estado': dict(Counter(c.get('estado') for c in contactos)),
    }


def estatisticas_semanais(professores, turmas, contactos, hoje: Optional[date] = None) -> PayloadRelatorio:
    hoje = hoje or date.today()
    inicio = (hoje - timedelta(days=6)).isoformat()
    fim = hoje.isoformat()
    return PayloadRelatorio(
        professores=sum(1 for p in professores if p.get('status') == 'ativo'),
        turmas=sum(1 for t in turmas if t.get('status') == 'ativa'),
        contactos=sum(1 for c in contactos if inicio <= (c.get('data') or '')[:10] <= fim),
        semana=f"{inicio} a {fim}",
    )


def relatorio_semanal_atual(hoje: Optional[date] = None) -> PayloadRelatorio:
    """Carrega as três coleções e calcula o resumo da semana."""
    consultas = [ConsultaRemota(c) for c in ('professores', 'turmas', 'contactos')]
    for consulta in consultas:
        if consulta.error:
            raise ErroRemoto(f"Não foi possível carregar '{consulta.colecao}': {consulta.error}")
    return estatisticas_semanais(*(c.data for c in consultas), hoje=hoje)
