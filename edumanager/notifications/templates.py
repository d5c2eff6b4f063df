"""
Geração do HTML e do Assunto dos Emails

O HTML é gerado inteiramente do lado da aplicação a partir de quatro
templates fixos (Jinja2), escolhidos pelo tipo de evento.
"""

from datetime import date, datetime
from typing import Optional, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape

from .payloads import Payload, TipoEvento

_ambiente = Environment(
    loader=PackageLoader('edumanager', 'templates/emails'),
    autoescape=select_autoescape(['html']),
)

TEMPLATES = {
    TipoEvento.PROFESSOR_ADDED: 'professor_added.html',
    TipoEvento.TURMA_CREATED: 'turma_created.html',
    TipoEvento.CONTACTO_REGISTERED: 'contacto_registered.html',
    TipoEvento.WEEKLY_REPORT: 'weekly_report.html',
}


def data_pt(valor: Optional[str]) -> str:
    """'2024-09-15' -> '15/09/2024'. Valores não reconhecidos passam sem alteração."""
    if not valor:
        return ''
    try:
        return datetime.strptime(valor[:10], '%Y-%m-%d').strftime('%d/%m/%Y')
    except ValueError:
        return valor


_ambiente.filters['data_pt'] = data_pt


def gerar_assunto(evento: TipoEvento, payload: Payload, hoje: Optional[date] = None) -> str:
    if evento == TipoEvento.PROFESSOR_ADDED:
        return f"🎓 Novo Professor: {payload.nome}"
    if evento == TipoEvento.TURMA_CREATED:
        return f"📚 Nova Turma: {payload.curso}"
    if evento == TipoEvento.CONTACTO_REGISTERED:
        return f"📞 Novo Contacto: {payload.motivo}"
    hoje = hoje or date.today()
    return f"📊 Relatório Semanal - {hoje.strftime('%d/%m/%Y')}"


def gerar_html(evento: TipoEvento, payload: Payload, url_sistema: str) -> str:
    template = _ambiente.get_template(TEMPLATES[evento])
    return template.render(dados=payload, url_sistema=url_sistema)


def renderizar(evento: TipoEvento, payload: Payload, url_sistema: str) -> Tuple[str, str]:
    return gerar_assunto(evento, payload), gerar_html(evento, payload, url_sistema)
