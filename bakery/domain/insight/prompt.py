"""Prompt for the LLM-written daily insight (pt-BR)."""

from __future__ import annotations

from datetime import date

from bakery.domain.insight.analysis import SalesAnalysis
from bakery.domain.insight.fallback import format_units, month_performance

_WEEKDAYS = ["segunda-feira", "terça-feira", "quarta-feira", "quinta-feira", "sexta-feira", "sábado", "domingo"]
_MONTHS = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]


def long_date_pt_br(d: date) -> str:
    """e.g. 'domingo, 18 de outubro de 2026'."""
    return f"{_WEEKDAYS[d.weekday()]}, {d.day} de {_MONTHS[d.month - 1]} de {d.year}"


def _growth_status(growth: float) -> str:
    if growth > 20:
        return "EXCELENTE"
    if growth > 10:
        return "BOM"
    if growth > 0:
        return "LEVE"
    if growth > -10:
        return "ATENÇÃO"
    return "CRÍTICO"


def build_insight_prompt(analysis: SalesAnalysis, as_of: date) -> str:
    """Render the sales analysis into the instruction prompt."""
    day = analysis.current_day
    quinzena = (
        "PRIMEIRA (1-15) - Período tradicionalmente FORTE"
        if day <= 15
        else "SEGUNDA (16-31) - Período tradicionalmente MAIS FRACO"
    )

    top_lines = "\n".join(
        f"{i + 1}. **{p.name}**: {format_units(p.total)} unidades"
        for i, p in enumerate(analysis.top_products)
    )
    month_lines = "\n".join(
        f"{i + 1}. {t.month.upper()}: {format_units(t.total)} unidades"
        for i, t in enumerate(analysis.monthly_trends[:5])
    )
    growth_lines = "\n".join(
        f"{i + 1}. {g.product}: {'+' if g.growth > 0 else ''}{g.growth}% [{_growth_status(g.growth)}]"
        for i, g in enumerate(analysis.year_over_year_growth[:5])
    )

    return f"""# Contexto: Assistente Estratégico de Vendas para Gerentes

Você é um consultor de negócios especializado em confeitarias. Analise os dados de vendas
e forneça insights DETALHADOS e ACIONÁVEIS para as decisões do dia.

# CONTEXTO ATUAL

Data: {long_date_pt_br(as_of)}
Dia do Mês: {day}
Mês: {analysis.current_month.upper()} (Mês {month_performance(analysis.month_rank())} historicamente)
Quinzena: {quinzena}

# ANÁLISE DE PERFORMANCE

## Top 5 Produtos do Ano
{top_lines}

## Sazonalidade Mensal (Ranking de Vendas)
{month_lines}

## Crescimento Ano a Ano
{growth_lines}

# SUA MISSÃO

Crie um insight em 4 PARTES OBRIGATÓRIAS:
1. CONTEXTO DO DIA (1 frase): dia, quinzena, sazonalidade do mês.
2. ANÁLISE SAZONAL (1-2 frases): compare o mês atual com o histórico, com números.
3. ANÁLISE DE QUINZENA (1-2 frases): 1ª quinzena aproveitar período forte; 2ª quinzena
   alertar sobre a queda típica e sugerir ação preventiva.
4. RECOMENDAÇÕES (4-6 ações):
   1) [PRODUÇÃO] Produto A: X-Y unidades (justificativa)
   2) [PRODUÇÃO] Produto B: X-Y unidades (justificativa)
   3) [PRODUÇÃO] Produto C: X-Y unidades (justificativa)
   4) [AÇÃO COMERCIAL] Promoção/Combo específico
   5) [CONTROLE] Ação de custos/estoque
   6) [ESTRATÉGIA] Foco em crescimento

Quantidades de produção = média de vendas diárias × fator de quinzena × fator sazonal.

# FORMATO DE SAÍDA

Um único parágrafo com as 4 partes identificáveis, tom profissional e acessível,
sem formatação markdown e sem cabeçalhos. Retorne apenas o texto."""
