"""Rule-based daily insight used when the LLM is unavailable."""

from __future__ import annotations

from dataclasses import dataclass

from bakery.core.config import Settings, get_settings
from bakery.domain.forecast.history import round_half_up
from bakery.domain.insight.analysis import SalesAnalysis

STRONG = "forte"
WEAK = "fraco"
MODERATE = "moderado"


@dataclass(frozen=True)
class InsightFactors:
    """Production adjustments used by the rule-based insight."""

    second_half: float = 0.88
    weak_month: float = 0.85
    strong_month: float = 1.15
    quinzena_cutoff_day: int = 15

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> InsightFactors:
        s = settings or get_settings()
        return cls(
            second_half=s.insight_second_half_factor,
            weak_month=s.insight_weak_month_factor,
            strong_month=s.insight_strong_month_factor,
            quinzena_cutoff_day=s.forecast_quinzena_cutoff_day,
        )


@dataclass(frozen=True)
class QuantityRange:
    low: int
    high: int
    media: int


def format_units(value: int) -> str:
    """Thousands separated the pt-BR way: 34291 -> '34.291'."""
    return f"{value:,}".replace(",", ".")


def month_performance(rank: int) -> str:
    """Classify a month by its 1-based sales rank (0 = unranked)."""
    if rank == 0:
        return MODERATE
    if rank <= 4:
        return STRONG
    if rank >= 9:
        return WEAK
    return MODERATE


def daily_quantity_range(
    annual_total: int,
    second_half: bool,
    performance: str,
    factors: InsightFactors,
) -> QuantityRange:
    """Suggested daily production band for a product from its yearly units."""
    media = round_half_up(annual_total / 365)

    if second_half:
        media = round_half_up(media * factors.second_half)

    if performance == WEAK:
        media = round_half_up(media * factors.weak_month)
    elif performance == STRONG:
        media = round_half_up(media * factors.strong_month)

    return QuantityRange(
        low=max(1, round_half_up(media * 0.95)),
        high=round_half_up(media * 1.05),
        media=media,
    )


def _signed(value: float) -> str:
    return f"{'+' if value > 0 else ''}{value:.0f}"


def generate_fallback_insight(analysis: SalesAnalysis, factors: InsightFactors | None = None) -> str:
    """Write the four-part insight (context, season, quinzena, actions) from rules."""
    factors = factors or InsightFactors()

    second_half = analysis.current_day > factors.quinzena_cutoff_day
    quinzena = "segunda" if second_half else "primeira"
    quinzena_text = (
        "período que costuma apresentar queda de 10-15% nas vendas"
        if second_half
        else "período tradicionalmente forte"
    )

    rank = analysis.month_rank()
    performance = month_performance(rank)
    month = analysis.current_month
    month_title = month[:1].upper() + month[1:]

    top = analysis.top_products
    top1 = top[0] if len(top) > 0 else None
    top2 = top[1] if len(top) > 1 else None
    top3 = top[2] if len(top) > 2 else None

    growing = [g for g in analysis.year_over_year_growth if g.growth > 10]
    falling = [g for g in analysis.year_over_year_growth if g.growth < -10]

    insight = (
        f"Hoje é dia {analysis.current_day} de {month}, {quinzena} quinzena "
        f"de um mês {performance} em vendas"
    )
    if rank > 0:
        insight += f" ({rank}ª posição no ranking histórico)"
    insight += ". "

    if performance == STRONG:
        insight += f"{month_title} é um dos melhores meses para vendas. "
    elif performance == WEAK:
        insight += f"{month_title} historicamente apresenta vendas mais baixas. "
    else:
        insight += f"{month_title} mantém performance moderada de vendas. "

    insight += f"Estamos na {quinzena} quinzena, {quinzena_text}. "

    if analysis.current_day == factors.quinzena_cutoff_day + 1:
        insight += "Clientes tendem a reduzir compras após despesas da primeira quinzena. "
    elif analysis.current_day == 1:
        insight += "Início de mês é momento ideal para impulsionar vendas com energia renovada. "

    insight += "RECOMENDAÇÕES:\n"

    recs: list[str] = []

    if top1:
        qty = daily_quantity_range(top1.total, second_half, performance, factors)
        if second_half:
            why = (
                f"média diária {qty.media + round_half_up(qty.media * 0.12)}, "
                f"reduzir 12% para 2ª quinzena"
            )
        else:
            why = f"líder com {format_units(top1.total)} vendas/ano, manter produção consistente"
        recs.append(f"1) [PRODUÇÃO] {top1.name}: {qty.low}-{qty.high} unidades ({why})")

    if top2:
        qty = daily_quantity_range(top2.total, second_half, performance, factors)
        growth = next(
            (g for g in analysis.year_over_year_growth if g.product.lower() == top2.name.lower()),
            None,
        )
        if growth:
            why = f"2º mais vendido, crescimento {_signed(growth.growth)}%"
        else:
            why = f"2º mais vendido com {format_units(top2.total)} vendas/ano"
        recs.append(f"2) [PRODUÇÃO] {top2.name}: {qty.low}-{qty.high} unidades ({why})")

    if top3:
        qty = daily_quantity_range(top3.total, second_half, performance, factors)
        if performance == STRONG:
            why = "alta demanda em mês forte, garantir estoque extra"
        else:
            why = "3º mais vendido, ajustar por sazonalidade"
        recs.append(f"3) [PRODUÇÃO] {top3.name}: {qty.low}-{qty.high} unidades ({why})")

    if top2:
        if second_half or performance == WEAK:
            recs.append(
                f"4) [AÇÃO COMERCIAL] Lance promoção 'Leve 3, Pague 2' em {top2.name} "
                f"para compensar queda sazonal"
            )
        else:
            partner = top3.name if top3 else "outro produto"
            recs.append(
                f"4) [AÇÃO COMERCIAL] Crie combo '{top2.name} + {partner}' com 15% desconto "
                f"para aumentar ticket médio"
            )

    if falling:
        recs.append(
            f"5) [CONTROLE] Reduza 25-30% produção de produtos em queda "
            f"({len(falling)} produtos) para evitar desperdício"
        )
    elif second_half:
        recs.append(
            "5) [CONTROLE] Monitore custos operacionais nesta quinzena "
            "para manter margens acima de 30%"
        )
    else:
        recs.append(
            "5) [CONTROLE] Mantenha controle rigoroso de estoque para evitar perdas por vencimento"
        )

    if growing:
        best = growing[0]
        recs.append(
            f"6) [ESTRATÉGIA] Invista em {best.product} (crescimento +{best.growth:.0f}%), "
            f"produto em alta com potencial de expansão"
        )
    elif top1:
        recs.append(
            f"6) [ESTRATÉGIA] Garanta estoque de segurança (20%) de {top1.name} "
            f"até o fim do expediente"
        )

    return insight + "\n".join(recs) + "."
