"""
Gráficos da análise detalhada.

As funções *_data são puras (testáveis sem UI); as make_* montam as
figuras Plotly a partir delas.
"""

import plotly.graph_objects as go

from margem_real.models.financial_models import CalculatedData, DetailedAnalysisData
from margem_real.styles import BAR_COLORS, COLORS, DEBIT_COLORS, PLOTLY_TEMPLATE
from margem_real.utils.formatting import format_currency, format_percentage_direct, to_finite


def pie_chart_data(detail: DetailedAnalysisData) -> list[dict]:
    """Composição percentual dos débitos (fatias zeradas são omitidas)."""
    p = detail.percentuais
    slices = [
        ("Promoções", p.promocoes),
        ("Taxas/Comissões", p.taxas_comissoes),
        ("Serviços Logísticos", p.servicos_logisticos),
        ("Outros Valores", p.outros_valores),
    ]
    return [
        {"name": name, "value": value, "color": DEBIT_COLORS[name]}
        for name, value in slices
        if value > 0
    ]


def bar_chart_data(
    detail: DetailedAnalysisData,
    calculated: CalculatedData,
    vrlj: float,
) -> list[dict]:
    """Valores absolutos comparativos."""
    bars = [
        ("RBR", calculated.rbr),
        ("Débitos", detail.debitos_detalhados),
        ("RBR Pós-Débitos", detail.rbr_pos_debitos),
        ("VRLJ", to_finite(vrlj)),
        ("Repasse Real", detail.repasse_liquido_real),
    ]
    return [{"name": name, "value": value, "color": BAR_COLORS[name]} for name, value in bars]


def make_debit_pie(data: list[dict]) -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=[d["name"] for d in data],
        values=[d["value"] for d in data],
        hole=0.45,
        marker=dict(colors=[d["color"] for d in data]),
        text=[format_percentage_direct(d["value"]) for d in data],
        textinfo="label+text",
        hovertemplate="%{label}: %{value:.2f}%<extra></extra>",
    ))
    fig.update_layout(template=PLOTLY_TEMPLATE, height=320, showlegend=False)
    return fig


def make_comparison_bars(data: list[dict]) -> go.Figure:
    fig = go.Figure(go.Bar(
        x=[d["name"] for d in data],
        y=[d["value"] for d in data],
        marker_color=[d["color"] for d in data],
        text=[format_currency(d["value"]) for d in data],
        textposition="outside",
        textfont=dict(size=10, color=COLORS["text_secondary"]),
    ))
    fig.update_layout(
        template=PLOTLY_TEMPLATE,
        height=340,
        showlegend=False,
        yaxis=dict(title="R$", tickformat=",.0f"),
    )
    return fig
