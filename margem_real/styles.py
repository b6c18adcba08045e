"""
Design system: tema claro vermelho/laranja do Margem Real.
Tokens de cor, CSS customizado e template Plotly.
"""

# ─── Color Tokens ───

COLORS = {
    # Backgrounds
    "bg_base": "#fff7f5",
    "bg_surface": "#ffffff",
    "border": "#f1e4e0",
    "border_light": "#f8eeeb",
    # Text
    "text_primary": "#1f2937",
    "text_secondary": "#4b5563",
    "text_muted": "#9ca3af",
    # Accent
    "primary": "#ef4444",
    "primary_light": "#f97316",
    "primary_dim": "rgba(239,68,68,0.10)",
    # Semantic
    "success": "#10b981",
    "success_dim": "rgba(16,185,129,0.12)",
    "danger": "#dc2626",
    "danger_dim": "rgba(220,38,38,0.10)",
    "warning": "#f59e0b",
    "warning_dim": "rgba(245,158,11,0.12)",
    "info": "#3b82f6",
    "info_dim": "rgba(59,130,246,0.10)",
}

# Fatias do gráfico de composição dos débitos
DEBIT_COLORS = {
    "Promoções": "#ef4444",
    "Taxas/Comissões": "#f97316",
    "Serviços Logísticos": "#eab308",
    "Outros Valores": "#8b5cf6",
}

# Barras do comparativo de valores
BAR_COLORS = {
    "RBR": "#10b981",
    "Débitos": "#ef4444",
    "RBR Pós-Débitos": "#3b82f6",
    "VRLJ": "#8b5cf6",
    "Repasse Real": "#06b6d4",
}


# ─── Plotly Template ───

PLOTLY_TEMPLATE = {
    "layout": {
        "paper_bgcolor": "rgba(0,0,0,0)",
        "plot_bgcolor": "rgba(0,0,0,0)",
        "font": {
            "family": "Plus Jakarta Sans, sans-serif",
            "color": COLORS["text_secondary"],
            "size": 12,
        },
        "xaxis": {
            "gridcolor": COLORS["border"],
            "linecolor": COLORS["border"],
            "tickfont": {"color": COLORS["text_muted"]},
        },
        "yaxis": {
            "gridcolor": COLORS["border"],
            "linecolor": COLORS["border"],
            "tickfont": {"color": COLORS["text_muted"]},
        },
        "hoverlabel": {
            "bgcolor": COLORS["bg_surface"],
            "bordercolor": COLORS["border"],
            "font": {"color": COLORS["text_primary"]},
        },
        "margin": {"l": 10, "r": 10, "t": 10, "b": 10},
    }
}


# ─── Custom CSS ───

CUSTOM_CSS = """
<style>
@import url('https://fonts.googleapis.com/css2?family=Plus+Jakarta+Sans:wght@400;600;700&display=swap');

html, body, [data-testid="stAppViewContainer"] {
    font-family: 'Plus Jakarta Sans', sans-serif !important;
    background: linear-gradient(135deg, #fef2f2 0%, #fff7ed 100%);
}

.block-container {
    padding-top: 1.5rem !important;
    max-width: 1100px !important;
}

/* ── Metric Cards ── */
[data-testid="stMetric"] {
    background: """ + COLORS["bg_surface"] + """;
    border: 1px solid """ + COLORS["border"] + """;
    border-radius: 16px;
    padding: 18px 16px;
    box-shadow: 0 4px 12px rgba(239,68,68,0.06);
}
[data-testid="stMetricLabel"] {
    font-size: 0.75rem !important;
    font-weight: 600 !important;
    color: """ + COLORS["text_muted"] + """ !important;
    text-transform: uppercase !important;
}
[data-testid="stMetricValue"] {
    font-size: 1.3rem !important;
    font-weight: 700 !important;
    color: """ + COLORS["text_primary"] + """ !important;
}

/* ── Buttons ── */
.stButton > button, .stDownloadButton > button {
    border-radius: 12px !important;
    font-weight: 600 !important;
}
.stButton > button[kind="primary"] {
    background: linear-gradient(90deg, """ + COLORS["primary"] + """, """ + COLORS["primary_light"] + """) !important;
    border: none !important;
}

/* ── Header ── */
.app-header h1 {
    font-weight: 700 !important;
    font-size: 1.75rem !important;
    background: linear-gradient(90deg, #dc2626, #ea580c);
    -webkit-background-clip: text;
    -webkit-text-fill-color: transparent;
    margin: 0 !important;
}
.app-header .meta {
    display: flex;
    gap: 10px;
    font-size: 0.8rem;
    color: """ + COLORS["text_muted"] + """;
}
.app-header .badge {
    background: """ + COLORS["primary_dim"] + """;
    color: """ + COLORS["primary"] + """;
    font-weight: 600;
    font-size: 0.7rem;
    padding: 2px 8px;
    border-radius: 4px;
    text-transform: uppercase;
}

/* ── Section Header ── */
.section-hdr {
    margin: 1rem 0 0.75rem 0;
    padding-bottom: 0.5rem;
    border-bottom: 2px solid """ + COLORS["primary_dim"] + """;
}
.section-hdr h2 {
    font-weight: 700 !important;
    font-size: 1.2rem !important;
    color: """ + COLORS["text_primary"] + """ !important;
    margin: 0 !important;
}
.section-hdr .sub {
    font-size: 0.8rem;
    color: """ + COLORS["text_muted"] + """;
}

/* ── Banners ── */
.warn-banner, .error-banner, .result-banner {
    border-radius: 10px;
    padding: 12px 16px;
    margin-bottom: 12px;
    font-size: 0.9rem;
    line-height: 1.5;
}
.warn-banner {
    background: """ + COLORS["warning_dim"] + """;
    border-left: 3px solid """ + COLORS["warning"] + """;
}
.error-banner {
    background: """ + COLORS["danger_dim"] + """;
    border-left: 3px solid """ + COLORS["danger"] + """;
}
.result-banner {
    background: """ + COLORS["success_dim"] + """;
    border-left: 3px solid """ + COLORS["success"] + """;
}

/* ── Footer ── */
.app-footer {
    text-align: center;
    padding: 1.5rem 0 0.5rem 0;
    font-size: 0.75rem;
    color: """ + COLORS["text_muted"] + """;
    border-top: 1px solid """ + COLORS["border"] + """;
    margin-top: 1rem;
}
</style>
"""
