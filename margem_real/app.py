"""
Margem Real — análise financeira para restaurantes parceiros do iFood.

Executar:
    streamlit run margem_real/app.py
"""

import logging
import sys
from datetime import date
from pathlib import Path

# Garante que o diretório raiz do projeto está no sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pandas as pd
import streamlit as st

from margem_real import charts
from margem_real.components import (
    app_header,
    error_banner,
    footer,
    result_banner,
    section_header,
    warning_banner,
)
from margem_real.config import APP_NAME, LOG_LEVEL, ROLE_LABELS, STORAGE_DIR
from margem_real.exceptions import AnalysisNotSavedError
from margem_real.models.financial_models import DEBIT_CATEGORIES, FormData
from margem_real.services import commands
from margem_real.services.detailed_analysis_service import (
    attach_detailed_analysis,
    compute_detailed_analysis,
    has_debits_exceeding_rbr,
    has_rbr_error,
)
from margem_real.services.metrics_service import generate_result_messages
from margem_real.storage.analysis_repository import AnalysisRepository
from margem_real.storage.backends import FileStorage
from margem_real.storage.session_store import SessionStore
from margem_real.styles import CUSTOM_CSS
from margem_real.utils.formatting import (
    format_currency,
    format_input_value,
    format_percentage,
    format_percentage_direct,
    normalize_number,
)

logging.basicConfig(level=LOG_LEVEL)


# ═══════════════════════════════════════════════════════
# PAGE CONFIG
# ═══════════════════════════════════════════════════════

st.set_page_config(
    page_title=APP_NAME,
    page_icon="https://em-content.zobj.net/source/apple/391/chart-increasing_1f4c8.png",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown(CUSTOM_CSS, unsafe_allow_html=True)


@st.cache_resource(show_spinner=False)
def get_storage() -> FileStorage:
    """Um único backend por processo (equivalente ao localStorage do perfil)."""
    return FileStorage(STORAGE_DIR)


storage = get_storage()
session = SessionStore(storage)
repository = AnalysisRepository(storage)

FIELD_LABELS = {
    "vbv": "Valor Bruto de Vendas (VBV)",
    "valoresPagosCliente": "Valores pagos pelo cliente (repassados ao iFood)",
    "vrl": "Repasse Líquido iFood (VRL)",
    "vrlj": "Valores Recebidos via Loja (VRLJ)",
}

DEBIT_LABELS = {
    "promocoes": "Gastos com Promoções",
    "taxasComissoes": "Taxas e Comissões",
    "servicosLogisticos": "Serviços Logísticos",
    "outrosValores": "Outros Valores",
}


# ═══════════════════════════════════════════════════════
# LOGIN
# ═══════════════════════════════════════════════════════

def render_login():
    st.markdown(
        f"<div class='app-header' style='text-align:center'><h1>{APP_NAME}</h1>"
        "<p>Análise financeira para restaurantes parceiros</p></div>",
        unsafe_allow_html=True,
    )
    _, center, _ = st.columns([1, 2, 1])
    with center:
        with st.form("login"):
            email = st.text_input("E-mail", placeholder="seu@email.com")
            password = st.text_input("Senha", type="password", placeholder="Sua senha")
            submitted = st.form_submit_button("Entrar", type="primary", use_container_width=True)

        if submitted:
            with st.spinner("Carregando..."):
                user = commands.submit_login(email, password, session)
            if user is None:
                st.error("Informe e-mail e senha.")
            else:
                st.rerun()
        st.caption("Sistema multi-tenant com isolamento de dados por cliente")


user = session.get_current_user()
if user is None:
    render_login()
    st.stop()


# ═══════════════════════════════════════════════════════
# ESTADO DO FORMULÁRIO
# ═══════════════════════════════════════════════════════

def _init_state():
    defaults = {
        "calculated": None,
        "validation": None,
        **{f"in_{k}": "" for k in FIELD_LABELS},
        **{f"debit_{k}": "" for k in DEBIT_CATEGORIES},
    }
    for key, value in defaults.items():
        st.session_state.setdefault(key, value)


def _fill_example():
    example = commands.load_example(user.tenant_id)
    st.session_state["in_vbv"] = format_input_value(example.vbv)
    st.session_state["in_valoresPagosCliente"] = format_input_value(example.valores_pagos_cliente)
    st.session_state["in_vrl"] = format_input_value(example.vrl)
    st.session_state["in_vrlj"] = format_input_value(example.vrlj)


def _current_form() -> FormData:
    ss = st.session_state
    return FormData(
        vbv=normalize_number(ss["in_vbv"]),
        valores_pagos_cliente=normalize_number(ss["in_valoresPagosCliente"]),
        vrl=normalize_number(ss["in_vrl"]),
        vrlj=normalize_number(ss["in_vrlj"]),
        additional_values={k: normalize_number(ss[f"debit_{k}"]) for k in DEBIT_CATEGORIES},
        periodo=date.today().strftime("%Y-%m"),
        tenant_id=user.tenant_id,
    )


_init_state()


# ═══════════════════════════════════════════════════════
# SIDEBAR
# ═══════════════════════════════════════════════════════

with st.sidebar:
    st.title("Conta")
    st.write(f"**{user.name}**")
    st.caption(user.email)
    st.caption(f"Tenant: {user.tenant_id}")
    st.divider()
    st.button("Carregar exemplo", on_click=_fill_example, use_container_width=True)
    if st.button("Sair", use_container_width=True):
        commands.logout(session)
        st.session_state.clear()
        st.rerun()


st.markdown(
    app_header(user.name, ROLE_LABELS.get(user.role, user.role)),
    unsafe_allow_html=True,
)


# ═══════════════════════════════════════════════════════
# ENTRADA DE DADOS
# ═══════════════════════════════════════════════════════

st.markdown(section_header("Dados do Período", "Valores do extrato iFood"), unsafe_allow_html=True)

c1, c2 = st.columns(2)
for i, (field_name, label) in enumerate(FIELD_LABELS.items()):
    with (c1 if i % 2 == 0 else c2):
        st.text_input(label, key=f"in_{field_name}", placeholder="0,00")

p1, p2 = st.columns(2)
with p1:
    start_date = st.date_input("Início do período", value=date.today(), format="DD/MM/YYYY")
with p2:
    end_date = st.date_input("Fim do período", value=date.today(), format="DD/MM/YYYY")

form_data = _current_form()

b1, b2 = st.columns(2)
with b1:
    if st.button("Calcular", type="primary", use_container_width=True):
        outcome = commands.calculate(form_data)
        st.session_state["validation"] = outcome.validation
        st.session_state["calculated"] = outcome.calculated

with b2:
    if st.button("Salvar análise", use_container_width=True):
        calculated = st.session_state["calculated"]
        if calculated is not None and any(form_data.additional_values.values()):
            calculated = attach_detailed_analysis(form_data, calculated)
        try:
            saved = commands.save(repository, user, form_data, calculated, start_date, end_date)
        except AnalysisNotSavedError as e:
            st.warning(str(e))
        else:
            st.success(
                f"Análise salva com sucesso! Período: {saved.form_data.periodo} · "
                f"RBR: {format_currency(saved.calculated_data.rbr)} · "
                f"Rentabilidade: {format_percentage(saved.calculated_data.rentabilidade_liquida)}"
            )

validation = st.session_state["validation"]
calculated = st.session_state["calculated"]

if validation is not None:
    if validation.errors:
        st.markdown(error_banner([e.message for e in validation.errors]), unsafe_allow_html=True)
    for message in validation.warnings:
        st.markdown(warning_banner(message), unsafe_allow_html=True)


# ═══════════════════════════════════════════════════════
# ABAS
# ═══════════════════════════════════════════════════════

tab_result, tab_detail, tab_history = st.tabs(["Resultados", "Análise Detalhada", "Histórico"])

with tab_result:
    if calculated is None:
        st.info("Preencha os valores e clique em Calcular.")
    else:
        k1, k2, k3 = st.columns(3)
        k1.metric("RBR", format_currency(calculated.rbr), help="VBV - valores pagos pelo cliente")
        k2.metric("ROL", format_currency(calculated.rol), help="VRL + VRLJ")
        k3.metric("Rentabilidade Líquida", format_percentage(calculated.rentabilidade_liquida))
        k4, k5 = st.columns(2)
        k4.metric("Retenção iFood", format_percentage(calculated.retencao_ifood_percentual))
        k5.metric("Valor Retido iFood", format_currency(calculated.valor_retido_ifood))
        st.markdown(result_banner(generate_result_messages(calculated)), unsafe_allow_html=True)

with tab_detail:
    st.markdown(section_header("Despesas Detalhadas"), unsafe_allow_html=True)
    d1, d2 = st.columns(2)
    for i, key in enumerate(DEBIT_CATEGORIES):
        with (d1 if i % 2 == 0 else d2):
            st.text_input(DEBIT_LABELS[key], key=f"debit_{key}", placeholder="Ex.: 2.500,00")

    if calculated is None:
        st.info("Calcule as métricas principais para ver o detalhamento.")
    else:
        detail = compute_detailed_analysis(form_data, calculated)

        if has_rbr_error(calculated):
            st.markdown(warning_banner("RBR deve ser positiva para calcular percentuais."), unsafe_allow_html=True)
        if has_debits_exceeding_rbr(detail, calculated):
            st.markdown(
                warning_banner(
                    f"Débitos detalhados não podem exceder o RBR ({format_currency(calculated.rbr)})"
                ),
                unsafe_allow_html=True,
            )

        m1, m2, m3 = st.columns(3)
        m1.metric("RBR", format_currency(calculated.rbr))
        m2.metric(
            "Débitos Detalhados",
            format_currency(detail.debitos_detalhados),
            help=f"{format_percentage_direct(detail.percentuais.total_debitos)} do RBR",
        )
        m3.metric("RBR Pós-Débitos", format_currency(detail.rbr_pos_debitos))
        m4, m5 = st.columns(2)
        m4.metric("VRLJ", format_currency(form_data.vrlj))
        m5.metric("Repasse Líquido Real", format_currency(detail.repasse_liquido_real))

        g1, g2 = st.columns(2)
        with g1:
            pie = charts.pie_chart_data(detail)
            if pie:
                st.plotly_chart(charts.make_debit_pie(pie), use_container_width=True)
            else:
                st.caption("Informe os débitos para ver a composição.")
        with g2:
            bars = charts.bar_chart_data(detail, calculated, form_data.vrlj)
            st.plotly_chart(charts.make_comparison_bars(bars), use_container_width=True)

with tab_history:
    all_analyses = repository.list_by_tenant(user.tenant_id)
    analyses = all_analyses
    search = st.text_input("Filtrar por período", placeholder="ex.: 2025-01")
    if search:
        analyses = repository.find_by_period_substring(user.tenant_id, search)
    analyses = commands.recent_analyses(analyses)

    if not analyses:
        st.info("Nenhuma análise salva.")
    else:
        rows = [{
            "Período": a.form_data.periodo,
            "RBR": format_currency(a.calculated_data.rbr),
            "ROL": format_currency(a.calculated_data.rol),
            "Rentabilidade": format_percentage(a.calculated_data.rentabilidade_liquida),
            "Retido iFood": format_currency(a.calculated_data.valor_retido_ifood),
            "Salvo em": a.timestamp[:19].replace("T", " "),
        } for a in analyses]
        st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)

        h1, h2 = st.columns([3, 1])
        with h1:
            to_delete = st.selectbox(
                "Excluir análise",
                options=[a.id for a in analyses],
                format_func=lambda aid: next(a.form_data.periodo for a in analyses if a.id == aid),
            )
        with h2:
            st.write("")
            if st.button("Excluir", use_container_width=True):
                commands.delete_analysis(repository, user.tenant_id, to_delete)
                st.rerun()

        filename, csv_text = commands.export_csv(all_analyses, user.tenant_id)
        st.download_button(
            "Exportar CSV",
            data=csv_text.encode("utf-8"),
            file_name=filename,
            mime="text/csv",
            use_container_width=True,
        )


# ═══════════════════════════════════════════════════════
# FOOTER
# ═══════════════════════════════════════════════════════

st.markdown(footer(), unsafe_allow_html=True)
