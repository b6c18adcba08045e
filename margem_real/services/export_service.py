"""
Exportação das análises salvas para CSV (separador ";", números sem aspas).
"""

from datetime import date

import pandas as pd

from margem_real.config import CSV_SEPARATOR, EXPORT_FILE_PREFIX
from margem_real.models.financial_models import AnalysisData

EXPORT_COLUMNS = [
    "periodo",
    "vbv",
    "valoresPagosCliente",
    "rbr",
    "vrl",
    "vrlj",
    "rol",
    "rentabilidadeLiquida",
    "retencaoIfoodPercentual",
    "valorRetidoIfood",
    "promocoes",
    "taxasComissoes",
    "servicosLogisticos",
    "outrosValores",
    "debitosDetalhados",
    "rbrPosDebitos",
    "repasseLiquidoReal",
    "percentualPromocoes",
    "percentualTaxasComissoes",
    "percentualServicosLogisticos",
    "percentualOutrosValores",
    "percentualTotalDebitos",
]


def build_export_row(analysis: AnalysisData) -> dict:
    """Uma linha de exportação (campos de detalhamento ausentes = 0)."""
    form = analysis.form_data
    calc = analysis.calculated_data
    extra = form.additional_values or {}
    detail = calc.detailed_analysis

    row = {
        "periodo": form.periodo,
        "vbv": form.vbv,
        "valoresPagosCliente": form.valores_pagos_cliente,
        "rbr": calc.rbr,
        "vrl": form.vrl,
        "vrlj": form.vrlj,
        "rol": calc.rol,
        "rentabilidadeLiquida": calc.rentabilidade_liquida,
        "retencaoIfoodPercentual": calc.retencao_ifood_percentual,
        "valorRetidoIfood": calc.valor_retido_ifood,
        "promocoes": extra.get("promocoes") or 0,
        "taxasComissoes": extra.get("taxasComissoes") or 0,
        "servicosLogisticos": extra.get("servicosLogisticos") or 0,
        "outrosValores": extra.get("outrosValores") or 0,
        "debitosDetalhados": 0,
        "rbrPosDebitos": 0,
        "repasseLiquidoReal": 0,
        "percentualPromocoes": 0,
        "percentualTaxasComissoes": 0,
        "percentualServicosLogisticos": 0,
        "percentualOutrosValores": 0,
        "percentualTotalDebitos": 0,
    }

    if detail is not None:
        row.update({
            "debitosDetalhados": detail.debitos_detalhados or 0,
            "rbrPosDebitos": detail.rbr_pos_debitos or 0,
            "repasseLiquidoReal": detail.repasse_liquido_real or 0,
            "percentualPromocoes": detail.percentuais.promocoes or 0,
            "percentualTaxasComissoes": detail.percentuais.taxas_comissoes or 0,
            "percentualServicosLogisticos": detail.percentuais.servicos_logisticos or 0,
            "percentualOutrosValores": detail.percentuais.outros_valores or 0,
            "percentualTotalDebitos": detail.percentuais.total_debitos or 0,
        })
    return row


def build_export_rows(analyses: list[AnalysisData]) -> list[dict]:
    """Linhas na ordem de armazenamento."""
    return [build_export_row(a) for a in analyses]


def export_analyses_csv(analyses: list[AnalysisData]) -> str:
    """CSV com cabeçalho; lista vazia gera apenas o cabeçalho."""
    df = pd.DataFrame(build_export_rows(analyses), columns=EXPORT_COLUMNS)
    return df.to_csv(sep=CSV_SEPARATOR, index=False, lineterminator="\n")


def export_filename(tenant_id: str, today: date = None) -> str:
    today = today or date.today()
    return f"{EXPORT_FILE_PREFIX}-{tenant_id}-{today.isoformat()}.csv"
