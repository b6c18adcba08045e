"""
Serviço de Análise Detalhada.

Decompõe o valor retido pela plataforma em quatro categorias de débito
(promoções, taxas/comissões, serviços logísticos, outros) e calcula o
repasse líquido real e a participação de cada débito sobre a RBR.
"""

from margem_real.models.financial_models import (
    CalculatedData,
    DebitPercentages,
    DetailedAnalysisData,
    FormData,
)
from margem_real.utils.formatting import normalize_number, to_finite


def _share(amount: float, rbr: float) -> float:
    """Percentual (0–100) de `amount` sobre a RBR; 0 quando rbr <= 0."""
    return (amount / rbr) * 100 if rbr > 0 else 0.0


def _category(additional_values: dict, key: str) -> float:
    return to_finite(normalize_number(additional_values.get(key) or 0))


def compute_detailed_analysis(
    form_data: FormData,
    calculated: CalculatedData,
) -> DetailedAnalysisData:
    """
    Calcula o detalhamento de débitos.

    debitos = promocoes + taxas + logistica + outros
    rbr_pos_debitos = rbr - debitos          (pode ficar negativo)
    repasse_liquido_real = rbr_pos_debitos + vrlj
    """
    values = form_data.additional_values or {}
    promocoes = _category(values, "promocoes")
    taxas_comissoes = _category(values, "taxasComissoes")
    servicos_logisticos = _category(values, "servicosLogisticos")
    outros_valores = _category(values, "outrosValores")

    rbr = to_finite(calculated.rbr)
    debitos = promocoes + taxas_comissoes + servicos_logisticos + outros_valores
    rbr_pos_debitos = rbr - debitos

    return DetailedAnalysisData(
        promocoes=promocoes,
        taxas_comissoes=taxas_comissoes,
        servicos_logisticos=servicos_logisticos,
        outros_valores=outros_valores,
        debitos_detalhados=debitos,
        rbr_pos_debitos=rbr_pos_debitos,
        repasse_liquido_real=rbr_pos_debitos + to_finite(normalize_number(form_data.vrlj)),
        percentuais=DebitPercentages(
            promocoes=_share(promocoes, rbr),
            taxas_comissoes=_share(taxas_comissoes, rbr),
            servicos_logisticos=_share(servicos_logisticos, rbr),
            outros_valores=_share(outros_valores, rbr),
            total_debitos=_share(debitos, rbr),
        ),
    )


def attach_detailed_analysis(form_data: FormData, calculated: CalculatedData) -> CalculatedData:
    """Retorna cópia de `calculated` com o detalhamento recalculado anexado."""
    return calculated.with_detailed_analysis(compute_detailed_analysis(form_data, calculated))


# ─── Indicadores para a UI ───

def has_rbr_error(calculated: CalculatedData) -> bool:
    """RBR não positiva: percentuais do detalhamento não fazem sentido."""
    return to_finite(calculated.rbr) <= 0


def has_debits_exceeding_rbr(detail: DetailedAnalysisData, calculated: CalculatedData) -> bool:
    """Débitos detalhados maiores que a RBR (aviso, não bloqueia)."""
    return detail.debitos_detalhados > to_finite(calculated.rbr)
