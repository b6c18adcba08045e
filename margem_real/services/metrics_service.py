"""
Serviço de Métricas do restaurante.

Responsabilidades:
- RBR (Receita Bruta Real)
- ROL (Receita Operacional Líquida)
- Rentabilidade líquida e retenção iFood
- Validação do formulário
- Mensagens de resultado
"""

from datetime import date

from margem_real.models.financial_models import (
    CalculatedData,
    FormData,
    ValidationError,
    ValidationResult,
)
from margem_real.utils.formatting import to_finite, format_currency, format_percentage


def _amounts(data: FormData) -> tuple[float, float, float, float]:
    """Os quatro valores do formulário como floats finitos."""
    return (
        to_finite(data.vbv),
        to_finite(data.valores_pagos_cliente),
        to_finite(data.vrl),
        to_finite(data.vrlj),
    )


# ─── Cálculo principal ───

def calculate_metrics(data: FormData) -> CalculatedData:
    """
    Calcula os KPIs a partir dos valores do formulário.

    rbr = vbv - valores_pagos_cliente
    rol = vrl + vrlj
    rentabilidade = rol / rbr * 100 (0 se rbr <= 0)
    """
    vbv, valores_pagos_cliente, vrl, vrlj = _amounts(data)

    rbr = vbv - valores_pagos_cliente
    rol = vrl + vrlj
    rentabilidade_liquida = (rol / rbr) * 100 if rbr > 0 else 0.0

    return CalculatedData(
        rbr=rbr,
        rol=rol,
        rentabilidade_liquida=rentabilidade_liquida,
        retencao_ifood_percentual=100 - rentabilidade_liquida,
        valor_retido_ifood=rbr - rol,
    )


# ─── Validação ───

def validate_form_data(data: FormData) -> ValidationResult:
    """Valida o formulário. Todos os erros são coletados; avisos não bloqueiam."""
    vbv, vpc, vrl, vrlj = _amounts(data)
    rbr = vbv - vpc
    rol = vrl + vrlj

    result = ValidationResult()

    if vbv <= 0:
        result.errors.append(ValidationError("vbv", "VBV deve ser maior que zero."))
    if vpc < 0:
        result.errors.append(ValidationError(
            "valoresPagosCliente",
            "Valores pagos pelo cliente não pode ser negativo.",
        ))
    if rbr <= 0:
        result.errors.append(ValidationError(
            "base",
            "Receita Bruta Real (VBV - valores pagos) deve ser positiva.",
        ))
    if rol > rbr:
        result.warnings.append("ROL maior do que a Receita Bruta Real. Revise os números.")

    return result


# ─── Mensagens ───

def generate_result_messages(calc: CalculatedData) -> list[str]:
    """Frases de resumo exibidas após o cálculo."""
    return [
        f"Sua RBR foi {format_currency(calc.rbr)}.",
        f"Seu ROL foi {format_currency(calc.rol)}.",
        f"Rentabilidade líquida: {format_percentage(calc.rentabilidade_liquida)}.",
        f"Retenção iFood: {format_percentage(calc.retencao_ifood_percentual)} "
        f"({format_currency(calc.valor_retido_ifood)}).",
    ]


def generate_test_data(tenant_id: str = "demo-tenant") -> FormData:
    """Dados de exemplo para preencher o formulário."""
    return FormData(
        vbv=100000,
        valores_pagos_cliente=4000,
        vrl=70000,
        vrlj=5000,
        additional_values={},
        periodo=date.today().strftime("%Y-%m"),
        tenant_id=tenant_id,
    )
