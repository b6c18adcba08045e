"""
Utilitários de formatação e leitura de valores financeiros brasileiros.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

_NON_NUMERIC = re.compile(r"[^\d.,-]")
_THOUSANDS_DOT = re.compile(r"\.(?=.*[.,])")
_FLOAT_PREFIX = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")
_EXPONENT_FLOAT = re.compile(r"-?(?:\d+\.?\d*|\.\d+)[eE][+-]?\d+")

CENTS = Decimal("0.01")


def to_finite(value) -> float:
    """Converte para float finito (None, NaN, inf e lixo viram 0)."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        n = float(value)
    except (TypeError, ValueError):
        return 0.0
    return n if math.isfinite(n) else 0.0


def _quantize(value: float | Decimal) -> Decimal:
    """Arredonda para 2 casas (ROUND_HALF_UP, como o Intl do navegador)."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def _swap_separators(text: str) -> str:
    """Troca separadores en-US pelos pt-BR (1,234.56 → 1.234,56)."""
    return text.replace(",", "X").replace(".", ",").replace("X", ".")


def _render_percent(fraction: Decimal) -> str:
    """Renderiza uma fração (0.25) como percentual pt-BR (25,00%)."""
    return _swap_separators(f"{_quantize(fraction * 100):,.2f}%")


def normalize_number(value) -> float:
    """
    Converte número digitado em PT-BR (pontos de milhar, vírgula decimal) para float.

    Exemplos:
        "R$ 1.234,56" -> 1234.56
        "100.000,00"  -> 100000.0
        "" / None     -> 0
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if not value:
        return 0

    text = str(value).strip()
    if _EXPONENT_FLOAT.fullmatch(text):
        # notação científica (str(5e-05), str(1e+16))
        n = float(text)
        return n if math.isfinite(n) else 0

    clean = _NON_NUMERIC.sub("", text)
    clean = _THOUSANDS_DOT.sub("", clean)   # só o último separador é decimal
    clean = clean.replace(",", ".", 1)      # vírgula -> ponto

    match = _FLOAT_PREFIX.match(clean)
    if not match:
        return 0
    n = float(match.group())
    return n if math.isfinite(n) else 0


def format_brl(value) -> str:
    """Formata um número como Real brasileiro (R$ 150.000,50)."""
    amount = _quantize(to_finite(value))
    if amount.is_zero():
        amount = abs(amount)  # evita "R$ -0,00"
    if amount >= 0:
        return _swap_separators(f"R$ {amount:,.2f}")
    return _swap_separators(f"-R$ {abs(amount):,.2f}")


format_currency = format_brl


def format_percentage(p) -> str:
    """Formata percentual com entrada em unidades 0–100 (78.125 -> 78,13%)."""
    return _render_percent(Decimal(str(to_finite(p))) / 100)


def format_percentage_direct(p) -> str:
    """
    Formata percentual usado diretamente em rótulos e gráficos do detalhamento.

    Recebe os valores de `percentuais` (já em 0–100) e não aplica nenhuma
    escala além da conversão para fração feita pelo estilo percentual.
    """
    return _render_percent(Decimal(str(to_finite(p))) / 100)


def format_input_value(value) -> str:
    """Texto exibido no campo de moeda fora de foco ("" para zero, sem R$)."""
    if to_finite(value) == 0:
        return ""
    return format_brl(value).replace("R$", "").strip()
