"""
Exceções de domínio do Margem Real.
"""


class MargemRealError(Exception):
    """Erro base da aplicação."""


class AnalysisDecodeError(MargemRealError, ValueError):
    """Conteúdo persistido não tem o formato de uma coleção de análises."""


class AnalysisNotSavedError(MargemRealError):
    """Tentativa de salvar sem cálculo válido."""
