"""
Repositório de análises salvas, particionado por tenant.

Toda escrita é leitura-modificação-escrita da coleção inteira do tenant
(sem lock: entre processos, vence a última escrita). Conteúdo corrompido
é tratado como coleção vazia e sobrescrito na próxima gravação.
"""

import json
import logging
import numbers

from margem_real.config import ANALYSES_KEY_PREFIX
from margem_real.exceptions import AnalysisDecodeError
from margem_real.models.financial_models import AnalysisData
from margem_real.storage.backends import KeyValueStorage

logger = logging.getLogger(__name__)

_RECORD_STRINGS = ("id", "timestamp", "userId", "tenantId")
_FORM_AMOUNTS = ("vbv", "valoresPagosCliente", "vrl", "vrlj")
_KPI_FIELDS = (
    "rbr",
    "rol",
    "rentabilidadeLiquida",
    "retencaoIfoodPercentual",
    "valorRetidoIfood",
)


def analyses_key(tenant_id: str) -> str:
    """Chave de armazenamento da coleção de um tenant."""
    return f"{ANALYSES_KEY_PREFIX}{tenant_id}"


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_record(index: int, record) -> None:
    if not isinstance(record, dict):
        raise AnalysisDecodeError(f"registro {index}: esperado objeto")

    for name in _RECORD_STRINGS:
        if not isinstance(record.get(name), str):
            raise AnalysisDecodeError(f"registro {index}: campo '{name}' ausente ou inválido")

    form = record.get("formData")
    if not isinstance(form, dict):
        raise AnalysisDecodeError(f"registro {index}: 'formData' ausente")
    for name in _FORM_AMOUNTS:
        if not _is_number(form.get(name)):
            raise AnalysisDecodeError(f"registro {index}: formData.{name} não numérico")
    if not isinstance(form.get("periodo", ""), str):
        raise AnalysisDecodeError(f"registro {index}: formData.periodo não é texto")
    if not isinstance(form.get("additionalValues") or {}, dict):
        raise AnalysisDecodeError(f"registro {index}: formData.additionalValues inválido")

    calc = record.get("calculatedData")
    if not isinstance(calc, dict):
        raise AnalysisDecodeError(f"registro {index}: 'calculatedData' ausente")
    for name in _KPI_FIELDS:
        if not _is_number(calc.get(name)):
            raise AnalysisDecodeError(f"registro {index}: calculatedData.{name} não numérico")
    detail = calc.get("detailedAnalysis")
    if detail is not None and not isinstance(detail, dict):
        raise AnalysisDecodeError(f"registro {index}: detailedAnalysis inválido")


def decode_analyses(text: str) -> list[AnalysisData]:
    """
    Converte o conteúdo persistido em lista de AnalysisData.

    Raises:
        AnalysisDecodeError: JSON inválido ou formato inesperado.
    """
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise AnalysisDecodeError(f"JSON inválido: {e}") from e

    if not isinstance(payload, list):
        raise AnalysisDecodeError("coleção de análises deve ser uma lista")

    for index, record in enumerate(payload):
        _check_record(index, record)
    return [AnalysisData.from_dict(record) for record in payload]


def encode_analyses(analyses: list[AnalysisData]) -> str:
    return json.dumps([a.to_dict() for a in analyses], ensure_ascii=False)


class AnalysisRepository:
    """Único leitor/escritor das coleções de análises."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    # ─── Primitivos ───

    def _load(self, tenant_id: str) -> list[AnalysisData]:
        raw = self.storage.read(analyses_key(tenant_id))
        if not raw:
            return []
        try:
            return decode_analyses(raw)
        except AnalysisDecodeError as e:
            logger.warning("Análises do tenant %s ignoradas (corrompidas): %s", tenant_id, e)
            return []

    def _store(self, tenant_id: str, analyses: list[AnalysisData]) -> None:
        self.storage.write(analyses_key(tenant_id), encode_analyses(analyses))

    # ─── Operações ───

    def save(self, analysis: AnalysisData) -> None:
        """Acrescenta a análise ao final da coleção do tenant."""
        analyses = self._load(analysis.tenant_id)
        analyses.append(analysis)
        self._store(analysis.tenant_id, analyses)
        logger.info(
            "Análise %s salva (tenant=%s, total=%d)",
            analysis.id, analysis.tenant_id, len(analyses),
        )

    def list_by_tenant(self, tenant_id: str) -> list[AnalysisData]:
        """Análises do tenant na ordem em que foram salvas."""
        return self._load(tenant_id)

    def find_by_period_substring(self, tenant_id: str, substring: str) -> list[AnalysisData]:
        """Filtra por trecho do período (case-sensitive)."""
        return [a for a in self._load(tenant_id) if substring in (a.form_data.periodo or "")]

    def delete_by_id(self, tenant_id: str, analysis_id: str) -> list[AnalysisData]:
        """Remove a análise com o id informado (no-op se não existir)."""
        analyses = self._load(tenant_id)
        remaining = [a for a in analyses if a.id != analysis_id]
        self._store(tenant_id, remaining)
        logger.info(
            "Análise %s excluída (tenant=%s, restantes=%d)",
            analysis_id, tenant_id, len(remaining),
        )
        return remaining
