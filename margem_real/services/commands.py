"""
Comandos da aplicação, independentes do Streamlit.

Cada comando recebe e devolve dados simples, para que a UI apenas
colete entradas e renderize saídas.
"""

import logging
import time
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Optional

from margem_real.config import DEFAULT_TENANT_ID, HISTORY_LIMIT, LOGIN_DELAY, PERIOD_JOINER
from margem_real.exceptions import AnalysisNotSavedError
from margem_real.models.financial_models import (
    AnalysisData,
    CalculatedData,
    FormData,
    User,
    ValidationResult,
)
from margem_real.services.detailed_analysis_service import attach_detailed_analysis
from margem_real.services.export_service import export_analyses_csv, export_filename
from margem_real.services.metrics_service import (
    calculate_metrics,
    generate_test_data,
    validate_form_data,
)
from margem_real.storage.analysis_repository import AnalysisRepository
from margem_real.storage.session_store import SessionStore

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ─── Login simulado ───

def submit_login(
    email: str,
    password: str,
    session: SessionStore,
    delay: float = LOGIN_DELAY,
) -> User | None:
    """
    Login cosmético: qualquer e-mail e senha não vazios entram.

    Não há verificação de credencial; o usuário criado é salvo na sessão.
    """
    email = (email or "").strip()
    if not email or not password:
        return None

    if delay > 0:
        time.sleep(delay)

    user = User(
        id=uuid.uuid4().hex,
        email=email,
        name=email.split("@")[0],
        tenant_id=DEFAULT_TENANT_ID,
        role="owner",
        created_at=_now_iso(),
    )
    session.save_user(user)
    logger.info("Login simulado: %s (tenant=%s)", user.email, user.tenant_id)
    return user


def logout(session: SessionStore) -> None:
    session.clear()


# ─── Cálculo ───

@dataclass
class CalculationOutcome:
    """Validação + KPIs (None quando a validação falha)."""
    validation: ValidationResult
    calculated: Optional[CalculatedData] = None


def calculate(form_data: FormData) -> CalculationOutcome:
    validation = validate_form_data(form_data)
    if not validation.is_valid:
        return CalculationOutcome(validation=validation)
    return CalculationOutcome(validation=validation, calculated=calculate_metrics(form_data))


def load_example(tenant_id: str) -> FormData:
    return generate_test_data(tenant_id=tenant_id)


# ─── Persistência ───

def period_label(start: date | str, end: date | str) -> str:
    """Período digitado pelo usuário: "<início> até <fim>"."""
    start = start.isoformat() if isinstance(start, date) else str(start)
    end = end.isoformat() if isinstance(end, date) else str(end)
    return f"{start}{PERIOD_JOINER}{end}"


def save(
    repository: AnalysisRepository,
    user: User,
    form_data: FormData,
    calculated: CalculatedData | None,
    start: date | str,
    end: date | str,
) -> AnalysisData:
    """
    Salva um snapshot do formulário atual.

    `calculated` é o resultado do último "Calcular" e só indica que o
    cálculo foi feito: validação e KPIs são refeitos a partir de
    `form_data`, para que o registro salvo nunca misture entradas e
    métricas de momentos diferentes. O detalhamento é recalculado quando
    o chamador o anexou.

    Raises:
        AnalysisNotSavedError: sem cálculo ou com erros de validação.
    """
    validation = validate_form_data(form_data)
    if calculated is None or not validation.is_valid:
        raise AnalysisNotSavedError(
            "Não é possível salvar: calcule as métricas primeiro e "
            "certifique-se de que não há erros."
        )

    fresh = calculate_metrics(form_data)
    if calculated.detailed_analysis is not None:
        fresh = attach_detailed_analysis(form_data, fresh)

    analysis = AnalysisData(
        id=uuid.uuid4().hex,
        form_data=replace(
            form_data,
            additional_values=dict(form_data.additional_values),
            periodo=period_label(start, end),
            tenant_id=user.tenant_id,
        ),
        calculated_data=fresh,
        timestamp=_now_iso(),
        user_id=user.id,
        tenant_id=user.tenant_id,
    )
    repository.save(analysis)
    return analysis


def delete_analysis(
    repository: AnalysisRepository,
    tenant_id: str,
    analysis_id: str,
) -> list[AnalysisData]:
    """Exclui por id e devolve as análises restantes (id vazio = no-op)."""
    if not analysis_id:
        return repository.list_by_tenant(tenant_id)
    return repository.delete_by_id(tenant_id, analysis_id)


def recent_analyses(analyses: list[AnalysisData], limit: int = HISTORY_LIMIT) -> list[AnalysisData]:
    """Últimas `limit` análises, da mais recente para a mais antiga."""
    if limit <= 0:
        return []
    return list(reversed(analyses[-limit:]))


# ─── Exportação ───

def export_csv(analyses: list[AnalysisData], tenant_id: str, today: date = None) -> tuple[str, str]:
    """Retorna (nome do arquivo, conteúdo CSV)."""
    return export_filename(tenant_id, today), export_analyses_csv(analyses)
