"""
Fixtures compartilhadas pelos testes.
"""

import pytest

from margem_real.models.financial_models import (
    AnalysisData,
    CalculatedData,
    FormData,
    User,
)
from margem_real.services.metrics_service import calculate_metrics
from margem_real.storage.analysis_repository import AnalysisRepository
from margem_real.storage.backends import InMemoryStorage
from margem_real.storage.session_store import SessionStore


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def repository(storage):
    return AnalysisRepository(storage)


@pytest.fixture
def session(storage):
    return SessionStore(storage)


@pytest.fixture
def sample_form():
    """Cenário de referência: VBV 100k, pagos 4k, VRL 70k, VRLJ 5k."""
    return FormData(
        vbv=100000,
        valores_pagos_cliente=4000,
        vrl=70000,
        vrlj=5000,
        additional_values={},
        periodo="2025-01",
        tenant_id="t1",
    )


@pytest.fixture
def user():
    return User(
        id="u1",
        email="dono@restaurante.com",
        name="dono",
        tenant_id="t1",
        role="owner",
        created_at="2025-01-01T00:00:00+00:00",
    )


@pytest.fixture
def make_analysis(sample_form):
    """Fábrica de AnalysisData com id e período configuráveis."""

    def _make(analysis_id: str, periodo: str = "2025-01-01 até 2025-01-31", tenant_id: str = "t1"):
        form = FormData(
            vbv=sample_form.vbv,
            valores_pagos_cliente=sample_form.valores_pagos_cliente,
            vrl=sample_form.vrl,
            vrlj=sample_form.vrlj,
            additional_values={},
            periodo=periodo,
            tenant_id=tenant_id,
        )
        calculated: CalculatedData = calculate_metrics(form)
        return AnalysisData(
            id=analysis_id,
            form_data=form,
            calculated_data=calculated,
            timestamp="2025-02-01T12:00:00+00:00",
            user_id="u1",
            tenant_id=tenant_id,
        )

    return _make
