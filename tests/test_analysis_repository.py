"""
Testes do repositório de análises (particionamento, corrupção, exclusão).
"""

import json

import pytest

from margem_real.exceptions import AnalysisDecodeError
from margem_real.storage.analysis_repository import (
    AnalysisRepository,
    analyses_key,
    decode_analyses,
    encode_analyses,
)
from margem_real.storage.backends import InMemoryStorage


class TestSaveAndList:

    def test_two_saves_keep_order(self, repository, make_analysis):
        first, second = make_analysis("a1"), make_analysis("a2")
        repository.save(first)
        repository.save(second)
        assert [a.id for a in repository.list_by_tenant("t1")] == ["a1", "a2"]

    def test_unknown_tenant_is_empty(self, repository):
        assert repository.list_by_tenant("nobody") == []

    def test_tenants_are_isolated(self, repository, make_analysis):
        repository.save(make_analysis("a1", tenant_id="t1"))
        repository.save(make_analysis("b1", tenant_id="t2"))
        assert [a.id for a in repository.list_by_tenant("t1")] == ["a1"]
        assert [a.id for a in repository.list_by_tenant("t2")] == ["b1"]

    def test_no_dedup(self, repository, make_analysis):
        analysis = make_analysis("a1")
        repository.save(analysis)
        repository.save(analysis)
        assert len(repository.list_by_tenant("t1")) == 2

    def test_persisted_under_tenant_key(self, storage, repository, make_analysis):
        repository.save(make_analysis("a1"))
        payload = json.loads(storage.read("ifood-analyses-t1"))
        assert payload[0]["id"] == "a1"
        assert payload[0]["formData"]["valoresPagosCliente"] == 4000
        assert payload[0]["calculatedData"]["rbr"] == 96000

    def test_roundtrip_preserves_values(self, repository, make_analysis):
        original = make_analysis("a1")
        repository.save(original)
        assert repository.list_by_tenant("t1") == [original]


class TestFindByPeriod:

    def test_substring_match(self, repository, make_analysis):
        repository.save(make_analysis("jan", periodo="2025-01-01 até 2025-01-31"))
        repository.save(make_analysis("feb", periodo="2025-02-01 até 2025-02-28"))
        assert [a.id for a in repository.find_by_period_substring("t1", "2025-02")] == ["feb"]
        assert len(repository.find_by_period_substring("t1", "2025")) == 2

    def test_match_is_case_sensitive(self, repository, make_analysis):
        repository.save(make_analysis("a1", periodo="Janeiro"))
        assert repository.find_by_period_substring("t1", "janeiro") == []
        assert len(repository.find_by_period_substring("t1", "Jan")) == 1


class TestDelete:

    def test_delete_first_leaves_second(self, repository, make_analysis):
        repository.save(make_analysis("a1"))
        repository.save(make_analysis("a2"))
        repository.delete_by_id("t1", "a1")
        assert [a.id for a in repository.list_by_tenant("t1")] == ["a2"]

    def test_delete_missing_id_is_noop(self, repository, make_analysis):
        repository.save(make_analysis("a1"))
        remaining = repository.delete_by_id("t1", "does-not-exist")
        assert [a.id for a in remaining] == ["a1"]
        assert [a.id for a in repository.list_by_tenant("t1")] == ["a1"]

    def test_delete_on_empty_tenant(self, repository):
        assert repository.delete_by_id("t1", "x") == []


class TestCorruptStorage:

    def test_non_json_is_empty(self):
        storage = InMemoryStorage({analyses_key("t1"): "isto não é json"})
        assert AnalysisRepository(storage).list_by_tenant("t1") == []

    @pytest.mark.parametrize("blob", [
        '{"id": "a1"}',
        '[{"id": "a1"}]',
        '[1, 2, 3]',
        '[{"id": "a1", "timestamp": "x", "userId": "u", "tenantId": "t1",'
        ' "formData": {"vbv": "100", "valoresPagosCliente": 0, "vrl": 0, "vrlj": 0},'
        ' "calculatedData": {}}]',
    ])
    def test_wrong_shape_is_empty(self, blob):
        storage = InMemoryStorage({analyses_key("t1"): blob})
        assert AnalysisRepository(storage).list_by_tenant("t1") == []

    def test_corrupt_blob_is_overwritten_on_save(self, make_analysis):
        storage = InMemoryStorage({analyses_key("t1"): "{corrompido"})
        repository = AnalysisRepository(storage)
        repository.save(make_analysis("a1"))
        assert [a.id for a in repository.list_by_tenant("t1")] == ["a1"]


class TestDecode:

    def test_decode_rejects_invalid_json(self):
        with pytest.raises(AnalysisDecodeError):
            decode_analyses("[")

    def test_decode_rejects_boolean_amounts(self, make_analysis):
        payload = json.loads(encode_analyses([make_analysis("a1")]))
        payload[0]["formData"]["vbv"] = True
        with pytest.raises(AnalysisDecodeError):
            decode_analyses(json.dumps(payload))

    def test_decode_accepts_detailed_analysis(self, make_analysis):
        from margem_real.services.detailed_analysis_service import attach_detailed_analysis

        analysis = make_analysis("a1")
        analysis.form_data.additional_values = {"promocoes": 2500}
        analysis.calculated_data = attach_detailed_analysis(analysis.form_data, analysis.calculated_data)
        decoded = decode_analyses(encode_analyses([analysis]))
        assert decoded[0].calculated_data.detailed_analysis.promocoes == 2500
