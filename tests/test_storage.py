"""
Testes dos backends de armazenamento e da sessão do usuário.
"""

import json
from pathlib import Path

import pytest

from margem_real.storage.analysis_repository import AnalysisRepository
from margem_real.storage.backends import FileStorage, InMemoryStorage, KeyValueStorage
from margem_real.storage.session_store import SessionStore


class TestKeyValueStorage:

    def test_port_is_abstract(self):
        with pytest.raises(TypeError):
            KeyValueStorage()

    def test_backend_missing_a_method_is_rejected(self):
        class ReadOnly(KeyValueStorage):
            def read(self, key):
                return None

        with pytest.raises(TypeError):
            ReadOnly()

    @pytest.mark.parametrize("backend", [InMemoryStorage, FileStorage])
    def test_backends_implement_port(self, backend):
        assert issubclass(backend, KeyValueStorage)


class TestInMemoryStorage:

    def test_read_write_delete(self):
        storage = InMemoryStorage()
        assert storage.read("k") is None
        storage.write("k", "v")
        assert storage.read("k") == "v"
        storage.delete("k")
        assert storage.read("k") is None

    def test_delete_missing_key(self):
        InMemoryStorage().delete("nada")


class TestFileStorage:

    def test_survives_new_instance(self, tmp_path):
        FileStorage(tmp_path).write("ifood-analyses-t1", "[]")
        assert FileStorage(tmp_path).read("ifood-analyses-t1") == "[]"

    def test_keys_are_escaped(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.write("tenant/../x", "v")
        assert storage.read("tenant/../x") == "v"
        assert len(list(tmp_path.iterdir())) == 1

    def test_delete(self, tmp_path):
        storage = FileStorage(tmp_path)
        storage.write("k", "v")
        storage.delete("k")
        storage.delete("k")
        assert storage.read("k") is None

    def test_repository_over_files(self, tmp_path, make_analysis):
        AnalysisRepository(FileStorage(tmp_path)).save(make_analysis("a1"))
        reloaded = AnalysisRepository(FileStorage(tmp_path)).list_by_tenant("t1")
        assert [a.id for a in reloaded] == ["a1"]

    def test_unavailable_directory_is_noop(self, tmp_path, monkeypatch, make_analysis):
        def fail(*args, **kwargs):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(Path, "mkdir", fail)
        storage = FileStorage(tmp_path / "sem-acesso")
        assert storage.available is False

        repository = AnalysisRepository(storage)
        repository.save(make_analysis("a1"))
        assert repository.list_by_tenant("t1") == []
        repository.delete_by_id("t1", "a1")

    def test_write_failure_is_swallowed(self, tmp_path, monkeypatch):
        storage = FileStorage(tmp_path)

        def fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(Path, "write_text", fail)
        storage.write("k", "v")
        assert storage.read("k") is None


class TestSessionStore:

    def test_save_and_restore_user(self, session, user):
        session.save_user(user)
        assert session.get_current_user() == user

    def test_no_user(self, session):
        assert session.get_current_user() is None

    def test_corrupt_user_record(self, storage, session):
        storage.write("ifood-user", "{nope")
        assert session.get_current_user() is None

    def test_user_without_tenant_is_rejected(self, storage, session):
        storage.write("ifood-user", json.dumps({"id": "u1", "email": "a@b.c"}))
        assert session.get_current_user() is None

    def test_clear_keeps_analyses(self, storage, session, user, repository, make_analysis):
        session.save_user(user)
        repository.save(make_analysis("a1"))
        session.clear()
        assert session.get_current_user() is None
        assert len(repository.list_by_tenant("t1")) == 1
