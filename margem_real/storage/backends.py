"""
Armazenamento chave-valor durável (equivalente local do localStorage).

Cada backend expõe a mesma porta:
- read(key) -> texto ou None
- write(key, text)
- delete(key)

Falhas de acesso ao disco nunca propagam: leitura devolve None e
escrita/remoção viram no-op, com aviso no log.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import quote

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):
    """Porta de armazenamento usada pelos repositórios."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Texto gravado na chave, ou None."""

    @abstractmethod
    def write(self, key: str, text: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemoryStorage(KeyValueStorage):
    """Backend em memória (testes e sessões sem disco)."""

    def __init__(self, initial: dict[str, str] = None):
        self._data: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> str | None:
        return self._data.get(key)

    def write(self, key: str, text: str) -> None:
        self._data[key] = text

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage(KeyValueStorage):
    """Backend em diretório local: um arquivo por chave."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        self.available = True
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # Filesystem somente leitura (ex.: Cloud): opera como no-op
            logger.warning("Armazenamento indisponível em %s: %s", self.directory, e)
            self.available = False

    def _path(self, key: str) -> Path:
        return self.directory / f"{quote(key, safe='')}.json"

    def read(self, key: str) -> str | None:
        if not self.available:
            return None
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Falha ao ler chave %s: %s", key, e)
            return None

    def write(self, key: str, text: str) -> None:
        if not self.available:
            return
        try:
            self._path(key).write_text(text, encoding="utf-8")
        except OSError as e:
            logger.warning("Falha ao gravar chave %s: %s", key, e)

    def delete(self, key: str) -> None:
        if not self.available:
            return
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Falha ao remover chave %s: %s", key, e)
