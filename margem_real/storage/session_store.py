"""
Persistência do usuário "logado" (chave fixa, independente de tenant).
"""

import json
import logging

from margem_real.config import USER_KEY
from margem_real.models.financial_models import User
from margem_real.storage.backends import KeyValueStorage

logger = logging.getLogger(__name__)


class SessionStore:
    """Guarda o usuário atual para reabrir a sessão."""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def get_current_user(self) -> User | None:
        """Usuário salvo, ou None se ausente/corrompido/sem id e tenantId."""
        raw = self.storage.read(USER_KEY)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Registro de usuário corrompido: %s", e)
            return None

        if not isinstance(data, dict) or not data.get("id") or not data.get("tenantId"):
            return None
        return User.from_dict(data)

    def save_user(self, user: User) -> None:
        self.storage.write(USER_KEY, json.dumps(user.to_dict(), ensure_ascii=False))

    def clear(self) -> None:
        """Logout: remove só o usuário, as análises permanecem."""
        self.storage.delete(USER_KEY)
