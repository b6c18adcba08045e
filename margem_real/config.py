"""
Configuração centralizada do Margem Real.
Carrega variáveis de ambiente (.env local) ou st.secrets (Streamlit Cloud).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Carrega .env a partir da raiz do projeto (apenas local)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")


def _get_secret(key: str, default: str = None) -> str | None:
    """Busca config em st.secrets (Cloud) ou os.environ (.env local)."""
    try:
        import streamlit as st
        if hasattr(st, "secrets") and key in st.secrets:
            return st.secrets[key]
    except Exception:
        # st.secrets levanta quando não existe secrets.toml
        pass
    return os.getenv(key, default)


# ─── Armazenamento local ───

STORAGE_DIR = _get_secret("MARGEM_STORAGE_DIR", str(PROJECT_ROOT / ".margem_data"))
ANALYSES_KEY_PREFIX = "ifood-analyses-"
USER_KEY = "ifood-user"

# ─── Sessão (login simulado) ───

DEFAULT_TENANT_ID = _get_secret("MARGEM_DEFAULT_TENANT", "demo-tenant")
LOGIN_DELAY = float(_get_secret("MARGEM_LOGIN_DELAY", "1.0"))  # segundos
USER_ROLES = ("owner", "manager", "viewer")
ROLE_LABELS = {
    "owner": "Proprietário",
    "manager": "Gerente",
    "viewer": "Visualizador",
}

# ─── Exportação ───

CSV_SEPARATOR = ";"
EXPORT_FILE_PREFIX = "ifood-analysis"
PERIOD_JOINER = " até "

# ─── Histórico ───

HISTORY_LIMIT = 10  # análises exibidas, mais recentes primeiro

# ─── Logging ───

LOG_LEVEL = _get_secret("MARGEM_LOG_LEVEL", "INFO")

# ─── App ───

APP_NAME = "Margem Real"
APP_VERSION = "v1.0"
