from __future__ import annotations

import logging
import os
from pathlib import Path

import platformdirs
import yaml
from dotenv import load_dotenv

APP_NAME = "logistix"

CONFIG_DIR_ENV = "LOGISTIX_CONFIG_DIR"
DATA_DIR_ENV = "LOGISTIX_DATA_DIR"
LOG_LEVEL_ENV = "LOGISTIX_LOG_LEVEL"


def _project_root() -> Path:
    # src/logistix/config.py -> ../../.. is the checkout root
    return Path(__file__).resolve().parents[2]


def _explicit_or_dev_dir(env_var: str, subdir: str) -> Path | None:
    """Directory named by ``env_var``, else ``subdir`` of a source checkout, else None."""
    from_env = os.environ.get(env_var)
    if from_env:
        return Path(from_env)
    candidate = _project_root() / subdir
    return candidate if candidate.is_dir() else None


def get_config_dir() -> Path:
    """Resolve config directory. Re-evaluated on each call to pick up env changes."""
    found = _explicit_or_dev_dir(CONFIG_DIR_ENV, "config")
    return found or Path(platformdirs.user_config_dir(APP_NAME))


def get_data_dir() -> Path:
    """Resolve data directory. Re-evaluated on each call to pick up env changes."""
    found = _explicit_or_dev_dir(DATA_DIR_ENV, "data")
    return found or Path(platformdirs.user_data_dir(APP_NAME))


def _load_env_files() -> None:
    """Load .env from cwd, then from the config dir without overriding.

    The config dir is resolved from sources available before any .env is read;
    the platformdirs location is used only if it already exists.
    """
    load_dotenv()
    cfg_dir = _explicit_or_dev_dir(CONFIG_DIR_ENV, "config")
    if cfg_dir is None:
        pd = Path(platformdirs.user_config_dir(APP_NAME))
        cfg_dir = pd if pd.is_dir() else None
    if cfg_dir is not None:
        load_dotenv(cfg_dir / ".env")


_load_env_files()


# Invoices unpaid after this many days are reported as overdue
OVERDUE_DAYS = 10

MAX_AUDIT_ENTRIES = 1000

DEFAULT_COMPANY = {
    "name": "SP Logistix",
    "tagline": "Livraison d'urée",
    "address": "",
    "phone": "",
    "email": "",
    "payment_terms_days": 15,
}


# --- YAML config ---


def load_yaml(path: Path) -> dict:
    """Load and parse a YAML file, returning the top-level dict."""
    return yaml.safe_load(path.read_text()) or {}


def load_pricing() -> dict:
    """Load pricing overrides from config/pricing.yaml, or {} when absent."""
    path = get_config_dir() / "pricing.yaml"
    if not path.is_file():
        return {}
    return load_yaml(path)


def load_company() -> dict:
    """Load the issuing company profile from config/company.yaml, merged over defaults."""
    path = get_config_dir() / "company.yaml"
    data = dict(DEFAULT_COMPANY)
    if path.is_file():
        data.update(load_yaml(path))
    return data


def configure_logging() -> None:
    """Configure root logging from LOGISTIX_LOG_LEVEL (default WARNING)."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
