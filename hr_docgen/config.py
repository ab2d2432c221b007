from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from hr_docgen.records import DEFAULT_OFFER_DEPARTMENT, DEFAULT_OFFER_DESIGNATION
from hr_docgen.utils.contracts import validate_output

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "HR_DOCGEN_HOME"
DEFAULT_STORE_DIR = Path("~/.hr_docgen")


@dataclass(frozen=True)
class Settings:
    store_dir: Path = DEFAULT_STORE_DIR
    company_name: str = "Agenthum"
    company_address: str = ""
    offer_designation: str = DEFAULT_OFFER_DESIGNATION
    offer_department: str = DEFAULT_OFFER_DEPARTMENT


def default_store_dir() -> Path:
    return Path(os.environ.get(HOME_ENV_VAR) or DEFAULT_STORE_DIR).expanduser()


def load_settings(path: Path | None = None, store_dir: Path | None = None) -> Settings:
    """
    Build settings from defaults, an optional JSON settings file and overrides.

    Precedence (lowest first): built-in defaults, ``HR_DOCGEN_HOME``, the settings
    file, then an explicit ``store_dir`` argument.

    Raises:
        FileNotFoundError: If ``path`` is given but does not exist.
        ContractError: If the settings file violates the settings schema.
    """
    settings = Settings(store_dir=default_store_dir())

    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
        with path.open("r", encoding="utf-8") as handle:
            payload: dict[str, Any] = json.load(handle)
        validate_output(payload, "settings", mode="STRICT")
        known = {f.name for f in fields(Settings)}
        overrides = {key: value for key, value in payload.items() if key in known}
        if "store_dir" in overrides:
            overrides["store_dir"] = Path(overrides["store_dir"]).expanduser()
        settings = replace(settings, **overrides)
        logger.debug(f"Loaded settings from {path}")

    if store_dir is not None:
        settings = replace(settings, store_dir=Path(store_dir).expanduser())

    return settings
