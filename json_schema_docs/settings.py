from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

HOME_ENV_VAR = 'JSON_SCHEMA_DOCS_HOME'
LOG_LEVEL_ENV_VAR = 'JSON_SCHEMA_DOCS_LOG_LEVEL'
DEFAULT_HOME = Path.home() / '.json_schema_docs'


@dataclass
class DocsOptions:
    include_header: bool = True
    include_definitions: bool = False
    include_examples: bool = False
    searchable: bool = True
    collapsible: bool = True
    auto_expand: bool = False
    theme: str = 'auto'
    default_example_language: str = 'json'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_OPTION_NAMES = {f.name for f in fields(DocsOptions)}


def settings_dir() -> Path:
    return Path(os.environ.get(HOME_ENV_VAR) or DEFAULT_HOME)


def settings_path(site_key: str = 'default', base_dir: Optional[Path] = None) -> Path:
    safe_key = re.sub(r'[^A-Za-z0-9._-]', '_', site_key or 'default')
    return (base_dir or settings_dir()) / f"settings-{safe_key}.json"


def _known_options(values: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if k in _OPTION_NAMES}


def load_stored_options(site_key: str = 'default', base_dir: Optional[Path] = None) -> Dict[str, Any]:
    path = settings_path(site_key, base_dir)
    if not path.exists():
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load settings from %s: %s", path, exc)
        return {}
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: expected a JSON object.", path)
        return {}
    return _known_options(stored)


def load_options(
    site_key: str = 'default',
    overrides: Optional[Mapping[str, Any]] = None,
    base_dir: Optional[Path] = None,
) -> DocsOptions:
    """Defaults, then the stored settings file, then explicit overrides."""
    merged = DocsOptions().to_dict()
    merged.update(load_stored_options(site_key, base_dir))
    merged.update(_known_options(overrides or {}))
    return DocsOptions(**merged)


def save_options(options: DocsOptions, site_key: str = 'default', base_dir: Optional[Path] = None) -> Path:
    path = settings_path(site_key, base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(options.to_dict(), f, indent=2)
    logger.debug("Saved settings to %s", path)
    return path
