"""Storage configuration loaded from a YAML file."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping

import yaml

DEFAULT_DB_PATH = "data/feeds.db"
DEFAULT_TIMEOUT = 5.0


@dataclass
class StoreConfig:
    """Where the feeds database lives and how connections are opened."""

    db_path: str = DEFAULT_DB_PATH
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any]) -> StoreConfig:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in cfg.items() if k in known})


def load_config(path: str) -> StoreConfig:
    """Load the ``storage:`` section of a YAML config file.

    A file without a ``storage:`` key is read as the section itself, and an
    empty file yields the defaults.
    """
    with open(path, "r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}
    section = raw.get("storage", raw)
    return StoreConfig.from_dict(section or {})
