from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .client import BlockingStatsDClient
from .errors import ErrorHandler, logging_error_handler

ERROR_HANDLERS = ("noop", "log")


def load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class StatsdCfg:
    enabled: bool = True
    host: str = "127.0.0.1"
    port: int = 8125
    prefix: str = ""
    constant_tags: Tuple[str, ...] = ()
    error_handler: str = "noop"  # 'noop' or 'log'


def parse_config(raw: Dict[str, Any]) -> StatsdCfg:
    sd_raw = (raw or {}).get("statsd") or {}

    error_handler = str(sd_raw.get("error_handler", "noop")).lower()
    if error_handler not in ERROR_HANDLERS:
        raise ValueError(f"statsd.error_handler must be one of {ERROR_HANDLERS}, got: {error_handler!r}")

    tags_raw = sd_raw.get("constant_tags") or []
    if isinstance(tags_raw, dict):
        # Allow the mapping form: {env: prod} -> "env:prod"
        tags_raw = [f"{k}:{v}" for k, v in tags_raw.items()]

    return StatsdCfg(
        enabled=bool(sd_raw.get("enabled", True)),
        host=str(sd_raw.get("host", "127.0.0.1")),
        port=int(sd_raw.get("port", 8125)),
        prefix=str(sd_raw.get("prefix") or ""),
        constant_tags=tuple(str(t) for t in tags_raw),
        error_handler=error_handler,
    )


def resolve_error_handler(name: str) -> Optional[ErrorHandler]:
    return logging_error_handler() if name == "log" else None


def maybe_create_client(cfg: StatsdCfg) -> Optional[BlockingStatsDClient]:
    if not cfg.enabled:
        return None
    return BlockingStatsDClient(
        cfg.prefix,
        cfg.host,
        cfg.port,
        constant_tags=cfg.constant_tags,
        error_handler=resolve_error_handler(cfg.error_handler),
    )
