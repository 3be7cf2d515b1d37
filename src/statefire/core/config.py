"""
statefire configuration (YAML defaults, optional user file, env overrides).

Sources, lowest to highest priority:

1. Bundled defaults: ``statefire/data/config/defaults.yaml``
2. A user YAML file passed to ``load_config(path)``
3. Environment variables: ``STATEFIRE_*`` (``__`` separates nested keys,
   e.g. ``STATEFIRE_LOGGING__LEVEL=DEBUG``)

The merged mapping is validated against ``config.schema.yaml``.
"""
from __future__ import annotations

import copy
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from statefire.core.exceptions import SchemaValidationError
from statefire.core.schemas.validation import validate_payload
from statefire.core.utils.yaml_io import read_yaml
from statefire.data import read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "STATEFIRE_"


@dataclass(frozen=True)
class StatefireConfig:
    whiny_transitions: bool = True
    log_level: str = "INFO"
    log_path: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StatefireConfig":
        log_cfg = data.get("logging") or {}
        return cls(
            whiny_transitions=bool(data.get("whiny_transitions", True)),
            log_level=str(log_cfg.get("level") or "INFO"),
            log_path=log_cfg.get("path"),
        )


def deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _coerce_type(value: str) -> Any:
    low = value.strip().lower()
    if low in {"true", "false"}:
        return low == "true"
    if low in {"null", "none"}:
        return None
    if re.fullmatch(r"[-+]?\d+", low):
        return int(low)
    return value.strip()


def _parse_env_key(raw: str) -> List[str]:
    segs = raw.split("__")
    if any(seg == "" for seg in segs):
        raise ValueError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
    return [seg.lower() for seg in segs]


def apply_env_overrides(cfg: Dict[str, Any], environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    env = os.environ if environ is None else environ
    for key in sorted(env):
        if not key.startswith(ENV_PREFIX) or key == ENV_PREFIX:
            continue
        path = _parse_env_key(key[len(ENV_PREFIX):])
        cur = cfg
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = _coerce_type(env[key])
    return cfg


def load_config_dict(
    path: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """Return the merged, validated configuration mapping."""
    cfg: Dict[str, Any] = copy.deepcopy(read_data_yaml("config", "defaults.yaml") or {})
    if path is not None:
        # Fail closed: a user config file must exist and parse.
        user_cfg = read_yaml(Path(path), default={}, raise_on_error=True)
        if not isinstance(user_cfg, Mapping):
            raise SchemaValidationError(
                f"Config file {path} must contain a YAML mapping",
                context={"path": str(path)},
            )
        cfg = deep_merge(cfg, user_cfg)
    apply_env_overrides(cfg, environ)
    validate_payload(cfg, "config")
    logger.debug("loaded config: %s", cfg)
    return cfg


def load_config(
    path: Optional[Path] = None, *, environ: Optional[Mapping[str, str]] = None
) -> StatefireConfig:
    return StatefireConfig.from_mapping(load_config_dict(path, environ=environ))


__all__ = [
    "ENV_PREFIX",
    "StatefireConfig",
    "apply_env_overrides",
    "deep_merge",
    "load_config",
    "load_config_dict",
]
