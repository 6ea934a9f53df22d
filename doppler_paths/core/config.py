import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from doppler_paths.core.constants.base import (
    DEFAULT_HOOK_MINING_ATTEMPTS,
    DEFAULT_ORDER_MINING_ATTEMPTS,
)
from doppler_paths.core.constants.hooks import DOPPLER_HOOK_FLAGS, HOOK_FLAG_MASK
from doppler_paths.core.utils.tick_math import MAX_TICK, MIN_TICK

_CONFIG_ENV_KEYS = ("DOPPLER_CONFIG_PATH", "DOPPLER_CONFIG")
_DEFAULT_CONFIG_FILENAME = "config.json"


def _find_project_root(start: Path) -> Path | None:
    cur = start.resolve()
    for parent in [cur, *cur.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return None


def _project_root() -> Path | None:
    return _find_project_root(Path.cwd()) or _find_project_root(Path(__file__).parent)


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    env_path = next(
        (os.getenv(k, "").strip() for k in _CONFIG_ENV_KEYS if os.getenv(k)), ""
    )
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_absolute():
            return p
        root = _project_root()
        return (root / p) if root else p

    root = _project_root()
    return (root / _DEFAULT_CONFIG_FILENAME) if root else Path(_DEFAULT_CONFIG_FILENAME)


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    try:
        return json.loads(cfg_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in config file {cfg_path}: {exc}") from exc


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    """Replace the global CONFIG dict in-place.

    This allows code that imported CONFIG at module import time to see updates.
    """
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    """Load config from disk into the global CONFIG dict."""
    set_config(load_config_json(path, require_exists=require_exists))


def _doppler_section() -> dict[str, Any]:
    section = CONFIG.get("doppler", {})
    return section if isinstance(section, dict) else {}


@dataclass(frozen=True)
class ProtocolParams:
    """Protocol constants handed explicitly to the mining and curve code."""

    flag_mask: int = HOOK_FLAG_MASK
    required_flags: int = DOPPLER_HOOK_FLAGS
    hook_mining_attempts: int = DEFAULT_HOOK_MINING_ATTEMPTS
    order_mining_attempts: int = DEFAULT_ORDER_MINING_ATTEMPTS
    min_tick: int = MIN_TICK
    max_tick: int = MAX_TICK

    def __post_init__(self) -> None:
        if self.required_flags & ~self.flag_mask:
            raise ValueError("required_flags has bits outside flag_mask")
        if self.hook_mining_attempts <= 0 or self.order_mining_attempts <= 0:
            raise ValueError("mining attempt bounds must be positive")
        if self.min_tick >= self.max_tick:
            raise ValueError("min_tick must be below max_tick")


def _as_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value, 0)
    return int(value)


def get_protocol_params() -> ProtocolParams:
    overrides = _doppler_section().get("protocol", {}) or {}
    fields = {k: _as_int(v) for k, v in overrides.items() if k in ProtocolParams.__dataclass_fields__}
    return replace(ProtocolParams(), **fields)


def get_chain_addresses(chain_id: int) -> dict[str, str]:
    addresses = _doppler_section().get("addresses", {}) or {}
    entry = addresses.get(str(chain_id)) or addresses.get(chain_id)
    if not entry:
        raise KeyError(f"No Doppler addresses configured for chain {chain_id}")
    return dict(entry)
