"""Vanity-prefix salt mining for asset (and optionally hook) addresses."""

from __future__ import annotations

import re
from dataclasses import dataclass

from loguru import logger

from doppler_paths.core.constants.base import DEFAULT_HOOK_MINING_ATTEMPTS
from doppler_paths.core.errors import MiningExhausted
from doppler_paths.core.utils.create2 import compute_create2_address, salt_to_bytes

_HEX_RE = re.compile(r"^[0-9a-f]+$")


@dataclass(frozen=True)
class HookPrefixTarget:
    deployer: str
    init_code_hash: str | bytes
    prefix: str | None = None


@dataclass(frozen=True)
class PrefixMatch:
    salt: bytes
    token: str
    attempts: int
    hook: str | None = None


def normalize_prefix(prefix: str) -> str:
    normalized = prefix.strip().lower()
    if normalized.startswith("0x"):
        normalized = normalized[2:]
    if not normalized:
        raise ValueError("prefix must contain at least one hex character")
    if len(normalized) > 40:
        raise ValueError("prefix cannot exceed 40 hex characters")
    if not _HEX_RE.match(normalized):
        raise ValueError("prefix must be a hexadecimal string")
    return normalized


def mine_token_prefix(
    prefix: str,
    token_deployer: str,
    token_init_code_hash: str | bytes,
    *,
    max_attempts: int = DEFAULT_HOOK_MINING_ATTEMPTS,
    start_salt: int = 0,
    hook: HookPrefixTarget | None = None,
) -> PrefixMatch:
    if max_attempts <= 0:
        raise ValueError("max_attempts must be positive")
    if start_salt < 0:
        raise ValueError("start_salt cannot be negative")

    token_prefix = normalize_prefix(prefix)
    hook_prefix = normalize_prefix(hook.prefix) if hook and hook.prefix else None

    for offset in range(max_attempts):
        salt = salt_to_bytes(start_salt + offset)
        token = compute_create2_address(token_deployer, salt, token_init_code_hash)
        if not token[2:].lower().startswith(token_prefix):
            continue

        hook_address = None
        if hook is not None:
            hook_address = compute_create2_address(hook.deployer, salt, hook.init_code_hash)
            if hook_prefix and not hook_address[2:].lower().startswith(hook_prefix):
                continue

        logger.debug(f"Prefix {token_prefix} matched {token} after {offset + 1} attempts")
        return PrefixMatch(salt=salt, token=token, attempts=offset + 1, hook=hook_address)

    raise MiningExhausted(
        max_attempts,
        f"Could not find salt matching prefix {prefix} within {max_attempts} attempts",
    )
