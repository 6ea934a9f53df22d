from __future__ import annotations

from abc import ABC
from typing import Any

from eth_utils import to_checksum_address
from loguru import logger

from doppler_paths.core.config import get_chain_addresses


class BaseAdapter(ABC):
    adapter_type: str | None = None

    def __init__(
        self,
        name: str,
        config: dict[str, Any] | None = None,
        *,
        chain_id: int | None = None,
    ):
        self.name = name
        self.config = config or {}
        self.chain_id = int(chain_id) if chain_id is not None else None
        self.logger = logger.bind(adapter=self.__class__.__name__)

    def resolve_contract(self, key: str, explicit: str | None = None) -> str:
        """Contract address from the argument, the adapter config, or the chain config."""
        address = explicit or self.config.get(key)
        if not address and self.chain_id is not None:
            address = get_chain_addresses(self.chain_id).get(key)
        if not address:
            raise ValueError(f"{self.__class__.__name__} requires a {key} address")
        return to_checksum_address(address)

    async def close(self) -> None:
        pass
