from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from eth_utils import to_checksum_address
from web3 import AsyncWeb3

from doppler_paths.auction.encoder import CreateParams
from doppler_paths.auction.factory import AssetSimulator
from doppler_paths.core.adapters.BaseAdapter import BaseAdapter
from doppler_paths.core.constants.airlock_abi import AIRLOCK_ABI
from doppler_paths.mining.order_miner import TokenPredictor


@dataclass(frozen=True)
class CreateSimulation:
    asset: str
    pool: str
    governance: str
    timelock: str
    migration_pool: str


class AirlockAdapter(BaseAdapter):
    """Read-only access to ``Airlock.create`` for address prediction.

    The launched asset address depends on factory state, so static and
    multicurve launches predict it by simulating ``create`` via ``eth_call``.
    """

    adapter_type = "AIRLOCK"

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        *,
        chain_id: int | None = None,
        web3: AsyncWeb3 | None = None,
        address: str | None = None,
    ) -> None:
        super().__init__("airlock_adapter", config, chain_id=chain_id)

        if web3 is None:
            raise ValueError("AirlockAdapter requires web3 instance")
        self.web3 = web3
        self.contract = self.web3.eth.contract(
            address=self.resolve_contract("airlock", address), abi=AIRLOCK_ABI
        )

    async def simulate_create(
        self,
        create_params: CreateParams,
        account: str,
        *,
        block_identifier: str | int | None = None,
    ) -> CreateSimulation:
        call_fn = self.contract.functions.create(create_params.as_tuple()).call
        tx = {"from": to_checksum_address(account)}
        if block_identifier is None:
            result = await call_fn(tx)
        else:
            result = await call_fn(tx, block_identifier=block_identifier)

        asset, pool, governance, timelock, migration_pool = result
        return CreateSimulation(
            asset=to_checksum_address(asset),
            pool=to_checksum_address(pool),
            governance=to_checksum_address(governance),
            timelock=to_checksum_address(timelock),
            migration_pool=to_checksum_address(migration_pool),
        )

    async def predict_asset(self, create_params: CreateParams, account: str) -> str:
        simulation = await self.simulate_create(create_params, account)
        self.logger.debug(
            f"Simulated create with salt 0x{bytes(create_params.salt).hex()}: "
            f"asset {simulation.asset}"
        )
        return simulation.asset

    def simulator(self, account: str) -> AssetSimulator:
        async def simulate(create_params: CreateParams) -> str:
            return await self.predict_asset(create_params, account)

        return simulate

    def token_predictor(
        self, build: Callable[[bytes], CreateParams], account: str
    ) -> TokenPredictor:
        """Adapt a salt -> ``CreateParams`` builder into a salt -> asset predictor."""

        async def predict(salt: bytes) -> str:
            return await self.predict_asset(build(salt), account)

        return predict
