from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from loguru import logger

from doppler_paths.auction.curves import Curve, normalize_curves
from doppler_paths.auction.encoder import (
    CreateParams,
    DynamicPoolInit,
    derc20_constructor_args,
    doppler_hook_constructor_args,
    encode_dynamic_pool_data,
    encode_governance_data,
    encode_migration_data,
    encode_multicurve_pool_data,
    encode_static_pool_data,
    encode_token_data,
    governance_factory_address,
    migrator_address,
    token_factory_address,
    vesting_allocation,
)
from doppler_paths.auction.schedule import build_schedule
from doppler_paths.auction.types import (
    ContractBytecodes,
    CreateDynamicAuctionParams,
    CreateMulticurveParams,
    CreateStaticAuctionParams,
    DopplerAddresses,
    LaunchParams,
    StandardToken,
)
from doppler_paths.core.config import ProtocolParams, get_protocol_params
from doppler_paths.core.constants.base import DEFAULT_START_TIME_OFFSET, TICK_SPACINGS
from doppler_paths.core.utils.create2 import (
    SALT_BYTES,
    compute_pool_id,
    init_code_hash,
    sort_currencies,
)
from doppler_paths.core.utils.ordering import is_token0_expected
from doppler_paths.core.utils.tick_math import check_tick
from doppler_paths.mining.flag_miner import mine_hook_and_token
from doppler_paths.mining.order_miner import Clock, mine_ordering

# Simulates Airlock.create for a fully-built payload and returns the asset address.
AssetSimulator = Callable[[CreateParams], Awaitable[str]]

_EMPTY_SALT = b"\x00" * SALT_BYTES


@dataclass(frozen=True)
class DynamicAuctionPlan:
    create_params: CreateParams
    hook: str
    token: str
    pool_id: str
    gamma: int
    is_token0: bool
    starting_time: int
    ending_time: int
    attempts: int


@dataclass(frozen=True)
class OrderedAuctionPlan:
    create_params: CreateParams
    token: str
    is_token0: bool
    attempts: int
    curves: tuple[Curve, ...] = ()


class AuctionFactory:
    """Builds ``Airlock.create`` payloads for static, dynamic and multicurve launches.

    Nothing here signs or sends transactions; callers submit
    ``plan.create_params.calldata()`` through their own wallet stack.
    """

    def __init__(
        self,
        addresses: DopplerAddresses,
        *,
        bytecodes: ContractBytecodes | None = None,
        protocol: ProtocolParams | None = None,
        clock: Clock = time.monotonic_ns,
    ):
        self.addresses = addresses
        self.bytecodes = bytecodes
        self.protocol = protocol if protocol is not None else get_protocol_params()
        self.clock = clock
        self.logger = logger.bind(factory=self.__class__.__name__)

    def _base_create_params(
        self,
        params: LaunchParams,
        *,
        pool_initializer: str,
        pool_initializer_data: bytes,
    ) -> CreateParams:
        allocation = vesting_allocation(params.sale, params.vesting, params.user_address)
        return CreateParams(
            initial_supply=params.sale.initial_supply,
            num_tokens_to_sell=params.sale.num_tokens_to_sell,
            numeraire=params.sale.numeraire,
            token_factory=token_factory_address(params.token, self.addresses),
            token_factory_data=encode_token_data(params.token, allocation),
            governance_factory=governance_factory_address(
                params.governance, self.addresses
            ),
            governance_factory_data=encode_governance_data(
                params.governance, params.token.name
            ),
            pool_initializer=pool_initializer,
            pool_initializer_data=pool_initializer_data,
            liquidity_migrator=migrator_address(params.migration, self.addresses),
            liquidity_migrator_data=encode_migration_data(params.migration),
            integrator=params.integrator,
            salt=_EMPTY_SALT,
        )

    async def _mine_ordered(
        self,
        base: CreateParams,
        params: LaunchParams,
        simulate: AssetSimulator,
        curves: tuple[Curve, ...] = (),
    ) -> OrderedAuctionPlan:
        async def predict(salt: bytes) -> str:
            return await simulate(base.with_salt(salt))

        mined = await mine_ordering(
            params.user_address,
            predict,
            params.sale.numeraire,
            max_attempts=self.protocol.order_mining_attempts,
            clock=self.clock,
        )
        return OrderedAuctionPlan(
            create_params=base.with_salt(mined.salt),
            token=mined.token,
            is_token0=is_token0_expected(params.sale.numeraire),
            attempts=mined.attempts,
            curves=curves,
        )

    # --- static ------------------------------------------------------------

    def build_static_create_params(self, params: CreateStaticAuctionParams) -> CreateParams:
        """Unsalted ``CreateParams`` for a Uniswap v3 static auction."""
        pool = params.pool
        tick_spacing = TICK_SPACINGS.get(pool.fee)
        if tick_spacing is None:
            raise ValueError(f"Unsupported fee tier {pool.fee}")
        for tick in (pool.start_tick, pool.end_tick):
            check_tick(tick, min_tick=self.protocol.min_tick, max_tick=self.protocol.max_tick)
            if tick % tick_spacing != 0:
                raise ValueError(
                    f"Pool ticks must be multiples of tick spacing {tick_spacing} "
                    f"for fee tier {pool.fee}"
                )

        if pool.beneficiaries:
            initializer = self.addresses.lockable_v3_initializer
            if not initializer:
                raise ValueError("Lockable V3 initializer is not deployed on this chain")
        else:
            initializer = self.addresses.v3_initializer

        return self._base_create_params(
            params,
            pool_initializer=initializer,
            pool_initializer_data=encode_static_pool_data(pool),
        )

    async def encode_static_auction(
        self, params: CreateStaticAuctionParams, predictor: AssetSimulator
    ) -> OrderedAuctionPlan:
        base = self.build_static_create_params(params)
        plan = await self._mine_ordered(base, params, predictor)
        self.logger.info(
            f"Static auction for {params.token.symbol}: token {plan.token} "
            f"after {plan.attempts} attempts"
        )
        return plan

    # --- multicurve --------------------------------------------------------

    def build_multicurve_create_params(
        self, params: CreateMulticurveParams
    ) -> tuple[CreateParams, tuple[Curve, ...]]:
        initializer = self.addresses.v4_multicurve_initializer
        if not initializer:
            raise ValueError("Multicurve initializer is not deployed on this chain")

        pool = params.pool
        curves = tuple(
            normalize_curves(
                [c.to_curve() for c in pool.curves],
                pool.tick_spacing,
                max_tick=self.protocol.max_tick,
            )
        )
        data = encode_multicurve_pool_data(
            fee=pool.fee,
            tick_spacing=pool.tick_spacing,
            curves=curves,
            beneficiaries=pool.beneficiaries,
        )
        base = self._base_create_params(
            params, pool_initializer=initializer, pool_initializer_data=data
        )
        return base, curves

    async def encode_multicurve(
        self, params: CreateMulticurveParams, predictor: AssetSimulator
    ) -> OrderedAuctionPlan:
        base, curves = self.build_multicurve_create_params(params)
        plan = await self._mine_ordered(base, params, predictor, curves)
        self.logger.info(
            f"Multicurve launch for {params.token.symbol}: {len(curves)} curves, "
            f"token {plan.token}"
        )
        return plan

    # --- dynamic -----------------------------------------------------------

    def _validate_dynamic(self, params: CreateDynamicAuctionParams, is_token0: bool) -> None:
        auction = params.auction
        for tick in (auction.start_tick, auction.end_tick):
            check_tick(tick, min_tick=self.protocol.min_tick, max_tick=self.protocol.max_tick)
        if is_token0 and auction.start_tick <= auction.end_tick:
            raise ValueError(
                "Start tick must be greater than end tick if base token is currency0"
            )
        if not is_token0 and auction.start_tick >= auction.end_tick:
            raise ValueError(
                "Start tick must be less than end tick if base token is currency1"
            )

    def encode_dynamic_auction(
        self,
        params: CreateDynamicAuctionParams,
        *,
        block_timestamp: int | None = None,
    ) -> DynamicAuctionPlan:
        """Mine the hook/token salt and assemble the dynamic auction payload."""
        if self.bytecodes is None:
            raise ValueError("Contract bytecodes are required to mine a dynamic auction")
        if not isinstance(params.token, StandardToken):
            raise ValueError("Dynamic auctions deploy a standard DERC20 token")

        numeraire = params.sale.numeraire
        is_token0 = is_token0_expected(numeraire)
        self._validate_dynamic(params, is_token0)

        auction = params.auction
        schedule = build_schedule(
            start_tick=auction.start_tick,
            end_tick=auction.end_tick,
            duration_seconds=auction.duration_seconds,
            epoch_length_seconds=auction.epoch_length_seconds,
            tick_spacing=params.pool.tick_spacing,
            gamma=auction.gamma,
        )

        now = int(time.time()) if block_timestamp is None else int(block_timestamp)
        starting_time = now + DEFAULT_START_TIME_OFFSET
        ending_time = starting_time + schedule.duration_seconds

        init = DynamicPoolInit(
            min_proceeds=auction.min_proceeds,
            max_proceeds=auction.max_proceeds,
            starting_time=starting_time,
            ending_time=ending_time,
            start_tick=schedule.start_tick,
            end_tick=schedule.end_tick,
            epoch_length=schedule.epoch_length_seconds,
            gamma=schedule.gamma,
            is_token0=is_token0,
            num_pd_slugs=auction.num_pd_slugs,
            fee=params.pool.fee,
            tick_spacing=params.pool.tick_spacing,
        )

        allocation = vesting_allocation(params.sale, params.vesting, params.user_address)
        token_types, token_args = derc20_constructor_args(
            params.token, params.sale, allocation, self.addresses.airlock
        )
        hook_types, hook_args = doppler_hook_constructor_args(
            init,
            pool_manager=self.addresses.pool_manager,
            num_tokens_to_sell=params.sale.num_tokens_to_sell,
            initializer=self.addresses.v4_initializer,
        )
        mined = mine_hook_and_token(
            self.addresses.doppler_deployer,
            init_code_hash(self.bytecodes.doppler_hook, hook_types, hook_args),
            self.addresses.token_factory,
            init_code_hash(self.bytecodes.derc20, token_types, token_args),
            numeraire,
            required_flags=self.protocol.required_flags,
            flag_mask=self.protocol.flag_mask,
            max_attempts=self.protocol.hook_mining_attempts,
        )

        base = self._base_create_params(
            params,
            pool_initializer=self.addresses.v4_initializer,
            pool_initializer_data=encode_dynamic_pool_data(init),
        )
        currency0, currency1 = sort_currencies(mined.token, numeraire)
        pool_id = compute_pool_id(
            currency0=currency0,
            currency1=currency1,
            fee=params.pool.fee,
            tick_spacing=params.pool.tick_spacing,
            hooks=mined.hook,
        )
        self.logger.info(
            f"Dynamic auction for {params.token.symbol}: hook {mined.hook}, "
            f"token {mined.token}, gamma {schedule.gamma}"
        )
        return DynamicAuctionPlan(
            create_params=base.with_salt(mined.salt),
            hook=mined.hook,
            token=mined.token,
            pool_id=pool_id,
            gamma=schedule.gamma,
            is_token0=is_token0,
            starting_time=starting_time,
            ending_time=ending_time,
            attempts=mined.attempts,
        )
