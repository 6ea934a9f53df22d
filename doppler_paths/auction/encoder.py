"""ABI encoding of the Airlock ``create`` payload and its nested factory data.

Every sub-config is a tagged union, so each encoder is a single ``match`` on
the variant. The byte layouts mirror the Solidity structs the factories decode.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any

from eth_abi import encode as abi_encode
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from doppler_paths.auction.curves import Curve
from doppler_paths.auction.types import (
    Beneficiary,
    CustomGovernance,
    DefaultGovernance,
    Doppler404Token,
    DopplerAddresses,
    GovernanceConfig,
    MigrationConfig,
    NoOpGovernance,
    NoOpMigration,
    SaleConfig,
    StandardToken,
    StaticPoolConfig,
    TokenConfig,
    UniswapV2Migration,
    UniswapV3Migration,
    UniswapV4Migration,
    VestingConfig,
)
from doppler_paths.core.constants.airlock_abi import CREATE_PARAMS_TUPLE_TYPE
from doppler_paths.core.constants.base import (
    DEFAULT_INITIAL_PROPOSAL_THRESHOLD,
    DEFAULT_INITIAL_VOTING_DELAY,
    DEFAULT_INITIAL_VOTING_PERIOD,
    WAD,
)
from doppler_paths.core.utils.create2 import address_to_int, salt_to_bytes

CREATE_SELECTOR = function_signature_to_4byte_selector(
    f"create({CREATE_PARAMS_TUPLE_TYPE})"
)

BENEFICIARY_TUPLE = "(address,uint96)"
CURVE_TUPLE = "(int24,int24,uint16,uint256)"

DYNAMIC_POOL_TYPES = [
    "uint256",  # minimumProceeds
    "uint256",  # maximumProceeds
    "uint256",  # startingTime
    "uint256",  # endingTime
    "int24",  # startingTick
    "int24",  # endingTick
    "uint256",  # epochLength
    "int24",  # gamma
    "bool",  # isToken0
    "uint256",  # numPDSlugs
    "uint24",  # lpFee
    "int24",  # tickSpacing
]

DOPPLER_HOOK_CONSTRUCTOR_TYPES = [
    "address",  # poolManager
    "uint256",  # numTokensToSell
    "uint256",  # minimumProceeds
    "uint256",  # maximumProceeds
    "uint256",  # startingTime
    "uint256",  # endingTime
    "int24",  # startingTick
    "int24",  # endingTick
    "uint256",  # epochLength
    "int24",  # gamma
    "bool",  # isToken0
    "uint256",  # numPDSlugs
    "address",  # initializer
]

DERC20_CONSTRUCTOR_TYPES = [
    "string",  # name
    "string",  # symbol
    "uint256",  # initialSupply
    "address",  # recipient
    "address",  # owner
    "uint256",  # yearlyMintRate
    "uint256",  # vestingDuration
    "address[]",  # recipients
    "uint256[]",  # amounts
    "string",  # tokenURI
]


@dataclass(frozen=True)
class VestingAllocation:
    duration: int
    recipients: tuple[str, ...]
    amounts: tuple[int, ...]


@dataclass(frozen=True)
class DynamicPoolInit:
    min_proceeds: int
    max_proceeds: int
    starting_time: int
    ending_time: int
    start_tick: int
    end_tick: int
    epoch_length: int
    gamma: int
    is_token0: bool
    num_pd_slugs: int
    fee: int
    tick_spacing: int

    def as_list(self) -> list[Any]:
        return [
            self.min_proceeds,
            self.max_proceeds,
            self.starting_time,
            self.ending_time,
            self.start_tick,
            self.end_tick,
            self.epoch_length,
            self.gamma,
            self.is_token0,
            self.num_pd_slugs,
            self.fee,
            self.tick_spacing,
        ]


@dataclass(frozen=True)
class CreateParams:
    """The opaque ``CreateParams`` struct handed to ``Airlock.create``."""

    initial_supply: int
    num_tokens_to_sell: int
    numeraire: str
    token_factory: str
    token_factory_data: bytes
    governance_factory: str
    governance_factory_data: bytes
    pool_initializer: str
    pool_initializer_data: bytes
    liquidity_migrator: str
    liquidity_migrator_data: bytes
    integrator: str
    salt: bytes

    def with_salt(self, salt: bytes | int | str) -> CreateParams:
        return replace(self, salt=salt_to_bytes(salt))

    def as_tuple(self) -> tuple:
        return (
            int(self.initial_supply),
            int(self.num_tokens_to_sell),
            to_checksum_address(self.numeraire),
            to_checksum_address(self.token_factory),
            bytes(self.token_factory_data),
            to_checksum_address(self.governance_factory),
            bytes(self.governance_factory_data),
            to_checksum_address(self.pool_initializer),
            bytes(self.pool_initializer_data),
            to_checksum_address(self.liquidity_migrator),
            bytes(self.liquidity_migrator_data),
            to_checksum_address(self.integrator),
            salt_to_bytes(self.salt),
        )

    def encode(self) -> bytes:
        return abi_encode([CREATE_PARAMS_TUPLE_TYPE], [self.as_tuple()])

    def calldata(self) -> str:
        return "0x" + (CREATE_SELECTOR + self.encode()).hex()


def sort_beneficiaries(
    beneficiaries: Sequence[Beneficiary], total: int = WAD
) -> list[tuple[str, int]]:
    """Beneficiaries as ``(address, shares)`` ascending by address.

    Shares are WAD-denominated and must add up to ``total``.
    """
    if not beneficiaries:
        raise ValueError("At least one beneficiary is required")
    seen: set[int] = set()
    for b in beneficiaries:
        key = address_to_int(b.address)
        if key in seen:
            raise ValueError(f"Duplicate beneficiary {b.address}")
        seen.add(key)
    share_sum = sum(b.shares for b in beneficiaries)
    if share_sum != total:
        raise ValueError(f"Beneficiary shares must sum to {total}, but got {share_sum}")
    ordered = sorted(beneficiaries, key=lambda b: address_to_int(b.address))
    return [(to_checksum_address(b.address), int(b.shares)) for b in ordered]


def encode_migration_data(config: MigrationConfig) -> bytes:
    match config:
        case UniswapV2Migration() | NoOpMigration():
            return b""
        case UniswapV3Migration(fee=fee, tick_spacing=tick_spacing):
            return abi_encode(["uint24", "int24"], [fee, tick_spacing])
        case UniswapV4Migration():
            return abi_encode(
                ["uint24", "int24", "uint32", f"{BENEFICIARY_TUPLE}[]"],
                [
                    config.fee,
                    config.tick_spacing,
                    config.lock_duration,
                    sort_beneficiaries(config.beneficiaries),
                ],
            )
        case _:
            raise ValueError(f"Unknown migration type: {getattr(config, 'type', config)}")


def migrator_address(config: MigrationConfig, addresses: DopplerAddresses) -> str:
    match config:
        case UniswapV2Migration():
            return addresses.v2_migrator
        case UniswapV3Migration():
            return addresses.v3_migrator
        case UniswapV4Migration():
            return addresses.v4_migrator
        case NoOpMigration():
            if not addresses.no_op_migrator:
                raise ValueError("No-op migrator is not deployed on this chain")
            return addresses.no_op_migrator
        case _:
            raise ValueError(f"Unknown migration type: {getattr(config, 'type', config)}")


def encode_governance_data(config: GovernanceConfig, token_name: str) -> bytes:
    match config:
        case DefaultGovernance():
            values = (
                DEFAULT_INITIAL_VOTING_DELAY,
                DEFAULT_INITIAL_VOTING_PERIOD,
                DEFAULT_INITIAL_PROPOSAL_THRESHOLD,
            )
        case CustomGovernance():
            values = (
                config.initial_voting_delay,
                config.initial_voting_period,
                config.initial_proposal_threshold,
            )
        case NoOpGovernance():
            return b""
        case _:
            raise ValueError(f"Unknown governance type: {getattr(config, 'type', config)}")
    return abi_encode(["string", "uint48", "uint32", "uint256"], [token_name, *values])


def governance_factory_address(
    config: GovernanceConfig, addresses: DopplerAddresses
) -> str:
    match config:
        case NoOpGovernance():
            if not addresses.no_op_governance_factory:
                raise ValueError("No-op governance factory is not deployed on this chain")
            return addresses.no_op_governance_factory
        case DefaultGovernance() | CustomGovernance():
            return addresses.governance_factory
        case _:
            raise ValueError(f"Unknown governance type: {getattr(config, 'type', config)}")


def vesting_allocation(
    sale: SaleConfig, vesting: VestingConfig | None, user_address: str
) -> VestingAllocation:
    """Resolve vesting recipients, defaulting to the whole unsold supply for the user."""
    if vesting is None:
        return VestingAllocation(duration=0, recipients=(), amounts=())

    if vesting.recipients is None:
        vested = sale.initial_supply - sale.num_tokens_to_sell
        if vested <= 0:
            raise ValueError("No tokens available for vesting")
        return VestingAllocation(
            duration=vesting.duration,
            recipients=(to_checksum_address(user_address),),
            amounts=(vested,),
        )

    total = sum(vesting.amounts)
    if total > sale.initial_supply - sale.num_tokens_to_sell:
        raise ValueError("Vested amounts exceed the tokens not being sold")
    return VestingAllocation(
        duration=vesting.duration,
        recipients=tuple(to_checksum_address(r) for r in vesting.recipients),
        amounts=tuple(int(a) for a in vesting.amounts),
    )


def encode_token_data(token: TokenConfig, allocation: VestingAllocation) -> bytes:
    match token:
        case StandardToken():
            return abi_encode(
                ["string", "string", "uint256", "uint256", "address[]", "uint256[]", "string"],
                [
                    token.name,
                    token.symbol,
                    token.yearly_mint_rate,
                    allocation.duration,
                    list(allocation.recipients),
                    list(allocation.amounts),
                    token.token_uri,
                ],
            )
        case Doppler404Token():
            return abi_encode(
                ["string", "string", "string", "uint256"],
                [token.name, token.symbol, token.base_uri, token.unit],
            )
        case _:
            raise ValueError(f"Unknown token type: {getattr(token, 'type', token)}")


def token_factory_address(token: TokenConfig, addresses: DopplerAddresses) -> str:
    match token:
        case StandardToken():
            return addresses.token_factory
        case Doppler404Token():
            if not addresses.doppler404_factory:
                raise ValueError("Doppler404 factory is not deployed on this chain")
            return addresses.doppler404_factory
        case _:
            raise ValueError(f"Unknown token type: {getattr(token, 'type', token)}")


def derc20_constructor_args(
    token: StandardToken,
    sale: SaleConfig,
    allocation: VestingAllocation,
    airlock: str,
) -> tuple[list[str], list[Any]]:
    """Constructor types/values of the DERC20 token as deployed by the token factory."""
    owner = to_checksum_address(airlock)
    return DERC20_CONSTRUCTOR_TYPES, [
        token.name,
        token.symbol,
        sale.initial_supply,
        owner,
        owner,
        token.yearly_mint_rate,
        allocation.duration,
        list(allocation.recipients),
        list(allocation.amounts),
        token.token_uri,
    ]


def doppler_hook_constructor_args(
    init: DynamicPoolInit,
    *,
    pool_manager: str,
    num_tokens_to_sell: int,
    initializer: str,
) -> tuple[list[str], list[Any]]:
    return DOPPLER_HOOK_CONSTRUCTOR_TYPES, [
        to_checksum_address(pool_manager),
        num_tokens_to_sell,
        init.min_proceeds,
        init.max_proceeds,
        init.starting_time,
        init.ending_time,
        init.start_tick,
        init.end_tick,
        init.epoch_length,
        init.gamma,
        init.is_token0,
        init.num_pd_slugs,
        to_checksum_address(initializer),
    ]


def encode_static_pool_data(pool: StaticPoolConfig) -> bytes:
    values: list[Any] = [
        pool.fee,
        pool.start_tick,
        pool.end_tick,
        pool.num_positions,
        pool.max_share_to_be_sold,
    ]
    types = ["uint24", "int24", "int24", "uint16", "uint256"]
    if pool.beneficiaries:
        types.append(f"{BENEFICIARY_TUPLE}[]")
        values.append(sort_beneficiaries(pool.beneficiaries))
    return abi_encode([f"({','.join(types)})"], [tuple(values)])


def encode_dynamic_pool_data(init: DynamicPoolInit) -> bytes:
    return abi_encode(DYNAMIC_POOL_TYPES, init.as_list())


def encode_multicurve_pool_data(
    *,
    fee: int,
    tick_spacing: int,
    curves: Sequence[Curve],
    beneficiaries: Sequence[Beneficiary] | None = None,
) -> bytes:
    sorted_beneficiaries = sort_beneficiaries(beneficiaries) if beneficiaries else []
    return abi_encode(
        [f"(uint24,int24,{CURVE_TUPLE}[],{BENEFICIARY_TUPLE}[])"],
        [
            (
                fee,
                tick_spacing,
                [c.as_tuple() for c in curves],
                sorted_beneficiaries,
            )
        ],
    )
