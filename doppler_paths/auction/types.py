from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from doppler_paths.auction.curves import Curve
from doppler_paths.core.constants.base import (
    DEAD_ADDRESS,
    DEFAULT_AUCTION_DURATION,
    DEFAULT_DN404_UNIT,
    DEFAULT_EPOCH_LENGTH,
    DEFAULT_INITIAL_PROPOSAL_THRESHOLD,
    DEFAULT_INITIAL_VOTING_DELAY,
    DEFAULT_INITIAL_VOTING_PERIOD,
    DEFAULT_PD_SLUGS,
    DEFAULT_V3_END_TICK,
    DEFAULT_V3_FEE,
    DEFAULT_V3_MAX_SHARE_TO_BE_SOLD,
    DEFAULT_V3_NUM_POSITIONS,
    DEFAULT_V3_START_TICK,
    DEFAULT_YEARLY_MINT_RATE,
)


class _Config(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class Beneficiary(_Config):
    address: str
    shares: int = Field(gt=0)


# --- token -----------------------------------------------------------------


class StandardToken(_Config):
    type: Literal["standard"] = "standard"
    name: str
    symbol: str
    token_uri: str = ""
    yearly_mint_rate: int = Field(default=DEFAULT_YEARLY_MINT_RATE, ge=0)

    @field_validator("name", "symbol")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Token name and symbol are required")
        return value


class Doppler404Token(_Config):
    type: Literal["doppler404"] = "doppler404"
    name: str
    symbol: str
    base_uri: str
    unit: int = Field(default=DEFAULT_DN404_UNIT, gt=0)

    @field_validator("name", "symbol")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Token name and symbol are required")
        return value


TokenConfig = Annotated[StandardToken | Doppler404Token, Field(discriminator="type")]


# --- migration -------------------------------------------------------------


class UniswapV2Migration(_Config):
    type: Literal["uniswapV2"] = "uniswapV2"


class UniswapV3Migration(_Config):
    type: Literal["uniswapV3"] = "uniswapV3"
    fee: int
    tick_spacing: int


class UniswapV4Migration(_Config):
    type: Literal["uniswapV4"] = "uniswapV4"
    fee: int
    tick_spacing: int
    lock_duration: int = Field(ge=0)
    beneficiaries: list[Beneficiary]


class NoOpMigration(_Config):
    type: Literal["noOp"] = "noOp"


MigrationConfig = Annotated[
    UniswapV2Migration | UniswapV3Migration | UniswapV4Migration | NoOpMigration,
    Field(discriminator="type"),
]


# --- governance ------------------------------------------------------------


class DefaultGovernance(_Config):
    type: Literal["default"] = "default"


class CustomGovernance(_Config):
    type: Literal["custom"] = "custom"
    initial_voting_delay: int = Field(default=DEFAULT_INITIAL_VOTING_DELAY, ge=0)
    initial_voting_period: int = Field(default=DEFAULT_INITIAL_VOTING_PERIOD, ge=0)
    initial_proposal_threshold: int = Field(
        default=DEFAULT_INITIAL_PROPOSAL_THRESHOLD, ge=0
    )


class NoOpGovernance(_Config):
    type: Literal["noOp"] = "noOp"


GovernanceConfig = Annotated[
    DefaultGovernance | CustomGovernance | NoOpGovernance,
    Field(discriminator="type"),
]


# --- sale / vesting --------------------------------------------------------


class SaleConfig(_Config):
    initial_supply: int = Field(gt=0)
    num_tokens_to_sell: int = Field(gt=0)
    numeraire: str

    @model_validator(mode="after")
    def _check_supply(self) -> SaleConfig:
        if self.num_tokens_to_sell > self.initial_supply:
            raise ValueError("Cannot sell more tokens than initial supply")
        return self


class VestingConfig(_Config):
    duration: int = Field(ge=0)
    recipients: list[str] | None = None
    amounts: list[int] | None = None

    @model_validator(mode="after")
    def _check_lengths(self) -> VestingConfig:
        if (self.recipients is None) != (self.amounts is None):
            raise ValueError("Vesting recipients and amounts must be given together")
        if self.recipients is not None and len(self.recipients) != len(self.amounts):
            raise ValueError("Vesting recipients and amounts must have the same length")
        return self


# --- pools -----------------------------------------------------------------


class StaticPoolConfig(_Config):
    start_tick: int = DEFAULT_V3_START_TICK
    end_tick: int = DEFAULT_V3_END_TICK
    fee: int = DEFAULT_V3_FEE
    num_positions: int = Field(default=DEFAULT_V3_NUM_POSITIONS, gt=0)
    max_share_to_be_sold: int = Field(default=DEFAULT_V3_MAX_SHARE_TO_BE_SOLD, gt=0)
    beneficiaries: list[Beneficiary] | None = None

    @model_validator(mode="after")
    def _check_ticks(self) -> StaticPoolConfig:
        if self.start_tick >= self.end_tick:
            raise ValueError("Start tick must be less than end tick")
        return self


class DynamicAuctionConfig(_Config):
    start_tick: int
    end_tick: int
    min_proceeds: int = Field(ge=0)
    max_proceeds: int = Field(gt=0)
    duration_seconds: int = DEFAULT_AUCTION_DURATION
    epoch_length_seconds: int = DEFAULT_EPOCH_LENGTH
    gamma: int | None = None
    num_pd_slugs: int = Field(default=DEFAULT_PD_SLUGS, gt=0)

    @model_validator(mode="after")
    def _check_proceeds(self) -> DynamicAuctionConfig:
        if self.min_proceeds > self.max_proceeds:
            raise ValueError("Minimum proceeds cannot exceed maximum proceeds")
        return self


class DynamicPoolConfig(_Config):
    fee: int = Field(ge=0)
    tick_spacing: int = Field(gt=0)


class CurveConfig(_Config):
    tick_lower: int
    tick_upper: int
    num_positions: int
    shares: int

    def to_curve(self) -> Curve:
        return Curve(self.tick_lower, self.tick_upper, self.num_positions, self.shares)


class MulticurvePoolConfig(_Config):
    fee: int = Field(ge=0)
    tick_spacing: int = Field(gt=0)
    curves: list[CurveConfig]
    beneficiaries: list[Beneficiary] | None = None


# --- create requests -------------------------------------------------------


class LaunchParams(_Config):
    token: TokenConfig
    sale: SaleConfig
    governance: GovernanceConfig = DefaultGovernance()
    migration: MigrationConfig
    user_address: str
    vesting: VestingConfig | None = None
    integrator: str = DEAD_ADDRESS

    @model_validator(mode="after")
    def _check_vesting(self):
        if self.vesting is not None and self.vesting.recipients is None:
            if self.sale.initial_supply - self.sale.num_tokens_to_sell <= 0:
                raise ValueError("No tokens available for vesting")
        return self


class CreateStaticAuctionParams(LaunchParams):
    kind: Literal["static"] = "static"
    pool: StaticPoolConfig = StaticPoolConfig()


class CreateDynamicAuctionParams(LaunchParams):
    kind: Literal["dynamic"] = "dynamic"
    auction: DynamicAuctionConfig
    pool: DynamicPoolConfig


class CreateMulticurveParams(LaunchParams):
    kind: Literal["multicurve"] = "multicurve"
    pool: MulticurvePoolConfig


# --- deployment ------------------------------------------------------------


class DopplerAddresses(_Config):
    """Contract addresses for one chain deployment."""

    airlock: str
    token_factory: str
    v3_initializer: str
    v4_initializer: str
    doppler_deployer: str
    pool_manager: str
    governance_factory: str
    v2_migrator: str
    v3_migrator: str
    v4_migrator: str
    lockable_v3_initializer: str | None = None
    v4_multicurve_initializer: str | None = None
    doppler404_factory: str | None = None
    no_op_migrator: str | None = None
    no_op_governance_factory: str | None = None

    @classmethod
    def from_config(cls, entry: dict[str, str]) -> DopplerAddresses:
        """Accept either snake_case or the camelCase keys used in deployment files."""
        aliases = {
            "tokenFactory": "token_factory",
            "v3Initializer": "v3_initializer",
            "v4Initializer": "v4_initializer",
            "dopplerDeployer": "doppler_deployer",
            "poolManager": "pool_manager",
            "governanceFactory": "governance_factory",
            "v2Migrator": "v2_migrator",
            "v3Migrator": "v3_migrator",
            "v4Migrator": "v4_migrator",
            "lockableV3Initializer": "lockable_v3_initializer",
            "v4MulticurveInitializer": "v4_multicurve_initializer",
            "doppler404Factory": "doppler404_factory",
            "noOpMigrator": "no_op_migrator",
            "noOpGovernanceFactory": "no_op_governance_factory",
        }
        fields = set(cls.model_fields)
        data = {aliases.get(k, k): v for k, v in entry.items()}
        return cls(**{k: v for k, v in data.items() if k in fields})


class ContractBytecodes(_Config):
    """Creation bytecode for contracts whose addresses are mined locally."""

    doppler_hook: str
    derc20: str
