from __future__ import annotations

import pytest
from eth_abi import decode
from eth_utils import to_checksum_address

from doppler_paths.auction.curves import Curve
from doppler_paths.auction.encoder import (
    CREATE_SELECTOR,
    DYNAMIC_POOL_TYPES,
    CreateParams,
    DynamicPoolInit,
    encode_dynamic_pool_data,
    encode_governance_data,
    encode_migration_data,
    encode_multicurve_pool_data,
    encode_static_pool_data,
    encode_token_data,
    governance_factory_address,
    migrator_address,
    sort_beneficiaries,
    token_factory_address,
    vesting_allocation,
)
from doppler_paths.auction.types import (
    Beneficiary,
    CustomGovernance,
    DefaultGovernance,
    Doppler404Token,
    DopplerAddresses,
    NoOpGovernance,
    NoOpMigration,
    SaleConfig,
    StandardToken,
    StaticPoolConfig,
    UniswapV2Migration,
    UniswapV3Migration,
    UniswapV4Migration,
    VestingConfig,
)
from doppler_paths.core.constants.base import WAD

ADDR_A = to_checksum_address("0x00000000000000000000000000000000000000a1")
ADDR_B = to_checksum_address("0x00000000000000000000000000000000000000b2")
USER = "0x1111111111111111111111111111111111111111"
NUMERAIRE = "0x4200000000000000000000000000000000000006"


def _addr(n: int) -> str:
    return to_checksum_address("0x" + f"{n:040x}")


@pytest.fixture
def addresses() -> DopplerAddresses:
    return DopplerAddresses(
        airlock=_addr(1),
        token_factory=_addr(2),
        v3_initializer=_addr(3),
        v4_initializer=_addr(4),
        doppler_deployer=_addr(5),
        pool_manager=_addr(6),
        governance_factory=_addr(7),
        v2_migrator=_addr(8),
        v3_migrator=_addr(9),
        v4_migrator=_addr(10),
        no_op_governance_factory=_addr(11),
    )


@pytest.fixture
def sale() -> SaleConfig:
    return SaleConfig(
        initial_supply=1_000 * WAD, num_tokens_to_sell=900 * WAD, numeraire=NUMERAIRE
    )


class TestBeneficiaries:
    def test_sorted_ascending_by_address(self):
        result = sort_beneficiaries(
            [
                Beneficiary(address=ADDR_B, shares=WAD // 4),
                Beneficiary(address=ADDR_A, shares=3 * WAD // 4),
            ]
        )
        assert [r[0] for r in result] == [
            to_checksum_address(ADDR_A),
            to_checksum_address(ADDR_B),
        ]
        assert result[0][1] == 3 * WAD // 4

    def test_shares_must_sum_to_wad(self):
        with pytest.raises(ValueError, match="must sum to"):
            sort_beneficiaries([Beneficiary(address=ADDR_A, shares=WAD - 1)])

    def test_empty_and_duplicates_rejected(self):
        with pytest.raises(ValueError, match="At least one"):
            sort_beneficiaries([])
        with pytest.raises(ValueError, match="Duplicate"):
            sort_beneficiaries(
                [
                    Beneficiary(address=ADDR_A, shares=WAD // 2),
                    Beneficiary(address=ADDR_A.lower(), shares=WAD // 2),
                ]
            )


class TestMigrationData:
    def test_v2_and_noop_are_empty(self):
        assert encode_migration_data(UniswapV2Migration()) == b""
        assert encode_migration_data(NoOpMigration()) == b""

    def test_v3_layout(self):
        data = encode_migration_data(UniswapV3Migration(fee=3000, tick_spacing=60))
        assert decode(["uint24", "int24"], data) == (3000, 60)

    def test_v4_layout_sorts_beneficiaries(self):
        config = UniswapV4Migration(
            fee=3000,
            tick_spacing=60,
            lock_duration=365 * 86_400,
            beneficiaries=[
                Beneficiary(address=ADDR_B, shares=WAD // 2),
                Beneficiary(address=ADDR_A, shares=WAD // 2),
            ],
        )
        fee, spacing, lock, beneficiaries = decode(
            ["uint24", "int24", "uint32", "(address,uint96)[]"],
            encode_migration_data(config),
        )
        assert (fee, spacing, lock) == (3000, 60, 365 * 86_400)
        assert [to_checksum_address(b[0]) for b in beneficiaries] == [ADDR_A, ADDR_B]

    def test_migrator_selected_per_variant(self, addresses):
        assert migrator_address(UniswapV2Migration(), addresses) == addresses.v2_migrator
        assert (
            migrator_address(UniswapV3Migration(fee=500, tick_spacing=10), addresses)
            == addresses.v3_migrator
        )
        with pytest.raises(ValueError, match="No-op migrator"):
            migrator_address(NoOpMigration(), addresses)


class TestGovernanceData:
    def test_default_values(self):
        data = encode_governance_data(DefaultGovernance(), "Test Token")
        assert decode(["string", "uint48", "uint32", "uint256"], data) == (
            "Test Token",
            7200,
            50400,
            0,
        )

    def test_custom_values(self):
        data = encode_governance_data(
            CustomGovernance(
                initial_voting_delay=1,
                initial_voting_period=2,
                initial_proposal_threshold=3,
            ),
            "Gov",
        )
        assert decode(["string", "uint48", "uint32", "uint256"], data) == ("Gov", 1, 2, 3)

    def test_noop(self, addresses):
        assert encode_governance_data(NoOpGovernance(), "x") == b""
        assert (
            governance_factory_address(NoOpGovernance(), addresses)
            == addresses.no_op_governance_factory
        )
        assert (
            governance_factory_address(DefaultGovernance(), addresses)
            == addresses.governance_factory
        )


class TestTokenData:
    def test_vesting_defaults_to_user_and_unsold_supply(self, sale):
        allocation = vesting_allocation(sale, VestingConfig(duration=86_400), USER)
        assert allocation.recipients == (to_checksum_address(USER),)
        assert allocation.amounts == (100 * WAD,)
        assert allocation.duration == 86_400

    def test_no_vesting(self, sale):
        allocation = vesting_allocation(sale, None, USER)
        assert allocation.recipients == ()
        assert allocation.amounts == ()
        assert allocation.duration == 0

    def test_explicit_vesting_cannot_exceed_unsold(self, sale):
        vesting = VestingConfig(
            duration=10, recipients=[ADDR_A, ADDR_B], amounts=[60 * WAD, 50 * WAD]
        )
        with pytest.raises(ValueError, match="exceed"):
            vesting_allocation(sale, vesting, USER)

    def test_standard_token_layout(self, sale):
        token = StandardToken(name="Test", symbol="TST", token_uri="ipfs://x")
        allocation = vesting_allocation(sale, VestingConfig(duration=5), USER)
        decoded = decode(
            ["string", "string", "uint256", "uint256", "address[]", "uint256[]", "string"],
            encode_token_data(token, allocation),
        )
        assert decoded == (
            "Test",
            "TST",
            2 * 10**16,
            5,
            (USER,),
            (100 * WAD,),
            "ipfs://x",
        )

    def test_doppler404_layout_and_factory(self, addresses):
        token = Doppler404Token(name="NFT", symbol="N", base_uri="ipfs://base/")
        data = encode_token_data(token, vesting_allocation(
            SaleConfig(initial_supply=10, num_tokens_to_sell=10, numeraire=NUMERAIRE),
            None,
            USER,
        ))
        assert decode(["string", "string", "string", "uint256"], data) == (
            "NFT",
            "N",
            "ipfs://base/",
            1000,
        )
        with pytest.raises(ValueError, match="Doppler404 factory"):
            token_factory_address(token, addresses)

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="required"):
            StandardToken(name="  ", symbol="X")


class TestPoolData:
    def test_static_layout(self):
        pool = StaticPoolConfig(start_tick=175_000, end_tick=225_000, fee=10_000)
        decoded = decode(
            ["(uint24,int24,int24,uint16,uint256)"], encode_static_pool_data(pool)
        )[0]
        assert decoded == (10_000, 175_000, 225_000, 15, 35 * 10**16)

    def test_static_lockable_appends_beneficiaries(self):
        pool = StaticPoolConfig(
            beneficiaries=[Beneficiary(address=ADDR_A, shares=WAD)],
        )
        decoded = decode(
            ["(uint24,int24,int24,uint16,uint256,(address,uint96)[])"],
            encode_static_pool_data(pool),
        )[0]
        address, shares = decoded[-1][0]
        assert (to_checksum_address(address), shares) == (ADDR_A, WAD)

    def test_dynamic_layout_has_twelve_fields(self):
        init = DynamicPoolInit(
            min_proceeds=1,
            max_proceeds=2,
            starting_time=1_000,
            ending_time=2_000,
            start_tick=-60_000,
            end_tick=-120_000,
            epoch_length=400,
            gamma=120,
            is_token0=True,
            num_pd_slugs=5,
            fee=3000,
            tick_spacing=60,
        )
        decoded = decode(DYNAMIC_POOL_TYPES, encode_dynamic_pool_data(init))
        assert len(decoded) == 12
        assert list(decoded) == init.as_list()

    def test_multicurve_layout(self):
        curves = [Curve(0, 240_000, 10, WAD // 2), Curve(240_000, 887_220, 10, WAD // 2)]
        data = encode_multicurve_pool_data(fee=0, tick_spacing=60, curves=curves)
        fee, spacing, decoded_curves, beneficiaries = decode(
            ["(uint24,int24,(int24,int24,uint16,uint256)[],(address,uint96)[])"], data
        )[0]
        assert (fee, spacing) == (0, 60)
        assert list(decoded_curves) == [c.as_tuple() for c in curves]
        assert beneficiaries == ()


class TestCreateParams:
    def _params(self, salt: bytes = b"\x00" * 32) -> CreateParams:
        return CreateParams(
            initial_supply=1_000,
            num_tokens_to_sell=900,
            numeraire=NUMERAIRE,
            token_factory=_addr(2),
            token_factory_data=b"\x01",
            governance_factory=_addr(7),
            governance_factory_data=b"",
            pool_initializer=_addr(3),
            pool_initializer_data=b"\x02\x03",
            liquidity_migrator=_addr(8),
            liquidity_migrator_data=b"",
            integrator=_addr(0xDEAD),
            salt=salt,
        )

    def test_encode_roundtrips_through_tuple_type(self):
        params = self._params(salt=bytes(range(32)))
        decoded = decode(
            ["(uint256,uint256,address,address,bytes,address,bytes,address,bytes,address,bytes,address,bytes32)"],
            params.encode(),
        )[0]
        assert decoded[0] == 1_000
        assert decoded[8] == b"\x02\x03"
        assert decoded[-1] == bytes(range(32))

    def test_calldata_starts_with_create_selector(self):
        calldata = self._params().calldata()
        assert calldata.startswith("0x" + CREATE_SELECTOR.hex())
        assert len(CREATE_SELECTOR) == 4

    def test_with_salt_returns_new_value(self):
        params = self._params()
        updated = params.with_salt(7)
        assert updated.salt == (7).to_bytes(32, "big")
        assert params.salt == b"\x00" * 32
