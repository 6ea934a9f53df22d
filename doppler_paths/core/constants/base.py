ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
DEAD_ADDRESS = "0x000000000000000000000000000000000000dEaD"

WAD = 10**18

SECONDS_PER_DAY = 86_400

# Fee tier -> tick spacing (Uniswap v3 defaults)
TICK_SPACINGS = {100: 1, 500: 10, 3000: 60, 10000: 200}

# Mining bounds
DEFAULT_HOOK_MINING_ATTEMPTS = 1_000_000
DEFAULT_ORDER_MINING_ATTEMPTS = 256

# Dynamic auction defaults
DEFAULT_EPOCH_LENGTH = 43_200  # 12 hours
DEFAULT_AUCTION_DURATION = 7 * SECONDS_PER_DAY
DEFAULT_START_TIME_OFFSET = 30
DEFAULT_PD_SLUGS = 5

# Static auction defaults
DEFAULT_V3_START_TICK = 175_000
DEFAULT_V3_END_TICK = 225_000
DEFAULT_V3_NUM_POSITIONS = 15
DEFAULT_V3_FEE = 10_000
DEFAULT_V3_MAX_SHARE_TO_BE_SOLD = 35 * 10**16  # 35% in WAD

DEFAULT_YEARLY_MINT_RATE = 2 * 10**16  # 2% in WAD
DEFAULT_DN404_UNIT = 1000

# Governance defaults (seconds / blocks as expected by the governance factory)
DEFAULT_INITIAL_VOTING_DELAY = 7_200
DEFAULT_INITIAL_VOTING_PERIOD = 50_400
DEFAULT_INITIAL_PROPOSAL_THRESHOLD = 0
