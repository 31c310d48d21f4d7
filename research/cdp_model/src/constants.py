# Fixed point scale factors
BPS_SCALE = 10_000  # Basis points (100% = 10000)
RATIO_SCALE = 10_000  # Collateral ratio, two implied decimals of percent (100% = 10000)

# Asset precision
COLLATERAL_DECIMALS = 18
STABLECOIN_DECIMALS = 18
PRICE_FEED_DECIMALS = 8  # $1 = 100_000_000

# Ratio constants
MIN_MINT_RATIO = 100_000              # 1000% (10x collateralisation)
DEFAULT_LIQ_THRESHOLD = 30_000        # 300%, keeper side, must stay below the mint floor

# Fee constants
CLOSE_FEE_BPS = 500                   # 5% of collateral burned on close

# Keeper constants
DEFAULT_REBALANCE_COLLATERAL_MAX = 1000 * 10**COLLATERAL_DECIMALS
DEFAULT_MAX_PRICE_AGE = 0             # seconds, 0 disables the staleness guard

# Feed metadata
PRICE_FEED_VERSION = 1

# Token metadata
STABLECOIN_NAME = "Collateralized USD"
STABLECOIN_SYMBOL = "cUSD"
COLLATERAL_NAME = "Meme Token"
COLLATERAL_SYMBOL = "MEME"

# Integer bounds (uint256)
UINT256_MAX = 2**256 - 1
