# src/config/settings.py

from src.config.env import APP_ENV, LOG_LEVEL

APP_VERSION = "0.1.0"

# --- Live data constants ---
# CoinGecko - free public price API, Coinbase spot price used as fallback
COINGECKO_SIMPLE_PRICE_URL = "https://api.coingecko.com/api/v3/simple/price"
COINBASE_SPOT_PRICE_URL = "https://api.coinbase.com/v2/prices/spot"

# Requests / caching config
LIVE_DATA_REQUEST_TIMEOUT_S = 8
LIVE_DATA_CACHE_TTL_S = (
    60 * 60 * 24 if APP_ENV == "dev" else 5 * 60
)  # 24h in dev, 5m in prod

# Optional: identify yourself nicely to public APIs
LIVE_DATA_USER_AGENT = "BtcHomeProjector/0.1 (contact: you@example.com)"

# --- Logging ---

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LOG_LEVEL = LOG_LEVEL

# --- Bitcoin defaults (used when live data fails) ---

DEFAULT_BTC_PRICE_USD = 50000.0
DEFAULT_BTC_AMOUNT = 1.0
DEFAULT_PRICE_MODEL = "power-law"
DEFAULT_MODEL_CONFIDENCE = 1.0
DEFAULT_DCA_AMOUNT_USD = 0.0
DEFAULT_DCA_PERIOD = "monthly"
DEFAULT_CAP_GAINS_TAX_RATE = 0.20

# Confidence acts as an exponent on the model growth multiplier
MODEL_CONFIDENCE_MIN = 0.5
MODEL_CONFIDENCE_MAX = 1.5
CAP_GAINS_TAX_RATE_MAX = 0.5

# --- Price model coefficients ---

# Network age (years since the 2009-01-03 genesis block) at the model
# reference date, 2025-01-01. Kept fixed so projections stay deterministic.
POWER_LAW_NETWORK_AGE_YEARS = 16.0
POWER_LAW_EXPONENT = 5.6
SAYLOR_ANNUAL_MULTIPLIER = 1.25
LOG_REGRESSION_SLOPE = 0.5
HALVING_INTERVAL_YEARS = 4
# ~1.4x per year once the S2F ratio doubles every halving
S2F_PRICE_ELASTICITY = 1.94
METCALFE_USER_GROWTH = 0.20
METCALFE_VALUE_DAMPENER = 0.92

# --- Home defaults ---

DEFAULT_HOME_PRICE_USD = 500000.0
DEFAULT_DOWN_PCT = 0.20
DEFAULT_MORTGAGE_RATE = 0.065
DEFAULT_MORTGAGE_TERM_YEARS = 30
DEFAULT_PROPERTY_TAX_RATE = 0.012
DEFAULT_HOME_INSURANCE_ANNUAL_USD = 1200.0
DEFAULT_HOA_MONTHLY_USD = 0.0
DEFAULT_APPRECIATION_RATE = 0.03
DEFAULT_MAINTENANCE_RATE = 0.01
DEFAULT_CLOSING_COSTS_PCT = 0.03

# --- Rent defaults ---

DEFAULT_MONTHLY_RENT_USD = 2500.0
DEFAULT_RENT_GROWTH_RATE = 0.03
DEFAULT_RENTERS_INSURANCE_ANNUAL_USD = 300.0
DEFAULT_MOVING_FREQUENCY_YEARS = 3
DEFAULT_MOVING_COST_PER_MOVE_USD = 2000.0

# --- Horizon / timing ---

DEFAULT_TIMEFRAME_YEARS = 10
MAX_TIMEFRAME_YEARS = 50
DEFAULT_PURCHASE_TIMING = "now"

# Smallest price used as a divisor when sizing a BTC sale
MIN_PRICE_DIVISOR_USD = 1e-9

# --- Chart styling ---

BITCOIN_ORANGE_HEX = "#F7931A"
STRATEGY_COLORS = {
    "hold": BITCOIN_ORANGE_HEX,
    "buy": "#1f77b4",
    "rent": "#2ca02c",
    "opportunity": "#d62728",
}
STRATEGY_LABELS = {
    "hold": "Hold all BTC",
    "buy": "Buy a house",
    "rent": "Rent forever",
}
LINE_STYLE_OPPORTUNITY = "dot"
CHART_VIEW_MODES = ("absolute", "relative", "percentage")
DEFAULT_CHART_VIEW = "absolute"
CHART_SERIES = ("hold", "buy", "rent", "opportunity")
CHART_SERIES_LABELS = {**STRATEGY_LABELS, "opportunity": "Opportunity cost"}
LINE_Y_PAD_PCT = 0.10
