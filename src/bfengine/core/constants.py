"""Constants used throughout the fee engine."""

# Calendar
MONTHS_PER_YEAR: int = 12

# Percentages are expressed as 0..100 at the API edge and 0..1 internally
PERCENT: float = 100.0

# Custody outlook defaults
DEFAULT_PROJECTION_MONTHS: int = 12
DEFAULT_MONTHLY_GROWTH_RATE: float = 0.015  # 1.5% per month
LARGER_PORTFOLIO_FACTOR: float = 1.5  # "50% larger" alternative
NEAR_EXEMPT_LIMIT_FRACTION: float = 0.8  # warn when within 80% of the exempt amount
JUST_ABOVE_EXEMPT_FRACTION: float = 1.2

# Custody impact bands (percentage of gross return eaten by custody)
HIGH_CUSTODY_IMPACT_PCT: float = 15.0
MODERATE_CUSTODY_IMPACT_PCT: float = 5.0

# Custody threshold strategy triggers
LARGE_EXEMPT_AMOUNT: float = 500_000.0
HIGH_MINIMUM_ANNUAL_CUSTODY: float = 10_000.0

# Minimum investment recommendation bands
LOW_MINIMUM_INVESTMENT: float = 10_000.0
HIGH_MINIMUM_INVESTMENT: float = 100_000.0

# Trade history columns
HISTORY_COLUMNS: list[str] = [
    "operation_type",
    "amount",
    "commission_paid",
    "iva_paid",
    "trade_date",
    "instrument_id",
]

# Month key format for breakdowns
MONTH_FORMAT: str = "%Y-%m"

# Environment variables read by EngineConfig.from_env
ENV_SCHEDULES_PATH: str = "BFENGINE_SCHEDULES_PATH"
ENV_DEFAULT_BROKER: str = "BFENGINE_DEFAULT_BROKER"
ENV_LOG_LEVEL: str = "BFENGINE_LOG_LEVEL"

DEFAULT_BROKER_ID: str = "galicia"
DEFAULT_LOG_LEVEL: str = "WARNING"
