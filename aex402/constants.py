"""
Protocol constants for the AeX402 StableSwap program.

Values mirror the on-chain program; discriminators live in the program
profile (`aex402/data/program.yaml`, see `aex402.config`).
"""

from __future__ import annotations

# Integer widths
U64_MAX: int = (1 << 64) - 1
U128_MAX: int = (1 << 128) - 1

# Pool parameters
MIN_AMP: int = 1
MAX_AMP: int = 100_000
DEFAULT_FEE_BPS: int = 30
ADMIN_FEE_PCT: int = 50
MIN_SWAP: int = 100_000
MIN_DEPOSIT: int = 100_000_000
NEWTON_ITERATIONS: int = 255
RAMP_MIN_DURATION: int = 86_400  # seconds
COMMIT_DELAY: int = 3_600  # seconds
MIGRATION_FEE_BPS: int = 1337
MAX_TOKENS: int = 8
MIN_TOKENS: int = 2

FEE_DENOMINATOR: int = 10_000
REWARD_PRECISION: int = 1_000_000_000_000  # 1e12
VIRTUAL_PRICE_PRECISION: int = 1_000_000_000_000_000_000  # 1e18

# Account sizes (allocated, not layout)
POOL_SIZE: int = 1024
NPOOL_SIZE: int = 2048

# Analytics
BLOOM_SIZE: int = 128
OHLCV_24H: int = 24
OHLCV_7D: int = 7
SLOTS_PER_HOUR: int = 9_000
SLOTS_PER_DAY: int = 216_000
PRICE_SCALE: int = 1_000_000  # candle/TWAP prices
VOLUME_UNIT: int = 1_000_000_000  # candle volume field unit

# Circuit breaker / rate limiting
CB_PRICE_DEV_BPS: int = 1_000
CB_VOLUME_MULT: int = 10
CB_COOLDOWN_SLOTS: int = 9_000
CB_AUTO_RESUME_SLOTS: int = 54_000
RL_SLOTS_PER_EPOCH: int = 750

# Governance
GOV_VOTE_SLOTS: int = 518_400
GOV_TIMELOCK_SLOTS: int = 172_800
GOV_QUORUM_BPS: int = 1_000
GOV_THRESHOLD_BPS: int = 5_000

# ML brain
ML_NUM_STATES: int = 27
ML_NUM_ACTIONS: int = 9
ML_OBS_MAX: int = 200

# Concentrated liquidity
CL_TICK_MIN: int = -500
CL_TICK_MAX: int = 500
CL_MIN_DURATION: int = 300  # seconds

# Orderbook
MAX_ORDERS: int = 64
