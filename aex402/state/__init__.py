"""
Account codec: layouts, candles/TWAP and typed snapshots
"""

from .candles import Candle, CandleDecoded, TwapResult, TwapWindow, decode_candle, parse_candle
from .accounts import (
    CLPool,
    CLPosition,
    Farm,
    GovProposal,
    GovVote,
    Lottery,
    LotteryEntry,
    MLAction,
    MLBrain,
    MLObservation,
    NPool,
    Order,
    Orderbook,
    OrderType,
    Pool,
    Registry,
    TokenArray,
    UserFarm,
    account_type_name,
    detect_account_type,
    encode_account,
    parse_account,
    parse_ml_observations,
    parse_registry_pools,
)

__all__ = [
    "Candle",
    "CandleDecoded",
    "TwapResult",
    "TwapWindow",
    "decode_candle",
    "parse_candle",
    "CLPool",
    "CLPosition",
    "Farm",
    "GovProposal",
    "GovVote",
    "Lottery",
    "LotteryEntry",
    "MLAction",
    "MLBrain",
    "MLObservation",
    "NPool",
    "Order",
    "Orderbook",
    "OrderType",
    "Pool",
    "Registry",
    "TokenArray",
    "UserFarm",
    "account_type_name",
    "detect_account_type",
    "encode_account",
    "parse_account",
    "parse_ml_observations",
    "parse_registry_pools",
]
