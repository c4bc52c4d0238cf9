"""
Binary layouts of the program's accounts.

All layouts are packed little-endian with explicit alignment filler. Every
account starts with an 8-byte discriminator, read as a little-endian u64.
Field names match the attribute names of the snapshot dataclasses in
`aex402.state.accounts`.
"""

from __future__ import annotations

from construct import (
    Array,
    Bytes,
    Flag,
    Int8ul,
    Int16sl,
    Int16ul,
    Int32sl,
    Int32ul,
    Int64sl,
    Int64ul,
    Padding,
    Struct,
)

from ..constants import BLOOM_SIZE, MAX_ORDERS, MAX_TOKENS, ML_NUM_ACTIONS, ML_NUM_STATES, OHLCV_7D, OHLCV_24H

PUBKEY = Bytes(32)

CANDLE_LAYOUT = Struct(
    "open" / Int32ul,
    "high_d" / Int16ul,
    "low_d" / Int16ul,
    "close_d" / Int16sl,
    "volume" / Int16ul,
)

POOL_LAYOUT = Struct(
    "disc" / Int64ul,
    "authority" / PUBKEY,
    "mint0" / PUBKEY,
    "mint1" / PUBKEY,
    "vault0" / PUBKEY,
    "vault1" / PUBKEY,
    "lp_mint" / PUBKEY,
    "amp" / Int64ul,
    "init_amp" / Int64ul,
    "target_amp" / Int64ul,
    "ramp_start" / Int64sl,
    "ramp_stop" / Int64sl,
    "fee_bps" / Int64ul,
    "admin_fee_pct" / Int64ul,
    "bal0" / Int64ul,
    "bal1" / Int64ul,
    "lp_supply" / Int64ul,
    "admin_fee0" / Int64ul,
    "admin_fee1" / Int64ul,
    "vol0" / Int64ul,
    "vol1" / Int64ul,
    "paused" / Flag,
    "bump" / Int8ul,
    "v0_bump" / Int8ul,
    "v1_bump" / Int8ul,
    "lp_bump" / Int8ul,
    Padding(3),
    "pending_auth" / PUBKEY,
    "auth_time" / Int64sl,
    "pending_amp" / Int64ul,
    "amp_time" / Int64sl,
    "trade_count" / Int64ul,
    "trade_sum" / Int64ul,
    "max_price" / Int32ul,
    "min_price" / Int32ul,
    "hour_slot" / Int32ul,
    "day_slot" / Int32ul,
    "hour_idx" / Int8ul,
    "day_idx" / Int8ul,
    Padding(6),
    "bloom" / Bytes(BLOOM_SIZE),
    "hours" / Array(OHLCV_24H, CANDLE_LAYOUT),
    "days" / Array(OHLCV_7D, CANDLE_LAYOUT),
)

NPOOL_LAYOUT = Struct(
    "disc" / Int64ul,
    "authority" / PUBKEY,
    "n_tokens" / Int8ul,
    "paused" / Flag,
    "bump" / Int8ul,
    Padding(5),
    "amp" / Int64ul,
    "fee_bps" / Int64ul,
    "admin_fee_pct" / Int64ul,
    "lp_supply" / Int64ul,
    "mints" / Array(MAX_TOKENS, PUBKEY),
    "vaults" / Array(MAX_TOKENS, PUBKEY),
    "lp_mint" / PUBKEY,
    "balances" / Array(MAX_TOKENS, Int64ul),
    "admin_fees" / Array(MAX_TOKENS, Int64ul),
    "total_volume" / Int64ul,
    "trade_count" / Int64ul,
    "last_trade_slot" / Int64ul,
)

FARM_LAYOUT = Struct(
    "disc" / Int64ul,
    "pool" / PUBKEY,
    "reward_mint" / PUBKEY,
    "reward_rate" / Int64ul,
    "start_time" / Int64sl,
    "end_time" / Int64sl,
    "total_staked" / Int64ul,
    "acc_reward" / Int64ul,
    "last_update" / Int64sl,
)

USER_FARM_LAYOUT = Struct(
    "disc" / Int64ul,
    "owner" / PUBKEY,
    "farm" / PUBKEY,
    "staked" / Int64ul,
    "reward_debt" / Int64ul,
    "lock_end" / Int64sl,
)

LOTTERY_LAYOUT = Struct(
    "disc" / Int64ul,
    "pool" / PUBKEY,
    "authority" / PUBKEY,
    "lottery_vault" / PUBKEY,
    "ticket_price" / Int64ul,
    "total_tickets" / Int64ul,
    "prize_pool" / Int64ul,
    "end_time" / Int64sl,
    "winning_ticket" / Int64ul,
    "drawn" / Flag,
    "claimed" / Flag,
    Padding(6),
)

LOTTERY_ENTRY_LAYOUT = Struct(
    "disc" / Int64ul,
    "owner" / PUBKEY,
    "lottery" / PUBKEY,
    "ticket_start" / Int64ul,
    "ticket_count" / Int64ul,
)

REGISTRY_LAYOUT = Struct(
    "disc" / Int64ul,
    "authority" / PUBKEY,
    "pending_auth" / PUBKEY,
    "auth_time" / Int64sl,
    "count" / Int32ul,
    Padding(4),
)

GOV_PROPOSAL_LAYOUT = Struct(
    "disc" / Int64ul,
    "pool" / PUBKEY,
    "proposer" / PUBKEY,
    "prop_type" / Int8ul,
    "status" / Int8ul,
    Padding(6),
    "value" / Int64ul,
    "votes_for" / Int64ul,
    "votes_against" / Int64ul,
    "lp_snapshot" / Int64ul,
    "start_slot" / Int64sl,
    "end_slot" / Int64sl,
    "exec_after" / Int64sl,
    "description" / Bytes(64),
)

GOV_VOTE_LAYOUT = Struct(
    "disc" / Int64ul,
    "proposal" / PUBKEY,
    "voter" / PUBKEY,
    "amount" / Int64ul,
    "vote_for" / Flag,
    Padding(7),
)

CL_POOL_LAYOUT = Struct(
    "disc" / Int64ul,
    "pool" / PUBKEY,
    "authority" / PUBKEY,
    "tick_lower" / Int16sl,
    "tick_upper" / Int16sl,
    "current_tick" / Int16sl,
    "initialized" / Flag,
    Padding(1),
    "sqrt_price" / Int64ul,
    "liquidity" / Int64ul,
    "fee_growth_0" / Int64ul,
    "fee_growth_1" / Int64ul,
    "tick_bitmap" / Bytes(128),
    "reserved" / Bytes(256),
)

CL_POSITION_LAYOUT = Struct(
    "disc" / Int64ul,
    "owner" / PUBKEY,
    "cl_pool" / PUBKEY,
    "tick_lower" / Int16sl,
    "tick_upper" / Int16sl,
    Padding(4),
    "liquidity" / Int64ul,
    "fee_inside_0" / Int64ul,
    "fee_inside_1" / Int64ul,
    "tokens_owed_0" / Int64ul,
    "tokens_owed_1" / Int64ul,
    "created_at" / Int64sl,
)

ORDER_LAYOUT = Struct(
    "owner" / PUBKEY,
    "price" / Int64ul,
    "amount" / Int64ul,
    "expiry" / Int64sl,
    "order_type" / Int8ul,
    "active" / Flag,
    Padding(6),
)

ORDERBOOK_LAYOUT = Struct(
    "disc" / Int64ul,
    "pool" / PUBKEY,
    "authority" / PUBKEY,
    "order_count" / Int8ul,
    Padding(7),
    "orders" / Array(MAX_ORDERS, ORDER_LAYOUT),
)

ML_OBSERVATION_LAYOUT = Struct(
    "price" / Int32ul,
    "volume" / Int32ul,
    "tvl" / Int32ul,
    "slot" / Int32ul,
    "fee_bps" / Int16ul,
    "amp" / Int16ul,
    "is_new" / Flag,
    "direction" / Int8ul,
    Padding(2),
)

ML_BRAIN_LAYOUT = Struct(
    "disc" / Int64ul,
    "pool" / PUBKEY,
    "authority" / PUBKEY,
    "enabled" / Flag,
    "auto_apply" / Flag,
    "last_action" / Int8ul,
    "last_state" / Int8ul,
    "is_stable" / Flag,
    Padding(3),
    "obs_count" / Int16ul,
    "train_count" / Int16ul,
    "epoch" / Int32ul,
    "last_train_slot" / Int32ul,
    "last_action_slot" / Int32ul,
    "cur_alpha" / Int16ul,
    "cur_epsilon" / Int16ul,
    "min_fee" / Int16ul,
    "max_fee" / Int16ul,
    "min_amp" / Int16ul,
    "max_amp" / Int16ul,
    "fee_step" / Int16ul,
    "amp_step" / Int16ul,
    Padding(4),
    "min_farm_rate" / Int64ul,
    "max_farm_rate" / Int64ul,
    "farm_step" / Int64ul,
    "min_lot_price" / Int64ul,
    "max_lot_price" / Int64ul,
    "lot_step" / Int64ul,
    "q_table" / Array(ML_NUM_STATES, Array(ML_NUM_ACTIONS, Int32sl)),
    "obs_head" / Int16ul,
    "obs_tail" / Int16ul,
    Padding(4),
)

CANDLE_SIZE = CANDLE_LAYOUT.sizeof()  # 12
ORDER_SIZE = ORDER_LAYOUT.sizeof()  # 64
ML_OBSERVATION_SIZE = ML_OBSERVATION_LAYOUT.sizeof()  # 24
REGISTRY_POOL_ENTRY_SIZE = 32
