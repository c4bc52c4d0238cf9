"""
Typed account snapshots and the account codec.

Decoding rules (all kinds):
- the buffer must be at least the kind's required size;
- bytes 0..8, read as a little-endian u64, must equal the kind's configured tag;
- the remaining bytes map field-by-field onto the layout in `layouts.py`.

Any violation yields None. A snapshot is never partially populated.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum, unique
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar, Union

from construct import Construct, ConstructError

from ..config import AccountKind, ProgramConfig, resolve_config
from ..constants import (
    BLOOM_SIZE,
    CL_MIN_DURATION,
    FEE_DENOMINATOR,
    MAX_ORDERS,
    MAX_TOKENS,
    MIN_TOKENS,
    ML_NUM_ACTIONS,
    ML_NUM_STATES,
    NPOOL_SIZE,
    OHLCV_7D,
    OHLCV_24H,
    POOL_SIZE,
)
from ..core import governance
from ..core.amp import get_current_amp
from ..core.governance import ProposalStatus, ProposalType
from ..errors import LayoutError
from .candles import Candle
from .layouts import (
    CL_POOL_LAYOUT,
    CL_POSITION_LAYOUT,
    FARM_LAYOUT,
    GOV_PROPOSAL_LAYOUT,
    GOV_VOTE_LAYOUT,
    LOTTERY_ENTRY_LAYOUT,
    LOTTERY_LAYOUT,
    ML_BRAIN_LAYOUT,
    ML_OBSERVATION_LAYOUT,
    ML_OBSERVATION_SIZE,
    NPOOL_LAYOUT,
    ORDERBOOK_LAYOUT,
    POOL_LAYOUT,
    REGISTRY_LAYOUT,
    REGISTRY_POOL_ENTRY_SIZE,
    USER_FARM_LAYOUT,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ZERO_KEY = bytes(32)


@unique
class OrderType(IntEnum):
    BUY = 0
    SELL = 1


@unique
class MLAction(IntEnum):
    HOLD = 0
    FEE_UP = 1
    FEE_DOWN = 2
    AMP_UP = 3
    AMP_DOWN = 4
    FARM_UP = 5
    FARM_DOWN = 6
    LOT_UP = 7
    LOT_DOWN = 8


@dataclass(frozen=True)
class TokenArray(Generic[T]):
    """
    Fixed-capacity per-token array bounded by a token count.

    `raw` holds every stored slot (up to MAX_TOKENS); iteration, `len()` and
    indexing only see the first `count` entries.
    """

    raw: Tuple[T, ...]
    count: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", tuple(self.raw))
        if len(self.raw) > MAX_TOKENS:
            raise ValueError(f"at most {MAX_TOKENS} slots, got {len(self.raw)}")
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise TypeError("count must be an int")
        if not (0 <= self.count <= len(self.raw)):
            raise ValueError(f"count {self.count} exceeds stored slots {len(self.raw)}")

    @classmethod
    def of(cls, items: Sequence[T]) -> "TokenArray[T]":
        return cls(raw=tuple(items), count=len(items))

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[T]:
        return iter(self.raw[: self.count])

    def __getitem__(self, idx: Union[int, slice]) -> Any:
        return self.raw[: self.count][idx]

    def to_tuple(self) -> Tuple[T, ...]:
        return self.raw[: self.count]

    def padded(self, fill: T) -> Tuple[T, ...]:
        return self.raw + (fill,) * (MAX_TOKENS - len(self.raw))


def _candles(n: int) -> Tuple[Candle, ...]:
    return tuple(Candle() for _ in range(n))


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Pool:
    authority: bytes = ZERO_KEY
    mint0: bytes = ZERO_KEY
    mint1: bytes = ZERO_KEY
    vault0: bytes = ZERO_KEY
    vault1: bytes = ZERO_KEY
    lp_mint: bytes = ZERO_KEY
    amp: int = 0
    init_amp: int = 0
    target_amp: int = 0
    ramp_start: int = 0
    ramp_stop: int = 0
    fee_bps: int = 0
    admin_fee_pct: int = 0
    bal0: int = 0
    bal1: int = 0
    lp_supply: int = 0
    admin_fee0: int = 0
    admin_fee1: int = 0
    vol0: int = 0
    vol1: int = 0
    paused: bool = False
    bump: int = 0
    v0_bump: int = 0
    v1_bump: int = 0
    lp_bump: int = 0
    pending_auth: bytes = ZERO_KEY
    auth_time: int = 0
    pending_amp: int = 0
    amp_time: int = 0
    trade_count: int = 0
    trade_sum: int = 0
    max_price: int = 0
    min_price: int = 0
    hour_slot: int = 0
    day_slot: int = 0
    hour_idx: int = 0
    day_idx: int = 0
    bloom: bytes = bytes(BLOOM_SIZE)
    hours: Tuple[Candle, ...] = field(default_factory=lambda: _candles(OHLCV_24H))
    days: Tuple[Candle, ...] = field(default_factory=lambda: _candles(OHLCV_7D))

    def is_paused(self) -> bool:
        return self.paused

    def get_amp(self, now: int) -> int:
        """Effective amplification at `now`, following any active ramp."""
        return get_current_amp(self.amp, self.target_amp, self.ramp_start, self.ramp_stop, now)

    @property
    def balances(self) -> Tuple[int, int]:
        return (self.bal0, self.bal1)


@dataclass(frozen=True)
class NPool:
    authority: bytes = ZERO_KEY
    n_tokens: int = MIN_TOKENS
    paused: bool = False
    bump: int = 0
    amp: int = 0
    fee_bps: int = 0
    admin_fee_pct: int = 0
    lp_supply: int = 0
    mints: TokenArray[bytes] = field(default_factory=lambda: TokenArray.of((ZERO_KEY,) * MIN_TOKENS))
    vaults: TokenArray[bytes] = field(default_factory=lambda: TokenArray.of((ZERO_KEY,) * MIN_TOKENS))
    lp_mint: bytes = ZERO_KEY
    balances: TokenArray[int] = field(default_factory=lambda: TokenArray.of((0,) * MIN_TOKENS))
    admin_fees: TokenArray[int] = field(default_factory=lambda: TokenArray.of((0,) * MIN_TOKENS))
    total_volume: int = 0
    trade_count: int = 0
    last_trade_slot: int = 0

    def __post_init__(self) -> None:
        if not (MIN_TOKENS <= self.n_tokens <= MAX_TOKENS):
            raise ValueError(f"n_tokens must be in [{MIN_TOKENS}, {MAX_TOKENS}]: {self.n_tokens}")
        for name in ("mints", "vaults", "balances", "admin_fees"):
            arr = getattr(self, name)
            if arr.count != self.n_tokens:
                raise ValueError(f"{name} holds {arr.count} entries, expected {self.n_tokens}")

    def is_paused(self) -> bool:
        return self.paused


@dataclass(frozen=True)
class Farm:
    pool: bytes = ZERO_KEY
    reward_mint: bytes = ZERO_KEY
    reward_rate: int = 0
    start_time: int = 0
    end_time: int = 0
    total_staked: int = 0
    acc_reward: int = 0
    last_update: int = 0

    def is_active(self, now: int) -> bool:
        return self.start_time <= now <= self.end_time


@dataclass(frozen=True)
class UserFarm:
    owner: bytes = ZERO_KEY
    farm: bytes = ZERO_KEY
    staked: int = 0
    reward_debt: int = 0
    lock_end: int = 0

    def is_locked(self, now: int) -> bool:
        return now < self.lock_end


@dataclass(frozen=True)
class Lottery:
    pool: bytes = ZERO_KEY
    authority: bytes = ZERO_KEY
    lottery_vault: bytes = ZERO_KEY
    ticket_price: int = 0
    total_tickets: int = 0
    prize_pool: int = 0
    end_time: int = 0
    winning_ticket: int = 0
    drawn: bool = False
    claimed: bool = False

    def is_drawn(self) -> bool:
        return self.drawn

    def is_claimed(self) -> bool:
        return self.claimed

    def is_ended(self, now: int) -> bool:
        return now >= self.end_time


@dataclass(frozen=True)
class LotteryEntry:
    owner: bytes = ZERO_KEY
    lottery: bytes = ZERO_KEY
    ticket_start: int = 0
    ticket_count: int = 0

    def is_winner(self, winning_ticket: int) -> bool:
        """True iff `winning_ticket` falls in [ticket_start, ticket_start + ticket_count)."""
        return self.ticket_start <= winning_ticket < self.ticket_start + self.ticket_count


@dataclass(frozen=True)
class Registry:
    authority: bytes = ZERO_KEY
    pending_auth: bytes = ZERO_KEY
    auth_time: int = 0
    count: int = 0


@dataclass(frozen=True)
class GovProposal:
    pool: bytes = ZERO_KEY
    proposer: bytes = ZERO_KEY
    prop_type: ProposalType = ProposalType.FEE_CHANGE
    status: ProposalStatus = ProposalStatus.VOTING
    value: int = 0
    votes_for: int = 0
    votes_against: int = 0
    lp_snapshot: int = 0
    start_slot: int = 0
    end_slot: int = 0
    exec_after: int = 0
    description: bytes = bytes(64)

    @property
    def description_text(self) -> str:
        return self.description.rstrip(b"\x00").decode("utf-8", errors="replace")

    def can_execute(self, now_slot: int) -> bool:
        return governance.can_execute(self, now_slot)

    def approval_rate(self) -> float:
        return governance.approval_rate(self)

    def quorum_rate(self) -> float:
        return governance.quorum_rate(self)

    def has_quorum(self) -> bool:
        return governance.has_quorum(self)

    def is_approved(self) -> bool:
        return governance.is_approved(self)

    def is_terminal(self) -> bool:
        return governance.is_terminal(self.status)


@dataclass(frozen=True)
class GovVote:
    proposal: bytes = ZERO_KEY
    voter: bytes = ZERO_KEY
    amount: int = 0
    vote_for: bool = False

    def voted_for(self) -> bool:
        return self.vote_for


@dataclass(frozen=True)
class CLPool:
    pool: bytes = ZERO_KEY
    authority: bytes = ZERO_KEY
    tick_lower: int = 0
    tick_upper: int = 0
    current_tick: int = 0
    initialized: bool = False
    sqrt_price: int = 0
    liquidity: int = 0
    fee_growth_0: int = 0
    fee_growth_1: int = 0
    tick_bitmap: bytes = bytes(128)
    reserved: bytes = bytes(256)

    def is_initialized(self) -> bool:
        return self.initialized


@dataclass(frozen=True)
class CLPosition:
    owner: bytes = ZERO_KEY
    cl_pool: bytes = ZERO_KEY
    tick_lower: int = 0
    tick_upper: int = 0
    liquidity: int = 0
    fee_inside_0: int = 0
    fee_inside_1: int = 0
    tokens_owed_0: int = 0
    tokens_owed_1: int = 0
    created_at: int = 0

    def can_collect_fees(self, now: int) -> bool:
        # positions younger than CL_MIN_DURATION cannot collect (JIT protection)
        return now - self.created_at >= CL_MIN_DURATION


@dataclass(frozen=True)
class Order:
    owner: bytes = ZERO_KEY
    price: int = 0
    amount: int = 0
    expiry: int = 0
    order_type: Union[OrderType, int] = OrderType.BUY
    active: bool = False

    def is_active(self) -> bool:
        return self.active

    def is_expired(self, now: int) -> bool:
        return now >= self.expiry

    def is_buy(self) -> bool:
        return self.order_type is OrderType.BUY

    def is_sell(self) -> bool:
        return self.order_type is OrderType.SELL


@dataclass(frozen=True)
class Orderbook:
    pool: bytes = ZERO_KEY
    authority: bytes = ZERO_KEY
    order_count: int = 0
    orders: Tuple[Order, ...] = field(default_factory=lambda: tuple(Order() for _ in range(MAX_ORDERS)))

    def active_orders(self) -> Tuple[Order, ...]:
        return tuple(o for o in self.orders if o.active)


@dataclass(frozen=True)
class MLObservation:
    price: int = 0
    volume: int = 0
    tvl: int = 0
    slot: int = 0
    fee_bps: int = 0
    amp: int = 0
    is_new: bool = False
    direction: int = 0


@dataclass(frozen=True)
class MLBrain:
    pool: bytes = ZERO_KEY
    authority: bytes = ZERO_KEY
    enabled: bool = False
    auto_apply: bool = False
    last_action: int = 0
    last_state: int = 0
    is_stable: bool = False
    obs_count: int = 0
    train_count: int = 0
    epoch: int = 0
    last_train_slot: int = 0
    last_action_slot: int = 0
    cur_alpha: int = 0
    cur_epsilon: int = 0
    min_fee: int = 0
    max_fee: int = 0
    min_amp: int = 0
    max_amp: int = 0
    fee_step: int = 0
    amp_step: int = 0
    min_farm_rate: int = 0
    max_farm_rate: int = 0
    farm_step: int = 0
    min_lot_price: int = 0
    max_lot_price: int = 0
    lot_step: int = 0
    q_table: Tuple[Tuple[int, ...], ...] = field(
        default_factory=lambda: tuple((0,) * ML_NUM_ACTIONS for _ in range(ML_NUM_STATES))
    )
    obs_head: int = 0
    obs_tail: int = 0

    def is_enabled(self) -> bool:
        return self.enabled

    def is_auto_apply(self) -> bool:
        return self.auto_apply

    def best_action(self, state: int) -> MLAction:
        """Greedy action for `state` (lowest action index wins ties)."""
        if not (0 <= state < ML_NUM_STATES):
            raise ValueError(f"state must be in [0, {ML_NUM_STATES}): {state}")
        row = self.q_table[state]
        best = max(range(ML_NUM_ACTIONS), key=lambda a: (row[a], -a))
        return MLAction(best)


Account = Union[
    Pool, NPool, Farm, UserFarm, Lottery, LotteryEntry, Registry,
    GovProposal, GovVote, CLPool, CLPosition, Orderbook, MLBrain,
]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _pick(container: Any, cls: type) -> Dict[str, Any]:
    return {f.name: container[f.name] for f in dataclasses.fields(cls)}


def _candle(c: Any) -> Candle:
    return Candle(**_pick(c, Candle))


def _pool(c: Any) -> Optional[Pool]:
    if c.fee_bps > FEE_DENOMINATOR:
        logger.debug("rejecting pool: fee_bps=%d", c.fee_bps)
        return None
    kw = _pick(c, Pool)
    kw["hours"] = tuple(_candle(x) for x in c.hours)
    kw["days"] = tuple(_candle(x) for x in c.days)
    return Pool(**kw)


def _npool(c: Any) -> Optional[NPool]:
    n = c.n_tokens
    if not (MIN_TOKENS <= n <= MAX_TOKENS):
        logger.debug("rejecting npool: n_tokens=%d", n)
        return None
    if c.fee_bps > FEE_DENOMINATOR:
        logger.debug("rejecting npool: fee_bps=%d", c.fee_bps)
        return None
    kw = _pick(c, NPool)
    for name in ("mints", "vaults", "balances", "admin_fees"):
        kw[name] = TokenArray(raw=tuple(c[name]), count=n)
    return NPool(**kw)


def _gov_proposal(c: Any) -> Optional[GovProposal]:
    kw = _pick(c, GovProposal)
    try:
        kw["prop_type"] = ProposalType(c.prop_type)
        kw["status"] = ProposalStatus(c.status)
    except ValueError:
        logger.debug("rejecting proposal: prop_type=%d status=%d", c.prop_type, c.status)
        return None
    return GovProposal(**kw)


def _order(c: Any) -> Optional[Order]:
    kw = _pick(c, Order)
    try:
        kw["order_type"] = OrderType(c.order_type)
    except ValueError:
        if c.active:
            return None
        # free slots may hold stale bytes; keep the raw value
        kw["order_type"] = c.order_type
    return Order(**kw)


def _orderbook(c: Any) -> Optional[Orderbook]:
    kw = _pick(c, Orderbook)
    orders = tuple(_order(o) for o in c.orders)
    if any(o is None for o in orders):
        logger.debug("rejecting orderbook: invalid order type in an active slot")
        return None
    kw["orders"] = orders
    return Orderbook(**kw)


def _ml_brain(c: Any) -> MLBrain:
    kw = _pick(c, MLBrain)
    kw["q_table"] = tuple(tuple(row) for row in c.q_table)
    return MLBrain(**kw)


def _plain(cls: Type[T]) -> Callable[[Any], T]:
    def build(c: Any) -> T:
        return cls(**_pick(c, cls))

    return build


@dataclass(frozen=True)
class _AccountSpec:
    kind: AccountKind
    cls: type
    layout: Construct
    size: int
    build: Callable[[Any], Any]


def _spec(kind: AccountKind, cls: type, layout: Construct, build: Callable[[Any], Any], size: Optional[int] = None) -> _AccountSpec:
    return _AccountSpec(kind=kind, cls=cls, layout=layout, size=layout.sizeof() if size is None else size, build=build)


_SPECS: Dict[AccountKind, _AccountSpec] = {
    s.kind: s
    for s in (
        _spec(AccountKind.POOL, Pool, POOL_LAYOUT, _pool, POOL_SIZE),
        _spec(AccountKind.NPOOL, NPool, NPOOL_LAYOUT, _npool, NPOOL_SIZE),
        _spec(AccountKind.FARM, Farm, FARM_LAYOUT, _plain(Farm)),
        _spec(AccountKind.USER_FARM, UserFarm, USER_FARM_LAYOUT, _plain(UserFarm)),
        _spec(AccountKind.LOTTERY, Lottery, LOTTERY_LAYOUT, _plain(Lottery)),
        _spec(AccountKind.LOTTERY_ENTRY, LotteryEntry, LOTTERY_ENTRY_LAYOUT, _plain(LotteryEntry)),
        _spec(AccountKind.REGISTRY, Registry, REGISTRY_LAYOUT, _plain(Registry)),
        _spec(AccountKind.GOV_PROPOSAL, GovProposal, GOV_PROPOSAL_LAYOUT, _gov_proposal),
        _spec(AccountKind.GOV_VOTE, GovVote, GOV_VOTE_LAYOUT, _plain(GovVote)),
        _spec(AccountKind.CL_POOL, CLPool, CL_POOL_LAYOUT, _plain(CLPool)),
        _spec(AccountKind.CL_POSITION, CLPosition, CL_POSITION_LAYOUT, _plain(CLPosition)),
        _spec(AccountKind.ORDERBOOK, Orderbook, ORDERBOOK_LAYOUT, _orderbook),
        _spec(AccountKind.ML_BRAIN, MLBrain, ML_BRAIN_LAYOUT, _ml_brain),
    )
}

_SPECS_BY_CLASS: Dict[type, _AccountSpec] = {s.cls: s for s in _SPECS.values()}

_TYPE_NAMES: Dict[AccountKind, str] = {
    AccountKind.POOL: "Pool",
    AccountKind.NPOOL: "NPool",
    AccountKind.FARM: "Farm",
    AccountKind.USER_FARM: "UserFarm",
    AccountKind.LOTTERY: "Lottery",
    AccountKind.LOTTERY_ENTRY: "LotteryEntry",
    AccountKind.REGISTRY: "Registry",
    AccountKind.ML_BRAIN: "MLBrain",
    AccountKind.CL_POOL: "CLPool",
    AccountKind.CL_POSITION: "CLPosition",
    AccountKind.ORDERBOOK: "Orderbook",
    AccountKind.GOV_PROPOSAL: "GovProposal",
    AccountKind.GOV_VOTE: "GovVote",
}


def required_size(kind: AccountKind) -> int:
    """Minimum buffer length accepted for `kind`."""
    return _SPECS[kind].size


def read_discriminator(data: bytes) -> Optional[int]:
    if len(data) < 8:
        return None
    return int.from_bytes(bytes(data[:8]), "little")


def _decode(kind: AccountKind, data: bytes, config: Optional[ProgramConfig]) -> Any:
    spec = _SPECS[kind]
    cfg = resolve_config(config)
    if len(data) < spec.size:
        logger.debug("rejecting %s: %d bytes < %d", kind.value, len(data), spec.size)
        return None
    tag = read_discriminator(data)
    if tag != cfg.account_tag(kind):
        logger.debug("rejecting %s: discriminator %#018x", kind.value, tag)
        return None
    try:
        container = spec.layout.parse(bytes(data[: spec.layout.sizeof()]))
    except ConstructError as exc:
        logger.debug("rejecting %s: %s", kind.value, exc)
        return None
    return spec.build(container)


def parse_pool(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[Pool]:
    return _decode(AccountKind.POOL, data, config)


def parse_npool(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[NPool]:
    return _decode(AccountKind.NPOOL, data, config)


def parse_farm(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[Farm]:
    return _decode(AccountKind.FARM, data, config)


def parse_user_farm(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[UserFarm]:
    return _decode(AccountKind.USER_FARM, data, config)


def parse_lottery(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[Lottery]:
    return _decode(AccountKind.LOTTERY, data, config)


def parse_lottery_entry(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[LotteryEntry]:
    return _decode(AccountKind.LOTTERY_ENTRY, data, config)


def parse_registry(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[Registry]:
    return _decode(AccountKind.REGISTRY, data, config)


def parse_gov_proposal(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[GovProposal]:
    return _decode(AccountKind.GOV_PROPOSAL, data, config)


def parse_gov_vote(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[GovVote]:
    return _decode(AccountKind.GOV_VOTE, data, config)


def parse_cl_pool(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[CLPool]:
    return _decode(AccountKind.CL_POOL, data, config)


def parse_cl_position(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[CLPosition]:
    return _decode(AccountKind.CL_POSITION, data, config)


def parse_orderbook(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[Orderbook]:
    return _decode(AccountKind.ORDERBOOK, data, config)


def parse_ml_brain(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[MLBrain]:
    return _decode(AccountKind.ML_BRAIN, data, config)


def parse_registry_pools(data: bytes, count: int) -> List[bytes]:
    """
    Pool identifiers stored after the registry header.

    Reads up to `count` 32-byte keys; stops early (without error) when the
    buffer runs out.
    """
    out: List[bytes] = []
    offset = REGISTRY_LAYOUT.sizeof()
    for _ in range(max(count, 0)):
        end = offset + REGISTRY_POOL_ENTRY_SIZE
        if end > len(data):
            break
        out.append(bytes(data[offset:end]))
        offset = end
    return out


def parse_ml_observations(data: bytes, count: int) -> List[MLObservation]:
    """Observations stored after the ML brain header; same shortfall policy as the registry tail."""
    out: List[MLObservation] = []
    offset = ML_BRAIN_LAYOUT.sizeof()
    for _ in range(max(count, 0)):
        end = offset + ML_OBSERVATION_SIZE
        if end > len(data):
            break
        c = ML_OBSERVATION_LAYOUT.parse(bytes(data[offset:end]))
        out.append(MLObservation(**_pick(c, MLObservation)))
        offset = end
    return out


def detect_account_type(data: bytes, config: Optional[ProgramConfig] = None) -> AccountKind:
    """Classify a buffer by its discriminator alone (no full decode)."""
    tag = read_discriminator(data)
    if tag is None:
        return AccountKind.UNKNOWN
    return resolve_config(config).kind_for_tag(tag)


def account_type_name(kind: AccountKind) -> str:
    return _TYPE_NAMES.get(kind, "Unknown")


def parse_account(data: bytes, config: Optional[ProgramConfig] = None) -> Optional[Account]:
    kind = detect_account_type(data, config)
    if kind is AccountKind.UNKNOWN or kind not in _SPECS:
        return None
    return _decode(kind, data, config)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _layout_value(value: Any) -> Any:
    if isinstance(value, TokenArray):
        fill = ZERO_KEY if value.raw and isinstance(value.raw[0], bytes) else 0
        return [_layout_value(v) for v in value.padded(fill)]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _layout_value(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return int(value.value)
    if isinstance(value, (tuple, list)):
        return [_layout_value(v) for v in value]
    return value


def account_kind_of(snapshot: Account) -> AccountKind:
    spec = _SPECS_BY_CLASS.get(type(snapshot))
    if spec is None:
        raise TypeError(f"not an account snapshot: {type(snapshot).__name__}")
    return spec.kind


def encode_account(snapshot: Account, config: Optional[ProgramConfig] = None) -> bytes:
    """
    Serialize a snapshot to the program's byte layout.

    The configured discriminator is written at offset 0, padding is zeroed and
    the result is zero-filled to the kind's required size.
    """
    spec = _SPECS_BY_CLASS.get(type(snapshot))
    if spec is None:
        raise TypeError(f"not an account snapshot: {type(snapshot).__name__}")
    if isinstance(snapshot, (Pool, NPool)) and snapshot.fee_bps > FEE_DENOMINATOR:
        raise LayoutError(f"fee_bps must be <= {FEE_DENOMINATOR}: {snapshot.fee_bps}")

    cfg = resolve_config(config)
    values = _layout_value(snapshot)
    values["disc"] = cfg.account_tag(spec.kind)
    try:
        body = spec.layout.build(values)
    except (ConstructError, TypeError, ValueError) as exc:
        raise LayoutError(f"cannot encode {spec.kind.value}: {exc}") from exc
    return body + bytes(spec.size - len(body))
