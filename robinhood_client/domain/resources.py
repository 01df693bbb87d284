"""Resource records returned by the API.

Top-level records are matched strictly: an unknown field fails decoding
instead of being dropped, so upstream schema changes surface immediately.
Embedded sub-objects (margin balances, instant eligibility, executions)
tolerate extra keys. Decimal
amounts are kept as the strings the API sends.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class Record(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)


class Nested(BaseModel):
    """Sub-object embedded in a record; extra keys are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


RecordT = TypeVar("RecordT", bound=Record)


class PaginatedPage(BaseModel, Generic[RecordT]):
    """One page of a listing endpoint."""

    previous: str | None = None
    next: str | None = None
    results: List[RecordT]


class Instrument(Record):
    min_tick_size: str | None = None
    type_field: str = Field(alias="type")
    splits: str
    margin_initial_ratio: str
    url: str
    quote: str
    tradability: str
    bloomberg_unique: str
    list_date: date | None = None
    name: str
    symbol: str
    fundamentals: str
    state: str
    country: str
    day_trade_ratio: str
    tradeable: bool
    maintenance_ratio: str
    id: str
    market: str
    simple_name: str | None = None
    rhs_tradability: str
    tradable_chain_id: str | None = None


class MarginBalances(Nested):
    day_trade_buying_power: str
    start_of_day_overnight_buying_power: str
    overnight_buying_power_held_for_orders: str
    cash_held_for_orders: str
    created_at: datetime
    unsettled_debit: str
    start_of_day_dtbp: str
    day_trade_buying_power_held_for_orders: str
    overnight_buying_power: str
    marked_pattern_day_trader_date: date | None = None
    cash: str
    unallocated_margin_cash: str
    updated_at: datetime
    cash_available_for_withdrawal: str
    margin_limit: str
    outstanding_interest: str
    uncleared_deposits: str
    unsettled_funds: str
    gold_equity_requirement: str
    day_trade_ratio: str
    overnight_ratio: str


class InstantEligibility(Nested):
    updated_at: datetime | None = None
    reason: str
    reinstatement_date: datetime | None = None
    reversal: Any = None
    state: str


class Account(Record):
    deactivated: bool
    updated_at: datetime
    margin_balances: MarginBalances
    portfolio: str
    cash_balances: Any
    can_downgrade_to_cash: str
    withdrawal_halted: bool
    cash_available_for_withdrawal: str
    type_field: str = Field(alias="type")
    sma: str
    sweep_enabled: bool
    deposit_halted: bool
    buying_power: str
    user: str
    max_ach_early_access_amount: str
    instant_eligibility: InstantEligibility
    cash_held_for_orders: str
    only_position_closing_trades: bool
    url: str
    positions: str
    created_at: datetime
    cash: str
    sma_held_for_orders: str
    unsettled_debit: str
    account_number: str
    uncleared_deposits: str
    unsettled_funds: str
    # Crypto
    nummus_enabled: bool | None = None
    option_level: str
    is_pinnacle_account: bool


class Execution(Nested):
    timestamp: str
    price: str
    settlement_date: str
    id: str
    quantity: str


class Order(Record):
    account: str
    average_price: str | None = None
    cancel_url: str | None = Field(default=None, alias="cancel")
    created_at: datetime
    cumulative_quantity: str
    executions: List[Execution] = Field(default_factory=list)
    extended_hours: bool
    fees: str
    id: str
    instrument: str
    last_transaction_at: datetime
    override_day_trade_checks: bool
    override_dtbp_checks: bool
    position: str
    price: str | None = None
    quantity: str
    ref_id: str | None = None
    reject_reason: str | None = None
    response_category: str | None = None
    side: str
    state: str
    stop_price: str | None = None
    time_in_force: str
    trigger: str
    type_field: str = Field(alias="type")
    updated_at: datetime
    url: str


class Position(Record):
    shares_held_for_stock_grants: str
    account: str
    intraday_quantity: str
    intraday_average_buy_price: str
    url: str
    created_at: datetime
    updated_at: datetime
    shares_held_for_buys: str
    average_buy_price: str
    instrument: str
    shares_held_for_sells: str
    quantity: str
