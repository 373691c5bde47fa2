"""Calendar override stores and the normalization of their stored form.

Room records keep their exact-date prices and weekday prices as JSON text and
their quotas as rows keyed by date. Everything here turns those raw shapes into
immutable, indexed stores. Nothing in this module raises on bad data: malformed
entries are dropped and logged, malformed payloads behave like empty lists.
"""

from __future__ import annotations

import datetime
import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

MONEY_PLACES = Decimal("0.01")
# Amounts must fit the Numeric(12, 2) columns.
MAX_AMOUNT_EXPONENT = 9

_AMOUNT_ADAPTER = TypeAdapter(Annotated[Decimal, Field(ge=0, allow_inf_nan=False)])
_COUNT_ADAPTER = TypeAdapter(Annotated[int, Field(ge=0)])

_WEEKDAY_KEYS = ("weekdayIndex", "weekday_index", "dayIndex", "day")
_QUOTA_KEYS = ("count", "quota")


@dataclass(frozen=True, slots=True)
class DailyPriceOverride:
    """Price pinned to one calendar date."""

    date: datetime.date
    price: Decimal


@dataclass(frozen=True, slots=True)
class WeekdayPriceRule:
    """Fallback price for a weekday, 0=Sunday through 6=Saturday."""

    weekday_index: int
    price: Decimal


@dataclass(frozen=True, slots=True)
class QuotaOverride:
    """Remaining bookable rooms on one calendar date."""

    date: datetime.date
    count: int


def to_money(value: Decimal | int | str) -> Decimal:
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def money_str(value: Decimal) -> str:
    return f"{to_money(value):.2f}"


def sunday_weekday_index(day: datetime.date) -> int:
    """Return the weekday index with Sunday as 0."""
    return (day.weekday() + 1) % 7


def parse_override_payload(raw: Any) -> list[Any]:
    """Decode a stored override list, degrading to ``[]`` on any failure."""
    if raw is None:
        return []
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Override payload is not valid UTF-8; ignoring it")
            return []
    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Override payload is not valid JSON: %s", exc)
            return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    logger.warning(
        "Override payload must be a list, got %s; ignoring it", type(raw).__name__
    )
    return []


def parse_calendar_date(value: Any) -> datetime.date | None:
    """Reduce a stored date representation to a plain calendar date."""
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            return datetime.date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def parse_amount(value: Any) -> Decimal | None:
    """Return a non-negative money amount, or ``None`` when unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip()
    if not isinstance(value, (int, str, Decimal)):
        return None
    try:
        amount = to_money(_AMOUNT_ADAPTER.validate_python(value))
    except (ValidationError, InvalidOperation):
        return None
    if amount.adjusted() > MAX_AMOUNT_EXPONENT:
        return None
    return amount


def parse_count(value: Any) -> int | None:
    """Return a non-negative whole count, or ``None`` when unusable."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
    if not isinstance(value, (int, float, str)):
        return None
    try:
        return _COUNT_ADAPTER.validate_python(value)
    except ValidationError:
        return None


def _first_present(entry: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if key in entry:
            return entry[key]
    return None


def parse_daily_prices(raw: Any) -> list[DailyPriceOverride]:
    overrides: list[DailyPriceOverride] = []
    for entry in parse_override_payload(raw):
        if not isinstance(entry, Mapping):
            logger.warning("Skipping daily price entry that is not an object")
            continue
        day = parse_calendar_date(entry.get("date"))
        price = parse_amount(entry.get("price"))
        if day is None or price is None:
            logger.warning("Skipping malformed daily price entry: %r", dict(entry))
            continue
        overrides.append(DailyPriceOverride(date=day, price=price))
    return overrides


def parse_weekday_prices(raw: Any) -> list[WeekdayPriceRule]:
    rules: list[WeekdayPriceRule] = []
    for entry in parse_override_payload(raw):
        if not isinstance(entry, Mapping):
            logger.warning("Skipping weekday price entry that is not an object")
            continue
        index = parse_count(_first_present(entry, _WEEKDAY_KEYS))
        price = parse_amount(entry.get("price"))
        if index is None or index > 6 or price is None:
            logger.warning("Skipping malformed weekday price entry: %r", dict(entry))
            continue
        rules.append(WeekdayPriceRule(weekday_index=index, price=price))
    return rules


def parse_quotas(raw: Any) -> list[QuotaOverride]:
    quotas: list[QuotaOverride] = []
    for entry in parse_override_payload(raw):
        if isinstance(entry, QuotaOverride):
            quotas.append(entry)
            continue
        if not isinstance(entry, Mapping):
            logger.warning("Skipping quota entry that is not an object")
            continue
        day = parse_calendar_date(entry.get("date"))
        count = parse_count(_first_present(entry, _QUOTA_KEYS))
        if day is None or count is None:
            logger.warning("Skipping malformed quota entry: %r", dict(entry))
            continue
        quotas.append(QuotaOverride(date=day, count=count))
    return quotas


@dataclass(frozen=True, slots=True)
class PriceOverrideStore:
    """Exact-date prices indexed by ISO date; later entries win."""

    by_date: Mapping[str, DailyPriceOverride] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_overrides(cls, overrides: Iterable[DailyPriceOverride]) -> PriceOverrideStore:
        index = {override.date.isoformat(): override for override in overrides}
        return cls(by_date=MappingProxyType(index))

    def get(self, day: datetime.date) -> DailyPriceOverride | None:
        return self.by_date.get(day.isoformat())

    def entries(self) -> list[DailyPriceOverride]:
        return [self.by_date[key] for key in sorted(self.by_date)]


@dataclass(frozen=True, slots=True)
class WeekdayPriceStore:
    """Weekday fallback prices indexed by weekday index; later entries win."""

    by_index: Mapping[int, WeekdayPriceRule] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_rules(cls, rules: Iterable[WeekdayPriceRule]) -> WeekdayPriceStore:
        index = {rule.weekday_index: rule for rule in rules}
        return cls(by_index=MappingProxyType(index))

    def get(self, day: datetime.date) -> WeekdayPriceRule | None:
        return self.by_index.get(sunday_weekday_index(day))

    def entries(self) -> list[WeekdayPriceRule]:
        return [self.by_index[key] for key in sorted(self.by_index)]


@dataclass(frozen=True, slots=True)
class QuotaStore:
    """Per-date inventory counts indexed by ISO date; later entries win."""

    by_date: Mapping[str, QuotaOverride] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def from_quotas(cls, quotas: Iterable[QuotaOverride]) -> QuotaStore:
        index = {quota.date.isoformat(): quota for quota in quotas}
        return cls(by_date=MappingProxyType(index))

    def get(self, day: datetime.date) -> int | None:
        quota = self.by_date.get(day.isoformat())
        return None if quota is None else quota.count

    def entries(self) -> list[QuotaOverride]:
        return [self.by_date[key] for key in sorted(self.by_date)]


@dataclass(frozen=True, slots=True)
class RoomSnapshot:
    """Immutable view of one room's overrides for a single resolution."""

    daily_prices: PriceOverrideStore = field(default_factory=PriceOverrideStore)
    weekday_prices: WeekdayPriceStore = field(default_factory=WeekdayPriceStore)
    quotas: QuotaStore = field(default_factory=QuotaStore)

    @classmethod
    def from_raw(
        cls,
        *,
        daily_prices: Any = None,
        weekday_prices: Any = None,
        quotas: Any = None,
    ) -> RoomSnapshot:
        """Build the indexed stores from stored JSON text or decoded lists."""
        return cls(
            daily_prices=PriceOverrideStore.from_overrides(parse_daily_prices(daily_prices)),
            weekday_prices=WeekdayPriceStore.from_rules(parse_weekday_prices(weekday_prices)),
            quotas=QuotaStore.from_quotas(parse_quotas(quotas)),
        )


def serialize_daily_prices(store: PriceOverrideStore) -> str:
    return json.dumps(
        [
            {"date": override.date.isoformat(), "price": money_str(override.price)}
            for override in store.entries()
        ]
    )


def serialize_weekday_prices(store: WeekdayPriceStore) -> str:
    return json.dumps(
        [
            {"weekdayIndex": rule.weekday_index, "price": money_str(rule.price)}
            for rule in store.entries()
        ]
    )


__all__ = [
    "DailyPriceOverride",
    "MONEY_PLACES",
    "PriceOverrideStore",
    "QuotaOverride",
    "QuotaStore",
    "RoomSnapshot",
    "WeekdayPriceRule",
    "WeekdayPriceStore",
    "money_str",
    "parse_amount",
    "parse_calendar_date",
    "parse_count",
    "parse_daily_prices",
    "parse_override_payload",
    "parse_quotas",
    "parse_weekday_prices",
    "serialize_daily_prices",
    "serialize_weekday_prices",
    "sunday_weekday_index",
    "to_money",
]
