"""주차 요금 계산 유틸리티 — 시간/일/월 요금 조합 최적화.

Tiered parking price calculation.
Given hourly/daily/monthly rates and a time span, the billable duration is
rounded up to whole hours and four fixed rate combinations are evaluated:

    hourly                 시간 요금만 (hourly rate only)
    daily_hourly           일 요금 + 남은 시간 (full days + leftover hours)
    monthly                월 요금만, 올림 (whole months, rounded up)
    monthly_daily_hourly   월 + 일 + 시간 분해 (months, then days, then hours)

"optimal" 요금은 네 전략 중 최솟값입니다 (Optimal is the minimum of the four).
A month is a fixed 30 days (720 hours).
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

HOURS_PER_DAY: int = 24
HOURS_PER_MONTH: int = HOURS_PER_DAY * 30

SECONDS_PER_HOUR: int = 3600


class DurationType(str, Enum):
    """요금 적용 방식 — Which tier the renter asked to be billed on."""

    HOURLY = "hourly"
    DAILY = "daily"
    MONTHLY = "monthly"
    OPTIMAL = "optimal"

    @classmethod
    def parse(cls, value: object) -> "DurationType":
        """알 수 없는 값은 optimal로 처리 — Unknown, missing or non-string values fall back to optimal."""
        if isinstance(value, DurationType):
            return value
        if not isinstance(value, str):
            return cls.OPTIMAL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OPTIMAL


@dataclass(frozen=True)
class Rates:
    """주차 공간 요금표 — Hourly/daily/monthly rates of a listing. None counts as 0."""

    hourly: float = 0.0
    daily: float = 0.0
    monthly: float = 0.0

    @classmethod
    def of(cls, hourly: float | None, daily: float | None, monthly: float | None) -> "Rates":
        return cls(float(hourly or 0), float(daily or 0), float(monthly or 0))


@dataclass(frozen=True)
class PriceQuote:
    """요금 견적 결과.

    Attributes:
        total_hours: 과금 시간, 올림 (Billable hours, rounded up)
        total_price: 최종 요금 (Price for the requested duration type)
        duration_type: 적용된 요금 방식 (Duration type actually applied)
        breakdown: 전략별 요금 (Cost of each fixed strategy)
    """

    total_hours: int
    total_price: float
    duration_type: DurationType
    breakdown: dict[str, float] = field(default_factory=dict)


def as_utc(value: datetime) -> datetime:
    # naive datetime은 UTC로 간주 (Naive timestamps are taken as UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def billable_hours(start: datetime, end: datetime) -> int:
    """과금 시간을 계산합니다 — 다음 정시로 올림, 최소 1시간.

    Compute billable hours between two timestamps, rounded up to the next
    whole hour with a one-hour minimum.

    Raises:
        ValueError: 종료 시간이 시작 시간 이후가 아닐 때 (end is not after start)
    """
    seconds: float = (as_utc(end) - as_utc(start)).total_seconds()
    if seconds <= 0:
        raise ValueError("End time must be after start time")
    return max(1, math.ceil(seconds / SECONDS_PER_HOUR))


def strategy_prices(rates: Rates, hours: int) -> dict[str, float]:
    """네 가지 고정 요금 조합의 비용을 계산합니다.

    Evaluate the four fixed rate combinations for a billable duration.

    Args:
        rates: 요금표 (Listing rates)
        hours: 과금 시간 (Billable whole hours)

    Returns:
        dict[str, float]: 전략 이름 → 요금 (Strategy name to cost)
    """
    full_days, leftover_hours = divmod(hours, HOURS_PER_DAY)
    full_months, after_months = divmod(hours, HOURS_PER_MONTH)
    days_after_months, hours_after_days = divmod(after_months, HOURS_PER_DAY)

    return {
        "hourly": rates.hourly * hours,
        "daily_hourly": rates.daily * full_days + rates.hourly * leftover_hours,
        "monthly": rates.monthly * max(1, math.ceil(hours / HOURS_PER_MONTH)),
        "monthly_daily_hourly": (
            rates.monthly * full_months
            + rates.daily * days_after_months
            + rates.hourly * hours_after_days
        ),
    }


def optimal_price(rates: Rates, hours: int) -> float:
    """네 전략 중 최저 요금 — Cheapest of the four strategies."""
    return min(strategy_prices(rates, hours).values())


def price_for_hours(rates: Rates, hours: int, duration_type: DurationType) -> float:
    """요금 방식에 따라 과금 시간의 요금을 계산합니다.

    hourly/daily/monthly는 해당 단위로만 올림 과금하고, optimal은 최저 조합을 사용합니다.
    """
    if duration_type is DurationType.HOURLY:
        return rates.hourly * hours
    if duration_type is DurationType.DAILY:
        return rates.daily * max(1, math.ceil(hours / HOURS_PER_DAY))
    if duration_type is DurationType.MONTHLY:
        return rates.monthly * max(1, math.ceil(hours / HOURS_PER_MONTH))
    return optimal_price(rates, hours)


def calculate_price(
    rates: Rates,
    start: datetime,
    end: datetime,
    duration_type: "str | DurationType | None" = DurationType.OPTIMAL,
) -> PriceQuote:
    """기간과 요금 방식으로 요금 견적을 생성합니다.

    Build a price quote for a listing's rates over [start, end].

    Args:
        rates: 요금표 (Listing rates)
        start: 시작 시각 (Span start)
        end: 종료 시각 (Span end, must be after start)
        duration_type: 요금 방식 (hourly | daily | monthly | optimal)

    Returns:
        PriceQuote: 과금 시간, 요금, 전략별 내역 (Hours, price and strategy breakdown)

    Raises:
        ValueError: 종료 시간이 시작 시간 이후가 아닐 때 (end is not after start)
    """
    kind: DurationType = DurationType.parse(duration_type)
    hours: int = billable_hours(start, end)
    breakdown: dict[str, float] = {
        name: round(cost, 2) for name, cost in strategy_prices(rates, hours).items()
    }
    return PriceQuote(
        total_hours=hours,
        total_price=round(price_for_hours(rates, hours, kind), 2),
        duration_type=kind,
        breakdown=breakdown,
    )
