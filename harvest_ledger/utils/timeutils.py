"""시계/달력 유틸리티 모듈.

Clock and calendar utilities used by the ledger.
All stored timestamps are timezone-aware UTC; calendar dates and weekday
names are resolved in the configured ledger time zone.
"""

import math
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from harvest_ledger.config import settings


def utc_now() -> datetime:
    """현재 UTC 시각 — Current timezone-aware UTC time."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """naive 시각을 UTC로 간주합니다.

    Treat a naive datetime as UTC. Some drivers (SQLite) drop tzinfo on read.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _ledger_zone() -> ZoneInfo:
    return ZoneInfo(settings.LEDGER_TIMEZONE)


def ledger_date(moment: datetime) -> date:
    """원장 타임존 기준 날짜 — Calendar date of ``moment`` in the ledger zone."""
    return as_utc(moment).astimezone(_ledger_zone()).date()


def day_of_week(moment: datetime) -> str:
    """요일 이름 (예: "Monday") — English weekday name in the ledger zone."""
    return as_utc(moment).astimezone(_ledger_zone()).strftime("%A")


def minutes_between(start: datetime, end: datetime) -> float:
    """두 시각 사이의 경과 시간(분) — Elapsed minutes, fractional."""
    return (as_utc(end) - as_utc(start)).total_seconds() / 60


def format_duration(minutes: float) -> str:
    """작업 시간을 "<시간>hr <분>min" 형식으로 변환합니다.

    Hours are floored; the remaining minutes are rounded half-up, so
    ``90.5`` becomes ``"1hr 31min"``.
    """
    hours: int = math.floor(minutes / 60)
    remainder: int = math.floor(minutes % 60 + 0.5)
    return f"{hours}hr {remainder}min"
