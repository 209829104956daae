#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Civil dates as the bank sees them. SpareBank1 reports instants (epoch
milliseconds); YNAB wants the calendar date in the bank's own timezone, which
must come from the IANA database so DST transitions land on the right day.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo
from zoneinfo import ZoneInfo

BANK_TIMEZONE = ZoneInfo("Europe/Oslo")


def instant_from_epoch_millis(millis: int) -> datetime:
    """
    Convert epoch milliseconds to a UTC instant.

    Sub-second precision is dropped (integer division by 1000), matching how
    the bank's timestamps have always been interpreted.
    """
    return datetime.fromtimestamp(int(millis) // 1000, tz=UTC)


@dataclass(frozen=True)
class FinancialDate:
    """Immutable civil date with YNAB formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """Parse from string in specified format."""
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def from_instant(cls, instant: datetime, tz: tzinfo = BANK_TIMEZONE) -> "FinancialDate":
        """
        Civil date of an instant as observed in ``tz``.

        Args:
            instant: Timezone-aware datetime
            tz: Timezone whose wall clock defines the date (default: Europe/Oslo)

        Raises:
            ValueError: If ``instant`` is naive
        """
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise ValueError(f"Cannot derive civil date from naive datetime: {instant!r}")
        return cls(date=instant.astimezone(tz).date())

    @classmethod
    def from_epoch_millis(cls, millis: int, tz: tzinfo = BANK_TIMEZONE) -> "FinancialDate":
        """Civil date of an epoch-milliseconds timestamp."""
        return cls.from_instant(instant_from_epoch_millis(millis), tz)

    def to_ynab_format(self) -> str:
        """Format as YNAB expects (YYYY-MM-DD)."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_ynab_format()

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date
