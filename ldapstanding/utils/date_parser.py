"""
Date parsing utilities for LDAPStanding.

This module provides the two time encodings found on directory user entries:
the textual LDAP generalized time (RFC 4517) used by password-policy and
eDirectory schemas, and the Windows FILETIME counter (100-nanosecond intervals
since January 1, 1601) used by Active Directory.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..exceptions import MalformedTimestampError

# YYYYMMDDHH[MM[SS]][(.|,)fraction](Z|+hh[mm]|-hh[mm])
_GENERALIZED_TIME_RE = re.compile(
    r"(?P<year>\d{4})(?P<month>\d{2})(?P<day>\d{2})(?P<hour>\d{2})"
    r"(?:(?P<minute>\d{2})(?P<second>\d{2})?)?"
    r"(?:[.,](?P<fraction>\d+))?"
    r"(?P<zone>Z|[+-]\d{2}(?:\d{2})?)",
    re.ASCII,
)


@dataclass(frozen=True, order=True)
class GeneralizedTime:
    """
    A point in time read from an LDAP generalized time attribute.

    Always holds a timezone-aware UTC datetime, so instances compare by instant.

    Example:
        >>> GeneralizedTime.parse("20300101000000Z").is_after(GeneralizedTime.now())
        True
    """

    instant: datetime

    @classmethod
    def parse(cls, value: str) -> "GeneralizedTime":
        """
        Parse a generalized time string.

        Minutes and seconds are optional, a fraction applies to the last unit
        present, and the zone is either 'Z' or a +hh[mm]/-hh[mm] offset.

        Raises:
            MalformedTimestampError: If the value does not follow the format
                or names an impossible date
        """
        match = _GENERALIZED_TIME_RE.fullmatch(value) if isinstance(value, str) else None
        if match is None:
            raise MalformedTimestampError(str(value))

        parts = match.groupdict()
        tz = _parse_zone(value, parts["zone"])
        second = int(parts["second"] or 0)
        # leap second; datetime has no :60
        if second == 60:
            second = 59
        try:
            dt = datetime(
                int(parts["year"]),
                int(parts["month"]),
                int(parts["day"]),
                int(parts["hour"]),
                int(parts["minute"] or 0),
                second,
                tzinfo=tz,
            )
            if parts["fraction"]:
                if parts["second"] is not None:
                    unit = 1
                elif parts["minute"] is not None:
                    unit = 60
                else:
                    unit = 3600
                dt += timedelta(seconds=float(f"0.{parts['fraction']}") * unit)
            return cls(dt.astimezone(timezone.utc))
        except (ValueError, OverflowError) as e:
            raise MalformedTimestampError(value, str(e)) from e

    @classmethod
    def now(cls) -> "GeneralizedTime":
        """Current instant. Read from the wall clock on every call."""
        return cls(datetime.now(timezone.utc))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "GeneralizedTime":
        """Wrap a datetime; naive values are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(dt.astimezone(timezone.utc))

    def is_after(self, other: "GeneralizedTime") -> bool:
        return self.instant > other.instant

    def is_before(self, other: "GeneralizedTime") -> bool:
        return self.instant < other.instant

    def to_generalized_time(self) -> str:
        """Format as YYYYMMDDHHMMSS[.fff]Z, with milliseconds only when non-zero."""
        dt = self.instant
        text = f"{dt.year:04d}{dt.month:02d}{dt.day:02d}{dt.hour:02d}{dt.minute:02d}{dt.second:02d}"
        millis = dt.microsecond // 1000
        if millis:
            text += f".{millis:03d}"
        return text + "Z"

    def __str__(self) -> str:
        return self.to_generalized_time()


def _parse_zone(value: str, zone: str) -> timezone:
    if zone == "Z":
        return timezone.utc
    hours = int(zone[1:3])
    minutes = int(zone[3:5] or 0)
    if hours > 23 or minutes > 59:
        raise MalformedTimestampError(value, f"invalid zone offset {zone}")
    offset = timedelta(hours=hours, minutes=minutes)
    return timezone(-offset if zone[0] == "-" else offset)


# =============================================================================
# Windows FILETIME
# =============================================================================

# Windows FILETIME epoch difference from Unix epoch
# FILETIME epoch: January 1, 1601
# Unix epoch: January 1, 1970
# Difference: 11644473600 seconds
_FILETIME_EPOCH_DIFF = 11644473600

WIN32_EPOCH = datetime(1601, 1, 1, tzinfo=timezone.utc)

# accountExpires value meaning "never expires"
ACCOUNT_NO_EXPIRATION = 0x7FFF_FFFF_FFFF_FFFF

_HUNDRED_NANOS_PER_MILLISECOND = 10_000


def win32_epoch_hundred_nanos(now: Optional[datetime] = None) -> int:
    """
    Number of 100-nanosecond intervals between 1601-01-01T00:00:00Z and now.

    Computed from millisecond resolution, which is all the comparison against
    accountExpires needs.

    Args:
        now: Reference instant (defaults to the current wall clock; naive
            values are taken as UTC)

    Returns:
        Tick count comparable with Active Directory FILETIME attributes
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed_ms = (now - WIN32_EPOCH) // timedelta(milliseconds=1)
    return elapsed_ms * _HUNDRED_NANOS_PER_MILLISECOND


def parse_ad_timestamp(timestamp: int) -> Optional[datetime]:
    """
    Parse AD timestamp (100-nanosecond intervals since January 1, 1601).

    Used for accountExpires, pwdLastSet, lockoutTime and similar attributes.

    Args:
        timestamp: Integer timestamp from AD attribute

    Returns:
        datetime object or None if parsing fails or timestamp indicates "never"
    """
    try:
        # Special values that indicate "never expires" or not set
        if timestamp == 0 or timestamp == ACCOUNT_NO_EXPIRATION:
            return None

        unix_timestamp = (timestamp / 10_000_000) - _FILETIME_EPOCH_DIFF
        return datetime.fromtimestamp(unix_timestamp, tz=timezone.utc)
    except (ValueError, OSError, OverflowError):
        return None
