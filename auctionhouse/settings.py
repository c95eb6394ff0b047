"""Durations and limits read from the environment."""

from __future__ import annotations

import os
import re
from datetime import timedelta
from decimal import Decimal

from auctionhouse import logger

DEFAULT_AUCTION_DURATION = timedelta(minutes=5)
DEFAULT_BATCH_INSERT_INTERVAL = timedelta(minutes=3)
DEFAULT_MAX_BATCH_SIZE = 5

_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_INTEGER = re.compile(r"[+-]?\d+")

_MICROSECONDS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as "300ms", "1h30m" or "-2.5s".

    Raises ValueError when the text is not a valid duration.
    """
    if not value:
        raise ValueError(f"invalid duration {value!r}")
    body = value
    negative = False
    if body[0] in "+-":
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise ValueError(f"invalid duration {value!r}")

    total = Decimal(0)
    position = 0
    while position < len(body):
        match = _COMPONENT.match(body, position)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += Decimal(number) * _MICROSECONDS[unit]
        position = match.end()

    if negative:
        total = -total
    return timedelta(microseconds=float(total))


def auction_duration() -> timedelta:
    """How long an auction stays open, from AUCTION_INTERVAL."""
    try:
        return parse_duration(os.environ.get("AUCTION_INTERVAL", ""))
    except ValueError as exc:
        logger.error("Error parsing AUCTION_INTERVAL, using default 5 minutes", exc)
        return DEFAULT_AUCTION_DURATION


def batch_insert_interval() -> timedelta:
    """How often pending bids are flushed, from BATCH_INSERT_INTERVAL."""
    try:
        return parse_duration(os.environ.get("BATCH_INSERT_INTERVAL", ""))
    except ValueError:
        return DEFAULT_BATCH_INSERT_INTERVAL


def max_batch_size() -> int:
    """How many bids trigger an immediate flush, from MAX_BATCH_SIZE."""
    raw = os.environ.get("MAX_BATCH_SIZE", "")
    if _INTEGER.fullmatch(raw) is None:
        return DEFAULT_MAX_BATCH_SIZE
    return int(raw)