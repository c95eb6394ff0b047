"""Auction, bid and user entities with their validation rules."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum

from auctionhouse.errors import bad_request_error


class ProductCondition(IntEnum):
    NEW = 1
    USED = 2
    REFURBISHED = 3


class AuctionStatus(IntEnum):
    ACTIVE = 0
    COMPLETED = 1


_CONDITIONS = frozenset(int(c) for c in ProductCondition)

_HEX = "[0-9a-fA-F]"
_HYPHENATED = f"{_HEX}{{8}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{4}}-{_HEX}{{12}}"
_UUID_FORMS = re.compile(
    rf"{_HYPHENATED}|[uU][rR][nN]:[uU][uU][iI][dD]:{_HYPHENATED}"
    rf"|\{{{_HYPHENATED}\}}|{_HEX}{{32}}"
)


def is_valid_uuid(value: str) -> bool:
    """Tell whether the text is a UUID in one of its accepted spellings."""
    return _UUID_FORMS.fullmatch(value) is not None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Auction:
    product_name: str
    category: str
    description: str
    condition: int
    status: AuctionStatus = AuctionStatus.ACTIVE
    timestamp: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)

    def validate(self) -> None:
        """Raise a bad-request error if the auction is not acceptable."""
        too_short = (
            len(self.product_name.encode()) <= 1
            or len(self.category.encode()) <= 2
            or (
                len(self.description.encode()) <= 10
                and int(self.condition) not in _CONDITIONS
            )
        )
        if too_short:
            raise bad_request_error("invalid auction object")


def create_auction(
    product_name: str, category: str, description: str, condition: int
) -> Auction:
    """Build a new active auction, raising if it does not validate."""
    if int(condition) in _CONDITIONS:
        condition = ProductCondition(int(condition))
    auction = Auction(
        product_name=product_name,
        category=category,
        description=description,
        condition=condition,
    )
    auction.validate()
    return auction


@dataclass
class Bid:
    user_id: str
    auction_id: str
    amount: float
    timestamp: datetime = field(default_factory=_now)
    id: str = field(default_factory=_new_id)

    def validate(self) -> None:
        """Raise a bad-request error if the bid is not acceptable."""
        if not is_valid_uuid(self.user_id):
            raise bad_request_error("UserId is not a valid id")
        if not is_valid_uuid(self.auction_id):
            raise bad_request_error("AuctionId is not a valid id")
        if self.amount <= 0:
            raise bad_request_error("Amount is not a valid value")


def create_bid(user_id: str, auction_id: str, amount: float) -> Bid:
    """Build a new bid, raising if it does not validate."""
    bid = Bid(user_id=user_id, auction_id=auction_id, amount=amount)
    bid.validate()
    return bid


@dataclass
class User:
    id: str
    name: str