import uuid

import pytest

from auctionhouse.entities import (
    Auction,
    AuctionStatus,
    Bid,
    ProductCondition,
    User,
    create_auction,
    create_bid,
    is_valid_uuid,
)
from auctionhouse.errors import InternalError


def test_create_auction_valid():
    auction = create_auction(
        "Test Product", "Electronics", "Test Description", ProductCondition.NEW
    )
    assert auction.status is AuctionStatus.ACTIVE
    assert auction.condition is ProductCondition.NEW
    assert auction.product_name == "Test Product"
    assert is_valid_uuid(auction.id)
    assert auction.timestamp.tzinfo is not None


def test_create_auction_ids_are_unique():
    first = create_auction("Phone", "Electronics", "A", ProductCondition.USED)
    second = create_auction("Phone", "Electronics", "A", ProductCondition.USED)
    assert first.id != second.id and is_valid_uuid(second.id)


@pytest.mark.parametrize(
    "name, category",
    [("P", "Electronics"), ("Product", "El"), ("", "")],
)
def test_create_auction_rejects_short_fields(name, category):
    with pytest.raises(InternalError) as info:
        create_auction(name, category, "A long enough description", ProductCondition.NEW)
    assert info.value.err == "bad_request"
    assert str(info.value) == "invalid auction object"


def test_short_description_with_bad_condition_is_rejected():
    with pytest.raises(InternalError) as info:
        create_auction("Product", "Electronics", "short", 0)
    assert info.value.message == "invalid auction object"


def test_short_description_with_good_condition_passes():
    auction = create_auction("Product", "Electronics", "short", 2)
    assert auction.condition is ProductCondition.USED


def test_long_description_allows_unknown_condition():
    auction = create_auction("Product", "Electronics", "A long enough description", 0)
    assert auction.condition == 0


def test_auction_validate_after_change():
    auction = create_auction("Product", "Electronics", "Test Description", 1)
    auction.product_name = "X"
    with pytest.raises(InternalError):
        auction.validate()


def test_status_values_ordered():
    auction = create_auction("Product", "Electronics", "Test Description", 1)
    assert int(auction.status) == 0
    assert auction.status < AuctionStatus.COMPLETED
    assert int(auction.condition) == 1


def test_create_bid_valid():
    user_id, auction_id = str(uuid.uuid4()), str(uuid.uuid4())
    bid = create_bid(user_id, auction_id, 10.5)
    assert bid.user_id == user_id
    assert bid.auction_id == auction_id
    assert bid.amount == 10.5
    assert is_valid_uuid(bid.id)


@pytest.mark.parametrize(
    "user_id, auction_id, amount, message",
    [
        ("not-a-uuid", str(uuid.uuid4()), 1.0, "UserId is not a valid id"),
        (str(uuid.uuid4()), "nope", 1.0, "AuctionId is not a valid id"),
        (str(uuid.uuid4()), str(uuid.uuid4()), 0, "Amount is not a valid value"),
        (str(uuid.uuid4()), str(uuid.uuid4()), -3, "Amount is not a valid value"),
    ],
)
def test_create_bid_rejects(user_id, auction_id, amount, message):
    with pytest.raises(InternalError) as info:
        create_bid(user_id, auction_id, amount)
    assert info.value.err == "bad_request"
    assert info.value.message == message


def test_bid_validate_checks_user_first():
    bid = Bid(user_id="bad", auction_id="bad", amount=0)
    with pytest.raises(InternalError) as info:
        bid.validate()
    assert info.value.message == "UserId is not a valid id"


def test_uuid_spellings():
    value = uuid.uuid4()
    text = str(value)
    assert is_valid_uuid(text)
    assert is_valid_uuid(text.upper())
    assert is_valid_uuid(value.hex)
    assert is_valid_uuid("{" + text + "}")
    assert is_valid_uuid("urn:uuid:" + text)
    assert not is_valid_uuid("")
    assert not is_valid_uuid(text[:-1])
    assert not is_valid_uuid(text + "0")
    assert not is_valid_uuid(text.replace(text[0], "g", 1))


def test_auction_defaults():
    auction = Auction("Product", "Electronics", "Test Description", ProductCondition.NEW)
    assert auction.status is AuctionStatus.ACTIVE
    assert is_valid_uuid(auction.id)


def test_user_fields():
    user = User(id="abc", name="Alice")
    assert (user.id, user.name) == ("abc", "Alice")