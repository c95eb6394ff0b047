"""Decoding and validation of JSON request bodies."""

from __future__ import annotations

import json
from typing import Any, Union

from auctionhouse.auction_usecase import AuctionInput
from auctionhouse.bid_usecase import BidInput
from auctionhouse.errors import Cause, RestError, rest_bad_request, rest_not_found

Payload = Union[str, bytes, bytearray, None]

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_STRING = "string"
_INT64 = "int64"
_FLOAT64 = "float64"
_ZERO: dict[str, Any] = {_STRING: "", _INT64: 0, _FLOAT64: 0.0}

_AUCTION_FIELDS = {
    "product_name": _STRING,
    "category": _STRING,
    "description": _STRING,
    "condition": _INT64,
}
_BID_FIELDS = {
    "user_id": _STRING,
    "auction_id": _STRING,
    "amount": _FLOAT64,
}

_ALLOWED_CONDITIONS = (0, 1, 2)


class _TypeMismatch(Exception):
    """A JSON value has the wrong type for the field it fills."""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def _decode(payload: Payload) -> dict[str, Any]:
    if payload is None:
        raise rest_bad_request("Error trying to convert fields")
    if isinstance(payload, (bytes, bytearray)):
        text = bytes(payload).decode("utf-8", errors="replace")
    else:
        text = payload
    decoder = json.JSONDecoder(parse_constant=_reject_constant)
    try:
        document, _ = decoder.raw_decode(text.lstrip(" \t\r\n"))
    except ValueError as exc:
        raise rest_bad_request("Error trying to convert fields") from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise _TypeMismatch()
    return document


def _convert(value: Any, kind: str) -> Any:
    if isinstance(value, bool):
        raise _TypeMismatch()
    if kind == _STRING and isinstance(value, str):
        return value
    if kind == _INT64 and isinstance(value, int):
        if _INT64_MIN <= value <= _INT64_MAX:
            return value
        raise _TypeMismatch()
    if kind == _FLOAT64 and isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError as exc:
            raise _TypeMismatch() from exc
    raise _TypeMismatch()


def _field_for(key: str, fields: dict[str, str]) -> str | None:
    if key in fields:
        return key
    folded = key.lower()
    return next((name for name in fields if name.lower() == folded), None)


def _bind(payload: Payload, fields: dict[str, str]) -> dict[str, Any]:
    """Fill the named fields from a JSON object; unknown keys are ignored."""
    try:
        document = _decode(payload)
        values = {name: _ZERO[kind] for name, kind in fields.items()}
        mismatch = False
        for key, raw in document.items():
            name = _field_for(key, fields)
            if name is None or raw is None:
                continue
            try:
                values[name] = _convert(raw, fields[name])
            except _TypeMismatch:
                mismatch = True
        if mismatch:
            raise _TypeMismatch()
    except _TypeMismatch as exc:
        raise rest_not_found("Invalid type error") from exc
    return values


def _length_text(count: int) -> str:
    return f"{count} character" if count == 1 else f"{count} characters"


def _check_text(
    field: str, value: str, minimum: int, maximum: int | None = None
) -> Cause | None:
    if value == "":
        return Cause(field, f"{field} is a required field")
    if len(value) < minimum:
        return Cause(field, f"{field} must be at least {_length_text(minimum)} in length")
    if maximum is not None and len(value) > maximum:
        return Cause(
            field, f"{field} must be a maximum of {_length_text(maximum)} in length"
        )
    return None


def validate_auction_input(payload: Payload) -> AuctionInput:
    """Decode and check the body of a create-auction request.

    Raises RestError describing what is wrong with the body.
    """
    values = _bind(payload, _AUCTION_FIELDS)
    checks = [
        _check_text("ProductName", values["product_name"], 1),
        _check_text("Category", values["category"], 2),
        _check_text("Description", values["description"], 10, 200),
    ]
    if values["condition"] not in _ALLOWED_CONDITIONS:
        allowed = " ".join(str(c) for c in _ALLOWED_CONDITIONS)
        checks.append(Cause("Condition", f"Condition must be one of [{allowed}]"))
    causes = [cause for cause in checks if cause is not None]
    if causes:
        raise rest_bad_request("Invalid field values", *causes)
    return AuctionInput(
        product_name=values["product_name"],
        category=values["category"],
        description=values["description"],
        condition=values["condition"],
    )


def validate_bid_input(payload: Payload) -> BidInput:
    """Decode the body of a place-bid request.

    Raises RestError when the body is not JSON or holds values of the wrong type.
    """
    values = _bind(payload, _BID_FIELDS)
    return BidInput(
        user_id=values["user_id"],
        auction_id=values["auction_id"],
        amount=values["amount"],
    )


__all__ = ["RestError", "validate_auction_input", "validate_bid_input"]