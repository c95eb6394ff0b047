"""HTTP handlers for auctions, bids and users."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Response, jsonify, request

from auctionhouse.entities import is_valid_uuid
from auctionhouse.errors import (
    Cause,
    InternalError,
    RestError,
    convert_error,
    rest_bad_request,
)
from auctionhouse.validation import validate_auction_input, validate_bid_input


def _json(body: Any, status: int) -> Response:
    response = jsonify(body)
    response.status_code = int(status)
    return response


def _error_response(err: RestError) -> Response:
    return _json(err.to_dict(), err.code)


def _invalid_uuid(field: str) -> Response:
    return _error_response(
        rest_bad_request("Invalid fields", Cause(field, "Invalid UUID value"))
    )


def _created() -> Response:
    return Response(status=int(HTTPStatus.CREATED))


def _parse_int(text: str) -> int | None:
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits or not all("0" <= ch <= "9" for ch in digits):
        return None
    return int(text)


class AuctionController:
    """Handlers for the /auction routes."""

    def __init__(self, auction_use_case: Any) -> None:
        self.auction_use_case = auction_use_case

    def create_auction(self) -> Response:
        try:
            auction_input = validate_auction_input(request.get_data())
        except RestError as err:
            return _error_response(err)
        try:
            self.auction_use_case.create_auction(auction_input)
        except InternalError as err:
            return _error_response(convert_error(err))
        return _created()

    def find_auction_by_id(self, auction_id: str) -> Response:
        if not is_valid_uuid(auction_id):
            return _invalid_uuid("auctionId")
        try:
            auction = self.auction_use_case.find_auction_by_id(auction_id)
        except InternalError as err:
            return _error_response(convert_error(err))
        return _json(auction.to_dict(), HTTPStatus.OK)

    def find_auctions(self) -> Response:
        status = _parse_int(request.args.get("status", ""))
        if status is None:
            return _error_response(
                rest_bad_request("Error trying to validate auction status param")
            )
        category = request.args.get("category", "")
        product_name = request.args.get("productName", "")
        try:
            auctions = self.auction_use_case.find_auctions(
                status, category, product_name
            )
        except InternalError as err:
            return _error_response(convert_error(err))
        return _json([a.to_dict() for a in auctions] or None, HTTPStatus.OK)

    def find_winning_bid_by_auction_id(self, auction_id: str) -> Response:
        if not is_valid_uuid(auction_id):
            return _invalid_uuid("auctionId")
        try:
            info = self.auction_use_case.find_winning_bid_by_auction_id(auction_id)
        except InternalError as err:
            return _error_response(convert_error(err))
        return _json(info.to_dict(), HTTPStatus.OK)


class BidController:
    """Handlers for the /bid routes."""

    def __init__(self, bid_use_case: Any) -> None:
        self.bid_use_case = bid_use_case

    def create_bid(self) -> Response:
        try:
            bid_input = validate_bid_input(request.get_data())
        except RestError as err:
            return _error_response(err)
        try:
            self.bid_use_case.create_bid(bid_input)
        except InternalError as err:
            return _error_response(convert_error(err))
        return _created()

    def find_bid_by_auction_id(self, auction_id: str) -> Response:
        if not is_valid_uuid(auction_id):
            return _invalid_uuid("auctionId")
        try:
            bids = self.bid_use_case.find_bid_by_auction_id(auction_id)
        except InternalError as err:
            return _error_response(convert_error(err))
        return _json([b.to_dict() for b in bids] or None, HTTPStatus.OK)


class UserController:
    """Handlers for the /user routes."""

    def __init__(self, user_use_case: Any) -> None:
        self.user_use_case = user_use_case

    def find_user_by_id(self, user_id: str) -> Response:
        if not is_valid_uuid(user_id):
            return _invalid_uuid("userId")
        try:
            user = self.user_use_case.find_user_by_id(user_id)
        except InternalError as err:
            return _error_response(convert_error(err))
        return _json(user.to_dict(), HTTPStatus.OK)