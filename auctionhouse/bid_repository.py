"""Bid storage in MongoDB, refusing bids on closed or expired auctions."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from pymongo.errors import PyMongoError

from auctionhouse import logger, settings
from auctionhouse.entities import AuctionStatus, Bid
from auctionhouse.errors import InternalError, internal_server_error


def _to_document(bid: Bid) -> dict[str, Any]:
    return {
        "_id": bid.id,
        "user_id": bid.user_id,
        "auction_id": bid.auction_id,
        "amount": bid.amount,
        "timestamp": int(bid.timestamp.timestamp()),
    }


def _from_document(document: dict[str, Any]) -> Bid:
    return Bid(
        id=document["_id"],
        user_id=document.get("user_id", ""),
        auction_id=document.get("auction_id", ""),
        amount=document.get("amount", 0.0),
        timestamp=datetime.fromtimestamp(int(document.get("timestamp", 0)), timezone.utc),
    )


class BidRepository:
    """Stores bids in the "bids" collection.

    The status and end time of each auction seen are cached; a bid on an
    auction known to be completed or past its end time is dropped.
    """

    def __init__(
        self,
        database: Any,
        auction_repository: Any,
        auction_interval: timedelta | None = None,
    ) -> None:
        self.collection = database["bids"]
        self.auction_repository = auction_repository
        self._auction_interval = (
            settings.auction_duration() if auction_interval is None else auction_interval
        )
        self._status_cache: dict[str, int] = {}
        self._end_time_cache: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def _insert(self, bid: Bid) -> None:
        try:
            self.collection.insert_one(_to_document(bid))
        except PyMongoError as exc:
            logger.error("Error trying to insert bid", exc)

    def _store(self, bid: Bid) -> None:
        with self._lock:
            status = self._status_cache.get(bid.auction_id)
            end_time = self._end_time_cache.get(bid.auction_id)

        if status is not None and end_time is not None:
            if status == AuctionStatus.COMPLETED or datetime.now(timezone.utc) > end_time:
                return
            self._insert(bid)
            return

        try:
            auction = self.auction_repository.find_auction_by_id(bid.auction_id)
        except InternalError as exc:
            logger.error("Error trying to find auction by id", exc)
            return
        if auction.status == AuctionStatus.COMPLETED:
            return

        with self._lock:
            self._status_cache[bid.auction_id] = auction.status
            self._end_time_cache[bid.auction_id] = (
                auction.timestamp + self._auction_interval
            )
        self._insert(bid)

    def create_bid(self, bids: Iterable[Bid]) -> None:
        """Store a batch of bids concurrently; failures are logged, not raised."""
        pending = list(bids)
        if not pending:
            return
        with ThreadPoolExecutor(max_workers=len(pending)) as pool:
            list(pool.map(self._store, pending))

    def find_bid_by_auction_id(self, auction_id: str) -> list[Bid]:
        message = f"Error trying to find bids by auctionId {auction_id}"
        try:
            documents = list(self.collection.find({"auctionId": auction_id}))
        except PyMongoError as exc:
            logger.error(message, exc)
            raise internal_server_error(message) from exc
        return [_from_document(document) for document in documents]

    def find_winning_bid_by_auction_id(self, auction_id: str) -> Bid:
        """Return the highest bid placed on the auction."""
        message = "Error trying to find the auction winner"
        try:
            document = self.collection.find_one(
                {"auction_id": auction_id}, sort=[("amount", -1)]
            )
        except PyMongoError as exc:
            logger.error(message, exc)
            raise internal_server_error(message) from exc
        if document is None:
            logger.error(message, LookupError("no documents in result"))
            raise internal_server_error(message)
        return _from_document(document)