"""Auction storage in MongoDB, with a monitor that closes expired auctions."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any

from pymongo.errors import PyMongoError

from auctionhouse import logger, settings
from auctionhouse.entities import Auction, AuctionStatus, ProductCondition
from auctionhouse.errors import InternalError, internal_server_error

_CONDITIONS = {int(c) for c in ProductCondition}
_STATUSES = {int(s) for s in AuctionStatus}


def _to_document(auction: Auction) -> dict[str, Any]:
    return {
        "_id": auction.id,
        "product_name": auction.product_name,
        "category": auction.category,
        "description": auction.description,
        "condition": int(auction.condition),
        "status": int(auction.status),
        "timestamp": int(auction.timestamp.timestamp()),
    }


def _from_document(document: dict[str, Any]) -> Auction:
    condition = int(document.get("condition", 0))
    status = int(document.get("status", 0))
    return Auction(
        id=document["_id"],
        product_name=document.get("product_name", ""),
        category=document.get("category", ""),
        description=document.get("description", ""),
        condition=ProductCondition(condition) if condition in _CONDITIONS else condition,
        status=AuctionStatus(status) if status in _STATUSES else status,
        timestamp=datetime.fromtimestamp(int(document.get("timestamp", 0)), timezone.utc),
    )


class AuctionRepository:
    """Stores auctions in the "auctions" collection.

    A background thread checks every ``monitor_interval`` seconds for active
    auctions whose duration has run out and closes them.
    """

    def __init__(self, database: Any, monitor_interval: float = 60.0) -> None:
        self.collection = database["auctions"]
        self._monitor_interval = monitor_interval
        self._stop = threading.Event()
        self._monitor = threading.Thread(
            target=self._run_monitor, name="auction-monitor", daemon=True
        )
        self._monitor.start()

    def __enter__(self) -> AuctionRepository:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop_auction_monitor()

    def _run_monitor(self) -> None:
        while not self._stop.wait(self._monitor_interval):
            self.check_and_close_expired_auctions()
        logger.info("Auction monitor stopped")

    def create_auction(self, auction: Auction) -> None:
        try:
            self.collection.insert_one(_to_document(auction))
        except PyMongoError as exc:
            logger.error("Error trying to insert auction", exc)
            raise internal_server_error("Error trying to insert auction") from exc

    def close_auction(self, auction_id: str) -> None:
        """Mark an auction as completed."""
        try:
            self.collection.update_one(
                {"_id": auction_id},
                {"$set": {"status": int(AuctionStatus.COMPLETED)}},
            )
        except PyMongoError as exc:
            logger.error("Error trying to close auction", exc)
            raise internal_server_error("Error trying to close auction") from exc
        logger.info("Auction closed successfully", auction_id=auction_id)

    def find_auction_by_id(self, auction_id: str) -> Auction:
        try:
            document = self.collection.find_one({"_id": auction_id})
        except PyMongoError as exc:
            logger.error(f"Error trying to find auction by id = {auction_id}", exc)
            raise internal_server_error("Error trying to find auction by id") from exc
        if document is None:
            logger.error(
                f"Error trying to find auction by id = {auction_id}",
                LookupError("no documents in result"),
            )
            raise internal_server_error("Error trying to find auction by id")
        return _from_document(document)

    def find_auctions(
        self, status: int, category: str, product_name: str
    ) -> list[Auction]:
        """Return auctions matching the given filters; empty values match all."""
        query: dict[str, Any] = {}
        if int(status) != 0:
            query["status"] = int(status)
        if category:
            query["category"] = category
        if product_name:
            query["productName"] = {"$regex": product_name, "$options": "i"}

        try:
            documents = list(self.collection.find(query))
        except PyMongoError as exc:
            logger.error("Error finding auctions", exc)
            raise internal_server_error("Error finding auctions") from exc
        return [_from_document(document) for document in documents]

    def check_and_close_expired_auctions(self) -> None:
        """Close every active auction whose duration has elapsed."""
        try:
            documents = list(
                self.collection.find({"status": int(AuctionStatus.ACTIVE)})
            )
        except PyMongoError as exc:
            logger.error("Error finding active auctions", exc)
            return

        duration = settings.auction_duration()
        now = datetime.now(timezone.utc)
        for document in documents:
            started = datetime.fromtimestamp(
                int(document.get("timestamp", 0)), timezone.utc
            )
            expires = started + duration
            if now > expires:
                logger.info(
                    "Closing expired auction",
                    auction_id=document["_id"],
                    expired_at=expires.isoformat(),
                )
                try:
                    self.close_auction(document["_id"])
                except InternalError as exc:
                    logger.error("Error closing expired auction", exc)

    def stop_auction_monitor(self) -> None:
        """Stop the expiry monitor and wait for it to finish."""
        self._stop.set()
        self._monitor.join()