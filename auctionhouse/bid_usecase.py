"""Bid use cases: batched bid creation and bid lookups."""

from __future__ import annotations

import queue
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from auctionhouse import logger, settings
from auctionhouse.entities import Bid, create_bid

_STOP = object()


@dataclass(frozen=True)
class BidInput:
    """A request to place a bid."""

    user_id: str
    auction_id: str
    amount: float


@dataclass(frozen=True)
class BidOutput:
    """A bid as returned to API clients."""

    id: str
    user_id: str
    auction_id: str
    amount: float
    timestamp: datetime

    @classmethod
    def from_entity(cls, bid: Bid) -> BidOutput:
        return cls(
            id=bid.id,
            user_id=bid.user_id,
            auction_id=bid.auction_id,
            amount=bid.amount,
            timestamp=bid.timestamp,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "auction_id": self.auction_id,
            "amount": self.amount,
            "timestamp": self.timestamp.isoformat(),
        }


class BidUseCase:
    """Accepts bids and stores them in batches on a background thread.

    A batch is written when it reaches the maximum batch size or when the
    insert interval elapses, whichever comes first. Closing the use case
    writes whatever is still pending.
    """

    def __init__(
        self,
        bid_repository: Any,
        max_batch_size: int | None = None,
        batch_insert_interval: timedelta | None = None,
    ) -> None:
        self.bid_repository = bid_repository
        self._max_batch_size = (
            settings.max_batch_size() if max_batch_size is None else max_batch_size
        )
        interval = (
            settings.batch_insert_interval()
            if batch_insert_interval is None
            else batch_insert_interval
        )
        self._interval = max(interval.total_seconds(), 0.0)
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=max(self._max_batch_size, 0))
        self._lock = threading.Lock()
        self._closed = False
        self._worker = threading.Thread(
            target=self._run, name="bid-batcher", daemon=True
        )
        self._worker.start()

    def __enter__(self) -> BidUseCase:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _flush(self, batch: list[Bid]) -> None:
        if not batch:
            return
        try:
            self.bid_repository.create_bid(list(batch))
        except Exception as exc:  # keep the batcher alive whatever the store does
            logger.error("error trying to process bid batch list", exc)

    def _run(self) -> None:
        batch: list[Bid] = []
        deadline = time.monotonic() + self._interval
        while True:
            try:
                item = self._queue.get(timeout=max(deadline - time.monotonic(), 0.0))
            except queue.Empty:
                self._flush(batch)
                batch = []
                deadline = time.monotonic() + self._interval
                continue
            if item is _STOP:
                self._flush(batch)
                return
            batch.append(item)
            if len(batch) >= self._max_batch_size:
                self._flush(batch)
                batch = []
                deadline = time.monotonic() + self._interval

    def create_bid(self, bid_input: BidInput) -> None:
        """Validate a bid and queue it for storage."""
        bid = create_bid(bid_input.user_id, bid_input.auction_id, bid_input.amount)
        with self._lock:
            if self._closed:
                raise RuntimeError("bid use case is closed")
            self._queue.put(bid)

    def find_bid_by_auction_id(self, auction_id: str) -> list[BidOutput]:
        return [
            BidOutput.from_entity(bid)
            for bid in self.bid_repository.find_bid_by_auction_id(auction_id)
        ]

    def find_winning_bid_by_auction_id(self, auction_id: str) -> BidOutput:
        bid = self.bid_repository.find_winning_bid_by_auction_id(auction_id)
        return BidOutput.from_entity(bid)

    def close(self) -> None:
        """Stop the batcher after writing any pending bids."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        self._worker.join()