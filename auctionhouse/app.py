"""The HTTP application and its command-line entry point."""

from __future__ import annotations

import argparse
import signal
from pathlib import Path
from typing import Any, Sequence

from dotenv import load_dotenv
from flask import Flask
from pymongo.errors import PyMongoError

from auctionhouse import logger
from auctionhouse.auction_repository import AuctionRepository
from auctionhouse.auction_usecase import AuctionUseCase
from auctionhouse.bid_repository import BidRepository
from auctionhouse.bid_usecase import BidUseCase
from auctionhouse.controllers import AuctionController, BidController, UserController
from auctionhouse.database import connect_database
from auctionhouse.user_repository import UserRepository
from auctionhouse.user_usecase import UserUseCase


def create_app(auction_use_case: Any, bid_use_case: Any, user_use_case: Any) -> Flask:
    """Build the Flask application with every route wired to its controller."""
    app = Flask("auctionhouse")
    auctions = AuctionController(auction_use_case)
    bids = BidController(bid_use_case)
    users = UserController(user_use_case)

    routes = [
        ("/auction", "find_auctions", auctions.find_auctions, "GET"),
        ("/auction/<auction_id>", "find_auction_by_id", auctions.find_auction_by_id, "GET"),
        ("/auction", "create_auction", auctions.create_auction, "POST"),
        (
            "/auction/winner/<auction_id>",
            "find_winning_bid",
            auctions.find_winning_bid_by_auction_id,
            "GET",
        ),
        ("/bid", "create_bid", bids.create_bid, "POST"),
        ("/bid/<auction_id>", "find_bids", bids.find_bid_by_auction_id, "GET"),
        ("/user/<user_id>", "find_user", users.find_user_by_id, "GET"),
    ]
    for rule, endpoint, view, method in routes:
        app.add_url_rule(rule, endpoint=endpoint, view_func=view, methods=[method])
    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Load settings, connect to the database and serve the API."""
    parser = argparse.ArgumentParser(
        prog="auctionhouse", description="Run the auction HTTP service."
    )
    parser.add_argument("--env-file", default=".env", help="file of environment settings")
    parser.add_argument("--host", default="0.0.0.0", help="address to listen on")
    parser.add_argument("--port", type=int, default=8080, help="port to listen on")
    args = parser.parse_args(argv)

    env_file = Path(args.env_file)
    if not env_file.is_file():
        logger.error(
            "Error trying to load env variables", FileNotFoundError(str(env_file))
        )
        return 1
    load_dotenv(env_file)

    try:
        database = connect_database()
    except PyMongoError:
        return 1

    auction_repository = AuctionRepository(database)
    bid_repository = BidRepository(database, auction_repository)
    user_repository = UserRepository(database)

    app = create_app(
        AuctionUseCase(auction_repository, bid_repository),
        BidUseCase(bid_repository),
        UserUseCase(user_repository),
    )

    def shutdown(signum: int, frame: object) -> None:
        logger.info("Shutting down auction monitor...")
        auction_repository.stop_auction_monitor()
        raise SystemExit(0)

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    app.run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())