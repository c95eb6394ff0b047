"""Connection to the MongoDB database named in the environment."""

from __future__ import annotations

import os

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from auctionhouse import logger

MONGODB_URL = "MONGODB_URL"
MONGODB_DB = "MONGODB_DB"


def connect_database() -> Database:
    """Connect to MONGODB_URL, check the server answers, and return MONGODB_DB.

    Raises the driver's error when the connection or the ping fails.
    """
    url = os.environ.get(MONGODB_URL, "")
    name = os.environ.get(MONGODB_DB, "")

    try:
        client = MongoClient(url)
    except PyMongoError as exc:
        logger.error("Error trying to connect to mongodb database", exc)
        raise

    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        logger.error("Error trying to ping mongodb database", exc)
        client.close()
        raise

    return client[name]