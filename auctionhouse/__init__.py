"""Timed auctions over HTTP, stored in MongoDB, with batched bid storage."""

__version__ = "0.1.0"