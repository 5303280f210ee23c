"""Shared MongoDB client factory for the content repositories."""

from django.conf import settings
from pymongo import MongoClient
from pymongo.database import Database

_client: MongoClient | None = None


def get_mongo_client() -> MongoClient:
    """Return a singleton MongoClient using MONGODB_URI from settings."""

    global _client
    if _client is None:
        _client = MongoClient(
            settings.MONGODB_URI,
            tz_aware=True,
            serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
        )
    return _client


def get_database() -> Database:
    """Return the configured FlexPress database."""

    return get_mongo_client()[settings.MONGODB_DB]


__all__ = ["get_mongo_client", "get_database"]
