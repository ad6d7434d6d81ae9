"""Feed catalogue storage - SQLite-backed CRUD over subscribable feeds."""

from feedstore.config import StoreConfig, load_config
from feedstore.db import connection_factory, open_connection
from feedstore.errors import DataIntegrityError, FeedStoreError, InvalidStatus, StoreError
from feedstore.feeds import FeedRepository
from feedstore.models import Feed, FeedStatus, FeedToCreate, FeedToUpdate

__all__ = [
    "DataIntegrityError",
    "Feed",
    "FeedRepository",
    "FeedStatus",
    "FeedStoreError",
    "FeedToCreate",
    "FeedToUpdate",
    "InvalidStatus",
    "StoreConfig",
    "StoreError",
    "connection_factory",
    "load_config",
    "open_connection",
]
