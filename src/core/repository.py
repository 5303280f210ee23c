"""Repository abstraction over the content collections.

At this layer records are plain documents keyed by a string ``id``. Every
public operation hands documents to the collection's record class (its
``from_document`` mapping) before returning them. ``InMemoryRepository`` and
``MongoRepository`` implement the same storage primitives, so either one can
serve the API, the portal pages and the tests.
"""

from __future__ import annotations

import copy
import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterator

from bson import ObjectId
from bson.errors import InvalidId
from django.conf import settings
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.mongo_client import get_database

logger = logging.getLogger(__name__)

Sort = tuple[tuple[str, int], ...]
DEFAULT_SORT: Sort = (("created_at", DESCENDING), ("id", DESCENDING))


class RecordNotFound(Exception):
    """Raised when no record exists for the requested id."""

    def __init__(self, label: str, record_id: str | None = None):
        self.label = label
        self.record_id = record_id
        super().__init__(f"{label} not found")


class DuplicateRecord(Exception):
    """Raised when a write would break a collection's uniqueness constraint."""

    def __init__(self, label: str, field_name: str, value: Any):
        self.label = label
        self.field_name = field_name
        self.value = value
        super().__init__(f"{label} with this {field_name} already exists")


class RepositoryUnavailable(Exception):
    """Raised when the backing store cannot be reached or fails a command."""


@dataclass(frozen=True)
class CollectionConfig:
    """Static description of one collection and how to index it."""

    name: str
    label: str
    from_document: Callable[[dict], Any]
    unique_field: str
    search_fields: tuple[str, ...] = ()
    indexes: tuple[tuple[list, dict], ...] = ()


@dataclass
class Page:
    """One page of a listing plus the counts needed to paginate it."""

    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int | None = None

    @property
    def pages(self) -> int:
        if not self.limit:
            return 1 if self.total else 0
        return math.ceil(self.total / self.limit)

    def pagination(self) -> dict[str, int | None]:
        return {"page": self.page, "limit": self.limit, "total": self.total, "pages": self.pages}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_record_id() -> str:
    """Generate an id in the same format MongoDB assigns."""
    return str(ObjectId())


class Repository:
    """Collection operations shared by every storage backend.

    Subclasses provide the storage primitives (``_find_by_id``, ``_find_one``,
    ``_find``, ``_count``, ``_insert``, ``_update``, ``_remove``). This class
    applies uniqueness checks, timestamps and partial-merge semantics on top.
    """

    def __init__(self, config: CollectionConfig):
        self.config = config

    def list(
        self,
        filters: dict[str, Any] | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int | None = None,
        sort: Sort = DEFAULT_SORT,
    ) -> Page:
        """Return records matching ``filters`` and ``search``, one page at a time."""
        query = _clean_filters(filters)
        search = (search or "").strip() or None
        skip = (page - 1) * limit if limit else 0
        documents, total = self._find(query, search, sort, skip, limit)
        return Page(
            items=[self.config.from_document(doc) for doc in documents],
            total=total,
            page=page,
            limit=limit,
        )

    def get_by_id(self, record_id: str):
        document = self._find_by_id(record_id)
        if document is None:
            raise RecordNotFound(self.config.label, record_id)
        return self.config.from_document(document)

    def get_by_field(self, field_name: str, value: Any):
        """Equality lookup, e.g. by slug or email. Returns ``None`` when absent."""
        document = self._find_one({field_name: value})
        return self.config.from_document(document) if document is not None else None

    def count(self, filters: dict[str, Any] | None = None) -> int:
        return self._count(_clean_filters(filters))

    def create(self, fields: dict[str, Any]):
        """Insert a new record after checking the unique field is free."""
        unique = self.config.unique_field
        self._ensure_unique(fields.get(unique))

        now = _now()
        document = copy.deepcopy(fields)
        document.pop("id", None)
        document["created_at"] = now
        document["updated_at"] = now
        stored = self._insert(document)
        logger.info("Created %s %s", self.config.label.lower(), stored["id"])
        return self.config.from_document(stored)

    def update(self, record_id: str, fields: dict[str, Any]):
        """Merge ``fields`` over the stored record; omitted fields keep their values."""
        current = self._find_by_id(record_id)
        if current is None:
            raise RecordNotFound(self.config.label, record_id)

        unique = self.config.unique_field
        if unique in fields and fields[unique] != current.get(unique):
            self._ensure_unique(fields[unique], exclude_id=current["id"])

        changes = {k: copy.deepcopy(v) for k, v in fields.items() if k not in ("id", "created_at", "updated_at")}
        previous = current.get("updated_at")
        now = _now()
        changes["updated_at"] = max(now, previous) if previous else now

        stored = self._update(current["id"], changes)
        if stored is None:
            raise RecordNotFound(self.config.label, record_id)
        logger.info("Updated %s %s (%s)", self.config.label.lower(), record_id, ", ".join(sorted(fields)))
        return self.config.from_document(stored)

    def delete(self, record_id: str) -> None:
        if not self._remove(record_id):
            raise RecordNotFound(self.config.label, record_id)
        logger.info("Deleted %s %s", self.config.label.lower(), record_id)

    def ensure_indexes(self) -> None:
        """Create the collection's indexes. A no-op for stores without indexes."""

    def _ensure_unique(self, value: Any, exclude_id: str | None = None) -> None:
        unique = self.config.unique_field
        clash = self._find_one({unique: value})
        if clash is not None and clash["id"] != exclude_id:
            raise DuplicateRecord(self.config.label, unique, value)

    # Storage primitives

    def _find_by_id(self, record_id: str) -> dict | None:
        raise NotImplementedError

    def _find_one(self, query: dict[str, Any]) -> dict | None:
        raise NotImplementedError

    def _find(self, query: dict[str, Any], search: str | None, sort: Sort, skip: int, limit: int | None) -> tuple[list[dict], int]:
        raise NotImplementedError

    def _count(self, query: dict[str, Any]) -> int:
        raise NotImplementedError

    def _insert(self, document: dict) -> dict:
        raise NotImplementedError

    def _update(self, record_id: str, changes: dict[str, Any]) -> dict | None:
        raise NotImplementedError

    def _remove(self, record_id: str) -> bool:
        raise NotImplementedError


def _clean_filters(filters: dict[str, Any] | None) -> dict[str, Any]:
    return {k: v for k, v in (filters or {}).items() if v not in (None, "")}


class InMemoryRepository(Repository):
    """Process-local store; every read and write goes through a deep copy."""

    def __init__(self, config: CollectionConfig):
        super().__init__(config)
        self._documents: dict[str, dict] = {}

    def _find_by_id(self, record_id):
        document = self._documents.get(record_id)
        return copy.deepcopy(document) if document is not None else None

    def _find_one(self, query):
        for document in self._documents.values():
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    def _find(self, query, search, sort, skip, limit):
        documents = [
            doc for doc in self._documents.values()
            if _matches(doc, query) and self._matches_search(doc, search)
        ]
        for key, direction in reversed(sort):
            documents.sort(key=lambda doc: _sort_value(doc.get(key)), reverse=direction == DESCENDING)
        total = len(documents)
        window = documents[skip:skip + limit] if limit else documents[skip:]
        return [copy.deepcopy(doc) for doc in window], total

    def _count(self, query):
        return sum(1 for doc in self._documents.values() if _matches(doc, query))

    def _insert(self, document):
        document["id"] = new_record_id()
        self._documents[document["id"]] = copy.deepcopy(document)
        return document

    def _update(self, record_id, changes):
        document = self._documents.get(record_id)
        if document is None:
            return None
        document.update(copy.deepcopy(changes))
        return copy.deepcopy(document)

    def _remove(self, record_id):
        return self._documents.pop(record_id, None) is not None

    def _matches_search(self, document: dict, search: str | None) -> bool:
        if not search:
            return True
        haystack = " ".join(_as_text(document.get(name)) for name in self.config.search_fields).lower()
        return any(term in haystack for term in search.lower().split())


def _matches(document: dict, query: dict[str, Any]) -> bool:
    for key, expected in query.items():
        actual = document.get(key)
        if isinstance(actual, list):
            if expected not in actual:
                return False
        elif actual != expected:
            return False
    return True


def _as_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return "" if value is None else str(value)


def _sort_value(value: Any) -> tuple:
    # None sorts before everything, as it does in MongoDB.
    return (value is not None, value if value is not None else 0)


@contextmanager
def _store_errors(label: str) -> Iterator[None]:
    """Translate driver failures into repository exceptions."""
    try:
        yield
    except DuplicateKeyError:
        raise
    except PyMongoError as exc:
        logger.error("MongoDB command on %s failed: %s", label, exc)
        raise RepositoryUnavailable(str(exc)) from exc


def _object_id(record_id: str) -> ObjectId | None:
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError):
        return None


def _from_mongo(document: dict | None) -> dict | None:
    if document is None:
        return None
    document = dict(document)
    document["id"] = str(document.pop("_id"))
    return document


class MongoRepository(Repository):
    """Repository backed by one MongoDB collection."""

    def __init__(self, config: CollectionConfig, database=None):
        super().__init__(config)
        self._database = database

    @property
    def collection(self):
        database = self._database if self._database is not None else get_database()
        return database[self.config.name]

    def ensure_indexes(self) -> None:
        with _store_errors(self.config.name):
            for keys, options in self.config.indexes:
                self.collection.create_index(keys, **options)
        logger.info("Ensured %d indexes on %s", len(self.config.indexes), self.config.name)

    def _find_by_id(self, record_id):
        oid = _object_id(record_id)
        if oid is None:
            return None
        with _store_errors(self.config.name):
            return _from_mongo(self.collection.find_one({"_id": oid}))

    def _find_one(self, query):
        with _store_errors(self.config.name):
            return _from_mongo(self.collection.find_one(query))

    def _find(self, query, search, sort, skip, limit):
        if search:
            query = dict(query, **{"$text": {"$search": search}})
        mongo_sort = [("_id" if key == "id" else key, direction) for key, direction in sort]
        with _store_errors(self.config.name):
            cursor = self.collection.find(query).sort(mongo_sort).skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            documents = [_from_mongo(doc) for doc in cursor]
            total = self.collection.count_documents(query)
        return documents, total

    def _count(self, query):
        with _store_errors(self.config.name):
            return self.collection.count_documents(query)

    def _insert(self, document):
        try:
            with _store_errors(self.config.name):
                result = self.collection.insert_one(document)
        except DuplicateKeyError as exc:
            unique = self.config.unique_field
            raise DuplicateRecord(self.config.label, unique, document.get(unique)) from exc
        document["_id"] = result.inserted_id
        return _from_mongo(document)

    def _update(self, record_id, changes):
        try:
            with _store_errors(self.config.name):
                updated = self.collection.find_one_and_update(
                    {"_id": ObjectId(record_id)},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
        except DuplicateKeyError as exc:
            unique = self.config.unique_field
            raise DuplicateRecord(self.config.label, unique, changes.get(unique)) from exc
        return _from_mongo(updated)

    def _remove(self, record_id):
        oid = _object_id(record_id)
        if oid is None:
            return False
        with _store_errors(self.config.name):
            return self.collection.delete_one({"_id": oid}).deleted_count == 1


BACKENDS: dict[str, type[Repository]] = {
    "memory": InMemoryRepository,
    "mongo": MongoRepository,
}

_repositories: dict[str, Repository] = {}


def get_repository(config: CollectionConfig) -> Repository:
    """Return the cached repository for ``config`` on the configured backend."""

    repository = _repositories.get(config.name)
    if repository is None:
        backend = BACKENDS.get(settings.CONTENT_BACKEND)
        if backend is None:
            raise RepositoryUnavailable(f"Unknown CONTENT_BACKEND {settings.CONTENT_BACKEND!r}")
        repository = _repositories[config.name] = backend(config)
    return repository


def reset_repositories() -> None:
    """Forget cached repositories so the next lookup rebuilds them."""

    _repositories.clear()


__all__ = [
    "CollectionConfig",
    "DEFAULT_SORT",
    "DuplicateRecord",
    "InMemoryRepository",
    "MongoRepository",
    "Page",
    "RecordNotFound",
    "Repository",
    "RepositoryUnavailable",
    "get_repository",
    "new_record_id",
    "reset_repositories",
]
