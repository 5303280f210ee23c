"""Author use cases shared by the REST endpoints and the portal pages."""

from typing import Any

from .models import Author
from .repository import get_author_repository
from .serializers import AuthorSerializer


def validate_author(data: Any, partial: bool = False) -> dict[str, Any]:
    serializer = AuthorSerializer(data=data, partial=partial)
    serializer.is_valid(raise_exception=True)
    return dict(serializer.validated_data)


def list_authors() -> list[Author]:
    """Every author, newest first."""
    return get_author_repository().list().items


def get_author(author_id: str) -> Author:
    return get_author_repository().get_by_id(author_id)


def create_author(data: Any) -> Author:
    return get_author_repository().create(validate_author(data))


def update_author(author_id: str, data: Any) -> Author:
    return get_author_repository().update(author_id, validate_author(data, partial=True))


def delete_author(author_id: str) -> None:
    """Remove the author. Articles that reference it are left untouched."""
    get_author_repository().delete(author_id)


__all__ = ["create_author", "delete_author", "get_author", "list_authors", "update_author", "validate_author"]
