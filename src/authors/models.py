"""Author record stored in the ``authors`` collection."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class Author:
    """Canonical author record. Articles refer to it by ``id`` only."""

    id: str
    name: str
    email: str
    avatar: str = ""
    bio: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Author":
        return cls(
            id=str(document["id"]),
            name=document.get("name", ""),
            email=document.get("email", ""),
            avatar=document.get("avatar") or "",
            bio=document.get("bio") or "",
            created_at=document.get("created_at"),
            updated_at=document.get("updated_at"),
        )

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.name.split()[:2]).upper()


__all__ = ["Author"]
