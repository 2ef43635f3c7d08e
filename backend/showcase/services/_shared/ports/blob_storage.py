from __future__ import annotations

from typing import Protocol


class BlobStorage(Protocol):
    """Port for removing uploaded media assets from external storage."""

    def delete(self, public_id: str) -> None:
        """Delete the asset identified by ``public_id``. Idempotent."""
        ...


class InMemoryBlobStorage(BlobStorage):
    """Records deletions; optionally fails for selected ids (tests)."""

    def __init__(self, *, failing: set[str] | None = None) -> None:
        self.deleted: list[str] = []
        self.failing = set(failing or ())

    def delete(self, public_id: str) -> None:
        if public_id in self.failing:
            raise RuntimeError(f"storage refused to delete {public_id!r}")
        self.deleted.append(public_id)
