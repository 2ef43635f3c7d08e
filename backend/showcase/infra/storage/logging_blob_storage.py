"""Blob storage adapter that only records deletions in the log."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class LoggingBlobStorage:
    """
    Default adapter when no external media host is configured.

    Uploads happen client-side against the media host; the API only stores
    ``public_id`` references, so deleting here means logging the request.
    """

    def delete(self, public_id: str) -> None:
        log.info("storage.delete", extra={"resource": "media", "resource_id": public_id})
