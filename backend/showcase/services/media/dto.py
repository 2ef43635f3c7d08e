"""DTOs for MediaService."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MediaAttachIn:
    """
    Input DTO for attaching an already uploaded asset to a project.

    :param url: Public URL returned by the media host.
    :param public_id: Asset identifier at the media host (used for deletion).
    :param alt_text: Optional alternative text.
    :param media_type: ``image`` (default) or ``video``.
    """

    url: str
    public_id: str
    alt_text: str | None = None
    media_type: str = "image"
