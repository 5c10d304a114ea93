"""Google Drive folder importer.

Lists the images and videos of a folder shared as "anyone with the link".
Each file name becomes the item's title (videos) or alt text (images), so
imported items are never left unlabeled.
"""

import re
from typing import Any

from sequencer.infrastructure.drive_api import DriveAPIClient
from sequencer.services.importers.base import BaseImporter, ImportResult, RawCandidate
from sequencer.services.media.classifier import drive_file_url

FOLDER_ID_PATTERNS = [
    re.compile(r"drive\.google\.com/drive/(?:u/\d+/)?folders/([A-Za-z0-9_-]+)"),
    re.compile(r"drive\.google\.com/open\?(?:[^#]*&)?id=([A-Za-z0-9_-]+)"),
    re.compile(r"[?&]id=([A-Za-z0-9_-]+)"),
]
BARE_FOLDER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{10,}$")


def extract_folder_id(url: str) -> str | None:
    """Extract a folder id from a Drive folder URL or bare id.

    Args:
        url: Folder URL (/drive/folders/{id}, /drive/u/N/folders/{id},
            open?id={id}) or bare id

    Returns:
        Folder id, or None if not recognized
    """
    for pattern in FOLDER_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    if BARE_FOLDER_ID_PATTERN.match(url):
        return url
    return None


class DriveFolderImporter(BaseImporter):
    """Import the media files of a shared Drive folder."""

    source_name = "drive_folder"
    invalid_input_message = "Invalid Google Drive folder URL. Please check the URL and try again."
    not_configured_message = "Google Drive API not configured. Please contact support."
    quota_message = (
        "Access denied. Make sure the folder is shared with \"Anyone with the link\"."
    )
    not_found_message = "Folder not found. Make sure the folder URL is correct."
    empty_message = "No images or videos found in this folder."
    unavailable_message = "Failed to import folder. Please try again."

    def __init__(self, client: DriveAPIClient, limit: int = 50) -> None:
        """Initialize folder importer.

        Args:
            client: Drive API client
            limit: Maximum number of files to import
        """
        self._client = client
        self.limit = limit

    @property
    def is_configured(self) -> bool:
        return self._client.is_configured

    def parse_reference(self, reference: str) -> str | None:
        return extract_folder_id(reference)

    async def fetch(self, source_id: str) -> ImportResult:
        files = await self._client.list_folder_files(source_id, limit=self.limit)
        items = [c for c in (self._to_candidate(f) for f in files) if c]
        return ImportResult(source=self.source_name, items=items, count=len(items))

    def _to_candidate(self, file: dict[str, Any]) -> RawCandidate | None:
        """Convert a Drive file resource to a candidate.

        Video files get a "video:" prefix so the classifier treats them as
        Drive videos rather than images.
        """
        file_id = file.get("id")
        if not file_id:
            return None
        mime_type = file.get("mimeType") or ""
        url = drive_file_url(file_id)
        if mime_type.startswith("video/"):
            url = f"video:{url}"
        return RawCandidate(
            url=url,
            title=file.get("name"),
            mime_type=mime_type,
        )


__all__ = ["DriveFolderImporter", "extract_folder_id"]
