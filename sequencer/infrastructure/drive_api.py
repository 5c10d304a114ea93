"""Google Drive API v3 read client.

Lists the media files of a folder shared as "anyone with the link".
Uses google-api-python-client with key authentication; blocking calls
run in a worker thread.
"""

import asyncio
from typing import Any

from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError

from sequencer.core.exceptions import ExternalAPIError
from sequencer.core.logging import get_logger

logger = get_logger(__name__)

# files.list page size used for folder listings
DEFAULT_PAGE_SIZE = 50

FILE_FIELDS = "nextPageToken, files(id, name, mimeType)"


class DriveAPIClient:
    """Key-authenticated Drive folder lister.

    Example:
        >>> client = DriveAPIClient(api_key="...")
        >>> files = await client.list_folder_files("1AbCdEf")
    """

    service_name = "Google Drive"

    def __init__(self, api_key: str, service: Resource | None = None) -> None:
        """Initialize Drive client.

        Args:
            api_key: Google API key with the Drive API enabled
            service: Prebuilt Drive service (built lazily when omitted)
        """
        self.api_key = api_key
        self._service = service

    @property
    def is_configured(self) -> bool:
        """Whether an API key (or a prebuilt service) is available."""
        return bool(self.api_key) or self._service is not None

    def get_service(self) -> Resource:
        """Get the Drive v3 service, building it on first use.

        Returns:
            Drive API service resource
        """
        if self._service is None:
            self._service = build(
                "drive", "v3", developerKey=self.api_key, cache_discovery=False
            )
            logger.debug("Created Google Drive API service")
        return self._service

    async def list_folder_files(
        self,
        folder_id: str,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """List image and video files directly inside a folder.

        Args:
            folder_id: Drive folder ID
            limit: Maximum number of files to return

        Returns:
            File resources with id, name and mimeType, ordered by name

        Raises:
            ExternalAPIError: If the Drive API call fails
        """
        service = self.get_service()
        query = (
            f"'{folder_id}' in parents and trashed = false and "
            "(mimeType contains 'image/' or mimeType contains 'video/')"
        )

        files: list[dict[str, Any]] = []
        page_token: str | None = None

        while len(files) < limit:
            request = service.files().list(
                q=query,
                fields=FILE_FIELDS,
                orderBy="name",
                pageSize=min(limit - len(files), DEFAULT_PAGE_SIZE),
                pageToken=page_token,
            )
            try:
                response = await asyncio.to_thread(request.execute)
            except HttpError as e:
                raise ExternalAPIError(
                    service=self.service_name,
                    message=f"Folder listing failed: {e}",
                    status_code=e.resp.status,
                    endpoint="files.list",
                ) from e

            files.extend(response.get("files", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Drive folder listed", folder_id=folder_id, count=len(files))
        return files[:limit]


__all__ = ["DriveAPIClient"]
