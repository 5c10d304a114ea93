"""Infrastructure layer components.

This module provides the HTTP transport and the external read-only API
clients (YouTube Data API, Google Drive API) used by the import adapters.
"""

from sequencer.infrastructure.drive_api import DriveAPIClient
from sequencer.infrastructure.http_client import HTTPClient
from sequencer.infrastructure.youtube_api import YouTubeDataClient, parse_iso_duration

__all__ = ["DriveAPIClient", "HTTPClient", "YouTubeDataClient", "parse_iso_duration"]
