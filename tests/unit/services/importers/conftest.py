"""Shared fixtures for import adapter tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from sequencer.infrastructure.drive_api import DriveAPIClient
from sequencer.infrastructure.http_client import HTTPClient
from sequencer.infrastructure.youtube_api import YouTubeDataClient


@pytest.fixture
def mock_http_client() -> HTTPClient:
    """Create a mock HTTP client."""
    client = MagicMock(spec=HTTPClient)
    client.get = AsyncMock()
    client.post = AsyncMock()
    return client


@pytest.fixture
def youtube_client(mock_http_client) -> YouTubeDataClient:
    """Create a YouTube client over the mock HTTP client."""
    return YouTubeDataClient(mock_http_client, api_key="test-key")


@pytest.fixture
def mock_drive_client() -> DriveAPIClient:
    """Create a mock Drive client."""
    client = MagicMock(spec=DriveAPIClient)
    client.is_configured = True
    client.list_folder_files = AsyncMock()
    return client


def create_mock_response(json_data=None, text_data=None, status_code=200):
    """Create a mock HTTP response.

    Args:
        json_data: Data to return from json()
        text_data: Data to return from text property
        status_code: HTTP status code

    Returns:
        Mock response object
    """
    response = MagicMock()
    response.status_code = status_code
    response.raise_for_status = MagicMock()

    if json_data is not None:
        response.json.return_value = json_data

    if text_data is not None:
        response.text = text_data

    return response


def playlist_entry(video_id: str, title: str, channel: str = "Kids Channel") -> dict:
    """Build a playlistItem resource with a snippet part."""
    return {
        "snippet": {
            "title": title,
            "channelTitle": channel,
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
            "thumbnails": {"default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"}},
        }
    }


def video_resource(video_id: str, title: str, duration: str, channel: str = "Kids Channel"):
    """Build a video resource with snippet and contentDetails parts."""
    return {
        "id": video_id,
        "snippet": {
            "title": title,
            "channelTitle": channel,
            "thumbnails": {
                "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
                "medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"},
            },
        },
        "contentDetails": {"duration": duration},
    }
