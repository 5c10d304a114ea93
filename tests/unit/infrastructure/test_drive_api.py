"""Unit tests for the Google Drive API client."""

from unittest.mock import MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

from sequencer.core.exceptions import ExternalAPIError
from sequencer.infrastructure.drive_api import DriveAPIClient


async def _sync_to_thread(f, *a, **kw):
    """Helper to mock asyncio.to_thread for synchronous execution."""
    return f(*a, **kw)


@pytest.fixture
def service():
    """Create a mock Drive service."""
    return MagicMock()


def _set_pages(service, *pages):
    list_request = MagicMock()
    list_request.execute.side_effect = list(pages)
    service.files.return_value.list.return_value = list_request
    return list_request


class TestDriveAPIClient:
    """Tests for DriveAPIClient."""

    def test_is_configured(self, service):
        """Test configuration from key or prebuilt service."""
        assert DriveAPIClient(api_key="k").is_configured is True
        assert DriveAPIClient(api_key="").is_configured is False
        assert DriveAPIClient(api_key="", service=service).is_configured is True

    @patch("sequencer.infrastructure.drive_api.build")
    def test_service_built_once(self, mock_build):
        """Test the Drive service is built lazily and cached."""
        client = DriveAPIClient(api_key="k")

        first = client.get_service()
        second = client.get_service()

        assert first is second
        mock_build.assert_called_once_with("drive", "v3", developerKey="k", cache_discovery=False)

    @pytest.mark.asyncio
    @patch("sequencer.infrastructure.drive_api.asyncio.to_thread", _sync_to_thread)
    async def test_list_folder_files_paginates(self, service):
        """Test pages are followed and the folder query is scoped."""
        _set_pages(
            service,
            {"files": [{"id": "1", "name": "a.jpg", "mimeType": "image/jpeg"}], "nextPageToken": "T"},
            {"files": [{"id": "2", "name": "b.mp4", "mimeType": "video/mp4"}]},
        )
        client = DriveAPIClient(api_key="k", service=service)

        files = await client.list_folder_files("FOLDER1")

        assert [f["id"] for f in files] == ["1", "2"]
        calls = service.files.return_value.list.call_args_list
        assert "'FOLDER1' in parents" in calls[0].kwargs["q"]
        assert calls[0].kwargs["orderBy"] == "name"
        assert calls[1].kwargs["pageToken"] == "T"

    @pytest.mark.asyncio
    @patch("sequencer.infrastructure.drive_api.asyncio.to_thread", _sync_to_thread)
    async def test_http_error(self, service):
        """Test HttpError is raised as ExternalAPIError with its status."""
        resp = MagicMock()
        resp.status = 404
        resp.reason = "Not Found"
        list_request = MagicMock()
        list_request.execute.side_effect = HttpError(resp, b'{"error": {"message": "nope"}}')
        service.files.return_value.list.return_value = list_request
        client = DriveAPIClient(api_key="k", service=service)

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.list_folder_files("FOLDER1")

        assert exc_info.value.status_code == 404
        assert exc_info.value.endpoint == "files.list"
