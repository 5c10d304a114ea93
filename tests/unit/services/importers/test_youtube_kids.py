"""Unit tests for the YouTube Kids channel importer."""

import pytest

from sequencer.core.exceptions import ImportErrorKind, UpstreamImportError
from sequencer.services.importers.youtube_kids import (
    YouTubeKidsChannelImporter,
    extract_channel_id,
    uploads_playlist_id,
)

from .conftest import create_mock_response


def upload_entry(video_id: str, title: str) -> dict:
    """Build an uploads playlistItem with snippet and contentDetails."""
    return {
        "snippet": {
            "title": title,
            "thumbnails": {"default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"}},
        },
        "contentDetails": {"videoId": video_id},
    }


class TestChannelIds:
    """Tests for channel id helpers."""

    def test_extract_from_url(self):
        """Test youtubekids.com channel links."""
        url = "https://www.youtubekids.com/channel/UCabc_123?hl=en"
        assert extract_channel_id(url) == "UCabc_123"

    def test_extract_bare_id(self):
        """Test bare UC ids are accepted."""
        assert extract_channel_id("UCabc") == "UCabc"

    def test_extract_invalid(self):
        """Test non-channel input is rejected."""
        assert extract_channel_id("https://youtube.com/@someone") is None

    def test_uploads_playlist_id(self):
        """Test UC prefix is replaced with UU."""
        assert uploads_playlist_id("UCabc") == "UUabc"


class TestYouTubeKidsChannelImporter:
    """Tests for YouTubeKidsChannelImporter."""

    @pytest.fixture
    def importer(self, youtube_client):
        """Create importer over the mocked client."""
        return YouTubeKidsChannelImporter(youtube_client)

    @pytest.mark.asyncio
    async def test_import_uploads(self, importer, mock_http_client):
        """Test uploads are fetched from the UU playlist."""
        mock_http_client.get.return_value = create_mock_response(
            {"items": [upload_entry("aaaaaaaaaaa", "Song"), upload_entry("bbbbbbbbbbb", "Story")]}
        )

        result = await importer.import_from("https://www.youtubekids.com/channel/UCxyz")

        assert result.count == 2
        assert [c.video_id for c in result.items] == ["aaaaaaaaaaa", "bbbbbbbbbbb"]
        assert result.items[0].url == "https://youtube.com/watch?v=aaaaaaaaaaa"
        params = mock_http_client.get.call_args.kwargs["params"]
        assert params["playlistId"] == "UUxyz"
        assert params["part"] == "snippet,contentDetails"

    @pytest.mark.asyncio
    async def test_empty_channel(self, importer, mock_http_client):
        """Test a channel with no uploads is EMPTY."""
        mock_http_client.get.return_value = create_mock_response({"items": []})

        with pytest.raises(UpstreamImportError) as exc_info:
            await importer.import_from("UCxyz")

        assert exc_info.value.kind == ImportErrorKind.EMPTY
        assert str(exc_info.value) == "No videos found in this channel."

    @pytest.mark.asyncio
    async def test_private_channel(self, importer, mock_http_client):
        """Test HTTP 403 maps to QUOTA_EXCEEDED with the access message."""
        mock_http_client.get.return_value = create_mock_response({}, status_code=403)

        with pytest.raises(UpstreamImportError) as exc_info:
            await importer.import_from("UCxyz")

        assert exc_info.value.kind == ImportErrorKind.QUOTA_EXCEEDED
        assert str(exc_info.value).startswith("Access denied")

    @pytest.mark.asyncio
    async def test_invalid_url(self, importer):
        """Test a non-channel link is INVALID_INPUT."""
        with pytest.raises(UpstreamImportError) as exc_info:
            await importer.import_from("https://youtube.com/@someone")

        assert exc_info.value.kind == ImportErrorKind.INVALID_INPUT
