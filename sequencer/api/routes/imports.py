"""Import endpoints: playlist, YouTube Kids channel and Drive folder.

Each endpoint resolves a user-supplied URL into a flat candidate list. The
client appends the candidates to its sequence; nothing is stored here.
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from sequencer.core.container import (
    get_drive_folder_importer,
    get_kids_channel_importer,
    get_playlist_importer,
)
from sequencer.core.exceptions import ImportErrorKind, UpstreamImportError
from sequencer.core.logging import get_logger
from sequencer.services.importers import (
    BaseImporter,
    ImportResult,
    RawCandidate,
)

router = APIRouter(prefix="/api", tags=["imports"])
logger = get_logger(__name__)

ERROR_STATUS = {
    ImportErrorKind.INVALID_INPUT: 400,
    ImportErrorKind.QUOTA_EXCEEDED: 403,
    ImportErrorKind.NOT_FOUND: 404,
    ImportErrorKind.EMPTY: 404,
    ImportErrorKind.UPSTREAM_UNAVAILABLE: 502,
}


class PlaylistRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    playlist_url: str | None = Field(default=None, alias="playlistUrl")


class ChannelRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    channel_url: str | None = Field(default=None, alias="channelUrl")


class FolderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    folder_url: str | None = Field(default=None, alias="folderUrl")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _status_for(error: UpstreamImportError) -> int:
    if error.context.get("reason") == "not_configured":
        return 500
    return ERROR_STATUS.get(error.kind, 500)


async def _run_import(importer: BaseImporter, reference: str) -> ImportResult | JSONResponse:
    try:
        return await importer.import_from(reference)
    except UpstreamImportError as e:
        status_code = _status_for(e)
        logger.info(
            "Import request rejected",
            source=e.source,
            kind=e.kind.value,
            status_code=status_code,
        )
        return _error_response(status_code, str(e))


def _video_payload(candidate: RawCandidate) -> dict[str, Any]:
    payload = {
        "video_id": candidate.video_id,
        "title": candidate.title or "",
        "url": candidate.url,
        "thumbnail": candidate.thumbnail or "",
    }
    if candidate.creator is not None:
        payload["creator"] = candidate.creator
    if candidate.duration_seconds is not None:
        payload["duration_seconds"] = candidate.duration_seconds
    return payload


def _file_payload(candidate: RawCandidate) -> dict[str, Any]:
    return {
        "url": candidate.url,
        "name": candidate.title or "",
        "mimeType": candidate.mime_type or "",
    }


@router.post("/extract-playlist", response_model=None)
async def extract_playlist(
    request: PlaylistRequest,
    importer: BaseImporter = Depends(get_playlist_importer),
) -> dict[str, Any] | JSONResponse:
    """Resolve a YouTube playlist into video candidates.

    Returns:
        {videos, count, playlistTitle}
    """
    if not request.playlist_url:
        return _error_response(400, "Playlist URL is required")

    result = await _run_import(importer, request.playlist_url)
    if isinstance(result, JSONResponse):
        return result

    return {
        "videos": [_video_payload(c) for c in result.items],
        "count": result.count,
        "playlistTitle": result.title or "YouTube Playlist",
    }


@router.post("/extract-youtube-kids-channel", response_model=None)
async def extract_youtube_kids_channel(
    request: ChannelRequest,
    importer: BaseImporter = Depends(get_kids_channel_importer),
) -> dict[str, Any] | JSONResponse:
    """Resolve a YouTube Kids channel into its uploaded videos.

    Returns:
        {videos, count}
    """
    if not request.channel_url:
        return _error_response(400, "Channel URL is required")

    result = await _run_import(importer, request.channel_url)
    if isinstance(result, JSONResponse):
        return result

    return {"videos": [_video_payload(c) for c in result.items], "count": result.count}


@router.post("/import-drive-folder", response_model=None)
async def import_drive_folder(
    request: FolderRequest,
    importer: BaseImporter = Depends(get_drive_folder_importer),
) -> dict[str, Any] | JSONResponse:
    """List a public Drive folder's images and videos.

    Returns:
        {files, count}
    """
    if not request.folder_url:
        return _error_response(400, "Folder URL is required")

    result = await _run_import(importer, request.folder_url)
    if isinstance(result, JSONResponse):
        return result

    return {"files": [_file_payload(c) for c in result.items], "count": result.count}
