"""Base interfaces and DTOs for source imports.

This module defines the data structures shared by the import adapters and
the template that turns upstream API failures into typed import errors.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from sequencer.core.exceptions import ExternalAPIError, ImportErrorKind, UpstreamImportError
from sequencer.core.logging import get_logger

logger = get_logger(__name__)


class RawCandidate(BaseModel):
    """One importable media reference returned by an adapter.

    The url goes through the classifier when the candidate is appended to a
    sequence; the remaining fields are metadata copied onto the item.

    Attributes:
        url: Source URL (may carry a "video:" / "image:" type prefix)
        title: Display name (video title, or image alt text)
        video_id: Provider video id when the adapter already knows it
        creator: Channel or author name
        thumbnail: Thumbnail URL
        duration_seconds: Video length in seconds
        mime_type: Provider-reported MIME type
    """

    url: str
    title: str | None = None
    video_id: str | None = None
    creator: str | None = None
    thumbnail: str | None = None
    duration_seconds: int | None = None
    mime_type: str | None = None


class ImportResult(BaseModel):
    """Flat candidate list returned by one import.

    Attributes:
        source: Adapter name
        items: Candidates in source order
        count: Number of candidates
        title: Collection title reported by the source, if any
    """

    source: str
    items: list[RawCandidate] = Field(default_factory=list)
    count: int = 0
    title: str | None = None


class BaseImporter(ABC):
    """Abstract base class for import adapters.

    Subclasses parse their reference format and fetch candidates; this class
    validates input, checks configuration and maps ExternalAPIError status
    codes to ImportErrorKind.

    Attributes:
        source_name: Adapter name used in results and logs
        not_found_message: Message for HTTP 404
        quota_message: Message for HTTP 403
        empty_message: Message when the source has no items
    """

    source_name: str = "import"
    invalid_input_message: str = "Invalid source reference"
    not_configured_message: str = "API not configured"
    quota_message: str = "API quota exceeded or source is private. Please try again later."
    not_found_message: str = "Source not found."
    empty_message: str = "Source is empty."
    unavailable_message: str = "Failed to fetch source. Please try again."

    @abstractmethod
    def parse_reference(self, reference: str) -> str | None:
        """Extract the source id from a URL or bare id.

        Args:
            reference: User-supplied URL or id

        Returns:
            Source id, or None if the reference is not recognized
        """
        pass

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the upstream client has credentials."""
        pass

    @abstractmethod
    async def fetch(self, source_id: str) -> ImportResult:
        """Fetch candidates for a parsed source id.

        Args:
            source_id: Parsed source id

        Returns:
            Import result (possibly empty)

        Raises:
            ExternalAPIError: If the upstream call fails
        """
        pass

    async def import_from(self, reference: str) -> ImportResult:
        """Run an import for a user-supplied reference.

        Args:
            reference: URL or bare id

        Returns:
            Non-empty import result

        Raises:
            UpstreamImportError: Typed by ImportErrorKind
        """
        reference = reference.strip()
        source_id = self.parse_reference(reference) if reference else None
        if not source_id:
            raise UpstreamImportError(
                ImportErrorKind.INVALID_INPUT,
                self.invalid_input_message,
                source=self.source_name,
            )

        if not self.is_configured:
            logger.error("Import API key not configured", source=self.source_name)
            raise UpstreamImportError(
                ImportErrorKind.UPSTREAM_UNAVAILABLE,
                self.not_configured_message,
                source=self.source_name,
                context={"reason": "not_configured"},
            )

        try:
            result = await self.fetch(source_id)
        except ExternalAPIError as e:
            logger.warning(
                "Import failed",
                source=self.source_name,
                source_id=source_id,
                status_code=e.status_code,
                error=e,
            )
            raise self._translate_error(e) from e

        if not result.items:
            raise UpstreamImportError(
                ImportErrorKind.EMPTY,
                self.empty_message,
                source=self.source_name,
            )

        logger.info(
            "Import complete",
            source=self.source_name,
            source_id=source_id,
            count=result.count,
        )
        return result

    def _translate_error(self, error: ExternalAPIError) -> UpstreamImportError:
        """Map an upstream API error to a typed import error."""
        if error.status_code == 403:
            kind, message = ImportErrorKind.QUOTA_EXCEEDED, self.quota_message
        elif error.status_code == 404:
            kind, message = ImportErrorKind.NOT_FOUND, self.not_found_message
        else:
            kind, message = ImportErrorKind.UPSTREAM_UNAVAILABLE, self.unavailable_message
        return UpstreamImportError(
            kind,
            message,
            source=self.source_name,
            status_code=error.status_code,
        )


__all__ = ["BaseImporter", "ImportResult", "RawCandidate"]
