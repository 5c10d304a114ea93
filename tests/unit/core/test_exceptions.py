"""Tests for sequencer.core.exceptions module."""

import pytest

from sequencer.core.exceptions import (
    DatabaseError,
    ExternalAPIError,
    ImportErrorKind,
    PersistenceWarning,
    ReconciliationError,
    RecordNotFoundError,
    SequenceValidationError,
    SequencerError,
    UpstreamImportError,
)


@pytest.mark.unit
def test_sequencer_error():
    """Test base SequencerError exception."""
    error = SequencerError("Test error")
    assert str(error) == "Test error"
    assert error.context == {}
    assert isinstance(error, Exception)


@pytest.mark.unit
def test_to_dict():
    """Test serialization for structured logs."""
    error = SequencerError("Boom", context={"a": 1, "b": 2})

    assert error.to_dict() == {
        "error_type": "SequencerError",
        "message": "Boom",
        "context": {"a": 1, "b": 2},
    }


@pytest.mark.unit
def test_record_not_found_error():
    """Test RecordNotFoundError with model and record_id."""
    error = RecordNotFoundError(model="UserDocument", record_id="123")

    assert error.model == "UserDocument"
    assert error.record_id == "123"
    assert "UserDocument" in str(error)
    assert "123" in str(error)
    assert isinstance(error, DatabaseError)
    assert isinstance(error, SequencerError)


@pytest.mark.unit
def test_database_error_operation():
    """Test DatabaseError records the operation."""
    error = DatabaseError("Failed", operation="update")
    assert error.context["operation"] == "update"


@pytest.mark.unit
def test_external_api_error():
    """Test ExternalAPIError formatting and truncation."""
    error = ExternalAPIError(
        service="YouTube",
        message="Forbidden",
        status_code=403,
        endpoint="/playlistItems",
        response_body="x" * 1000,
    )

    assert str(error) == "YouTube API error: Forbidden"
    assert error.status_code == 403
    assert error.context["endpoint"] == "/playlistItems"
    assert len(error.context["response_body"]) == 500


@pytest.mark.unit
def test_sequence_validation_error():
    """Test SequenceValidationError keeps the user message."""
    error = SequenceValidationError("Please enter a title", field="title")

    assert str(error) == "Please enter a title"
    assert error.field == "title"
    assert error.context["field"] == "title"


@pytest.mark.unit
def test_upstream_import_error():
    """Test UpstreamImportError carries kind and source."""
    error = UpstreamImportError(
        ImportErrorKind.NOT_FOUND, "Playlist not found.", source="youtube_playlist", status_code=404
    )

    assert error.kind is ImportErrorKind.NOT_FOUND
    assert error.context == {
        "kind": "not_found",
        "source": "youtube_playlist",
        "status_code": 404,
    }


@pytest.mark.unit
def test_reconciliation_error():
    """Test ReconciliationError reports counts."""
    error = ReconciliationError("doc-1", deactivated=2, failed=1, failed_ids=["s3"])

    assert error.deactivated == 2
    assert error.failed == 1
    assert error.failed_ids == ["s3"]
    assert "2 submission(s) deactivated" in str(error)
    assert "1 still active" in str(error)
    assert error.context["operation"] == "delete"


@pytest.mark.unit
def test_persistence_warning():
    """Test PersistenceWarning carries the storage key."""
    error = PersistenceWarning("Write failed", key="sequence-draft")
    assert error.key == "sequence-draft"
    assert isinstance(error, SequencerError)
