"""Publishing: document/submission stores and the visibility reconciler."""

from sequencer.services.publishing.channels import (
    AVAILABLE_CHANNELS,
    DocumentSummary,
    build_submission_link,
    summarize_documents,
)
from sequencer.services.publishing.reconciler import (
    LoadedSequence,
    SaveResult,
    UnsubmitResult,
    VisibilityReconciler,
)
from sequencer.services.publishing.sql_stores import SQLDocumentStore, SQLSubmissionStore
from sequencer.services.publishing.stores import (
    ChannelSubmission,
    DocumentStore,
    InMemoryDocumentStore,
    InMemorySubmissionStore,
    StoredDocument,
    SubmissionStore,
)

__all__ = [
    "AVAILABLE_CHANNELS",
    "ChannelSubmission",
    "DocumentStore",
    "DocumentSummary",
    "InMemoryDocumentStore",
    "InMemorySubmissionStore",
    "LoadedSequence",
    "SQLDocumentStore",
    "SQLSubmissionStore",
    "SaveResult",
    "StoredDocument",
    "SubmissionStore",
    "UnsubmitResult",
    "VisibilityReconciler",
    "build_submission_link",
    "summarize_documents",
]
