"""Unit tests for Dependency Injection Container.

Tests cover:
- Container initialization and configuration
- Provider types (Singleton, Factory)
- FastAPI dependency helpers
- Testing utilities (overrides)
"""

from unittest.mock import MagicMock

from sequencer.core.container import (
    container,
    create_container,
    get_container,
    get_drive_folder_importer,
    get_playlist_importer,
    get_reconciler,
)
from sequencer.infrastructure.drive_api import DriveAPIClient
from sequencer.infrastructure.youtube_api import YouTubeDataClient
from sequencer.services.importers import (
    DriveFolderImporter,
    YouTubeKidsChannelImporter,
    YouTubePlaylistImporter,
)
from sequencer.services.publishing import InMemoryDocumentStore, InMemorySubmissionStore
from sequencer.services.publishing.reconciler import VisibilityReconciler


class TestContainerCreation:
    """Tests for container creation and configuration."""

    def test_create_container_returns_container_with_providers(self) -> None:
        """Test that create_container returns a container with expected providers."""
        new_container = create_container()
        assert hasattr(new_container, "config")
        assert hasattr(new_container, "infrastructure")
        assert hasattr(new_container, "services")

    def test_container_has_config(self) -> None:
        """Test that container has configuration wired."""
        new_container = create_container()
        assert new_container.config().app_name == "Sequencer"
        assert new_container.config().database_url

    def test_get_container_returns_global_container(self) -> None:
        """Test the FastAPI helper returns the global container."""
        assert get_container() is container


class TestImporterProviders:
    """Tests for importer providers."""

    def test_playlist_importer_instantiation(self) -> None:
        """Test the playlist importer receives the shared YouTube client."""
        client = MagicMock(spec=YouTubeDataClient)
        with container.infrastructure.youtube_client.override(client):
            importer = get_playlist_importer()

        assert isinstance(importer, YouTubePlaylistImporter)
        assert importer._client is client
        assert importer.limit == container.config().import_page_limit

    def test_kids_importer_instantiation(self) -> None:
        """Test the YouTube Kids importer shares the YouTube client."""
        client = MagicMock(spec=YouTubeDataClient)
        with container.infrastructure.youtube_client.override(client):
            importer = container.kids_channel_importer()

        assert isinstance(importer, YouTubeKidsChannelImporter)
        assert importer._client is client

    def test_drive_importer_instantiation(self) -> None:
        """Test the Drive importer receives the Drive client."""
        client = MagicMock(spec=DriveAPIClient)
        with container.infrastructure.drive_client.override(client):
            importer = get_drive_folder_importer()

        assert isinstance(importer, DriveFolderImporter)
        assert importer._client is client

    def test_importers_are_factories(self) -> None:
        """Test each call creates a new importer."""
        client = MagicMock(spec=YouTubeDataClient)
        with container.infrastructure.youtube_client.override(client):
            assert container.playlist_importer() is not container.playlist_importer()


class TestReconcilerProvider:
    """Tests for the reconciler provider."""

    def test_reconciler_with_overridden_stores(self) -> None:
        """Test stores can be swapped for in-memory ones."""
        documents = InMemoryDocumentStore()
        submissions = InMemorySubmissionStore()

        with (
            container.services.document_store.override(documents),
            container.services.submission_store.override(submissions),
        ):
            reconciler = get_reconciler()

        assert isinstance(reconciler, VisibilityReconciler)
        assert reconciler.documents is documents
        assert reconciler.submissions is submissions
