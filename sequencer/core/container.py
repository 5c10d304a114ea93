"""Dependency Injection Container.

This module provides a centralized DI container using dependency-injector.
Lifecycles:
- Singleton: One instance for the entire application (clients, engine, stores)
- Factory: New instance every time (importers, reconciler)

Usage:
    # In FastAPI
    from sequencer.core.container import get_playlist_importer

    @router.post("/extract-playlist")
    async def extract(importer=Depends(get_playlist_importer)):
        ...

    # In tests
    with container.infrastructure.youtube_client.override(mock_client):
        ...
"""

from dependency_injector import containers, providers

from sequencer.core.config import Config, get_config
from sequencer.core.database import create_engine_from_config, create_session_maker


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies (database, HTTP and Google API clients).

    These are Singleton: created on first use and shared.
    """

    global_config = providers.Dependency(instance_of=Config)

    # ============================================
    # Database
    # ============================================

    db_engine = providers.Singleton(
        create_engine_from_config,
        config=global_config,
    )

    db_session_factory = providers.Singleton(
        create_session_maker,
        engine=db_engine,
    )

    # ============================================
    # HTTP / Google APIs
    # ============================================

    http_client = providers.Singleton(
        "sequencer.infrastructure.http_client.HTTPClient",
        timeout=global_config.provided.http_timeout,
    )

    youtube_client = providers.Singleton(
        "sequencer.infrastructure.youtube_api.YouTubeDataClient",
        http_client=http_client,
        api_key=global_config.provided.google_api_key,
    )

    drive_client = providers.Singleton(
        "sequencer.infrastructure.drive_api.DriveAPIClient",
        api_key=global_config.provided.google_api_key,
    )

    # ============================================
    # Local draft storage
    # ============================================

    draft_store = providers.Singleton(
        "sequencer.services.sequence.drafts.FileKeyValueStore",
        path=global_config.provided.draft_path,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Service layer dependencies.

    Services receive infrastructure dependencies via injection.
    """

    global_config = providers.Dependency(instance_of=Config)
    infrastructure = providers.DependenciesContainer()

    # ============================================
    # Import adapters
    # ============================================

    playlist_importer = providers.Factory(
        "sequencer.services.importers.youtube_playlist.YouTubePlaylistImporter",
        client=infrastructure.youtube_client,
        limit=global_config.provided.import_page_limit,
    )

    kids_channel_importer = providers.Factory(
        "sequencer.services.importers.youtube_kids.YouTubeKidsChannelImporter",
        client=infrastructure.youtube_client,
        limit=global_config.provided.import_page_limit,
    )

    drive_folder_importer = providers.Factory(
        "sequencer.services.importers.drive_folder.DriveFolderImporter",
        client=infrastructure.drive_client,
        limit=global_config.provided.import_page_limit,
    )

    # ============================================
    # Stores
    # ============================================

    document_store = providers.Singleton(
        "sequencer.services.publishing.sql_stores.SQLDocumentStore",
        session_factory=infrastructure.db_session_factory,
    )

    submission_store = providers.Singleton(
        "sequencer.services.publishing.sql_stores.SQLSubmissionStore",
        session_factory=infrastructure.db_session_factory,
    )

    # ============================================
    # Drafts and publishing
    # ============================================

    draft_manager = providers.Factory(
        "sequencer.services.sequence.drafts.DraftManager",
        store=infrastructure.draft_store,
        key=global_config.provided.draft_key,
        max_age_days=global_config.provided.draft_max_age_days,
    )

    reconciler = providers.Factory(
        "sequencer.services.publishing.reconciler.VisibilityReconciler",
        documents=document_store,
        submissions=submission_store,
        drafts=draft_manager,
        public_base_url=global_config.provided.public_base_url,
        proxy_base=global_config.provided.proxy_base,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root application container.

    Composes all sub-containers and provides the main entry point.
    """

    # Global Config singleton (environment variables)
    # Uses get_config() to ensure same instance across the app
    config = providers.Singleton(get_config)

    # Sub-containers
    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
    )

    services = providers.Container(
        ServiceContainer,
        global_config=config,
        infrastructure=infrastructure,
    )

    # ============================================
    # Convenience accessors (shortcuts)
    # ============================================

    http_client = providers.Singleton(
        lambda client: client,
        client=infrastructure.http_client,
    )

    db_engine = providers.Singleton(
        lambda engine: engine,
        engine=infrastructure.db_engine,
    )

    playlist_importer = providers.Factory(
        lambda svc: svc,
        svc=services.playlist_importer,
    )

    kids_channel_importer = providers.Factory(
        lambda svc: svc,
        svc=services.kids_channel_importer,
    )

    drive_folder_importer = providers.Factory(
        lambda svc: svc,
        svc=services.drive_folder_importer,
    )

    reconciler = providers.Factory(
        lambda svc: svc,
        svc=services.reconciler,
    )


def create_container() -> ApplicationContainer:
    """Create and configure the application container.

    Returns:
        Configured ApplicationContainer instance
    """
    return ApplicationContainer()


# Global container instance
container = create_container()


# ============================================
# FastAPI Integration
# ============================================


def get_container() -> ApplicationContainer:
    """Get the global container (for FastAPI Depends)."""
    return container


def get_playlist_importer():
    """FastAPI dependency for the YouTube playlist importer."""
    return container.playlist_importer()


def get_kids_channel_importer():
    """FastAPI dependency for the YouTube Kids channel importer."""
    return container.kids_channel_importer()


def get_drive_folder_importer():
    """FastAPI dependency for the Drive folder importer."""
    return container.drive_folder_importer()


def get_reconciler():
    """FastAPI dependency for the visibility reconciler."""
    return container.reconciler()


__all__ = [
    "ApplicationContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "container",
    "create_container",
    "get_config",
    "get_container",
    "get_drive_folder_importer",
    "get_kids_channel_importer",
    "get_playlist_importer",
    "get_reconciler",
]
