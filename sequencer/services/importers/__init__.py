"""Source import adapters.

- DriveFolderImporter: media files of a shared Drive folder
- YouTubePlaylistImporter: playlist entries enriched with video details
- YouTubeKidsChannelImporter: uploads of a YouTube Kids channel
"""

from sequencer.services.importers.base import BaseImporter, ImportResult, RawCandidate
from sequencer.services.importers.drive_folder import DriveFolderImporter
from sequencer.services.importers.youtube_kids import YouTubeKidsChannelImporter
from sequencer.services.importers.youtube_playlist import YouTubePlaylistImporter

__all__ = [
    "BaseImporter",
    "DriveFolderImporter",
    "ImportResult",
    "RawCandidate",
    "YouTubeKidsChannelImporter",
    "YouTubePlaylistImporter",
]
