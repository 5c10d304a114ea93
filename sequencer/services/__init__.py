"""Services layer for Sequencer.

Services implement business logic and orchestrate data operations.
Organized by feature:
- media: URL classification and image proxy wrapping
- importers: Drive folder, YouTube playlist and YouTube Kids channel adapters
- sequence: Document model, editor operations and draft autosave
- publishing: Document/submission stores and the visibility reconciler
"""
