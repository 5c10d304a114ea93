"""API routers."""

from sequencer.api.routes import health, imports

__all__ = ["health", "imports"]
