"""Shared type aliases.

Used by the SQL-backed stores and the container wiring.
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

# Callable returning a new async session (an async_sessionmaker instance)
SessionFactory = Callable[[], AsyncSession]

# Stored JSON column value (document_data, tool_data)
JSONDict = dict[str, Any]

__all__ = [
    "JSONDict",
    "SessionFactory",
]
