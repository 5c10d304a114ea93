"""Same-origin image proxy codec.

Image URLs are stored behind a relay endpoint ("{proxy_base}?url=...") so the
viewer can fetch them without cross-origin restrictions. Older documents may
carry URLs wrapped twice; unwrap recovers the original in a single call.
"""

from typing import Any
from urllib.parse import quote, unquote

from sequencer.core.config import get_config


def _marker(proxy_base: str | None) -> str:
    base = proxy_base if proxy_base is not None else get_config().proxy_base
    return f"{base}?url="


def is_wrapped(url: str, proxy_base: str | None = None) -> bool:
    """Whether the value contains the proxy pattern."""
    return _marker(proxy_base) in url


def unwrap(url: str, proxy_base: str | None = None) -> str:
    """Recover the original URL from a (possibly nested) proxied value.

    Unwrapped input is returned unchanged, so unwrap is idempotent.

    Args:
        url: Stored image URL
        proxy_base: Relay endpoint path (defaults to config)

    Returns:
        Original URL with every proxy layer removed
    """
    marker = _marker(proxy_base)
    value = url
    while marker in value:
        value = unquote(value.split(marker, 1)[1])
    return value


def wrap(url: str, proxy_base: str | None = None) -> str:
    """Wrap an image URL behind the relay exactly once.

    Args:
        url: Raw or already-wrapped image URL
        proxy_base: Relay endpoint path (defaults to config)

    Returns:
        "{proxy_base}?url={percent-encoded original}"

    Example:
        >>> wrap("https://example.com/a.png", proxy_base="/api/proxy-image")
        '/api/proxy-image?url=https%3A%2F%2Fexample.com%2Fa.png'
    """
    original = unwrap(url, proxy_base)
    return _marker(proxy_base) + quote(original, safe="")


def clean_legacy_items(
    items: list[dict[str, Any]],
    proxy_base: str | None = None,
) -> list[dict[str, Any]]:
    """Unwrap the image URLs of stored items.

    Pure migration applied on load: input dicts are not mutated.

    Args:
        items: Stored item dicts
        proxy_base: Relay endpoint path (defaults to config)

    Returns:
        New item dicts whose image URLs are unwrapped
    """
    cleaned = []
    for item in items:
        image_url = item.get("image_url")
        if item.get("type") == "image" and image_url:
            cleaned.append({**item, "image_url": unwrap(image_url, proxy_base)})
        else:
            cleaned.append(dict(item))
    return cleaned


__all__ = ["clean_legacy_items", "is_wrapped", "unwrap", "wrap"]
