"""URL helpers for blob uploads."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from .environment import EnvironmentProbe

DEFAULT_UPLOAD_BASE = "/blobs"

# Characters left unescaped by JavaScript's encodeURIComponent.
_COMPONENT_SAFE = "!~*'()"


def coerce_string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def encode_uri_component(value: str) -> str:
    # Undecodable filename bytes arrive as surrogate escapes from os.fsdecode.
    return quote(value.encode("utf-8", "surrogateescape"), safe=_COMPONENT_SAFE)


def _origin_of(location: Any) -> str:
    origin = getattr(location, "origin", None)
    if isinstance(origin, str) and origin:
        return origin
    return str(location)


def normalize_absolute_url(
    local_path: Any,
    download_url: Any = None,
    location: Any = None,
    *,
    probe: EnvironmentProbe | None = None,
) -> str:
    """Return a directly fetchable URL for a stored blob.

    An explicit ``download_url`` always wins. Otherwise ``local_path`` is made
    root-relative and, when an origin is known, joined onto it. ``location``
    may be an origin string or any object exposing ``origin``; ``probe`` is
    only consulted when no ``location`` is given. Without a usable origin the
    root-relative path is returned.
    """
    download = coerce_string(download_url).strip()
    if download:
        return download

    raw_path = coerce_string(local_path).strip()
    if not raw_path:
        return ""
    normalized = raw_path if raw_path.startswith("/") else f"/{raw_path}"

    location_ref = location or None
    if location_ref is None and probe is not None:
        snapshot = probe()
        if snapshot is not None:
            location_ref = snapshot.location or None
    if location_ref is None:
        return normalized

    try:
        base = httpx.URL(_origin_of(location_ref))
        if not base.is_absolute_url:
            return normalized
        return str(base.join(normalized))
    except (httpx.InvalidURL, TypeError, ValueError):
        return normalized


def build_upload_url(base_url: Any = DEFAULT_UPLOAD_BASE, agent: Any = "") -> str:
    """Return the upload target, scoped to ``agent`` when one is given."""
    trimmed_base = coerce_string(base_url).strip() or DEFAULT_UPLOAD_BASE
    base = trimmed_base[:-1] if trimmed_base.endswith("/") else trimmed_base
    agent_name = coerce_string(agent).strip()
    if not agent_name:
        return base
    return f"{base}/{encode_uri_component(agent_name)}"
