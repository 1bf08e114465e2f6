"""Response error extraction for load test observability.

Parses storefront API error responses into human-readable messages. Every
error has the shape ``{"kind": "...", "message": "...", "errors": {...}}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON: return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and "kind" in body:
        detail = f"{body['kind']}: {body.get('message', '')}"
        errors = body.get("errors") or {}
        if errors:
            detail += " | " + " | ".join(f"{field}: {msgs}" for field, msgs in errors.items())
        return detail[:300]

    # Unknown shape: stringify and truncate
    return str(body)[:300]


def error_kind(response: Response) -> str:
    """The ``kind`` of an API error response, or ``http_<status>`` when absent."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("kind"):
        return body["kind"]
    return f"http_{response.status_code}"
