"""Helpers for decoding Zoom HTTP responses."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import requests


def response_detail(response: requests.Response | None) -> object | None:
    """Return the decoded error body of a response, falling back to its text."""
    if response is None:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text or None


def json_body(response: requests.Response) -> dict[str, Any]:
    """Decode a JSON object body; empty or non-object bodies become ``{}``."""
    if not response.content:
        return {}
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
