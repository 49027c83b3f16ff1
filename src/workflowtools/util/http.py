"""
Helpers for reporting HTTP failures without leaking secrets.
"""

from __future__ import annotations

import requests


def format_request_exception(exc: requests.RequestException) -> str:
    """
    Describe a requests failure using the method, URL and status when known.

    Query strings are dropped from the URL because they can carry credentials.
    """
    parts = [type(exc).__name__]
    request = getattr(exc, "request", None)
    if request is not None and getattr(request, "url", None):
        method = getattr(request, "method", None) or "REQUEST"
        url = str(request.url).split("?", 1)[0]
        parts.append(f"{method} {url}")
    response = getattr(exc, "response", None)
    if response is not None:
        parts.append(f"HTTP {response.status_code}")
    detail = str(exc)
    if detail:
        parts.append(detail)
    return ": ".join(parts)
