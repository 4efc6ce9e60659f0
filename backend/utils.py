# utils.py
# Helpers: URL cleanup, bearer-token parsing, model JSON extraction, error snippets

from __future__ import annotations
import json
import re
from typing import Any
from errors import AuthenticationError, UpstreamError

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def clean_video_url(url: str) -> str:
    """TikTok share links carry tracking params that downloaders choke on."""
    url = (url or "").strip()
    return url.split("?", 1)[0] if "?" in url else url


def snippet(text: str | None, limit: int = 500) -> str:
    text = (text or "").strip()
    return text if len(text) <= limit else text[:limit] + "..."


def bearer_token(header: str | None) -> str:
    """
    Pull the token out of an Authorization header.
    Raises AuthenticationError when missing or not a Bearer credential.
    """
    if not header or not header.strip():
        raise AuthenticationError("Authorization required")
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Authorization header must be a Bearer token")
    return token.strip()


def parse_model_json(content: str, label: str) -> dict[str, Any]:
    """
    Decode a JSON object returned by a language model. Tolerates ```json
    fences; anything else malformed is an upstream failure.
    """
    raw = _FENCE_RE.sub("", (content or "").strip())
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise UpstreamError(f"{label} returned malformed JSON: {e}") from e
    if not isinstance(data, dict):
        raise UpstreamError(f"{label} returned JSON that is not an object")
    return data


def as_text(value: Any) -> str:
    """Model JSON fields sometimes come back as lists; flatten to one string."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v).strip() for v in value if str(v).strip())
    return str(value).strip()


def as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    return [str(v).strip() for v in value if str(v).strip()]
