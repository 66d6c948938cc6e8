"""Response decoding.

Bodies that are not valid JSON decode to ``None`` instead of raising; callers
treat missing fields as "no data".
"""
from __future__ import annotations

import json
from types import SimpleNamespace
from typing import Any, Dict


def _to_namespace(pairs: Dict[str, Any]) -> SimpleNamespace:
    return SimpleNamespace(**pairs)


def decode(raw: str | bytes | None, *, associative: bool = False, raw_mode: bool = False) -> Any:
    """Decode a response body.

    ``associative`` returns dicts (key order preserved) instead of attribute
    objects; ``raw_mode`` skips parsing and returns the trimmed text.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if raw_mode:
        return (raw or "").strip()
    if not raw:
        return None
    try:
        return json.loads(raw, object_hook=None if associative else _to_namespace)
    except ValueError:
        return None
