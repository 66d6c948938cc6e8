"""URL construction for Best Buy API requests."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote, urlencode

from bestbuy.base import AuthorizationError
from bestbuy.utils.config import ClientConfig

SINGLE_RESOURCE_SUFFIX = ".json"
WHITESPACE = re.compile(r"\s+")

MISSING_KEY_MESSAGE = (
    "A Best Buy developer API key is required. Register for one at "
    "developer.bestbuy.com, call `Client(YOUR_API_KEY)`, or "
    "specify a BBY_API_KEY system environment variable."
)


class Host(Enum):
    V1 = "https://api.bestbuy.com/v1"
    BETA = "https://api.bestbuy.com/beta"
    ROOT = "https://api.bestbuy.com"


@dataclass(frozen=True)
class RequestSpec:
    host: Host
    path: str
    response_options: Dict[str, Any] = field(default_factory=dict)
    raw: bool = False


def build_url(
    host: Host,
    path: str,
    response_options: Optional[Mapping[str, Any]],
    config: ClientConfig,
) -> str:
    """Build the full request URL, signed with the configured API key.

    ``format=json`` is only added for collection paths; the service rejects it
    next to a direct ``<id>.json`` lookup.
    """
    if not config.api_key:
        raise AuthorizationError(MISSING_KEY_MESSAGE)

    query = dict(response_options or {})
    query["apiKey"] = config.api_key
    if not path.endswith(SINGLE_RESOURCE_SUFFIX):
        query["format"] = "json"
    querystring = urlencode(query, doseq=True, quote_via=quote)

    return WHITESPACE.sub("%20", f"{host.value}{path}?{querystring}")


def build_spec_url(spec: RequestSpec, config: ClientConfig) -> str:
    return build_url(spec.host, spec.path, spec.response_options, config)
