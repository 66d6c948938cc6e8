"""Configuration loading and resolution for the Best Buy client.

Settings (timeouts, log level) come from a YAML file; per-client config
(API key, debug, response shape, transport overrides) is resolved from a
stack of sources, lowest priority first:

    built-in defaults -> BBY_API_KEY -> string key -> options mapping
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from bestbuy.base import InvalidArgumentError
from bestbuy.version import USER_AGENT

ENV_API_KEY = "BBY_API_KEY"
ENV_SETTINGS_PATH = "BBY_SETTINGS"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "timeout_sec": 30,
    "log_level": "INFO",
    "json_logs": True,
}

# Option keys accepted in the mapping form of client construction.
OPTION_KEYS = ("key", "debug", "associative", "transport_options", "curl_options")

# Keyword arguments of ``requests.Session.request`` a caller may override.
TRANSPORT_KEYS = frozenset(
    {"headers", "cookies", "auth", "timeout", "proxies", "hooks", "stream", "verify", "cert", "allow_redirects"}
)


@dataclass(frozen=True)
class ClientConfig:
    """Resolved configuration owned by a single client instance."""

    api_key: str = ""
    debug: bool = False
    associative: bool = False
    transport_options: Dict[str, Any] = field(default_factory=dict)

    def with_changes(self, **changes: Any) -> "ClientConfig":
        return replace(self, **changes)


def load_settings(path: str | os.PathLike[str] | None = None) -> Dict[str, Any]:
    """Load YAML settings merged over the defaults."""
    cfg_path = Path(path or os.environ.get(ENV_SETTINGS_PATH) or "config/settings.yaml")
    if not cfg_path.exists():
        return dict(DEFAULT_SETTINGS)
    with cfg_path.open("r", encoding="utf-8") as fh:
        loaded = yaml.safe_load(fh) or {}
    settings = dict(DEFAULT_SETTINGS)
    settings.update(loaded)
    return settings


def default_transport_options(settings: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "timeout": float(settings.get("timeout_sec", DEFAULT_SETTINGS["timeout_sec"])),
        "headers": {"User-Agent": USER_AGENT},
    }


def merge_transport_options(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge caller overrides over transport defaults; header dicts merge per key."""
    unknown = sorted((key for key in overrides if key not in TRANSPORT_KEYS), key=str)
    if unknown:
        raise InvalidArgumentError(f"Unsupported transport option(s): {', '.join(map(str, unknown))}")
    merged = dict(base)
    for key, value in overrides.items():
        if key == "headers":
            if not isinstance(value, Mapping):
                raise InvalidArgumentError("`headers` transport option must be a mapping")
            headers = dict(merged.get("headers") or {})
            headers.update(value)
            merged["headers"] = headers
        else:
            merged[key] = value
    return merged


def _flag(options: Mapping[str, Any], name: str, default: bool) -> bool:
    value = options.get(name, default)
    if not isinstance(value, bool):
        raise InvalidArgumentError(f"`{name}` must be a boolean, got {value!r}")
    return value


def resolve_config(
    options: Union[str, Mapping[str, Any], None] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[Mapping[str, Any]] = None,
) -> ClientConfig:
    """Resolve a ``ClientConfig`` from the construction arguments."""
    settings = settings if settings is not None else DEFAULT_SETTINGS
    environ = environ or {}

    api_key = environ.get(ENV_API_KEY, "")
    debug = False
    associative = False
    transport = default_transport_options(settings)

    if isinstance(options, str):
        api_key = options
    elif isinstance(options, Mapping):
        unknown = [key for key in options if key not in OPTION_KEYS]
        if unknown:
            raise InvalidArgumentError(f"Unknown client option(s): {', '.join(sorted(unknown))}")
        overrides = options.get("transport_options", options.get("curl_options")) or {}
        if not isinstance(overrides, Mapping):
            raise InvalidArgumentError("`transport_options` must be a mapping")
        transport = merge_transport_options(transport, overrides)
        debug = _flag(options, "debug", debug)
        associative = _flag(options, "associative", associative)
        if options.get("key"):
            api_key = options["key"]
    elif options is not None:
        raise InvalidArgumentError("Client options must be an API key string or a mapping")

    return ClientConfig(
        api_key=api_key or "",
        debug=debug,
        associative=associative,
        transport_options=transport,
    )
