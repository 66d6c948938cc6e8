"""High level client for the Best Buy API."""
from __future__ import annotations

import os
from types import SimpleNamespace
from typing import Any, Dict, Mapping, Optional, Union

import requests

from bestbuy.base import InvalidArgumentError, RequestExecutor, ServiceError
from bestbuy.decoder import decode
from bestbuy.query import Filter, Many, QueryMode, Single, identify, in_clause, normalize
from bestbuy.urls import Host, RequestSpec, build_spec_url
from bestbuy.utils.config import load_settings, resolve_config
from bestbuy.utils.logging import get_logger
from bestbuy.version import __version__

ResponseOptions = Optional[Mapping[str, Any]]


class Client:
    """Client exposing one method per Best Buy API resource.

    ``options`` may be an API key string, a mapping with any of ``key``,
    ``debug``, ``associative`` and ``transport_options``, or ``None`` to fall
    back on ``BBY_API_KEY`` in ``environ``.
    """

    RECOMMENDATIONS_MOSTVIEWED = "mostViewed"
    RECOMMENDATIONS_TRENDING = "trendingViewed"
    RECOMMENDATIONS_ALSOVIEWED = "alsoViewed"
    RECOMMENDATIONS_SIMILAR = "similar"

    URL_V1 = Host.V1.value
    URL_BETA = Host.BETA.value
    URL_ROOT = Host.ROOT.value

    # Endpoints whose list arguments render as an ``in(...)`` filter.
    LIST_FIELDS = {
        "products": QueryMode.SKU,
        "stores": QueryMode.STORE,
    }

    def __init__(
        self,
        options: Union[str, Mapping[str, Any], None] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        settings: Optional[Dict[str, Any]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.config = resolve_config(
            options,
            environ=os.environ if environ is None else environ,
            settings=self.settings,
        )
        logger = get_logger(
            "bestbuy",
            level=self.settings.get("log_level", "INFO"),
            json_output=bool(self.settings.get("json_logs", True)),
        )
        self.executor = RequestExecutor(session=session, logger=logger)

    # ------------------------------------------------------------------
    # Configuration setters
    # ------------------------------------------------------------------
    @property
    def logger(self) -> Any:
        return self.executor.logger

    def set_logger(self, logger: Any) -> None:
        self.executor.logger = logger

    def set_api_key(self, api_key: str) -> None:
        self.config = self.config.with_changes(api_key=api_key or "")

    def set_debug(self, debug: bool) -> None:
        self.config = self.config.with_changes(debug=bool(debug))

    def set_associative(self, associative: bool) -> None:
        self.config = self.config.with_changes(associative=bool(associative))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def availability(self, skus: Any, stores: Any, response_options: ResponseOptions = None) -> Any:
        """Retrieve availability of products in stores.

        ``skus`` and ``stores`` each accept an identifier, a list of
        identifiers, or a valid query for that resource.
        """
        sku_query = normalize(skus, QueryMode.SKU)
        store_query = normalize(stores, QueryMode.STORE)
        return self._request(
            RequestSpec(Host.V1, f"/products({sku_query})+stores({store_query})", dict(response_options or {}))
        )

    def categories(self, search: Any = "", response_options: ResponseOptions = None) -> Any:
        return self._simple_endpoint("categories", search, response_options)

    def products(self, search: Any = "", response_options: ResponseOptions = None) -> Any:
        return self._simple_endpoint("products", search, response_options)

    def reviews(self, search: Any = "", response_options: ResponseOptions = None) -> Any:
        return self._simple_endpoint("reviews", search, response_options)

    def stores(self, search: Any = "", response_options: ResponseOptions = None) -> Any:
        return self._simple_endpoint("stores", search, response_options)

    def open_box(self, search: Any = "", response_options: ResponseOptions = None) -> Any:
        """Retrieve open box offers for one SKU, several SKUs, a query, or all products."""
        identifier = identify(search)
        if isinstance(identifier, Single):
            path = f"/products/{identifier.value}/openBox"
        elif isinstance(identifier, Many):
            path = f"/products/openBox({in_clause('sku', identifier.values)})"
        elif isinstance(identifier, Filter):
            path = f"/products/openBox({identifier.expression})"
        else:
            path = "/products/openBox"
        return self._request(RequestSpec(Host.BETA, path, dict(response_options or {})))

    def recommendations(
        self,
        recommendation_type: str,
        category_id_or_sku: Any = None,
        response_options: ResponseOptions = None,
    ) -> Any:
        """Retrieve recommendations.

        Trending and most viewed take an optional category ID; also viewed and
        similar work at the SKU level and require one.
        """
        if recommendation_type in (self.RECOMMENDATIONS_TRENDING, self.RECOMMENDATIONS_MOSTVIEWED):
            search = f"(categoryId={category_id_or_sku})" if category_id_or_sku is not None else ""
            path = f"/products/{recommendation_type}{search}"
        elif recommendation_type in (self.RECOMMENDATIONS_ALSOVIEWED, self.RECOMMENDATIONS_SIMILAR):
            if category_id_or_sku is None:
                raise InvalidArgumentError(
                    "For `Client.RECOMMENDATIONS_SIMILAR` & `Client.RECOMMENDATIONS_ALSOVIEWED`, a SKU is required"
                )
            path = f"/products/{category_id_or_sku}/{recommendation_type}"
        else:
            raise InvalidArgumentError("`recommendation_type` must be one of `Client.RECOMMENDATIONS_*`")

        return self._request(RequestSpec(Host.BETA, path, dict(response_options or {})))

    def warranties(self, sku: Any, response_options: ResponseOptions = None) -> Any:
        identifier = identify(sku)
        if not isinstance(identifier, Single):
            raise InvalidArgumentError("Warranties can only be looked up for a single SKU")
        return self._request(
            RequestSpec(Host.V1, f"/products/{identifier.value}/warranties.json", dict(response_options or {}))
        )

    def version(self) -> Any:
        """Return the local client version alongside the service's version text."""
        remote = self._request(RequestSpec(Host.ROOT, "/version.txt", raw=True))
        versions = {"clientVersion": __version__, "remoteVersion": remote}
        if self.config.associative:
            return versions
        return SimpleNamespace(**versions)

    def healthcheck(self) -> bool:
        try:
            self.version()
            return True
        except ServiceError:
            return False

    # ------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------
    def build_url(self, spec: RequestSpec) -> str:
        return build_spec_url(spec, self.config)

    def _request(self, spec: RequestSpec) -> Any:
        config = self.config
        url = build_spec_url(spec, config)
        body = self.executor.execute(url, config)
        return decode(body, associative=config.associative, raw_mode=spec.raw)

    def _simple_endpoint(self, endpoint: str, search: Any, response_options: ResponseOptions) -> Any:
        """Handle the standard endpoints (products, stores, categories, reviews)."""
        identifier = identify(search, resource_ids=True)
        if isinstance(identifier, Single):
            path = f"/{endpoint}/{normalize(identifier, QueryMode.RESOURCE)}.json"
        else:
            # RESOURCE mode rejects lists.
            fragment = normalize(identifier, self.LIST_FIELDS.get(endpoint, QueryMode.RESOURCE))
            path = f"/{endpoint}({fragment})" if fragment else f"/{endpoint}"

        return self._request(RequestSpec(Host.V1, path, dict(response_options or {})))
