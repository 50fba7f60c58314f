"""
Base URLs of the Klevu services and endpoint construction.
"""

from enum import Enum
from urllib.parse import urlsplit

from klevu.exceptions import EndpointConfigurationError

_URL_TRIM_CHARACTERS = " \n\r\t\v\x00/"


class IndexingVersions(Enum):
    """Indexing API generations, which differ in their URL route prefix."""

    XML = ""
    JSON = "/v2"

    def get_url_route_prefix(self) -> str:
        return self.value


class BaseUrlsProvider:
    """
    Host names for each Klevu service.

    Values may be given with or without a scheme or trailing slash; both are
    removed. Empty values fall back to the production defaults.

    Args:
        api_url: Account and feature lookups
        analytics_url: Analytics collection
        indexing_url: Indexing (batch and attributes) API
        js_url: Frontend JavaScript host
        tiers_url: Subscription tiers
        merchant_center_url: Merchant Center
    """

    DEFAULT_API_URL = "api.ksearchnet.com"
    DEFAULT_ANALYTICS_URL = "stats.ksearchnet.com"
    DEFAULT_INDEXING_URL = "indexing.ksearchnet.com"
    DEFAULT_JS_URL = "js.klevu.com"
    DEFAULT_TIERS_URL = "tiers.klevu.com"
    DEFAULT_MERCHANT_CENTER_URL = "box.klevu.com"

    def __init__(
        self,
        api_url: str | None = None,
        analytics_url: str | None = None,
        indexing_url: str | None = None,
        js_url: str | None = None,
        tiers_url: str | None = None,
        merchant_center_url: str | None = None,
    ):
        self.api_url = self.prepare_url(api_url, self.DEFAULT_API_URL)
        self.analytics_url = self.prepare_url(analytics_url, self.DEFAULT_ANALYTICS_URL)
        self.indexing_url = self.prepare_url(indexing_url, self.DEFAULT_INDEXING_URL)
        self.js_url = self.prepare_url(js_url, self.DEFAULT_JS_URL)
        self.tiers_url = self.prepare_url(tiers_url, self.DEFAULT_TIERS_URL)
        self.merchant_center_url = self.prepare_url(
            merchant_center_url, self.DEFAULT_MERCHANT_CENTER_URL
        )

    @classmethod
    def from_config(cls, config) -> "BaseUrlsProvider":
        """Build a provider from the base URL overrides of an SdkConfig."""
        return cls(
            api_url=config.api_url,
            analytics_url=config.analytics_url,
            indexing_url=config.indexing_url,
            js_url=config.js_url,
            tiers_url=config.tiers_url,
            merchant_center_url=config.merchant_center_url,
        )

    def get_api_url(self) -> str:
        return self.api_url

    def get_analytics_url(self) -> str:
        return self.analytics_url

    def get_indexing_url(self, version: IndexingVersions = IndexingVersions.XML) -> str:
        """
        Indexing host, with the route prefix of the requested API version.

        Args:
            version: IndexingVersions.JSON appends "/v2" unless already present
        """
        prefix = version.get_url_route_prefix()
        if prefix and not self.indexing_url.endswith(prefix):
            return self.indexing_url + prefix
        return self.indexing_url

    def get_js_url(self) -> str:
        return self.js_url

    def get_tiers_url(self) -> str:
        return self.tiers_url

    def get_merchant_center_url(self) -> str:
        return self.merchant_center_url

    @staticmethod
    def prepare_url(url: str | None, default: str) -> str:
        prepared = (url or "").strip(_URL_TRIM_CHARACTERS)
        if "://" in prepared:
            prepared = prepared.split("://", 1)[1].strip(_URL_TRIM_CHARACTERS)
        return prepared or default


def create_endpoint(base_url: str, path: str) -> str:
    """
    Join a base URL and a route into an absolute endpoint.

    Args:
        base_url: Host, optionally with scheme, port and path prefix
        path: Route appended after any path prefix of the base URL

    Returns:
        "scheme://host[:port]/path", using https when no scheme is given

    Raises:
        EndpointConfigurationError: If the base URL has no host
    """
    base_url = (base_url or "").strip()
    if "://" not in base_url:
        base_url = f"https://{base_url}"

    parts = urlsplit(base_url)
    if not parts.hostname:
        raise EndpointConfigurationError(
            f"Empty baseUrl host provided to create_endpoint: {base_url!r}"
        )
    try:
        port = parts.port
    except ValueError as e:
        raise EndpointConfigurationError(f"Invalid port in baseUrl {base_url!r}") from e

    endpoint = f"{parts.scheme or 'https'}://{parts.hostname}"
    if port:
        endpoint += f":{port}"

    base_path = parts.path.strip(_URL_TRIM_CHARACTERS)
    if base_path:
        path = f"/{base_path}{path}"

    return endpoint + "/" + path.strip().lstrip("/")
