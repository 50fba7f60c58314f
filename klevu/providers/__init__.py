"""
Providers supplying URLs, headers, signatures and bodies for API requests.
"""

from .base_urls import BaseUrlsProvider, IndexingVersions, create_endpoint
from .bearer_token import RequestBearerTokenProvider
from .payloads import (
    BatchPayloadProvider,
    DeletePayloadProvider,
    RecordPayloadProvider,
    RequestPayloadProvider,
    UpdatePayloadProvider,
)
from .user_agent import (
    DefaultUserAgentProvider,
    PythonVersionProvider,
    SdkUserAgentProvider,
    StaticUserAgentProvider,
    UserAgentProvider,
)

__all__ = [
    "BaseUrlsProvider",
    "BatchPayloadProvider",
    "DefaultUserAgentProvider",
    "DeletePayloadProvider",
    "IndexingVersions",
    "PythonVersionProvider",
    "RecordPayloadProvider",
    "RequestBearerTokenProvider",
    "RequestPayloadProvider",
    "SdkUserAgentProvider",
    "StaticUserAgentProvider",
    "UpdatePayloadProvider",
    "UserAgentProvider",
    "create_endpoint",
]
