"""
Content metadata retrieval.

Provides the HTTP client for the content metadata service and the
ContentManager interface it implements.
"""

from .content import (
    ContentManager,
    ContentMetadataClient,
    create_client_session,
    parse_service_url,
)

__all__ = [
    "ContentManager",
    "ContentMetadataClient",
    "create_client_session",
    "parse_service_url",
]
