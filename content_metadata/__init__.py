from content_metadata.internal.env_settings import Settings
from content_metadata.internal.metadata import (
    ContentManager,
    ContentMetadataClient,
    create_client_session,
)
from content_metadata.internal.models import (
    BitrateEncryptionPercentage,
    ContentConfig,
    ContentEncryptionConfig,
    ContentResult,
)
from content_metadata.util.cache import MetadataCache
from content_metadata.util.exceptions import (
    ContentDecodeError,
    ContentMetadataError,
    ContentTransportError,
    InvalidServiceURLError,
    RemoteStatusError,
)
from content_metadata.util.log import setup_logging

__all__ = [
    "BitrateEncryptionPercentage",
    "ContentConfig",
    "ContentDecodeError",
    "ContentEncryptionConfig",
    "ContentManager",
    "ContentMetadataClient",
    "ContentMetadataError",
    "ContentResult",
    "ContentTransportError",
    "InvalidServiceURLError",
    "MetadataCache",
    "RemoteStatusError",
    "Settings",
    "create_client_session",
    "setup_logging",
]
