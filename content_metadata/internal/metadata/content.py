"""
Content metadata service client.

Retrieves content configs and content encryption configs from the content
metadata service, memoizing them in a MetadataCache when caching is enabled.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, TypeVar
from urllib.parse import quote

import aiohttp
from aiohttp import ClientError, ClientSession
from pydantic import ValidationError
from yarl import URL

from content_metadata.internal.env_settings import Settings
from content_metadata.internal.models import (
    OK_STATUS,
    ContentConfig,
    ContentEncryptionConfig,
    ContentResult,
)
from content_metadata.util.cache import MetadataCache
from content_metadata.util.exceptions import (
    ContentMetadataError,
    InvalidServiceURLError,
    RemoteStatusError,
    decode_error,
    transport_error,
)
from content_metadata.util.log import logger

M = TypeVar("M")

SERVICE_NAME = "Content metadata"


class ContentManager(ABC):
    """Source of content configs and content encryption configs."""

    @abstractmethod
    async def get_config(self, content_id: str) -> ContentResult[ContentConfig]: ...

    @abstractmethod
    async def get_encryption_config(
        self, content_id: str, bitrate: str
    ) -> ContentResult[ContentEncryptionConfig]: ...


def parse_service_url(service_url: str) -> URL:
    try:
        url = URL(service_url)
    except (TypeError, ValueError) as e:
        raise InvalidServiceURLError(f"Invalid service url {service_url!r}: {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidServiceURLError(
            f"Invalid service url {service_url!r}: expected an absolute http(s) url"
        )
    return url


def create_client_session(settings: Settings | None = None) -> ClientSession:
    """Create an HTTP session using the configured request timeout.

    Must be called from a running event loop. Closing the session is up to
    the caller.
    """
    settings = settings or Settings()
    return ClientSession(
        timeout=aiohttp.ClientTimeout(total=settings.client.request_timeout)
    )


class ContentMetadataClient(ContentManager):
    """
    Manages content metadata by making HTTP requests to the content
    metadata service.

    Retrieved records are memoized per content id (and per bitrate for
    encryption configs) when cache_enabled is set. Cached records are never
    re-validated against the service.
    """

    service_url: URL
    client_session: ClientSession
    cache_enabled: bool
    cache: MetadataCache

    def __init__(
        self,
        service_url: str,
        client_session: ClientSession,
        cache_enabled: bool = True,
        cache: MetadataCache | None = None,
    ):
        self.service_url = parse_service_url(service_url)
        self.client_session = client_session
        self.cache_enabled = cache_enabled
        self.cache = cache if cache is not None else MetadataCache()

    @classmethod
    def from_settings(
        cls,
        client_session: ClientSession,
        settings: Settings | None = None,
        cache: MetadataCache | None = None,
    ) -> "ContentMetadataClient":
        settings = settings or Settings()
        return cls(
            settings.client.service_url,
            client_session,
            cache_enabled=settings.client.cache_enabled,
            cache=cache,
        )

    def _service_endpoint(self, *segments: str) -> URL:
        """Append path segments to the service url, keeping its query."""
        base_path = self.service_url.raw_path.rstrip("/")
        path = "/".join([base_path, *(quote(segment, safe="") for segment in segments)])
        return self.service_url.with_path(path, encoded=True).with_query(
            self.service_url.query
        )

    def config_url(self, content_id: str) -> URL:
        return self._service_endpoint("contents", content_id)

    def encryption_config_url(self, content_id: str, bitrate: str) -> URL:
        return self._service_endpoint(
            "contents", content_id, "encryption-percentage"
        ).update_query(bitrate=bitrate)

    async def get_config(self, content_id: str) -> ContentResult[ContentConfig]:
        """Retrieve the metadata configuration of a content."""
        if self.cache_enabled:
            cached = self.cache.get_config(content_id)
            if cached is not None:
                logger.info("Content config retrieved from cache", content_id=content_id)
                logger.debug("Content config", config=cached.model_dump())
                return ContentResult[ContentConfig].success(cached)

        try:
            body = await self._get(
                self.config_url(content_id),
                "fetch content config",
                content_id=content_id,
            )
            logger.info("Decoding content config...", content_id=content_id)
            config = self._decode(
                ContentConfig.model_validate_json,
                body,
                "content config response",
                content_id=content_id,
            )
        except ContentMetadataError as e:
            return ContentResult[ContentConfig].failure(e)

        logger.info("Content config successfully decoded", content_id=content_id)
        logger.debug("Content config", config=config.model_dump())

        if self.cache_enabled:
            config = self.cache.set_config(config, content_id)

        return ContentResult[ContentConfig].success(config)

    async def get_encryption_config(
        self, content_id: str, bitrate: str
    ) -> ContentResult[ContentEncryptionConfig]:
        """
        Retrieve the encryption configuration of a content for a bitrate.

        The bitrate is sent as given; validating it is left to the service.
        """
        if self.cache_enabled:
            cached = self.cache.get_encryption_config(content_id, bitrate)
            if cached is not None:
                logger.info(
                    "Content encryption config retrieved from cache",
                    content_id=content_id,
                    bitrate=bitrate,
                )
                logger.debug("Content encryption config", config=cached.model_dump())
                return ContentResult[ContentEncryptionConfig].success(cached)

        try:
            body = await self._get(
                self.encryption_config_url(content_id, bitrate),
                "fetch content encryption config",
                content_id=content_id,
                bitrate=bitrate,
            )
            logger.info(
                "Decoding content encryption config...",
                content_id=content_id,
                bitrate=bitrate,
            )
            config = self._decode(
                ContentEncryptionConfig.from_response_body,
                body,
                "content encryption config response",
                content_id=content_id,
                bitrate=bitrate,
            )
        except ContentMetadataError as e:
            return ContentResult[ContentEncryptionConfig].failure(e)

        logger.info(
            "Content encryption config successfully decoded",
            content_id=content_id,
            bitrate=bitrate,
        )
        logger.debug("Content encryption config", config=config.model_dump())

        if self.cache_enabled:
            config = self.cache.set_encryption_config(config, content_id, bitrate)

        return ContentResult[ContentEncryptionConfig].success(config)

    async def _get(self, endpoint: URL, operation: str, **context: Any) -> bytes:
        """GET an endpoint and return the body of a 200 response."""
        logger.debug(f"{SERVICE_NAME} request", operation=operation, url=str(endpoint))
        try:
            async with self.client_session.get(
                endpoint, headers={"Accept": "application/json"}
            ) as response:
                status = response.status
                body = await response.read()
        except (asyncio.TimeoutError, ClientError) as e:
            raise transport_error(e, operation, url=str(endpoint), **context) from e

        if status != OK_STATUS:
            message = body.decode("utf-8", errors="replace")
            logger.debug(
                f"{SERVICE_NAME} service returned {status}",
                status=status,
                body=message,
                **context,
            )
            raise RemoteStatusError(status, message)

        return body

    def _decode(
        self,
        parse: Callable[[str], M],
        body: bytes,
        data_source: str,
        **context: Any,
    ) -> M:
        try:
            return parse(body.decode("utf-8"))
        except (UnicodeDecodeError, ValidationError) as e:
            raise decode_error(e, data_source, **context) from e
