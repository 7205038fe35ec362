"""
Pytest configuration and fixtures for the content metadata test suite.
"""
import json
import re
import uuid
from typing import AsyncGenerator, Generator

import pytest
from aiohttp import ClientSession
from aioresponses import CallbackResult, aioresponses
from yarl import URL

from content_metadata.internal.metadata import ContentMetadataClient
from content_metadata.util.cache import MetadataCache

SERVICE_URL = "http://metadata.test"

SINTEL_ID = "f0121a13-8f2a-4dac-ab07-b49e10aeefcf"
OTHER_ID = "9c02fc65-e782-4f85-af92-a3134e028515"
UNKNOWN_ID = "d5583a9c-f4e3-4ca5-88cd-8403f50b4961"
KNOWN_CONTENT_IDS = {SINTEL_ID, OTHER_ID}

CONTENT_CONFIG_BODY = json.dumps(
    {
        "uuid": SINTEL_ID,
        "partnerUuid": "3db5dabc-90e5-42fe-a286-a8eb720d9ee5",
        "contentName": "Sintel VOD Dash encrypted",
        "contentType": "video-on-demand",
        "sessionBasedEncryptionPercentage": 20,
        "vivEncryptionPercentage": 20,
        "available": False,
        "convertToVod": False,
        "storageType": "s3",
        "cdnUrl": "",
        "path": "sintel_dash",
        "status": "CREATED",
    }
)

ENCRYPTION_CONFIG_BODY = """{
    "sessionBasedEncryptionPercentage":20,
    "vivEncryptionPercentage":20,
    "contentType":"video-on-demand",
    "contentName":"",
    "convertToVod":false,
    "chosenFrom":"ENCRYPTION_PERCENTAGE_TITLE",
    "encryptionPercentagesPerBitrates":[
        {"quality":"1080","encryptionPercentage":50},
        {"quality":"720","encryptionPercentage":40},
        {"quality":"480","encryptionPercentage":30}
    ]}"""

CONTENTS_PATTERN = re.compile(r"^http://metadata\.test/contents/.*$")


def _is_valid_bitrate(bitrate: str) -> bool:
    try:
        return int(bitrate) > 0
    except ValueError:
        return False


def content_service(url: URL, **kwargs) -> CallbackResult:
    """Behaves like the content metadata service for /contents routes."""
    segments = url.path.split("/")[2:]
    content_id = segments[0] if segments else ""
    if not content_id:
        return CallbackResult(status=404, body="404 page not found", content_type="text/plain")

    try:
        uuid.UUID(content_id)
    except ValueError:
        return CallbackResult(status=400, body="Value is not a valid UUID V4 string")

    if content_id not in KNOWN_CONTENT_IDS:
        return CallbackResult(
            status=400, body=f"Content with UUID {content_id} doesn't exist"
        )

    if segments[1:] == ["encryption-percentage"]:
        if not _is_valid_bitrate(str(url.query.get("bitrate", ""))):
            return CallbackResult(status=400, body="Bitrates list is not compliant")
        return CallbackResult(status=200, body=ENCRYPTION_CONFIG_BODY)

    if segments[1:]:
        return CallbackResult(status=404, body="404 page not found", content_type="text/plain")

    return CallbackResult(status=200, body=CONTENT_CONFIG_BODY)


def request_count(mocked: aioresponses) -> int:
    """Total number of requests that reached the mocked service."""
    return sum(len(calls) for calls in mocked.requests.values())


@pytest.fixture(scope="function")
def aioresponses_mocker() -> Generator[aioresponses, None, None]:
    """Provide aioresponses context manager for manual HTTP mocking."""
    with aioresponses() as mocked:
        yield mocked


@pytest.fixture(scope="function")
def mocked_service(aioresponses_mocker: aioresponses) -> aioresponses:
    """Route every /contents request to the emulated metadata service."""
    aioresponses_mocker.get(CONTENTS_PATTERN, callback=content_service, repeat=True)
    return aioresponses_mocker


@pytest.fixture(scope="function")
async def client_session() -> AsyncGenerator[ClientSession, None]:
    async with ClientSession() as session:
        yield session


@pytest.fixture
def metadata_cache() -> MetadataCache:
    return MetadataCache()


@pytest.fixture
def cached_client(
    client_session: ClientSession, metadata_cache: MetadataCache
) -> ContentMetadataClient:
    return ContentMetadataClient(
        SERVICE_URL, client_session, cache_enabled=True, cache=metadata_cache
    )


@pytest.fixture
def uncached_client(client_session: ClientSession) -> ContentMetadataClient:
    return ContentMetadataClient(SERVICE_URL, client_session, cache_enabled=False)
