from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from content_metadata.util.exceptions import ContentMetadataError

T = TypeVar("T")

OK_STATUS = 200


class _WireModel(BaseModel):
    model_config = ConfigDict(  # pyright: ignore[reportUnannotatedClassAttribute]
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class ContentConfig(_WireModel):
    """Metadata configuration of a single content."""

    uuid: str = ""
    partner_uuid: str = ""
    content_name: str = ""
    content_type: str = ""
    session_based_encryption_percentage: int = 0
    viv_encryption_percentage: int = 0
    available: bool = False
    convert_to_vod: bool = False
    storage_type: str = ""
    cdn_url: str = ""
    path: str = ""
    status: str = ""
    """Lifecycle status reported by the service, e.g. CREATED"""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None


class BitrateEncryptionPercentage(_WireModel):
    quality: str = ""
    encryption_percentage: int = 0


class ContentEncryptionConfig(_WireModel):
    """Encryption configuration of a content for a given bitrate."""

    session_based_encryption_percentage: int = 0
    viv_encryption_percentage: int = 0
    content_type: str = ""
    content_name: str = ""
    convert_to_vod: bool = False
    chosen_from: str = ""
    """Which policy the percentages were chosen from, e.g. ENCRYPTION_PERCENTAGE_TITLE"""
    encryption_percentages_per_bitrates: list[BitrateEncryptionPercentage] = Field(
        default_factory=list
    )
    raw_data: str = Field(default="", exclude=True)
    """Response body the config was decoded from, verbatim. Never read from the wire."""

    @classmethod
    def from_response_body(cls, body: str) -> "ContentEncryptionConfig":
        config = cls.model_validate_json(body)
        return config.model_copy(update={"raw_data": body})


class ContentResult(BaseModel, Generic[T]):
    """Outcome of a metadata retrieval: a status plus a value or an error."""

    model_config = ConfigDict(  # pyright: ignore[reportUnannotatedClassAttribute]
        frozen=True,
        arbitrary_types_allowed=True,
    )

    status: int
    value: T | None = None
    error: ContentMetadataError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value  # pyright: ignore[reportReturnType]

    @classmethod
    def success(cls, value: T, status: int = OK_STATUS) -> "ContentResult[T]":
        return cls(status=status, value=value)

    @classmethod
    def failure(cls, error: ContentMetadataError) -> "ContentResult[T]":
        return cls(status=error.status, error=error)
