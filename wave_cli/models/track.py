"""
Pydantic models mirroring the JSON returned by the Wave search endpoint.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WaveTrack(BaseModel):
    """
    A single music item from a Wave search.

    Every field is optional: fields present in the API response are populated,
    everything else stays ``None``. Instances are immutable.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str | None = None
    title: str | None = None
    uploader_name: str | None = Field(default=None, alias="uploaderName")
    uploader_url: str | None = Field(default=None, alias="uploaderUrl")
    duration: int | None = None  # seconds
    thumbnail: str | None = None
    url: str | None = None

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Duration cannot be negative.")
        return v

    @property
    def artist(self) -> str | None:
        return self.uploader_name

    def to_dict(self) -> dict[str, Any]:
        """Returns the record in API form, leaving out absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def __str__(self) -> str:
        return f"{self.title or ''} from {self.uploader_name or ''}"


class SearchResponse(BaseModel):
    """The envelope of a search response."""

    model_config = ConfigDict(extra="ignore")

    items: list[WaveTrack]
