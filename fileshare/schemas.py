"""
Request and response bodies for the JSON API.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credentials(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1)


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


class UploadResponse(BaseModel):
    message: str
    code: str


class FileEntry(BaseModel):
    id: int
    filename: str
    uploaded_at: datetime = Field(serialization_alias="uploadedAt")

    @field_validator("uploaded_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        # sqlite hands timestamps back naive; they were written in UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class DownloadRequest(BaseModel):
    """A missing or numeric code is still just a code that does not match."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    code: str = ""
