"""
Notes Service: Pydantic Request/Response Schemas
================================================

What:  Pydantic models defining the JSON contract of the notes API.
How:   FastAPI decodes request bodies into the *Request models (a body that
       fails to decode becomes a 400) and serializes responses through the
       *Response models. NoteResponse reads straight from the ORM Note via
       from_attributes.

Request models use strict mode: "1" is not accepted where an integer id is
expected, and ids outside the SQLite INTEGER range are rejected. Unknown
keys are ignored.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

# SQLite INTEGER is a signed 64-bit value; larger ids cannot name a row
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class _NoteTextFields(BaseModel):
    """
    header/content handling shared by create and edit.

    null and a missing key both mean "". Text must be encodable as UTF-8:
    JSON escapes can spell lone surrogates that SQLite cannot store.
    """
    header: str = Field(default="")
    content: str = Field(default="")

    model_config = {"strict": True}

    @field_validator("header", "content", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("header", "content")
    @classmethod
    def encodable_as_utf8(cls, v: str) -> str:
        try:
            v.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("must be valid UTF-8 text") from None
        return v


class NoteCreateRequest(_NoteTextFields):
    """Body of POST /. A missing field decodes to an empty string."""
    header: str = Field(default="", description="Note title, must not be empty", examples=["go for a walk"])
    content: str = Field(default="", description="Note body", examples=["at 3 pm"])


class NoteEditRequest(_NoteTextFields):
    """
    Body of PATCH /.

    An empty header or content keeps the stored value.
    """
    header: str = Field(default="", description="New header, empty to keep the current one")
    content: str = Field(default="", description="New content, empty to keep the current one")
    id: int = Field(
        ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX,
        description="Identifier of the note to edit", examples=[1],
    )


class NoteDeleteRequest(BaseModel):
    """Body of DELETE /."""
    id: int = Field(
        ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX,
        description="Identifier of the note to delete", examples=[1],
    )

    model_config = {"strict": True}




# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """One element of the array returned by GET /."""
    header: str = Field(examples=["go for a walk"])
    content: str = Field(examples=["at 3 pm"])
    id: int = Field(examples=[1])

    model_config = {"from_attributes": True}


class NoteCreatedResponse(BaseModel):
    """Returned by POST / with the id assigned by the database."""
    id: int = Field(examples=[1])


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
