"""
Pydantic models shared across the research pipeline.

Every model serialises with camelCase aliases (``pdfLink``, ``keyPoints``, …)
because that is the shape the HTTP clients consume.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Confidence(str, Enum):
    """Self-reported confidence of a generated digest."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Document(_CamelModel):
    """A normalised paper surfaced in the final result set."""

    id: str = Field(min_length=1)
    title: str
    authors: list[str] = Field(default_factory=list)
    abstract: str = ""
    pdf_link: str = "#"
    source_link: str = "#"
    published_date: str = "Unknown"
    source_name: str
    #: Machine timestamp behind ``published_date``; used for recency sorting only.
    published_at: Optional[datetime] = Field(default=None, exclude=True)


#: Digest fields that must be lists of strings.
_DIGEST_LIST_FIELDS = ("key_points", "use_cases", "resources", "related_topics")
#: Digest fields that must be plain strings.
_DIGEST_TEXT_FIELDS = (
    "title", "summary", "current_trends", "technical_details",
    "challenges", "future_outlook", "last_updated",
)


class DigestResult(_CamelModel):
    """Structured topic digest produced by the generative backend.

    The model's output is never schema-checked before it gets here, so every
    field has a default and values are coerced rather than rejected. Keys the
    model adds on its own are kept (``extra="allow"``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="allow",
    )

    title: str = ""
    summary: str = ""
    key_points: list[str] = Field(default_factory=list)
    current_trends: str = ""
    technical_details: str = ""
    use_cases: list[str] = Field(default_factory=list)
    challenges: str = ""
    future_outlook: str = ""
    resources: list[str] = Field(default_factory=list)
    related_topics: list[str] = Field(default_factory=list)
    last_updated: str = ""
    confidence: Confidence = Confidence.MEDIUM

    @field_validator(*_DIGEST_LIST_FIELDS, mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [v if isinstance(v, str) else str(v) for v in value if v is not None]
        return [str(value)]

    @field_validator(*_DIGEST_TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (list, tuple)):
            return "; ".join(str(v) for v in value)
        return value if isinstance(value, str) else str(value)

    @field_validator("confidence", mode="before")
    @classmethod
    def _coerce_confidence(cls, value: Any) -> Confidence:
        """Map ``"High"``, ``"medium "`` etc. onto the enum; anything else is MEDIUM."""
        if isinstance(value, Confidence):
            return value
        label = str(value or "").strip().upper()
        for member in Confidence:
            if label == member.value or label.startswith(member.value + " "):
                return member
        return Confidence.MEDIUM


class SearchResponse(_CamelModel):
    """Successful ``search`` envelope."""

    success: bool = True
    digest: DigestResult
    documents: list[Document] = Field(default_factory=list)
    query: str
    category: Optional[str] = None


class ErrorResponse(_CamelModel):
    """Failure envelope shared by every endpoint."""

    success: bool = False
    error: str
    details: Optional[str] = None


class ConsultantProfile(_CamelModel):
    """A consultant application submitted for vetting.

    Required fields are checked by ``ProfileVetter`` rather than by pydantic so
    that missing and blank values are rejected the same way.
    """

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    expertise: Optional[str] = None
    experience: Optional[Union[str, int]] = None
    hourly_rate: Optional[Union[str, float]] = None
    location: Optional[str] = None
    languages: list[str] = Field(default_factory=list)
    specialties: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    linkedin_url: Optional[str] = None
    github_url: Optional[str] = None
    portfolio_url: Optional[str] = None

    #: Fields an application cannot be vetted without.
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "full_name", "email", "expertise", "experience", "hourly_rate", "location",
    )

    def missing_fields(self) -> list[str]:
        """Return the camelCase names of required fields that are blank."""
        return [
            to_camel(name) for name in self.REQUIRED_FIELDS
            if not getattr(self, name)
        ]
