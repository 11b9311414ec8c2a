"""Pydantic models for talks, speakers and their read-only projections."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from talkstore.utils import unique_tags


class Speaker(BaseModel):
    """Speaker document."""

    id: str
    name: str


class Talk(BaseModel):
    """Talk document as stored."""

    id: str
    headline: str
    description: str = ""
    speaker: str = Field(..., description="Id of the referenced speaker")
    event: Optional[str] = None
    published: bool = False
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value):
        return unique_tags(value)


class NewTalk(BaseModel):
    """Fields accepted when creating a talk."""

    headline: str = Field(..., min_length=1)
    description: str = ""
    speaker: str = Field(..., min_length=1)
    event: Optional[str] = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value):
        return unique_tags(value)


class UpdatedTalk(BaseModel):
    """Mutable talk fields, used both for editing and for updates."""

    headline: str = Field(..., min_length=1)
    description: str = ""
    speaker: str = Field(..., min_length=1)
    event: Optional[str] = None
    published: bool = False
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value):
        return unique_tags(value)


class TalkSummary(BaseModel):
    """Listing row: a talk with its speaker's name resolved."""

    id: str
    headline: str
    speaker: str
    speaker_name: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class TalkDetail(BaseModel):
    """Full talk view with speaker name and the speaker's other talks."""

    id: str
    headline: str
    description: str = ""
    speaker: str
    speaker_name: Optional[str] = None
    event: Optional[str] = None
    published: bool = False
    tags: list[str] = Field(default_factory=list)
    speaker_talks: list[TalkSummary] = Field(default_factory=list)


class SpeakerTalkStats(BaseModel):
    """Number of talks per speaker."""

    speaker: str
    speaker_name: Optional[str] = None
    talk_count: int = Field(..., ge=0)


class TagTalkStats(BaseModel):
    """Number of talks per tag."""

    tag: str
    talk_count: int = Field(..., ge=0)
