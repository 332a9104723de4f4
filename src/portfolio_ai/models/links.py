"""Pydantic models for post linking."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContentType(str, Enum):
    BLOG = "BLOG"
    PROJECT = "PROJECT"
    EXPERIENCE = "EXPERIENCE"
    SKILL = "SKILL"


class LinkType(str, Enum):
    RELATED = "related"
    PARENT = "parent"
    CHILD = "child"
    SEQUENTIAL = "sequential"
    COMPLEMENTARY = "complementary"
    PREREQUISITE = "prerequisite"
    FOLLOW_UP = "follow-up"


def _names(value: Any) -> Any:
    """Accept ``["React"]`` or ``[{"name": "React"}]`` and return plain names."""
    if value is None:
        return []
    if isinstance(value, list):
        return [(item.get("name") or "") if isinstance(item, dict) else item for item in value]
    return value


class PostSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    title: str
    content_type: ContentType = Field(alias="contentType")
    excerpt: str | None = None
    linked_skills: list[str] = Field(default_factory=list, alias="linkedSkills")
    tags: list[str] = []

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("content_type", mode="before")
    @classmethod
    def _upper_content_type(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    @field_validator("linked_skills", "tags", mode="before")
    @classmethod
    def _flatten_names(cls, v: Any) -> Any:
        return _names(v)


class LinkProposal(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_id: str = Field(alias="sourceId")
    target_id: str = Field(alias="targetId")
    link_type: LinkType = Field(alias="linkType")
    reason: str = ""

    @field_validator("source_id", "target_id", mode="before")
    @classmethod
    def _stringify_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @field_validator("reason", mode="before")
    @classmethod
    def _blank_reason(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def key(self) -> tuple[str, str, LinkType]:
        return (self.source_id, self.target_id, self.link_type)

    def to_wire(self) -> dict[str, str]:
        """Serialize with the camelCase field names callers expect."""
        return self.model_dump(mode="json", by_alias=True)
