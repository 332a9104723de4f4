"""Pydantic models for resume generation input and output."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class ResumeSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @classmethod
    def coerce(cls, value: Any) -> ResumeSize:
        """Map a raw size to an enum member; unknown or missing -> MEDIUM."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        if value is not None:
            logger.warning("Unrecognized resume size %r, using medium", value)
        return cls.MEDIUM


class UserProfile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    bio: str | None = None
    skills: list[str] | None = None


class ProjectInput(BaseModel):
    """A selected portfolio project; accepts ``name`` in place of ``title``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str = Field(
        default="Untitled Project",
        validation_alias=AliasChoices("title", "name"),
    )
    description: str = "No description"

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, v: Any) -> Any:
        return v or "Untitled Project"

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, v: Any) -> Any:
        return v or "No description"


class GenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_description: str = Field(alias="jobDescription")
    user_profile: UserProfile = Field(default_factory=UserProfile, alias="userProfile")
    projects: list[ProjectInput] = []
    size: ResumeSize = ResumeSize.MEDIUM

    @field_validator("job_description")
    @classmethod
    def _require_job_description(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("job description must not be empty")
        return v

    @field_validator("size", mode="before")
    @classmethod
    def _coerce_size(cls, v: Any) -> ResumeSize:
        return ResumeSize.coerce(v)


class ResumeProject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    description: str
    tech: str = ""

    @field_validator("tech", mode="before")
    @classmethod
    def _join_tech(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, list):
            return ", ".join(str(t) for t in v)
        return v


class ResumeResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    summary: str
    projects: list[ResumeProject] = []
