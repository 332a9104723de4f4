"""Data models for resume generation and post linking."""

from portfolio_ai.models.links import ContentType, LinkProposal, LinkType, PostSummary
from portfolio_ai.models.resume import (
    GenerationRequest,
    ProjectInput,
    ResumeProject,
    ResumeResult,
    ResumeSize,
    UserProfile,
)

__all__ = [
    "ContentType",
    "GenerationRequest",
    "LinkProposal",
    "LinkType",
    "PostSummary",
    "ProjectInput",
    "ResumeProject",
    "ResumeResult",
    "ResumeSize",
    "UserProfile",
]
