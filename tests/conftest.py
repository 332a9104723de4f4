"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from portfolio_ai.clients.llm_client import LLMClient
from portfolio_ai.models.links import PostSummary
from portfolio_ai.models.resume import ProjectInput, UserProfile


@pytest.fixture(autouse=True)
def _api_key(monkeypatch):
    """Tests never talk to the real provider; give LLMClient a dummy key."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")


@pytest.fixture
def sample_jd_text() -> str:
    return """Backend Engineer (3-5 years)

Responsibilities:
- Design and operate high-traffic REST APIs
- Own service reliability and observability

Requirements:
- Python or Go in production
- PostgreSQL, Redis
- Kubernetes and Docker
"""


@pytest.fixture
def sample_profile() -> UserProfile:
    return UserProfile(
        name="Ada Lovelace",
        email="ada@example.com",
        bio="Backend engineer focused on APIs and reliability.",
        skills=["Python", "PostgreSQL", "Kubernetes"],
    )


@pytest.fixture
def sample_projects() -> list[ProjectInput]:
    return [
        ProjectInput(title="API Gateway", description="Built a gateway handling 10k rps"),
        ProjectInput(title="Job Queue", description="Redis-backed background job runner"),
    ]


@pytest.fixture
def sample_resume_reply() -> str:
    return json.dumps(
        {
            "summary": "Backend engineer with a track record of shipping reliable APIs.",
            "projects": [
                {
                    "title": "API Gateway",
                    "description": "Designed a gateway serving 10k requests per second.",
                    "tech": "Python, Kubernetes",
                },
                {
                    "title": "Job Queue",
                    "description": "Built a Redis-backed job runner.",
                    "tech": "Redis, Python",
                },
            ],
        }
    )


@pytest.fixture
def sample_posts() -> list[PostSummary]:
    return [
        PostSummary(
            id="p1",
            title="Building an API Gateway",
            contentType="PROJECT",
            excerpt="A gateway in front of our services.",
            linkedSkills=["Python", "Kubernetes"],
            tags=["backend"],
        ),
        PostSummary(
            id="p2",
            title="Rate limiting lessons",
            contentType="BLOG",
            excerpt="What we learned rate limiting the gateway.",
            linkedSkills=["Redis"],
            tags=["backend", "scaling"],
        ),
        PostSummary(
            id="p3",
            title="Senior Engineer at Acme",
            contentType="EXPERIENCE",
            excerpt=None,
        ),
    ]


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.complete = AsyncMock(return_value="{}")
    return client
