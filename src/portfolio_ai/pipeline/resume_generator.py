"""Resume Generator - tailors a summary and project blurbs to a job description."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from portfolio_ai.clients.llm_client import TextGenerator
from portfolio_ai.errors import GenerationShapeError
from portfolio_ai.models.resume import (
    GenerationRequest,
    ProjectInput,
    ResumeResult,
    ResumeSize,
    UserProfile,
)
from portfolio_ai.pipeline.base import StructuredGenerator

logger = logging.getLogger(__name__)

SIZE_INSTRUCTIONS: dict[ResumeSize, str] = {
    ResumeSize.SMALL: "Keep descriptions brief and concise (1-2 sentences per project).",
    ResumeSize.MEDIUM: "Provide moderate detail (2-3 sentences per project).",
    ResumeSize.LARGE: (
        "Provide comprehensive detail (3-5 sentences per project with specific "
        "achievements and technologies)."
    ),
}

SUMMARY_LENGTHS: dict[ResumeSize, str] = {
    ResumeSize.SMALL: "2-3 sentences",
    ResumeSize.MEDIUM: "3-4 sentences",
    ResumeSize.LARGE: "4-5 sentences",
}

IMPROVE_INSTRUCTIONS: dict[ResumeSize, str] = {
    ResumeSize.SMALL: "Keep it brief and concise (1-2 sentences).",
    ResumeSize.MEDIUM: "Provide moderate detail (2-3 sentences).",
    ResumeSize.LARGE: "Provide comprehensive detail (3-5 sentences with specific achievements).",
}


def _format_profile(profile: UserProfile) -> str:
    lines = [
        f"Name: {profile.name or 'Not provided'}",
        f"Email: {profile.email or 'Not provided'}",
    ]
    if profile.bio:
        lines.append(f"Bio: {profile.bio}")
    if profile.skills:
        lines.append(f"Skills: {', '.join(profile.skills)}")
    return "\n".join(lines)


def _format_projects(projects: Sequence[ProjectInput]) -> str:
    if not projects:
        return "No projects were selected. Return an empty projects array."
    return "\n".join(f"- {p.title}: {p.description}" for p in projects)


def build_resume_prompt(request: GenerationRequest) -> str:
    """Compose the single instruction block sent to the model."""
    size = request.size
    return f"""You are a professional resume writer. Generate tailored resume content in JSON format based on the following information.

JOB DESCRIPTION:
{request.job_description.strip()}

USER PROFILE:
{_format_profile(request.user_profile)}

SELECTED PROJECTS:
{_format_projects(request.projects)}

RESUME SIZE: {size.value}
{SIZE_INSTRUCTIONS[size]}

Generate a JSON object with exactly this structure:
{{
  "summary": "Professional summary tailored to the job description ({SUMMARY_LENGTHS[size]})",
  "projects": [
    {{
      "title": "Project title, unchanged from the list above",
      "description": "Project description tailored to the job description",
      "tech": "Comma-separated technologies used"
    }}
  ]
}}

IMPORTANT:
- Return ONLY valid JSON, no markdown formatting, no code blocks, no commentary
- Include one entry in "projects" for each selected project, in the same order
- Keep original project titles and base descriptions on the provided content
- Tailor the summary and descriptions to the job description requirements
- Use professional language"""


def build_improve_prompt(
    original_text: str,
    job_description: str,
    context: str = "",
    size: ResumeSize = ResumeSize.MEDIUM,
) -> str:
    context_block = f"CONTEXT:\n{context}\n\n" if context else ""
    return f"""You are a professional resume writer. Improve and tailor the following resume text to match the job description.

JOB DESCRIPTION:
{job_description}

{context_block}ORIGINAL TEXT:
{original_text}

RESUME SIZE: {size.value}
{IMPROVE_INSTRUCTIONS[size]}

Generate an improved version of the text that:
- Better matches the job description requirements
- Highlights relevant skills and achievements
- Uses professional language
- Is tailored to the position

Return ONLY the improved text, no explanations, no markdown formatting."""


def validate_resume_payload(data: Any) -> ResumeResult:
    """Check the parsed reply carries a summary and a projects list."""
    if not isinstance(data, dict):
        raise GenerationShapeError(
            f"Invalid resume data structure: expected an object, got {type(data).__name__}",
            payload=data,
        )
    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise GenerationShapeError("Invalid resume data structure: missing summary", payload=data)
    if not isinstance(data.get("projects"), list):
        raise GenerationShapeError(
            "Invalid resume data structure: projects must be a list", payload=data
        )
    try:
        return ResumeResult(**data)
    except ValidationError as exc:
        raise GenerationShapeError(
            f"Invalid resume data structure: {exc.error_count()} invalid field(s)",
            payload=data,
        ) from exc


class ResumeGenerator(StructuredGenerator):
    task = "resume content"

    def __init__(self, llm: TextGenerator, *, default_size: ResumeSize | str = ResumeSize.MEDIUM):
        super().__init__(llm)
        self.default_size = ResumeSize.coerce(default_size)

    async def generate(
        self,
        job_description: str,
        user_profile: UserProfile | Mapping[str, Any] | None,
        projects: Sequence[ProjectInput | Mapping[str, Any]] = (),
        size: ResumeSize | str | None = None,
    ) -> ResumeResult:
        """Generate resume content tailored to ``job_description``."""
        request = GenerationRequest(
            job_description=job_description,
            user_profile=user_profile or {},
            projects=list(projects),
            size=size if size is not None else self.default_size,
        )
        return await self.generate_request(request)

    async def generate_request(self, request: GenerationRequest) -> ResumeResult:
        prompt = build_resume_prompt(request)
        data = await self._complete_json(prompt)
        result = validate_resume_payload(data)
        logger.info(
            "Generated resume content: size=%s, %d project(s)",
            request.size.value,
            len(result.projects),
        )
        return result

    async def improve_text(
        self,
        original_text: str,
        job_description: str,
        context: str = "",
        size: ResumeSize | str | None = None,
    ) -> str:
        """Rewrite one resume item so it better fits the job description."""
        if not original_text or not original_text.strip():
            raise ValueError("original text must not be empty")
        if not job_description or not job_description.strip():
            raise ValueError("job description must not be empty")
        prompt = build_improve_prompt(
            original_text,
            job_description,
            context,
            ResumeSize.coerce(size if size is not None else self.default_size),
        )
        text = await self._complete_text(prompt)
        if not text:
            raise GenerationShapeError("Model returned empty text", payload=text)
        return text
