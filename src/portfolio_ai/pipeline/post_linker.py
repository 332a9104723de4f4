"""Post Linker - asks the model which portfolio posts relate to each other."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from portfolio_ai.clients.llm_client import TextGenerator
from portfolio_ai.errors import GenerationShapeError
from portfolio_ai.models.links import LinkProposal, LinkType, PostSummary
from portfolio_ai.pipeline.base import StructuredGenerator

logger = logging.getLogger(__name__)

EXCERPT_CHARS = 200


def format_excerpt(excerpt: str | None, limit: int = EXCERPT_CHARS) -> str:
    """First ``limit`` characters of the excerpt with newlines flattened."""
    if not excerpt:
        return ""
    # one space per newline character keeps the truncated length intact
    return excerpt[:limit].replace("\r", " ").replace("\n", " ")


def _join_or_none(names: Sequence[str]) -> str:
    names = [n for n in names if n]
    return ", ".join(names) if names else "none"


def _coerce_posts(posts: Sequence[PostSummary | Mapping[str, Any]]) -> list[PostSummary]:
    return [p if isinstance(p, PostSummary) else PostSummary(**p) for p in posts]


def build_post_links_prompt(
    posts: Sequence[PostSummary | Mapping[str, Any]],
    excerpt_chars: int = EXCERPT_CHARS,
) -> str:
    """Render the linking prompt; list order gives the 1-based index."""
    entries = []
    for idx, post in enumerate(_coerce_posts(posts), start=1):
        excerpt = format_excerpt(post.excerpt, excerpt_chars)
        entries.append(
            f"{idx}. {post.id}|{post.title}|{post.content_type.value}\n"
            f"   Excerpt: {excerpt or 'No excerpt'}\n"
            f"   Skills: {_join_or_none(post.linked_skills)}\n"
            f"   Tags: {_join_or_none(post.tags)}"
        )
    posts_list = "\n\n".join(entries)
    link_types = ", ".join(t.value for t in LinkType)

    return f"""Link related posts. JSON only:

{posts_list}

Link types: {link_types}

Return format:
{{"links":[{{"sourceId":"id","targetId":"id","linkType":"related","reason":"why"}}]}}

Rules:
- Only link posts with clear relationships
- sourceId !== targetId
- No duplicates
- Return [] if no links found

JSON:"""


def validate_links_payload(data: Any) -> list[LinkProposal]:
    """Turn the parsed reply into LinkProposal objects.

    A bare list is accepted as the links array, since the prompt allows
    replying with ``[]`` when nothing should be linked.
    """
    if isinstance(data, list):
        raw_links = data
    elif isinstance(data, dict) and isinstance(data.get("links"), list):
        raw_links = data["links"]
    else:
        raise GenerationShapeError(
            "Invalid post links structure: missing links list", payload=data
        )

    proposals = []
    for i, raw in enumerate(raw_links):
        if not isinstance(raw, dict):
            raise GenerationShapeError(
                f"Invalid post links structure: link {i} is not an object", payload=data
            )
        try:
            proposals.append(LinkProposal(**raw))
        except ValidationError as exc:
            raise GenerationShapeError(
                f"Invalid post links structure: link {i} has {exc.error_count()} invalid field(s)",
                payload=data,
            ) from exc
    return proposals


def filter_links(
    proposals: Sequence[LinkProposal],
    known_ids: set[str] | None = None,
) -> list[LinkProposal]:
    """Drop self-links, duplicate triples and links to unknown posts."""
    kept: list[LinkProposal] = []
    seen: set[tuple[str, str, LinkType]] = set()
    for link in proposals:
        if link.source_id == link.target_id:
            logger.warning("Dropping self-link on post %s", link.source_id)
            continue
        if known_ids is not None and (
            link.source_id not in known_ids or link.target_id not in known_ids
        ):
            logger.warning(
                "Dropping link %s -> %s: unknown post id", link.source_id, link.target_id
            )
            continue
        if link.key in seen:
            logger.warning(
                "Dropping duplicate %s link %s -> %s",
                link.link_type.value,
                link.source_id,
                link.target_id,
            )
            continue
        seen.add(link.key)
        kept.append(link)
    return kept


class PostLinker(StructuredGenerator):
    task = "post links"

    def __init__(self, llm: TextGenerator, *, excerpt_chars: int = EXCERPT_CHARS):
        super().__init__(llm)
        self.excerpt_chars = excerpt_chars

    async def propose_links(
        self, posts: Sequence[PostSummary | Mapping[str, Any]]
    ) -> list[LinkProposal]:
        """Ask the model for links between ``posts`` and return the valid ones."""
        summaries = _coerce_posts(posts)
        if len(summaries) < 2:
            logger.info("Fewer than two posts, nothing to link")
            return []

        prompt = build_post_links_prompt(summaries, self.excerpt_chars)
        data = await self._complete_json(prompt)
        proposals = validate_links_payload(data)
        links = filter_links(proposals, {p.id for p in summaries})
        logger.info("Proposed %d link(s) across %d posts", len(links), len(summaries))
        return links
