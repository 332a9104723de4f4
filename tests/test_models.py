"""Tests for Pydantic data models."""

import pytest
from pydantic import ValidationError

from portfolio_ai.models.links import ContentType, LinkProposal, LinkType, PostSummary
from portfolio_ai.models.resume import (
    GenerationRequest,
    ProjectInput,
    ResumeProject,
    ResumeResult,
    ResumeSize,
    UserProfile,
)


class TestResumeSize:
    @pytest.mark.parametrize("raw", ["small", "SMALL", " small ", ResumeSize.SMALL])
    def test_known_values(self, raw):
        assert ResumeSize.coerce(raw) is ResumeSize.SMALL

    @pytest.mark.parametrize("raw", [None, "", "huge", 3])
    def test_unknown_falls_back_to_medium(self, raw):
        assert ResumeSize.coerce(raw) is ResumeSize.MEDIUM

    def test_unknown_value_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="portfolio_ai.models.resume"):
            assert ResumeSize.coerce("huge") is ResumeSize.MEDIUM
        assert "Unrecognized resume size 'huge'" in caplog.text

    def test_missing_value_does_not_warn(self, caplog):
        with caplog.at_level("WARNING", logger="portfolio_ai.models.resume"):
            ResumeSize.coerce(None)
        assert caplog.records == []


class TestProjectInput:
    def test_name_alias(self):
        assert ProjectInput(name="Gateway").title == "Gateway"

    def test_defaults(self):
        project = ProjectInput()
        assert project.title == "Untitled Project"
        assert project.description == "No description"

    def test_null_fields_use_defaults(self):
        project = ProjectInput(title=None, description="")
        assert project.title == "Untitled Project"
        assert project.description == "No description"

    def test_extra_fields_ignored(self):
        project = ProjectInput(title="X", description="Y", id="123", tags=["a"])
        assert project.model_dump() == {"title": "X", "description": "Y"}


class TestGenerationRequest:
    def test_camel_case_keys(self):
        request = GenerationRequest(
            **{
                "jobDescription": "Backend engineer",
                "userProfile": {"name": "Ada"},
                "projects": [{"title": "API Gateway", "description": "Built a gateway"}],
                "size": "small",
            }
        )
        assert request.user_profile.name == "Ada"
        assert request.projects[0].title == "API Gateway"
        assert request.size is ResumeSize.SMALL

    def test_unknown_size_is_medium(self):
        request = GenerationRequest(job_description="JD", size="gigantic")
        assert request.size is ResumeSize.MEDIUM

    def test_empty_job_description_rejected(self):
        with pytest.raises(ValidationError):
            GenerationRequest(job_description="   ")

    def test_defaults(self):
        request = GenerationRequest(job_description="JD")
        assert request.projects == []
        assert request.user_profile == UserProfile()


class TestResumeResult:
    def test_wire_shape(self):
        result = ResumeResult(
            summary="S",
            projects=[{"title": "T", "description": "D", "tech": "Python"}],
        )
        assert result.model_dump() == {
            "summary": "S",
            "projects": [{"title": "T", "description": "D", "tech": "Python"}],
        }

    def test_tech_list_joined(self):
        project = ResumeProject(title="T", description="D", tech=["Python", "Go"])
        assert project.tech == "Python, Go"

    def test_tech_missing_is_empty(self):
        assert ResumeProject(title="T", description="D").tech == ""

    def test_projects_default_empty(self):
        assert ResumeResult(summary="S").projects == []


class TestPostSummary:
    def test_skill_objects_flattened(self):
        post = PostSummary(
            id="p1",
            title="T",
            contentType="project",
            linkedSkills=[{"name": "React", "category": "Frontend"}],
            tags=[{"name": "web"}, "ui"],
        )
        assert post.content_type is ContentType.PROJECT
        assert post.linked_skills == ["React"]
        assert post.tags == ["web", "ui"]

    def test_missing_lists_default_empty(self):
        post = PostSummary(id="p1", title="T", contentType="BLOG", linkedSkills=None)
        assert post.linked_skills == []
        assert post.tags == []

    def test_null_skill_name_becomes_empty(self):
        post = PostSummary(
            id="p1",
            title="T",
            contentType="BLOG",
            linkedSkills=[{"name": None}, {"name": "Go"}],
            tags=[{"category": "misc"}],
        )
        assert post.linked_skills == ["", "Go"]
        assert post.tags == [""]

    def test_unknown_content_type_rejected(self):
        with pytest.raises(ValidationError):
            PostSummary(id="p1", title="T", contentType="PODCAST")

    def test_integer_id_stringified(self):
        assert PostSummary(id=7, title="T", contentType="BLOG").id == "7"


class TestLinkProposal:
    def test_from_wire(self):
        link = LinkProposal(sourceId="a", targetId="b", linkType="follow-up", reason="why")
        assert link.link_type is LinkType.FOLLOW_UP
        assert link.key == ("a", "b", LinkType.FOLLOW_UP)

    def test_to_wire(self):
        link = LinkProposal(source_id="a", target_id="b", link_type=LinkType.PARENT)
        assert link.to_wire() == {
            "sourceId": "a",
            "targetId": "b",
            "linkType": "parent",
            "reason": "",
        }

    def test_unknown_link_type_rejected(self):
        with pytest.raises(ValidationError):
            LinkProposal(sourceId="a", targetId="b", linkType="sibling")

    def test_seven_link_types(self):
        assert {t.value for t in LinkType} == {
            "related",
            "parent",
            "child",
            "sequential",
            "complementary",
            "prerequisite",
            "follow-up",
        }
