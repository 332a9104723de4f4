"""Tests for CLI input file parsers."""

import pytest

from portfolio_ai.parsers.input_parser import (
    load_data_file,
    load_jd_file,
    load_list_file,
    parse_jd,
)


class TestJDParser:
    def test_parse_jd_cleans_whitespace(self):
        text = "  Hello   World  \n\n\n\nLine 2  "
        result = parse_jd(text)
        assert "   " not in result
        assert "\n\n\n" not in result

    def test_parse_jd_strips_lines(self):
        text = "  line 1  \n  line 2  "
        result = parse_jd(text)
        for line in result.splitlines():
            assert line == line.strip()

    def test_load_jd_file(self, tmp_path):
        jd_file = tmp_path / "jd.txt"
        jd_file.write_text("Backend Engineer\n\nRequirements: Python", encoding="utf-8")
        result = load_jd_file(str(jd_file))
        assert "Backend Engineer" in result
        assert "Python" in result


class TestDataFiles:
    def test_yaml(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text("name: Ada\nskills:\n  - Python\n", encoding="utf-8")
        assert load_data_file(str(path)) == {"name": "Ada", "skills": ["Python"]}

    def test_json(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text('{\n\t"name": "Ada"\n}', encoding="utf-8")
        assert load_data_file(str(path)) == {"name": "Ada"}

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_data_file(str(path)) == {}

    def test_list_at_top_level(self, tmp_path):
        path = tmp_path / "posts.yaml"
        path.write_text("- id: a\n- id: b\n", encoding="utf-8")
        assert load_list_file(str(path), "posts") == [{"id": "a"}, {"id": "b"}]

    def test_list_under_key(self, tmp_path):
        path = tmp_path / "posts.json"
        path.write_text('{"posts": [{"id": "a"}]}', encoding="utf-8")
        assert load_list_file(str(path), "posts") == [{"id": "a"}]

    def test_list_wrong_type(self, tmp_path):
        path = tmp_path / "posts.yaml"
        path.write_text("posts: nope\n", encoding="utf-8")
        with pytest.raises(ValueError, match="expected a list of posts"):
            load_list_file(str(path), "posts")
