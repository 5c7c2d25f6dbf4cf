"""Tests for shared clean-ups and render-context building."""

import pytest

from folio.cleaner import (
    build_render_context,
    collapse_ws,
    extract_github_username,
    extract_linkedin_id,
    strip_tags,
)


class TestHelpers:
    def test_strip_tags(self):
        assert strip_tags("  <b>Jane</b> <i>Doe</i> ") == "Jane Doe"
        assert strip_tags(None) == ""

    def test_collapse_ws(self):
        assert collapse_ws(" a \n\t b ") == "a b"


class TestGithubUsername:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("https://github.com/octocat", "octocat"),
            ("github.com/octocat/hello-world", "octocat"),
            ("https://github.com/https://github.com/octocat", "octocat"),
            ("@octocat", "octocat"),
            ("octo-cat", "octo-cat"),
            ("bad name!", ""),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalisation(self, raw, expected):
        assert extract_github_username(raw) == expected


class TestLinkedinId:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("https://www.linkedin.com/in/jane-doe/", "jane-doe"),
            ("linkedin.com/pub/jane-doe", "jane-doe"),
            ("in/jane-doe", "jane-doe"),
            ("@jane", "jane"),
            ("jane doe", ""),
            (None, ""),
        ],
    )
    def test_normalisation(self, raw, expected):
        assert extract_linkedin_id(raw) == expected


class TestBuildRenderContext:
    """Any profile-ish dict becomes a complete render context."""

    def test_defaults(self):
        ctx = build_render_context({})
        assert ctx["name"] == ""
        assert ctx["skills"] == ""
        assert ctx["projects"] == []
        assert ctx["githubUrl"] == ""
        assert ctx["linkedinUrl"] == ""

    def test_skill_list_is_joined(self):
        ctx = build_render_context({"skills": ["Python", " SQL ", ""]})
        assert ctx["skills"] == "Python, SQL"

    def test_skill_string_is_kept(self):
        assert build_render_context({"skills": "Go, Rust"})["skills"] == "Go, Rust"

    def test_social_urls(self, profile):
        ctx = build_render_context(profile)
        assert ctx["github"] == "samrivera"
        assert ctx["githubUrl"] == "https://github.com/samrivera"
        assert ctx["linkedinUrl"] == "https://www.linkedin.com/in/sam-rivera"

    def test_projects_are_normalised(self):
        ctx = build_render_context({
            "projects": [
                {"title": "A", "url": "https://a.dev"},
                {"title": "B", "description": None},
                "not a project",
            ]
        })
        assert ctx["projects"] == [
            {"title": "A", "description": "", "link": "https://a.dev"},
            {"title": "B", "description": "", "link": ""},
        ]

    def test_none_values_fall_back_to_defaults(self):
        ctx = build_render_context({"name": None, "bio": "Hi"})
        assert ctx["name"] == ""
        assert ctx["bio"] == "Hi"

    def test_does_not_mutate_input(self, profile):
        before = dict(profile)
        build_render_context(profile)
        assert profile == before
