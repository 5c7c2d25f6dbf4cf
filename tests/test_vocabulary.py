"""Tests for the skill vocabulary."""

import pytest

from folio.vocabulary import SKILL_RULES, SkillRule, match_skills


class TestSkillRules:
    """The rule table itself."""

    def test_labels_are_unique(self):
        labels = [rule.label for rule in SKILL_RULES]
        assert len(labels) == len(set(labels))

    def test_rules_are_immutable(self):
        assert isinstance(SKILL_RULES, tuple)
        assert all(isinstance(rule, SkillRule) for rule in SKILL_RULES)

    def test_detectors_ignore_case(self):
        python = next(rule for rule in SKILL_RULES if rule.label == "Python")
        assert python.detector.search("PYTHON")


class TestMatchSkills:
    """Ordered, deduplicated matching with the ambiguous short tokens."""

    def test_c_family_does_not_trigger_c(self):
        assert match_skills("C++, C#, CSS, and Go fishing") == ["C++", "C#", "CSS"]

    def test_go_before_punctuation(self):
        assert match_skills("Built with Go, React") == ["Go", "React"]

    def test_golang(self):
        assert match_skills("golang services") == ["Go"]

    def test_plain_c(self):
        assert match_skills("Embedded C, Linux") == ["C", "Linux"]

    def test_domain_suffix_is_not_c(self):
        assert match_skills("see example.com") == []

    @pytest.mark.parametrize("text", ["R, Python", "R programming", "RStudio R studio"])
    def test_r_in_context(self, text):
        assert "R" in match_skills(text)

    @pytest.mark.parametrize("text", ["a r b", "Rust"])
    def test_r_alone_is_ignored(self, text):
        assert "R" not in match_skills(text)

    def test_java_is_not_javascript(self):
        assert match_skills("JavaScript") == ["JavaScript"]
        assert match_skills("Java and JavaScript") == ["JavaScript", "Java"]

    def test_sqlite_is_not_sql(self):
        assert match_skills("SQLite") == ["SQLite"]

    def test_git_is_not_github(self):
        assert match_skills("GitHub") == ["GitHub"]
        assert match_skills("git, GitLab") == ["Git", "GitLab"]

    def test_spring_boot(self):
        assert match_skills("Spring Boot") == ["Spring Boot"]

    def test_duplicates_collapse(self):
        assert match_skills("React react REACT") == ["React"]

    def test_table_order_not_text_order(self):
        assert match_skills("Docker then Python") == ["Python", "Docker"]

    def test_empty(self):
        assert match_skills("") == []
        assert match_skills(None) == []
