"""Unit tests for the line-shape predicates."""

import pytest

from cv_import.core.line_shapes import (
    is_bullet_line,
    is_contact_line,
    is_fluff_header,
    looks_like_company,
    looks_like_context_line,
    looks_like_headline,
    looks_like_location,
    looks_like_name,
    looks_like_summary,
    strip_bullet,
)


class TestContactLine:
    @pytest.mark.parametrize("line", [
        "jane.doe@example.com",
        "https://janedoe.dev",
        "linkedin.com/in/janedoe",
        "GitHub: janedoe",
        "+44 7700 900123",
        "(0113) 496-0000",
    ])
    def test_contact_lines(self, line):
        assert is_contact_line(line)

    @pytest.mark.parametrize("line", [
        "Senior Security Engineer",
        "Leeds, West Yorkshire",
        "Jan 2022 – Present",
    ])
    def test_not_contact_lines(self, line):
        assert not is_contact_line(line)


class TestBullets:
    @pytest.mark.parametrize("line, content", [
        ("• Led SIEM tuning", "Led SIEM tuning"),
        ("- Patched 300 servers", "Patched 300 servers"),
        ("* Wrote runbooks", "Wrote runbooks"),
        ("– Ran the CAB", "Ran the CAB"),
        ("— Ran the CAB", "Ran the CAB"),
        ("12. Migrated DNS", "Migrated DNS"),
    ])
    def test_strip_bullet(self, line, content):
        assert strip_bullet(line) == content
        assert is_bullet_line(line)

    @pytest.mark.parametrize("line", ["-5% churn", "•", "Plain sentence", "2019 - 2021"])
    def test_not_bullets(self, line):
        assert strip_bullet(line) is None
        assert not is_bullet_line(line)


class TestNameAndHeadline:
    @pytest.mark.parametrize("line", ["Jane Doe", "Mary-Jane O'Neil", "Dr. Jane Smith", "JANE DOE"])
    def test_names(self, line):
        assert looks_like_name(line)

    @pytest.mark.parametrize("line", ["Jane", "Jane Doe 2", "Jane_Doe Smith", "J D" + " x" * 40])
    def test_not_names(self, line):
        assert not looks_like_name(line)

    def test_headline(self):
        assert looks_like_headline("Senior Security Engineer")
        assert not looks_like_headline("Engineer since 2015")
        assert not looks_like_headline("ab")
        assert not looks_like_headline("x" * 91)

    def test_fluff_headers(self):
        assert is_fluff_header("Curriculum Vitae")
        assert is_fluff_header("RESUME")
        assert is_fluff_header("CV:")
        assert not is_fluff_header("My CV")


class TestRoleDetailShapes:
    def test_location(self):
        assert looks_like_location("Leeds, West Yorkshire")
        assert not looks_like_location("Leeds West Yorkshire")
        assert not looks_like_location("jane@example.com, Leeds")
        assert not looks_like_location("Leeds, " + "x" * 80)

    def test_summary(self):
        assert looks_like_summary("Ran the core network for a campus")
        assert not looks_like_summary("Short")
        assert not looks_like_summary("Work Experience")
        assert not looks_like_summary("x" * 161)

    @pytest.mark.parametrize("text", [
        "Acme Ltd",
        "Globex Inc.",
        "NHS Digital",
        "Bank of Leeds",
        "Leeds City Council",
        "Acme Group",
    ])
    def test_company(self, text):
        assert looks_like_company(text)

    @pytest.mark.parametrize("text", ["Incident Manager", "Groupon", "Network Engineer"])
    def test_not_company(self, text):
        assert not looks_like_company(text)

    def test_context_line(self):
        assert looks_like_context_line("Security Operations Lead, Acme Ltd")
        assert not looks_like_context_line("Experience")
        assert not looks_like_context_line("jane@example.com")
        assert not looks_like_context_line("ab")
