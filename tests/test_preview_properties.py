"""
End-to-end properties of extract_cv_preview over a small corpus of CV texts.

The corpus mixes clean CVs with messy ones (no headings, odd dashes, very
long lines) so the field limits are checked against realistic noise.
"""

import json
import logging

import pytest

from cv_import.core.achievement_extractor import (
    NO_BULLETS_WARNING,
    NO_RELEVANT_SECTION_WARNING,
)
from cv_import.core.metrics import extract_metrics_from_action
from cv_import.core.text_parser import extract_cv_preview
from cv_import.core.work_history_extractor import NO_ROLES_WARNING


JANE = (
    "Jane Doe\nSenior Security Engineer\njane.doe@example.com\nExperience\n"
    "• Led SIEM tuning to reduce false positives by 35%."
)

FULL_CV = """
Curriculum Vitae
Jane Doe
Senior Security Engineer
jane.doe@example.com | +44 7700 900123 | linkedin.com/in/janedoe

Professional Experience

Security Operations Lead | Acme Ltd | Leeds
Jan 2022 – Present
Runs a six person SOC covering 24x7 monitoring
• Led SIEM tuning to reduce false positives by 35%.
• Reduced incidents by 30% and improved MTTR to 2 hours across 3 sites.
• Kept SLA 99.9 for 12 months

Support Analyst at Leeds City Council (Jun 2019 – Dec 2021)
• Closed 1200-1500 tickets a month

Key Skills
Splunk, Sentinel; Python
• KQL • Terraform

Education
BSc Computer Science, University of Leeds
2015 – 2019
"""

CORPUS = [
    JANE,
    FULL_CV,
    "",
    "   \n\t\n",
    "Worked on many things in 2020\nlots of stuff 42",
    "Experience\n" + "\n".join(f"• Delivered migration wave {n} to 1{n}0 users" for n in range(12)),
    "Experience\nX, Y\n2019 – 2021\n• Something happened there\nA | B | 2020 - Present",
    "Projects\nHome Lab\n• " + "Automated backups, patching and alerting for 9 hosts " * 10,
    "Achievements\n• " + " ".join(f"{n}0% gain in {n} months;" for n in range(1, 40)),
    "Experience\n" + "Principal Consultant, " + "Very Long Company Name " * 10 + "\n2018 - 2020\nLeeds, " + "x" * 200,
    "EXPERIENCE\n2019—2020\n- bullet without header in the same role line\n* Another bullet, 2019 - 2020",
]


@pytest.mark.parametrize("text", CORPUS)
def test_field_limits_hold(text):
    preview = extract_cv_preview(text)

    for achievement in preview.achievements:
        assert 3 <= len(achievement.title) <= 80
        if achievement.metrics is not None:
            assert 0 < len(achievement.metrics) <= 120

    for entry in preview.work_history:
        assert len(entry.job_title) >= 2
        assert len(entry.company) >= 2
        assert len(entry.bullets) <= 6
        assert all(len(bullet) <= 120 for bullet in entry.bullets)
        if entry.location is not None:
            assert len(entry.location) <= 80
        if entry.summary is not None:
            assert len(entry.summary) <= 300


@pytest.mark.parametrize("text", CORPUS)
def test_output_is_idempotent(text):
    first = json.dumps(extract_cv_preview(text).to_payload(), ensure_ascii=False)
    second = json.dumps(extract_cv_preview(text).to_payload(), ensure_ascii=False)
    assert first == second


def test_jane_example():
    preview = extract_cv_preview(JANE)

    assert preview.profile.full_name == "Jane Doe"
    assert preview.profile.headline == "Senior Security Engineer"
    assert len(preview.achievements) >= 1
    assert preview.achievements[0].title == "Led SIEM tuning to reduce false positives by 35%"
    assert preview.achievements[0].metrics == "35%"
    assert preview.extracted.sections_detected == ["Experience"]
    assert preview.extracted.warnings == [NO_ROLES_WARNING]


def test_metrics_example():
    metrics = extract_metrics_from_action(
        "Reduced incidents by 30% and improved MTTR to 2 hours across 3 sites."
    )
    assert "30%" in metrics
    assert len(metrics) <= 120


def test_role_example():
    text = "Experience\nNetwork Engineer, Acme Ltd\nJan 2022 – Present\n• Rebuilt the core switching"
    (entry,) = extract_cv_preview(text).work_history
    assert entry.is_current is True
    assert entry.end_date is None
    assert entry.start_date == "2022-01-01"


def test_no_structure_gives_empty_preview_with_warnings():
    preview = extract_cv_preview("Worked on many things in 2020\nlots of stuff 42")

    assert preview.achievements == []
    assert preview.work_history == []
    assert preview.profile.full_name is None
    assert preview.profile.headline is None
    assert preview.extracted.warnings == [NO_RELEVANT_SECTION_WARNING, NO_BULLETS_WARNING]


def test_achievements_heading_without_experience():
    text = (
        "Achievements\n"
        "• Saved £40k over 6 months by consolidating licences\n"
        "• Cut onboarding time by 30% across 3 teams"
    )
    preview = extract_cv_preview(text)

    assert [a.metrics for a in preview.achievements] == ["£40k; 6 months", "30%; 3"]
    assert preview.work_history == []
    assert preview.extracted.warnings == []


@pytest.mark.parametrize("text", ["", "   \n\t\n", None])
def test_empty_input(text):
    preview = extract_cv_preview(text)
    assert preview.to_payload() == {
        "profile": {},
        "achievements": [],
        "work_history": [],
        "extracted": {"sectionsDetected": [], "warnings": []},
    }


def test_full_cv():
    preview = extract_cv_preview(FULL_CV)

    assert preview.profile.full_name == "Jane Doe"
    assert preview.profile.headline == "Senior Security Engineer"
    assert preview.extracted.sections_detected == ["Experience", "Skills", "Education"]
    assert preview.extracted.skills == ["Splunk", "Sentinel", "Python", "KQL", "Terraform"]
    assert preview.extracted.warnings == []

    lead, analyst = preview.work_history
    assert lead.job_title == "Security Operations Lead"
    assert lead.company == "Acme Ltd"
    assert lead.location == "Leeds"
    assert lead.summary == "Runs a six person SOC covering 24x7 monitoring"
    assert len(lead.bullets) == 3

    assert analyst.company == "Leeds City Council"
    assert analyst.start_date == "2019-06-01"
    assert analyst.end_date == "2021-12-01"

    metrics = [a.metrics for a in preview.achievements]
    assert metrics == ["35%", "30%; 2 hours; 3", "SLA 99.9; 99.9; 12 months", None]
    assert {a.title for a in preview.achievements[:3]} == {"Runs a six person SOC covering 24x7 monitoring"}


def test_payload_uses_aliases_and_drops_empty_fields():
    payload = extract_cv_preview(JANE).to_payload()

    assert "sectionsDetected" in payload["extracted"]
    assert "skills" not in payload["extracted"]
    assert set(payload["achievements"][0]) == {"title", "action", "metrics"}


def test_debug_log_lists_sections_in_order(caplog):
    with caplog.at_level(logging.DEBUG, logger="cv_import.core.text_parser"):
        extract_cv_preview(FULL_CV)
    assert "sections=['experience', 'skills', 'education']" in caplog.text
