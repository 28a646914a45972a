"""Tests for skill detection and the ATS report"""
import random
import re

from core.services.ats_scorer import GENERIC_KEYWORD_HINT, calculate_ats_score
from core.services.skill_extractor import SKILL_VOCABULARY, extract_skills, missing_skills

from tests.conftest import RESUME_TEXT

ATS_REPORT = re.compile(r"📊 Your ATS Score: (\d+)/100\n\n🔍 To improve, consider adding:\n(.+)", re.S)


def test_extracts_skills_in_vocabulary_order():
    assert extract_skills(RESUME_TEXT) == ["Python", "Docker", "Kubernetes", "Agile"]


def test_java_and_javascript_are_distinct():
    assert extract_skills("I use Java and JavaScript") == ["JavaScript", "Java"]
    assert extract_skills("Wrote JavaScript and Java services") == ["JavaScript", "Java"]
    assert extract_skills("Mostly JavaScript these days") == ["JavaScript"]


def test_matching_is_case_insensitive_without_duplicates():
    assert extract_skills("python, PYTHON and Python again") == ["Python"]


def test_skills_with_symbols_match_whole_words():
    text = "Shipped C# tools, set up CI/CD and a Vue.js dashboard"
    assert extract_skills(text) == ["C#", "Vue.js", "CI/CD"]


def test_skill_inside_longer_word_does_not_match():
    assert "Go" not in extract_skills("Google and Golang fans")
    assert "SQL" not in extract_skills("Tuned PostgreSQL and MySQL")


def test_extraction_is_stable():
    first = extract_skills(RESUME_TEXT)
    assert extract_skills(RESUME_TEXT) == first
    assert all(skill in SKILL_VOCABULARY for skill in first)


def test_empty_text_has_no_skills():
    assert extract_skills("") == []
    assert missing_skills("") == list(SKILL_VOCABULARY)


def test_missing_skills_excludes_found_ones():
    missing = missing_skills(RESUME_TEXT)
    assert "Python" not in missing
    assert "Rust" in missing
    assert len(missing) == len(SKILL_VOCABULARY) - 4


def test_ats_score_in_range_with_missing_keywords():
    for seed in range(20):
        report = calculate_ats_score(RESUME_TEXT, random.Random(seed))
        match = ATS_REPORT.fullmatch(report)
        assert match is not None

        assert 70 <= int(match.group(1)) <= 100

        keywords = match.group(2).split(", ")
        assert len(keywords) == 5
        assert len(set(keywords)) == 5
        assert all(keyword in missing_skills(RESUME_TEXT) for keyword in keywords)


def test_ats_is_deterministic_with_seeded_rng():
    assert calculate_ats_score(RESUME_TEXT, random.Random(3)) == calculate_ats_score(RESUME_TEXT, random.Random(3))


def test_ats_generic_hint_when_nothing_is_missing():
    everything = " ".join(SKILL_VOCABULARY)
    report = calculate_ats_score(everything, random.Random(1))
    assert report.endswith(f"consider adding:\n{GENERIC_KEYWORD_HINT}")
