"""Tests for prompt templates and interview question parsing"""
from core.conversation.prompts import (
    answer_feedback_prompt,
    mock_interview_prompt,
    parse_interview_questions,
    role_optimization_prompt,
    tailored_questions_prompt,
)


def test_numbered_and_dashed_lines_are_questions():
    text = (
        "Sure! Here are your questions:\n"
        "\n"
        "1. Tell me about a project you are proud of.\n"
        "   2. How do you handle code reviews?\n"
        "- What is your testing strategy?\n"
        "**Technical**\n"
        "10. Explain eventual consistency.\n"
        "Good luck!"
    )

    assert parse_interview_questions(text) == [
        "1. Tell me about a project you are proud of.",
        "2. How do you handle code reviews?",
        "- What is your testing strategy?",
        "10. Explain eventual consistency.",
    ]


def test_number_without_period_is_not_a_question():
    assert parse_interview_questions("1) First\n2: Second\nQ3. Third") == []


def test_empty_response_has_no_questions():
    assert parse_interview_questions("") == []
    assert parse_interview_questions(None) == []


def test_mock_interview_prompt_uses_requested_count():
    assert mock_interview_prompt(8).startswith("Generate 8 interview questions")


def test_prompts_embed_their_inputs():
    assert "Python, Docker" in tailored_questions_prompt(["Python", "Docker"])
    assert 'for a "Site Reliability Engineer" role' in role_optimization_prompt("Site Reliability Engineer", "cv")

    feedback = answer_feedback_prompt("1. Why Python?", "It is readable.")
    assert feedback.startswith("Question: 1. Why Python?\nAnswer: It is readable.")
