"""LLM prompt templates and interview question parsing"""
import re
from typing import List

QUESTION_LINE = re.compile(r"^(\d+\.|-)")


def mock_interview_prompt(question_count: int) -> str:
    return (
        f"Generate {question_count} interview questions (mix of technical, behavioral, and situational) "
        f"for a software engineering mock interview. Format as a numbered list."
    )


GENERAL_QUESTIONS_PROMPT = (
    "Generate 10 comprehensive general interview questions for software engineers covering:\n"
    "- Technical concepts\n"
    "- Problem-solving\n"
    "- Teamwork\n"
    "- Career goals\n\n"
    "Format as a numbered list with clear questions."
)

TECHNICAL_QUESTIONS_PROMPT = (
    "Generate 10 challenging technical interview questions covering:\n"
    "- Data structures & algorithms\n"
    "- System design\n"
    "- Language-specific concepts\n"
    "- Debugging scenarios\n\n"
    "Format as a numbered list."
)

BEHAVIORAL_QUESTIONS_PROMPT = (
    "Generate 10 behavioral interview questions focusing on:\n"
    "- Team conflicts\n"
    "- Leadership\n"
    "- Failure experiences\n"
    "- Time management\n"
    "- Work ethics\n\n"
    "Format as a numbered list."
)


def tailored_questions_prompt(skills: List[str]) -> str:
    return (
        f"Generate 10 interview questions for a candidate with these skills:\n{', '.join(skills)}\n\n"
        "Include:\n"
        "- 4 technical questions (mix of conceptual and practical)\n"
        "- 3 behavioral questions\n"
        "- 2 system design questions\n"
        "- 1 situational question\n\n"
        "Format as a numbered list."
    )


def content_analysis_prompt(resume_text: str) -> str:
    return (
        f"Provide detailed analysis of this resume:\n\n{resume_text}\n\n"
        "Cover:\n"
        "1. Strengths\n"
        "2. Areas for improvement\n"
        "3. Missing sections\n"
        "4. Formatting suggestions\n"
        "5. Keyword optimization\n\n"
        "Be constructive and specific."
    )


def role_optimization_prompt(job_title: str, resume_text: str) -> str:
    return (
        f'Optimize this resume for a "{job_title}" role:\n\n{resume_text}\n\n'
        "Provide:\n"
        "1. 5-10 missing keywords for this role\n"
        "2. Suggested improvements to summary/objective\n"
        "3. Relevant skills to highlight\n"
        "4. Any role-specific formatting tips\n\n"
        "Be specific and actionable."
    )


def answer_feedback_prompt(question: str, answer: str) -> str:
    return (
        f"Question: {question}\nAnswer: {answer}\n\n"
        "Provide brief constructive feedback focusing on:\n"
        "- Technical accuracy\n"
        "- Clarity\n"
        "- Completeness\n"
        "- Improvement suggestions\n\n"
        "Keep it under 100 words."
    )


def parse_interview_questions(generated_text: str) -> List[str]:
    """
    Pull list items out of an LLM response.

    Only lines starting with a numeral followed by a period ("1.") or with a
    dash count as questions; headings and chatter around the list are
    dropped.
    """
    questions = []
    for line in (generated_text or "").splitlines():
        line = line.strip()
        if line and QUESTION_LINE.match(line):
            questions.append(line)
    return questions
