"""Pseudo-ATS scoring for uploaded resumes"""

import random
from typing import Optional

from core.services.skill_extractor import missing_skills

MIN_SCORE = 70
MAX_SCORE = 100
SUGGESTED_KEYWORD_COUNT = 5
GENERIC_KEYWORD_HINT = "More relevant keywords for your target role"


def calculate_ats_score(text: str, rng: Optional[random.Random] = None) -> str:
    """
    Build the ATS report shown to the user.

    The score is a random value between 70 and 100; the suggestions are up to
    five vocabulary skills the resume does not mention.

    Args:
        text: Extracted resume text
        rng: Random source, injectable for deterministic output

    Returns:
        Report text, sent as one message
    """
    rng = rng or random.Random()
    score = rng.randint(MIN_SCORE, MAX_SCORE)

    candidates = missing_skills(text)
    suggested = rng.sample(candidates, min(SUGGESTED_KEYWORD_COUNT, len(candidates)))
    keywords = ", ".join(suggested) or GENERIC_KEYWORD_HINT

    return (
        f"📊 Your ATS Score: {score}/100\n\n"
        f"🔍 To improve, consider adding:\n{keywords}"
    )
