"""
Skill detection against a fixed vocabulary.

Matching is case-insensitive and whole-word: a skill only counts when it is
neither preceded nor followed by a word character, so "Java" never matches
inside "JavaScript" while entries such as "C#" or "CI/CD" still match.
"""

import re
from typing import Dict, List, Pattern, Tuple

SKILL_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "programming_languages": (
        'JavaScript', 'Python', 'Java', 'C#', 'TypeScript', 'PHP', 'Ruby', 'Go',
        'Swift', 'Kotlin', 'Rust', 'Scala', 'Perl', 'R', 'Dart',
    ),
    "web_development": (
        'HTML', 'CSS', 'React', 'Angular', 'Vue.js', 'Svelte', 'Next.js', 'Nuxt.js',
        'Django', 'Flask', 'Spring', 'Laravel', 'Express.js', 'NestJS', 'GraphQL',
    ),
    "mobile_development": (
        'React Native', 'Flutter', 'Android SDK', 'iOS Development', 'Xamarin',
    ),
    "databases": (
        'SQL', 'MySQL', 'PostgreSQL', 'MongoDB', 'Redis', 'Cassandra', 'Firebase',
        'Oracle', 'SQLite', 'Elasticsearch', 'DynamoDB',
    ),
    "devops_cloud": (
        'Docker', 'Kubernetes', 'AWS', 'Azure', 'GCP', 'Terraform', 'Ansible',
        'Jenkins', 'CI/CD', 'GitHub Actions', 'CircleCI', 'Prometheus', 'Grafana',
    ),
    "data_ai": (
        'Machine Learning', 'Deep Learning', 'TensorFlow', 'PyTorch', 'Keras',
        'NLP', 'Computer Vision', 'Data Analysis', 'Pandas', 'NumPy', 'SciPy',
        'Big Data', 'Hadoop', 'Spark', 'Tableau', 'Power BI',
    ),
    "other_technologies": (
        'Blockchain', 'Smart Contracts', 'Solidity', 'Web3', 'Cryptography',
        'Cybersecurity', 'Penetration Testing', 'Ethical Hacking',
    ),
    "methodologies": (
        'Agile', 'Scrum', 'Kanban', 'DevOps', 'TDD', 'BDD', 'Pair Programming',
    ),
    "soft_skills": (
        'Problem Solving', 'Teamwork', 'Communication', 'Leadership', 'Time Management',
        'Critical Thinking', 'Adaptability', 'Creativity', 'Emotional Intelligence',
    ),
}

SKILL_VOCABULARY: Tuple[str, ...] = tuple(
    skill for skills in SKILL_CATEGORIES.values() for skill in skills
)


def _compile(skill: str) -> Pattern:
    return re.compile(rf"(?<!\w){re.escape(skill)}(?!\w)", re.IGNORECASE)


_SKILL_PATTERNS: Tuple[Tuple[str, Pattern], ...] = tuple(
    (skill, _compile(skill)) for skill in SKILL_VOCABULARY
)


def extract_skills(text: str) -> List[str]:
    """
    Find vocabulary skills mentioned in the text.

    Args:
        text: Free text such as an extracted resume

    Returns:
        Matched canonical skill names in vocabulary order, without duplicates
    """
    if not text:
        return []
    return [skill for skill, pattern in _SKILL_PATTERNS if pattern.search(text)]


def missing_skills(text: str) -> List[str]:
    """Vocabulary skills not mentioned in the text, in vocabulary order"""
    found = set(extract_skills(text))
    return [skill for skill in SKILL_VOCABULARY if skill not in found]
