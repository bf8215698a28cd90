"""
Heuristic job description analysis.

Extracts technical and soft skills from the shared vocabularies, picks out
responsibility lines, and estimates the seniority of the role.
"""

import re
from dataclasses import dataclass
from typing import List, Tuple

from folio.contexts.targeting.keywords import extract_keywords
from folio.contexts.targeting.vocabulary import SOFT_SKILLS, TECHNICAL_TERMS

MAX_RESPONSIBILITIES = 10
MAX_REQUIRED_SKILLS = 10
MAX_PREFERRED_SKILLS = 5

# Cleaned responsibility length bounds (exclusive)
RESPONSIBILITY_MIN_LENGTH = 15
RESPONSIBILITY_MAX_LENGTH = 300

RESPONSIBILITY_INDICATORS = [
    re.compile(r"^[-•*]\s*"),
    re.compile(r"^\d+[.)]\s*"),
    re.compile(
        r"^(?:responsible|manage|lead|develop|design|implement|create|build|maintain"
        r"|support|work|collaborate)",
        re.IGNORECASE,
    ),
]

_LEADING_MARKERS = re.compile(r"^[-•*\d.)]+\s*")

# Checked in order; first level with a matching term wins
SENIORITY_TERMS = (
    ("executive", ("director", "vp ", "vice president", "head of")),
    ("senior", ("senior", "lead", "principal", "staff")),
    ("entry", ("junior", "entry", "associate", "graduate")),
)

_YEARS_OF_EXPERIENCE = re.compile(r"(\d+)\+?\s*years?", re.IGNORECASE)


@dataclass(frozen=True)
class JobAnalysis:
    """
    Structured view of a job description.

    Attributes:
        responsibilities: Up to 10 cleaned responsibility lines
        required_skills: Up to 10 technical skills
        preferred_skills: Up to 5 soft skills
        keywords: All technical and soft skills found
        seniority_level: "executive", "senior", "mid" or "entry"
    """

    responsibilities: Tuple[str, ...]
    required_skills: Tuple[str, ...]
    preferred_skills: Tuple[str, ...]
    keywords: Tuple[str, ...]
    seniority_level: str


def extract_responsibilities(text: str) -> List[str]:
    """
    Pick bullet, numbered and action-verb lines out of a job description.

    Example:
        >>> extract_responsibilities("- Design scalable data pipelines\\nBenefits")
        ['Design scalable data pipelines']
    """
    responsibilities = []
    for line in text.splitlines():
        stripped = line.strip()
        if len(stripped) <= 10:
            continue
        if not any(pattern.match(stripped) for pattern in RESPONSIBILITY_INDICATORS):
            continue
        cleaned = _LEADING_MARKERS.sub("", stripped).strip()
        if RESPONSIBILITY_MIN_LENGTH < len(cleaned) < RESPONSIBILITY_MAX_LENGTH:
            responsibilities.append(cleaned)
    return responsibilities[:MAX_RESPONSIBILITIES]


def determine_seniority(text: str) -> str:
    """
    Estimate role seniority from title words, then from "N+ years".

    Example:
        >>> determine_seniority("Staff Engineer")
        'senior'
        >>> determine_seniority("3+ years of experience")
        'mid'
    """
    lowered = text.lower()
    for level, terms in SENIORITY_TERMS:
        if any(term in lowered for term in terms):
            return level

    years_match = _YEARS_OF_EXPERIENCE.search(lowered)
    if years_match:
        years = int(years_match.group(1))
        if years >= 10:
            return "executive"
        if years >= 5:
            return "senior"
        if years >= 2:
            return "mid"
        return "entry"

    return "mid"


def analyze_job_description(text: str) -> JobAnalysis:
    """
    Analyze a job description.

    Args:
        text: Job description text

    Returns:
        JobAnalysis with skills, responsibilities and seniority
    """
    technical = extract_keywords(text, TECHNICAL_TERMS)
    soft = extract_keywords(text, SOFT_SKILLS)

    return JobAnalysis(
        responsibilities=tuple(extract_responsibilities(text)),
        required_skills=technical[:MAX_REQUIRED_SKILLS],
        preferred_skills=soft[:MAX_PREFERRED_SKILLS],
        keywords=tuple(dict.fromkeys(technical + soft)),
        seniority_level=determine_seniority(text),
    )
