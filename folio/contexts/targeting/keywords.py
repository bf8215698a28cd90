"""
Keyword/requirement matching between a job description and a résumé.

Both texts are scanned for a fixed vocabulary of technical and soft-skill
terms (case-insensitive substring containment). Pure functions: no state,
no I/O, same output for the same inputs.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from folio.contexts.targeting.logger import log_match
from folio.contexts.targeting.vocabulary import DEFAULT_VOCABULARY


@dataclass(frozen=True)
class KeywordMatch:
    """
    Overlap between a job description and a résumé.

    Attributes:
        matched: Job keywords also present in the résumé (vocabulary order)
        missing: Job keywords absent from the résumé (vocabulary order)
        score: round(matched / max(job keywords, 1) * 100), in [0, 100]
        job_keywords: Every vocabulary term found in the job description
    """

    matched: Tuple[str, ...]
    missing: Tuple[str, ...]
    score: int
    job_keywords: Tuple[str, ...]


def extract_keywords(text: str, vocabulary: Sequence[str] = DEFAULT_VOCABULARY) -> Tuple[str, ...]:
    """
    Vocabulary terms contained in text, in vocabulary order.

    Example:
        >>> extract_keywords("Python and AWS experience")
        ('python', 'aws')
    """
    lowered = text.lower()
    return tuple(term for term in vocabulary if term.lower() in lowered)


def match_keywords(
    job_text: str,
    resume_text: str,
    vocabulary: Sequence[str] = DEFAULT_VOCABULARY,
) -> KeywordMatch:
    """
    Compare job and résumé against a keyword vocabulary.

    Args:
        job_text: Job description
        resume_text: Résumé text
        vocabulary: Terms to look for (default: DEFAULT_VOCABULARY)

    Returns:
        KeywordMatch with matched/missing terms and the score

    Example:
        >>> match_keywords("Python, Docker", "Python developer").score
        50
    """
    job_keywords = extract_keywords(job_text, vocabulary)
    resume_lower = resume_text.lower()

    matched = tuple(term for term in job_keywords if term.lower() in resume_lower)
    missing = tuple(term for term in job_keywords if term.lower() not in resume_lower)

    score = round(len(matched) / max(len(job_keywords), 1) * 100)
    score = min(100, max(0, score))

    log_match(score, len(matched), len(job_keywords))
    return KeywordMatch(matched=matched, missing=missing, score=score, job_keywords=job_keywords)


def match_score(job_text: str, resume_text: str) -> int:
    """Percentage of the job's vocabulary keywords found in the résumé."""
    return match_keywords(job_text, resume_text).score
