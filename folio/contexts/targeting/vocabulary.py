"""
Keyword vocabularies for job/résumé matching.

Terms are lowercase and matched by case-insensitive substring containment,
so order matters only for output ordering: matched and missing keyword lists
follow vocabulary order.
"""

from typing import Iterable, Tuple

# =============================================================================
# TECHNICAL TERMS
# =============================================================================

PROGRAMMING_LANGUAGES = (
    "javascript", "typescript", "python", "java", "c++", "c#", "ruby", "rust",
    "php", "swift", "kotlin",
)

FRAMEWORKS = (
    "react", "angular", "vue", "next.js", "node.js", "nodejs", "express", "django",
    "flask", "spring", "rails",
)

DATABASES = (
    "sql", "mysql", "postgresql", "mongodb", "redis", "elasticsearch", "dynamodb",
)

CLOUD_AND_DEVOPS = (
    "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "jenkins", "ci/cd",
    "github actions", "devops", "cloud", "linux",
)

TOOLS = (
    "git", "github", "jira", "figma", "rest api", "rest", "api", "graphql",
    "microservices", "agile", "scrum", "webpack",
)

DATA_AND_AI = (
    "machine learning", "data analysis", "tableau", "power bi", "pandas", "numpy",
    "tensorflow",
)

WEB_AND_QUALITY = (
    "html", "css", "sass", "testing", "unit testing", "tdd",
)

# =============================================================================
# SOFT SKILLS
# =============================================================================

SOFT_SKILLS = (
    "leadership", "management", "communication", "teamwork", "collaboration",
    "problem-solving", "problem solving", "analytical", "critical thinking",
    "time management", "project management", "team lead", "cross-functional",
    "mentoring", "stakeholder", "presentation", "negotiation", "decision-making",
    "adaptability", "creativity", "attention to detail", "self-motivated",
    "proactive", "strategic", "innovative",
)


def _unique(*groups: Iterable[str]) -> Tuple[str, ...]:
    seen = {}
    for group in groups:
        for term in group:
            seen.setdefault(term, None)
    return tuple(seen)


TECHNICAL_TERMS = _unique(
    PROGRAMMING_LANGUAGES,
    FRAMEWORKS,
    DATABASES,
    CLOUD_AND_DEVOPS,
    TOOLS,
    DATA_AND_AI,
    WEB_AND_QUALITY,
)

DEFAULT_VOCABULARY = _unique(TECHNICAL_TERMS, SOFT_SKILLS)
