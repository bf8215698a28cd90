"""
Targeting Context

Responsibilities:
- Scores lexical overlap between a job description and a résumé
- Extracts skills, responsibilities and seniority from job descriptions
- Applies deterministic, rule-based optimizations when no language model is available

Owns: Keyword vocabularies, match scoring, rule-based rewriting
Never: Calls external services or changes résumé facts (names, dates, employers)
"""

from folio.contexts.targeting.job_analysis import JobAnalysis, analyze_job_description
from folio.contexts.targeting.keywords import KeywordMatch, match_keywords, match_score
from folio.contexts.targeting.optimizer import OptimizationResult, optimize_resume

__all__ = [
    "match_keywords",
    "match_score",
    "KeywordMatch",
    "analyze_job_description",
    "JobAnalysis",
    "optimize_resume",
    "OptimizationResult",
]
