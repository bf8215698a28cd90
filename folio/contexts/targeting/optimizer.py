"""
Rule-based résumé optimization.

Deterministic fallback used when no language model is available. It never
adds facts: it only reorders existing bullets and skills and swaps a weak
verb for a stronger one, section by section:

- Summary: one weak verb replaced with the job's own terminology
  (plus "developer" -> "software engineer" under the technical tone)
- Experience: bullets of each role reordered by keyword relevance,
  one weak verb phrase strengthened
- Skills: the first comma-separated skill line reordered so matched skills lead
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from folio.contexts.intake.section_tracker import match_section_heading
from folio.contexts.targeting.keywords import match_keywords
from folio.contexts.targeting.logger import log_optimization
from folio.utils.text_processing import truncate_display

# Presentation bonus added to the raw keyword score
SCORE_BONUS = 10
MAX_MATCHED_REPORTED = 15
MAX_MISSING_REPORTED = 10

# Length of the before/after excerpts recorded per change
EXCERPT_LENGTH = 200

# Summary line considered for tone-driven terminology changes
SUMMARY_LINE_MIN_LENGTH = 50

# Weak verb -> stronger candidates; the first candidate the job uses wins
SUMMARY_REPLACEMENTS = {
    "developer": ("software engineer", "engineer", "developer"),
    "manage": ("lead", "oversee", "coordinate", "manage"),
    "create": ("develop", "build", "design", "create"),
    "help": ("support", "assist", "enable", "help"),
    "work": ("collaborate", "partner", "work"),
    "make": ("deliver", "produce", "create", "make"),
}

EXPERIENCE_REPLACEMENTS = {
    "helped": "contributed to",
    "worked on": "developed",
    "was responsible for": "managed",
    "did": "executed",
    "made": "delivered",
}

# Smallest comma-separated skill line worth reordering
MIN_SKILLS_TO_REORDER = 4

_BULLET_LINE = re.compile(r"^\s*[-•*]\s*\S")


@dataclass(frozen=True)
class ResumeChange:
    """One applied optimization, with short before/after excerpts."""

    section: str
    original_text: str
    new_text: str
    reason: str


@dataclass(frozen=True)
class OptimizationResult:
    """
    Outcome of optimizing a résumé against a job description.

    Attributes:
        optimized_text: Résumé text after all changes
        changes: Changes applied, one per modified section
        match_score: Keyword score plus presentation bonus, capped at 100
        keywords_matched: Up to 15 matched job keywords
        keywords_missing: Up to 10 missing job keywords
        method: Always "rule-based"
    """

    optimized_text: str
    changes: Tuple[ResumeChange, ...]
    match_score: int
    keywords_matched: Tuple[str, ...]
    keywords_missing: Tuple[str, ...]
    method: str = "rule-based"


@dataclass
class ResumeSection:
    """
    A heading and the lines under it, as a slice of the résumé's lines.

    Attributes:
        name: Heading text as written ("Content" when the résumé has no headings)
        canonical: Canonical section name ("" when unknown)
        start: Index of the heading line
        end: Index one past the section's last line
    """

    name: str
    canonical: str
    start: int
    end: int


def split_sections(lines: Sequence[str]) -> List[ResumeSection]:
    """
    Cut résumé lines into sections at each recognised heading.

    Lines before the first heading belong to no section. A résumé with no
    headings is one "Content" section spanning every line.
    """
    sections: List[ResumeSection] = []
    for i, line in enumerate(lines):
        canonical = match_section_heading(line.strip())
        if canonical is None:
            continue
        if sections:
            sections[-1].end = i
        sections.append(ResumeSection(name=line.strip(), canonical=canonical, start=i, end=len(lines)))

    if not sections:
        return [ResumeSection(name="Content", canonical="", start=0, end=len(lines))]
    return sections


def _match_case(source: str, replacement: str) -> str:
    if source[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _replace_word(text: str, word: str, replacement: str) -> str:
    pattern = re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)
    return pattern.sub(lambda m: _match_case(m.group(0), replacement), text)


def optimize_summary(
    content: str, job_keywords: Sequence[str], job_text: str, tone: Optional[str] = None
) -> Tuple[str, List[str]]:
    """Align one weak summary verb with the job's terminology."""
    new_content = content
    reasons = []
    lowered = content.lower()

    summary_line = next((line for line in content.splitlines() if len(line) > SUMMARY_LINE_MIN_LENGTH), "")
    if tone == "technical" and "developer" in summary_line.lower() and "engineer" in job_text.lower():
        new_content = _replace_word(new_content, "developer", "software engineer")
        reasons.append("Updated terminology to match job description (developer -> software engineer)")

    for weak, candidates in SUMMARY_REPLACEMENTS.items():
        strong = next((c for c in candidates if any(c in keyword for keyword in job_keywords)), None)
        if strong is None or strong in lowered:
            continue
        if re.search(rf"\b{re.escape(weak)}\b", new_content, re.IGNORECASE):
            new_content = _replace_word(new_content, weak, strong)
            reasons.append(f'Enhanced verb: "{weak}" -> "{strong}" to align with job terminology')
            break

    return new_content, reasons


def _reorder_bullet_runs(lines: List[str], job_keywords: Sequence[str]) -> bool:
    """Sort each contiguous run of bullets by keyword hits (stable). Returns True if anything moved."""
    changed = False
    i = 0
    while i < len(lines):
        if not _BULLET_LINE.match(lines[i]):
            i += 1
            continue
        j = i
        while j < len(lines) and _BULLET_LINE.match(lines[j]):
            j += 1

        run = lines[i:j]
        scores = [sum(1 for keyword in job_keywords if keyword in bullet.lower()) for bullet in run]
        order = sorted(range(len(run)), key=lambda k: -scores[k])
        if len(run) > 1 and scores[order[0]] > 0 and order != list(range(len(run))):
            lines[i:j] = [run[k] for k in order]
            changed = True
        i = j
    return changed


def optimize_experience(content: str, job_keywords: Sequence[str]) -> Tuple[str, List[str]]:
    """Reorder bullets by relevance within each role and strengthen one weak verb phrase."""
    lines = content.split("\n")
    reasons = []

    if _reorder_bullet_runs(lines, job_keywords):
        reasons.append("Reordered bullet points to prioritize most relevant experience")
    new_content = "\n".join(lines)

    for weak, strong in EXPERIENCE_REPLACEMENTS.items():
        if re.search(rf"\b{re.escape(weak)}\b", new_content, re.IGNORECASE):
            new_content = _replace_word(new_content, weak, strong)
            reasons.append(f'Strengthened verb: "{weak}" -> "{strong}"')
            break

    return new_content, reasons


def optimize_skills(content: str, matched_keywords: Sequence[str]) -> Tuple[str, List[str]]:
    """Move matched skills to the front of the first comma-separated skill line."""
    lines = content.split("\n")

    for index, line in enumerate(lines):
        if not line.strip() or line.count(",") < MIN_SKILLS_TO_REORDER - 1:
            continue

        # Keep a "Category:" label in front of the list
        label, separator, body = line.partition(":")
        if not separator or "," in label:
            label, separator, body = "", "", line

        skills = [skill.strip() for skill in body.split(",")]
        matches = [
            any(k in skill.lower() or (skill and skill.lower() in k) for k in matched_keywords)
            for skill in skills
        ]
        if not any(matches):
            return content, []

        reordered = [s for s, m in zip(skills, matches) if m] + [s for s, m in zip(skills, matches) if not m]
        if reordered == skills:
            return content, []

        prefix = f"{label}{separator} " if separator else line[: len(line) - len(line.lstrip())]
        lines[index] = prefix + ", ".join(reordered)
        return "\n".join(lines), ["Reordered skills to highlight job-relevant competencies first"]

    return content, []


def optimize_resume(resume_text: str, job_text: str, tone: Optional[str] = None) -> OptimizationResult:
    """
    Optimize a résumé for a job description without a language model.

    Args:
        resume_text: Résumé text
        job_text: Job description text
        tone: Optional tone preference ("technical" enables terminology updates)

    Returns:
        OptimizationResult with the rewritten text and the changes made
    """
    match = match_keywords(job_text, resume_text)
    lines = resume_text.split("\n")
    sections = split_sections(lines)

    changes: List[ResumeChange] = []
    # Process bottom-up so earlier slices keep their indices
    for section in reversed(sections):
        content = "\n".join(lines[section.start : section.end])

        if section.canonical == "SUMMARY":
            new_content, reasons = optimize_summary(content, match.job_keywords, job_text, tone)
        elif section.canonical == "EXPERIENCE":
            new_content, reasons = optimize_experience(content, match.job_keywords)
        elif section.canonical in ("SKILLS", "TECHNICAL SKILLS"):
            new_content, reasons = optimize_skills(content, match.matched)
        else:
            continue

        if not reasons or new_content == content:
            continue

        lines[section.start : section.end] = new_content.split("\n")
        changes.append(
            ResumeChange(
                section=section.name,
                original_text=truncate_display(content, EXCERPT_LENGTH),
                new_text=truncate_display(new_content, EXCERPT_LENGTH),
                reason="; ".join(reasons),
            )
        )

    changes.reverse()
    log_optimization(len(sections), len(changes))

    return OptimizationResult(
        optimized_text="\n".join(lines),
        changes=tuple(changes),
        match_score=min(match.score + SCORE_BONUS, 100),
        keywords_matched=match.matched[:MAX_MATCHED_REPORTED],
        keywords_missing=match.missing[:MAX_MISSING_REPORTED],
    )
