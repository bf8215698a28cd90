#!/usr/bin/env python3
"""
Score a résumé against a job description.

Usage:
    python scripts/match_keywords.py resume.txt job.txt
    python scripts/match_keywords.py resume.txt job.txt --analyze
    python scripts/match_keywords.py resume.txt job.txt --optimize --tone technical -o optimized.txt
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from folio.contexts.targeting.job_analysis import analyze_job_description
from folio.contexts.targeting.keywords import match_keywords
from folio.contexts.targeting.logger import setup_targeting_logger
from folio.contexts.targeting.optimizer import optimize_resume
from folio.utils.logger import default_log_dir
from folio.utils.text_processing import read_text_lenient

app = typer.Typer(help="Keyword matching and rule-based optimization.", add_completion=False)


@app.command()
def main(
    resume_file: Annotated[
        Path, typer.Argument(help="Plain-text résumé", exists=True, dir_okay=False)
    ],
    job_file: Annotated[
        Path, typer.Argument(help="Job description text", exists=True, dir_okay=False)
    ],
    analyze: Annotated[
        bool, typer.Option("--analyze", help="Show job description analysis")
    ] = False,
    optimize: Annotated[
        bool, typer.Option("--optimize", help="Apply rule-based optimization")
    ] = False,
    tone: Annotated[
        Optional[str], typer.Option("--tone", help="Tone preference (e.g., technical)")
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Write optimized résumé here")
    ] = None,
    log_dir: Annotated[
        Optional[Path], typer.Option("--log-dir", help="Log directory (default: FOLIO_LOGS_PATH/target_<timestamp>)")
    ] = None,
):
    """Print matched and missing keywords and the match score."""
    setup_targeting_logger(log_dir or default_log_dir("target"))

    resume_text = read_text_lenient(resume_file)
    job_text = read_text_lenient(job_file)

    match = match_keywords(job_text, resume_text)

    typer.echo(f"\n=== Match Score: {match.score}% ===")
    typer.echo(f"Job keywords ({len(match.job_keywords)}): {', '.join(match.job_keywords) or 'none'}")
    typer.echo(f"Matched ({len(match.matched)}): {', '.join(match.matched) or 'none'}")
    typer.echo(f"Missing ({len(match.missing)}): {', '.join(match.missing) or 'none'}")

    if analyze:
        analysis = analyze_job_description(job_text)
        typer.echo("\n=== Job Analysis ===")
        typer.echo(f"  Seniority: {analysis.seniority_level}")
        typer.echo(f"  Required skills: {', '.join(analysis.required_skills) or 'none'}")
        typer.echo(f"  Preferred skills: {', '.join(analysis.preferred_skills) or 'none'}")
        typer.echo(f"  Responsibilities ({len(analysis.responsibilities)}):")
        for responsibility in analysis.responsibilities:
            typer.echo(f"    - {responsibility}")

    if optimize:
        result = optimize_resume(resume_text, job_text, tone=tone)
        typer.echo(f"\n=== Optimization ({result.method}) ===")
        typer.echo(f"  Presented score: {result.match_score}%")
        if not result.changes:
            typer.echo("  No changes needed")
        for change in result.changes:
            typer.echo(f"  [{change.section}] {change.reason}")

        if output:
            output.write_text(result.optimized_text, encoding="utf-8")
            typer.echo(f"\nOptimized résumé: {output}")
        else:
            typer.echo("\n" + result.optimized_text)


if __name__ == "__main__":
    app()
