#!/usr/bin/env python3
"""
Show how each line of a plain-text résumé is classified.

Usage:
    python scripts/classify_resume.py resume.txt
    python scripts/classify_resume.py resume.txt --hint hint.json
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from folio.contexts.intake.classifier import classify_document, split_lines
from folio.contexts.intake.logger import setup_intake_logger
from folio.contexts.intake.sanitizer import sanitize
from folio.utils.logger import default_log_dir
from folio.utils.text_processing import read_text_lenient, truncate_display

app = typer.Typer(help="Classify résumé lines.", add_completion=False)


@app.command()
def main(
    input_file: Annotated[
        Path,
        typer.Argument(help="Plain-text résumé (.txt)", exists=True, dir_okay=False),
    ],
    hint: Annotated[
        Optional[Path],
        typer.Option("--hint", help="JSON file with a structuring hint", exists=True, dir_okay=False),
    ] = None,
    show_blank: Annotated[
        bool,
        typer.Option("--show-blank", help="Include blank lines in the table"),
    ] = False,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Log directory (default: FOLIO_LOGS_PATH/classify_<timestamp>)"),
    ] = None,
):
    """Print one row per classified line: source lines, role, text."""
    setup_intake_logger(log_dir or default_log_dir("classify"))
    raw_lines = split_lines(sanitize(read_text_lenient(input_file)))
    hint_data = read_text_lenient(hint) if hint else None

    classification = classify_document(raw_lines, hint_data)

    if hint_data is not None:
        if classification.used_hint:
            typer.echo("(Using structuring hint)")
        else:
            typer.secho(f"Hint rejected: {classification.hint_error}", fg=typer.colors.YELLOW)

    typer.echo(f"\n{'LINES':<8} {'ROLE':<15} TEXT")
    for line in classification.lines:
        if line.is_blank and not show_blank:
            continue
        source = ",".join(str(i) for i in line.consumed_indices) or "-"
        text = truncate_display(line.primary_text, 70)
        if line.secondary_text:
            text += f"  ||  {truncate_display(line.secondary_text, 40)}"
        typer.echo(f"{source:<8} {line.role.value:<15} {text}")

    counts = {}
    for line in classification.lines:
        counts[line.role.value] = counts.get(line.role.value, 0) + 1
    summary = ", ".join(f"{role}={count}" for role, count in sorted(counts.items()))
    typer.echo(f"\n{len(raw_lines)} raw lines -> {len(classification.lines)} classified ({summary})")


if __name__ == "__main__":
    app()
