#!/usr/bin/env python3
"""
Résumé Rendering CLI

Turns a plain-text résumé into a paginated PDF (reportlab) and/or the JSON
render plan, plus an optional Word document (python-docx). Layout presets
from configs/layout_presets.yaml are applied in order, later presets
overriding earlier ones.

Usage:
    # Default US Letter layout
    python scripts/render_resume.py resume.txt -o outs/resume.pdf

    # A4, narrow margins, compact fonts, plan JSON alongside the PDF
    python scripts/render_resume.py resume.txt -p page_a4 -p margins_narrow -p fonts_compact \\
        --plan-json outs/resume_plan.json

    # Structure with a pre-computed hint, or ask an LLM for one
    python scripts/render_resume.py resume.txt --hint hint.json
    python scripts/render_resume.py resume.txt --use-llm-hint

    # Word document alongside the PDF
    python scripts/render_resume.py resume.txt --docx outs/resume.docx
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.layout.config_resolver import resolve_layout
from folio.contexts.layout.exceptions import LayoutConfigurationError
from folio.contexts.rendering.docx_writer import write_docx
from folio.contexts.rendering.exceptions import RenderBackendError
from folio.contexts.rendering.logger import log_diagnostics, setup_rendering_logger
from folio.contexts.rendering.pdf_writer import reportlab_measure, write_pdf
from folio.contexts.rendering.plan_diagnostics import diagnose_plan
from folio.pipeline import render_resume
from folio.utils.logger import default_log_dir
from folio.utils.text_processing import read_text_lenient

load_dotenv()

app = typer.Typer(
    help="Render a plain-text résumé to PDF",
    add_completion=False,
)


@app.command()
def main(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Plain-text résumé (.txt)",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output PDF path (default: outs/<name>.pdf)"),
    ] = None,
    plan_json: Annotated[
        Optional[Path],
        typer.Option("--plan-json", help="Also write the render plan as JSON"),
    ] = None,
    docx: Annotated[
        Optional[Path],
        typer.Option("--docx", help="Also write the résumé as a Word document"),
    ] = None,
    no_pdf: Annotated[
        bool,
        typer.Option("--no-pdf", help="Skip PDF output (use with --plan-json)"),
    ] = False,
    preset: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Layout preset to apply (repeatable)"),
    ] = None,
    hint: Annotated[
        Optional[Path],
        typer.Option("--hint", help="JSON file with a structuring hint", exists=True, dir_okay=False),
    ] = None,
    use_llm_hint: Annotated[
        bool,
        typer.Option("--use-llm-hint", help="Ask an LLM (LLM_PROVIDER / HINT_MODEL) for a structuring hint"),
    ] = False,
    estimate: Annotated[
        bool,
        typer.Option("--estimate", help="Use the character-width estimate instead of font metrics"),
    ] = False,
    page_budget: Annotated[
        Optional[int],
        typer.Option("--page-budget", help="Warn when the résumé exceeds this many pages"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Log directory (default: FOLIO_LOGS_PATH/render_<timestamp>)"),
    ] = None,
):
    """Render a résumé and report layout diagnostics."""
    log_file = setup_rendering_logger(log_dir or default_log_dir("render"), preset_names=preset)

    try:
        geometry, styles = resolve_layout(preset or [])
    except LayoutConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    measure = None if estimate else reportlab_measure
    hint_data = read_text_lenient(hint) if hint else None

    try:
        result = render_resume(
            read_text_lenient(input_file),
            geometry=geometry,
            styles=styles,
            hint=hint_data,
            measure=measure,
            use_llm_hint=use_llm_hint,
        )
    except LayoutConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    for note in result.notes:
        typer.secho(f"Note: {note}", fg=typer.colors.YELLOW)

    diagnostics = diagnose_plan(result.plan, result.lines, measure, page_budget)
    log_diagnostics(diagnostics.get_inherited_issues())

    if plan_json:
        plan_json.parent.mkdir(parents=True, exist_ok=True)
        plan_json.write_text(json.dumps(result.plan.to_dict(), indent=2), encoding="utf-8")
        typer.echo(f"Plan: {plan_json}")

    if not no_pdf:
        output = output or Path("outs") / f"{input_file.stem}.pdf"
        try:
            write_pdf(result.plan, output, title=input_file.stem)
        except RenderBackendError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(f"PDF: {output}")

    if docx:
        try:
            write_docx(result.lines, docx, title=input_file.stem)
        except RenderBackendError as e:
            typer.echo(f"ERROR: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(f"DOCX: {docx}")

    typer.echo(f"Log: {log_file}")
    typer.secho(
        f"\n✓ {len(result.lines)} lines -> {result.plan.page_count} page(s)",
        fg=typer.colors.GREEN,
    )


if __name__ == "__main__":
    app()
