"""
Rendering Context

Responsibilities:
- Draws a render plan onto PDF pages with reportlab
- Writes classified lines into a Word document with python-docx
- Supplies a reportlab-backed text measurement function to the layout engine
- Checks finished render plans for out-of-bounds or overflowing blocks

Owns: PDF and DOCX output, font metrics, plan diagnostics
Never: Classifies lines or decides where text goes
"""

from folio.contexts.rendering.docx_writer import render_docx_bytes, write_docx
from folio.contexts.rendering.exceptions import RenderBackendError
from folio.contexts.rendering.pdf_writer import render_pdf_bytes, reportlab_measure, write_pdf
from folio.contexts.rendering.plan_diagnostics import PlanDiagnostics, diagnose_plan

__all__ = [
    "write_pdf",
    "render_pdf_bytes",
    "reportlab_measure",
    "write_docx",
    "render_docx_bytes",
    "RenderBackendError",
    "diagnose_plan",
    "PlanDiagnostics",
]
