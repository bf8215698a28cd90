"""
FOLIO - Formatted Output Layout for Irregular Originals

A résumé layout pipeline that consumes unstructured plain text and produces
a paginated, backend-agnostic render plan.

Architecture:
- Intake Context: Sanitizing, line classification, section tracking, structuring hints
- Layout Context: Page geometry, word-wrap, pagination, render plan
- Rendering Context: Drawing a render plan as a PDF
- Targeting Context: Keyword matching and rule-based résumé optimization
"""

__version__ = "0.1.0"
