"""
Report Generation Module

Builds the prediction result record and its exports:
- CSV (machine-readable row and Field,Value summary)
- Structured report document (ordered sections)
- PDF rendering of the report document
"""
from .assembler import (
    PredictionResult,
    ReportDocument,
    ReportSection,
    SectionKind,
    CSV_HEADERS,
    assemble,
    to_csv,
    to_summary_csv,
    to_report_document,
)
from .pdf_renderer import PDFReportRenderer

__all__ = [
    "PredictionResult",
    "ReportDocument",
    "ReportSection",
    "SectionKind",
    "CSV_HEADERS",
    "assemble",
    "to_csv",
    "to_summary_csv",
    "to_report_document",
    "PDFReportRenderer",
]
