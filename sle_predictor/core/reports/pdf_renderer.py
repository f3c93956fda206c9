"""
PDF Report Renderer

Lays out a ReportDocument as a PDF with reportlab:
- Coloured title banner and footer on every page
- Label/value tables for patient info and prediction results
- Colour-coded risk level cells
- Bulleted treatment protocol and clinical considerations
"""
import io
import os
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor, white
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, KeepTogether
)

from sle_predictor.core.inference import RiskTier
from sle_predictor.core.reports.assembler import ReportDocument, ReportSection, SectionKind
from sle_predictor.utils import get_logger, ReportGenerationError

logger = get_logger(__name__)

PRIMARY_COLOR = HexColor("#4338CA")

# Risk tier colours
RISK_COLORS = {
    RiskTier.LOW: HexColor("#22C55E"),       # Green
    RiskTier.MODERATE: HexColor("#F59E0B"),  # Amber
    RiskTier.HIGH: HexColor("#EF4444"),      # Red
}

_RESULT_SECTIONS = (SectionKind.DIAGNOSIS_RESULT, SectionKind.FLARE_RESULT)


class PDFReportRenderer:
    """Renders ReportDocuments to PDF bytes or files."""

    def __init__(self, output_dir: str = "reports"):
        self.output_dir = output_dir
        self._styles = getSampleStyleSheet()
        self._create_custom_styles()
        logger.debug(f"PDFReportRenderer initialized, output: {output_dir}")

    def _create_custom_styles(self):
        """Create custom paragraph styles."""
        if 'ReportTitle' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='ReportTitle',
                parent=self._styles['Title'],
                fontSize=24,
                textColor=white,
                alignment=TA_CENTER,
                fontName='Helvetica-Bold'
            ))

        if 'SectionHeader' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='SectionHeader',
                parent=self._styles['Heading2'],
                fontSize=16,
                spaceBefore=18,
                spaceAfter=10,
                textColor=HexColor("#1F2937"),
                fontName='Helvetica-Bold'
            ))

        if 'SubHeader' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='SubHeader',
                parent=self._styles['Heading3'],
                fontSize=13,
                spaceBefore=12,
                spaceAfter=6,
                textColor=HexColor("#374151"),
                fontName='Helvetica-Bold'
            ))

        if 'ReportBody' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='ReportBody',
                parent=self._styles['Normal'],
                fontSize=11,
                spaceAfter=8,
                leading=15,
                alignment=TA_JUSTIFY
            ))

        if 'ReportBullet' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='ReportBullet',
                parent=self._styles['Normal'],
                fontSize=11,
                leading=14,
                leftIndent=15,
                spaceAfter=4
            ))

        if 'Disclaimer' not in self._styles:
            self._styles.add(ParagraphStyle(
                name='Disclaimer',
                parent=self._styles['Normal'],
                fontSize=9,
                textColor=HexColor("#6B7280"),
                fontName='Helvetica-Oblique',
                spaceBefore=5,
                spaceAfter=5
            ))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_bytes(self, document: ReportDocument) -> bytes:
        """Render `document` and return the PDF as bytes."""
        buffer = io.BytesIO()
        self._build(document, buffer)
        return buffer.getvalue()

    def render_to_file(self, document: ReportDocument, filename: Optional[str] = None) -> str:
        """Render `document` into output_dir and return the file path."""
        os.makedirs(self.output_dir, exist_ok=True)
        filepath = os.path.join(self.output_dir, filename or f"{document.report_id}.pdf")
        with open(filepath, "wb") as fh:
            self._build(document, fh)
        logger.info(f"Prediction report generated: {filepath}")
        return filepath

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build(self, document: ReportDocument, target) -> None:
        doc = SimpleDocTemplate(
            target,
            pagesize=A4,
            rightMargin=0.75*inch,
            leftMargin=0.75*inch,
            topMargin=0.75*inch,
            bottomMargin=0.9*inch,
            title=document.title,
        )

        story = []
        for section in document.sections:
            story.extend(self._render_section(section))

        def _footer(canvas, _doc):
            width, _ = A4
            canvas.saveState()
            canvas.setFillColor(PRIMARY_COLOR)
            canvas.rect(0, 0, width, 0.45*inch, fill=1, stroke=0)
            canvas.setFillColor(white)
            canvas.setFont("Helvetica", 9)
            canvas.drawCentredString(width / 2, 0.18*inch, document.footer)
            canvas.restoreState()

        try:
            doc.build(story, onFirstPage=_footer, onLaterPages=_footer)
        except Exception as e:
            logger.error(f"PDF build failed for {document.report_id}: {e}")
            raise ReportGenerationError(
                f"Failed to render PDF report: {e}",
                report_type="pdf",
                details={"report_id": document.report_id},
            ) from e

    def _render_section(self, section: ReportSection) -> List:
        if section.kind == SectionKind.HEADER:
            return self._render_header(section)
        if section.kind == SectionKind.DISCLAIMER:
            return [Spacer(1, 20)] + [
                Paragraph(escape(text), self._styles['Disclaimer'])
                for text in section.paragraphs
            ]

        elements = [Paragraph(escape(section.title), self._styles['SectionHeader'])]
        if section.items:
            elements.append(self._items_table(section))
            elements.append(Spacer(1, 8))
        for text in section.paragraphs:
            elements.append(Paragraph(escape(text), self._styles['ReportBody']))
        for bullet in section.bullets:
            elements.append(Paragraph(f"• {escape(bullet)}", self._styles['ReportBullet']))
        for sub in section.subsections:
            elements.append(Paragraph(escape(sub.title), self._styles['SubHeader']))
            for text in sub.paragraphs:
                elements.append(Paragraph(escape(text), self._styles['ReportBody']))
            for bullet in sub.bullets:
                elements.append(Paragraph(f"• {escape(bullet)}", self._styles['ReportBullet']))

        # Keep result boxes together on the same page
        if section.kind in _RESULT_SECTIONS:
            return [KeepTogether(elements)]
        return elements

    def _render_header(self, section: ReportSection) -> List:
        banner = Table(
            [[Paragraph(escape(section.title), self._styles['ReportTitle'])]],
            colWidths=[6.7*inch],
            rowHeights=[0.8*inch],
        )
        banner.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), PRIMARY_COLOR),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ]))
        meta = " | ".join(f"{label}: {escape(value)}" for label, value in section.items)
        elements = [banner, Spacer(1, 6)]
        if meta:
            elements.append(Paragraph(meta, self._styles['Disclaimer']))
        return elements

    def _items_table(self, section: ReportSection) -> Table:
        table_data = [[label, value] for label, value in section.items]
        table = Table(table_data, colWidths=[2.2*inch, 4.5*inch])

        table_style = [
            ('BACKGROUND', (0, 0), (-1, -1), HexColor("#F5F5F5")),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('GRID', (0, 0), (-1, -1), 0.5, HexColor("#D1D5DB")),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ]

        # Colour-code the risk level cell
        for i, (label, value) in enumerate(section.items):
            if label == "Risk Level":
                try:
                    color = RISK_COLORS[RiskTier(value)]
                except ValueError:
                    continue
                table_style.append(('BACKGROUND', (1, i), (1, i), color))
                table_style.append(('TEXTCOLOR', (1, i), (1, i), white))
                table_style.append(('FONTNAME', (1, i), (1, i), 'Helvetica-Bold'))

        table.setStyle(TableStyle(table_style))
        return table
