# rx_core/prescriptions/pdf.py
"""
Default PDF renderer for finalized prescriptions (reportlab).

The renderer is a plain callable `(PrescriptionDocument) -> bytes`, looked up
from settings.PRESCRIPTION_PDF_RENDERER, so deployments can swap it.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


@dataclass(frozen=True)
class PrescriptionDocumentItem:
    medicine_name: str
    strength: str
    form: str
    dosage: str
    frequency: str
    duration: str
    remarks: str = ""


@dataclass(frozen=True)
class PrescriptionDocument:
    """Fully joined, render-ready view of a FINAL prescription."""
    prescription_id: str
    clinic_name: str
    clinic_motto: str
    issued_on: datetime
    patient_code: str
    patient_name: str
    age_band: str
    diagnosis: str
    recommendation: str
    notes: str
    doctor_name: str
    doctor_email: str
    items: Tuple[PrescriptionDocumentItem, ...]


def _p(text: str, style) -> Paragraph:
    return Paragraph(escape(text or "").replace("\n", "<br/>"), style)


def render_prescription_pdf(document: PrescriptionDocument) -> bytes:
    buffer = BytesIO()

    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=20 * mm,
        leftMargin=20 * mm,
        topMargin=15 * mm,
        bottomMargin=10 * mm,
        title=f"Prescription {document.prescription_id[:8]}",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "ClinicTitle",
        parent=styles["Heading1"],
        fontSize=20,
        textColor=colors.black,
        spaceAfter=2,
        fontName="Helvetica-Bold",
    )
    heading_style = ParagraphStyle(
        "SectionHeading",
        parent=styles["Heading2"],
        fontSize=13,
        textColor=colors.black,
        spaceAfter=4,
        fontName="Helvetica-Bold",
    )
    normal_style = ParagraphStyle("Body", parent=styles["Normal"], fontSize=10, spaceAfter=6)
    small_style = ParagraphStyle("Small", parent=styles["Normal"], fontSize=8, textColor=colors.grey)

    elements = [
        _p(document.clinic_name, title_style),
        _p(document.clinic_motto, small_style),
        Spacer(1, 6 * mm),
        _p(f"Prescription for {document.patient_name}", heading_style),
    ]

    patient_table = Table(
        [
            ["Patient Code:", document.patient_code],
            ["Age Band:", document.age_band],
            ["Date:", document.issued_on.strftime("%d/%m/%Y")],
        ],
        colWidths=[40 * mm, 130 * mm],
    )
    patient_table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
                ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
            ]
        )
    )
    elements += [patient_table, Spacer(1, 5 * mm)]

    elements += [_p("Diagnosis", heading_style), _p(document.diagnosis, normal_style)]

    rows = [["#", "Medicine", "Dosage", "Frequency", "Duration", "Remarks"]]
    for idx, item in enumerate(document.items, start=1):
        rows.append(
            [
                str(idx),
                _p(f"{item.medicine_name} {item.strength} ({item.form})", normal_style),
                _p(item.dosage, normal_style),
                _p(item.frequency, normal_style),
                _p(item.duration, normal_style),
                _p(item.remarks, normal_style),
            ]
        )
    items_table = Table(rows, colWidths=[8 * mm, 52 * mm, 28 * mm, 30 * mm, 24 * mm, 28 * mm], repeatRows=1)
    items_table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    elements += [_p("Medicines", heading_style), items_table, Spacer(1, 5 * mm)]

    elements += [_p("Recommendation", heading_style), _p(document.recommendation, normal_style)]
    if document.notes:
        elements += [_p("Notes", heading_style), _p(document.notes, normal_style)]

    elements += [
        Spacer(1, 12 * mm),
        _p(document.doctor_name, normal_style),
        _p(document.doctor_email, small_style),
    ]

    doc.build(elements)
    return buffer.getvalue()
