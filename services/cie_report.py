from datetime import datetime
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer


def _fmt(value):
    return f"{value:.2f}"


def build_cie_report_pdf(subject_name, section_label, academic_year, config, rows):
    """
    Render a CIE sheet for one teaching assignment.

    rows is a list of dicts with register_no, name and cie (a CIEBreakdown or None).
    Returns a BytesIO positioned at the start.
    """
    now_text = datetime.now().strftime("%Y-%m-%d %H:%M")

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=24, rightMargin=24, topMargin=24, bottomMargin=24)
    styles = getSampleStyleSheet()

    elements = [
        Paragraph(f"CIE Report - {subject_name}", styles["Title"]),
        Paragraph(
            f"Section: {section_label} | Academic Year: {academic_year} | "
            f"Max CIE: {config.max_cie_marks} | Generated: {now_text}",
            styles["Normal"]
        ),
        Spacer(1, 12)
    ]

    table_data = [["Reg No", "Student Name", "Slip", "Assignment", "Midsem", "Attendance", "Total"]]
    for row in rows:
        cie = row["cie"]
        if cie is None:
            table_data.append([row["register_no"], row["name"], "--", "--", "--", "--", "Not graded"])
            continue
        table_data.append([
            row["register_no"],
            row["name"],
            _fmt(cie.slip_score),
            _fmt(cie.assignment_score),
            _fmt(cie.midsem_score),
            _fmt(cie.attendance_marks),
            _fmt(cie.total_cie)
        ])

    if len(table_data) == 1:
        table_data.append(["--", "No data", "--", "--", "--", "--", "--"])

    table = Table(table_data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (2, 1), (-1, -1), "CENTER"),
    ]))

    elements.append(table)
    doc.build(elements)
    buffer.seek(0)
    return buffer
