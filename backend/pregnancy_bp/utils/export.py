"""
Export utilities for CSV and PDF generation.
"""
import csv
import io
import re
import logging
from datetime import datetime
from xml.sax.saxutils import escape
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from pregnancy_bp.core.classifier import PREGNANCY, category_label
from pregnancy_bp.core.clock import format_iso_date

logger = logging.getLogger(__name__)

CSV_HEADER = [
    'Date', 'Time', 'Systolic', 'Diastolic', 'Pulse', 'Category',
    'Position', 'Pregnancy Week', 'Symptoms', 'Notes',
]


def to_delimited_text(readings, ruleset=PREGNANCY):
    """Render readings as CSV text, one row per reading in the given order.

    Every cell is quoted. Embedded double quotes are doubled so that free-text
    notes cannot break the row.

    Args:
        readings: Sequence of Reading objects (newest first)
        ruleset: Ruleset whose category labels are written

    Returns:
        str containing the CSV document
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator='\n')

    writer.writerow(CSV_HEADER)
    for reading in readings:
        writer.writerow([
            reading.date,
            reading.time,
            reading.systolic,
            reading.diastolic,
            reading.pulse,
            category_label(reading.category, ruleset),
            reading.position,
            reading.pregnancy_week,
            '; '.join(reading.symptoms),
            reading.notes or '',
        ])

    # No trailing newline after the last row
    return output.getvalue().rstrip('\n')


def export_filename(profile_name, today, extension='csv'):
    """File name for a download, e.g. pregnancy-bp-readings-Jane-Doe-2026-03-01.csv"""
    name = re.sub(r'\s+', '-', profile_name) if profile_name else ''
    return f"pregnancy-bp-readings-{name or 'patient'}-{format_iso_date(today)}.{extension}"


def generate_readings_pdf(profile, readings, summary, ruleset=PREGNANCY, generated_at=None):
    """Generate a report to share with the care provider.

    Args:
        profile: UserProfile or None
        readings: List of Reading objects (newest first)
        summary: Dict from metrics.summarize
        ruleset: Ruleset used for category labels
        generated_at: datetime stamped on the report (defaults to now)

    Returns:
        BytesIO object containing PDF data
    """
    output = io.BytesIO()
    doc = SimpleDocTemplate(output, pagesize=letter, topMargin=0.5*inch, bottomMargin=0.5*inch)

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Heading1'],
        fontSize=18,
        spaceAfter=20,
    )
    heading_style = ParagraphStyle(
        'CustomHeading',
        parent=styles['Heading2'],
        fontSize=14,
        spaceBefore=15,
        spaceAfter=10,
    )
    normal_style = styles['Normal']

    generated_at = generated_at or datetime.now()
    patient_name = profile.name if profile and profile.name else 'Patient'

    elements = []
    elements.append(Paragraph(f"Pregnancy Blood Pressure Report: {escape(patient_name)}", title_style))
    elements.append(Paragraph(f"Generated: {generated_at.strftime('%B %d, %Y at %H:%M')}", normal_style))
    elements.append(Spacer(1, 20))

    # Pregnancy details
    elements.append(Paragraph("Pregnancy Information", heading_style))

    details = [
        ['Due Date:', format_iso_date(profile.due_date) if profile and profile.due_date else 'N/A'],
        ['Current Week:', str(summary['current_week'])],
        ['First Pregnancy:', _yes_no(profile.first_pregnancy) if profile else 'N/A'],
        ['Healthcare Provider:', (profile.doctor_name if profile else '') or 'N/A'],
        ['Pre-existing Conditions:', (profile.pre_existing_conditions if profile else '') or 'None reported'],
        ['Medications:', (profile.current_medications if profile else '') or 'None reported'],
    ]
    elements.append(_label_table(details))
    elements.append(Spacer(1, 15))

    # BP summary
    elements.append(Paragraph("Blood Pressure Summary", heading_style))

    avg = summary['averages']
    bp_summary = [
        ['Total Readings:', str(summary['total_readings'])],
        ['Recent Average:', f"{avg['avg_systolic']}/{avg['avg_diastolic']} mmHg, "
                            f"{avg['avg_pulse']} bpm" if avg else 'Insufficient data'],
        ['High Risk Readings:', str(summary['high_risk_count'])],
    ]
    if readings:
        latest = readings[0]
        bp_summary.append(['Latest Reading:', f"{latest.systolic}/{latest.diastolic} mmHg "
                                              f"({category_label(latest.category, ruleset)})"])
        bp_summary.append(['Latest Date:', f"{latest.date} {latest.time}"])

    elements.append(_label_table(bp_summary))
    elements.append(Spacer(1, 15))

    if readings:
        elements.append(Paragraph("Recent Readings (Last 20)", heading_style))

        reading_data = [['Date', 'BP', 'Pulse', 'Week', 'Position', 'Category']]
        for r in readings[:20]:
            reading_data.append([
                f"{r.date} {r.time}",
                f"{r.systolic}/{r.diastolic}",
                str(r.pulse),
                str(r.pregnancy_week),
                r.position,
                category_label(r.category, ruleset),
            ])

        reading_table = Table(reading_data, colWidths=[1.4*inch, 0.9*inch, 0.7*inch, 0.6*inch, 0.9*inch, 1.8*inch])
        reading_table.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
            ('TOPPADDING', (0, 0), (-1, -1), 5),
        ]))
        elements.append(reading_table)

    doc.build(elements)
    output.seek(0)
    logger.info(f"Generated PDF report with {len(readings)} reading(s)")
    return output


def _label_table(rows):
    table = Table(rows, colWidths=[2*inch, 4*inch])
    table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('ALIGN', (0, 0), (0, -1), 'RIGHT'),
        ('ALIGN', (1, 0), (1, -1), 'LEFT'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
    ]))
    return table


def _yes_no(value):
    if value is None:
        return 'N/A'
    return 'Yes' if value else 'No'
