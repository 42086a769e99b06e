"""Tests for CSV and PDF export."""

import csv
import io
from datetime import date

from pregnancy_bp.core.classifier import GENERAL, PREGNANCY
from pregnancy_bp.core.metrics import summarize
from pregnancy_bp.models.profile import UserProfile
from pregnancy_bp.utils.export import export_filename, generate_readings_pdf, to_delimited_text

from conftest import NOW, make_reading

HEADER = ('"Date","Time","Systolic","Diastolic","Pulse","Category",'
          '"Position","Pregnancy Week","Symptoms","Notes"')


class TestDelimitedText:

    def test_header_only_when_empty(self):
        assert to_delimited_text([]) == HEADER

    def test_one_row_per_reading_in_order(self):
        readings = [
            make_reading(150, 95, 88, date="2026-03-01", time="09:30", week=22,
                         symptoms=["Headache", "Nausea"], notes="after lunch",
                         position="lying"),
            make_reading(118, 76, 72, date="2026-02-28", time="21:05", week=21),
        ]

        lines = to_delimited_text(readings, PREGNANCY).split("\n")

        assert lines == [
            HEADER,
            '"2026-03-01","09:30","150","95","88","Gestational HTN","lying","22",'
            '"Headache; Nausea","after lunch"',
            '"2026-02-28","21:05","118","76","72","Normal","sitting","21","",""',
        ]

    def test_general_labels(self):
        text = to_delimited_text([make_reading(135, 70, ruleset=GENERAL)], GENERAL)
        assert '"Stage 1 High"' in text

    def test_embedded_quotes_are_doubled(self):
        reading = make_reading(notes='felt "dizzy", then fine')
        text = to_delimited_text([reading])

        assert text.endswith('"felt ""dizzy"", then fine"')
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1][-1] == 'felt "dizzy", then fine'

    def test_every_reading_appears_once(self):
        readings = [make_reading(100 + i, 70, notes=f"n{i}") for i in range(12)]
        rows = list(csv.reader(io.StringIO(to_delimited_text(readings))))

        assert len(rows) == 13
        assert [row[-1] for row in rows[1:]] == [f"n{i}" for i in range(12)]


class TestExportFilename:

    def test_name_whitespace_becomes_hyphens(self):
        assert (export_filename("Jane  Mary\tDoe", date(2026, 3, 1))
                == "pregnancy-bp-readings-Jane-Mary-Doe-2026-03-01.csv")

    def test_without_name(self):
        assert export_filename(None, date(2026, 3, 1)) == "pregnancy-bp-readings-patient-2026-03-01.csv"
        assert export_filename("", date(2026, 3, 1)) == "pregnancy-bp-readings-patient-2026-03-01.csv"

    def test_pdf_extension(self):
        assert export_filename("Jane", date(2026, 3, 1), "pdf").endswith("Jane-2026-03-01.pdf")


class TestPdfReport:

    def test_generates_pdf(self):
        profile = UserProfile("Jane Doe", date(2026, 9, 1), 14, True, doctor_name="Dr. Rivera")
        readings = [make_reading(150, 95), make_reading(118, 76)]
        summary = summarize(readings, profile, NOW, PREGNANCY)

        output = generate_readings_pdf(profile, readings, summary, generated_at=NOW)

        assert output.getvalue().startswith(b"%PDF")

    def test_markup_characters_in_name(self):
        profile = UserProfile("Ann <b & Co", date(2026, 9, 1), 14, True, doctor_name="<i>Dr")
        summary = summarize([], profile, NOW, PREGNANCY)

        output = generate_readings_pdf(profile, [make_reading()], summary, generated_at=NOW)

        assert output.getvalue().startswith(b"%PDF")

    def test_generates_pdf_without_profile_or_readings(self):
        summary = summarize([], None, NOW, PREGNANCY)
        output = generate_readings_pdf(None, [], summary)
        assert output.getvalue().startswith(b"%PDF")
