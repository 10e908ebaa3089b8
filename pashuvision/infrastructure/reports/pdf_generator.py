from __future__ import annotations

import io
from datetime import datetime, timezone
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from pashuvision.domain.models.breed_identification import english_text
from pashuvision.domain.models.registration import AnimalResult, Registration
from pashuvision.utils.datetime_tz import format_date, to_local


def _text(value: object) -> str:
    return escape("" if value is None else str(value))


class PDFGenerator:
    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles"""
        self.styles.add(
            ParagraphStyle(
                name="ReportTitle",
                parent=self.styles["Heading1"],
                fontSize=18,
                spaceAfter=24,
                textColor=colors.darkgreen,
                alignment=1,  # Center
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="SectionHeading",
                parent=self.styles["Heading2"],
                fontSize=14,
                spaceAfter=10,
                textColor=colors.darkgreen,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="AnimalHeading",
                parent=self.styles["Heading3"],
                fontSize=12,
                spaceAfter=6,
                textColor=colors.darkblue,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="Cell",
                parent=self.styles["Normal"],
                fontSize=9,
                leading=11,
            )
        )

    def create_header(self, title: str, subtitle: str | None = None) -> list:
        elements = [Paragraph(_text(title), self.styles["ReportTitle"])]
        if subtitle:
            elements.append(Paragraph(_text(subtitle), self.styles["AnimalHeading"]))
        gen_date = datetime.now(timezone.utc).strftime("%d/%m/%Y %H:%M UTC")
        elements.append(Paragraph(f"Generated on: {gen_date}", self.styles["Normal"]))
        elements.append(Spacer(1, 16))
        return elements

    def create_key_value_section(self, title: str, rows: list[tuple[str, str]]) -> list:
        elements = [Paragraph(_text(title), self.styles["SectionHeading"])]
        data = [
            [Paragraph(f"<b>{_text(k)}</b>", self.styles["Cell"]), Paragraph(_text(v), self.styles["Cell"])]
            for k, v in rows
        ]
        table = Table(data, colWidths=[2 * inch, 4.5 * inch])
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (0, -1), colors.lightgrey),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(table)
        elements.append(Spacer(1, 12))
        return elements

    def create_table_section(self, title: str, columns: list[str], rows: list[list[str]]) -> list:
        elements = [Paragraph(_text(title), self.styles["AnimalHeading"])]
        if not rows:
            elements.append(Paragraph("No records", self.styles["Normal"]))
            elements.append(Spacer(1, 12))
            return elements

        table_data = [columns] + [
            [Paragraph(_text(value), self.styles["Cell"]) for value in row] for row in rows
        ]
        col_width = 6.5 * inch / len(columns)
        table = Table(table_data, colWidths=[col_width] * len(columns))
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.darkgreen),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 9),
                    ("BACKGROUND", (0, 1), (-1, -1), colors.beige),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        elements.append(table)
        elements.append(Spacer(1, 12))
        return elements

    def create_animal_section(self, index: int, animal: AnimalResult) -> list:
        ai = animal.ai_result
        if ai.error:
            identification = [("AI Analysis", "Failed"), ("AI Error", ai.error)]
        else:
            identification = [
                ("Breed", ai.breed_name),
                ("Confidence", f"{ai.confidence}%"),
                ("Reasoning", english_text(ai.reasoning)),
                ("Milk Yield Potential", english_text(ai.milk_yield_potential)),
                ("Care Notes", english_text(ai.care_notes)),
            ]
            if ai.is_user_verified:
                identification.append(("Verified", "Breed confirmed by field worker"))
            if ai.top_candidates:
                identification.append(
                    (
                        "Top Candidates",
                        ", ".join(
                            f"{c.breed_name} ({c.confidence_percentage}%)"
                            for c in ai.top_candidates
                        ),
                    )
                )

        rows = [
            ("Animal UID", animal.id),
            ("Species", animal.species or "-"),
            ("Sex", animal.sex or "-"),
            ("Age", animal.age_label),
            *identification,
        ]
        elements = self.create_key_value_section(f"Animal {index}", rows)
        vaccinations = [
            [v.vaccine_name, format_date(v.administered_date), format_date(v.due_date), v.notes or ""]
            for v in animal.vaccinations or []
        ]
        elements.extend(
            self.create_table_section(
                "Vaccinations",
                ["Vaccine", "Administered", "Next Due", "Notes"],
                vaccinations,
            )
        )
        return elements

    def registration_report(self, registration: Registration) -> bytes:
        owner = registration.owner
        elements = self.create_header("PashuVision Registration Report", registration.id)
        elements.extend(
            self.create_key_value_section(
                "Registration",
                [
                    ("Date", to_local(registration.timestamp).strftime("%d/%m/%Y %H:%M")),
                    ("Status", registration.status),
                    ("Sync Status", "Synced" if registration.synced else "Pending"),
                ],
            )
        )
        elements.extend(
            self.create_key_value_section(
                "Owner Details",
                [
                    ("Name", owner.name),
                    ("Mobile", owner.mobile),
                    ("Gender", owner.gender),
                    ("Address", owner.address),
                    ("Village", owner.village),
                    ("District", owner.district),
                    ("State", owner.state),
                    ("Pincode", owner.pincode),
                    (owner.id_type or "ID", owner.id_number),
                    ("Category", owner.caste_category),
                ],
            )
        )
        for index, animal in enumerate(registration.animals, start=1):
            elements.extend(self.create_animal_section(index, animal))
        return self.generate_pdf(elements)

    def generate_pdf(self, elements: list) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer, pagesize=A4, rightMargin=72, leftMargin=72, topMargin=72, bottomMargin=18
        )
        doc.build(elements)
        pdf_data = buffer.getvalue()
        buffer.close()
        return pdf_data
