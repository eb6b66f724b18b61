import io
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    KeepTogether,
    ListFlowable,
    ListItem,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from wellness.utilities.constants import DATE_FORMAT, DISPLAY_DATE_FORMAT, MEAL_SLOTS

EMERALD = colors.HexColor("#10b981")
SLOT_COLORS = {
    "breakfast": colors.HexColor("#fb923c"),
    "lunch": colors.HexColor("#f59e0b"),
    "dinner": colors.HexColor("#a855f7"),
}


def _display_date(plan_date: str) -> str:
    try:
        return datetime.strptime(plan_date, DATE_FORMAT).strftime(DISPLAY_DATE_FORMAT)
    except ValueError:
        return plan_date


def _meal_section(slot, meal, styles):
    heading = ParagraphStyle("slot_" + slot, parent=styles["Heading3"], textColor=SLOT_COLORS[slot])
    ingredients = ListFlowable(
        [ListItem(Paragraph(escape(item), styles["BodyText"])) for item in meal.ingredients],
        bulletType="bullet", leftIndent=12,
    )
    instructions = ListFlowable(
        [ListItem(Paragraph(escape(step), styles["BodyText"])) for step in meal.instructions],
        bulletType="1", leftIndent=12,
    )
    return KeepTogether([
        Paragraph(f"{slot.capitalize()} - {escape(meal.name)}", heading),
        Paragraph(escape(meal.description), styles["BodyText"]),
        Paragraph(f"<b>{meal.calories} calories</b>", styles["BodyText"]),
        Spacer(1, 4),
        Paragraph("<b>Ingredients:</b>", styles["BodyText"]),
        ingredients,
        Spacer(1, 4),
        Paragraph("<b>Instructions:</b>", styles["BodyText"]),
        instructions,
        Spacer(1, 12),
    ])


def render_plan_pdf(plan):
    """Render the plan: quote, workout table, then one section per meal. Returns PDF bytes."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=15 * mm, leftMargin=15 * mm, topMargin=15 * mm, bottomMargin=15 * mm,
        title=f"Daily Wellness Plan {plan.date}",
    )

    styles = getSampleStyleSheet()
    title = ParagraphStyle("plan_title", parent=styles["Title"], textColor=EMERALD)
    section = ParagraphStyle("plan_section", parent=styles["Heading2"], textColor=EMERALD)
    quote_style = ParagraphStyle("plan_quote", parent=styles["Italic"], fontSize=13, leading=18, alignment=1)

    elements = [
        Paragraph("Daily Wellness Plan", title),
        Paragraph(_display_date(plan.date), styles["Normal"]),
        Spacer(1, 16),
        Paragraph("Quote of the Day", section),
        Paragraph(f"“{escape(plan.quote.text)}”", quote_style),
        Paragraph(f"— {escape(plan.quote.author)}", quote_style),
        Spacer(1, 16),
        Paragraph("Today's Workout", section),
    ]

    cell = styles["BodyText"]
    data = [["Exercise", "Description", "Duration", "Sets", "Reps"]]
    for exercise in plan.workout:
        data.append([
            Paragraph(escape(exercise.name), cell),
            Paragraph(escape(exercise.description), cell),
            exercise.duration or "-",
            exercise.sets or "-",
            Paragraph(escape(exercise.reps or "-"), cell),
        ])

    table = Table(data, repeatRows=1, colWidths=[35 * mm, 70 * mm, 28 * mm, 14 * mm, 33 * mm])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), EMERALD),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 11),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    elements.append(table)

    elements.append(PageBreak())
    elements.append(Paragraph("Today's Meals", section))
    for slot in MEAL_SLOTS:
        elements.append(_meal_section(slot, plan.meals[slot], styles))

    doc.build(elements)
    return buf.getvalue()
