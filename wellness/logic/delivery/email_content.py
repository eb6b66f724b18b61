from datetime import datetime

from jinja2 import Environment, FileSystemLoader, select_autoescape

from wellness.utilities.config import TEMPLATES_DIR
from wellness.utilities.constants import DATE_FORMAT, DISPLAY_DATE_FORMAT

PREVIEW_EXERCISES = 3

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def display_date(plan_date: str) -> str:
    try:
        return datetime.strptime(plan_date, DATE_FORMAT).strftime(DISPLAY_DATE_FORMAT)
    except ValueError:
        return plan_date


def email_subject(plan) -> str:
    return f"Your Daily Wellness Plan - {display_date(plan.date)}"


def pdf_filename(plan) -> str:
    return f"wellness-plan-{plan.date}.pdf"


def render_email_html(plan) -> str:
    """Summary email: quote, first few exercises and the three meals; details live in the PDF."""
    template = _env.get_template("email.html")
    return template.render(
        plan=plan,
        display_date=display_date(plan.date),
        preview=plan.workout[:PREVIEW_EXERCISES],
        remaining=max(len(plan.workout) - PREVIEW_EXERCISES, 0),
    )
