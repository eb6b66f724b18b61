from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
MONTH_FORMAT: Final[str] = "%Y-%m"
DISPLAY_DATE_FORMAT: Final[str] = "%A, %B %d, %Y"

WORKOUT_LENGTH: Final[int] = 7
MEAL_SLOTS: Final[tuple] = ("breakfast", "lunch", "dinner")

DEFAULT_RETENTION_DAYS: Final[int] = 30
MONTHLY_RETENTION_MONTHS: Final[int] = 6
DEFAULT_OPENAI_MODEL: Final[str] = "gpt-4o-mini"

NO_CACHE_HEADERS: Final[dict[str, str]] = {
    "Cache-Control": "no-cache, no-store, must-revalidate, max-age=0, s-maxage=0",
    "Pragma": "no-cache",
    "Expires": "0",
}

QUOTE_PROMPT_TEMPLATE: Final[str] = (
    """
    You are a wellness expert creating daily inspirational quotes.
    Create an inspiring quote about health, wellness, fitness or personal growth
    for {weekday}, {date}. It may be a famous quote or an original one.

    Return ONLY valid JSON in this exact format, no other text:
    """
)
QUOTE_JSON_FORMAT: Final[str] = (
    """
{
    "text": str,
    "author": str (use "Unknown" if original)
}
    """
)

WORKOUT_PROMPT_TEMPLATE: Final[str] = (
    """
    You are a fitness coach. Create a bodyweight workout for {period} with exactly 7
    varied exercises (mix of cardio, strength, flexibility and core work) suitable
    for general fitness levels and for repeating daily.

    Return ONLY valid JSON in this exact format, no other text:
    """
)
WORKOUT_JSON_FORMAT: Final[str] = (
    """
{
    "workout": [
      {
        "name": str,
        "description": str,
        "duration": str,
        "sets": str (optional),
        "reps": str (optional)
      }
    ]
}
    """
)

MEALS_PROMPT_TEMPLATE: Final[str] = (
    """
    You are a nutritionist. Create 3 balanced, realistic meals (breakfast, lunch,
    dinner) for {period}, focusing on whole foods and seasonal ingredients.

    Return ONLY valid JSON in this exact format, no other text:
    """
)
MEAL_JSON_FORMAT: Final[str] = (
    """
{
    "breakfast": {
      "name": str,
      "description": str,
      "calories": int,
      "ingredients": [str, str],
      "instructions": [str, str]
    },
    "lunch": { same format },
    "dinner": { same format }
}
    """
)
