"""Static content used whenever AI generation fails, per slot or for the whole plan."""
from datetime import datetime
from typing import Dict, List

from wellness.domain.Exercise import Exercise
from wellness.domain.Meal import Meal
from wellness.domain.Plan import DailyPlan
from wellness.domain.Quote import Quote
from wellness.utilities.constants import DATE_FORMAT

FALLBACK_QUOTES = [
    {"text": "The groundwork for all happiness is good health.", "author": "Leigh Hunt"},
    {"text": "Take care of your body. It's the only place you have to live.", "author": "Jim Rohn"},
    {"text": "A healthy outside starts from the inside.", "author": "Robert Urich"},
    {"text": "Health is not about the weight you lose, but about the life you gain.", "author": "Dr. Josh Axe"},
    {"text": "Your body can stand almost anything. It's your mind you have to convince.", "author": "Unknown"},
    {"text": "The first wealth is health.", "author": "Ralph Waldo Emerson"},
    {"text": "To keep the body in good health is a duty... otherwise we shall not be able to keep our mind strong and clear.", "author": "Buddha"},
]

FALLBACK_WORKOUT = [
    {"name": "Morning Stretch", "description": "Full body stretching routine to start your day", "duration": "10 minutes"},
    {"name": "Push-ups", "description": "Classic upper body strength exercise", "duration": "3 sets", "sets": "3", "reps": "10-15"},
    {"name": "Squats", "description": "Lower body strength and mobility", "duration": "3 sets", "sets": "3", "reps": "15-20"},
    {"name": "Plank", "description": "Core strengthening exercise", "duration": "3 sets", "sets": "3", "reps": "30-60 seconds"},
    {"name": "Jumping Jacks", "description": "Cardio warm-up exercise", "duration": "2 minutes"},
    {"name": "Lunges", "description": "Single leg strength and balance", "duration": "3 sets", "sets": "3", "reps": "10 each leg"},
    {"name": "Cool Down Walk", "description": "Gentle walking to cool down", "duration": "5 minutes"},
]

FALLBACK_MEALS = {
    "breakfast": {
        "name": "Protein Power Bowl",
        "description": "Nutritious start with protein and healthy fats",
        "calories": 450,
        "ingredients": [
            "2 eggs",
            "1/2 avocado",
            "1 slice whole grain toast",
            "1 cup spinach",
            "1 tbsp olive oil",
            "Salt and pepper to taste",
        ],
        "instructions": [
            "Heat olive oil in a pan over medium heat",
            "Sauté spinach until wilted",
            "Scramble eggs and add to pan",
            "Toast bread and top with sliced avocado",
            "Serve eggs over spinach with toast on the side",
        ],
    },
    "lunch": {
        "name": "Mediterranean Quinoa Salad",
        "description": "Fresh and filling Mediterranean-inspired salad",
        "calories": 520,
        "ingredients": [
            "1 cup cooked quinoa",
            "1/2 cucumber, diced",
            "1/2 cup cherry tomatoes",
            "1/4 cup red onion",
            "1/4 cup feta cheese",
            "2 tbsp olive oil",
            "1 tbsp lemon juice",
            "Fresh herbs (parsley, mint)",
        ],
        "instructions": [
            "Cook quinoa according to package instructions and let cool",
            "Dice cucumber, halve cherry tomatoes, and slice red onion",
            "Combine quinoa with vegetables and feta",
            "Whisk olive oil and lemon juice for dressing",
            "Toss salad with dressing and fresh herbs",
        ],
    },
    "dinner": {
        "name": "Grilled Salmon with Roasted Vegetables",
        "description": "Omega-3 rich salmon with colorful roasted vegetables",
        "calories": 580,
        "ingredients": [
            "6 oz salmon fillet",
            "1 cup broccoli florets",
            "1 bell pepper, sliced",
            "1/2 zucchini, sliced",
            "2 tbsp olive oil",
            "1 lemon",
            "Garlic powder",
            "Salt and pepper",
        ],
        "instructions": [
            "Preheat oven to 425°F",
            "Toss vegetables with 1 tbsp olive oil, salt, and pepper",
            "Roast vegetables for 20 minutes",
            "Season salmon with lemon, garlic powder, salt, and pepper",
            "Grill salmon for 4-5 minutes per side",
            "Serve salmon over roasted vegetables",
        ],
    },
}


def quote_index(plan_date: str) -> int:
    """Rotation index: day of year of plan_date modulo the number of quotes."""
    try:
        day_of_year = datetime.strptime(plan_date, DATE_FORMAT).timetuple().tm_yday
    except (TypeError, ValueError):
        day_of_year = datetime.now().timetuple().tm_yday
    return day_of_year % len(FALLBACK_QUOTES)


def fallback_quote(plan_date: str) -> Quote:
    return Quote.from_dict(FALLBACK_QUOTES[quote_index(plan_date)])


def fallback_workout() -> List[Exercise]:
    return [Exercise.from_dict(e) for e in FALLBACK_WORKOUT]


def fallback_meals() -> Dict[str, Meal]:
    return {slot: Meal.from_dict(meal) for slot, meal in FALLBACK_MEALS.items()}


def fallback_plan(plan_date: str) -> DailyPlan:
    """The complete static plan, carrying the requested date."""
    return DailyPlan(
        date=plan_date,
        quote=fallback_quote(plan_date),
        workout=fallback_workout(),
        meals=fallback_meals(),
    )
