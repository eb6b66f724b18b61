import unittest
from wellness.domain.Exercise import Exercise
from wellness.domain.Meal import Meal
from wellness.domain.Plan import DailyPlan
from wellness.domain.Quote import Quote
from wellness.tests.fakes import make_plan


class TestExercise(unittest.TestCase):

    def test_optional_fields_are_omitted(self):
        exercise = Exercise("Plank", "Hold a plank", "30 seconds")
        self.assertEqual(exercise.to_dict(), {"name": "Plank", "description": "Hold a plank", "duration": "30 seconds"})

    def test_from_dict_keeps_sets_and_reps_as_text(self):
        exercise = Exercise.from_dict({"name": "Squats", "duration": "1 minute", "sets": 3, "reps": "15", "extra": 1})
        self.assertEqual(exercise.sets, "3")
        self.assertEqual(exercise.reps, "15")
        self.assertNotIn("extra", exercise.to_dict())

    def test_empty_optional_fields_survive_round_trip(self):
        exercise = Exercise("Push-ups", "d", "", sets="", reps="")
        self.assertEqual(Exercise.from_dict(exercise.to_dict()), exercise)


class TestMeal(unittest.TestCase):

    def test_calories_become_int(self):
        meal = Meal.from_dict({"name": "Oats", "calories": "350", "ingredients": ["oats"], "instructions": ["cook"]})
        self.assertEqual(meal.calories, 350)

    def test_bad_calories_default_to_zero(self):
        self.assertEqual(Meal.from_dict({"name": "Oats", "calories": "lots"}).calories, 0)


class TestDailyPlan(unittest.TestCase):

    def test_all_meal_slots_always_present(self):
        plan = DailyPlan("2025-03-10", Quote("q", "a"), [], {"lunch": Meal("Salad", calories=300)})
        self.assertEqual(list(plan.to_dict()["meals"]), ["breakfast", "lunch", "dinner"])
        self.assertEqual(plan.lunch.name, "Salad")
        self.assertEqual(plan.breakfast.name, "")

    def test_dict_round_trip(self):
        plan = make_plan("2025-03-10")
        self.assertEqual(DailyPlan.from_dict(plan.to_dict()), plan)

    def test_with_date_copies_content(self):
        plan = make_plan("2025-03-10")
        moved = plan.with_date("2025-03-11")
        self.assertEqual(moved.date, "2025-03-11")
        self.assertEqual(moved.quote, plan.quote)
        self.assertEqual(plan.date, "2025-03-10")

    def test_total_calories(self):
        self.assertEqual(make_plan().total_calories(), 1500)


if __name__ == "__main__":
    unittest.main()
