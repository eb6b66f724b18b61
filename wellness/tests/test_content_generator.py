import pytest

from wellness.domain.Exercise import Exercise
from wellness.domain.errors import GenerationError
from wellness.infra.Monthly_Repository import MonthlyPlanRepository
from wellness.logic.generation import fallback
from wellness.logic.generation.content_generator import ContentGenerator
from wellness.tests.fakes import FakeOpenAI, TODAY_KEY


def test_generates_full_plan_from_three_calls():
    client = FakeOpenAI()
    plan = ContentGenerator(client=client).generate(TODAY_KEY)

    assert plan.date == TODAY_KEY
    assert plan.quote.text == "Small steps every day."
    assert len(plan.workout) == 7
    assert plan.dinner.name == "Dinner Bowl"
    assert sorted(client.responses.calls) == ["meals", "quote", "workout"]


def test_missing_client_raises():
    with pytest.raises(GenerationError):
        ContentGenerator(client=None).generate(TODAY_KEY)


def test_all_slots_failing_raises():
    client = FakeOpenAI(quote=RuntimeError("timeout"), workout="not json", meals="{}")
    with pytest.raises(GenerationError):
        ContentGenerator(client=client).generate(TODAY_KEY)


def test_failed_slot_uses_static_content():
    client = FakeOpenAI(quote=RuntimeError("rate limited"))
    plan = ContentGenerator(client=client).generate(TODAY_KEY)

    assert plan.quote == fallback.fallback_quote(TODAY_KEY)
    assert plan.workout[0].name == "Exercise 1"


def test_invalid_workout_uses_static_workout():
    client = FakeOpenAI(workout='{"workout": []}')
    plan = ContentGenerator(client=client).generate(TODAY_KEY)

    assert [e.name for e in plan.workout] == [e.name for e in fallback.fallback_workout()]
    assert plan.breakfast.name == "Breakfast Bowl"


def test_monthly_store_reuses_workout_and_meals(tmp_path):
    monthly = MonthlyPlanRepository(tmp_path / "monthly.json")
    client = FakeOpenAI()
    generator = ContentGenerator(client=client, monthly_store=monthly)

    first = generator.generate("2025-03-10")
    second = generator.generate("2025-03-11")

    assert monthly.exists("2025-03")
    assert second.workout == first.workout
    # second day only needs a fresh quote
    assert client.responses.calls.count("workout") == 1
    assert client.responses.calls.count("quote") == 2


def test_generate_month_requires_store():
    with pytest.raises(GenerationError):
        ContentGenerator(client=FakeOpenAI()).generate_month("2025-04")


def test_generate_month_saves(tmp_path):
    monthly = MonthlyPlanRepository(tmp_path / "monthly.json")
    workout, meals = ContentGenerator(client=FakeOpenAI(), monthly_store=monthly).generate_month("2025-04")

    assert len(workout) == 7
    cached_workout, cached_meals = monthly.get("2025-04")
    assert cached_workout == workout
    assert cached_meals["lunch"] == meals["lunch"]


def test_cached_month_survives_quote_failure(tmp_path):
    monthly = MonthlyPlanRepository(tmp_path / "monthly.json")
    ContentGenerator(client=FakeOpenAI(), monthly_store=monthly).generate_month("2025-03")

    client = FakeOpenAI(quote=RuntimeError("rate limited"))
    plan = ContentGenerator(client=client, monthly_store=monthly).generate(TODAY_KEY)

    assert plan.quote == fallback.fallback_quote(TODAY_KEY)
    assert plan.workout[0].name == "Exercise 1"
    assert plan.lunch.name == "Lunch Bowl"
    assert client.responses.calls == ["quote"]


def test_invalid_cached_month_is_regenerated(tmp_path):
    monthly = MonthlyPlanRepository(tmp_path / "monthly.json")
    short = [Exercise(f"Old {i}", "d", "1 minute") for i in range(3)]
    monthly.save("2025-03", short, fallback.fallback_meals())
    client = FakeOpenAI()

    plan = ContentGenerator(client=client, monthly_store=monthly).generate(TODAY_KEY)

    assert len(plan.workout) == 7
    assert plan.workout[0].name == "Exercise 1"
    assert client.responses.calls.count("workout") == 1
    workout, _ = monthly.get("2025-03")
    assert len(workout) == 7
