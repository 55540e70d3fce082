"""
Integration tests for the fitness endpoints.

Covered scenarios:
- per-user documents seeded from the account profile
- /workouts: list, log (with achievement unlock), get, update, delete, stats, streak
- /nutrition: any-shape entries, today's totals, food search and calculator
- /metrics: record, today, current
- /goals: create, update, status transitions (409 on terminal goals), delete
- /progress: series, comprehensive view, streaks, achievements
- /dashboard
- /ai: questions, history, plans
- missing token on a fitness endpoint

Strategy: get_current_user -> user_fixture, get_storage -> InMemoryStorage,
both via conftest.user_client.
"""

import pytest

from nutrifit.core.config import settings

pytestmark = pytest.mark.integration


# ---------------------------------------------------------------------------
# Document per user
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_dashboard_uses_account_profile(user_client, storage):
    """The first request seeds a document under the user's own key."""
    response = await user_client.get("/api/v1/dashboard")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["id"] == "1"
    assert data["user"]["name"] == "Test User"
    assert data["summary"]["total_workouts"] == 3
    assert data["summary"]["daily_calorie_target"] == 2374
    assert storage.get_item(f"{settings.FITNESS_DATA_KEY}:1") is not None


@pytest.mark.asyncio
async def test_fitness_endpoint_requires_token(client):
    response = await client.get("/api/v1/dashboard")

    assert response.status_code == 401
    assert response.json()["message"] == "Access token is required"


# ---------------------------------------------------------------------------
# /workouts
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_workouts(user_client):
    response = await user_client.get("/api/v1/workouts")

    assert response.status_code == 200
    assert [w["id"] for w in response.json()["data"]] == ["w1", "w2", "w3"]


@pytest.mark.asyncio
async def test_log_workout_unlocks_achievement(user_client):
    """A 550 kcal workout is stored first and unlocks Calorie Crusher."""
    response = await user_client.post("/api/v1/workouts", json={
        "title": "Evening Run",
        "type": "cardio",
        "duration": 30,
        "calories_burned": 550,
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["workout"]["title"] == "Evening Run"
    assert data["workout"]["id"].startswith("w")
    assert [a["id"] for a in data["unlocked_achievements"]] == ["a3"]

    listed = (await user_client.get("/api/v1/workouts")).json()["data"]
    assert listed[0]["id"] == data["workout"]["id"]


@pytest.mark.asyncio
async def test_log_workout_validation(user_client):
    response = await user_client.post("/api/v1/workouts", json={"title": "Bad", "duration": -5})

    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "duration"


@pytest.mark.asyncio
async def test_get_update_delete_workout(user_client):
    assert (await user_client.get("/api/v1/workouts/w1")).json()["data"]["title"] == "Upper Body Strength"

    updated = await user_client.put("/api/v1/workouts/w1", json={"duration": 70})
    assert updated.json()["data"]["duration"] == 70

    assert (await user_client.delete("/api/v1/workouts/w1")).status_code == 200
    missing = await user_client.delete("/api/v1/workouts/w1")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Workout not found"}


@pytest.mark.asyncio
async def test_update_missing_workout_returns_404(user_client):
    response = await user_client.put("/api/v1/workouts/nope", json={"duration": 1})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_workout_with_null_title_returns_400(user_client):
    """A patch that would leave the workout invalid is rejected and nothing changes."""
    response = await user_client.put("/api/v1/workouts/w1", json={"title": None})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid workout"}
    stored = (await user_client.get("/api/v1/workouts/w1")).json()["data"]
    assert stored["title"] == "Upper Body Strength"


@pytest.mark.asyncio
async def test_workout_stats_and_streak(user_client):
    stats = (await user_client.get("/api/v1/workouts/stats", params={"days": 7})).json()["data"]
    streak = (await user_client.get("/api/v1/workouts/streak")).json()["data"]

    assert stats["count"] == 3
    assert stats["total_calories"] == 880
    assert streak == {"current": 3, "longest": 3}


# ---------------------------------------------------------------------------
# /nutrition
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_single_meal_entry_and_read_today(user_client):
    """A single-meal payload adds to today's totals."""
    response = await user_client.post("/api/v1/nutrition", json={
        "meal_type": "snack",
        "food_items": [{"name": "Apple", "calories": 95, "carbs": 25}],
    })

    assert response.status_code == 201
    entry = response.json()["data"]
    assert entry["meals"][0]["type"] == "snack"
    assert entry["total_calories"] == 95

    today = (await user_client.get("/api/v1/nutrition/today")).json()["data"]
    assert today["total_calories"] == 1164 + 95


@pytest.mark.asyncio
async def test_add_malformed_entry_returns_400(user_client):
    response = await user_client.post("/api/v1/nutrition", json={"meals": "oops"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid nutrition entry"


@pytest.mark.asyncio
async def test_update_nutrition_entry(user_client):
    response = await user_client.put("/api/v1/nutrition/n1", json={"water_intake": 8})

    assert response.status_code == 200
    assert response.json()["data"]["water_intake"] == 8
    assert response.json()["data"]["total_calories"] == 1164

    missing = await user_client.put("/api/v1/nutrition/none", json={"water_intake": 1})
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_food_search_and_calculate(user_client):
    found = (await user_client.get("/api/v1/nutrition/foods/search", params={"q": "rice"})).json()["data"]
    assert {food["key"] for food in found} == {"brown rice", "white rice"}

    calculated = await user_client.post("/api/v1/nutrition/foods/calculate", json={
        "key": "banana", "quantity": 200,
    })
    assert calculated.json()["data"]["nutrition"]["calories"] == 178

    unknown = await user_client.post("/api/v1/nutrition/foods/calculate", json={"key": "kale", "quantity": 1})
    assert unknown.status_code == 404

    invalid = await user_client.post("/api/v1/nutrition/foods/calculate", json={"key": "banana", "quantity": 0})
    assert invalid.status_code == 400


@pytest.mark.asyncio
async def test_food_suggestions(user_client):
    lunch = await user_client.get("/api/v1/nutrition/foods/suggestions/lunch")
    assert len(lunch.json()["data"]) == 6

    brunch = await user_client.get("/api/v1/nutrition/foods/suggestions/brunch")
    assert brunch.status_code == 400


# ---------------------------------------------------------------------------
# /metrics
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_record_metric_becomes_today(user_client):
    created = await user_client.post("/api/v1/metrics", json={"weight": 72.9, "steps": 3000})
    assert created.status_code == 201

    today = (await user_client.get("/api/v1/metrics/today")).json()["data"]
    assert today["steps"] == 3000

    current = (await user_client.get("/api/v1/metrics/current")).json()["data"]
    assert current["weight"] == 72.9
    assert current["steps_goal"] == 10000
    assert current["weight_goal"] == 75


@pytest.mark.asyncio
async def test_record_metric_validation(user_client):
    response = await user_client.post("/api/v1/metrics", json={"energy": 11})
    assert response.status_code == 400


# ---------------------------------------------------------------------------
# /goals
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_goal_with_derived_progress(user_client):
    response = await user_client.post("/api/v1/goals", json={
        "title": "Sleep 8h", "type": "custom", "target_value": 8, "current_value": 6,
    })

    assert response.status_code == 201
    goal = response.json()["data"]
    assert goal["status"] == "active"
    assert goal["progress"] == 75.0


@pytest.mark.asyncio
async def test_update_goal_value(user_client):
    response = await user_client.put("/api/v1/goals/g1", json={"current_value": 71.75})

    assert response.json()["data"]["progress"] == 50.0


@pytest.mark.asyncio
async def test_update_goal_with_null_target_returns_400(user_client):
    response = await user_client.put("/api/v1/goals/g1", json={"target_value": None})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid goal"}
    goals = (await user_client.get("/api/v1/goals")).json()["data"]
    assert goals[0]["target_value"] == 70


@pytest.mark.asyncio
async def test_goal_status_transitions(user_client):
    """A completed goal cannot be reactivated."""
    done = await user_client.put("/api/v1/goals/g1/status", json={"status": "completed"})
    assert done.status_code == 200
    assert done.json()["data"]["active"] is False

    active = (await user_client.get("/api/v1/goals", params={"active_only": True})).json()["data"]
    assert [goal["id"] for goal in active] == ["g2", "g3"]

    again = await user_client.put("/api/v1/goals/g1/status", json={"status": "active"})
    assert again.status_code == 409
    assert again.json()["message"] == "Cannot change goal status from 'completed' to 'active'"


@pytest.mark.asyncio
async def test_goal_status_unknown_value(user_client):
    response = await user_client.put("/api/v1/goals/g1/status", json={"status": "done"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_delete_goal(user_client):
    assert (await user_client.delete("/api/v1/goals/g3")).status_code == 200
    assert (await user_client.delete("/api/v1/goals/g3")).status_code == 404
    assert (await user_client.put("/api/v1/goals/g3/status", json={"status": "paused"})).status_code == 404


# ---------------------------------------------------------------------------
# /progress
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_progress_series(user_client):
    weight = (await user_client.get("/api/v1/progress", params={"metric": "weight", "days": 30})).json()["data"]
    assert [point["value"] for point in weight] == [73.7, 73.5]

    unknown = (await user_client.get("/api/v1/progress", params={"metric": "mood"})).json()["data"]
    assert unknown == []


@pytest.mark.asyncio
async def test_comprehensive_progress(user_client):
    response = await user_client.get("/api/v1/progress/comprehensive", params={"time_range": "monthly"})

    data = response.json()["data"]
    assert data["time_range"] == "monthly"
    assert len(data["days"]) == 30
    assert data["workouts"]["total"] == 3

    invalid = await user_client.get("/api/v1/progress/comprehensive", params={"time_range": "daily"})
    assert invalid.status_code == 400


@pytest.mark.asyncio
async def test_achievements_and_streaks(user_client):
    achievements = (await user_client.get("/api/v1/progress/achievements")).json()["data"]
    assert [a["earned"] for a in achievements] == [True, True, False]

    check = (await user_client.post("/api/v1/progress/achievements/check")).json()
    assert check["message"] == "No new achievements"
    assert check["data"] == []

    streaks = (await user_client.get("/api/v1/progress/streaks")).json()["data"]
    assert streaks["workout"] == {"current": 5, "longest": 12}


# ---------------------------------------------------------------------------
# /ai
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_ask_coach_and_history(user_client):
    await user_client.delete("/api/v1/ai/history")

    answer = await user_client.post("/api/v1/ai/ask", json={"question": "Best workout for beginners?"})
    assert answer.json()["data"]["category"] == "workout"

    history = (await user_client.get("/api/v1/ai/history")).json()["data"]
    assert [message["question"] for message in history] == ["Best workout for beginners?"]


@pytest.mark.asyncio
async def test_ask_coach_empty_question(user_client):
    response = await user_client.post("/api/v1/ai/ask", json={"question": ""})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_plans_follow_profile_goals(user_client):
    """Without a goal in the body the profile's goals pick the plan."""
    workout = (await user_client.post("/api/v1/ai/workout-plan")).json()["data"]
    assert workout["name"] == "Fat Burning Circuit"

    gain = (await user_client.post("/api/v1/ai/workout-plan", json={"fitness_goal": "muscle_gain"})).json()["data"]
    assert gain["name"] == "Muscle Building Strength"

    nutrition = (await user_client.post("/api/v1/ai/nutrition-plan")).json()["data"]
    assert nutrition["daily_calories"] == 1800
