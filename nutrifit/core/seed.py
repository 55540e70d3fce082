from datetime import datetime, timedelta

from nutrifit.schemas.document import FitnessDocument
from nutrifit.schemas.profile import UserProfile


def build_demo_document(now: datetime) -> FitnessDocument:
    """Demonstration dataset written on the first access to an empty store."""
    today = now.date()
    day = timedelta(days=1)

    return FitnessDocument.model_validate({
        "user": {
            "id": "user_1",
            "name": "Demo Athlete",
            "email": "demo@nutrifit.app",
            "age": 22,
            "gender": "male",
            "height": 175,
            "weight": 73.5,
            "target_weight": 70,
            "activity_level": "moderately_active",
            "fitness_goals": ["weight_loss", "muscle_gain", "endurance"],
            "daily_calorie_target": 2200,
            "daily_water_target": 8,
            "join_date": now,
            "preferences": {"units": "metric", "theme": "light", "notifications": True},
        },
        "workouts": [
            {
                "id": "w1",
                "title": "Upper Body Strength",
                "date": now - day,
                "type": "strength",
                "duration": 60,
                "exercises": [
                    {"name": "Push-ups", "sets": 3, "reps": 12, "weight": 0},
                    {"name": "Pull-ups", "sets": 3, "reps": 8, "weight": 0},
                    {"name": "Bench Press", "sets": 4, "reps": 10, "weight": 60},
                ],
                "calories_burned": 320,
                "notes": "Great session, felt strong",
            },
            {
                "id": "w2",
                "title": "Cardio Run",
                "date": now - 2 * day,
                "type": "cardio",
                "duration": 30,
                "exercises": [
                    {"name": "Running", "duration": 30, "distance": 5, "pace": "6:00"},
                ],
                "calories_burned": 250,
                "notes": "Good pace maintained",
            },
            {
                "id": "w3",
                "title": "Lower Body Strength",
                "date": now - 3 * day,
                "type": "strength",
                "duration": 55,
                "exercises": [
                    {"name": "Squats", "sets": 4, "reps": 12, "weight": 80},
                    {"name": "Deadlifts", "sets": 3, "reps": 8, "weight": 100},
                    {"name": "Lunges", "sets": 3, "reps": 10, "weight": 20},
                ],
                "calories_burned": 310,
                "notes": "Legs feeling strong",
            },
        ],
        "nutrition": [
            {
                "id": "n1",
                "date": today,
                "meals": [
                    {"type": "breakfast", "foods": [
                        {"name": "Oatmeal", "calories": 150, "protein": 5, "carbs": 27, "fats": 3},
                        {"name": "Banana", "calories": 105, "protein": 1, "carbs": 27, "fats": 0},
                        {"name": "Milk", "calories": 80, "protein": 8, "carbs": 12, "fats": 2},
                    ]},
                    {"type": "lunch", "foods": [
                        {"name": "Chicken Breast", "calories": 231, "protein": 43, "carbs": 0, "fats": 5},
                        {"name": "Rice", "calories": 205, "protein": 4, "carbs": 45, "fats": 0},
                        {"name": "Vegetables", "calories": 50, "protein": 2, "carbs": 10, "fats": 0},
                    ]},
                    {"type": "dinner", "foods": [
                        {"name": "Salmon", "calories": 206, "protein": 22, "carbs": 0, "fats": 12},
                        {"name": "Sweet Potato", "calories": 112, "protein": 2, "carbs": 26, "fats": 0},
                        {"name": "Broccoli", "calories": 25, "protein": 3, "carbs": 5, "fats": 0},
                    ]},
                ],
                "water_intake": 6,
            }
        ],
        "health_metrics": [
            {
                "id": "hm1",
                "date": today,
                "weight": 73.5,
                "steps": 8500,
                "heart_rate": {"resting": 65, "max": 185},
                "sleep": {"hours": 7.5, "quality": "good"},
                "mood": "good",
                "energy": 8,
            },
            {
                "id": "hm2",
                "date": today - day,
                "weight": 73.7,
                "steps": 10200,
                "heart_rate": {"resting": 62, "max": 180},
                "sleep": {"hours": 8, "quality": "excellent"},
                "mood": "excellent",
                "energy": 9,
            },
        ],
        "goals": [
            {
                "id": "g1",
                "title": "Lose 3.5kg",
                "type": "weight_loss",
                "target_value": 70,
                "current_value": 73.5,
                "start_value": 73.5,
                "unit": "kg",
                "deadline": now + 90 * day,
            },
            {
                "id": "g2",
                "title": "Run 5K under 25 minutes",
                "type": "performance",
                "target_value": 25,
                "current_value": 30,
                "start_value": 32,
                "unit": "minutes",
                "deadline": now + 60 * day,
            },
            {
                "id": "g3",
                "title": "Workout 4 times per week",
                "type": "consistency",
                "target_value": 16,
                "current_value": 12,
                "unit": "workouts",
                "deadline": now + 30 * day,
            },
        ],
        "achievements": [
            {
                "id": "a1",
                "title": "First Workout",
                "description": "Complete your first workout session",
                "icon": "🏋️",
                "earned": True,
                "earned_date": now - 7 * day,
            },
            {
                "id": "a2",
                "title": "Consistency King",
                "description": "Work out 5 days in a row",
                "icon": "👑",
                "earned": True,
                "earned_date": now - 3 * day,
            },
            {
                "id": "a3",
                "title": "Calorie Crusher",
                "description": "Burn 500+ calories in a single workout",
                "icon": "🔥",
                "earned": False,
                "target": 500,
                "progress": 320,
            },
        ],
        "streaks": {
            "workout": {"current": 5, "longest": 12},
            "nutrition": {"current": 3, "longest": 8},
            "water": {"current": 2, "longest": 15},
        },
    })


def build_user_document(user, now: datetime) -> FitnessDocument:
    """Demo dataset with the profile taken from a registered account."""
    document = build_demo_document(now)
    profile = document.user.model_copy(update={
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "age": user.age,
        "gender": user.gender,
        "height": user.height,
        "weight": user.weight,
        "target_weight": user.target_weight,
        "activity_level": user.activity_level or document.user.activity_level,
        "fitness_goals": list(user.fitness_goals or []),
        "daily_calorie_target": user.daily_calorie_target or document.user.daily_calorie_target,
        "daily_water_target": user.daily_water_target or document.user.daily_water_target,
        "join_date": user.created_at or now,
    })
    return document.model_copy(update={"user": UserProfile.model_validate(profile.model_dump())})
