"""
Rule-based fitness coach.

Answers come from a fixed table picked by keyword matching; workout and
nutrition plans are canned templates keyed by the user's fitness goal.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Union

from nutrifit.schemas.ai import (
    ChatMessage,
    CoachAnswer,
    GeneratedNutritionPlan,
    GeneratedWorkoutPlan,
    QuestionCategory,
)

logger = logging.getLogger(__name__)

# checked in order, first match wins
CATEGORY_KEYWORDS = (
    (QuestionCategory.workout, ("workout", "exercise")),
    (QuestionCategory.nutrition, ("food", "nutrition", "diet")),
    (QuestionCategory.weight, ("weight", "lose", "gain")),
)

RESPONSES = {
    QuestionCategory.workout: {
        "answer": (
            "Based on your fitness goal, I recommend a balanced approach. Start with 3-4 workouts "
            "per week, focusing on both strength training and cardio. Remember, consistency is more "
            "important than intensity when starting out."
        ),
        "tips": [
            "Start with bodyweight exercises if you're a beginner",
            "Always warm up for 5-10 minutes before exercising",
            "Focus on proper form rather than heavy weights",
            "Rest for 48 hours between intense sessions",
        ],
    },
    QuestionCategory.nutrition: {
        "answer": (
            "Nutrition plays a crucial role in achieving your fitness goals. Focus on whole foods, "
            "adequate protein intake, and staying hydrated. The key is creating sustainable eating "
            "habits rather than restrictive diets."
        ),
        "tips": [
            "Aim for 0.8-1g protein per kg of body weight",
            "Include vegetables in every meal",
            "Drink at least 8 glasses of water daily",
            "Eat smaller, frequent meals throughout the day",
        ],
    },
    QuestionCategory.weight: {
        "answer": (
            "Weight management is about creating a sustainable caloric balance. For weight loss, aim "
            "for a moderate deficit of 300-500 calories per day. For weight gain, focus on "
            "nutrient-dense foods and strength training."
        ),
        "tips": [
            "Track your progress with measurements, not just the scale",
            "Be patient - healthy weight change is 0.5-1kg per week",
            "Don't skip meals, it can slow your metabolism",
            "Focus on building muscle while managing weight",
        ],
    },
    QuestionCategory.default: {
        "answer": (
            "I'm here to help you with your fitness journey! Whether you need workout advice, "
            "nutrition guidance, or motivation, I'll provide personalized recommendations based on "
            "your goals and current fitness level."
        ),
        "tips": [
            "Set realistic and achievable goals",
            "Track your progress regularly",
            "Listen to your body and rest when needed",
            "Celebrate small victories along the way",
        ],
    },
}

WORKOUT_PLANS = {
    "lose_weight": {
        "name": "Fat Burning Circuit",
        "duration": 35,
        "exercises": [
            {"name": "Jumping Jacks", "sets": 3, "reps": 20, "rest_time": "30s"},
            {"name": "Burpees", "sets": 3, "reps": 8, "rest_time": "45s"},
            {"name": "Mountain Climbers", "sets": 3, "reps": 15, "rest_time": "30s"},
            {"name": "Squat Jumps", "sets": 3, "reps": 12, "rest_time": "45s"},
            {"name": "Push-ups", "sets": 3, "reps": 10, "rest_time": "30s"},
        ],
        "calories_burn": 320,
        "difficulty": "Intermediate",
    },
    "gain_weight": {
        "name": "Muscle Building Strength",
        "duration": 50,
        "exercises": [
            {"name": "Push-ups", "sets": 4, "reps": 12, "rest_time": "90s"},
            {"name": "Squats", "sets": 4, "reps": 15, "rest_time": "90s"},
            {"name": "Lunges", "sets": 3, "reps": 10, "rest_time": "60s"},
            {"name": "Plank", "sets": 3, "duration": "45s", "rest_time": "60s"},
            {"name": "Pull-ups", "sets": 3, "reps": 8, "rest_time": "90s"},
        ],
        "calories_burn": 280,
        "difficulty": "Intermediate",
    },
    "default": {
        "name": "Full Body Fitness",
        "duration": 40,
        "exercises": [
            {"name": "Push-ups", "sets": 3, "reps": 12, "rest_time": "60s"},
            {"name": "Squats", "sets": 3, "reps": 15, "rest_time": "60s"},
            {"name": "Planks", "sets": 3, "duration": "30s", "rest_time": "45s"},
            {"name": "Jumping Jacks", "sets": 3, "reps": 20, "rest_time": "30s"},
        ],
        "calories_burn": 250,
        "difficulty": "Beginner",
    },
}

NUTRITION_PLANS = {
    "lose_weight": {
        "daily_calories": 1800,
        "macros": {"protein": 130, "carbs": 180, "fats": 60},
        "meals": [
            {"name": "Breakfast", "calories": 350, "items": ["Greek yogurt with berries", "Almonds", "Green tea"]},
            {"name": "Lunch", "calories": 450, "items": ["Grilled chicken salad", "Quinoa", "Olive oil dressing"]},
            {"name": "Snack", "calories": 200, "items": ["Apple with peanut butter"]},
            {"name": "Dinner", "calories": 500, "items": ["Baked salmon", "Steamed broccoli", "Sweet potato"]},
            {"name": "Evening", "calories": 300, "items": ["Protein smoothie"]},
        ],
    },
    "gain_weight": {
        "daily_calories": 2800,
        "macros": {"protein": 200, "carbs": 350, "fats": 100},
        "meals": [
            {"name": "Breakfast", "calories": 600, "items": ["Oatmeal with banana", "Protein powder", "Nuts"]},
            {"name": "Lunch", "calories": 700, "items": ["Chicken breast", "Brown rice", "Avocado"]},
            {"name": "Snack", "calories": 400, "items": ["Trail mix", "Greek yogurt"]},
            {"name": "Dinner", "calories": 650, "items": ["Lean beef", "Quinoa", "Vegetables"]},
            {"name": "Evening", "calories": 450, "items": ["Casein protein shake", "Banana"]},
        ],
    },
}

# profile goal tags -> plan keys
GOAL_ALIASES = {
    "lose_weight": "lose_weight",
    "weight_loss": "lose_weight",
    "gain_weight": "gain_weight",
    "weight_gain": "gain_weight",
    "muscle_gain": "gain_weight",
    "build_muscle": "gain_weight",
}


def classify_question(question: str) -> QuestionCategory:
    text = question.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return QuestionCategory.default


def resolve_goal(goals: Union[None, str, Iterable[str]]) -> Optional[str]:
    """First goal tag that has a plan, accepting one tag or a list of them."""
    if goals is None:
        return None
    if isinstance(goals, str):
        goals = [goals]
    for goal in goals:
        if goal in GOAL_ALIASES:
            return GOAL_ALIASES[goal]
    return None


class AICoach:
    def __init__(self, clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self.clock = clock
        self._history: Dict[str, List[ChatMessage]] = {}

    def ask(self, question: str, user_id: str = "anonymous") -> CoachAnswer:
        category = classify_question(question)
        response = CoachAnswer(category=category, **RESPONSES[category])

        now = self.clock()
        history = self._history.setdefault(str(user_id), [])
        last_id = history[-1].id if history else 0
        history.append(ChatMessage(
            id=max(int(now.timestamp() * 1000), last_id + 1),
            question=question,
            response=response,
            timestamp=now,
        ))
        logger.debug(f"Coach answered a {category.value} question for {user_id}")
        return response

    def history(self, user_id: str = "anonymous") -> List[ChatMessage]:
        return list(self._history.get(str(user_id), []))

    def clear_history(self, user_id: str = "anonymous") -> None:
        self._history.pop(str(user_id), None)

    def generate_workout_plan(self, goals: Union[None, str, Iterable[str]] = None) -> GeneratedWorkoutPlan:
        plan = WORKOUT_PLANS.get(resolve_goal(goals), WORKOUT_PLANS["default"])
        return GeneratedWorkoutPlan.model_validate(plan)

    def generate_nutrition_plan(self, goals: Union[None, str, Iterable[str]] = None) -> GeneratedNutritionPlan:
        plan = NUTRITION_PLANS.get(resolve_goal(goals), NUTRITION_PLANS["lose_weight"])
        return GeneratedNutritionPlan.model_validate(plan)


ai_coach = AICoach()
