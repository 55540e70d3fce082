from typing import Dict, Iterable, Optional

from nutrifit.models.user import User


class NutritionCalculator:
    ACTIVITY_MULTIPLIERS = {
        "sedentary": 1.2,
        "lightly_active": 1.375,
        "moderately_active": 1.55,
        "very_active": 1.725,
        "extremely_active": 1.9,
    }

    MACRO_RATIOS = {
        "weight_loss": {"protein": 0.35, "carbs": 0.40, "fats": 0.25},
        "maintenance": {"protein": 0.30, "carbs": 0.40, "fats": 0.30},
        "muscle_gain": {"protein": 0.35, "carbs": 0.45, "fats": 0.20},
    }

    # daily adjustment applied on top of TDEE for the user's primary goal
    GOAL_ADJUSTMENTS = {
        "weight_loss": -500,
        "weight_gain": 300,
        "muscle_gain": 300,
    }

    DEFAULT_CALORIE_TARGET = 2000

    @classmethod
    def calculate_bmi(cls, weight: float, height: float) -> float:
        if not weight or not height:
            return 0.0
        height_m = height / 100
        return round(weight / (height_m * height_m), 1)

    @classmethod
    def calculate_bmr(cls, weight: float, height: float, age: int, gender: str) -> int:
        """Harris-Benedict (revised)."""
        gender = getattr(gender, "value", gender)
        if gender == "male":
            bmr = 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
        else:
            bmr = 447.593 + 9.247 * weight + 3.098 * height - 4.330 * age
        return round(bmr)

    @classmethod
    def calculate_tdee(cls, bmr: float, activity_level: str) -> float:
        activity_level = getattr(activity_level, "value", activity_level)
        multiplier = cls.ACTIVITY_MULTIPLIERS.get(activity_level, 1.55)
        return bmr * multiplier

    @classmethod
    def calculate_macros(cls, calories: int, goal: str = "maintenance") -> Dict[str, int]:
        ratios = cls.MACRO_RATIOS.get(goal, cls.MACRO_RATIOS["maintenance"])

        protein_g = int((calories * ratios["protein"]) / 4)
        carbs_g = int((calories * ratios["carbs"]) / 4)
        fats_g = int((calories * ratios["fats"]) / 9)

        return {
            "protein": protein_g,
            "carbs": carbs_g,
            "fats": fats_g,
        }

    @classmethod
    def primary_goal(cls, fitness_goals: Optional[Iterable[str]]) -> Optional[str]:
        for goal in fitness_goals or []:
            if goal in cls.GOAL_ADJUSTMENTS:
                return goal
        return None

    @classmethod
    def calculate_daily_calorie_target(
            cls,
            weight: float,
            height: float,
            age: int,
            gender: str,
            activity_level: str,
            fitness_goals: Optional[Iterable[str]] = None,
    ) -> int:
        bmr = cls.calculate_bmr(weight, height, age, gender)
        target = round(cls.calculate_tdee(bmr, activity_level))
        goal = cls.primary_goal(fitness_goals)
        if goal:
            target += cls.GOAL_ADJUSTMENTS[goal]
        return target

    @classmethod
    def apply_body_metrics(cls, user: User) -> User:
        """Refresh BMI, BMR and the calorie target from the user's measurements."""
        if user.height and user.weight:
            user.bmi = cls.calculate_bmi(user.weight, user.height)

        if all([user.weight, user.height, user.age, user.gender]):
            user.bmr = cls.calculate_bmr(user.weight, user.height, user.age, user.gender)
            user.daily_calorie_target = cls.calculate_daily_calorie_target(
                weight=user.weight,
                height=user.height,
                age=user.age,
                gender=user.gender,
                activity_level=user.activity_level or "moderately_active",
                fitness_goals=user.fitness_goals,
            )
        return user

    @classmethod
    def get_user_calorie_needs(cls, user: User) -> int:
        if user.daily_calorie_target and user.daily_calorie_target > 0:
            return user.daily_calorie_target
        return cls.DEFAULT_CALORIE_TARGET
