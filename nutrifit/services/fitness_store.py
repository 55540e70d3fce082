"""
Local fitness store.

One JSON document per store holds the profile, workouts, nutrition days,
health snapshots, goals, achievements and streak counters. Every command
loads the whole document, changes it and writes it back; queries are
computed on demand from the stored collections.
"""
import logging
import math
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel

from nutrifit.core.errors import GoalStatusError
from nutrifit.repositories.document_repository import FitnessDocumentRepository, utc_now
from nutrifit.schemas.achievement import Achievement, Streaks
from nutrifit.schemas.dashboard import DashboardData, DashboardSummary
from nutrifit.schemas.document import FitnessDocument
from nutrifit.schemas.goal import Goal, GoalCreate, GoalStatus
from nutrifit.schemas.metrics import CurrentHealthMetrics, HealthMetric, HealthMetricCreate
from nutrifit.schemas.nutrition import NutritionEntry
from nutrifit.schemas.profile import UserProfile
from nutrifit.schemas.progress import (
    TIME_RANGE_DAYS,
    CaloriesProgress,
    ComprehensiveProgress,
    DailyProgress,
    ProgressMetric,
    ProgressPoint,
    SleepProgress,
    StepsProgress,
    TimeRange,
    WeightProgress,
    WorkoutProgress,
)
from nutrifit.schemas.workout import Workout, WorkoutCreate, WorkoutStats, WorkoutStreak
from nutrifit.services.nutrition import entry_to_dict, normalize_nutrition_entry
from nutrifit.services.storage import Storage

logger = logging.getLogger(__name__)

Patch = Union[Mapping[str, Any], BaseModel]

GOAL_STATUS_TRANSITIONS = {
    GoalStatus.active: {GoalStatus.paused, GoalStatus.completed, GoalStatus.cancelled},
    GoalStatus.paused: {GoalStatus.active, GoalStatus.completed, GoalStatus.cancelled},
    GoalStatus.completed: set(),
    GoalStatus.cancelled: set(),
}

STEPS_GOAL = 10000
ACTIVE_MINUTES_GOAL = 60
CALORIES_BURNED_GOAL = 500


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _patch_dict(patch: Patch) -> Dict[str, Any]:
    if isinstance(patch, BaseModel):
        return patch.model_dump(exclude_unset=True)
    return dict(patch)


def _find_index(items: Iterable[Any], item_id: str) -> Optional[int]:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None


class FitnessStore:
    def __init__(
            self,
            storage: Storage,
            key: Optional[str] = None,
            clock: Callable[[], datetime] = utc_now,
            seed: Optional[Callable[[datetime], FitnessDocument]] = None,
    ):
        options = {"seed": seed} if seed else {}
        self.repository = FitnessDocumentRepository(storage, key=key, clock=clock, **options)
        self.clock = clock
        self._last_id_ms = 0

    @property
    def key(self) -> str:
        return self.repository.key

    def _load(self) -> FitnessDocument:
        return self.repository.load()

    def _save(self, document: FitnessDocument) -> None:
        self.repository.save(document)

    def _today(self) -> date:
        return self.clock().date()

    def _new_id(self, prefix: str, existing: Iterable[Any]) -> str:
        """Timestamp ids, strictly increasing for this store and unique in the collection."""
        taken = {item.id for item in existing}
        millis = max(int(self.clock().timestamp() * 1000), self._last_id_ms + 1)
        while f"{prefix}{millis}" in taken:
            millis += 1
        self._last_id_ms = millis
        return f"{prefix}{millis}"

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_user(self) -> UserProfile:
        return self._load().user

    def update_user(self, patch: Patch) -> UserProfile:
        document = self._load()
        merged = {**document.user.model_dump(), **_patch_dict(patch), "id": document.user.id}
        document.user = UserProfile.model_validate(merged)
        self._save(document)
        return document.user

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    def get_workouts(self) -> List[Workout]:
        return self._load().workouts

    def add_workout(self, data: Union[WorkoutCreate, Mapping[str, Any]]) -> Workout:
        document = self._load()
        workout_in = data if isinstance(data, WorkoutCreate) else WorkoutCreate.model_validate(data)

        workout = Workout(
            **workout_in.model_dump(exclude={"date"}),
            id=self._new_id("w", document.workouts),
            date=workout_in.date or self.clock(),
        )
        document.workouts.insert(0, workout)
        self._save(document)
        return workout

    def update_workout(self, workout_id: str, patch: Patch) -> Optional[Workout]:
        document = self._load()
        index = _find_index(document.workouts, workout_id)
        if index is None:
            return None

        merged = {**document.workouts[index].model_dump(), **_patch_dict(patch), "id": workout_id}
        document.workouts[index] = Workout.model_validate(merged)
        self._save(document)
        return document.workouts[index]

    def delete_workout(self, workout_id: str) -> bool:
        document = self._load()
        index = _find_index(document.workouts, workout_id)
        if index is None:
            return False
        del document.workouts[index]
        self._save(document)
        return True

    # ------------------------------------------------------------------
    # Nutrition
    # ------------------------------------------------------------------

    def get_nutrition(self) -> List[NutritionEntry]:
        return self._load().nutrition

    def add_nutrition_entry(self, data: Union[NutritionEntry, Mapping[str, Any]]) -> NutritionEntry:
        document = self._load()
        entry = normalize_nutrition_entry(data, default_date=self._today())
        entry = entry.model_copy(update={"id": self._new_id("n", document.nutrition)})
        document.nutrition.insert(0, entry)
        self._save(document)
        return entry

    def update_nutrition_entry(self, entry_id: str, patch: Patch) -> Optional[NutritionEntry]:
        document = self._load()
        index = _find_index(document.nutrition, entry_id)
        if index is None:
            return None

        changes = _patch_dict(patch)
        merged = entry_to_dict(document.nutrition[index])
        # a patch in another stored shape replaces the canonical fields
        if any(key in changes for key in ("food_items", "foodItems")):
            merged.pop("meals", None)
        if any(key in changes for key in ("water", "waterIntake")):
            merged.pop("water_intake", None)
        merged.update(changes)
        merged["id"] = entry_id

        document.nutrition[index] = normalize_nutrition_entry(merged)
        self._save(document)
        return document.nutrition[index]

    # ------------------------------------------------------------------
    # Health metrics
    # ------------------------------------------------------------------

    def get_health_metrics(self) -> List[HealthMetric]:
        return self._load().health_metrics

    def add_health_metric(self, data: Union[HealthMetricCreate, Mapping[str, Any]]) -> HealthMetric:
        document = self._load()
        metric_in = data if isinstance(data, HealthMetricCreate) else HealthMetricCreate.model_validate(data)

        metric = HealthMetric(
            **metric_in.model_dump(exclude={"date"}),
            id=self._new_id("hm", document.health_metrics),
            date=metric_in.date or self._today(),
        )
        document.health_metrics.insert(0, metric)
        self._save(document)
        return metric

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def get_goals(self) -> List[Goal]:
        return self._load().goals

    def add_goal(self, data: Union[GoalCreate, Mapping[str, Any]]) -> Goal:
        document = self._load()
        goal_in = data if isinstance(data, GoalCreate) else GoalCreate.model_validate(data)

        goal = Goal(
            **goal_in.model_dump(),
            id=self._new_id("g", document.goals),
            status=GoalStatus.active,
        )
        document.goals.append(goal)
        self._save(document)
        return goal

    def update_goal(self, goal_id: str, patch: Patch) -> Optional[Goal]:
        document = self._load()
        index = _find_index(document.goals, goal_id)
        if index is None:
            return None

        changes = _patch_dict(patch)
        for derived in ("progress", "active", "status", "id"):
            changes.pop(derived, None)

        merged = {**document.goals[index].model_dump(), **changes}
        document.goals[index] = Goal.model_validate(merged)
        self._save(document)
        return document.goals[index]

    def set_goal_status(self, goal_id: str, status: Union[GoalStatus, str]) -> Optional[Goal]:
        document = self._load()
        index = _find_index(document.goals, goal_id)
        if index is None:
            return None

        goal = document.goals[index]
        requested = GoalStatus(status)
        if requested == goal.status:
            return goal
        if requested not in GOAL_STATUS_TRANSITIONS[goal.status]:
            raise GoalStatusError(goal.status.value, requested.value)

        document.goals[index] = goal.model_copy(update={"status": requested})
        self._save(document)
        return document.goals[index]

    def delete_goal(self, goal_id: str) -> bool:
        document = self._load()
        index = _find_index(document.goals, goal_id)
        if index is None:
            return False
        del document.goals[index]
        self._save(document)
        return True

    # ------------------------------------------------------------------
    # Achievements
    # ------------------------------------------------------------------

    def get_achievements(self) -> List[Achievement]:
        return self._load().achievements

    def _achievement_rules(self) -> Dict[str, Any]:
        """Achievement id -> (default threshold, measure over the document)."""
        return {
            "a1": (1, lambda document: len(document.workouts)),
            "a2": (5, lambda document: self._streak(document).current),
            "a3": (500, lambda document: max(
                (workout.calories_burned for workout in document.workouts), default=0,
            )),
        }

    def check_and_unlock_achievements(self) -> List[Achievement]:
        """Evaluate every rule, returning the achievements unlocked by this call."""
        document = self._load()
        now = self.clock()
        rules = self._achievement_rules()
        unlocked = []
        changed = False

        for index, achievement in enumerate(document.achievements):
            if achievement.earned or achievement.id not in rules:
                continue

            default_threshold, measure = rules[achievement.id]
            threshold = achievement.target if achievement.target is not None else default_threshold
            value = measure(document)

            update = {}
            if achievement.target is not None:
                progress = min(value, achievement.target)
                if progress != achievement.progress:
                    update["progress"] = progress
            if value >= threshold:
                update.update(earned=True, earned_date=now)

            if update:
                changed = True
                document.achievements[index] = achievement.model_copy(update=update)
                if update.get("earned"):
                    logger.info(f"Achievement unlocked: {achievement.title} ({achievement.id})")
                    unlocked.append(document.achievements[index])

        if changed:
            self._save(document)
        return unlocked

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _workout_stats(self, document: FitnessDocument, days: int) -> WorkoutStats:
        cutoff = self.clock() - timedelta(days=days)
        recent = [workout for workout in document.workouts if workout.date >= cutoff]
        if not recent:
            return WorkoutStats()

        total_duration = sum(workout.duration for workout in recent)
        total_calories = sum(workout.calories_burned for workout in recent)
        return WorkoutStats(
            count=len(recent),
            total_duration_minutes=total_duration,
            total_calories=total_calories,
            average_duration_minutes=round_half_up(total_duration / len(recent)),
            average_calories=round_half_up(total_calories / len(recent)),
            count_by_type=dict(Counter(workout.type.value for workout in recent)),
        )

    def get_workout_stats(self, days: int = 7) -> WorkoutStats:
        return self._workout_stats(self._load(), days)

    def _todays_nutrition(self, document: FitnessDocument) -> NutritionEntry:
        today = self._today()
        entries = [entry for entry in document.nutrition if entry.date == today]
        if not entries:
            return NutritionEntry(date=today)
        if len(entries) == 1:
            return entries[0]
        # one document per meal: fold the day together
        return NutritionEntry(
            id=entries[0].id,
            date=today,
            meals=[meal for entry in entries for meal in entry.meals],
            water_intake=sum(entry.water_intake for entry in entries),
        )

    def get_todays_nutrition(self) -> NutritionEntry:
        return self._todays_nutrition(self._load())

    def _todays_metrics(self, document: FitnessDocument) -> HealthMetric:
        today = self._today()
        for metric in document.health_metrics:
            if metric.date == today:
                return metric
        return HealthMetric(date=today)

    def get_todays_metrics(self) -> HealthMetric:
        return self._todays_metrics(self._load())

    def get_current_health_metrics(self) -> CurrentHealthMetrics:
        document = self._load()
        today = self._today()
        metrics = self._todays_metrics(document)
        todays_workouts = [workout for workout in document.workouts if workout.date.date() == today]

        return CurrentHealthMetrics(
            **metrics.model_dump(exclude={"weight"}),
            weight=metrics.weight if metrics.weight is not None else document.user.weight,
            steps_goal=STEPS_GOAL,
            active_minutes=sum(workout.duration for workout in todays_workouts),
            active_minutes_goal=ACTIVE_MINUTES_GOAL,
            calories_burned=sum(workout.calories_burned for workout in todays_workouts),
            calories_burned_goal=CALORIES_BURNED_GOAL,
            weight_goal=document.user.target_weight,
        )

    def _streak(self, document: FitnessDocument) -> WorkoutStreak:
        workout_days = {workout.date.date() for workout in document.workouts}

        day = self._today()
        if day not in workout_days:
            day -= timedelta(days=1)
        current = 0
        while day in workout_days:
            current += 1
            day -= timedelta(days=1)

        longest = 0
        for day in workout_days:
            if day - timedelta(days=1) in workout_days:
                continue
            length = 1
            while day + timedelta(days=length) in workout_days:
                length += 1
            longest = max(longest, length)

        return WorkoutStreak(current=current, longest=max(longest, current))

    def get_workout_streak(self) -> WorkoutStreak:
        return self._streak(self._load())

    def get_dashboard_data(self) -> DashboardData:
        document = self._load()
        user = document.user
        recent_workouts = sorted(document.workouts, key=lambda workout: workout.date, reverse=True)[:5]

        return DashboardData(
            user=user,
            workout_stats=self._workout_stats(document, 7),
            todays_nutrition=self._todays_nutrition(document),
            todays_metrics=self._todays_metrics(document),
            goals=[goal for goal in document.goals if goal.active],
            streaks=document.streaks,
            recent_workouts=recent_workouts,
            summary=DashboardSummary(
                total_workouts=len(document.workouts),
                total_calories_burned=sum(workout.calories_burned for workout in document.workouts),
                current_weight=user.weight,
                target_weight=user.target_weight,
                daily_calorie_target=user.daily_calorie_target,
                daily_water_target=user.daily_water_target,
            ),
        )

    def get_streaks(self) -> Streaks:
        return self._load().streaks

    def get_progress_data(
            self,
            metric: Union[ProgressMetric, str] = ProgressMetric.WEIGHT,
            days: int = 30,
    ) -> List[ProgressPoint]:
        """Ascending (date, value) series over the trailing window."""
        document = self._load()
        cutoff = (self.clock() - timedelta(days=days)).date()
        metric = getattr(metric, "value", metric)

        if metric == ProgressMetric.WEIGHT.value:
            points = [
                ProgressPoint(date=snapshot.date, value=snapshot.weight)
                for snapshot in document.health_metrics
                if snapshot.date >= cutoff and snapshot.weight is not None
            ]
        elif metric == ProgressMetric.STEPS.value:
            points = [
                ProgressPoint(date=snapshot.date, value=snapshot.steps)
                for snapshot in document.health_metrics
                if snapshot.date >= cutoff
            ]
        elif metric == ProgressMetric.WORKOUTS.value:
            per_day = Counter(workout.date.date() for workout in document.workouts)
            points = [
                ProgressPoint(date=day, value=count)
                for day, count in per_day.items()
                if day >= cutoff
            ]
        else:
            return []

        return sorted(points, key=lambda point: point.date)

    def get_comprehensive_progress_data(
            self,
            time_range: Union[TimeRange, str] = TimeRange.WEEKLY,
    ) -> ComprehensiveProgress:
        document = self._load()
        time_range = TimeRange(time_range)
        days = TIME_RANGE_DAYS[time_range]
        today = self._today()

        workouts_by_day: Dict[date, List[Workout]] = {}
        for workout in document.workouts:
            workouts_by_day.setdefault(workout.date.date(), []).append(workout)
        metrics_by_day: Dict[date, HealthMetric] = {}
        for snapshot in document.health_metrics:
            # newest-first collection: keep the first snapshot seen per day
            metrics_by_day.setdefault(snapshot.date, snapshot)

        daily = []
        for offset in range(days - 1, -1, -1):
            day = today - timedelta(days=offset)
            day_workouts = workouts_by_day.get(day, [])
            snapshot = metrics_by_day.get(day)
            daily.append(DailyProgress(
                date=day,
                workouts=len(day_workouts),
                calories=sum(workout.calories_burned for workout in day_workouts),
                weight=snapshot.weight if snapshot else None,
                steps=snapshot.steps if snapshot else 0,
                sleep=(snapshot.sleep.hours or 0) if snapshot else 0,
            ))

        weights = [point.weight for point in daily if point.weight is not None]
        current_weight = weights[-1] if weights else document.user.weight
        start_weight = weights[0] if weights else None
        change = None
        if current_weight is not None and start_weight is not None:
            change = round(current_weight - start_weight, 1)

        tracked_days = [point for point in daily if point.date in metrics_by_day]
        sleep_hours = [point.sleep for point in tracked_days if point.sleep]
        streak = self._streak(document)

        return ComprehensiveProgress(
            time_range=time_range,
            days=daily,
            weight=WeightProgress(
                current=current_weight,
                start=start_weight,
                goal=document.user.target_weight,
                change=change,
                data=[point.weight for point in daily],
            ),
            steps=StepsProgress(
                current=self._todays_metrics(document).steps,
                goal=STEPS_GOAL,
                average=round_half_up(sum(point.steps for point in tracked_days) / len(tracked_days))
                if tracked_days else 0,
                data=[point.steps for point in daily],
            ),
            workouts=WorkoutProgress(
                this_week=self._workout_stats(document, 7).count,
                streak=streak.current,
                best_streak=max(document.streaks.workout.longest, streak.longest),
                total=len(document.workouts),
                data=[point.workouts for point in daily],
            ),
            calories=CaloriesProgress(
                burned=sum(point.calories for point in daily),
                goal=CALORIES_BURNED_GOAL,
                data=[point.calories for point in daily],
            ),
            sleep=SleepProgress(
                average=round(sum(sleep_hours) / len(sleep_hours), 1) if sleep_hours else 0.0,
                data=[point.sleep for point in daily],
            ),
        )
