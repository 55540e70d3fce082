from typing import Optional

# Goal types where success means bringing the value down
LOSS_GOAL_TYPES = {"weight_loss"}


def is_loss_goal(goal_type: str, target: float, start: Optional[float] = None) -> bool:
    if getattr(goal_type, "value", goal_type) in LOSS_GOAL_TYPES:
        return True
    return start is not None and target < start


def calculate_goal_progress(
        current: float,
        target: float,
        goal_type: str,
        start: Optional[float] = None,
) -> float:
    """Progress towards a goal in percent, clamped to 0-100."""
    if current is None or target is None:
        return 0.0

    if is_loss_goal(goal_type, target, start):
        if start is not None:
            total_change_needed = start - target
            current_progress = start - current
        else:
            # no baseline: reaching the target means current == target
            total_change_needed = current
            current_progress = target
    else:
        if start is not None:
            total_change_needed = target - start
            current_progress = current - start
        else:
            total_change_needed = target
            current_progress = current

    if total_change_needed <= 0:
        return 0.0

    progress = (current_progress / total_change_needed) * 100
    return round(max(0.0, min(100.0, progress)), 1)
