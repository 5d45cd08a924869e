# runlog/services/plan_rollups.py
"""
Totales cacheados de los planes (total_distance / completed_distance).

Se recalculan cuando cambian las entradas del plan o cuando cambia o
desaparece un workout al que apuntan.
"""
from typing import Iterable, Set

from runlog import db
from runlog.models.plan import TrainingPlan
from runlog.models.workout import Workout
from runlog.services.training_aggregator import recompute_completed_distance, recompute_plan_total


def workout_resolver(user_id: int):
    """Solo resuelve workouts del dueño del plan."""
    def resolve(workout_id):
        w = db.session.get(Workout, workout_id)
        if w is None or w.user_id != user_id:
            return None
        return w
    return resolve


def refresh_plan(plan: TrainingPlan) -> bool:
    """Recalcula los dos totales. Devuelve True si alguno cambió."""
    total = recompute_plan_total(plan.entries, workout_resolver(plan.user_id))
    completed = recompute_completed_distance(plan.entries)
    changed = (plan.total_distance, plan.completed_distance) != (total, completed)
    plan.total_distance = total
    plan.completed_distance = completed
    return changed


def plans_using(workout: Workout) -> Set[TrainingPlan]:
    return {e.plan for e in workout.plan_entries}


def refresh_plans(plans: Iterable[TrainingPlan]) -> int:
    return sum(1 for plan in plans if refresh_plan(plan))


def delete_workout_and_refresh(workout: Workout) -> Set[TrainingPlan]:
    """
    Borra el workout (sus entradas caen por cascada) y recalcula los planes
    que lo usaban. Devuelve esos planes.
    """
    plans = plans_using(workout)
    db.session.delete(workout)
    db.session.flush()
    for plan in plans:
        # la colección en memoria aún tiene las entradas borradas
        db.session.expire(plan, ["entries"])
        refresh_plan(plan)
    return plans
