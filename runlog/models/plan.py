# runlog/models/plan.py
from datetime import datetime
from runlog import db
from runlog.utils.calendario import iso_week_number


class TrainingPlan(db.Model):
    __tablename__ = "training_plans"

    id      = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date    = db.Column(db.Date, nullable=False, index=True)
    week    = db.Column(db.Integer, nullable=False)

    # Rollups: se recalculan cuando cambian las entradas o su estado
    total_distance     = db.Column(db.Float, default=0.0, nullable=False)
    completed_distance = db.Column(db.Float, default=0.0, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    entries = db.relationship(
        "PlanEntry", back_populates="plan", cascade="all, delete-orphan", order_by="PlanEntry.id"
    )
    user = db.relationship("User", back_populates="plans")

    __table_args__ = (
        db.CheckConstraint("week >= 1", name="ck_training_plans_week"),
    )

    def entry_for(self, workout_id, day=None):
        """Primera entrada que apunta a `workout_id` (y a `day`, si se indica)."""
        for e in self.entries:
            if e.workout_id == workout_id and (day is None or e.day == day):
                return e
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "week": self.week,
            "iso_week": iso_week_number(self.date),
            "total_distance": round(self.total_distance or 0, 3),
            "completed_distance": round(self.completed_distance or 0, 3),
            "entries": [e.to_dict() for e in self.entries],
        }

    def __repr__(self):
        return f"<TrainingPlan {self.id} {self.date} week={self.week}>"


class PlanEntry(db.Model):
    __tablename__ = "plan_entries"

    id         = db.Column(db.Integer, primary_key=True)
    plan_id    = db.Column(db.Integer, db.ForeignKey("training_plans.id", ondelete="CASCADE"), nullable=False)
    workout_id = db.Column(db.Integer, db.ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False)

    day      = db.Column(db.String(9), nullable=False)  # Monday..Sunday
    comments = db.Column(db.JSON, default=list, nullable=False)

    completed       = db.Column(db.Boolean, default=False, nullable=False)
    completed_at    = db.Column(db.DateTime, nullable=True)
    actual_distance = db.Column(db.Float, nullable=True)
    notes           = db.Column(db.Text, nullable=True)

    plan    = db.relationship("TrainingPlan", back_populates="entries")
    workout = db.relationship("Workout", back_populates="plan_entries")

    __table_args__ = (
        db.UniqueConstraint("plan_id", "day", name="uq_plan_entries_plan_day"),
    )

    def to_dict(self, with_workout: bool = True) -> dict:
        data = {
            "id": self.id,
            "day": self.day,
            "workout_id": self.workout_id,
            "comments": list(self.comments or []),
            "completed": bool(self.completed),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "actual_distance": self.actual_distance,
            "notes": self.notes,
        }
        if with_workout and self.workout is not None:
            data["workout"] = self.workout.to_dict()
        return data

    def __repr__(self):
        return f"<PlanEntry plan={self.plan_id} {self.day} workout={self.workout_id}>"
