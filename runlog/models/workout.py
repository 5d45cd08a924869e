# runlog/models/workout.py
from datetime import datetime
from runlog import db
from runlog.services.workout_distance import workout_total_distance


class Workout(db.Model):
    __tablename__ = "workouts"

    id      = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    workout_name       = db.Column(db.String(120), nullable=False)
    estimated_duration = db.Column(db.Integer)                # minutos
    is_template        = db.Column(db.Boolean, default=False, nullable=False)

    # Esfuerzos (JSON):
    #   warm_up / cool_down: {time?, distance?: {value, unit}, pace?: {type, pace}}
    #   work: [{type: distance|time, distance?, time?, pace?, repetitions}]
    warm_up   = db.Column(db.JSON, nullable=True)
    work      = db.Column(db.JSON, default=list, nullable=False)
    cool_down = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    user = db.relationship("User", back_populates="workouts")
    plan_entries = db.relationship("PlanEntry", back_populates="workout", cascade="all, delete-orphan")

    @property
    def total_distance(self) -> float:
        # se deriva en cada lectura, nunca se guarda
        return workout_total_distance(self)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "workout_name": self.workout_name,
            "estimated_duration": self.estimated_duration,
            "is_template": self.is_template,
            "warm_up": self.warm_up,
            "work": list(self.work or []),
            "cool_down": self.cool_down,
            "total_distance": round(self.total_distance, 3),
        }

    def __repr__(self):
        return f"<Workout {self.id} {self.workout_name!r}>"
