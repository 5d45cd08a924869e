# runlog/models/user.py

from datetime import datetime
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from runlog import db, login_manager

ROLES = ("user", "admin", "coach")

# Claves de marcas personales (API) -> distancia en km
PB_RACES = {
    "five_k": 5.0,
    "ten_k": 10.0,
    "half_marathon": 21.0975,
    "marathon": 42.195,
}

RECENT_RACE_DISTANCES = (5, 10, 15, 16, 21.0975, 42.195)

DEFAULT_AVATAR = "https://img.icons8.com/?size=100&id=7819&format=png&color=000000"


def _empty_paces():
    return {"easy": None, "marathon": None, "threshold": None, "interval": None, "repetition": None}


# ======================
# Modelos
# ======================

class User(UserMixin, db.Model):
    __tablename__ = "users"

    id       = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False)
    email    = db.Column(db.String(150), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role     = db.Column(db.String(10), nullable=False, default="user")
    avatar   = db.Column(db.String(500), nullable=False, default=DEFAULT_AVATAR)

    # Perfil VDOT: valor, ritmos derivados y la marca de la que salió (si hay)
    vdot                 = db.Column(db.Integer, nullable=True)
    training_paces       = db.Column(db.JSON, default=_empty_paces)
    vdot_calculated_from = db.Column(db.JSON, nullable=True)  # {distance_km, time_seconds, date}

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.CheckConstraint("role IN ('user','admin','coach')", name="ck_users_role"),
    )

    # Relaciones
    personal_bests = db.relationship("PersonalBest", back_populates="user", cascade="all, delete-orphan")
    upcoming_races = db.relationship(
        "UpcomingRace", back_populates="user", cascade="all, delete-orphan", order_by="UpcomingRace.date"
    )
    recent_races = db.relationship(
        "RecentRace", back_populates="user", cascade="all, delete-orphan", order_by="RecentRace.date.desc()"
    )
    workouts = db.relationship("Workout", back_populates="user", cascade="all, delete-orphan")
    plans    = db.relationship("TrainingPlan", back_populates="user", cascade="all, delete-orphan")

    # ---- contraseña ----
    def set_password(self, raw: str) -> None:
        self.password = generate_password_hash(raw)

    def check_password(self, raw: str) -> bool:
        return check_password_hash(self.password, raw)

    # ---- helpers ----
    def personal_best(self, race: str):
        return next((pb for pb in self.personal_bests if pb.race == race), None)

    def vdot_profile(self) -> dict:
        return {
            "value": self.vdot,
            "training_paces": dict(self.training_paces or _empty_paces()),
            "calculated_from": self.vdot_calculated_from,
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "avatar": self.avatar,
            "vdot": self.vdot_profile(),
            "personal_bests": {pb.race: pb.to_dict() for pb in self.personal_bests},
            "upcoming_races": [r.to_dict() for r in self.upcoming_races],
            "recent_races": [r.to_dict() for r in self.recent_races],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"


class PersonalBest(db.Model):
    __tablename__ = "personal_bests"

    id      = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    race    = db.Column(db.String(20), nullable=False)  # five_k | ten_k | half_marathon | marathon

    time         = db.Column(db.String(8))   # HH:MM:SS
    time_seconds = db.Column(db.Integer)
    date         = db.Column(db.Date)
    location     = db.Column(db.String(120))

    __table_args__ = (
        db.UniqueConstraint("user_id", "race", name="uq_personal_bests_user_race"),
    )

    user = db.relationship("User", back_populates="personal_bests")

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "time_seconds": self.time_seconds,
            "date": self.date.isoformat() if self.date else None,
            "location": self.location,
        }

    def __repr__(self) -> str:
        return f"<PersonalBest {self.user_id} {self.race} {self.time}>"


class UpcomingRace(db.Model):
    __tablename__ = "upcoming_races"

    id      = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name           = db.Column(db.String(120), nullable=False)
    date           = db.Column(db.Date, nullable=False)
    projected_time = db.Column(db.String(8))  # HH:MM:SS

    user = db.relationship("User", back_populates="upcoming_races")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "date": self.date.isoformat(),
            "projected_time": self.projected_time,
        }


class RecentRace(db.Model):
    __tablename__ = "recent_races"

    id      = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name         = db.Column(db.String(120), nullable=False)
    location     = db.Column(db.String(120))
    distance     = db.Column(db.Float, nullable=False)  # km, ver RECENT_RACE_DISTANCES
    time         = db.Column(db.String(8), nullable=False)  # HH:MM:SS
    time_seconds = db.Column(db.Integer, nullable=False)
    date         = db.Column(db.Date, nullable=False)

    user = db.relationship("User", back_populates="recent_races")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "distance": self.distance,
            "time": self.time,
            "time_seconds": self.time_seconds,
            "date": self.date.isoformat(),
        }


# Loader para Flask-Login
@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))
