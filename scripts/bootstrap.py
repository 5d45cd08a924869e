# scripts/bootstrap.py
from sqlalchemy import text

from runlog import create_app, db

# Asegúrate de importar todos los modelos registrados
from runlog.models.user import User
from runlog.models.plan import TrainingPlan

from runlog.services.plan_rollups import refresh_plans

TABLES = [
    "users",
    "personal_bests",
    "upcoming_races",
    "recent_races",
    "workouts",
    "training_plans",
    "plan_entries",
]


def table_exists(conn, name: str) -> bool:
    row = conn.execute(
        text("SELECT name FROM sqlite_master WHERE type='table' AND name=:n"),
        {"n": name},
    ).fetchone()
    return bool(row)


def refresh_plan_totals():
    """Recalcula total/completed de todos los planes (repara rollups desfasados)."""
    changed = refresh_plans(TrainingPlan.query.all())
    db.session.commit()
    print(f"[plans] totales recalculados: {changed}")


def main():
    app = create_app()
    with app.app_context():
        print("DB =>", app.config.get("SQLALCHEMY_DATABASE_URI"))

        # crea tablas faltantes
        db.create_all()

        if db.engine.dialect.name == "sqlite":
            with db.engine.begin() as conn:
                for t in TABLES:
                    print(f"[table] {t:16s}", "OK" if table_exists(conn, t) else "FALTA")

        print(f"[users] {User.query.count()}")
        refresh_plan_totals()


if __name__ == "__main__":
    main()
