# tests/test_cli.py

import csv
from datetime import date

import pytest
from runlog import create_app, db
from runlog.models.plan import PlanEntry, TrainingPlan
from runlog.models.user import User
from runlog.models.workout import Workout


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret-key-0123456789-abcdefghij",
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def make_user(email="runner@mail.com", vdot=None):
    user = User(username=email.split("@")[0], email=email)
    user.set_password("secret123")
    if vdot is not None:
        from runlog.services.vdot_profile import apply_manual_vdot
        db.session.add(user)
        db.session.flush()
        apply_manual_vdot(user, vdot)
    db.session.add(user)
    db.session.commit()
    return user


def test_vdot_calc(runner):
    result = runner.invoke(args=["vdot", "calc", "5", "00:20:00"])
    assert result.exit_code == 0
    assert "VDOT: 52" in result.output
    assert "threshold   04:21" in result.output
    assert "Marathon" in result.output

    result = runner.invoke(args=["vdot", "calc", "5", "1200"])
    assert "VDOT: 52" in result.output


def test_vdot_calc_tiempo_invalido(runner):
    result = runner.invoke(args=["vdot", "calc", "5", "veinte"])
    assert result.exit_code != 0


def test_seed_workouts_sin_vdot(runner):
    user = make_user()
    result = runner.invoke(args=["seed", "workouts", "--email", "runner@mail.com"])
    assert result.exit_code == 0, result.output
    assert "Omitidos: 1" in result.output

    workouts = Workout.query.filter_by(user_id=user.id).all()
    assert len(workouts) == 4
    assert all(w.is_template for w in workouts)
    assert all("pace" not in seg for w in workouts for seg in w.work)
    series = next(w for w in workouts if w.workout_name == "Series 6x1000")
    assert series.total_distance == pytest.approx(10)


def test_seed_workouts_con_vdot_es_idempotente(runner):
    user = make_user(vdot=52)
    runner.invoke(args=["seed", "workouts", "--email", "runner@mail.com"])
    result = runner.invoke(args=["seed", "workouts", "--email", "runner@mail.com"])
    assert "Nuevos: 0, Actualizados: 5" in result.output

    tempo = Workout.query.filter_by(user_id=user.id, workout_name="Tempo 20'").one()
    assert tempo.work[0]["pace"] == {"type": "tempo", "pace": "04:21"}


def test_seed_usuario_inexistente(runner):
    result = runner.invoke(args=["seed", "workouts", "--email", "nadie@mail.com"])
    assert "No existe el usuario" in result.output
    assert Workout.query.count() == 0


def test_export_plans(runner, tmp_path):
    user = make_user()
    w = Workout(user_id=user.id, workout_name="Rodaje", work=[{"type": "distance", "distance": {"value": 8}}])
    db.session.add(w)
    db.session.flush()
    plan = TrainingPlan(user_id=user.id, date=date(2021, 1, 3), week=1,
                        total_distance=8, completed_distance=0)
    plan.entries = [PlanEntry(day="Sunday", workout_id=w.id, comments=[])]
    db.session.add(plan)
    db.session.commit()

    dest = tmp_path / "plans.csv"
    result = runner.invoke(args=["export", "plans", "--to", str(dest)])
    assert result.exit_code == 0, result.output

    with open(dest, encoding="utf-8") as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 1
    assert rows[0]["iso_year"] == "2020"
    assert rows[0]["iso_week"] == "53"
    assert rows[0]["entries"] == "1"
    assert rows[0]["total_distance"] == "8.0"


def test_init_db(runner):
    result = runner.invoke(args=["init-db"])
    assert result.exit_code == 0
    assert "Base de datos lista" in result.output


def test_reseed_recalcula_planes_que_usan_la_plantilla(runner):
    from runlog.services.vdot_profile import apply_manual_vdot

    user = make_user(vdot=40)
    runner.invoke(args=["seed", "workouts", "--email", "runner@mail.com"])
    tempo = Workout.query.filter_by(user_id=user.id, workout_name="Tempo 20'").one()

    plan = TrainingPlan(user_id=user.id, date=date(2024, 5, 13), week=1,
                        total_distance=tempo.total_distance, completed_distance=0)
    plan.entries = [PlanEntry(day="Monday", workout_id=tempo.id, comments=[])]
    db.session.add(plan)
    db.session.commit()
    antes = plan.total_distance

    apply_manual_vdot(user, 70)
    db.session.commit()
    result = runner.invoke(args=["seed", "workouts", "--email", "runner@mail.com"])
    assert result.exit_code == 0, result.output

    db.session.refresh(plan)
    assert plan.total_distance == pytest.approx(tempo.total_distance)
    assert plan.total_distance > antes
