# runlog/cli/export.py
import csv
import os
from datetime import datetime
import click
from flask.cli import AppGroup
from runlog.models.plan import TrainingPlan
from runlog.models.user import User
from runlog.utils.calendario import iso_week

export_group = AppGroup("export", help="Comandos de exportación (CSV, etc.)")

PLAN_FIELDS = [
    "user", "date", "iso_year", "iso_week", "week",
    "entries", "completed_entries", "total_distance", "completed_distance",
]


@export_group.command("plans")
@click.option("--to", "dest_path", default=None,
              help="Ruta destino del CSV (por defecto: instance/plans_export_YYYYMMDD.csv)")
@click.option("--email", default=None, help="Exporta solo los planes de este usuario.")
def export_plans(dest_path, email):
    """
    Exporta los planes de entrenamiento a CSV, con su semana ISO y totales.
    """
    if not dest_path:
        ts = datetime.now().strftime("%Y%m%d")
        dest_path = os.path.join("instance", f"plans_export_{ts}.csv")

    folder = os.path.dirname(dest_path)
    if folder:
        os.makedirs(folder, exist_ok=True)

    q = TrainingPlan.query.join(User, TrainingPlan.user_id == User.id)
    if email:
        q = q.filter(User.email == email.strip().lower())
    rows = q.order_by(TrainingPlan.date.asc(), TrainingPlan.id.asc()).all()

    with open(dest_path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=PLAN_FIELDS)
        writer.writeheader()
        for p in rows:
            year, week = iso_week(p.date)
            writer.writerow({
                "user": p.user.email,
                "date": p.date.isoformat(),
                "iso_year": year,
                "iso_week": week,
                "week": p.week,
                "entries": len(p.entries),
                "completed_entries": sum(1 for e in p.entries if e.completed),
                "total_distance": round(p.total_distance or 0, 3),
                "completed_distance": round(p.completed_distance or 0, 3),
            })

    click.secho(f"Exportados {len(rows)} planes a: {dest_path}", fg="green")
