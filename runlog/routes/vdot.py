# runlog/routes/vdot.py
from flask import Blueprint, jsonify, request

from runlog.errors import ValidationError
from runlog.services.vdot_profile import parse_positive_number, parse_time_seconds
from runlog.utils.vdot import calculate_vdot, get_predicted_race_times, get_training_paces

vdot_bp = Blueprint("vdot", __name__, url_prefix="/api/v1/vdot")


@vdot_bp.route("/calculate", methods=["POST"])
def calculate():
    """
    Calculadora pública (sin guardar nada).
    Body JSON: {"distance_km": 5, "time_seconds": 1200}  (time también acepta "HH:MM:SS")
    """
    data = request.get_json(silent=True) or {}
    if data.get("distance_km") is None or data.get("time_seconds", data.get("time")) is None:
        raise ValidationError("distance_km and time_seconds are required")

    distance_km = parse_positive_number(data["distance_km"], "distance_km")
    time_seconds = parse_time_seconds(data.get("time_seconds", data.get("time")))

    vdot = calculate_vdot(distance_km, time_seconds)
    return jsonify({"data": {
        "vdot": vdot,
        "paces": get_training_paces(vdot),
        "predictions": get_predicted_race_times(vdot),
    }}), 200
