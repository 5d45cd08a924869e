# runlog/__init__.py

import os
import logging
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_migrate import Migrate

# Carga variables de entorno (.env)
load_dotenv()

# Extensiones compartidas
db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()


def _require_secret_key() -> str:
    """Lee SECRET_KEY de entorno y exige mínimo 32 bytes."""
    secret = os.getenv("SECRET_KEY", "")
    if not secret or len(secret) < 32:
        raise RuntimeError(
            "SECRET_KEY no configurado o demasiado corto. "
            "Añade una clave segura al .env, por ejemplo:\n"
            "  SECRET_KEY="
            "pZcN3mT0f3Qh7JtBv0r6m2kF9yV1wX8qZ4s3a6g9h2j5l8p1r0t2v4x6z8b0c2"
        )
    return secret


def _configure_logging(app: Flask) -> None:
    """Logging simple y consistente. LOG_LEVEL manda sobre el modo debug."""
    default = "DEBUG" if app.debug else "INFO"
    level_name = str(app.config.get("LOG_LEVEL") or default).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app(config_overrides: dict = None) -> Flask:
    """Factory principal de la aplicación."""
    app = Flask(__name__, instance_relative_config=True)
    overrides = dict(config_overrides or {})

    # Asegura carpeta instance/
    os.makedirs(app.instance_path, exist_ok=True)

    # DB por defecto (SQLite en instance/runlog.db)
    db_path = os.path.join(app.instance_path, "runlog.db")
    default_db_uri = f"sqlite:///{db_path}"

    # -----------------------------
    # Config base (segura por defecto)
    # -----------------------------
    app.config.from_mapping(
        SECRET_KEY=overrides.get("SECRET_KEY") or _require_secret_key(),
        SQLALCHEMY_DATABASE_URI=os.getenv("SQLALCHEMY_DATABASE_URI", default_db_uri),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        JSON_SORT_KEYS=False,
        LOG_LEVEL=os.getenv("LOG_LEVEL"),
        # Cookies y sesión seguras
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        SESSION_COOKIE_SECURE=os.getenv("FLASK_ENV", "").lower() != "development",
        PERMANENT_SESSION_LIFETIME=timedelta(days=7),
        PREFERRED_URL_SCHEME="https",
        MAX_CONTENT_LENGTH=1 * 1024 * 1024,  # 1 MB por petición
    )
    # Los overrides (tests, scripts) se aplican antes de iniciar extensiones
    app.config.update(overrides)

    # Inicializa extensiones
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    _configure_logging(app)

    # ---------------------------------------------------------
    # MODELOS (importar para que Flask-Migrate los detecte)
    # ---------------------------------------------------------
    from runlog.models.user import User, PersonalBest, UpcomingRace, RecentRace  # noqa: F401
    from runlog.models.workout import Workout  # noqa: F401
    from runlog.models.plan import TrainingPlan, PlanEntry  # noqa: F401

    # ---------------------------------------------------------
    # BLUEPRINTS
    # ---------------------------------------------------------
    from runlog.routes.auth import auth_bp
    from runlog.routes.users import users_bp
    from runlog.routes.vdot import vdot_bp
    from runlog.routes.training import training_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(vdot_bp)
    app.register_blueprint(training_bp)

    # ---------------------------------------------------------
    # CLI (init-db, seed, export, vdot)
    # ---------------------------------------------------------
    from runlog.cli import register_cli
    register_cli(app)

    # ---------------------------------------------------------
    # Healthcheck y manejo de errores JSON
    # ---------------------------------------------------------
    @app.get("/healthz")
    def _healthz():
        return {"status": "ok"}, 200

    from runlog.errors import ApiError

    @app.errorhandler(ApiError)
    def _api_error(err):
        if err.status_code >= 500:
            app.logger.error(f"[api] {err.error_code}: {err.message}")
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(400)
    @app.errorhandler(401)
    @app.errorhandler(403)
    @app.errorhandler(404)
    @app.errorhandler(405)
    @app.errorhandler(409)
    @app.errorhandler(413)
    @app.errorhandler(500)
    def _http_errors(err):
        # Si la petición es JSON, devolvemos JSON consistente
        if request.is_json or request.path.startswith("/api/"):
            code = getattr(err, "code", 500) or 500
            return jsonify(error_code="http_error", message=str(err)), code
        return err

    @login_manager.unauthorized_handler
    def _unauthorized():
        return jsonify(error_code="Unauthorized", message="Login required"), 401

    return app
