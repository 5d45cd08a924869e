# runlog/routes/auth.py
from flask import Blueprint, current_app, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy import or_

from runlog import db
from runlog.models.user import User
from runlog.forms.auth_forms import SignupForm, SigninForm

auth_bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")


@auth_bp.route("/signup", methods=["POST"])
def signup():
    form = SignupForm()
    if not form.validate():
        return jsonify(error="ValidationError", fields=form.errors), 422

    username = form.username.data.strip()
    email = form.email.data.strip().lower()

    exists = User.query.filter(or_(User.email == email, User.username == username)).first()
    if exists:
        return jsonify(error="AlreadyExists", message="User already exists"), 409

    user = User(username=username, email=email, role=form.role.data)
    user.set_password(form.password.data)
    db.session.add(user)
    db.session.commit()

    current_app.logger.info(f"[auth] signup user={user.id}")
    return jsonify({"data": user.to_dict()}), 201


@auth_bp.route("/signin", methods=["POST"])
def signin():
    form = SigninForm()
    if not form.validate():
        return jsonify(error="ValidationError", fields=form.errors), 422

    user = User.query.filter_by(email=form.email.data.strip().lower()).first()
    if not user or not user.check_password(form.password.data):
        current_app.logger.info("[auth] signin rejected")
        return jsonify(error="InvalidCredentials", message="Invalid credentials"), 401

    login_user(user)
    current_app.logger.info(f"[auth] signin user={user.id}")
    return jsonify({"data": user.to_dict()}), 200


@auth_bp.route("/signout", methods=["GET", "POST"])
@login_required
def signout():
    uid = current_user.id
    logout_user()
    current_app.logger.info(f"[auth] signout user={uid}")
    return jsonify({"data": {"message": "User has been signed out"}}), 200
