from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.serialization import to_primitive
from ..common.web import json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        session["account_id"] = user.account_id
        session["role"] = user.role.value
        session["name"] = user.full_name
        session["email"] = user.email
        return jsonify(to_primitive(user))

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "role": session.get("role"),
                "account_id": session.get("account_id"),
                "full_name": session.get("name"),
                "email": session.get("email"),
            }
        )
