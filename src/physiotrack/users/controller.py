from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_account, json_body, json_error, login_required, remember_account, text_field
from ..core.exceptions import AuthenticationError, ConflictError, PersistenceError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = json_body()
            account = container.auth_service.authenticate(
                text_field(data, "username"),
                text_field(data, "password"),
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except AuthenticationError as e:
            return json_error(str(e), 401)

        session.clear()
        remember_account(account)
        return jsonify({"success": True, "user": account.to_dict()})

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_account():
        try:
            data = json_body()
            message = container.user_service.register(
                name=text_field(data, "name"),
                username=text_field(data, "username"),
                password=text_field(data, "password"),
                role=text_field(data, "role", "therapist"),
            )
        except (ValidationError, ConflictError) as e:
            return json_error(str(e), 400)
        except PersistenceError as e:
            return json_error(str(e), 500)

        return jsonify({"success": True, "message": message}), 201

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Signed out."})

    @app.route("/api/me", endpoint="me")
    @login_required
    def me():
        # the store may have been reseeded since sign-in
        try:
            account = container.user_service.get_account(current_account().id)
        except AuthenticationError as e:
            session.clear()
            return json_error(str(e), 401)
        return jsonify({"success": True, "user": account.to_dict()})

    @app.route("/api/therapists", endpoint="therapists")
    @admin_required
    def therapists():
        items = container.user_service.list_therapists()
        return jsonify({"success": True, "therapists": [t.to_dict() for t in items]})
