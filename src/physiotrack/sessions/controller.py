from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_account, json_body, json_error, login_required, text_field, therapist_required
from ..core.exceptions import AuthorizationError, PersistenceError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    @login_required
    def list_sessions():
        items = container.session_service.list_for(current_account())
        return jsonify({"success": True, "sessions": [s.to_dict() for s in items]})

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    @therapist_required
    def create_session():
        try:
            data = json_body()
            created = container.session_service.log_session(
                current_account(),
                patient_name=text_field(data, "patientName"),
                treatment_type=text_field(data, "treatmentType"),
                duration_minutes=data.get("durationMinutes"),
                signature_data_url=text_field(data, "signatureDataUrl", None),
                notes=text_field(data, "notes", None),
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except PersistenceError as e:
            return json_error(str(e), 500)

        return jsonify({"success": True, "session": created.to_dict()}), 201
