from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import DomainError, PayloadTooLarge
from .model import derive_status

logger = logging.getLogger(__name__)


def error_response(e: DomainError):
    return jsonify({"success": False, "error": e.kind, "message": str(e)}), e.http_status


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status")
    def attendance_status():
        email = request.args.get("email", "")
        try:
            return jsonify(container.attendance_service.get_status_view(email)), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Status lookup failed")
            return jsonify({"success": False, "error": "InternalError", "message": "System error while loading status"}), 500

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_submit")
    def attendance_submit():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"success": False, "error": "ValidationError", "message": "Expected a JSON object"}), 400

        members = data.get("members") or []
        if not isinstance(members, list):
            return jsonify({"success": False, "error": "ValidationError", "message": "members must be a list"}), 400

        try:
            record = container.attendance_service.submit(
                data.get("email", ""),
                data.get("action", ""),
                data.get("location"),
                data.get("category"),
                activities=data.get("activities"),
                photo=data.get("photo"),
                members=members,
            )
        except DomainError as e:
            logger.info("Attendance %s rejected: %s", data.get("action"), e.kind)
            return error_response(e)
        except Exception:
            logger.exception("Attendance submit failed")
            return jsonify({"success": False, "error": "InternalError", "message": "System error while saving attendance"}), 500

        created = record.time_out is None
        return jsonify(
            {
                "success": True,
                "status": derive_status(record).value,
                "message": "Timed in successfully" if created else "Timed out successfully",
                "record": record.to_dict(),
            }
        ), (201 if created else 200)

    @app.errorhandler(413)
    def request_too_large(_e):
        return error_response(PayloadTooLarge("Request body is too large"))
