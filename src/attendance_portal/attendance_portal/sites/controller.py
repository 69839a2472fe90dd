from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..attendance.controller import error_response
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sites", methods=["GET"], endpoint="sites_list")
    def sites_list():
        try:
            return jsonify({"sites": container.site_service.list_sites()}), 200
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching sites")
            return jsonify({"success": False, "error": "InternalError", "message": "Could not load sites"}), 500

    @app.route("/api/options", methods=["GET"], endpoint="form_options")
    def form_options():
        return jsonify(container.site_service.form_options()), 200
