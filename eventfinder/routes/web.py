"""
Web Routes - health check, static assets and the single-page app fallback
"""

import os

from flask import Blueprint, jsonify, send_from_directory

from eventfinder.api_responses import ErrorCode, error_response, not_found_response
from eventfinder.constants import BUILD_VERSION
from eventfinder.db import check_db_connection


def create_web_blueprint(services):
    static_dir = os.path.abspath(services.settings["server"]["static_dir"])
    web_bp = Blueprint("web", __name__)

    @web_bp.route("/api/health")
    def health():
        """Liveness plus a store round-trip"""
        database_ok = check_db_connection()
        status = "healthy" if database_ok else "degraded"
        return jsonify(
            {"status": status, "database": "connected" if database_ok else "unavailable", "version": BUILD_VERSION}
        ), (200 if database_ok else 503)

    @web_bp.route("/api", defaults={"path": ""})
    @web_bp.route("/api/<path:path>")
    def unknown_api(path):
        """Unknown API paths never fall through to the SPA"""
        return not_found_response("API route", f"/api/{path}".rstrip("/"))

    @web_bp.route("/", defaults={"path": ""})
    @web_bp.route("/<path:path>")
    def spa(path):
        """Static files by name; extension-less paths get index.html"""
        if path and os.path.isfile(os.path.join(static_dir, path)):
            return send_from_directory(static_dir, path)

        if "." in os.path.basename(path):
            return not_found_response("File", path)

        if not os.path.isfile(os.path.join(static_dir, "index.html")):
            return error_response(ErrorCode.NOT_FOUND, message="Frontend build not found", status_code=404)
        return send_from_directory(static_dir, "index.html")

    return web_bp
