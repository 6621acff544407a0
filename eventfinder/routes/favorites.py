"""
Favorites Routes - list, add/update and remove stored favorites
"""

import logging

from flask import Blueprint, jsonify, request

from eventfinder.api_responses import success_response

logger = logging.getLogger("main")


def create_favorites_blueprint(services):
    favorites_bp = Blueprint("favorites", __name__, url_prefix="/api/favorites")

    @favorites_bp.route("", methods=["GET"])
    def list_favorites():
        """All favorites, oldest first"""
        return jsonify(services.favorites.list())

    @favorites_bp.route("", methods=["POST"])
    def add_favorite():
        """Insert or update a favorite keyed on its event id"""
        item = request.get_json(silent=True)
        created = services.favorites.upsert(item)
        logger.info(f"Favorite {item['id']} {'added' if created else 'updated'}")
        return success_response(message="Added to favorites", status_code=201)

    @favorites_bp.route("/<path:event_id>", methods=["DELETE"])
    def remove_favorite(event_id):
        """Remove a favorite; 404 when it is not stored"""
        services.favorites.delete(event_id)
        logger.info(f"Favorite {event_id} removed")
        return success_response(message="Removed from favorites")

    return favorites_bp
