"""
Spotify Routes - artist enrichment for the event detail page
"""

from flask import Blueprint, jsonify, request


def create_spotify_blueprint(services):
    spotify_bp = Blueprint("spotify", __name__, url_prefix="/api/spotify")

    @spotify_bp.route("/search-artist")
    def search_artist():
        """Best matching artist for `q`, or null"""
        return jsonify(services.spotify.search_artist(request.args.get("q", "")))

    @spotify_bp.route("/artist-albums/<artist_id>")
    def artist_albums(artist_id):
        """Albums and singles of one artist"""
        return jsonify(services.spotify.get_albums_for_artist(artist_id))

    return spotify_bp
