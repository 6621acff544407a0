"""
Event Routes - Ticketmaster search, suggestions and detail passthrough
"""

from flask import Blueprint, jsonify, request


def create_events_blueprint(services):
    events_bp = Blueprint("events", __name__, url_prefix="/api")

    @events_bp.route("/events")
    def search_events():
        """Search events by keyword, category and location"""
        args = request.args
        events = services.ticketmaster.search_events(
            keyword=args.get("keyword"),
            segment_id=args.get("segmentId"),
            category=args.get("category"),
            radius=args.get("radius"),
            unit=args.get("unit"),
            lat=args.get("lat"),
            lon=args.get("lon"),
            city=args.get("city"),
        )
        return jsonify(events)

    @events_bp.route("/suggest")
    def suggest():
        """Keyword autocomplete"""
        return jsonify(services.ticketmaster.suggest(request.args.get("keyword", "")))

    @events_bp.route("/event/<path:event_id>")
    def event_detail(event_id):
        """Raw Ticketmaster detail payload, mapped client-side"""
        return jsonify(services.ticketmaster.get_event(event_id))

    @events_bp.route("/ip-location")
    def ip_location():
        """Approximate location of the gateway's public IP"""
        return jsonify(services.ipinfo.locate())

    return events_bp
