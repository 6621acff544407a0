"""
Model: Favorite
One stored document per event id, Ticketmaster ids are the natural key.
"""

from eventfinder.db import db
from eventfinder.utils import now_utc, ensure_utc


class Favorite(db.Model):
    __tablename__ = "favorites"

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.String, unique=True, nullable=False, index=True)
    # Every field the client supplied, stored as-is
    document = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=now_utc, index=True)

    def to_dict(self):
        created_at = ensure_utc(self.created_at)
        item = dict(self.document or {})
        item["id"] = self.event_id
        item["createdAt"] = created_at.isoformat() if created_at else None
        return item

    def __repr__(self):
        return f"<Favorite {self.event_id}>"
