"""
Repository for Favorite store operations
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm.attributes import flag_modified

from eventfinder.exceptions import DatabaseException, NotFoundException, ValidationException
from eventfinder.metrics import track_db_query
from eventfinder.models.favorite import Favorite
from eventfinder.utils import now_utc

logger = logging.getLogger("main")

# Fields the server owns; client copies of them are dropped on write
SERVER_FIELDS = ("createdAt", "_id")


class FavoritesRepository:
    """CRUD over the favorites collection, keyed by event id"""

    def __init__(self, db):
        self.db = db

    @track_db_query("favorites_list")
    def list(self):
        """All favorites, oldest first"""
        try:
            items = Favorite.query.order_by(Favorite.created_at.asc(), Favorite.id.asc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching favorites: {e}")
            raise DatabaseException("Failed to fetch favorites")
        return [item.to_dict() for item in items]

    def get(self, event_id):
        """Favorite document for `event_id`, or None"""
        try:
            item = Favorite.query.filter_by(event_id=event_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching favorite {event_id}: {e}")
            raise DatabaseException("Failed to fetch favorite")
        return item.to_dict() if item else None

    @track_db_query("favorites_upsert")
    def upsert(self, item):
        """
        Insert or update the favorite keyed on `item["id"]`.

        On insert the creation time is stamped; on update the supplied fields
        are merged over the stored document and the creation time is kept.
        Returns True when a new record was created.
        """
        event_id = self._validate(item)
        document = {k: v for k, v in item.items() if k not in SERVER_FIELDS}

        try:
            return self._upsert(event_id, document)
        except IntegrityError:
            # Another request inserted the same id between our read and write
            self.db.session.rollback()
            logger.info(f"Concurrent insert for favorite {event_id}, retrying as update")
            try:
                return self._upsert(event_id, document)
            except SQLAlchemyError as e:
                self.db.session.rollback()
                logger.error(f"Error adding favorite {event_id}: {e}")
                raise DatabaseException("Failed to add favorite")
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error(f"Error adding favorite {event_id}: {e}")
            raise DatabaseException("Failed to add favorite")

    def _upsert(self, event_id, document):
        existing = Favorite.query.filter_by(event_id=event_id).first()
        if existing:
            merged = dict(existing.document or {})
            merged.update(document)
            existing.document = merged
            flag_modified(existing, "document")
            self.db.session.commit()
            logger.debug(f"Updated favorite {event_id}")
            return False

        self.db.session.add(Favorite(event_id=event_id, document=document, created_at=now_utc()))
        self.db.session.commit()
        logger.debug(f"Inserted favorite {event_id}")
        return True

    @track_db_query("favorites_delete")
    def delete(self, event_id):
        """Remove the favorite for `event_id`; NotFoundException if absent"""
        try:
            deleted = Favorite.query.filter_by(event_id=event_id).delete(synchronize_session=False)
            self.db.session.commit()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            logger.error(f"Error removing favorite {event_id}: {e}")
            raise DatabaseException("Failed to remove favorite")

        if deleted == 0:
            raise NotFoundException("Favorite not found")
        return True

    def count(self):
        """Count stored favorites"""
        return Favorite.query.count()

    @staticmethod
    def _validate(item):
        if not isinstance(item, dict):
            raise ValidationException("Request body must be a JSON object")
        event_id = item.get("id")
        if event_id is None or event_id == "":
            raise ValidationException("Missing event id in body")
        if not isinstance(event_id, str):
            raise ValidationException("Event id must be a string")
        return event_id
