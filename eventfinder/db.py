from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
import os
import logging

# Retrieve main logger
logger = logging.getLogger("main")

db = SQLAlchemy()


def _ensure_sqlite_dir(database_url):
    """Create the parent directory of a file-backed SQLite database"""
    prefix = "sqlite:///"
    if not database_url.startswith(prefix):
        return
    path = database_url[len(prefix):]
    if not path or path.startswith(":memory:"):
        return
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)


def configure_db(app, database_url):
    """Bind the SQLAlchemy extension to `app` before any request is served"""
    _ensure_sqlite_dir(database_url)
    app.config["SQLALCHEMY_DATABASE_URI"] = database_url
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    db.init_app(app)


def init_db(app):
    """Connect once at startup and create the favorites collection if needed"""
    # Import models so their tables are registered on the metadata
    from eventfinder import models  # noqa: F401

    with app.app_context():
        if db.engine.dialect.name == "sqlite":

            @event.listens_for(db.engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                """Configure SQLite pragmas for concurrent readers"""
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
                cursor.close()

        db.create_all()
        logger.info(f"Database ready ({db.engine.url.render_as_string(hide_password=True)})")


def check_db_connection():
    """Return True when the store answers a trivial query"""
    try:
        db.session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db.session.rollback()
        return False
