from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from flask import Response, request
import logging
import time
from functools import wraps

logger = logging.getLogger("main")

# Database Metrics
db_query_duration_seconds = Histogram(
    "eventfinder_db_query_duration_seconds", "Database query duration", ["operation"]
)

db_query_total = Counter("eventfinder_db_queries_total", "Total database queries", ["operation", "status"])

favorites_total = Gauge("eventfinder_favorites_total", "Total number of stored favorites")

# API Metrics
api_request_duration_seconds = Histogram(
    "eventfinder_api_request_duration_seconds", "API request duration", ["endpoint", "method"]
)

api_requests_total = Counter(
    "eventfinder_api_requests_total", "Total API requests", ["endpoint", "method", "status_code"]
)

# Upstream Metrics
upstream_request_duration_seconds = Histogram(
    "eventfinder_upstream_request_duration_seconds", "Third-party API call duration", ["provider", "operation"]
)

upstream_requests_total = Counter(
    "eventfinder_upstream_requests_total", "Third-party API calls", ["provider", "operation", "status"]
)

spotify_token_refresh_total = Counter(
    "eventfinder_spotify_token_refresh_total", "Spotify client-credentials exchanges", ["status"]
)


def init_metrics(app, services):
    @app.route("/api/metrics")
    def metrics():
        update_db_metrics(services)
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.before_request
    def before_request():
        request.start_time = time.time()

    @app.after_request
    def after_request(response):
        if not request.path.startswith("/api"):
            return response
        duration = time.time() - getattr(request, "start_time", time.time())
        api_request_duration_seconds.labels(endpoint=request.endpoint or "unknown", method=request.method).observe(
            duration
        )
        api_requests_total.labels(
            endpoint=request.endpoint or "unknown", method=request.method, status_code=response.status_code
        ).inc()
        return response

    logger.info("Prometheus metrics initialized at /api/metrics")


def update_db_metrics(services):
    """Refresh store gauges before an export"""
    try:
        favorites_total.set(services.favorites.count())
    except Exception as e:
        logger.warning(f"Could not refresh favorites gauge: {e}")


def track_db_query(operation):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                db_query_total.labels(operation=operation, status="success").inc()
                return result
            except Exception:
                db_query_total.labels(operation=operation, status="error").inc()
                raise
            finally:
                duration = time.time() - start_time
                db_query_duration_seconds.labels(operation=operation).observe(duration)

        return wrapper

    return decorator


def track_upstream(provider, operation):
    """Record duration and outcome of one third-party API call"""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
                upstream_requests_total.labels(provider=provider, operation=operation, status="success").inc()
                return result
            except Exception:
                upstream_requests_total.labels(provider=provider, operation=operation, status="error").inc()
                raise
            finally:
                duration = time.time() - start_time
                upstream_request_duration_seconds.labels(provider=provider, operation=operation).observe(duration)

        return wrapper

    return decorator
