# routes/common.py
"""Helpers shared by the blueprints: collaborator lookup and error mapping."""

import logging
from functools import wraps

from flask import current_app, jsonify, request

from safeway.errors import (
    Forbidden, LocationNotFound, NotFound, ScoringUnavailable, StoreUnavailable, ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (ValidationFailed, 400),
    (LocationNotFound, 404),
    (NotFound, 404),
    (Forbidden, 403),
    (ScoringUnavailable, 503),
    (StoreUnavailable, 503),
)


def get_store():
    return current_app.extensions["safeway"]["store"]


def get_collaborator(name):
    return current_app.extensions["safeway"][name]


def json_body():
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationFailed("Expected JSON body (Content-Type: application/json)")
    return body


def api_errors(f):
    """Translate safeway errors into JSON error responses."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except tuple(e for e, _ in STATUS_BY_ERROR) as e:
            status = next(s for cls, s in STATUS_BY_ERROR if isinstance(e, cls))
            if status >= 500:
                logger.error("%s %s: %s", request.method, request.path, e)
            return jsonify({"error": str(e)}), status
        except Exception as e:
            logger.exception("%s %s failed", request.method, request.path)
            return jsonify({"error": str(e)}), 500
    return wrapper
