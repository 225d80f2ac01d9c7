# services/auth_helpers.py

import logging
from functools import wraps

from firebase_admin import auth
from flask import g, jsonify, request

from safeway.services.firestore_store import init_firebase

logger = logging.getLogger(__name__)


def _bearer_token():
    auth_header = request.headers.get('Authorization', None)
    if not auth_header or not auth_header.startswith('Bearer '):
        return None
    return auth_header.split('Bearer ')[1].strip() or None


def get_firebase_uid_from_request():
    """
    Gets the Firebase UID from the Authorization Bearer token header.
    Returns user's UID if token is valid, else None.
    """
    id_token = _bearer_token()
    if not id_token:
        return None
    try:
        init_firebase()
        decoded_token = auth.verify_id_token(id_token)
        return decoded_token.get('uid')
    except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
            auth.RevokedIdTokenError, auth.CertificateFetchError) as e:
        logger.warning("Firebase token verification failed: %s", e)
        return None


def get_request_uid():
    """
    Resolve the acting user: a verified ID token wins, otherwise the uid sent
    in the JSON body, the URL or the query string.
    """
    uid = get_firebase_uid_from_request()
    if uid:
        return uid
    body = request.get_json(silent=True) or {}
    uid = (body.get('uid') if isinstance(body, dict) else None) \
        or (request.view_args or {}).get('uid') \
        or request.args.get('uid')
    return uid or None


def require_auth(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        uid = get_request_uid()
        if not uid:
            return jsonify({"error": "인증 정보(UID)가 필요합니다."}), 401
        g.uid = uid
        return f(*args, **kwargs)
    return wrapper
