# services/auth_service.py
"""
Account operations on top of Firebase Authentication.

register_user   creates the auth account and the users/<uid> profile document
login_user      with FIREBASE_WEB_API_KEY configured, checks the password
                against the Identity Toolkit REST API and returns its ID token
                (usable as a Bearer token); otherwise looks the user up by
                email and returns a custom token for client SDK sign-in
social_login    upserts the profile of a user who signed in with a provider
"""

import logging

import requests
from firebase_admin import auth

from safeway.config import FIREBASE_WEB_API_KEY, HTTP_TIMEOUT, IDENTITY_TOOLKIT_URL
from safeway.errors import AuthenticationFailed, ValidationFailed
from safeway.services.firestore_store import init_firebase, utc_now_iso

logger = logging.getLogger(__name__)

ID_TOKEN = "id"
CUSTOM_TOKEN = "custom"


def register_user(store, email, password, name=None):
    if not email or not password:
        raise ValidationFailed("필수 정보 누락")
    init_firebase()
    user = auth.create_user(email=email, password=password, display_name=name)
    store.set("users", user.uid, {"name": name, "email": email, "createdAt": utc_now_iso()})
    logger.info("registered user %s", user.uid)
    return user.uid


def _verify_password(email, password):
    resp = requests.post(
        IDENTITY_TOOLKIT_URL,
        params={"key": FIREBASE_WEB_API_KEY},
        json={"email": email, "password": password, "returnSecureToken": True},
        timeout=HTTP_TIMEOUT,
    )
    if resp.status_code != 200:
        logger.info("password sign-in rejected for %s: %s", email, resp.status_code)
        raise AuthenticationFailed()
    data = resp.json()
    return data["localId"], data["idToken"]


def login_user(email, password):
    """
    Return (uid, token, token_type), token_type being "id" or "custom".
    Raises AuthenticationFailed.
    """
    if not email or not password:
        raise ValidationFailed("필수 정보 누락")
    if FIREBASE_WEB_API_KEY:
        uid, id_token = _verify_password(email, password)
        return uid, id_token, ID_TOKEN
    init_firebase()
    try:
        user = auth.get_user_by_email(email)
    except auth.UserNotFoundError:
        raise AuthenticationFailed()
    token = auth.create_custom_token(user.uid)
    if isinstance(token, bytes):
        token = token.decode("utf-8")
    return user.uid, token, CUSTOM_TOKEN


def social_login(store, uid, email=None, name=None):
    if not uid:
        raise ValidationFailed("uid is required")
    existing = store.get("users", uid)
    profile = {"email": email, "name": name or (email.split("@")[0] if email else None)}
    if existing is None:
        profile["createdAt"] = utc_now_iso()
    store.set("users", uid, {k: v for k, v in profile.items() if v is not None}, merge=True)
    return existing is None
