import os

from dotenv import load_dotenv

load_dotenv()

# Server
PORT = int(os.getenv("PORT", 3005))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", 5.0))

# Firebase
FIREBASE_KEY_PATH = os.getenv("FIREBASE_KEY_PATH", "secrets/firebase-admin-key.json")
# Optional: enables password verification on login through the Identity Toolkit REST API
FIREBASE_WEB_API_KEY = os.getenv("FIREBASE_WEB_API_KEY", "")
IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"

# Seoul open-data CCTV API
SEOUL_CCTV_KEY = os.getenv("SEOUL_CCTV_KEY", "")
SEOUL_CCTV_BASE_URL = os.getenv("SEOUL_CCTV_BASE_URL", "http://openapi.seoul.go.kr:8088/")
CCTV_API_SERVICE = "safeOpenCCTV"
CCTV_FETCH_LIMIT = int(os.getenv("CCTV_FETCH_LIMIT", 100))

# Geocoding (Kakao Local)
KAKAO_REST_API_KEY = os.getenv("KAKAO_REST_API_KEY", "")
KAKAO_KEYWORD_URL = "https://dapi.kakao.com/v2/local/search/keyword.json"
KAKAO_ADDRESS_URL = "https://dapi.kakao.com/v2/local/search/address.json"
KAKAO_COORD2ADDRESS_URL = "https://dapi.kakao.com/v2/local/geo/coord2address.json"
KAKAO_MAP_LINK_URL = "https://map.kakao.com/link/map"

# Scoring policy
SCORE_RADIUS_M = float(os.getenv("SCORE_RADIUS_M", 50.0))
CCTV_WEIGHT = float(os.getenv("CCTV_WEIGHT", 5.0))
LIGHT_WEIGHT = float(os.getenv("LIGHT_WEIGHT", 2.0))
# "fixed" keeps the 72/85 comparison scores, "derived" scales them from the safety score
VARIANT_SCORING = os.getenv("VARIANT_SCORING", "fixed")
WALKING_SPEED_M_PER_MIN = float(os.getenv("WALKING_SPEED_M_PER_MIN", 67.0))

# Navigation / SOS
ARRIVAL_THRESHOLD_M = float(os.getenv("ARRIVAL_THRESHOLD_M", 30.0))
MAX_CONSECUTIVE_GEO_ERRORS = int(os.getenv("MAX_CONSECUTIVE_GEO_ERRORS", 10))
SOS_HOLD_SECONDS = float(os.getenv("SOS_HOLD_SECONDS", 1.0))
SOS_COUNTDOWN_SECONDS = int(os.getenv("SOS_COUNTDOWN_SECONDS", 3))

# Client-side key-value store
LOCAL_STORE_PATH = os.getenv("LOCAL_STORE_PATH", "safeway_local.json")
RECENT_DESTINATIONS_MAX = int(os.getenv("RECENT_DESTINATIONS_MAX", 10))

DEFAULT_RELATION = "가족/지인"
