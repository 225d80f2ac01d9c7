class SafeWayError(Exception):
    """Base class for every error raised by safeway."""


class ValidationFailed(SafeWayError):
    """Required input missing or malformed; raised before any request is sent."""


class LocationNotFound(SafeWayError):
    def __init__(self, query):
        super().__init__(f"location not found: {query!r}")
        self.query = query


class ScoringUnavailable(SafeWayError):
    """Upstream CCTV API or the database could not be reached while scoring."""


class StoreUnavailable(SafeWayError):
    pass


class NotFound(SafeWayError):
    pass


class Forbidden(SafeWayError):
    pass


class ApiError(SafeWayError):
    def __init__(self, status, message):
        super().__init__(f"HTTP {status}: {message}")
        self.status = status
        self.message = message


class AuthenticationFailed(ApiError):
    def __init__(self, message="이메일 또는 비밀번호가 올바르지 않습니다."):
        super().__init__(401, message)


class BackendUnreachable(SafeWayError):
    def __init__(self, message="서버 연결에 실패했습니다. 다시 시도해 주세요."):
        super().__init__(message)
        self.message = message


class GeolocationError(SafeWayError):
    """The device could not start or keep a location subscription."""
