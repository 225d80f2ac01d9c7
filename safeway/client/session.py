# client/session.py
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Session:
    """Who is logged in. Transitions return a new Session."""
    logged_in: bool = False
    uid: Optional[str] = None
    token: Optional[str] = None

    def login(self, uid, token=None):
        if not uid:
            raise ValueError("uid is required to log in")
        return Session(logged_in=True, uid=uid, token=token)

    def logout(self):
        return ANONYMOUS


ANONYMOUS = Session()
