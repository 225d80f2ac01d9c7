# client/api_client.py
"""
HTTP client for the SafeWay backend.

Errors:
  401                   -> AuthenticationFailed
  no connection/timeout -> BackendUnreachable
  other non-2xx         -> ApiError(status, message)
Required fields are checked before any request is sent (ValidationFailed).
No retries.
"""

import logging

import requests

from safeway.config import HTTP_TIMEOUT
from safeway.errors import ApiError, AuthenticationFailed, BackendUnreachable, ValidationFailed
from safeway.models.types import Coordinate, EmergencyContact, ScoreResult

logger = logging.getLogger(__name__)


def _require(**fields):
    missing = [k for k, v in fields.items() if v is None or (isinstance(v, str) and not v.strip())]
    if missing:
        raise ValidationFailed(f"missing required field(s): {', '.join(missing)}")


class SafeWayClient:
    def __init__(self, base_url, timeout=HTTP_TIMEOUT, http=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()
        # ngrok tunnels show an interstitial page without this header
        self.http.headers.update({"ngrok-skip-browser-warning": "true"})

    def _request(self, method, path, json=None, params=None, session=None):
        headers = {}
        if session is not None and session.token:
            headers["Authorization"] = f"Bearer {session.token}"
        try:
            resp = self.http.request(method, f"{self.base_url}{path}", json=json, params=params,
                                     headers=headers, timeout=self.timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.warning("%s %s unreachable: %s", method, path, e)
            raise BackendUnreachable() from e
        if resp.status_code == 401:
            raise AuthenticationFailed()
        if not resp.ok:
            try:
                message = resp.json().get("error") or resp.text
            except ValueError:
                message = resp.text
            raise ApiError(resp.status_code, message)
        return resp.json() if resp.content else None

    # auth
    def register(self, email, password, name=None):
        _require(email=email, password=password)
        return self._request("POST", "/api/auth/register", json={"email": email, "password": password, "name": name})

    def login(self, session, email, password):
        """
        Return the logged-in Session. Only an ID token is kept for the Bearer
        header; a custom token is meant for client SDK sign-in and is dropped.
        """
        _require(email=email, password=password)
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        token = data.get("token") if data.get("tokenType") == "id" else None
        return session.login(data["uid"], token)

    # route
    def score_route(self, path):
        if len(path) < 2:
            raise ValidationFailed("a path needs at least two points")
        data = self._request("POST", "/api/route/safety",
                             json={"pathPoints": [Coordinate.parse(p).to_dict() for p in path]})
        return ScoreResult(int(data["safetyScore"]), int(data.get("cctvCount", 0)), int(data.get("lightCount", 0)))

    def search_route(self, start, end):
        _require(start=start, end=end)
        return self._request("POST", "/api/route/search", json={"start": start, "end": end})

    def address_of(self, coord):
        """Address label for a Coordinate, or None when the geocoder has none."""
        coord = Coordinate.parse(coord)
        data = self._request("GET", "/api/route/address", params=coord.to_dict())
        return data.get("address")

    # contacts
    def list_contacts(self, session):
        data = self._request("GET", f"/api/contacts/{session.uid}", session=session)
        return [EmergencyContact.from_doc(d) for d in data]

    def add_contact(self, session, name, phone, relation=None):
        _require(name=name, phone=phone)
        return self._request("POST", "/api/contacts", session=session,
                             json={"uid": session.uid, "name": name, "phone": phone, "relation": relation})

    def delete_contact(self, session, contact_id):
        _require(contactId=contact_id)
        return self._request("POST", "/api/contacts/delete", session=session,
                             json={"uid": session.uid, "contactId": contact_id})

    # reports
    def list_reports(self, uid=None):
        return self._request("GET", "/api/reports", params={"uid": uid} if uid else None)

    def get_report(self, report_id):
        return self._request("GET", f"/api/reports/{report_id}")

    def create_report(self, session, title, type, content, location, lat=None, lng=None):
        _require(title=title, type=type, content=content, location=location)
        body = {"uid": session.uid, "title": title, "type": type, "content": content, "location": location}
        if lat is not None and lng is not None:
            body.update(lat=lat, lng=lng)
        return self._request("POST", "/api/reports", json=body, session=session)

    def update_report(self, session, report_id, **changes):
        return self._request("PUT", f"/api/reports/{report_id}", json={"uid": session.uid, **changes}, session=session)

    def delete_report(self, session, report_id):
        return self._request("DELETE", f"/api/reports/{report_id}", json={"uid": session.uid}, session=session)

    def like_report(self, report_id):
        return self._request("POST", f"/api/reports/{report_id}/like")["likes"]

    def list_comments(self, report_id):
        return self._request("GET", f"/api/reports/{report_id}/comments")

    def add_comment(self, session, report_id, content, author=None):
        _require(content=content)
        return self._request("POST", f"/api/reports/{report_id}/comments", session=session,
                             json={"uid": session.uid, "content": content, "author": author})

    # users
    def get_profile(self, uid):
        return self._request("GET", f"/api/users/{uid}")

    def update_profile(self, session, **fields):
        return self._request("PUT", f"/api/users/{session.uid}", json={"uid": session.uid, **fields}, session=session)

    # history
    def list_history(self, session):
        return self._request("GET", f"/api/history/{session.uid}", session=session)

    def add_history(self, session, start, end, score=None, distance=None, time=None):
        _require(start=start, end=end)
        return self._request("POST", "/api/history", session=session, json={
            "uid": session.uid, "start": start, "end": end, "score": score, "distance": distance, "time": time,
        })

    def delete_history(self, session, entry_id):
        return self._request("DELETE", f"/api/history/{entry_id}", json={"uid": session.uid}, session=session)

    def clear_history(self, session):
        return self._request("DELETE", "/api/history", json={"uid": session.uid}, session=session)


class OptimisticList:
    """
    Client-side list of contacts or history entries. Deletion removes the item
    locally first; on failure the list is refetched and the error re-raised.
    """

    def __init__(self, fetch, delete):
        self._fetch = fetch
        self._delete = delete
        self.items = []

    def refresh(self):
        self.items = list(self._fetch())
        return self.items

    def remove(self, item_id):
        self.items = [i for i in self.items if _item_id(i) != item_id]
        try:
            self._delete(item_id)
        except (ApiError, BackendUnreachable):
            self.refresh()
            raise
        return self.items


def _item_id(item):
    return item.get("id") if isinstance(item, dict) else getattr(item, "id", None)


def contact_book(client, session):
    return OptimisticList(lambda: client.list_contacts(session),
                          lambda cid: client.delete_contact(session, cid))


def history_list(client, session):
    return OptimisticList(lambda: client.list_history(session),
                          lambda eid: client.delete_history(session, eid))
