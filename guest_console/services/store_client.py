"""
HTTP client for the guest record store.

The RSVP, check-in and console services only ever see this client. It turns
store responses into GuestRecord objects and store failures into domain
errors; it never retries.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

import httpx
import pydantic
from pydantic_core import to_jsonable_python

from guest_console.core.config import settings
from guest_console.core.errors import (
    AlreadyRespondedError,
    ConflictError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from guest_console.schemas.guest import GuestRecord

logger = logging.getLogger(__name__)


# Store ids are uuid4 strings (SQL) or Firestore document ids
GUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def is_guest_id(value: Optional[str]) -> bool:
    """True when value could be a store id, i.e. it stays one path segment"""
    return isinstance(value, str) and GUEST_ID_PATTERN.fullmatch(value) is not None


def guest_path(guest_id: str) -> str:
    if not is_guest_id(guest_id):
        raise NotFoundError(guest_id)
    return f"/guests/{guest_id}"


def to_record(data: Any, where: str) -> GuestRecord:
    if not isinstance(data, dict):
        raise TransientError(internal=f"{where}: expected a guest object, got {type(data).__name__}")
    try:
        return GuestRecord.model_validate(data)
    except pydantic.ValidationError as exc:
        raise TransientError(internal=f"{where}: malformed guest record: {exc}") from exc


def to_records(data: Any, where: str) -> List[GuestRecord]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise TransientError(internal=f"{where}: expected a list of guests, got {type(data).__name__}")
    return [to_record(item, where) for item in data]


class GuestStoreClient:
    """Thin wrapper over the store's /guests contract"""

    def __init__(self, http: httpx.Client):
        self.http = http

    @classmethod
    def from_settings(cls) -> "GuestStoreClient":
        return cls(httpx.Client(base_url=settings.GUEST_STORE_URL, timeout=settings.GUEST_STORE_TIMEOUT))

    def close(self) -> None:
        self.http.close()

    @staticmethod
    def _error_code(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        return body.get("error_code") if isinstance(body, dict) else None

    def _request(self, method: str, url: str, guest_id: str = "", **kwargs) -> Any:
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(f"Guest store {method} {url} failed: {exc}")
            raise TransientError(internal=f"{method} {url}: {exc}") from exc

        if response.status_code == 404:
            raise NotFoundError(guest_id)
        if response.status_code == 409:
            if self._error_code(response) == "ALREADY_RESPONDED":
                raise AlreadyRespondedError(guest_id)
            raise ConflictError(internal=f"{method} {url}: {response.text}")
        if response.status_code in (400, 422):
            logger.warning(f"Guest store rejected {method} {url}: {response.text}")
            raise ValidationError("Some of the details were not accepted. Please check and try again.")
        if response.status_code >= 300:
            logger.error(f"Guest store {method} {url} returned {response.status_code}")
            raise TransientError(internal=f"{method} {url}: HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            raise TransientError(internal=f"{method} {url}: invalid JSON body") from exc
        return body.get("data") if isinstance(body, dict) else body

    def list_guests(self, wedding_id: str, limit: Optional[int] = None, invited_by: Optional[str] = None) -> List[GuestRecord]:
        params: Dict[str, Any] = {
            "wedding_id": wedding_id,
            "limit": limit or settings.GUEST_LIST_LIMIT,
        }
        if invited_by:
            params["invited_by"] = invited_by
        return to_records(self._request("GET", "/guests", params=params), "GET /guests")

    def get_guest(self, guest_id: str) -> GuestRecord:
        path = guest_path(guest_id)
        return to_record(self._request("GET", path, guest_id=guest_id), f"GET {path}")

    def create_guest(self, fields: Dict[str, Any]) -> GuestRecord:
        data = self._request("POST", "/guests", json=to_jsonable_python(fields))
        return to_record(data, "POST /guests")

    def update_guest(self, guest_id: str, changes: Dict[str, Any], if_unanswered: bool = False) -> GuestRecord:
        """Partial update. With if_unanswered the store refuses the write once
        the guest has an RSVP, raising AlreadyRespondedError."""
        path = guest_path(guest_id)
        params = {"if_unanswered": "true"} if if_unanswered else None
        data = self._request(
            "PATCH", path, guest_id=guest_id, params=params, json=to_jsonable_python(changes)
        )
        return to_record(data, f"PATCH {path}")

    def delete_guest(self, guest_id: str) -> None:
        self._request("DELETE", guest_path(guest_id), guest_id=guest_id)

    def list_wishes(self, guest_id: str) -> List[GuestRecord]:
        path = f"{guest_path(guest_id)}/wishes"
        return to_records(self._request("GET", path, guest_id=guest_id), f"GET {path}")
