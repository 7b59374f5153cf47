"""
Client-side access to the waitlist.

``RemoteWaitlistStore`` talks to the HTTP API, ``LocalWaitlistStore`` keeps
entries in a JSON file, and ``CachedWaitlistStore`` uses the remote store and
falls back to the local one only while the API is unreachable.
"""
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

import httpx

from app.features.waitlist.schemas.waitlist import WaitlistEntryOut, WaitlistIn
from app.features.waitlist.services.export import render_csv
from app.platform.logger import get_logger

logger = get_logger(__name__)


class StoreError(Exception):
    pass


class StoreUnavailable(StoreError):
    """The backing service could not be reached or answered garbage."""


@dataclass
class SubmitResult:
    success: bool
    message: str
    id: Optional[int] = None
    duplicate: bool = False
    stored_locally: bool = False


class WaitlistStore(ABC):
    @abstractmethod
    def submit(self, data: WaitlistIn) -> SubmitResult: ...

    @abstractmethod
    def list_entries(self) -> List[WaitlistEntryOut]: ...

    @abstractmethod
    def count(self) -> int: ...

    @abstractmethod
    def export_csv(self) -> str: ...

    @abstractmethod
    def clear(self) -> int: ...


class RemoteWaitlistStore(WaitlistStore):
    def __init__(
        self,
        base_url: str,
        *,
        admin_key: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        headers = {"X-Admin-Key": admin_key} if admin_key else {}
        self.client = httpx.Client(
            base_url=base_url.rstrip("/"), headers=headers, timeout=timeout, transport=transport
        )

    def close(self) -> None:
        self.client.close()

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            raise StoreUnavailable(f"Waitlist API unreachable: {exc}") from exc
        if response.status_code >= 500:
            raise StoreUnavailable(f"Waitlist API failed with status {response.status_code}")
        return response

    @staticmethod
    def _json(response: httpx.Response) -> dict:
        if "application/json" not in response.headers.get("content-type", ""):
            raise StoreUnavailable(
                f"Server returned non-JSON response ({response.status_code}). API might be misconfigured."
            )
        return response.json()

    def _data(self, response: httpx.Response):
        body = self._json(response)
        if response.is_error:
            raise StoreError(body.get("message") or f"Request failed with status {response.status_code}")
        return body["data"]

    def submit(self, data: WaitlistIn) -> SubmitResult:
        response = self._request("POST", "/waitlist", json=data.model_dump(mode="json", exclude_none=True))
        body = self._json(response)
        message = body.get("message", "")

        if response.status_code == 409 or (body.get("data") or {}).get("duplicate"):
            return SubmitResult(success=False, message=message, duplicate=True)
        if response.is_error:
            return SubmitResult(success=False, message=message or "Failed to submit")
        return SubmitResult(success=True, message=message, id=body["data"]["id"])

    def list_entries(self) -> List[WaitlistEntryOut]:
        rows = self._data(self._request("GET", "/admin/waitlist"))
        return [WaitlistEntryOut.model_validate(row) for row in rows]

    def count(self) -> int:
        return self._data(self._request("GET", "/admin/waitlist/count"))["count"]

    def export_csv(self) -> str:
        response = self._request("GET", "/admin/waitlist/export")
        if response.is_error:
            raise StoreError(f"Export failed with status {response.status_code}")
        return response.text

    def clear(self) -> int:
        return self._data(self._request("DELETE", "/waitlist"))["cleared_count"]


class LocalWaitlistStore(WaitlistStore):
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> List[WaitlistEntryOut]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreError(f"Cannot read local waitlist cache: {exc}") from exc
        return [WaitlistEntryOut.model_validate(item) for item in raw]

    def _save(self, entries: List[WaitlistEntryOut]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [entry.model_dump(mode="json") for entry in entries]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def submit(self, data: WaitlistIn) -> SubmitResult:
        entries = self._load()
        email = str(data.email).lower()
        if any(entry.email.lower() == email for entry in entries):
            return SubmitResult(
                success=False,
                message="This email is already registered in our waitlist",
                duplicate=True,
                stored_locally=True,
            )

        entry = WaitlistEntryOut(
            id=max((e.id for e in entries), default=0) + 1,
            name=data.name,
            email=email,
            phone=data.phone,
            interest=data.interest,
            submitted_at=datetime.now(timezone.utc),
        )
        entries.append(entry)
        self._save(entries)
        logger.info(f"Saved waitlist entry {entry.id} to local cache")
        return SubmitResult(
            success=True,
            message="Successfully joined the waitlist! (Saved locally until server is available)",
            id=entry.id,
            stored_locally=True,
        )

    def list_entries(self) -> List[WaitlistEntryOut]:
        return sorted(self._load(), key=lambda e: (e.submitted_at, e.id), reverse=True)

    def count(self) -> int:
        return len(self._load())

    def export_csv(self) -> str:
        return render_csv(self.list_entries())

    def clear(self) -> int:
        cleared = self.count()
        self.path.unlink(missing_ok=True)
        return cleared


class CachedWaitlistStore(WaitlistStore):
    def __init__(self, remote: WaitlistStore, local: WaitlistStore):
        self.remote = remote
        self.local = local

    def _fallback(self, operation: str, exc: StoreUnavailable) -> WaitlistStore:
        logger.warning(f"{operation}: {exc}; using local cache")
        return self.local

    def submit(self, data: WaitlistIn) -> SubmitResult:
        try:
            return self.remote.submit(data)
        except StoreUnavailable as exc:
            return self._fallback("submit", exc).submit(data)

    def list_entries(self) -> List[WaitlistEntryOut]:
        try:
            return self.remote.list_entries()
        except StoreUnavailable as exc:
            return self._fallback("list", exc).list_entries()

    def count(self) -> int:
        try:
            return self.remote.count()
        except StoreUnavailable as exc:
            return self._fallback("count", exc).count()

    def export_csv(self) -> str:
        try:
            return self.remote.export_csv()
        except StoreUnavailable as exc:
            return self._fallback("export", exc).export_csv()

    def clear(self) -> int:
        try:
            return self.remote.clear()
        except StoreUnavailable as exc:
            return self._fallback("clear", exc).clear()
