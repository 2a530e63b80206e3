from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable, Optional

import requests

from ..common.datetime_utils import now_local, to_epoch_ms
from ..core.constants import DEFAULT_REMOTE_TIMEOUT_SECONDS
from ..core.exceptions import RemotePushFailed, RemoteUnavailable
from ..attendance.model import CheckInRecord

logger = logging.getLogger(__name__)

# Apps Script web apps reject CORS preflight, so everything is posted as text/plain.
_POST_HEADERS = {"Content-Type": "text/plain;charset=utf-8"}


class SheetsClient:
    """HTTP client for the spreadsheet-backed web app."""

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_REMOTE_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._session = session or requests.Session()
        self._timeout = timeout
        self._clock = clock

    def _post(self, url: str, body: dict) -> None:
        try:
            response = self._session.post(
                url,
                data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                headers=_POST_HEADERS,
                timeout=self._timeout,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            raise RemotePushFailed(str(e)) from e
        if not response.ok:
            raise RemotePushFailed(f"HTTP {response.status_code}")

    def _get_json(self, url: str, params: dict):
        # Cache busting: the web app is served through a caching proxy.
        params = dict(params, t=to_epoch_ms(self._clock()))
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise RemoteUnavailable(str(e)) from e

    def push_record(self, url: str, record: CheckInRecord) -> bool:
        try:
            self._post(url, record.to_dict())
        except RemotePushFailed as e:
            logger.warning("push of record %s failed: %s", record.record_id, e)
            return False
        return True

    def edit_record(self, url: str, *, record: CheckInRecord, new_timestamp: int, new_status: str) -> bool:
        body = {
            "action": "editRecord",
            "staffId": record.staff_id,
            "originalTimestamp": record.timestamp,
            "newTimestamp": new_timestamp,
            "status": new_status,
            "type": record.type.value,
            "reason": record.reason,
        }
        try:
            self._post(url, body)
        except RemotePushFailed as e:
            logger.warning("edit of record %s failed: %s", record.record_id, e)
            return False
        return True

    def push_settings(self, url: str, *, lat: float, lng: float, max_distance: float) -> bool:
        body = {"action": "saveSettings", "lat": lat, "lng": lng, "maxDistance": max_distance}
        try:
            self._post(url, body)
        except RemotePushFailed as e:
            logger.warning("settings push failed: %s", e)
            return False
        return True

    def fetch_settings(self, url: str) -> Optional[dict]:
        data = self._get_json(url, {})
        return data if isinstance(data, dict) else None

    def fetch_records(self, url: str) -> list[CheckInRecord]:
        data = self._get_json(url, {"action": "getRecords"})
        if not isinstance(data, list):
            return []

        records = []
        for item in data:
            try:
                records.append(CheckInRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug("skipping malformed remote record: %s", e)
        logger.info("fetched %d records from remote sheet", len(records))
        return records
