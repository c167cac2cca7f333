# services/dispatcher.py
from typing import Dict, Optional

import requests

from core.config import settings
from core.http_client import get_http_session, is_success
from core.logger import logger
from schemas.job_models import OutcomeRecord

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
EMPTY_BODY = "{}"


class Dispatcher:
    """Final delivery call to the provider; decides the job's disposition."""

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session

    @property
    def session(self) -> requests.Session:
        return self._session or get_http_session()

    def dispatch(
        self,
        job_id: int,
        url: str,
        body: Optional[str],
        headers: Dict[str, str],
    ) -> OutcomeRecord:
        """
        POST `body` as JSON to `url`.

        2xx -> STATUS_DELIVERED, anything else -> STATUS_FAILED. Transport
        errors are STATUS_FAILED with the error text as ResponseContent.
        No retry here; redelivery belongs to the queue.
        """
        request_headers = dict(headers)
        request_headers["Content-Type"] = JSON_CONTENT_TYPE
        payload = (body if body is not None else EMPTY_BODY).encode("utf-8")

        try:
            resp = self.session.post(
                url,
                data=payload,
                headers=request_headers,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(f"Dispatch transport error for job {job_id}: {e}")
            return OutcomeRecord(job_id=job_id, status=settings.STATUS_FAILED, response_content=str(e))

        status = settings.STATUS_DELIVERED if is_success(resp.status_code) else settings.STATUS_FAILED
        if status == settings.STATUS_FAILED:
            logger.warning(f"Dispatch for job {job_id} returned HTTP {resp.status_code}")
        return OutcomeRecord(job_id=job_id, status=status, response_content=resp.text)


dispatcher = Dispatcher()
