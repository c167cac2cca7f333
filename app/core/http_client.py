# core/http_client.py
"""
Process-wide HTTP session shared by the media relay and the dispatcher.

The session is created once per container and reused across invocations so
connection pools survive between Lambda events. Callers never mutate it.
"""
from typing import Optional

import requests

from core.config import settings
from core.logger import logger


class HttpClient:
    """
    Singleton wrapper around requests.Session.
    """

    _instance: Optional['HttpClient'] = None
    _session: Optional[requests.Session] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._session is None:
            self._session = requests.Session()
            logger.info(
                "HTTP session initialized",
                extra={"timeout": settings.HTTP_TIMEOUT_SECONDS},
            )

    def get_session(self) -> requests.Session:
        return self._session


def get_http_session() -> requests.Session:
    return HttpClient().get_session()


def is_success(status_code: int) -> bool:
    """True for 2xx, matching what the provider treats as accepted."""
    return 200 <= status_code < 300
