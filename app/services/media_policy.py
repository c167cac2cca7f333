# services/media_policy.py
from typing import Optional

from core.config import settings


def requires_media_relay(url: Optional[str], body: Optional[str]) -> bool:
    """
    Cheap pre-filter: the target is the Chakra provider and the raw body
    mentions a media type. Substring test only; the relay validates structure.
    """
    if not url or not body:
        return False
    if settings.PROVIDER_HOST_MARKER not in url:
        return False
    return any(marker in body for marker in settings.MEDIA_MARKERS)
