# services/header_materializer.py
from typing import Dict, Optional

from core.logger import logger

PAIR_SEPARATOR = ";"
NAME_VALUE_SEPARATOR = ":"
RESERVED_HEADER = "content-type"


def materialize_headers(header_spec: Optional[str]) -> Dict[str, str]:
    """
    Turn "Name:Value;Name2:Value2" into a header mapping.

    - The colon splits on its first occurrence only.
    - Pairs without a colon (or with an empty name) are skipped.
    - Content-Type is dropped: the caller fixes the body's content type.
    - No escaping: values cannot contain ';' (a ':' after the first is kept).
    """
    headers: Dict[str, str] = {}
    if not header_spec or not header_spec.strip():
        return headers

    for item in header_spec.split(PAIR_SEPARATOR):
        if not item:
            continue
        name, sep, value = item.partition(NAME_VALUE_SEPARATOR)
        if not sep:
            logger.debug({"event": "header_pair_skipped", "reason": "no_separator"})
            continue
        name = name.strip()
        if not name or name.lower() == RESERVED_HEADER:
            continue
        headers[name] = value.strip()

    return headers
