from typing import Any, Dict, Optional

from core.config import settings
from core.logger import logger
from services.job_processor import job_processor

logger.info(f"{settings.PROJECT_NAME} loaded")


def _message_bodies(records):
    for record in records:
        yield (record or {}).get("body")


def handler(event: Optional[Dict[str, Any]], context: Any = None) -> Dict[str, Any]:
    """
    AWS Lambda entry point for the SQS trigger.

    Every decodable message is reported to the result queue, so the whole
    batch is acknowledged; no batchItemFailures are returned.
    """
    request_id = getattr(context, "aws_request_id", None)
    records = (event or {}).get("Records") or []
    if not records:
        logger.info({"event": "empty_batch", "request_id": request_id})
        return {"received": 0, "skipped": 0, "delivered": 0, "failed": 0}

    logger.info({"event": "batch_received", "request_id": request_id, "size": len(records)})
    summary = job_processor.process_batch(_message_bodies(records))
    return summary.as_dict()
