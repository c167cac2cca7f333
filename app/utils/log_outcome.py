import json
from datetime import datetime, timezone
from core.config import settings
from core.logger import logger
from schemas.job_models import OutcomeRecord


def log_outcome(record: OutcomeRecord, relayed: bool = False) -> OutcomeRecord:
    """
    One structured log line per processed job.
    """
    response = record.response_content or ""
    log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "event": "job_delivered",
        "job_id": record.job_id,
        "status": record.status,
        "media_relayed": relayed,
        "response_preview": response[:settings.LOG_BODY_PREVIEW_CHARS],
        "response_length": len(response),
    }

    if record.status != settings.STATUS_DELIVERED:
        log_data["event"] = "job_failed"
        logger.warning(json.dumps(log_data, ensure_ascii=False))
    else:
        logger.info(json.dumps(log_data, ensure_ascii=False))

    return record
