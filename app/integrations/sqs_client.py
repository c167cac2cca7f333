# app/integrations/sqs_client.py
import json
from typing import Optional
from core.config import settings
from core.logger import logger
from core.aws_client import get_sqs_client
from schemas.job_models import OutcomeRecord

_sqs = get_sqs_client()


def publish_outcome(record: OutcomeRecord, client=None) -> Optional[str]:
    """
    Publish an OutcomeRecord to the result queue.

    Best effort: failures are logged and swallowed. The triggering job must
    still count as processed, otherwise the source queue would redeliver a
    message whose HTTP POST already went out.
    """
    sqs = client or _sqs
    body = json.dumps(record.to_message(), separators=(",", ":"), ensure_ascii=False)
    try:
        resp = sqs.send_message(QueueUrl=settings.RESULT_QUEUE_URL, MessageBody=body)
    except Exception as e:
        logger.error(f"SQS result publish failed job_id={record.job_id}: {e}")
        return None

    msg_id = resp.get("MessageId", "")
    logger.info("SQS publish ok job_id=%s msg_id=%s", record.job_id, msg_id)
    return msg_id
