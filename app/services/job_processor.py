# services/job_processor.py
"""
Per-message orchestration: decode -> (relay?) -> dispatch -> report.

Once a message decodes, the job always produces exactly one OutcomeRecord and
that record is always handed to the reporter. Nothing raised by one job
escapes into the batch loop.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from core.config import settings
from core.logger import logger
from integrations.sqs_client import publish_outcome
from schemas.job_models import JobDecodeError, OutboundJob, OutcomeRecord
from services.dispatcher import Dispatcher, dispatcher as default_dispatcher
from services.header_materializer import materialize_headers
from services.media_policy import requires_media_relay
from services.media_relay import MediaRelay, media_relay as default_relay
from utils.log_outcome import log_outcome


@dataclass
class BatchSummary:
    received: int = 0
    skipped: int = 0
    delivered: int = 0
    failed: int = 0

    def as_dict(self) -> dict:
        return {
            "received": self.received,
            "skipped": self.skipped,
            "delivered": self.delivered,
            "failed": self.failed,
        }


class JobProcessor:
    def __init__(
        self,
        relay: Optional[MediaRelay] = None,
        dispatcher: Optional[Dispatcher] = None,
        publish: Optional[Callable[[OutcomeRecord], Optional[str]]] = None,
    ):
        self.relay = relay or default_relay
        self.dispatcher = dispatcher or default_dispatcher
        self.publish = publish or publish_outcome

    def decode(self, raw: str) -> Optional[OutboundJob]:
        try:
            return OutboundJob.from_message(raw)
        except JobDecodeError as e:
            logger.error(f"Job decode failed, message dropped: {e}")
            return None

    def execute(self, job: OutboundJob) -> OutcomeRecord:
        """Relay (when needed) and dispatch. Never raises."""
        relayed = False
        try:
            headers = materialize_headers(job.header)

            if requires_media_relay(job.url, job.body):
                logger.info(f"Media detected for Chakra job {job.job_id}, starting pre-upload")
                new_body = self.relay.relay(job, headers)
                relayed = new_body != job.body
                job.body = new_body

            record = self.dispatcher.dispatch(job.job_id, job.url, job.body, headers)
        except Exception as e:
            logger.error(f"Processing error job_id={job.job_id}: {e}")
            record = OutcomeRecord(job_id=job.job_id, status=settings.STATUS_FAILED, response_content=str(e))

        return log_outcome(record, relayed=relayed)

    def process_record(self, raw: Optional[str]) -> Optional[OutcomeRecord]:
        """
        Handle one queue message. Returns the reported record, or None when
        the message was blank or undecodable (nothing to report against).
        """
        if raw is None or not raw.strip():
            return None

        job = self.decode(raw)
        if job is None:
            return None

        record = self.execute(job)
        self.publish(record)
        return record

    def process_batch(self, messages: Iterable[Optional[str]]) -> BatchSummary:
        summary = BatchSummary()
        for raw in messages:
            summary.received += 1
            try:
                record = self.process_record(raw)
            except Exception as e:
                # publish_outcome is best effort; this only guards injected reporters
                logger.exception(f"Unexpected error while processing message: {e}")
                summary.failed += 1
                continue

            if record is None:
                summary.skipped += 1
            elif record.status == settings.STATUS_DELIVERED:
                summary.delivered += 1
            else:
                summary.failed += 1

        logger.info({"event": "batch_processed", **summary.as_dict()})
        return summary


job_processor = JobProcessor()
