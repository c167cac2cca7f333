# services/media_relay.py
"""
Media relay for the Chakra WhatsApp plugin.

Flow: origin download -> multipart upload to Chakra -> swap the media node's
`link` for the returned public URL. Each step returns a StepResult and the
relay stops at the first failure, handing back the body it was given. A relay
never fails the job; worst case the dispatch goes out with the original body.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional, Tuple

import requests

from core.config import settings
from core.http_client import get_http_session, is_success
from core.logger import logger
from schemas.job_models import MediaReference, OutboundJob, StepResult
from utils.json_path import get_path, get_str, set_path

PLUGIN_ID_PATTERN = re.compile(r"whatsapp/([^/]+)")
UPLOAD_PATH = "/v1/ext/plugin/whatsapp/{plugin_id}/upload-public-media"
PUBLIC_URL_PATH = ("_data", "publicMediaUrl")


def build_upload_url(plugin_id: str) -> str:
    base = settings.PROVIDER_UPLOAD_BASE_URL.rstrip("/")
    return base + UPLOAD_PATH.format(plugin_id=plugin_id)


def serialize_document(document: Any) -> str:
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)


class MediaRelay:
    """Re-hosts remote media referenced by a job body with the provider."""

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session

    @property
    def session(self) -> requests.Session:
        return self._session or get_http_session()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def parse_body(self, body: Optional[str]) -> StepResult[Tuple[Dict[str, Any], str]]:
        if not body:
            return StepResult.failure("empty body")
        try:
            document = json.loads(body)
        except ValueError as e:
            return StepResult.failure(f"body is not JSON: {e}")
        if not isinstance(document, dict):
            return StepResult.failure("body is not a JSON object")
        media_type = get_str(document, ["type"])
        if not media_type:
            return StepResult.failure("no type field")
        return StepResult.success((document, media_type))

    def locate_media(self, document: Dict[str, Any], media_type: str) -> StepResult[MediaReference]:
        link = get_str(document, [media_type, "link"])
        if not link or not link.startswith("http"):
            return StepResult.failure("no remote link to rehost")
        filename = get_path(document, [media_type, "filename"])
        return StepResult.success(MediaReference(
            media_type=media_type,
            link=link,
            filename=filename if isinstance(filename, str) else None,
        ))

    def extract_plugin_id(self, url: str) -> StepResult[str]:
        match = PLUGIN_ID_PATTERN.search(url or "")
        if not match:
            return StepResult.failure("no whatsapp/<plugin-id> segment in target URL")
        return StepResult.success(match.group(1))

    def download(self, media: MediaReference) -> StepResult[bytes]:
        try:
            resp = self.session.get(media.link, timeout=settings.HTTP_TIMEOUT_SECONDS)
            resp.raise_for_status()
        except requests.RequestException as e:
            return StepResult.failure(f"origin download failed: {e}")
        return StepResult.success(resp.content)

    @staticmethod
    def choose_filename(media: MediaReference) -> str:
        if media.media_type == "document":
            return media.filename or settings.DEFAULT_DOCUMENT_FILENAME
        return settings.DEFAULT_MEDIA_FILENAME

    def upload(
        self,
        plugin_id: str,
        content: bytes,
        filename: str,
        headers: Dict[str, str],
    ) -> StepResult[str]:
        try:
            resp = self.session.post(
                build_upload_url(plugin_id),
                headers=headers,
                files={"file": (filename, content, "application/octet-stream")},
                data={"filename": filename},
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            return StepResult.failure(f"upload failed: {e}")

        if not is_success(resp.status_code):
            return StepResult.failure(f"upload rejected with HTTP {resp.status_code}: {resp.text[:200]}")

        try:
            payload = resp.json()
        except ValueError:
            return StepResult.failure("upload response is not JSON")

        public_url = get_path(payload, PUBLIC_URL_PATH)
        if not isinstance(public_url, str) or not public_url:
            return StepResult.failure("upload response has no _data.publicMediaUrl")
        return StepResult.success(public_url)

    # ------------------------------------------------------------------
    # Orchestration
    # ------------------------------------------------------------------

    def _relay(self, job: OutboundJob, headers: Dict[str, str]) -> StepResult[str]:
        parsed = self.parse_body(job.body)
        if not parsed.ok:
            return StepResult.failure(parsed.reason)
        document, media_type = parsed.value

        located = self.locate_media(document, media_type)
        if not located.ok:
            return StepResult.failure(located.reason)
        media = located.value

        plugin = self.extract_plugin_id(job.url)
        if not plugin.ok:
            return StepResult.failure(plugin.reason)

        downloaded = self.download(media)
        if not downloaded.ok:
            return StepResult.failure(downloaded.reason)

        filename = self.choose_filename(media)
        uploaded = self.upload(plugin.value, downloaded.value, filename, headers)
        if not uploaded.ok:
            return StepResult.failure(uploaded.reason)

        if not set_path(document, [media_type, "link"], uploaded.value):
            return StepResult.failure("media node is not an object")
        return StepResult.success(serialize_document(document))

    def relay(self, job: OutboundJob, headers: Dict[str, str]) -> str:
        """
        Return the body to dispatch: rewritten with the provider-hosted link,
        or the original body if any step fails.
        """
        original = job.body
        try:
            result = self._relay(job, headers)
        except Exception as e:
            logger.error(f"Media relay aborted for job {job.job_id}: {e}")
            return original

        if not result.ok:
            logger.warning({"event": "media_relay_skipped", "job_id": job.job_id, "reason": result.reason})
            return original

        logger.info({"event": "media_relay_ok", "job_id": job.job_id})
        return result.value


media_relay = MediaRelay()
