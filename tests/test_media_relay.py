import json
from unittest.mock import MagicMock

import pytest
import requests

from conftest import CHAKRA_URL, PUBLIC_URL, make_response
from schemas.job_models import MediaReference, OutboundJob
from services.media_relay import MediaRelay, build_upload_url


def make_job(body, url=CHAKRA_URL):
    return OutboundJob(job_id=7, url=url, header="Authorization:Bearer t", body=body)


@pytest.fixture
def upload_session():
    s = MagicMock()
    s.get.return_value = make_response(200, content=b"media-bytes")
    s.post.return_value = make_response(200, json_data={"_data": {"publicMediaUrl": PUBLIC_URL}})
    return s


class TestRelaySuccess:
    def test_rewrites_link(self, upload_session, image_body):
        relay = MediaRelay(session=upload_session)
        out = relay.relay(make_job(image_body), {"Authorization": "Bearer t"})

        doc = json.loads(out)
        assert doc["image"]["link"] == PUBLIC_URL
        assert doc["to"] == "5511999990000"
        upload_session.get.assert_called_once()
        assert upload_session.get.call_args.args[0] == "http://origin/img.jpg"

    def test_upload_request_shape(self, upload_session, image_body):
        MediaRelay(session=upload_session).relay(make_job(image_body), {"Authorization": "Bearer t"})

        args, kwargs = upload_session.post.call_args
        assert args[0] == "https://api.chakrahq.com/v1/ext/plugin/whatsapp/plg-42/upload-public-media"
        assert kwargs["headers"] == {"Authorization": "Bearer t"}
        assert kwargs["files"]["file"] == ("file.bin", b"media-bytes", "application/octet-stream")
        assert kwargs["data"] == {"filename": "file.bin"}

    def test_document_uses_its_filename(self, upload_session):
        body = json.dumps({"type": "document", "document": {"link": "https://o/r.pdf", "filename": "report.pdf"}})
        MediaRelay(session=upload_session).relay(make_job(body), {})
        assert upload_session.post.call_args.kwargs["data"] == {"filename": "report.pdf"}

    def test_document_default_filename(self, upload_session):
        body = json.dumps({"type": "document", "document": {"link": "https://o/r"}})
        MediaRelay(session=upload_session).relay(make_job(body), {})
        assert upload_session.post.call_args.kwargs["files"]["file"][0] == "file.pdf"


class TestRelayFallback:
    """Every failure returns exactly the body the relay was given."""

    @pytest.mark.parametrize("body", [
        "not json",
        "[1, 2]",
        json.dumps({"image": {"link": "http://o/a.jpg"}}),
        json.dumps({"type": "", "image": {"link": "http://o/a.jpg"}}),
        json.dumps({"type": "image", "image": {}}),
        json.dumps({"type": "image", "image": {"id": "media-id-123"}}),
        json.dumps({"type": "image", "image": {"link": "ftp://o/a.jpg"}}),
    ])
    def test_unusable_body(self, upload_session, body):
        assert MediaRelay(session=upload_session).relay(make_job(body), {}) == body
        upload_session.get.assert_not_called()
        upload_session.post.assert_not_called()

    def test_no_plugin_id_in_url(self, upload_session, image_body):
        job = make_job(image_body, url="https://api.chakrahq.com/v1/messages")
        assert MediaRelay(session=upload_session).relay(job, {}) == image_body
        upload_session.get.assert_not_called()

    def test_download_error(self, upload_session, image_body):
        upload_session.get.side_effect = requests.ConnectionError("origin unreachable")
        assert MediaRelay(session=upload_session).relay(make_job(image_body), {}) == image_body
        upload_session.post.assert_not_called()

    def test_download_http_error(self, upload_session, image_body):
        resp = make_response(404)
        resp.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        upload_session.get.return_value = resp
        assert MediaRelay(session=upload_session).relay(make_job(image_body), {}) == image_body

    def test_upload_rejected(self, upload_session, image_body):
        upload_session.post.return_value = make_response(500, text="boom")
        assert MediaRelay(session=upload_session).relay(make_job(image_body), {}) == image_body

    def test_upload_response_without_public_url(self, upload_session, image_body):
        upload_session.post.return_value = make_response(200, json_data={"_data": {}})
        assert MediaRelay(session=upload_session).relay(make_job(image_body), {}) == image_body

    def test_upload_response_not_json(self, upload_session, image_body):
        upload_session.post.return_value = make_response(200, text="<html>")
        assert MediaRelay(session=upload_session).relay(make_job(image_body), {}) == image_body

    def test_unexpected_exception(self, upload_session, image_body):
        upload_session.post.side_effect = RuntimeError("unexpected")
        assert MediaRelay(session=upload_session).relay(make_job(image_body), {}) == image_body


class TestRelaySteps:
    def test_extract_plugin_id(self):
        result = MediaRelay(session=MagicMock()).extract_plugin_id(CHAKRA_URL)
        assert result.ok and result.value == "plg-42"

    def test_choose_filename(self):
        assert MediaRelay.choose_filename(MediaReference("video", "http://v")) == "file.bin"
        assert MediaRelay.choose_filename(MediaReference("document", "http://d", "a.docx")) == "a.docx"

    def test_build_upload_url(self):
        assert build_upload_url("abc") == "https://api.chakrahq.com/v1/ext/plugin/whatsapp/abc/upload-public-media"
