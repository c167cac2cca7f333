"""Shared test fixtures for the outbound dispatcher."""
import os

# Settings load at import time; required values must exist before any app import
os.environ.setdefault("RESULT_QUEUE_URL", "https://sqs.us-east-1.amazonaws.com/000000000000/outbound-results")
os.environ.setdefault("SQS_REGION", "us-east-1")

import json
from unittest.mock import MagicMock

import pytest

CHAKRA_URL = "https://api.chakrahq.com/v1/ext/plugin/whatsapp/plg-42/api/v19.0/messages"
PUBLIC_URL = "https://cdn.chakrahq.com/media/abc123.jpg"


def make_response(status_code=200, text="", content=b"", json_data=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text if text or json_data is None else json.dumps(json_data)
    resp.content = content
    if json_data is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_data
    resp.raise_for_status = MagicMock()
    return resp


def make_message(job_id=101, url=CHAKRA_URL, header="Authorization:Bearer tok", body=None, **extra):
    payload = {
        "CodSysFilaEnvioMensagens": job_id,
        "Url": url,
        "Header": header,
        "Body": body,
        "Instancia": "inst-1",
    }
    payload.update(extra)
    return json.dumps(payload)


@pytest.fixture
def image_body():
    return json.dumps({
        "messaging_product": "whatsapp",
        "to": "5511999990000",
        "type": "image",
        "image": {"link": "http://origin/img.jpg"},
    })


@pytest.fixture
def session():
    """A requests.Session stand-in: origin download ok, upload ok, dispatch ok."""
    s = MagicMock()
    s.get.return_value = make_response(200, content=b"\x89PNG-bytes")
    upload_ok = make_response(200, json_data={"_data": {"publicMediaUrl": PUBLIC_URL}})
    dispatch_ok = make_response(200, text='{"messages":[{"id":"wamid.1"}]}')
    s.post.side_effect = [upload_ok, dispatch_ok]
    return s


@pytest.fixture
def published():
    """Collects reported OutcomeRecords in place of the SQS reporter."""
    records = []

    def _publish(record):
        records.append(record)
        return f"msg-{len(records)}"

    _publish.records = records
    return _publish
