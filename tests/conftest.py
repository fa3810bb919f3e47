"""Shared fixtures: the sample webhook published in ChatWork's developer notes."""

import pytest

TOKEN = "A9ne+ygvdV0IZBaPFV2zC1e5Bk+IsI14BPwieRoBQNU="
BODY = (
    b'{"webhook_setting_id":"246","webhook_event_type":"message_created",'
    b'"webhook_event_time":1511238729,"webhook_event":{"message_id":"984676321621704704",'
    b'"room_id":36818150,"account_id":1484814,"body":"test","send_time":1511238729,'
    b'"update_time":0}}'
)
SIGNATURE = "G7Gtrh5Ee6d8erOVXhWPtUrkNJqqIT5vwLU50KhyLQk="


@pytest.fixture
def token():
    return TOKEN


@pytest.fixture
def sample_body():
    return BODY


@pytest.fixture
def sample_signature():
    return SIGNATURE


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    monkeypatch.delenv("CHATWORKHOOK_CONFIG", raising=False)
    monkeypatch.delenv("CHATWORKHOOK_SECRET", raising=False)
    monkeypatch.setenv("CHATWORKHOOK_CONFIG_DIR", str(tmp_path / "config"))
