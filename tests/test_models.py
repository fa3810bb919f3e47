"""Tests for the payload models, event types and epoch timestamps."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from chatworkhook.errors import (
    InvalidEventTypeError,
    InvalidTimestampError,
    MalformedPayloadError,
)
from chatworkhook.models import WebhookEvent, WebhookPayload, decode_payload, encode_payload
from chatworkhook.types import (
    EPOCH,
    EventType,
    decode_epoch,
    encode_epoch,
    event_type_name,
)


def _at(seconds: int) -> datetime:
    return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=seconds)


MENTION_BODY = json.dumps({
    "webhook_setting_id": "12345",
    "webhook_event_type": "mention_to_me",
    "webhook_event_time": 1498028130,
    "webhook_event": {
        "from_account_id": 123456,
        "to_account_id": 1484814,
        "room_id": 567890123,
        "message_id": "789012345",
        "body": "[To:1484814]Hi",
        "send_time": 1498028125,
        "update_time": 0,
    },
})


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

class TestEventType:
    def test_wire_literals(self):
        assert [e.value for e in EventType] == [
            "message_created",
            "message_updated",
            "mention_to_me",
        ]

    def test_str_is_wire_literal(self):
        assert str(EventType.MESSAGE_UPDATED) == "message_updated"

    def test_event_type_name(self):
        assert event_type_name(EventType.MENTION_TO_ME) == "mention_to_me"
        assert event_type_name(3) == "unknown"
        assert event_type_name("message_created") == "unknown"

    @pytest.mark.parametrize("event_type", list(EventType))
    def test_round_trip(self, event_type):
        payload = WebhookPayload(event_type=event_type)
        decoded = decode_payload(encode_payload(payload))
        assert decoded.event_type is event_type

    @pytest.mark.parametrize("literal", ["bogus", "MESSAGE_CREATED", "message-created", ""])
    def test_unknown_literal_rejected(self, literal):
        body = json.dumps({"webhook_event_type": literal})
        with pytest.raises(InvalidEventTypeError) as info:
            decode_payload(body)
        assert info.value.value == literal
        assert repr(literal) in str(info.value)

    def test_non_string_rejected(self):
        with pytest.raises(InvalidEventTypeError):
            decode_payload(b'{"webhook_event_type": 1}')


# ---------------------------------------------------------------------------
# Epoch timestamps
# ---------------------------------------------------------------------------

class TestEpochTime:
    @pytest.mark.parametrize("seconds", [0, 1, -1, 1511238729, 2**31, 253402300799])
    def test_round_trip(self, seconds):
        decoded = decode_epoch(seconds)
        assert decoded == _at(seconds)
        assert encode_epoch(decoded) == seconds

    def test_decoded_value_is_utc(self):
        assert decode_epoch(1511238729).tzinfo is timezone.utc

    def test_sub_second_truncated(self):
        assert encode_epoch(_at(10) + timedelta(microseconds=999999)) == 10
        assert encode_epoch(_at(-1) - timedelta(microseconds=500000)) == -1

    def test_naive_datetime_treated_as_utc(self):
        assert encode_epoch(datetime(2017, 11, 21, 4, 32, 9)) == 1511238729

    def test_aware_datetime_in_other_zone(self):
        jst = timezone(timedelta(hours=9))
        assert encode_epoch(datetime(2017, 11, 21, 13, 32, 9, tzinfo=jst)) == 1511238729

    @pytest.mark.parametrize("value", ['"1511238729"', "1511238729.5", "true", "null", "{}"])
    def test_non_integer_rejected(self, value):
        body = '{"webhook_event_time": %s}' % value
        with pytest.raises(InvalidTimestampError):
            decode_payload(body)

    def test_nested_timestamp_rejected(self):
        with pytest.raises(InvalidTimestampError) as info:
            decode_payload(b'{"webhook_event": {"send_time": "yesterday"}}')
        assert info.value.value == "yesterday"

    def test_out_of_range_rejected(self):
        with pytest.raises(InvalidTimestampError):
            decode_payload(b'{"webhook_event_time": 99999999999999999999}')


# ---------------------------------------------------------------------------
# Payload decoding
# ---------------------------------------------------------------------------

class TestDecodePayload:
    def test_sample_payload(self, sample_body):
        payload = decode_payload(sample_body)

        assert payload.setting_id == "246"
        assert payload.event_type is EventType.MESSAGE_CREATED
        assert payload.time == _at(1511238729)

        event = payload.event
        assert event.send_time == _at(1511238729)
        assert event.update_time == _at(0)
        assert event.body == "test"
        assert event.room_id == 36818150
        assert event.account_id == 1484814
        assert event.message_id == "984676321621704704"
        assert event.from_account_id is None
        assert event.to_account_id is None

    def test_accepts_text(self, sample_body):
        assert decode_payload(sample_body.decode()) == decode_payload(sample_body)

    def test_mention_without_account_id(self):
        payload = decode_payload(MENTION_BODY)
        assert payload.event_type is EventType.MENTION_TO_ME
        assert payload.event.account_id is None
        assert payload.event.from_account_id == 123456
        assert payload.event.to_account_id == 1484814

    def test_null_optional_field(self):
        payload = decode_payload(b'{"webhook_event": {"room_id": null, "body": "hi"}}')
        assert payload.event.room_id is None
        assert payload.event.body == "hi"

    def test_missing_fields_get_zero_values(self):
        payload = decode_payload(b"{}")
        assert payload.setting_id == ""
        assert payload.event_type is EventType.MESSAGE_CREATED
        assert payload.time == EPOCH
        assert payload.event == WebhookEvent()

    def test_field_names_are_not_wire_keys(self):
        payload = decode_payload(
            b'{"setting_id": "x", "event_type": "mention_to_me", "time": 5}'
        )
        assert payload.setting_id == ""
        assert payload.event_type is EventType.MESSAGE_CREATED
        assert payload.time == EPOCH

    def test_null_event_rejected(self):
        with pytest.raises(MalformedPayloadError) as info:
            decode_payload(b'{"webhook_event": null}')
        assert "webhook_event" in str(info.value)

    def test_unknown_keys_ignored(self, sample_body):
        data = json.loads(sample_body)
        data["webhook_event"]["extra"] = {"nested": True}
        data["something_new"] = 1
        assert decode_payload(json.dumps(data)) == decode_payload(sample_body)

    @pytest.mark.parametrize(
        "body",
        [
            b"not json",
            b'{"webhook_setting_id": "246"',
            b"[1, 2, 3]",
            b'"message_created"',
            b"",
        ],
    )
    def test_malformed_json(self, body):
        with pytest.raises(MalformedPayloadError):
            decode_payload(body)

    @pytest.mark.parametrize(
        "body",
        [
            b'{"webhook_setting_id": 246}',
            b'{"webhook_event": "message"}',
            b'{"webhook_event": {"room_id": "36818150"}}',
            b'{"webhook_event": {"account_id": 1.5}}',
        ],
    )
    def test_wrong_field_types(self, body):
        with pytest.raises(MalformedPayloadError):
            decode_payload(body)

    def test_malformed_error_names_the_field(self):
        with pytest.raises(MalformedPayloadError) as info:
            decode_payload(b'{"webhook_event": {"room_id": "36818150"}}')
        assert "webhook_event.room_id" in str(info.value)

    def test_payload_is_immutable(self, sample_body):
        payload = decode_payload(sample_body)
        with pytest.raises(Exception):
            payload.setting_id = "other"


# ---------------------------------------------------------------------------
# Payload encoding
# ---------------------------------------------------------------------------

class TestEncodePayload:
    def test_sample_round_trip(self, sample_body):
        encoded = encode_payload(decode_payload(sample_body))
        assert json.loads(encoded) == json.loads(sample_body)

    def test_absent_fields_omitted(self):
        encoded = json.loads(encode_payload(decode_payload(MENTION_BODY)))
        assert "account_id" not in encoded["webhook_event"]
        assert encoded["webhook_event"]["from_account_id"] == 123456

    def test_built_in_python(self):
        payload = WebhookPayload(
            setting_id="7",
            event_type=EventType.MESSAGE_UPDATED,
            time=_at(1511238729),
            event=WebhookEvent(room_id=1, send_time=datetime(2017, 11, 21, 4, 32, 9)),
        )
        assert json.loads(encode_payload(payload)) == {
            "webhook_setting_id": "7",
            "webhook_event_type": "message_updated",
            "webhook_event_time": 1511238729,
            "webhook_event": {"room_id": 1, "send_time": 1511238729},
        }
