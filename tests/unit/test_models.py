"""Unit tests for data models."""

import json

import pytest
from pydantic import ValidationError

from gmail_metadata_archiver.models import MessageHeader, MessageRecord


class TestMessageRecord:
    """Test suite for MessageRecord model."""

    def test_to_json_uses_gmail_field_names(self) -> None:
        record = MessageRecord(
            id="a",
            thread_id="t1",
            label_ids=["INBOX"],
            snippet="hi",
            headers=[MessageHeader(name="From", value="x@y.com")],
        )

        data = json.loads(record.to_json())

        assert data == {
            "id": "a",
            "threadId": "t1",
            "labelIds": ["INBOX"],
            "snippet": "hi",
            "headers": [{"name": "From", "value": "x@y.com"}],
        }
        assert list(data) == ["id", "threadId", "labelIds", "snippet", "headers"]

    def test_to_json_is_pretty_printed(self) -> None:
        assert MessageRecord(id="a").to_json().startswith('{\n  "id": "a"')

    def test_accepts_alias_input(self) -> None:
        record = MessageRecord.model_validate({"id": "a", "threadId": "t", "labelIds": ["X"]})

        assert record.thread_id == "t"
        assert record.label_ids == ["X"]

    def test_record_is_immutable(self) -> None:
        record = MessageRecord(id="a")

        with pytest.raises(ValidationError):
            record.snippet = "changed"

    def test_id_is_required(self) -> None:
        with pytest.raises(ValidationError):
            MessageRecord()
