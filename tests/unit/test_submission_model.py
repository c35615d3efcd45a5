"""
Unit tests for the submission models.

Covers display-name resolution, draft normalization and the JSON codec
shared by the local and remote stores.
"""

import json

import pytest
from pydantic import ValidationError

from noor_archive.exceptions import EmptyContentError, SubmissionValidationError
from noor_archive.models.submission import (
    ANONYMOUS_FALLBACK,
    UNKNOWN_AUTHOR,
    SubmissionDraft,
    SubmissionRecord,
    SubmissionType,
    dump_submissions,
    parse_submission_rows,
    parse_submissions,
)


class TestDisplayName:
    """Test cases for SubmissionRecord.display_name."""

    def test_anonymous_uses_pseudonym_even_with_name(self, record_factory):
        record = record_factory(100, anonymous=True, name="Ada Lovelace", pseudonym="SereneWillow42")
        assert record.display_name == "SereneWillow42"

    def test_anonymous_without_pseudonym_never_shows_name(self, record_factory):
        record = record_factory(100, anonymous=True, name="Ada Lovelace", pseudonym="")
        assert record.display_name == ANONYMOUS_FALLBACK

    def test_named_uses_name(self, record_factory):
        assert record_factory(100, name="Ada").display_name == "Ada"

    def test_named_with_empty_name_falls_back(self, record_factory):
        assert record_factory(100, name="").display_name == UNKNOWN_AUTHOR


class TestSubmissionDraft:
    """Test cases for SubmissionDraft."""

    def test_contact_fields_are_trimmed(self):
        draft = SubmissionDraft(email="  a@umn.edu ", name=" Ada ", content="x")
        assert draft.email == "a@umn.edu"
        assert draft.name == "Ada"

    def test_text_content_is_trimmed(self):
        draft = SubmissionDraft(type=SubmissionType.TEXT, content="  <p>hi</p>\n")
        assert draft.normalized_content == "<p>hi</p>"

    def test_drawing_content_is_kept_verbatim(self):
        draft = SubmissionDraft(type="drawing", content="data:image/png;base64,AAAA")
        assert draft.type is SubmissionType.DRAWING
        assert draft.normalized_content == "data:image/png;base64,AAAA"

    def test_none_content_becomes_empty(self):
        assert SubmissionDraft(content=None).content == ""


class TestSubmissionRecord:
    """Test cases for SubmissionRecord."""

    def test_record_is_immutable(self, record_factory):
        record = record_factory(100)
        with pytest.raises(ValidationError):
            record.display = False

    def test_to_wire_has_exactly_the_record_fields(self, record_factory):
        wire = record_factory(100).to_wire()
        assert set(wire) == {
            "email", "name", "pseudonym", "anonymous", "display", "type", "content", "timestamp"
        }
        assert wire["type"] == "text"
        assert "id" not in wire

    def test_lax_remote_values_are_accepted(self):
        record = SubmissionRecord.model_validate({
            "email": None,
            "name": "Ada",
            "pseudonym": None,
            "anonymous": "FALSE",
            "display": "TRUE",
            "type": "drawing",
            "content": "data:image/png;base64,AAAA",
            "timestamp": "1723800000000",
            "row": 7,
        })
        assert record.email == ""
        assert record.pseudonym == ""
        assert record.anonymous is False
        assert record.display is True
        assert record.timestamp == 1723800000000

    def test_unknown_type_is_rejected(self):
        with pytest.raises(ValidationError):
            SubmissionRecord(type="video", content="x", timestamp=1)


class TestCreate:
    """Test cases for SubmissionRecord.create."""

    def test_valid_anonymous_record(self):
        record = SubmissionRecord.create(
            anonymous=True, pseudonym="GentleRiver7", type="text", content="<p>hi</p>", timestamp=1
        )
        assert record.display_name == "GentleRiver7"

    @pytest.mark.parametrize("anonymous, pseudonym", [(False, "X"), (True, "")])
    def test_pseudonym_must_match_anonymous_flag(self, anonymous, pseudonym):
        with pytest.raises(SubmissionValidationError):
            SubmissionRecord.create(
                name="Ada", anonymous=anonymous, pseudonym=pseudonym,
                type="text", content="hi", timestamp=1,
            )

    @pytest.mark.parametrize("content", ["", "   \n"])
    def test_blank_content_is_rejected(self, content):
        with pytest.raises(EmptyContentError):
            SubmissionRecord.create(type="text", content=content, timestamp=1)

    def test_parsing_tolerates_inconsistent_pseudonym(self):
        record = SubmissionRecord.model_validate(
            {"name": "Ada", "pseudonym": "X", "anonymous": False, "type": "text", "content": "hi", "timestamp": 1}
        )
        assert record.display_name == "Ada"


class TestCodec:
    """Test cases for parse_submissions and dump_submissions."""

    def test_dump_is_compact_json_array(self, record_factory):
        blob = dump_submissions([record_factory(100), record_factory(200)])
        data = json.loads(blob)
        assert [item["timestamp"] for item in data] == [100, 200]
        assert ", " not in blob

    def test_dump_keeps_non_ascii(self, record_factory):
        blob = dump_submissions([record_factory(100, content="<p>نور</p>")])
        assert "نور" in blob

    def test_parse_accepts_text_and_python_data(self, record_factory):
        records = [record_factory(100)]
        blob = dump_submissions(records)
        assert parse_submissions(blob) == records
        assert parse_submissions(json.loads(blob)) == records

    def test_parse_rejects_non_list(self):
        with pytest.raises(ValidationError):
            parse_submissions('{"timestamp": 1}')

    def test_parse_rejects_malformed_json(self):
        with pytest.raises(ValidationError):
            parse_submissions("[{not json")

    def test_parse_rows_skips_invalid_entries(self, record_factory):
        rows = [record_factory(1).to_wire(), {"timestamp": 1.5}, record_factory(2).to_wire()]
        records, skipped = parse_submission_rows(rows)
        assert [r.timestamp for r in records] == [1, 2]
        assert skipped == 1
