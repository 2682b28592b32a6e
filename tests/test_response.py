"""Tests for the response model."""

import pytest

from salto_encoder_mcp.models.response import Field, Response
from salto_encoder_mcp.protocol.commands import Message
from salto_encoder_mcp.utils.lrc import compute_lrc

OV_DESCRIPTION = (
    "Overflow. The encoder is still busy executing a previous task and "
    "cannot accept a new one."
)


def _response(*texts, checksum=None):
    fields = [Field(t.encode("latin-1")) for t in texts]
    response = Response(fields=fields, checksum=checksum)
    if checksum is None:
        response.checksum = response.compute_lrc()
    return response


def test_field_accessors():
    field = Field(b"101")
    assert field.data == b"101"
    assert field.text == "101"
    assert len(field) == 3


def test_ack_and_nak_constructors():
    assert Response.ack().is_ack
    assert not Response.ack().is_nak
    assert Response.nak().is_nak
    assert Response.ack().fields == []


def test_ack_and_nak_are_exclusive():
    with pytest.raises(ValueError):
        Response(is_ack=True, is_nak=True)


def test_control_responses_have_no_fields():
    with pytest.raises(ValueError):
        Response(fields=[Field(b"CN")], is_ack=True)


def test_body_bytes_include_separators():
    response = _response("CN", "101")
    assert response.body_bytes() == b"\xB3CN\xB3101"


def test_check_valid_checksum():
    response = _response("CN", "101")
    assert response.checksum == compute_lrc(b"\xB3CN\xB3101")
    assert response.check()


def test_check_invalid_checksum():
    response = _response("CN", checksum=0x00)
    assert not response.check()


def test_skip_lrc_always_passes():
    assert _response("CN", checksum=0x00).check(skip_lrc=True)
    assert _response("CN", checksum=0xFF).check(skip_lrc=True)


def test_control_responses_pass_check():
    assert Response.ack().check()
    assert Response.nak().check()


def test_overflow_is_error():
    response = _response("OV")
    assert response.is_error()
    assert response.error_code == "OV"
    assert response.error_description() == OV_DESCRIPTION


def test_error_code_uses_leading_two_bytes():
    response = _response("EG1", "encoder failure")
    assert response.error_code == "EG"


def test_command_echo_is_not_error():
    response = _response("CN", "101")
    assert not response.is_error()
    assert response.error_description() is None


def test_short_or_missing_first_field_is_not_error():
    assert not _response("O").is_error()
    assert not Response(fields=[], checksum=0).is_error()
    assert not Response.ack().is_error()


def test_get_field():
    response = _response("CN", "101")
    assert response.get_field(1).text == "101"
    assert response.get_field(2) is None


def test_request_association_is_set_once():
    response = _response("CN")
    assert response.request is None
    message = Message("CN", "101")
    response.request = message
    assert response.request is message
    with pytest.raises(ValueError):
        response.request = Message("CO", "101")


def test_to_dict():
    result = _response("OV", checksum=0x00).to_dict()
    assert result["fields"] == ["OV"]
    assert result["checksum"] == "0x00"
    assert result["error_code"] == "OV"
    assert Response.ack().to_dict()["checksum"] is None
