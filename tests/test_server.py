"""Tests for the MCP tool functions, driven through an in-memory transport."""

import pytest

from salto_encoder_mcp import server
from salto_encoder_mcp.client import SaltoClient
from salto_encoder_mcp.protocol.framing import ACK, NAK


@pytest.fixture
def connected(fake_transport, monkeypatch):
    monkeypatch.setattr(server, "_client", SaltoClient(fake_transport))
    return fake_transport


def test_tools_require_connection(monkeypatch):
    monkeypatch.setattr(server, "_client", None)
    with pytest.raises(RuntimeError):
        server.is_ready()


def test_connect_without_endpoint(monkeypatch):
    monkeypatch.setattr(server, "_client", None)
    for name in ("SALTO_HOST", "SALTO_PORT", "SALTO_SERIAL_PORT"):
        monkeypatch.delenv(name, raising=False)
    assert "error" in server.connect()


def test_is_ready(connected):
    connected.feed([ACK])
    assert server.is_ready() == {"ready": True}


def test_send_command_success(connected, make_answer):
    connected.feed(make_answer("CO", "101"))
    result = server.send_command("CO", ["101"])
    assert result["fields"] == ["CO", "101"]
    assert "error" not in result


def test_send_command_protocol_error(connected, make_answer):
    connected.feed(make_answer("TD"))
    result = server.send_command("CN", ["999"])
    assert result["kind"] == "ProtocolError"
    assert result["code"] == "TD"
    assert result["response"]["fields"] == ["TD"]


def test_send_command_nak(connected):
    connected.feed([NAK])
    result = server.send_command("CN", ["101"])
    assert result["kind"] == "NakError"


def test_send_command_skip_lrc_override_is_restored(connected, make_answer):
    connected.feed(make_answer("CN", lrc=0x00))
    assert server.send_command("CN", skip_lrc=True)["fields"] == ["CN"]
    assert not server._client.lrc_skipped


def test_send_command_invalid_code(connected):
    assert "error" in server.send_command("CNX")


def test_describe_error():
    assert server.describe_error("ov")["code"] == "OV"
    assert "error" in server.describe_error("ZZ")


def test_error_codes_resource():
    codes = server.error_codes_resource()
    assert len(codes) == 12
    assert codes["EO"].startswith("The requested guest card")


def test_disconnect(connected):
    assert server.disconnect() == {"disconnected": True}
    assert server._client is None
    assert not connected.connected


def test_connect_failed_handshake_leaves_no_client(fake_transport, monkeypatch):
    """An ENQ exchange that fails closes the transport and keeps no client."""
    monkeypatch.setattr(server, "_client", None)
    monkeypatch.setattr(server, "SocketConnection", lambda *a, **kw: fake_transport)
    with pytest.raises(ConnectionError):
        server.connect(host="10.0.0.5", port=8090)
    assert server._client is None
    assert not fake_transport.connected


def test_connect_success(fake_transport, monkeypatch):
    monkeypatch.setattr(server, "_client", None)
    monkeypatch.setattr(server, "SocketConnection", lambda *a, **kw: fake_transport)
    fake_transport.feed([ACK])
    result = server.connect(host="10.0.0.5", port=8090, skip_lrc=False)
    assert result["ready"] is True
    assert result["endpoint"] == "10.0.0.5:8090"
    assert server._client.transport is fake_transport
