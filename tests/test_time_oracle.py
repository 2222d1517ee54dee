"""Tests for the Steam server time oracle."""
from unittest.mock import MagicMock

import pytest
import requests

from enums import Urls
from steam_lib.guard import SteamTimeOracle
from utils.exceptions import TransportError, ProtocolError, DecodeError


def test_now_posts_form_request_and_returns_server_time(session, make_response):
    session.request.return_value = make_response({"response": {"server_time": "1700000123", "skew_tolerance_seconds": "60"}})

    assert SteamTimeOracle(session).now() == 1700000123

    args, kwargs = session.request.call_args
    assert args == ("POST", Urls.QUERY_TIME)
    assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
    assert kwargs["data"] is None


def test_now_is_never_cached(session, make_response):
    session.request.side_effect = [
        make_response({"response": {"server_time": "100"}}),
        make_response({"response": {"server_time": "101"}}),
    ]
    oracle = SteamTimeOracle(session)

    assert [oracle.now(), oracle.now()] == [100, 101]
    assert session.request.call_count == 2


def test_transport_failure_is_propagated(session):
    session.request.side_effect = requests.ConnectionError("boom")

    with pytest.raises(TransportError, match="boom"):
        SteamTimeOracle(session).now()


@pytest.mark.parametrize("body", [{}, {"response": {}}, {"response": None}, [1, 2]])
def test_missing_server_time_is_protocol_error(session, make_response, body):
    session.request.return_value = make_response(body)

    with pytest.raises(ProtocolError, match="server_time"):
        SteamTimeOracle(session).now()


def test_non_numeric_server_time_is_protocol_error(session, make_response):
    session.request.return_value = make_response({"response": {"server_time": "soon"}})

    with pytest.raises(ProtocolError, match="Invalid server_time"):
        SteamTimeOracle(session).now()


def test_malformed_json_is_decode_error(session, make_response):
    session.request.return_value = make_response("<html>")

    with pytest.raises(DecodeError):
        SteamTimeOracle(session).now()


def test_unexpected_status_is_protocol_error(session, make_response):
    session.request.return_value = make_response({}, status_code=503)

    with pytest.raises(ProtocolError, match="503"):
        SteamTimeOracle(session).now()


@pytest.mark.parametrize("body, error", [
    ({"response": {"server_time": "100"}}, None),
    ("not json", DecodeError),
])
def test_response_is_closed(session, make_response, body, error):
    response = make_response(body)
    response.close = MagicMock(wraps=response.close)
    session.request.return_value = response

    if error:
        with pytest.raises(error):
            SteamTimeOracle(session).now()
    else:
        SteamTimeOracle(session).now()

    response.close.assert_called_once()
