"""Tests for the mobile confirmation protocol."""
import base64
from unittest.mock import MagicMock, patch
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from enums import Urls
from steam_lib.guard import (
    ConfirmationExecutor, ConfirmationAction, ConfirmationStep, ConfirmationType,
    Confirmation, generate_confirmation_key
)
from steam_lib.guard import confirmations as confirmations_module
from utils.exceptions import TransportError, ProtocolError, DecodeError, CryptoError


IDENTITY_SECRET = base64.b64encode(b"identity-secret-bytes").decode()
STEAM_ID = "76561198000000000"
DEVICE_ID = "android:00000000-0000-0000-0000-000000000000"

CONF_JSON = {
    "type": 3,
    "type_name": "Market Listing",
    "id": "13579",
    "creator_id": "2468",
    "nonce": "9876543210",
    "creation_time": 1700000000,
    "cancel": "Cancel",
    "accept": "Create Listing",
    "icon": "https://example.invalid/icon.png",
    "multi": False,
    "headline": "AK-47 | Redline",
    "summary": ["Sell for $10.00"],
    "warn": None
}


@pytest.fixture
def time_oracle():
    """Time oracle returning strictly increasing server times."""
    oracle = MagicMock()
    oracle.now.side_effect = [1700000000, 1700000007, 1700000011]
    return oracle


@pytest.fixture
def executor(session, time_oracle):
    return ConfirmationExecutor(IDENTITY_SECRET, STEAM_ID, session, device_id=DEVICE_ID, time_oracle=time_oracle)


def _query(call) -> dict[str, list[str]]:
    return parse_qs(urlsplit(call.args[1]).query)


def _list_response(make_response, *confs):
    return make_response({"success": True, "conf": list(confs)})


def test_get_confirmations_signs_list_request(executor, session, make_response):
    session.request.return_value = _list_response(make_response, CONF_JSON)

    confirmations = executor.get_confirmations()

    call = session.request.call_args
    assert call.args[0] == "GET"
    assert call.args[1].startswith(f"{Urls.MOBILECONF}/getlist?")
    expected_key = generate_confirmation_key(IDENTITY_SECRET, "conf", 1700000000)
    # Ключ уже экранирован и не должен экранироваться повторно
    assert f"k={expected_key}&" in call.args[1]
    assert _query(call) == {
        "p": [DEVICE_ID],
        "a": [STEAM_ID],
        "k": [unquote(expected_key)],
        "t": ["1700000000"],
        "m": ["react"],
        "tag": ["conf"],
    }
    assert call.kwargs["headers"]["X-Requested-With"] == "com.valvesoftware.android.steam.community"

    assert confirmations == [Confirmation(
        type=ConfirmationType.CREATE_LISTING,
        type_name="Market Listing",
        id="13579",
        creator_id="2468",
        nonce="9876543210",
        creation_time=1700000000,
        cancel="Cancel",
        accept="Create Listing",
        icon="https://example.invalid/icon.png",
        multi=False,
        headline="AK-47 | Redline",
        summary=["Sell for $10.00"],
        warn=None
    )]
    assert str(confirmations[0]) == "Confirmation: Sell for $10.00"


def test_empty_confirmation_list(executor, session, make_response):
    session.request.return_value = _list_response(make_response)
    assert executor.get_confirmations() == []


def test_unknown_confirmation_type_is_kept_as_int(executor, session, make_response):
    session.request.return_value = _list_response(make_response, dict(CONF_JSON, type=42, summary=[], headline=""))

    confirmation, = executor.get_confirmations()

    assert confirmation.type == 42
    assert str(confirmation) == "Unknown Market Listing"


def test_decide_uses_fresh_timestamp_and_action_tag(executor, session, time_oracle, make_response):
    session.request.side_effect = [
        _list_response(make_response, CONF_JSON),
        make_response({"success": True}),
    ]

    with patch.object(confirmations_module, "generate_confirmation_key",
                      wraps=generate_confirmation_key) as key_spy:
        confirmation, = executor.get_confirmations()
        result = executor.respond_to_confirmation(confirmation, ConfirmationAction.ACCEPT)

    assert result.success is True
    assert time_oracle.now.call_count == 2
    assert [c.args[1:] for c in key_spy.call_args_list] == [("conf", 1700000000), ("accept", 1700000007)]

    decide_call = session.request.call_args_list[1]
    assert decide_call.args[0] == "GET"
    assert decide_call.args[1].startswith(f"{Urls.MOBILECONF}/ajaxop?")
    query = _query(decide_call)
    assert query["op"] == ["allow"]
    assert query["tag"] == ["accept"]
    assert query["t"] == ["1700000007"]
    assert query["cid"] == ["13579"]
    assert query["ck"] == ["9876543210"]
    assert query["p"] == [DEVICE_ID]
    assert query["a"] == [STEAM_ID]
    assert query["m"] == ["react"]
    assert f"k={generate_confirmation_key(IDENTITY_SECRET, 'accept', 1700000007)}&" in decide_call.args[1]


def test_reject_maps_to_cancel_operation(executor, session, make_response):
    session.request.return_value = make_response({"success": False, "message": "Already handled"})
    confirmation = ConfirmationExecutor._parse_confirmation(CONF_JSON)

    result = executor.respond_to_confirmation(confirmation, ConfirmationAction.REJECT)

    assert result.success is False
    assert result.message == "Already handled"
    query = _query(session.request.call_args)
    assert query["op"] == ["cancel"]
    assert query["tag"] == ["reject"]


def test_respond_to_confirmations_posts_all_ids(executor, session, make_response):
    session.request.return_value = make_response({"success": True})
    first = ConfirmationExecutor._parse_confirmation(CONF_JSON)
    second = ConfirmationExecutor._parse_confirmation(dict(CONF_JSON, id="24680", nonce="1122"))

    result = executor.respond_to_confirmations([first, second])

    assert result.success is True
    call = session.request.call_args
    assert call.args == ("POST", f"{Urls.MOBILECONF}/multiajaxop")
    form = parse_qs(call.kwargs["data"])
    assert form["cid[]"] == ["13579", "24680"]
    assert form["ck[]"] == ["9876543210", "1122"]
    assert form["op"] == ["allow"]
    assert form["tag"] == ["accept"]


def test_allow_all_confirmations_filters_by_type(executor, session, make_response):
    trade = dict(CONF_JSON, type=2, id="1", nonce="11")
    listing = dict(CONF_JSON, type=3, id="2", nonce="22")
    session.request.side_effect = [
        _list_response(make_response, trade, listing),
        make_response({"success": True}),
    ]

    assert executor.allow_all_confirmations([ConfirmationType.TRADE]) is True

    form = parse_qs(session.request.call_args.kwargs["data"])
    assert form["cid[]"] == ["1"]


def test_allow_all_confirmations_without_matches_sends_nothing(executor, session, make_response):
    session.request.return_value = _list_response(make_response, CONF_JSON)

    assert executor.allow_all_confirmations([ConfirmationType.TRADE]) is True
    assert session.request.call_count == 1


def test_time_fetch_failure_is_tagged_with_step(executor, session, time_oracle):
    original = TransportError("connection reset")
    time_oracle.now.side_effect = original

    with pytest.raises(TransportError) as exc_info:
        executor.get_confirmations()

    assert exc_info.value.step == ConfirmationStep.TIME_FETCH.value
    assert exc_info.value.__cause__ is original
    assert "time fetch" in str(exc_info.value)
    session.request.assert_not_called()


def test_bad_secret_fails_at_hash_step(session, time_oracle):
    executor = ConfirmationExecutor("%%%", STEAM_ID, session, device_id=DEVICE_ID, time_oracle=time_oracle)

    with pytest.raises(CryptoError) as exc_info:
        executor.get_confirmations()

    assert exc_info.value.step == ConfirmationStep.HASH.value
    session.request.assert_not_called()


def test_unexpected_status_fails_at_request_step(executor, session, make_response):
    session.request.return_value = make_response({}, status_code=500)

    with pytest.raises(ProtocolError) as exc_info:
        executor.get_confirmations()

    assert exc_info.value.step == ConfirmationStep.REQUEST.value
    assert not isinstance(exc_info.value, TransportError)


def test_malformed_json_fails_at_decode_step(executor, session, make_response):
    session.request.return_value = make_response("<html>login</html>")

    with pytest.raises(DecodeError) as exc_info:
        executor.get_confirmations()

    assert exc_info.value.step == ConfirmationStep.DECODE.value


def test_rejected_list_is_protocol_error(executor, session, make_response):
    session.request.return_value = make_response({"success": False, "needauth": True})

    with pytest.raises(ProtocolError, match="needauth"):
        executor.get_confirmations()


def test_missing_conf_field_is_protocol_error(executor, session, make_response):
    session.request.return_value = make_response({"success": True})

    with pytest.raises(ProtocolError, match="conf"):
        executor.get_confirmations()


def test_default_device_id_is_derived_from_steam_id(session, time_oracle):
    executor = ConfirmationExecutor(IDENTITY_SECRET, STEAM_ID, session, time_oracle=time_oracle)
    assert executor.device_id.startswith("android:")


@pytest.mark.parametrize("conf", [None, {"id": "1"}, "13579"])
def test_non_list_conf_is_protocol_error(executor, session, make_response, conf):
    session.request.return_value = make_response({"success": True, "conf": conf})

    with pytest.raises(ProtocolError) as exc_info:
        executor.get_confirmations()

    assert exc_info.value.step == ConfirmationStep.DECODE.value


def test_non_dict_conf_entry_is_protocol_error(executor, session, make_response):
    session.request.return_value = _list_response(make_response, "13579")

    with pytest.raises(ProtocolError, match="Malformed confirmation entry") as exc_info:
        executor.get_confirmations()

    assert exc_info.value.step == ConfirmationStep.DECODE.value


@pytest.mark.parametrize("body", [{"success": True, "conf": []}, "<html>login</html>"])
def test_list_response_is_closed(executor, session, make_response, body):
    response = make_response(body)
    response.close = MagicMock(wraps=response.close)
    session.request.return_value = response

    try:
        executor.get_confirmations()
    except DecodeError:
        pass

    response.close.assert_called_once()
