import pytest

from types import SimpleNamespace
from unittest.mock import MagicMock
from telethon.tl import types, functions

from disappearing_messages.models.token_models import DisappearingMessageToken
from disappearing_messages.protocol.telegram import (
    build_set_ttl_request,
    expire_timer_of,
    token_from_message,
)


# --- Helpers ---

def make_message(ttl_period=None, message_id=1):
    """Create a mock Telegram message carrying the given ttl_period."""
    message = MagicMock(spec=types.Message)
    message.id = message_id
    message.ttl_period = ttl_period
    return message


def make_ttl_service_message(period, message_id=2):
    """Create a mock service message announcing a timer change."""
    action = MagicMock(spec=types.MessageActionSetMessagesTTL)
    action.period = period

    message = MagicMock(spec=types.MessageService)
    message.id = message_id
    message.action = action
    return message


# --- Tests ---

@pytest.mark.parametrize("ttl_period, expected", [
    (None, DisappearingMessageToken.disabled_token()),
    (0, DisappearingMessageToken.disabled_token()),
    (1, DisappearingMessageToken.create(True, 1)),
    (86400, DisappearingMessageToken.create(True, 86400)),
])
def test_token_from_message_ttl_period(ttl_period, expected):
    assert token_from_message(make_message(ttl_period)) == expected


def test_token_from_service_message():
    token = token_from_message(make_ttl_service_message(604800))

    assert token.enabled
    assert token.duration_seconds == 604800


def test_service_message_disabling_timer():
    assert token_from_message(make_ttl_service_message(0)) == DisappearingMessageToken.disabled_token()


def test_other_service_action_uses_ttl_period():
    message = MagicMock(spec=types.MessageService)
    message.id = 3
    message.action = MagicMock(spec=types.MessageActionChatEditTitle)
    message.ttl_period = None

    assert expire_timer_of(message) == 0


def test_object_without_ttl_period_is_disabled():
    assert expire_timer_of(SimpleNamespace(id=4)) == 0
    assert token_from_message(SimpleNamespace(id=4)) == DisappearingMessageToken.disabled_token()


def test_build_set_ttl_request_enabled():
    peer = types.InputPeerSelf()
    request = build_set_ttl_request(peer, DisappearingMessageToken.from_protocol_timer(300))

    assert isinstance(request, functions.messages.SetHistoryTTLRequest)
    assert request.period == 300
    assert request.peer == peer


def test_build_set_ttl_request_disabled():
    request = build_set_ttl_request(types.InputPeerSelf(), DisappearingMessageToken.disabled_token())

    assert request.period == 0


def test_round_trip_through_service_message():
    token = DisappearingMessageToken.create(True, 3600)
    request = build_set_ttl_request(types.InputPeerSelf(), token)

    assert token_from_message(make_ttl_service_message(request.period)) == token
