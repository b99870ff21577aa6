"""
Telegram expiration-timer bridge.

Telegram transmits the disappearing-messages timer as ``ttl_period`` (seconds,
absent when off) on regular messages, and as the ``period`` of a
``MessageActionSetMessagesTTL`` service message when a chat member changes
the timer. This module is the only place where those wire values are turned
into timer tokens and back. Nothing here talks to the network.
"""

from typing import Any, Optional

from telethon.tl import types, functions

from ..models.token_models import DisappearingMessageToken
from ..common.log import log_protocol_timer_received, log_set_ttl_request_built


def expire_timer_of(message: Any) -> int:
    """
    Extract the raw expiration timer carried by a Telegram message.

    Args:
        message: Telethon message or service message

    Returns:
        Timer in seconds, 0 if the message carries none
    """
    if isinstance(message, types.MessageService) and isinstance(message.action, types.MessageActionSetMessagesTTL):
        period = message.action.period
    else:
        period = getattr(message, 'ttl_period', None)
    return period or 0


def token_from_message(message: Any) -> DisappearingMessageToken:
    """Timer token described by a Telegram message."""
    expire_timer = expire_timer_of(message)
    message_id: Optional[int] = getattr(message, 'id', None)
    log_protocol_timer_received(message_id, expire_timer)
    return DisappearingMessageToken.from_protocol_timer(expire_timer)


def build_set_ttl_request(peer: Any, token: DisappearingMessageToken) -> functions.messages.SetHistoryTTLRequest:
    """
    Build the request that applies token as the chat's message TTL.

    Args:
        peer: Input peer of the chat
        token: Timer to apply

    Returns:
        SetHistoryTTLRequest ready to be sent by a client
    """
    period = token.to_protocol_timer()
    log_set_ttl_request_built(period)
    return functions.messages.SetHistoryTTLRequest(peer=peer, period=period)
