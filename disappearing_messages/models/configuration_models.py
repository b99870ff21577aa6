"""
Per-conversation disappearing-messages configuration.

The stored record keeps the last chosen duration even while the timer is
switched off, so that switching it back on restores the previous value.
Tokens derived from it are always normalized.
"""

from pydantic import BaseModel, Field

from . import base_models as base
from .token_models import DisappearingMessageToken
from ..config import UINT32_MAX
from ..common.configuration import timer_presets
from ..common.log import log_configuration_derived, log_configuration_updated, log_non_preset_timer


class DisappearingMessagesConfiguration(base.BaseDisappearingMessagesConfiguration, BaseModel):
    thread_id: str = Field(..., min_length=1, description="Conversation the timer belongs to")
    is_enabled: bool = Field(default=False, description="Whether disappearing messages are switched on")
    duration_seconds: int = Field(
        default_factory=lambda: timer_presets.default_duration_seconds,
        ge=0, le=UINT32_MAX,
        description="Chosen timer in seconds, kept while disabled"
    )

    @classmethod
    def build_default(cls, thread_id: str) -> "DisappearingMessagesConfiguration":
        """Disabled configuration remembering the default duration."""
        return cls(thread_id=thread_id, is_enabled=False, duration_seconds=timer_presets.default_duration_seconds)

    def as_token(self) -> DisappearingMessageToken:
        token = DisappearingMessageToken.from_configuration(self)
        log_configuration_derived(self.thread_id, token.duration_string())
        return token

    def has_changed_from(self, token: DisappearingMessageToken) -> bool:
        """Whether applying token would change the timer of this conversation."""
        return self.as_token() != token

    def copy_with_token(self, token: DisappearingMessageToken) -> "DisappearingMessagesConfiguration":
        """
        Return a new configuration carrying the token's timer.

        A disabled token switches the timer off but keeps the remembered duration.

        Args:
            token: Timer to apply

        Returns:
            New DisappearingMessagesConfiguration, this record is left unchanged
        """
        if token.enabled:
            if not timer_presets.is_preset(token.duration_seconds):
                log_non_preset_timer(self.thread_id, token.duration_seconds)
            updated = self.model_copy(update={"is_enabled": True, "duration_seconds": token.duration_seconds})
        else:
            updated = self.model_copy(update={"is_enabled": False})

        current = self.as_token()
        if current != token:
            log_configuration_updated(self.thread_id, current.duration_string(), token.duration_string())
        return updated
