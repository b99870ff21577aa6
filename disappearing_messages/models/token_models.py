"""
Timer token for disappearing messages.

A DisappearingMessageToken is the normalized, immutable snapshot of a
conversation's disappearing-messages timer: whether the timer is on and how
many seconds messages live before they are deleted. Every way of building a
token (the factory, the named constructors, keyword construction, pydantic
validation of stored data, model_copy and model_construct) goes through the
same normalization, so
a token with ``enabled`` out of step with ``duration_seconds`` cannot exist.
"""

from typing import Any, Mapping, Optional, Set, Tuple, TYPE_CHECKING
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, model_validator

from ..config import app_config, UINT32_MAX
from ..common.configuration import MINUTE, HOUR, DAY, WEEK
from ..common.log import (
    ERROR,
    WARNING,
    log_inconsistent_timer_input,
    log_token_created,
    log_token_imported,
    log_validation_error,
)
from ..exceptions.token_exceptions import InvalidTimerDurationError, InvalidTimerFlagError

if TYPE_CHECKING:
    from .base_models import BaseDisappearingMessagesConfiguration


def is_uint32(value: Any) -> bool:
    """Return True if value is an int in the unsigned 32-bit range (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= UINT32_MAX


def normalize_timer(is_enabled: bool, duration_seconds: int) -> Tuple[bool, int]:
    """
    Reconcile an enable flag with a duration.

    The timer counts as disabled when the duration is zero, and a disabled
    timer carries a zero duration. Contradictory input is corrected and
    reported through the log, never raised.

    Args:
        is_enabled: Requested enable flag
        duration_seconds: Requested duration in seconds

    Returns:
        Tuple of (enabled, duration_seconds) satisfying enabled == (duration_seconds > 0)
    """
    effective_enabled = is_enabled and duration_seconds > 0
    effective_duration = duration_seconds if effective_enabled else 0

    level = ERROR if app_config.DEBUG_MODE else WARNING
    if is_enabled != effective_enabled:
        log_inconsistent_timer_input("enabled", is_enabled, effective_enabled, level=level)
    if duration_seconds != effective_duration:
        log_inconsistent_timer_input("duration_seconds", duration_seconds, effective_duration, level=level)

    return effective_enabled, effective_duration


class DisappearingMessageToken(BaseModel):
    """Normalized, immutable disappearing-messages timer setting.

    Tokens compare and hash by value: two tokens are equal when both
    ``enabled`` and ``duration_seconds`` are equal.
    """
    model_config = ConfigDict(frozen=True)

    enabled: StrictBool = Field(default=False, description="Whether disappearing messages are active")
    duration_seconds: int = Field(
        default=0, ge=0, le=UINT32_MAX, strict=True,
        description="Seconds until a message disappears (0 when disabled)"
    )

    @model_validator(mode='before')
    @classmethod
    def normalize_input(cls, data: Any) -> Any:
        # Ill-typed or out-of-range values are left for field validation to reject
        if isinstance(data, dict):
            enabled = data.get('enabled', False)
            duration_seconds = data.get('duration_seconds', 0)
            if isinstance(enabled, bool) and is_uint32(duration_seconds):
                enabled, duration_seconds = normalize_timer(enabled, duration_seconds)
                data = {**data, 'enabled': enabled, 'duration_seconds': duration_seconds}
        return data

    @classmethod
    def create(cls, is_enabled: bool, duration_seconds: int) -> "DisappearingMessageToken":
        """
        Build a token from a possibly inconsistent flag/duration pair.

        Args:
            is_enabled: Whether the caller wants the timer on
            duration_seconds: Requested duration in seconds (unsigned 32-bit)

        Returns:
            Normalized token

        Raises:
            InvalidTimerFlagError: If is_enabled is not a bool
            InvalidTimerDurationError: If duration_seconds is not an unsigned 32-bit int
        """
        if not isinstance(is_enabled, bool):
            raise InvalidTimerFlagError(is_enabled)
        if not is_uint32(duration_seconds):
            raise InvalidTimerDurationError(duration_seconds)

        token = cls(enabled=is_enabled, duration_seconds=duration_seconds)
        log_token_created(token.enabled, token.duration_seconds)
        return token

    @classmethod
    def model_construct(cls, _fields_set: Optional[Set[str]] = None, **values: Any) -> "DisappearingMessageToken":
        """Unvalidated construction is not offered: values are normalized like create()."""
        return cls.create(values.get('enabled', False), values.get('duration_seconds', 0))

    def model_copy(self, *, update: Optional[Mapping[str, Any]] = None, deep: bool = False) -> "DisappearingMessageToken":
        """
        Copy the token, rebuilding it through create() when fields are updated.

        Args:
            update: New values for enabled and/or duration_seconds
            deep: Ignored, tokens hold no nested values

        Returns:
            Normalized token
        """
        if not update:
            return self
        merged = {'enabled': self.enabled, 'duration_seconds': self.duration_seconds, **update}
        return type(self).create(merged['enabled'], merged['duration_seconds'])

    @classmethod
    def disabled_token(cls) -> "DisappearingMessageToken":
        return DISABLED_TOKEN

    @classmethod
    def from_protocol_timer(cls, expire_timer_seconds: int) -> "DisappearingMessageToken":
        """
        Convert a wire-level expiration timer (0 = off) into a token.

        Raises:
            InvalidTimerDurationError: If the value is not an unsigned 32-bit int
        """
        if not is_uint32(expire_timer_seconds):
            raise InvalidTimerDurationError(expire_timer_seconds)

        if expire_timer_seconds > 0:
            return cls.create(True, expire_timer_seconds)
        return cls.disabled_token()

    @classmethod
    def from_configuration(cls, configuration: "BaseDisappearingMessagesConfiguration") -> "DisappearingMessageToken":
        """Derive a token from a stored conversation configuration. The record is only read."""
        return cls.create(configuration.is_enabled, configuration.duration_seconds)

    def to_protocol_timer(self) -> int:
        """Wire-level expiration timer for this token (0 when disabled)."""
        return self.duration_seconds if self.enabled else 0

    def export_token(self) -> str:
        """
        Export the token as JSON string.

        Returns:
            JSON string representation of the token
        """
        return self.model_dump_json()

    @classmethod
    def import_token(cls, json_data: str | bytes) -> "DisappearingMessageToken":
        """
        Import a token from JSON string. The stored values are normalized.

        Args:
            json_data: JSON string representation of a token

        Returns:
            DisappearingMessageToken instance

        Raises:
            ValidationError: If the JSON does not describe a token
        """
        try:
            token = cls.model_validate_json(json_data)
        except ValidationError as e:
            log_validation_error("Timer token import", str(e))
            raise
        log_token_imported(token.enabled, token.duration_seconds)
        return token

    def duration_string(self) -> str:
        """Short human-readable timer, e.g. "off", "30s", "1h 30m", "1w"."""
        if not self.enabled:
            return "off"

        remaining = self.duration_seconds
        parts = []
        for unit, size in (("w", WEEK), ("d", DAY), ("h", HOUR), ("m", MINUTE), ("s", 1)):
            count, remaining = divmod(remaining, size)
            if count:
                parts.append(f"{count}{unit}")
        return " ".join(parts)

    def __str__(self) -> str:
        return self.duration_string()


DISABLED_TOKEN = DisappearingMessageToken.create(False, 0)
