from typing import List
from pydantic import BaseModel, Field, model_validator

from ..config import app_config


MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY


class TimerPresets(BaseModel):
    """Timer durations offered for a conversation's disappearing messages."""
    valid_durations_seconds: List[int] = Field(
        default_factory=lambda: [5, 10, 30, MINUTE, 5 * MINUTE, 30 * MINUTE, HOUR, 6 * HOUR, 12 * HOUR, DAY, WEEK],
        min_length=1,
        description="Selectable timer durations in seconds, ascending"
    )
    default_duration_seconds: int = Field(
        default_factory=lambda: app_config.DEFAULT_DURATION_SECONDS,
        gt=0,
        description="Duration remembered for a conversation before a timer is chosen"
    )

    @model_validator(mode='after')
    def check_durations(self) -> 'TimerPresets':
        if any(value <= 0 for value in self.valid_durations_seconds):
            raise ValueError("Timer presets must be positive durations")
        self.valid_durations_seconds = sorted(set(self.valid_durations_seconds))
        return self

    def is_preset(self, duration_seconds: int) -> bool:
        return duration_seconds in self.valid_durations_seconds


timer_presets = TimerPresets()
