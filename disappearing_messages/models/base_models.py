from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .token_models import DisappearingMessageToken

#---------------------------
# *      Conversation Configuration
#---------------------------

class BaseDisappearingMessagesConfiguration(ABC):
    thread_id:        str   # conversation the timer belongs to, unique
    is_enabled:       bool
    duration_seconds: int   # unsigned 32-bit, may be remembered while disabled

    # tokens are derived from these two fields only, the record itself is never changed by a token

    @abstractmethod
    def as_token(self) -> "DisappearingMessageToken":
        """Derive the normalized timer token of this configuration."""
        pass
