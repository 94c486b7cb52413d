from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from src.libs.result import Result


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    text: str
    html: Optional[str] = None


class EmailSender(ABC):
    """Outbound email collaborator"""

    @abstractmethod
    async def send(self, message: EmailMessage) -> Result[None]:
        """
        Deliver a message.

        Returns:
            Result with None, or Error(EMAIL_DISPATCH_FAILED). Provider details
            are logged by the sender, never put in the error message.
        """
        pass
