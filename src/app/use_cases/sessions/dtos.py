from datetime import datetime

from pydantic import BaseModel


class IssuedSession(BaseModel):
    """Freshly established session. token is the raw cookie value."""

    token: str
    expires_at: datetime
