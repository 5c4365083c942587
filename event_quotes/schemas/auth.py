from datetime import datetime
from typing import Optional
from pydantic import BaseModel
from event_quotes.core.enums import AdminRole


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AdminOut(BaseModel):
    id: int
    email: str
    full_name: str
    role: AdminRole
    is_active: bool
    last_login: Optional[datetime] = None
