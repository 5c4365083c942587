from sqlalchemy import Column, String, Boolean, DateTime, Enum
from event_quotes.models.base import BaseModel
from event_quotes.core.enums import AdminRole


class AdminUser(BaseModel):
    __tablename__ = "admin_users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(120), nullable=False, default="")
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(AdminRole), nullable=False, default=AdminRole.ADMIN)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime(timezone=True))
