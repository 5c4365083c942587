from sqlalchemy import Column, String, Text, Boolean, Enum, JSON
from event_quotes.models.base import BaseModel
from event_quotes.core.enums import TemplateCategory


class EmailTemplate(BaseModel):
    __tablename__ = "email_templates"

    name = Column(String(120), nullable=False)
    category = Column(Enum(TemplateCategory), nullable=False, default=TemplateCategory.CUSTOM)
    subject = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    variables = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
