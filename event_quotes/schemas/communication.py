from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from event_quotes.core.enums import ChangeType, CommunicationStatus, CommunicationType, TemplateCategory


class CommunicationCreate(BaseModel):
    communication_type: CommunicationType
    subject: Optional[str] = None
    message: str = Field(min_length=1)
    status: CommunicationStatus = CommunicationStatus.SENT
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CommunicationOut(BaseModel):
    id: int
    quote_id: int
    sent_by: Optional[int] = None
    sent_at: datetime
    communication_type: CommunicationType
    subject: Optional[str] = None
    message: str
    status: CommunicationStatus
    metadata: Dict[str, Any]


class HistoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quote_id: int
    changed_by: Optional[int] = None
    changed_at: datetime
    field_name: str
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    change_type: ChangeType


class TimelineEvent(BaseModel):
    id: int
    timestamp: datetime
    type: Literal["history", "communication"]
    data: Union[HistoryOut, CommunicationOut]


class TemplateCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    category: TemplateCategory = TemplateCategory.CUSTOM
    subject: str
    body: str
    variables: List[str] = Field(default_factory=list)
    is_active: bool = True


class TemplateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    name: str
    category: TemplateCategory
    subject: str
    body: str
    variables: List[str]
    is_active: bool


class RenderedTemplate(BaseModel):
    template_id: int
    quote_id: int
    subject: str
    body: str
