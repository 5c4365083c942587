"""Communication log and email templates"""
import logging
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from event_quotes.core.auth_utils import check_not_found, get_quote_or_404
from event_quotes.core.enums import CommunicationType
from event_quotes.core.response_builders import build_communication_response
from event_quotes.core.security import get_current_admin, require_super_admin
from event_quotes.db.session import get_db
from event_quotes.models.base import utcnow
from event_quotes.models.communication import CustomerCommunication
from event_quotes.models.template import EmailTemplate
from event_quotes.schemas.communication import (
    CommunicationCreate,
    CommunicationOut,
    RenderedTemplate,
    TemplateCreate,
    TemplateOut,
)
from event_quotes.services.formatting import replace_template_variables

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/admin", tags=["communications"], dependencies=[Depends(get_current_admin)])


@router.get("/quotes/{quote_id}/communications", response_model=List[CommunicationOut])
async def list_communications(quote_id: int, db: AsyncSession = Depends(get_db)):
    await get_quote_or_404(db, quote_id)
    res = await db.execute(
        select(CustomerCommunication)
        .where(CustomerCommunication.quote_id == quote_id)
        .order_by(CustomerCommunication.sent_at.desc(), CustomerCommunication.id.desc())
    )
    return [build_communication_response(c) for c in res.scalars().all()]


@router.post("/quotes/{quote_id}/communications", response_model=CommunicationOut)
async def log_communication(
    quote_id: int,
    payload: CommunicationCreate,
    db: AsyncSession = Depends(get_db),
    current_admin=Depends(get_current_admin),
):
    quote = await get_quote_or_404(db, quote_id)
    sent_at = utcnow()

    communication = CustomerCommunication(
        quote_id=quote.id,
        sent_by=current_admin.id,
        sent_at=sent_at,
        communication_type=payload.communication_type,
        subject=payload.subject if payload.communication_type == CommunicationType.EMAIL else None,
        message=payload.message,
        status=payload.status,
        extra=payload.metadata,
    )
    db.add(communication)
    quote.last_contacted_at = sent_at
    await db.commit()
    await db.refresh(communication)

    logger.info(f"Logged {payload.communication_type} for quote {quote.id} by admin {current_admin.id}")
    return build_communication_response(communication)


@router.get("/templates", response_model=List[TemplateOut])
async def list_templates(db: AsyncSession = Depends(get_db)):
    res = await db.execute(
        select(EmailTemplate)
        .where(EmailTemplate.is_active.is_(True))
        .order_by(EmailTemplate.category.asc(), EmailTemplate.id.asc())
    )
    return [TemplateOut.model_validate(t) for t in res.scalars().all()]


@router.post("/templates", response_model=TemplateOut)
async def create_template(
    payload: TemplateCreate,
    db: AsyncSession = Depends(get_db),
    current_admin=Depends(require_super_admin),
):
    template = EmailTemplate(**payload.model_dump())
    db.add(template)
    await db.commit()
    await db.refresh(template)
    logger.info(f"Template {template.id} created by admin {current_admin.id}")
    return TemplateOut.model_validate(template)


@router.get("/templates/{template_id}/render", response_model=RenderedTemplate)
async def render_template(
    template_id: int,
    quote_id: int = Query(...),
    db: AsyncSession = Depends(get_db),
):
    res = await db.execute(select(EmailTemplate).where(EmailTemplate.id == template_id))
    template = res.scalars().first()
    check_not_found(template, "Template", template_id)
    quote = await get_quote_or_404(db, quote_id)
    return RenderedTemplate(
        template_id=template.id,
        quote_id=quote.id,
        subject=replace_template_variables(template.subject, quote),
        body=replace_template_variables(template.body, quote),
    )
