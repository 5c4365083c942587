"""Request guard helpers"""
from fastapi import HTTPException
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from event_quotes.models.quote import Quote


def check_not_found(item, resource_name: str = "Resource", resource_id: Optional[int] = None) -> None:

    if not item:
        if resource_id:
            raise HTTPException(
                status_code=404,
                detail=f"{resource_name} with id {resource_id} not found"
            )
        raise HTTPException(status_code=404, detail=f"{resource_name} not found")


async def get_quote_or_404(db: AsyncSession, quote_id: int) -> Quote:
    res = await db.execute(select(Quote).where(Quote.id == quote_id))
    quote = res.scalars().first()
    check_not_found(quote, "Quote", quote_id)
    return quote
