import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession
from event_quotes.schemas.auth import TokenOut, AdminOut
from event_quotes.models.admin_user import AdminUser
from event_quotes.models.base import utcnow
from event_quotes.db.session import get_db
from event_quotes.core.security import create_access_token, verify_password, get_current_admin
from event_quotes.core.response_builders import build_admin_response

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenOut)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db: AsyncSession = Depends(get_db)):
    email = form_data.username.strip().lower()
    res = await db.execute(select(AdminUser).where(AdminUser.email == email))
    admin = res.scalars().first()
    if not admin or not verify_password(form_data.password, admin.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not admin.is_active:
        raise HTTPException(status_code=403, detail="Account disabled")

    admin.last_login = utcnow()
    await db.commit()
    logger.info(f"Admin {admin.id} logged in")

    token = create_access_token(str(admin.id), admin.role)
    return {"access_token": token}


@router.get("/me", response_model=AdminOut)
async def me(admin: AdminUser = Depends(get_current_admin)):
    return build_admin_response(admin)
