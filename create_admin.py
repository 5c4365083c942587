import asyncio
import sys
from sqlalchemy.future import select
from event_quotes.core.enums import AdminRole
from event_quotes.core.security import hash_password
from event_quotes.db.session import AsyncSessionLocal, engine
from event_quotes.models.registry import AdminUser, Base


async def create_admin_user(email: str, password: str, full_name: str = "", role: AdminRole = AdminRole.ADMIN) -> bool:
    email = email.strip().lower()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with AsyncSessionLocal() as db:
            res = await db.execute(select(AdminUser).where(AdminUser.email == email))
            if res.scalars().first():
                print(f"Error: Admin '{email}' already exists")
                return False

            admin = AdminUser(
                email=email,
                full_name=full_name,
                password_hash=hash_password(password),
                role=role,
            )
            db.add(admin)
            await db.commit()
            await db.refresh(admin)

        print(f"Admin '{email}' created successfully")
        print(f"Admin ID: {admin.id}")
        print(f"Role: {admin.role}")
        return True

    except Exception as e:
        print(f"Error creating admin user: {str(e)}")
        return False
    finally:
        await engine.dispose()


def main():
    args = [a for a in sys.argv[1:] if a != "--super"]
    if len(args) < 2:
        print("Usage: python create_admin.py <email> <password> [full name] [--super]")
        sys.exit(1)

    role = AdminRole.SUPER_ADMIN if "--super" in sys.argv else AdminRole.ADMIN
    email, password = args[0], args[1]
    full_name = " ".join(args[2:])

    if not email or not password:
        print("Error: email and password cannot be empty")
        sys.exit(1)

    success = asyncio.run(create_admin_user(email, password, full_name, role))
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
