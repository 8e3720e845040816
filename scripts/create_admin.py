"""
Script to create an admin user, or promote an existing one.
Run: python scripts/create_admin.py
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lepinet.core.exceptions import AppException
from lepinet.db.database import AsyncSessionLocal, init_db
from lepinet.models import UserRole, VerificationStatus
from lepinet.services.users import user_service


async def create_admin():
    email = input("Admin email: ").strip()
    if not email:
        email = "admin@lepinet.dev"
        print(f"Using default email: {email}")

    first_name = input("First name: ").strip() or "Site"
    last_name = input("Last name: ").strip() or "Admin"

    password = input("Password: ").strip()
    if not password:
        password = "admin123"
        print(f"Using default password: {password}")

    async with AsyncSessionLocal() as db:
        existing = await user_service.get_by_email(db, email)
        if existing:
            if existing.role == UserRole.ADMIN:
                print(f"❌ Admin {email} already exists")
            else:
                existing.role = UserRole.ADMIN
                await db.commit()
                print(f"✅ Promoted {email} to admin")
            return

        try:
            await user_service.create_user(
                db,
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=UserRole.ADMIN,
                verification_status=VerificationStatus.VERIFIED,
            )
        except AppException as e:
            print(f"❌ Error: {e.message}")
            return

        print("\n✅ Admin created")
        print(f"   Email: {email}")
        print("   Role: admin")


async def main():
    await init_db()
    await create_admin()


if __name__ == "__main__":
    print("=" * 50)
    print("   Create LepiNet admin")
    print("=" * 50)
    asyncio.run(main())
