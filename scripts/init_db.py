"""Create the waitlist table. Set CREATE_TEST_ENTRY=1 to also insert a sample signup."""
import asyncio
import os

from app.features.waitlist.schemas.waitlist import WaitlistIn
from app.features.waitlist.services.waitlist import WaitlistService
from app.platform.db.session import SessionLocal, engine, init_db
from app.platform.exceptions import DuplicateEmailError


async def main():
    print("🚀 Running database initialization...")
    await init_db()
    print("✅ Database table ready")

    if os.getenv("CREATE_TEST_ENTRY"):
        async with SessionLocal() as db:
            try:
                entry = await WaitlistService(db).add_entry(
                    WaitlistIn(
                        name="Test User",
                        email="test@example.com",
                        phone="1234567890",
                        interest="Testing database setup",
                    )
                )
                print(f"✅ Created test entry (ID: {entry.id})")
            except DuplicateEmailError:
                print("ℹ️ Skipping test entry creation: already exists")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
