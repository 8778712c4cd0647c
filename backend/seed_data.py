"""
Seed script - creates the first coordinator account and prints an access token
Run with: python -m seed_data

Override the defaults with COORDINATOR_EMAIL, COORDINATOR_NAME and COORDINATOR_PASSWORD.
"""
import asyncio
import os

from sqlalchemy import select

from placement_hub.database import async_session_maker, init_db
from placement_hub.models import Student, StudentRole
from placement_hub.services.auth import create_access_token, get_password_hash


async def seed_database():
    await init_db()

    email = os.getenv("COORDINATOR_EMAIL", "coordinator@placement.local")
    name = os.getenv("COORDINATOR_NAME", "Placement Coordinator")
    password = os.getenv("COORDINATOR_PASSWORD", "coordinator123")

    async with async_session_maker() as db:
        result = await db.execute(select(Student).where(Student.email == email))
        coordinator = result.scalar_one_or_none()

        if coordinator is None:
            coordinator = Student(
                name=name,
                email=email,
                hashed_password=get_password_hash(password),
                role=StudentRole.COORDINATOR,
                roll_no="COORD001",
            )
            db.add(coordinator)
            await db.commit()
            print(f"✅ Coordinator created: {email} / {password}")
        else:
            print(f"Coordinator already exists: {email}")

        token = create_access_token({"sub": str(coordinator.id)})
        print(f"   Bearer token: {token}")


if __name__ == "__main__":
    asyncio.run(seed_database())
