"""Seed data script to populate a demo account and its warehouses."""
import asyncio
import uuid

from sqlalchemy import select

from app.core.database import async_session_maker, engine, Base
from app.core.security import create_access_token
from app.models.account import Account
from app.services.warehouse_service import WarehouseService


DEMO_WAREHOUSES = [
    {
        "name": "Mumbai Central Hub",
        "title": "Demo Traders",
        "registered_name": "Demo Traders Pvt Ltd",
        "contact_person": {"name": "Asha Rao", "phone": "+91 98200 11111", "email": "asha@example.com"},
        "address": {
            "full_address": "12 Dock Road, Mazgaon",
            "city": "Mumbai",
            "state": "Maharashtra",
            "pincode": "400010",
        },
        "gstin": "27AAPFU0939F1ZV",
    },
    {
        "name": "Delhi NCR Facility",
        "title": "Demo Traders",
        "contact_person": {"name": "Ravi Kumar", "phone": "9811122222"},
        "address": {
            "full_address": "Plot 7, Udyog Vihar Phase 4",
            "landmark": "Near metro depot",
            "city": "Gurugram",
            "state": "Haryana",
            "pincode": "122015",
        },
        "support_contact": {"email": "support@example.com", "phone": "9811133333"},
    },
    {
        "name": "Bangalore Returns Desk",
        "title": "Demo Traders",
        "contact_person": {"name": "Meera Iyer", "phone": "7760044444"},
        "address": {
            "full_address": "44 Hosur Road, Electronic City",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pincode": "560100",
        },
        "notes": "Returns only on weekdays",
    },
]


async def seed_data():
    """Seed a demo account through the warehouse service."""
    async with async_session_maker() as session:
        # Check if data already exists
        result = await session.execute(select(Account).limit(1))
        if result.scalar_one_or_none():
            print("Data already seeded. Skipping...")
            return

        account = Account(id=str(uuid.uuid4()), name="Demo Traders", is_active=True)
        session.add(account)
        await session.commit()
        print(f"Created account: {account.name} (ID: {account.id})")

        user_id = str(uuid.uuid4())
        service = WarehouseService(session, account_id=account.id, user_id=user_id)
        for data in DEMO_WAREHOUSES:
            warehouse = await service.create(data)
            marker = " [default]" if warehouse.is_default else ""
            print(f"Created warehouse: {warehouse.name} ({warehouse.code}){marker}")

        token = create_access_token(user_id=user_id, account_id=account.id, email="owner@example.com")
        print("\nSeed data created successfully!")
        print(f"\nBearer token for the demo account:\n{token}")


async def main():
    """Main entry point."""
    # Create tables if they don't exist (for local development)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await seed_data()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
