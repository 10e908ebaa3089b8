#!/usr/bin/env python3
"""
Seed the registrations store with generated sample data.

Usage:
  python scripts/seed_sample_data.py [--reset] [--seed 42]

Without --reset the script does nothing when the store already has records.
"""

import asyncio
import random
import sys
from pathlib import Path

from sqlalchemy import delete

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pashuvision.application.sample_data import SampleDataGenerator
from pashuvision.config.settings import get_settings
from pashuvision.infrastructure.db.orm.registration import RegistrationORM
from pashuvision.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_schema,
    create_session_factory,
)


async def seed(reset: bool, rng_seed: int | None) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)

    try:
        await create_schema(engine)

        if reset:
            async with session_factory() as session:
                result = await session.execute(delete(RegistrationORM))
                await session.commit()
            print(f"🗑️  Removed {result.rowcount} existing registrations")

        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            existing = await uow.registrations.count()
            if existing:
                print(f"ℹ️  Store already holds {existing} registrations, nothing to do")
                return

            rng = random.Random(rng_seed) if rng_seed is not None else None
            sample = SampleDataGenerator(rng=rng).registrations()
            await uow.registrations.add_many(sample)
            await uow.commit()

        print(f"\n✅ Seeded {len(sample)} sample registrations into {settings.database_url}")
    except Exception as exc:
        print(f"\n❌ Error seeding sample data: {exc}")
        import traceback

        traceback.print_exc()
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed PashuVision with sample registrations")
    parser.add_argument("--reset", action="store_true", help="Delete all registrations first")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible data")
    args = parser.parse_args()

    print("=" * 60)
    print("🐄 Sample data seeder - PashuVision")
    print("=" * 60)

    asyncio.run(seed(args.reset, args.seed))
