"""
Prospection - Migration: anciens documents vendeur -> users + prospections.
Run: cd backend && python scripts/migrate_to_prospection.py [collection_source]
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import DB_NAME, create_mongo_client
from services.migration import migrate_legacy_users
from services.repositories import ensure_indexes


async def migrate():
    source = sys.argv[1] if len(sys.argv) > 1 else "users_legacy"

    client = create_mongo_client()
    db = client[DB_NAME]

    await ensure_indexes(db)
    results = await migrate_legacy_users(db, source)

    client.close()

    print("\n════════════════════════════════════")
    print("  MIGRATION REPORT")
    print("════════════════════════════════════")
    print(f"  Source:     {source}")
    print(f"  Migrés:     {results['migrated']}")
    print(f"  Erreurs:    {results['errors']}")
    print("════════════════════════════════════")

    return results


if __name__ == "__main__":
    asyncio.run(migrate())
