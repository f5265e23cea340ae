"""
Prospection - Initialisation de la base (dev/staging)
Crée les index et un vendeur d'exemple avec sa prospection.
Run: cd backend && python scripts/init_db.py
Reset: python scripts/init_db.py --reset
"""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import DB_NAME, create_mongo_client
from services.repositories import ProspectionRepository, UserRepository, ensure_indexes

SAMPLE_USER = {"phone": "123456789", "nom": "Doe", "prenom": "John"}

SAMPLE_PROSPECTION = {
    "zone": "Zone A",
    "immeuble": "Immeuble 1",
    "blocImmeuble": "Bloc A",
    "appartement": "Apt 101",
    "nomClient": "Client Test",
    "numContact": "987654321",
    "resultatProspection": "Client non intéressé",
    "typeClient": "B2B",
    "locationShared": False,
}


async def reset(db):
    """Vide les collections métier"""
    for name in ("users", "prospections", "otps", "event_log"):
        result = await db[name].delete_many({})
        print(f"  {name}: {result.deleted_count} document(s) supprimé(s)")


async def seed(db):
    users = UserRepository(db)
    phone = SAMPLE_USER["phone"]
    if await users.get_by_phone(phone):
        print(f"  Déjà présent: {phone}")
    else:
        await users.create(phone, SAMPLE_USER["nom"], SAMPLE_USER["prenom"])
        print(f"  Créé: {phone} ({SAMPLE_USER['prenom']} {SAMPLE_USER['nom']})")

    await ProspectionRepository(db).upsert(phone, SAMPLE_PROSPECTION)
    print(f"  Prospection enregistrée pour {phone}")


async def main():
    client = create_mongo_client()
    db = client[DB_NAME]

    await ensure_indexes(db)
    if "--reset" in sys.argv:
        await reset(db)
    await seed(db)
    print(f"\nBase {DB_NAME} initialisée.")

    client.close()


if __name__ == "__main__":
    asyncio.run(main())
