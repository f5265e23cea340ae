"""
Prospection - Migration des anciens documents vendeur
Run: pytest backend/tests/test_migration.py -v
"""

from services.migration import migrate_legacy_users

LEGACY = [
    {
        "phone": "0600000001",
        "zone": "Nord",
        "immeuble": "Les Lilas",
        "nomClient": "Mme Leroy",
        "locationShared": True,
        "location": {"latitude": 48.0, "longitude": 2.0, "timestamp": "2025-06-01T09:00:00+00:00"},
    },
    {
        "phone": "0600000002",
        "nom": "Martin",
        "zone": "Sud",
        "resultatProspection": "Vente confirmée",
        "latitude": 43.0,
        "longitude": 5.0,
    },
    {"zone": "Sans téléphone"},
]


class TestMigrateLegacyUsers:

    async def test_migration(self, db):
        await db.users_legacy.insert_many([dict(doc) for doc in LEGACY])

        results = await migrate_legacy_users(db, "users_legacy")
        assert results == {"migrated": 2, "errors": 1}

        first = await db.users.find_one({"phone": "0600000001"})
        assert first["nom"] == "Mme Leroy"
        visit = await db.prospections.find_one({"phone": "0600000001"})
        assert visit["zone"] == "Nord"
        assert visit["latitude"] == 48.0
        assert visit["locationShared"] is True

        second = await db.users.find_one({"phone": "0600000002"})
        assert second["nom"] == "Martin"
        visit = await db.prospections.find_one({"phone": "0600000002"})
        assert visit["resultatProspection"] == "Vente confirmée"
        assert visit["longitude"] == 5.0

    async def test_backup(self, db):
        await db.users_legacy.insert_many([dict(doc) for doc in LEGACY])
        await migrate_legacy_users(db, "users_legacy")
        assert await db.users_legacy_backup.count_documents({}) == 3

    async def test_rerun_does_not_duplicate(self, db):
        await db.users_legacy.insert_many([dict(doc) for doc in LEGACY])
        await migrate_legacy_users(db, "users_legacy", backup=False)
        await migrate_legacy_users(db, "users_legacy", backup=False)
        assert await db.users.count_documents({}) == 2
        assert await db.prospections.count_documents({}) == 2

    async def test_existing_identity_kept(self, db):
        await db.users.insert_one({"phone": "0600000001", "nom": "Déjà", "prenom": "Là"})
        await db.users_legacy.insert_one(dict(LEGACY[0]))
        await migrate_legacy_users(db, "users_legacy", backup=False)
        user = await db.users.find_one({"phone": "0600000001"})
        assert user["nom"] == "Déjà"
