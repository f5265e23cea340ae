"""
Accès MongoDB par collection

Chaque repository reçoit le handle de base ouvert au démarrage
(app.state.db) et n'expose que les opérations utilisées par les routes.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from config import now_iso

logger = logging.getLogger("repositories")


async def ensure_indexes(db):
    """Crée les index MongoDB (idempotent)"""
    await db.users.create_index("phone", unique=True)
    await db.users.create_index("created_at")
    await db.prospections.create_index("phone", unique=True)
    await db.prospections.create_index("zone")
    await db.otps.create_index("phone", unique=True)
    await db.otps.create_index("expires_at")
    await db.event_log.create_index("created_at")
    logger.info("[DB] Index MongoDB créés")


class UserRepository:
    """Collection users: identité des vendeurs"""

    LIST_LIMIT = 10000

    def __init__(self, db):
        self.collection = db.users

    async def get_by_phone(self, phone: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"phone": phone}, {"_id": 0})

    async def list_all(self) -> List[Dict[str, Any]]:
        """Tous les vendeurs, plus récents en premier"""
        return await self.collection.find({}, {"_id": 0}).sort("created_at", -1).to_list(self.LIST_LIMIT)

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def create(self, phone: str, nom: str, prenom: str = "") -> Dict[str, Any]:
        now = now_iso()
        user = {
            "phone": phone,
            "nom": nom,
            "prenom": prenom,
            "created_at": now,
            "updated_at": now,
        }
        await self.collection.insert_one(user)
        user.pop("_id", None)
        return user

    async def update(self, phone: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Met à jour les champs fournis, retourne le document ou None si absent"""
        return await self.collection.find_one_and_update(
            {"phone": phone},
            {"$set": {**fields, "updated_at": now_iso()}},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER,
        )

    async def upsert(self, phone: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        now = now_iso()
        await self.collection.update_one(
            {"phone": phone},
            {
                "$set": {**fields, "updated_at": now},
                "$setOnInsert": {"phone": phone, "created_at": now},
            },
            upsert=True,
        )
        return await self.get_by_phone(phone)

    async def delete(self, phone: str) -> bool:
        result = await self.collection.delete_one({"phone": phone})
        return result.deleted_count > 0


class ProspectionRepository:
    """Collection prospections: visite courante de chaque vendeur"""

    LIST_LIMIT = 10000

    # Valeurs posées à la création quand le payload ne les fournit pas
    DEFAULTS = {
        "zone": None,
        "immeuble": None,
        "blocImmeuble": None,
        "appartement": None,
        "nomClient": None,
        "numContact": None,
        "resultatProspection": None,
        "typeClient": None,
        "locationShared": False,
        "latitude": None,
        "longitude": None,
        "locationAccuracy": None,
        "locationTimestamp": None,
    }

    def __init__(self, db):
        self.collection = db.prospections

    async def get_by_phone(self, phone: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"phone": phone}, {"_id": 0})

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.collection.find({}, {"_id": 0}).to_list(self.LIST_LIMIT)

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def upsert(self, phone: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crée la prospection si absente, sinon met à jour uniquement `fields`.
        Les champs non fournis gardent leur valeur (ou le défaut à la création).
        """
        now = now_iso()
        on_insert = {k: v for k, v in self.DEFAULTS.items() if k not in fields}
        await self.collection.update_one(
            {"phone": phone},
            {
                "$set": {**fields, "updated_at": now},
                "$setOnInsert": {**on_insert, "phone": phone, "created_at": now},
            },
            upsert=True,
        )
        return await self.get_by_phone(phone)

    async def delete(self, phone: str) -> int:
        result = await self.collection.delete_many({"phone": phone})
        return result.deleted_count


class OtpRepository:
    """Collection otps: au plus un code actif par téléphone"""

    def __init__(self, db):
        self.collection = db.otps

    async def get_by_phone(self, phone: str) -> Optional[Dict[str, Any]]:
        return await self.collection.find_one({"phone": phone}, {"_id": 0})

    async def upsert(self, phone: str, code: str, expires_at: str):
        """Remplace le code précédent (s'il existe)"""
        await self.collection.update_one(
            {"phone": phone},
            {"$set": {"code": code, "expires_at": expires_at, "created_at": now_iso()}},
            upsert=True,
        )

    async def delete(self, phone: str) -> bool:
        result = await self.collection.delete_one({"phone": phone})
        return result.deleted_count > 0

    async def purge_expired(self) -> int:
        result = await self.collection.delete_many({"expires_at": {"$lte": now_iso()}})
        return result.deleted_count
