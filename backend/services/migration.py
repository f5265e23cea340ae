"""
Migration des anciens documents vendeur

Ancien format: un seul document par téléphone portant à la fois l'identité
et la visite (position imbriquée `location` ou à plat `latitude`/`longitude`).
Nouveau format: users + prospections.
"""

import logging

from config import now_iso
from models.prospection import split_profile
from services.repositories import ProspectionRepository, UserRepository

logger = logging.getLogger("migration")


async def migrate_legacy_users(db, source: str = "users_legacy", backup: bool = True) -> dict:
    """
    Copie chaque document de `source` vers users + prospections.

    - sauvegarde préalable dans `<source>_backup`
    - sans nom vendeur, le nom du client sert de nom (comme l'ancien schéma)
    - un document en erreur est compté et n'interrompt pas la migration
    """
    legacy = await db[source].find({}, {"_id": 0}).to_list(10000)
    logger.info(f"[MIGRATION] {len(legacy)} document(s) à migrer depuis {source}")

    if backup and legacy:
        await db[f"{source}_backup"].insert_many([{**doc, "backed_up_at": now_iso()} for doc in legacy])

    users = UserRepository(db)
    prospections = ProspectionRepository(db)
    results = {"migrated": 0, "errors": 0}

    for doc in legacy:
        phone = doc.get("phone")
        try:
            if not phone:
                raise ValueError("document sans téléphone")

            identity, visit = split_profile(doc)
            if not await users.get_by_phone(phone):
                await users.create(phone, identity.get("nom") or doc.get("nomClient") or "", identity.get("prenom", ""))
            elif identity:
                await users.update(phone, identity)

            if visit:
                await prospections.upsert(phone, visit)
            results["migrated"] += 1
        except Exception as e:
            logger.error(f"[MIGRATION] Erreur pour {phone}: {str(e)}")
            results["errors"] += 1

    logger.info(f"[MIGRATION] Terminée: {results['migrated']} migré(s), {results['errors']} erreur(s)")
    return results
