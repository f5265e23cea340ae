"""
Prospection - Event Logger

Journal d'audit des actions admin.
Une seule fonction à appeler depuis les routes.
"""

import uuid
from config import now_iso


async def log_event(
    db,
    action: str,
    entity_type: str,
    entity_id: str,
    user: str = "admin",
    details: dict = None
):
    """
    Écrit un événement dans la collection event_log.

    Args:
        action: admin_login | create_user | update_user | delete_user
        entity_type: user | session
        entity_id: téléphone du vendeur concerné (ou "admin")
        user: auteur de l'action
        details: dict libre (champs modifiés, etc.)
    """
    await db.event_log.insert_one({
        "id": str(uuid.uuid4()),
        "action": action,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "user": user,
        "details": details or {},
        "created_at": now_iso()
    })


async def get_events(db, limit: int = 100):
    """Derniers événements, plus récents en premier"""
    events = await db.event_log.find({}, {"_id": 0}) \
        .sort("created_at", -1) \
        .limit(limit) \
        .to_list(limit)
    total = await db.event_log.count_documents({})
    return {"events": events, "total": total, "limit": limit}
