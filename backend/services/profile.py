"""
Service Profil - lecture et mise à jour du profil du vendeur connecté
"""

import logging
from typing import Any, Dict

from models.prospection import ProfileUpdate, build_user_profile, split_profile
from services.errors import NotFoundError
from services.repositories import ProspectionRepository, UserRepository

logger = logging.getLogger("profile")


async def get_profile(db, phone: str) -> Dict[str, Any]:
    user = await UserRepository(db).get_by_phone(phone)
    if not user:
        raise NotFoundError()

    prospection = await ProspectionRepository(db).get_by_phone(phone)
    return build_user_profile(user, prospection)


async def upsert_profile(db, phone: str, payload: ProfileUpdate) -> Dict[str, Any]:
    """
    Enregistre la soumission du formulaire.

    - identité créée si absente, sinon nom/prenom fournis mis à jour
    - prospection créée si absente, sinon seuls les champs fournis changent
      (rien n'est créé si le payload ne contient aucun champ de visite)
    - une position fournie active locationShared, son absence ne l'efface pas
    """
    data = payload.model_dump(exclude_unset=True, exclude={"location"}, mode="json")
    if payload.location is not None:
        data["location"] = payload.location.model_dump(mode="json")

    identity_fields, visit_fields = split_profile(data)

    user = await UserRepository(db).upsert(phone, identity_fields)
    prospections = ProspectionRepository(db)
    if visit_fields:
        prospection = await prospections.upsert(phone, visit_fields)
    else:
        # identité seule: pas de prospection vide créée
        prospection = await prospections.get_by_phone(phone)

    logger.info(f"[PROFILE] {phone} mis à jour: {sorted(visit_fields)}")
    return build_user_profile(user, prospection)
