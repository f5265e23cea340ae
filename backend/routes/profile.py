"""
Prospection - Routes Profil
Lecture / enregistrement du formulaire du vendeur connecté.
"""

from fastapi import APIRouter, Depends

from models.prospection import ProfileUpdate
from routes.auth import get_current_phone, get_db
from services.profile import get_profile, upsert_profile

router = APIRouter(prefix="/profile", tags=["Profil"])


@router.get("")
async def read_profile(phone: str = Depends(get_current_phone), db=Depends(get_db)):
    """Identité + prospection courante"""
    return {"user": await get_profile(db, phone)}


@router.post("")
async def save_profile(data: ProfileUpdate, phone: str = Depends(get_current_phone), db=Depends(get_db)):
    """Création ou mise à jour partielle de la prospection"""
    return {"user": await upsert_profile(db, phone, data)}
