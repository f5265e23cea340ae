"""
Prospection - Routes Admin

Connexion par clé API, CRUD vendeurs, statistiques, export CSV, journal.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from config import normalize_phone
from models.auth import AdminLogin, TokenResponse
from models.prospection import UserCreate, UserUpdate, build_user_profile
from routes.auth import get_db, require_admin
from services.csv_export import CSV_FILENAME, generate_users_csv
from services.errors import ConflictError, NotFoundError
from services.event_logger import get_events, log_event
from services.metrics import compute_metrics
from services.otp import admin_login
from services.repositories import OtpRepository, ProspectionRepository, UserRepository

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger("admin")


# ==================== HELPERS ====================

def _clean_phone(phone: str) -> str:
    is_valid, result = normalize_phone(phone)
    return result if is_valid else phone


async def _merged_users(db) -> List[Dict[str, Any]]:
    """Tous les vendeurs fusionnés avec leur prospection, plus récents en premier"""
    users = await UserRepository(db).list_all()
    prospections = {p["phone"]: p for p in await ProspectionRepository(db).list_all()}
    return [build_user_profile(u, prospections.get(u["phone"])) for u in users]


def filter_users(
    users: List[Dict[str, Any]],
    q: Optional[str] = None,
    zone: Optional[str] = None,
    resultat: Optional[str] = None,
    location_shared: Optional[bool] = None
) -> List[Dict[str, Any]]:
    """Filtres du tableau admin (recherche libre insensible à la casse)"""
    search = q.strip().lower() if q else ""
    filtered = []
    for u in users:
        if search and not any(
            search in str(u.get(field) or "").lower()
            for field in ("phone", "nom", "prenom", "nomClient", "zone")
        ):
            continue
        if zone and u.get("zone") != zone:
            continue
        if resultat and u.get("resultatProspection") != resultat:
            continue
        if location_shared is not None and u.get("locationShared", False) != location_shared:
            continue
        filtered.append(u)
    return filtered


# ==================== LOGIN ====================

@router.post("/login", response_model=TokenResponse)
async def login(data: AdminLogin, db=Depends(get_db)):
    """Connexion admin par clé API partagée (token 2h)"""
    token = admin_login(data.apiKey)
    await log_event(db, action="admin_login", entity_type="session", entity_id="admin")
    return {"token": token}


# ==================== VENDEURS ====================

@router.get("/users")
async def list_users(
    q: Optional[str] = Query(None, description="Recherche libre"),
    zone: Optional[str] = None,
    resultat: Optional[str] = None,
    locationShared: Optional[bool] = None,
    admin: dict = Depends(require_admin),
    db=Depends(get_db)
):
    """Liste des vendeurs avec leur prospection courante"""
    users = filter_users(await _merged_users(db), q, zone, resultat, locationShared)
    return {"users": users}


@router.get("/users/export")
async def export_users(
    q: Optional[str] = None,
    zone: Optional[str] = None,
    resultat: Optional[str] = None,
    locationShared: Optional[bool] = None,
    admin: dict = Depends(require_admin),
    db=Depends(get_db)
):
    """Export CSV (mêmes filtres que la liste)"""
    users = filter_users(await _merged_users(db), q, zone, resultat, locationShared)
    return Response(
        content=generate_users_csv(users),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{CSV_FILENAME}"'},
    )


@router.get("/users/{phone}")
async def get_user(phone: str, admin: dict = Depends(require_admin), db=Depends(get_db)):
    phone = _clean_phone(phone)
    user = await UserRepository(db).get_by_phone(phone)
    if not user:
        raise NotFoundError()

    prospection = await ProspectionRepository(db).get_by_phone(phone)
    return {"user": build_user_profile(user, prospection)}


@router.post("/users", status_code=201)
async def create_user(data: UserCreate, admin: dict = Depends(require_admin), db=Depends(get_db)):
    """Enregistre un vendeur (seul moyen de créer une identité)"""
    users = UserRepository(db)
    if await users.get_by_phone(data.phone):
        raise ConflictError()

    user = await users.create(data.phone, data.nom, data.prenom)
    await log_event(db, action="create_user", entity_type="user", entity_id=data.phone,
                    details={"nom": data.nom, "prenom": data.prenom})
    logger.info(f"[ADMIN] Vendeur créé: {data.phone}")

    return {"user": build_user_profile(user)}


@router.put("/users/{phone}")
async def update_user(phone: str, data: UserUpdate, admin: dict = Depends(require_admin), db=Depends(get_db)):
    """Met à jour nom/prénom (le téléphone ne change pas)"""
    phone = _clean_phone(phone)
    update_data = data.model_dump(exclude_none=True)

    users = UserRepository(db)
    user = await users.update(phone, update_data)
    if not user:
        raise NotFoundError()

    await log_event(db, action="update_user", entity_type="user", entity_id=phone, details=update_data)

    prospection = await ProspectionRepository(db).get_by_phone(phone)
    return {"user": build_user_profile(user, prospection)}


@router.delete("/users/{phone}")
async def delete_user(phone: str, admin: dict = Depends(require_admin), db=Depends(get_db)):
    """Supprime la prospection puis le vendeur"""
    phone = _clean_phone(phone)
    users = UserRepository(db)
    if not await users.get_by_phone(phone):
        raise NotFoundError()

    # Enfant avant parent
    deleted_prospections = await ProspectionRepository(db).delete(phone)
    await OtpRepository(db).delete(phone)
    await users.delete(phone)

    await log_event(db, action="delete_user", entity_type="user", entity_id=phone,
                    details={"prospections": deleted_prospections})
    logger.info(f"[ADMIN] Vendeur supprimé: {phone}")

    return {"message": "Utilisateur supprimé avec succès"}


# ==================== STATISTIQUES ====================

@router.get("/metrics")
async def get_metrics(admin: dict = Depends(require_admin), db=Depends(get_db)):
    users_repo = UserRepository(db)
    prospections_repo = ProspectionRepository(db)

    metrics = compute_metrics(await users_repo.list_all(), await prospections_repo.list_all())
    # Totaux non bornés par la limite de chargement
    metrics["totalUsers"] = await users_repo.count()
    metrics["totalProspections"] = await prospections_repo.count()
    return {"metrics": metrics}


@router.get("/events")
async def list_events(
    limit: int = Query(100, ge=1, le=1000),
    admin: dict = Depends(require_admin),
    db=Depends(get_db)
):
    """Journal d'audit des actions admin"""
    return await get_events(db, limit)
