"""
Prospection - Routes Auth
Demande / vérification OTP + dépendances d'authentification.
"""

from fastapi import APIRouter, HTTPException, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from models.auth import OtpRequest, OtpVerify, TokenResponse
from services.otp import request_code, verify_code
from services.tokens import decode_token

router = APIRouter(prefix="/auth", tags=["Auth"])
security = HTTPBearer(auto_error=False)


# ==================== HELPERS ====================

def get_db(request: Request):
    """Handle MongoDB ouvert au démarrage"""
    return request.app.state.db


async def get_token_payload(credentials: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    if not credentials:
        raise HTTPException(status_code=401, detail="Non authentifié")
    return decode_token(credentials.credentials)


async def get_current_phone(payload: dict = Depends(get_token_payload)) -> str:
    """Téléphone du vendeur connecté"""
    phone = payload.get("phone")
    if not phone:
        raise HTTPException(status_code=401, detail="Token invalide")
    return phone


async def require_admin(payload: dict = Depends(get_token_payload)) -> dict:
    """Accès admin (token émis par /admin/login)"""
    if payload.get("admin") is not True:
        raise HTTPException(status_code=401, detail="Accès admin requis")
    return payload


# ==================== OTP ====================

@router.post("/request-otp")
async def request_otp(data: OtpRequest, db=Depends(get_db)):
    """Envoie un code au vendeur (SMS simulé). Le code n'est jamais renvoyé."""
    return await request_code(db, data.phone)


@router.post("/verify-otp", response_model=TokenResponse)
async def verify_otp(data: OtpVerify, db=Depends(get_db)):
    """Vérifie le code et retourne un token de session (1h)"""
    token = await verify_code(db, data.phone, data.code)
    return {"token": token}
