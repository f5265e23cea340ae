"""
Service OTP - demande et vérification des codes à usage unique

Flow:
1. request_code : le téléphone doit exister dans users, un code à 6 chiffres
   remplace l'éventuel code précédent (validité OTP_TTL_MINUTES)
2. verify_code  : code identique et non expiré -> token de session,
   le code est supprimé (usage unique)
3. admin_login  : clé API partagée -> token admin
"""

import logging
import secrets

from config import ADMIN_API_KEY, OTP_TTL_MINUTES, generate_otp_code, iso_in, now_iso
from services.errors import InvalidCodeError, NotFoundError, UnauthorizedError
from services.repositories import OtpRepository, UserRepository
from services.tokens import create_admin_token, create_session_token

logger = logging.getLogger("otp")


def send_otp_sms(phone: str, code: str):
    """Envoi SMS simulé: le code est seulement journalisé"""
    logger.info(f"[OTP][Mock SMS] Code pour {phone}: {code}")


async def request_code(db, phone: str) -> dict:
    """Génère et enregistre un code pour un vendeur existant"""
    users = UserRepository(db)
    otps = OtpRepository(db)

    if not await users.get_by_phone(phone):
        logger.warning(f"[OTP] Demande refusée, téléphone inconnu: {phone}")
        raise NotFoundError("Numéro de téléphone non enregistré")

    purged = await otps.purge_expired()
    if purged:
        logger.info(f"[OTP] {purged} code(s) expiré(s) supprimé(s)")

    code = generate_otp_code()
    await otps.upsert(phone, code, iso_in(minutes=OTP_TTL_MINUTES))
    send_otp_sms(phone, code)

    return {"success": True}


async def verify_code(db, phone: str, code: str) -> str:
    """Vérifie le code et retourne un token de session"""
    otps = OtpRepository(db)
    record = await otps.get_by_phone(phone)

    if not record or record.get("code") != code or record.get("expires_at", "") <= now_iso():
        logger.info(f"[OTP] Code refusé pour {phone}")
        raise InvalidCodeError()

    await otps.delete(phone)
    logger.info(f"[OTP] Code validé pour {phone}")
    return create_session_token(phone)


def admin_login(api_key: str) -> str:
    """Échange la clé API admin contre un token admin"""
    if not secrets.compare_digest(api_key.encode(), ADMIN_API_KEY.encode()):
        logger.warning("[ADMIN] Tentative de connexion avec une clé invalide")
        raise UnauthorizedError("Clé API invalide")
    return create_admin_token()
