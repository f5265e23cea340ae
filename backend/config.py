"""
Configuration et utilitaires partagés
"""

import os
import re
import secrets
from datetime import datetime, timezone, timedelta
from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv
from pathlib import Path

# Charger .env
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# MongoDB
MONGO_URL = os.environ.get('MONGO_URL', 'mongodb://localhost:27017')
DB_NAME = os.environ.get('DB_NAME', 'prospection')

# Secrets (obligatoires)
JWT_SECRET = os.environ.get('JWT_SECRET')
if not JWT_SECRET:
    raise ValueError("JWT_SECRET environment variable is required")

ADMIN_API_KEY = os.environ.get('ADMIN_API_KEY')
if not ADMIN_API_KEY:
    raise ValueError("ADMIN_API_KEY environment variable is required")

JWT_ALGORITHM = "HS256"

# Durées de validité
OTP_TTL_MINUTES = int(os.environ.get('OTP_TTL_MINUTES', '5'))
SESSION_TOKEN_TTL_HOURS = int(os.environ.get('SESSION_TOKEN_TTL_HOURS', '1'))
ADMIN_TOKEN_TTL_HOURS = int(os.environ.get('ADMIN_TOKEN_TTL_HOURS', '2'))

CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


def create_mongo_client() -> AsyncIOMotorClient:
    """Ouvre le client MongoDB (une seule fois par process)"""
    return AsyncIOMotorClient(MONGO_URL)


# ==================== HELPERS ====================

def now_iso() -> str:
    """Retourne la date/heure actuelle en ISO"""
    return datetime.now(timezone.utc).isoformat()

def iso_in(**delta) -> str:
    """Date ISO décalée depuis maintenant (ex: iso_in(minutes=5))"""
    return (datetime.now(timezone.utc) + timedelta(**delta)).isoformat()

def generate_otp_code() -> str:
    """Génère un code OTP numérique à 6 chiffres"""
    return str(100000 + secrets.randbelow(900000))


# ==================== VALIDATION TÉLÉPHONE ====================

_PHONE_SEPARATORS = re.compile(r"[\s.\-()]")


def normalize_phone(phone: str) -> tuple[bool, str]:
    """
    Nettoie et valide un numéro de téléphone.

    - Supprime espaces, points, tirets et parenthèses
    - Conserve un éventuel "+" initial
    - 8 à 15 chiffres

    Returns: (is_valid, cleaned_phone_or_error)
    """
    if not phone or not phone.strip():
        return False, "Numéro vide"

    cleaned = _PHONE_SEPARATORS.sub("", phone.strip())
    prefix = ""
    if cleaned.startswith("+"):
        prefix, cleaned = "+", cleaned[1:]

    if not cleaned.isdigit():
        return False, "Le numéro ne doit contenir que des chiffres"

    if not 8 <= len(cleaned) <= 15:
        return False, f"Format invalide: {len(cleaned)} chiffres (8 à 15 requis)"

    return True, prefix + cleaned
