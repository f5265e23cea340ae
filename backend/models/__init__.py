"""
Prospection - Models Package

Exports tous les modèles pour import facile
from models import ProfileUpdate, UserCreate, build_user_profile, etc.
"""

# Auth
from .auth import (
    OtpRequest,
    OtpVerify,
    AdminLogin,
    TokenResponse,
)

# Vendeur / Prospection
from .prospection import (
    ResultatProspection,
    TypeClient,
    IDENTITY_FIELDS,
    VISIT_FIELDS,
    Location,
    ProfileUpdate,
    UserCreate,
    UserUpdate,
    LocationView,
    UserProfile,
    build_user_profile,
    split_profile,
)

__all__ = [
    # Auth
    "OtpRequest",
    "OtpVerify",
    "AdminLogin",
    "TokenResponse",
    # Vendeur / Prospection
    "ResultatProspection",
    "TypeClient",
    "IDENTITY_FIELDS",
    "VISIT_FIELDS",
    "Location",
    "ProfileUpdate",
    "UserCreate",
    "UserUpdate",
    "LocationView",
    "UserProfile",
    "build_user_profile",
    "split_profile",
]
