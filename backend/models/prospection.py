"""
Prospection - Modeles Vendeur / Prospection

Deux documents par vendeur:
- users        : identité (phone, nom, prenom), créée par l'admin
- prospections : résultat de la visite courante (une par téléphone)

La vue API (UserProfile) fusionne les deux.
"""

from enum import Enum
from datetime import datetime, timezone
from typing import Optional, Dict, Any, Tuple
from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator

from config import normalize_phone


class ResultatProspection(str, Enum):
    """Résultats possibles d'une visite"""
    NON_DISPONIBLE = "Client n'est pas disponible"
    NON_INTERESSE = "Client non intéressé"
    VENTE_CONFIRMEE = "Vente confirmée"


class TypeClient(str, Enum):
    B2B = "B2B"
    B2C = "B2C"


IDENTITY_FIELDS = ("nom", "prenom")

VISIT_FIELDS = (
    "zone",
    "immeuble",
    "blocImmeuble",
    "appartement",
    "nomClient",
    "numContact",
    "resultatProspection",
    "typeClient",
)


# ==================== REQUÊTES ====================

class Location(BaseModel):
    """Position partagée par le vendeur au moment de la visite"""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy: Optional[float] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProfileUpdate(BaseModel):
    """
    Soumission du formulaire vendeur.
    Tous les champs sont optionnels: seuls les champs fournis sont mis à jour.
    """
    model_config = ConfigDict(extra="ignore")

    nom: Optional[str] = None
    prenom: Optional[str] = None

    zone: Optional[str] = None
    immeuble: Optional[str] = None
    blocImmeuble: Optional[str] = None
    appartement: Optional[str] = None
    nomClient: Optional[str] = None
    numContact: Optional[str] = None
    resultatProspection: Optional[ResultatProspection] = None
    typeClient: Optional[TypeClient] = None

    location: Optional[Location] = None

    @field_validator("numContact")
    @classmethod
    def validate_num_contact(cls, v):
        if v is None or not v.strip():
            return v
        cleaned = v.replace(" ", "")
        if not cleaned.isdigit() or len(cleaned) < 8:
            raise ValueError("Veuillez saisir un numéro de téléphone valide")
        return cleaned

    @field_validator("typeClient", mode="before")
    @classmethod
    def upper_type_client(cls, v):
        return v.upper() if isinstance(v, str) else v


def _required_nom(v: str) -> str:
    if not v.strip():
        raise ValueError("Le nom est requis")
    return v.strip()


class UserCreate(BaseModel):
    """Création d'un vendeur par l'admin"""
    phone: str
    nom: str = Field(validation_alias=AliasChoices("nom", "name"))
    prenom: str = Field("", validation_alias=AliasChoices("prenom", "surname"))

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        is_valid, result = normalize_phone(v)
        if not is_valid:
            raise ValueError(result)
        return result

    @field_validator("nom")
    @classmethod
    def validate_nom(cls, v):
        return _required_nom(v)


class UserUpdate(BaseModel):
    """Mise à jour nom/prénom (le téléphone est immuable)"""
    nom: Optional[str] = Field(None, validation_alias=AliasChoices("nom", "name"))
    prenom: Optional[str] = Field(None, validation_alias=AliasChoices("prenom", "surname"))

    @field_validator("nom")
    @classmethod
    def validate_nom(cls, v):
        return v if v is None else _required_nom(v)


# ==================== VUE FUSIONNÉE ====================

class LocationView(BaseModel):
    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    timestamp: Optional[str] = None


class UserProfile(BaseModel):
    """Identité + prospection courante, telle que renvoyée par l'API"""
    phone: str
    nom: Optional[str] = None
    prenom: Optional[str] = None

    zone: Optional[str] = None
    immeuble: Optional[str] = None
    blocImmeuble: Optional[str] = None
    appartement: Optional[str] = None
    nomClient: Optional[str] = None
    numContact: Optional[str] = None
    resultatProspection: Optional[str] = None
    typeClient: Optional[str] = None

    locationShared: bool = False
    location: Optional[LocationView] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    lastProspectionAt: Optional[str] = None


def _iso(value) -> Optional[str]:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return value


def build_user_profile(user: Dict[str, Any], prospection: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Fusionne un document user et sa prospection courante.

    Les champs jamais renseignés sont absents de la réponse.
    `location` n'apparaît que si une position a été enregistrée.
    """
    prospection = prospection or {}

    location = None
    if prospection.get("latitude") is not None and prospection.get("longitude") is not None:
        location = LocationView(
            latitude=prospection["latitude"],
            longitude=prospection["longitude"],
            accuracy=prospection.get("locationAccuracy"),
            timestamp=_iso(prospection.get("locationTimestamp")),
        )

    profile = UserProfile(
        phone=user["phone"],
        nom=user.get("nom"),
        prenom=user.get("prenom"),
        **{field: prospection.get(field) for field in VISIT_FIELDS},
        locationShared=bool(prospection.get("locationShared", False)),
        location=location,
        created_at=_iso(user.get("created_at")),
        updated_at=_iso(user.get("updated_at")),
        lastProspectionAt=_iso(prospection.get("updated_at")),
    )
    return profile.model_dump(exclude_none=True)


def split_profile(data: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Sépare un payload plat en (champs identité, champs prospection).

    Accepte la position imbriquée (`location: {latitude, longitude, ...}`)
    ou à plat (`latitude`, `longitude`, `locationTimestamp`) des anciens documents.
    Les valeurs None sont ignorées, sauf dans une position imbriquée: elle
    remplace la précédente en entier (précision absente => null).
    """
    identity = {k: data[k] for k in IDENTITY_FIELDS if data.get(k) is not None}
    visit = {k: data[k] for k in VISIT_FIELDS if data.get(k) is not None}

    location = data.get("location") or {}
    if location.get("latitude") is not None and location.get("longitude") is not None:
        visit.update({
            "locationShared": True,
            "latitude": location["latitude"],
            "longitude": location["longitude"],
            "locationAccuracy": location.get("accuracy"),
            "locationTimestamp": _iso(location.get("timestamp")),
        })
    elif data.get("latitude") is not None and data.get("longitude") is not None:
        visit.update({
            "locationShared": True,
            "latitude": data["latitude"],
            "longitude": data["longitude"],
        })
        if data.get("locationTimestamp") is not None:
            visit["locationTimestamp"] = _iso(data["locationTimestamp"])
    elif isinstance(data.get("locationShared"), bool):
        visit["locationShared"] = data["locationShared"]

    return identity, visit
