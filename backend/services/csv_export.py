"""
Export CSV des vendeurs (dashboard admin)

Toutes les valeurs sont entre guillemets, fins de ligne CRLF.
"""

import csv
import io
from typing import Any, Dict, List

CSV_FILENAME = "utilisateurs.csv"

CSV_HEADERS = [
    "Téléphone",
    "Nom",
    "Prénom",
    "Nom du client",
    "Numéro de contact",
    "Zone",
    "Immeuble",
    "Bloc Immeuble",
    "Appartement",
    "Résultat",
    "Type client",
    "Localisation partagée",
    "Latitude",
    "Longitude",
    "Horodatage",
]


def _row(user: Dict[str, Any]) -> List[Any]:
    location = user.get("location") or {}
    return [
        user.get("phone", ""),
        user.get("nom", ""),
        user.get("prenom", ""),
        user.get("nomClient", ""),
        user.get("numContact", ""),
        user.get("zone", ""),
        user.get("immeuble", ""),
        user.get("blocImmeuble", ""),
        user.get("appartement", ""),
        user.get("resultatProspection", ""),
        user.get("typeClient", ""),
        "Oui" if user.get("locationShared") else "Non",
        location.get("latitude", ""),
        location.get("longitude", ""),
        location.get("timestamp", ""),
    ]


def generate_users_csv(users: List[Dict[str, Any]]) -> str:
    """users: profils fusionnés (build_user_profile)"""
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerow(CSV_HEADERS)
    for user in users:
        writer.writerow(_row(user))
    return output.getvalue()
