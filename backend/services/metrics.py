"""
Statistiques de prospection (dashboard admin)

Calcul pur sur les listes users / prospections déjà chargées.
Plusieurs prospections par téléphone sont acceptées (données historiques).
"""

from typing import Any, Dict, List

from models.prospection import ResultatProspection

VENTE_CONFIRMEE = ResultatProspection.VENTE_CONFIRMEE.value
RESULTATS = [r.value for r in ResultatProspection]
ZONE_INCONNUE = "Non spécifiée"
TOP_PERFORMERS = 5


def conversion_rate(confirmed: int, total: int) -> str:
    """Taux de conversion en % avec une décimale ("25.0"), "0.0" si total nul"""
    if not total:
        return "0.0"
    return f"{confirmed / total * 100:.1f}"


def _display_name(user: Dict[str, Any]) -> str:
    name = f"{user.get('prenom') or ''} {user.get('nom') or ''}".strip()
    return name or user["phone"]


def compute_metrics(users: List[Dict[str, Any]], prospections: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    users: triés plus récents en premier (ordre conservé pour les égalités du top 5)
    """
    by_phone: Dict[str, List[Dict[str, Any]]] = {}
    for p in prospections:
        by_phone.setdefault(p.get("phone"), []).append(p)

    # Par vendeur
    sales_by_user = []
    for user in users:
        records = by_phone.get(user["phone"], [])
        confirmed = sum(1 for p in records if p.get("resultatProspection") == VENTE_CONFIRMEE)
        sales_by_user.append({
            "phone": user["phone"],
            "name": _display_name(user),
            "totalProspections": len(records),
            "confirmedSales": confirmed,
            "conversionRate": conversion_rate(confirmed, len(records)),
        })

    # Par zone, par résultat, par type de client
    by_zone: Dict[str, Dict[str, Any]] = {}
    by_resultat = {r: 0 for r in RESULTATS}
    by_type = {"b2b": 0, "b2c": 0}

    for p in prospections:
        zone = p.get("zone") or ZONE_INCONNUE
        resultat = p.get("resultatProspection")

        if zone not in by_zone:
            by_zone[zone] = {"total": 0, "confirmed": 0}
        by_zone[zone]["total"] += 1
        if resultat == VENTE_CONFIRMEE:
            by_zone[zone]["confirmed"] += 1

        if resultat in by_resultat:
            by_resultat[resultat] += 1

        type_client = (p.get("typeClient") or "").lower()
        if type_client in by_type:
            by_type[type_client] += 1

    for stats in by_zone.values():
        stats["conversionRate"] = conversion_rate(stats["confirmed"], stats["total"])

    # sorted() est stable: à égalité, l'ordre des users est conservé
    top = sorted(sales_by_user, key=lambda s: s["confirmedSales"], reverse=True)[:TOP_PERFORMERS]

    return {
        "totalUsers": len(users),
        "totalProspections": len(prospections),
        "salesByUser": sales_by_user,
        "salesByZone": by_zone,
        "salesByZoneArray": [{"zone": zone, **stats} for zone, stats in by_zone.items()],
        "resultsDistribution": by_resultat,
        "resultsDistributionArray": [{"name": name, "value": value} for name, value in by_resultat.items()],
        "salesByType": by_type,
        "topPerformers": top,
    }
