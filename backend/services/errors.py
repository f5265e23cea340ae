"""
Erreurs métier

Levées par les services, converties en réponse HTTP par le handler
enregistré dans server.py.
"""


class ProspectionError(Exception):
    """Erreur métier avec statut HTTP et message lisible"""
    status_code = 500
    default_message = "Erreur interne du serveur"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(ProspectionError):
    status_code = 401
    default_message = "Non authentifié"


class NotFoundError(ProspectionError):
    status_code = 404
    default_message = "Utilisateur non trouvé"


class ConflictError(ProspectionError):
    status_code = 400
    default_message = "Cet utilisateur existe déjà"


class InvalidCodeError(ProspectionError):
    status_code = 400
    default_message = "Code invalide ou expiré"

