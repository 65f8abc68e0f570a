"""
Exceptions métier partagées entre services et routers.
"""

from typing import Dict, List


class RecordNotFound(Exception):
    """Identifiant de l'URL qui ne correspond à aucune ligne. Converti en 404 par l'application."""

    def __init__(self, model: str, record_id):
        self.model = model
        self.record_id = record_id
        super().__init__(f"Couldn't find {model} with 'id'={record_id}")


class ValidationFailed(Exception):
    """Paramètres soumis non conformes. Récupérée dans le handler (formulaire ou 422)."""

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__("Validation failed: " + ", ".join(full_messages(errors)))


class DestroyFailed(Exception):
    """Suppression stricte impossible. Non récupérée localement, convertie en 409."""


class ParameterMissing(Exception):
    """Corps de requête sans aucun paramètre pour la ressource attendue."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"param is missing or the value is empty: {key}")


class MalformedBody(Exception):
    """Corps JSON illisible ou qui n'est pas un objet. Converti en 400."""


def full_messages(errors: Dict[str, List[str]]) -> List[str]:
    """Messages lisibles : {"name": ["can't be blank"]} → ["Name can't be blank"]."""
    messages = []
    for field, field_errors in errors.items():
        label = field.replace("_", " ").capitalize()
        messages.extend(f"{label} {message}" for message in field_errors)
    return messages
