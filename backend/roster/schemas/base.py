"""
Base commune des DTO d'entrée : liste blanche de champs autorisés.
"""

from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ValidationError

from roster.errors import ValidationFailed

# Libellés des erreurs de conversion, alignés sur ceux de l'application d'origine
_ERROR_MESSAGES = {
    "bool_parsing": "is not a boolean",
    "bool_type": "is not a boolean",
    "int_parsing": "is not a number",
    "int_type": "is not a number",
    "int_from_float": "must be an integer",
}


class PermittedParams(BaseModel):
    """
    DTO construit par la couche transport à partir du corps de requête.
    Les champs hors liste blanche sont ignorés silencieusement (extra="ignore").
    """

    model_config = {"extra": "ignore", "str_strip_whitespace": True}

    @classmethod
    def permit(cls, raw: Mapping[str, Any]):
        """
        Construit le DTO depuis un dictionnaire brut.
        Lève ValidationFailed avec des erreurs par champ si une conversion échoue.
        """
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as exc:
            raise ValidationFailed(_field_errors(exc)) from exc

    def changes(self) -> Dict[str, Any]:
        """Champs effectivement soumis (les champs absents ne sont pas modifiés)."""
        return self.model_dump(exclude_unset=True)


def _field_errors(exc: ValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "base"
        message = _ERROR_MESSAGES.get(error["type"], "is invalid")
        errors.setdefault(field, []).append(message)
    return errors


def blank_to_none(v: Any) -> Any:
    """Un champ de formulaire vide vaut « non renseigné »."""
    if isinstance(v, str) and not v.strip():
        return None
    return v
