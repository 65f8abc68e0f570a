"""
Résultat explicite d'une création / mise à jour.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class SaveResult:
    """L'enregistrement traité et ses erreurs par champ (vide si l'opération a réussi)."""
    record: Any
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors
