"""
Outils HTTP partagés par les routers : négociation de contenu, lecture du corps
de requête (formulaire ou JSON), rendu Jinja2 et messages flash.
"""

import json
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from roster.errors import MalformedBody, ParameterMissing, full_messages

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

_FLASH_KEY = "_flashes"

# Champs techniques des formulaires HTML, jamais transmis aux DTO
_FORM_CONTROL_FIELDS = {"_method"}


# --- Négociation de contenu ---

def wants_json(request: Request) -> bool:
    """
    Vrai pour un client JSON : en-tête Accept en application/json sans text/html,
    ou corps envoyé en application/json.
    """
    accept = request.headers.get("accept", "")
    if "application/json" in accept and "text/html" not in accept:
        return True
    if "text/html" in accept:
        return False
    return request.headers.get("content-type", "").startswith("application/json")


# --- Corps de requête ---

@dataclass
class RawPayload:
    """Corps de requête lu mais pas encore interprété."""
    content_type: str = ""
    body: bytes = b""
    form: Dict[str, str] = field(default_factory=dict)

    def decode(self) -> Dict[str, Any]:
        """Champs soumis. Lève MalformedBody si le JSON est illisible ou n'est pas un objet."""
        if not self.content_type.startswith("application/json"):
            return dict(self.form)
        if not self.body.strip():
            return {}
        try:
            data = json.loads(self.body)
        except ValueError:
            raise MalformedBody("Malformed JSON body.")
        if not isinstance(data, dict):
            raise MalformedBody("JSON body must be an object.")
        return data


async def read_payload(request: Request) -> RawPayload:
    """
    Dépendance FastAPI : lit le corps brut sans l'interpréter.
    Le décodage se fait dans le handler (require_params), après la résolution
    de l'enseignant, pour qu'un enseignant inexistant donne toujours un 404.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        return RawPayload(content_type=content_type, body=await request.body())

    if content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        return RawPayload(
            content_type=content_type,
            form={key: value for key, value in form.items() if isinstance(value, str)},
        )

    return RawPayload(content_type=content_type)


def require_params(payload: Union[RawPayload, Mapping[str, Any]], key: str) -> Dict[str, Any]:
    """
    Extrait les paramètres d'une ressource du corps de requête. Formats acceptés :
    {"student": {...}}, champs de formulaire student[name], ou champs à plat.
    Lève MalformedBody pour un JSON illisible, ParameterMissing si rien n'a été soumis.
    """
    if isinstance(payload, RawPayload):
        payload = payload.decode()

    nested = payload.get(key)
    if isinstance(nested, dict):
        params = nested
    else:
        prefix = f"{key}["
        params = {
            name[len(prefix):-1]: value
            for name, value in payload.items()
            if name.startswith(prefix) and name.endswith("]")
        }
        if not params:
            params = {
                name: value
                for name, value in payload.items()
                if name not in _FORM_CONTROL_FIELDS and name != key
            }

    if not params:
        raise ParameterMissing(key)
    return params


# --- Réponses ---

def render(request: Request, template: str, context: Optional[Dict[str, Any]] = None,
           status_code: int = status.HTTP_200_OK) -> Response:
    return templates.TemplateResponse(request, template, context or {}, status_code=status_code)


def render_json(data: Any, status_code: int = status.HTTP_200_OK,
                headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(content=jsonable_encoder(data), status_code=status_code, headers=headers)


def redirect_to(request: Request, url: str, notice: Optional[str] = None) -> RedirectResponse:
    """Redirection 303 (le navigateur refait un GET) avec un message flash optionnel."""
    if notice:
        flash(request, notice)
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


# --- Messages flash (stockés dans le cookie de session signé) ---

def flash(request: Request, message: str) -> None:
    messages = request.session.get(_FLASH_KEY, [])
    messages.append(message)
    request.session[_FLASH_KEY] = messages


def get_flashed_messages(request: Request) -> List[str]:
    """Retourne et consomme les messages en attente."""
    return request.session.pop(_FLASH_KEY, [])


templates.env.globals["get_flashed_messages"] = get_flashed_messages
templates.env.globals["full_messages"] = full_messages
