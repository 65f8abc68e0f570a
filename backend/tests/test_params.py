"""
Tests unitaires pour la liste blanche des paramètres et la lecture du corps de requête.
"""

import pytest

from roster.errors import MalformedBody, ParameterMissing, ValidationFailed
from roster.schemas.student import StudentParams
from roster.schemas.teacher import TeacherParams
from roster.web import RawPayload, require_params


# --- StudentParams ---

def test_champs_hors_liste_blanche_ignores():
    params = StudentParams.permit({"name": "Ada", "id": 5, "created_at": "x", "admin": True})
    assert params.changes() == {"name": "Ada"}


def test_champs_absents_non_modifies():
    params = StudentParams.permit({"grade": "11"})
    assert params.changes() == {"grade": "11"}


def test_conversion_formulaire():
    params = StudentParams.permit({"attended": "1", "teacher_id": "4", "name": "  Ada "})
    assert params.attended is True
    assert params.teacher_id == 4
    assert params.name == "Ada"


def test_valeurs_vides_de_formulaire():
    params = StudentParams.permit({"attended": "", "teacher_id": ""})
    assert params.attended is None
    assert params.teacher_id is None


def test_conversion_impossible():
    with pytest.raises(ValidationFailed) as exc_info:
        StudentParams.permit({"attended": "maybe", "teacher_id": "abc"})
    assert exc_info.value.errors == {
        "attended": ["is not a boolean"],
        "teacher_id": ["is not a number"],
    }


def test_teacher_params():
    params = TeacherParams.permit({"name": "Grace", "visited": "on", "students": []})
    assert params.changes() == {"name": "Grace", "visited": True}


# --- require_params ---

def test_require_params_enveloppe_json():
    assert require_params({"student": {"name": "Ada"}}, "student") == {"name": "Ada"}


def test_require_params_champs_de_formulaire():
    payload = {"student[name]": "Ada", "student[grade]": "10", "_method": "patch"}
    assert require_params(payload, "student") == {"name": "Ada", "grade": "10"}


def test_require_params_a_plat():
    assert require_params({"name": "Ada", "_method": "put"}, "student") == {"name": "Ada"}


@pytest.mark.parametrize("payload", [{}, {"student": {}}, {"_method": "put"}])
def test_require_params_absents(payload):
    with pytest.raises(ParameterMissing, match="param is missing or the value is empty: student"):
        require_params(payload, "student")


# --- RawPayload ---

def test_require_params_corps_json_brut():
    payload = RawPayload(content_type="application/json", body=b'{"student": {"name": "Ada"}}')
    assert require_params(payload, "student") == {"name": "Ada"}


def test_require_params_formulaire_brut():
    payload = RawPayload(content_type="application/x-www-form-urlencoded", form={"student[name]": "Ada"})
    assert require_params(payload, "student") == {"name": "Ada"}


@pytest.mark.parametrize("body,message", [
    (b"{not json", "Malformed JSON body."),
    (b'"Ada"', "JSON body must be an object."),
    (b"[1, 2]", "JSON body must be an object."),
])
def test_require_params_json_illisible(body, message):
    with pytest.raises(MalformedBody, match=message):
        require_params(RawPayload(content_type="application/json", body=body), "student")


def test_require_params_json_vide():
    with pytest.raises(ParameterMissing):
        require_params(RawPayload(content_type="application/json", body=b"  "), "student")
