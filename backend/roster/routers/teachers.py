"""
Router pour les enseignants.
La liste des enseignants sert aussi de page d'accueil (GET /).
"""

from typing import Dict, List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from roster.database import get_db
from roster.errors import ValidationFailed
from roster.models.teacher import Teacher
from roster.schemas.teacher import TeacherDetailResponse, TeacherParams, TeacherResponse
from roster.services import teacher_service
from roster.web import RawPayload, read_payload, redirect_to, render, render_json, require_params, wants_json

router = APIRouter(tags=["Teachers"])


@router.get("/", include_in_schema=False)
@router.get("/teachers", summary="Lister les enseignants")
def index_teachers(request: Request, db: Session = Depends(get_db)):
    teachers = teacher_service.list_teachers(db)
    if wants_json(request):
        return render_json([TeacherResponse.model_validate(t) for t in teachers])
    return render(request, "teachers/index.html", {"teachers": teachers})


@router.get("/teachers/new", summary="Formulaire de création d'un enseignant")
def new_teacher(request: Request):
    return render(request, "teachers/new.html", {"teacher": teacher_service.build_teacher(), "errors": {}})


@router.post("/teachers", status_code=201, summary="Créer un enseignant")
def create_teacher(
    request: Request,
    payload: RawPayload = Depends(read_payload),
    db: Session = Depends(get_db),
):
    try:
        params = TeacherParams.permit(require_params(payload, "teacher"))
    except ValidationFailed as e:
        return _unprocessable(request, "teachers/new.html", teacher_service.build_teacher(), e.errors)

    result = teacher_service.create_teacher(db, params)
    if not result.ok:
        return _unprocessable(request, "teachers/new.html", result.record, result.errors)

    teacher_url = str(request.url_for("show_teacher", teacher_id=result.record.id))
    if wants_json(request):
        return render_json(
            TeacherResponse.model_validate(result.record),
            status_code=status.HTTP_201_CREATED,
            headers={"Location": teacher_url},
        )
    return redirect_to(request, teacher_url, notice="Teacher was successfully created.")


@router.get("/teachers/{teacher_id}", summary="Détail d'un enseignant et de ses élèves")
def show_teacher(teacher_id: int, request: Request, db: Session = Depends(get_db)):
    teacher = teacher_service.find_teacher(db, teacher_id)
    if wants_json(request):
        return render_json(TeacherDetailResponse.model_validate(teacher))
    return render(request, "teachers/show.html", {"teacher": teacher, "students": teacher.students})


@router.get("/teachers/{teacher_id}/edit", summary="Formulaire de modification d'un enseignant")
def edit_teacher(teacher_id: int, request: Request, db: Session = Depends(get_db)):
    teacher = teacher_service.find_teacher(db, teacher_id)
    return render(request, "teachers/edit.html", {"teacher": teacher, "errors": {}})


@router.api_route("/teachers/{teacher_id}", methods=["PUT", "PATCH", "POST"], summary="Modifier un enseignant")
def update_teacher(
    teacher_id: int,
    request: Request,
    payload: RawPayload = Depends(read_payload),
    db: Session = Depends(get_db),
):
    teacher = teacher_service.find_teacher(db, teacher_id)

    try:
        params = TeacherParams.permit(require_params(payload, "teacher"))
    except ValidationFailed as e:
        return _unprocessable(request, "teachers/edit.html", teacher, e.errors)

    result = teacher_service.update_teacher(db, teacher, params)
    if not result.ok:
        return _unprocessable(request, "teachers/edit.html", result.record, result.errors)

    teacher_url = str(request.url_for("show_teacher", teacher_id=teacher.id))
    if wants_json(request):
        return render_json(TeacherResponse.model_validate(result.record), headers={"Location": teacher_url})
    return redirect_to(request, teacher_url, notice="Teacher was successfully updated.")


@router.delete("/teachers/{teacher_id}", status_code=204, summary="Supprimer un enseignant")
@router.post("/teachers/{teacher_id}/delete", include_in_schema=False)
def destroy_teacher(teacher_id: int, request: Request, db: Session = Depends(get_db)):
    """
    Supprime un enseignant sans élève.
    Un enseignant qui possède encore des élèves n'est pas supprimé (409).
    """
    teacher = teacher_service.find_teacher(db, teacher_id)
    teacher_service.delete_teacher(db, teacher)

    if wants_json(request):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return redirect_to(
        request,
        str(request.url_for("index_teachers")),
        notice="Teacher was successfully destroyed.",
    )


def _unprocessable(request: Request, template: str, teacher: Teacher, errors: Dict[str, List[str]]) -> Response:
    if wants_json(request):
        return render_json(errors, status_code=422)
    return render(request, template, {"teacher": teacher, "errors": errors}, status_code=422)
