"""
Router pour les élèves, imbriqué sous leur enseignant.
GET    /teachers/{teacher_id}/students            liste
GET    /teachers/{teacher_id}/students/new        formulaire de création
POST   /teachers/{teacher_id}/students            création
GET    /teachers/{teacher_id}/students/{id}       détail
GET    /teachers/{teacher_id}/students/{id}/edit  formulaire de modification
PUT    /teachers/{teacher_id}/students/{id}       modification (PATCH et POST acceptés)
DELETE /teachers/{teacher_id}/students/{id}       suppression (POST .../delete depuis un formulaire)

Chaque handler résout d'abord l'enseignant : un enseignant inexistant
donne un 404 avant toute lecture ou écriture d'élève.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from roster.database import get_db
from roster.errors import ValidationFailed
from roster.models.student import Student
from roster.models.teacher import Teacher
from roster.schemas.student import StudentParams, StudentResponse
from roster.services import student_service, teacher_service
from roster.web import RawPayload, read_payload, redirect_to, render, render_json, require_params, wants_json

router = APIRouter(prefix="/teachers/{teacher_id}/students", tags=["Students"])


@router.get("", summary="Lister les élèves d'un enseignant")
def index_students(teacher_id: int, request: Request, db: Session = Depends(get_db)):
    teacher = teacher_service.find_teacher(db, teacher_id)
    students = student_service.list_students(db, teacher)

    if wants_json(request):
        return render_json([StudentResponse.model_validate(s) for s in students])
    return render(request, "students/index.html", {"teacher": teacher, "students": students})


@router.get("/new", summary="Formulaire de création d'un élève")
def new_student(teacher_id: int, request: Request, db: Session = Depends(get_db)):
    teacher = teacher_service.find_teacher(db, teacher_id)
    student = student_service.build_student(teacher)
    return render(request, "students/new.html", {"teacher": teacher, "student": student, "errors": {}})


@router.post("", status_code=201, summary="Créer un élève pour l'enseignant")
def create_student(
    teacher_id: int,
    request: Request,
    payload: RawPayload = Depends(read_payload),
    db: Session = Depends(get_db),
):
    teacher = teacher_service.find_teacher(db, teacher_id)

    try:
        params = StudentParams.permit(require_params(payload, "student"))
    except ValidationFailed as e:
        student = student_service.build_student(teacher)
        return _unprocessable(request, "students/new.html", teacher, student, e.errors)

    result = student_service.create_student(db, teacher, params)
    if not result.ok:
        return _unprocessable(request, "students/new.html", teacher, result.record, result.errors)

    teacher_url = str(request.url_for("show_teacher", teacher_id=teacher.id))
    if wants_json(request):
        return render_json(
            StudentResponse.model_validate(result.record),
            status_code=status.HTTP_201_CREATED,
            headers={"Location": teacher_url},
        )
    return redirect_to(request, teacher_url, notice="Student was successfully created.")


@router.get("/{student_id}", summary="Détail d'un élève")
def show_student(teacher_id: int, student_id: int, request: Request, db: Session = Depends(get_db)):
    teacher = teacher_service.find_teacher(db, teacher_id)
    student = student_service.find_student(db, teacher, student_id)

    if wants_json(request):
        return render_json(StudentResponse.model_validate(student))
    return render(request, "students/show.html", {"teacher": teacher, "student": student})


@router.get("/{student_id}/edit", summary="Formulaire de modification d'un élève")
def edit_student(teacher_id: int, student_id: int, request: Request, db: Session = Depends(get_db)):
    teacher = teacher_service.find_teacher(db, teacher_id)
    student = student_service.find_student(db, teacher, student_id)
    return render(request, "students/edit.html", {"teacher": teacher, "student": student, "errors": {}})


@router.api_route("/{student_id}", methods=["PUT", "PATCH", "POST"], summary="Modifier un élève")
def update_student(
    teacher_id: int,
    student_id: int,
    request: Request,
    payload: RawPayload = Depends(read_payload),
    db: Session = Depends(get_db),
):
    """Seuls les champs autorisés présents dans la requête sont modifiés."""
    teacher = teacher_service.find_teacher(db, teacher_id)
    student = student_service.find_student(db, teacher, student_id)

    try:
        params = StudentParams.permit(require_params(payload, "student"))
    except ValidationFailed as e:
        return _unprocessable(request, "students/edit.html", teacher, student, e.errors)

    result = student_service.update_student(db, student, params)
    if not result.ok:
        return _unprocessable(request, "students/edit.html", teacher, result.record, result.errors)

    if wants_json(request):
        student_url = str(request.url_for("show_student", teacher_id=teacher.id, student_id=student.id))
        return render_json(StudentResponse.model_validate(result.record), headers={"Location": student_url})
    return redirect_to(
        request,
        str(request.url_for("show_teacher", teacher_id=teacher.id)),
        notice="Student was successfully updated.",
    )


@router.delete("/{student_id}", status_code=204, summary="Supprimer un élève")
@router.post("/{student_id}/delete", include_in_schema=False)
def destroy_student(teacher_id: int, student_id: int, request: Request, db: Session = Depends(get_db)):
    """Suppression stricte : un refus de la base remonte en DestroyFailed (409)."""
    teacher = teacher_service.find_teacher(db, teacher_id)
    student = student_service.find_student(db, teacher, student_id)
    student_service.delete_student(db, student)

    if wants_json(request):
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return redirect_to(
        request,
        str(request.url_for("index_students", teacher_id=teacher.id)),
        notice="Student was successfully destroyed.",
    )


def _unprocessable(
    request: Request,
    template: str,
    teacher: Teacher,
    student: Student,
    errors: Dict[str, List[str]],
) -> Response:
    """Échec de validation : formulaire réaffiché ou erreurs par champ, toujours en 422."""
    if wants_json(request):
        return render_json(errors, status_code=422)
    return render(
        request,
        template,
        {"teacher": teacher, "student": student, "errors": errors},
        status_code=422,
    )
