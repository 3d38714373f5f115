"""
Profile routes: own profile editing, one-time department selection, and
intern directory for staff.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..models.department import Department
from ..models.profile import Profile, ROLES
from ..auth import get_required_user, get_reviewer, require_roles
from ..schemas.profile import ProfileResponse, ProfileUpdate, DepartmentSelection
from ..responses import conflict, not_found, require, validation_error

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(current_user: Profile = Depends(get_required_user)):
    return current_user


@router.patch("/me", response_model=ProfileResponse)
def update_my_profile(
    update: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_required_user),
):
    """Update editable profile fields. Role and department are not editable here."""
    update_data = update.model_dump(exclude_unset=True)
    if "full_name" in update_data:
        update_data["full_name"] = require(update_data["full_name"], "full_name").strip()
    for field, value in update_data.items():
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/me/department", response_model=ProfileResponse)
def select_department(
    selection: DepartmentSelection,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_roles("intern")),
):
    """An intern picks a department and records a student id, once."""
    if current_user.department_id is not None:
        conflict("Department has already been selected")

    student_id = require(selection.student_id, "student_id").strip()
    department = db.query(Department).filter(Department.id == selection.department_id).first()
    if not department:
        not_found("Department", selection.department_id)

    current_user.department_id = department.id
    current_user.student_id = student_id
    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("", response_model=List[ProfileResponse])
def list_profiles(
    role: Optional[str] = None,
    department_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_reviewer),
):
    query = db.query(Profile)
    if role:
        if role not in ROLES:
            validation_error(f"Unknown role '{role}'", {"allowed": list(ROLES)})
        query = query.filter(Profile.role == role)
    if department_id is not None:
        query = query.filter(Profile.department_id == department_id)
    return query.order_by(Profile.full_name).all()
