"""
Department reference data routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..models.department import Department
from ..models.profile import Profile
from ..auth import get_admin
from ..schemas.department import DepartmentCreate, DepartmentResponse
from ..responses import conflict

router = APIRouter(prefix="/api/departments", tags=["departments"])


@router.get("", response_model=List[DepartmentResponse])
def list_departments(db: Session = Depends(get_db)):
    """Departments ordered by name. Public, used during onboarding."""
    return db.query(Department).order_by(Department.name).all()


@router.post("", response_model=DepartmentResponse)
def create_department(
    department: DepartmentCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_admin),
):
    name = department.name.strip()
    if db.query(Department).filter(Department.name == name).first():
        conflict(f"Department '{name}' already exists")

    db_department = Department(name=name, description=department.description)
    db.add(db_department)
    db.commit()
    db.refresh(db_department)
    return db_department
