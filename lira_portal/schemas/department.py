from pydantic import BaseModel, Field
from typing import Optional


class DepartmentCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    description: Optional[str] = None


class DepartmentResponse(DepartmentCreate):
    id: int

    class Config:
        from_attributes = True
