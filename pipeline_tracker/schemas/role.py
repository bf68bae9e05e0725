from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, UUID4


class RoleCreateRequest(BaseModel):
    """Schema for creating a job opening"""
    role_name: str = Field(..., min_length=1, max_length=200)
    department: Optional[str] = Field(None, max_length=200)
    seniority: Optional[str] = Field(None, max_length=100)


class RoleResponse(BaseModel):
    id: UUID4
    organization_id: UUID4
    role_name: str
    department: Optional[str] = None
    seniority: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
