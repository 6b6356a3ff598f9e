"""
User and Authentication Schemas
Mirrors of the API's user, department and auth resources
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from campus_portal.schemas.base import ApiModel, Ref


class UserRole(str, Enum):
    STUDENT = "STUDENT"
    STAFF = "STAFF"
    ADMIN = "ADMIN"
    SECURITY = "SECURITY"
    VISITOR = "VISITOR"


# Roles offered on the public registration form
REGISTRATION_ROLES = [
    (UserRole.STUDENT, "Student"),
    (UserRole.STAFF, "Staff / Lecturer"),
    (UserRole.VISITOR, "Visitor / External Organisation"),
]


class DepartmentRef(ApiModel):
    id: int
    name: str


class Department(ApiModel):
    id: int
    name: str
    college: str
    hod_name: Optional[str] = None
    hod_email: Optional[str] = None


class User(ApiModel):
    """User as returned by the API"""

    id: int
    name: str
    email: str
    role: UserRole
    student_id: Optional[str] = None
    staff_id: Optional[str] = None
    phone: Optional[str] = None
    profile_pic_url: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    department: Optional[DepartmentRef] = None

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else "there"

    @property
    def initials(self) -> str:
        return "".join(part[0] for part in self.name.split() if part)[:2].upper()


class UserSummary(ApiModel):
    """Nested user reference carried by reviews"""

    id: int
    name: str


class AuthResponse(ApiModel):
    token: str
    user: User


class LoginRequest(ApiModel):
    email: str
    password: str = Field(..., min_length=1)


class RegisterRequest(ApiModel):
    """Registration body; the API names the plain password `passwordHash`"""

    name: str = Field(..., min_length=1)
    email: str
    password_hash: str = Field(..., min_length=1)
    role: UserRole = UserRole.STUDENT
    student_id: Optional[str] = None
    staff_id: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[Ref] = None

    @classmethod
    def from_form(
        cls,
        name: str,
        email: str,
        password: str,
        role: UserRole,
        student_id: str = "",
        staff_id: str = "",
        phone: str = "",
        department_id: Optional[int] = None,
    ) -> "RegisterRequest":
        """Build the body the way the registration form does: role-specific ids only"""
        return cls(
            name=name,
            email=email,
            password_hash=password,
            role=role,
            student_id=student_id if role == UserRole.STUDENT else None,
            staff_id=staff_id if role == UserRole.STAFF else None,
            phone=phone or None,
            department=Ref(id=department_id) if department_id else None,
        )


class PasswordChange(ApiModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class UserUpdate(ApiModel):
    """Profile fields a user may edit"""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    student_id: Optional[str] = None
    staff_id: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty")
        return v
