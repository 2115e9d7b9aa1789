"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class LoginIn(BaseModel):
    """Credentials posted to the login endpoint.

    Both fields are optional so that a missing value is reported as a
    failed login rather than a validation error.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class LoginOut(BaseModel):
    """Successful login response."""
    message: str
    username: str
    role: str


class StudentIn(BaseModel):
    """Payload for creating or updating a student. Any `id` is ignored."""
    name: str
    email: str
    course: str
    department: str


class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    course: str
    department: str


class CountOut(BaseModel):
    total: int


class UserIn(BaseModel):
    """Payload for user creation; the service validates each field."""
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UserOut(BaseModel):
    """User as returned by listings; `password` is always redacted."""
    id: int
    username: str
    password: str = ""
    role: str


class UserCreatedOut(BaseModel):
    message: str
    id: int
    username: str
    role: str


class MessageOut(BaseModel):
    message: str
