"""SQLModel data models.

This module defines the application's database tables using SQLModel.
Each class maps to one table; there are no relationships between them.
"""

from enum import Enum
from typing import Optional
from sqlmodel import SQLModel, Field


class Role(str, Enum):
    """Roles a `User` may hold."""
    ADMIN = "ADMIN"
    USER = "USER"


class Student(SQLModel, table=True):
    """A student record.

    Fields:
    - `email`: unique across all students
    - `course`: free-form program name, e.g. "B.Tech" or "MCA"
    - `department`: free-form, e.g. "Computer Science"
    """
    __tablename__ = "students"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(index=True, nullable=False, unique=True)
    course: str = Field(nullable=False)
    department: str = Field(nullable=False)


class User(SQLModel, table=True):
    """An account allowed to sign in.

    Fields:
    - `username`: unique login name
    - `password`: stored as plain text and compared verbatim on login;
      there is no hashing, so treat the database itself as sensitive
    - `role`: one of the `Role` values
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, nullable=False, unique=True)
    password: str = Field(nullable=False)
    role: str = Field(nullable=False)
