"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table (students,
users). Repositories return SQLModel objects and perform
commits/refreshes where appropriate. A failed commit rolls the session
back before the error propagates so the session stays usable.
"""

from typing import List, Optional
from sqlmodel import Session, select
from sqlalchemy import func
from . import models


class StudentRepository:
    """CRUD and search operations for `Student` objects."""
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[models.Student]:
        """Return every student in storage order."""
        return self.session.exec(select(models.Student)).all()

    def get(self, student_id: int) -> Optional[models.Student]:
        """Get a `Student` by primary key."""
        return self.session.get(models.Student, student_id)

    def exists(self, student_id: int) -> bool:
        stmt = select(models.Student.id).where(models.Student.id == student_id)
        return self.session.exec(stmt).first() is not None

    def search_by_name(self, name: str) -> List[models.Student]:
        """Return students whose name contains `name`, ignoring case.

        Wildcard characters in `name` are escaped so the match is a
        literal substring test; an empty string matches every row. Both
        sides are folded with Python's `str.lower` (see `database.py`).
        """
        stmt = select(models.Student).where(
            func.lower(models.Student.name).contains(name.lower(), autoescape=True)
        )
        return self.session.exec(stmt).all()

    def count(self) -> int:
        stmt = select(func.count()).select_from(models.Student)
        return self.session.exec(stmt).one()

    def save(self, student: models.Student) -> models.Student:
        """Insert or update `student` and return the refreshed instance."""
        self.session.add(student)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(student)
        return student

    def delete(self, student: models.Student) -> None:
        self.session.delete(student)
        self.session.commit()


class UserRepository:
    """CRUD operations for `User` objects."""
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[models.User]:
        return self.session.exec(select(models.User)).all()

    def get(self, user_id: int) -> Optional[models.User]:
        """Get a `User` by primary key."""
        return self.session.get(models.User, user_id)

    def get_by_username(self, username: str) -> Optional[models.User]:
        """Return a `User` by exact username or `None` if not found."""
        stmt = select(models.User).where(models.User.username == username)
        return self.session.exec(stmt).first()

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance."""
        self.session.add(user)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user

    def delete(self, user: models.User) -> None:
        self.session.delete(user)
        self.session.commit()
