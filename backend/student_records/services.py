"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories.
Services are intentionally thin: they perform existence checks and
validation, then persist records via the repository they are given.
Failures are reported by raising the errors from `errors.py`.
"""

import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from . import models, repositories
from .errors import ConflictError, InvalidCredentialsError, NotFoundError, ValidationError
from .schemas import StudentIn

logger = logging.getLogger("student_records.services")

MIN_PASSWORD_LENGTH = 4
ALLOWED_ROLES = {r.value for r in models.Role}


class AuthService:
    """Credential checks for the login endpoint."""
    def __init__(self, user_repo: repositories.UserRepository):
        self.user_repo = user_repo

    def login(self, username, password) -> models.User:
        """Return the user whose username and password match exactly.

        Passwords are stored in plain text, so the comparison is a string
        equality. Raises `InvalidCredentialsError` with the same message
        whether the username is unknown or the password is wrong.
        """
        user = self.user_repo.get_by_username(username) if username is not None else None
        if user is None or password is None or user.password != password:
            logger.info("login failed for username=%r", username)
            raise InvalidCredentialsError()
        return user


class StudentService:
    """CRUD operations over student records."""
    def __init__(self, student_repo: repositories.StudentRepository):
        self.student_repo = student_repo

    def list_students(self) -> List[models.Student]:
        return self.student_repo.list_all()

    def search_by_name(self, name: str) -> List[models.Student]:
        """Case-insensitive substring search; "ali" finds "Alice" and "Malik"."""
        return self.student_repo.search_by_name(name or "")

    def count_students(self) -> int:
        return self.student_repo.count()

    def get_student(self, student_id: int) -> models.Student:
        student = self.student_repo.get(student_id)
        if student is None:
            raise NotFoundError(f"Student not found with id: {student_id}")
        return student

    def add_student(self, data: StudentIn) -> models.Student:
        """Persist a new student and return it with the generated id."""
        student = models.Student(
            name=data.name,
            email=data.email,
            course=data.course,
            department=data.department,
        )
        try:
            saved = self.student_repo.save(student)
        except IntegrityError:
            raise ConflictError(f"email '{data.email}' is already in use")
        logger.info("student created id=%s", saved.id)
        return saved

    def update_student(self, student_id: int, data: StudentIn) -> models.Student:
        """Overwrite every mutable field of an existing student.

        The id is never changed. Raises `NotFoundError` when the id is
        unknown, leaving storage untouched.
        """
        existing = self.get_student(student_id)
        existing.name = data.name
        existing.email = data.email
        existing.course = data.course
        existing.department = data.department
        try:
            return self.student_repo.save(existing)
        except IntegrityError:
            raise ConflictError(f"email '{data.email}' is already in use")

    def delete_student(self, student_id: int) -> None:
        if not self.student_repo.exists(student_id):
            raise NotFoundError(f"Student not found with id: {student_id}")
        self.student_repo.delete(self.student_repo.get(student_id))
        logger.info("student deleted id=%s", student_id)


class UserService:
    """User administration: list, create and delete accounts."""
    def __init__(self, user_repo: repositories.UserRepository):
        self.user_repo = user_repo

    def list_users(self) -> List[dict]:
        """Return all users with the password replaced by an empty string.

        Rows are copied, never modified, so the stored password survives.
        """
        return [
            {'id': u.id, 'username': u.username, 'password': '', 'role': u.role}
            for u in self.user_repo.list_all()
        ]

    def create_user(self, username, password, role) -> models.User:
        """Validate and persist a new user.

        Checks run in order and the first failure is raised: username
        present, password long enough, role allowed, username free.
        """
        if username is None or not username.strip():
            raise ValidationError("Username is required.")
        if password is None or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        if role not in ALLOWED_ROLES:
            raise ValidationError("Role must be ADMIN or USER.")
        taken = f"Username '{username}' is already taken."
        if self.user_repo.get_by_username(username) is not None:
            raise ConflictError(taken)
        try:
            user = self.user_repo.create(models.User(username=username, password=password, role=role))
        except IntegrityError:
            # lost a race with a concurrent create of the same username
            raise ConflictError(taken)
        logger.info("user created id=%s role=%s", user.id, user.role)
        return user

    def delete_user(self, user_id: int) -> None:
        user = self.user_repo.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        self.user_repo.delete(user)
        logger.info("user deleted id=%s", user_id)
