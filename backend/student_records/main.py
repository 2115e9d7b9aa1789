"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the student records backend.
Controllers are intentionally thin: they accept requests, delegate to
services, and return JSON responses. Every error response has the shape
`{"message": ...}`.

Endpoints implemented:
- POST /api/auth/login
- GET /api/students
- GET /api/students/search
- GET /api/students/count
- GET /api/students/{id}
- POST /api/students
- PUT /api/students/{id}
- DELETE /api/students/{id}
- GET /api/users
- POST /api/users
- DELETE /api/users/{id}
- GET /health

Role checks are left to the frontend; the server trusts its caller.
"""

from fastapi import FastAPI, Depends, HTTPException, Path, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Annotated, List
import json
import logging
import time
import uuid
from .database import create_db_and_tables, get_session, seed_default_users
from . import services, repositories
from .errors import ConflictError, InvalidCredentialsError, NotFoundError, ValidationError
from .schemas import (
    CountOut,
    LoginIn,
    LoginOut,
    MessageOut,
    StudentIn,
    StudentOut,
    UserCreatedOut,
    UserIn,
    UserOut,
)
from .config import settings

# ids are stored as signed 64-bit integers
MAX_RECORD_ID = 2**63 - 1
RecordId = Annotated[int, Path(ge=-MAX_RECORD_ID - 1, le=MAX_RECORD_ID)]

app = FastAPI(title="Student Records API")
logger = logging.getLogger("student_records.api")
if not logger.handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

create_db_and_tables()
if settings.SEED_DEFAULT_USERS:
    seed_default_users()


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                    "client": request.client.host if request.client else "unknown",
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    if request.url.path.startswith("/api"):
        logger.info(
            "request_done %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "status_code": response.status_code,
                    "duration_ms": elapsed_ms,
                    "client": request.client.host if request.client else "unknown",
                },
                ensure_ascii=True,
            ),
        )
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 naming the first offending field."""
    errors = exc.errors()
    if not errors:
        return JSONResponse(status_code=400, content={"message": "Invalid request."})
    first = errors[0]
    loc = first.get("loc", ())
    field = ".".join(str(p) for p in loc if p not in ("body", "path", "query") and not isinstance(p, int))
    msg = first.get("msg", "invalid value")
    if field:
        message = f"Invalid value for '{field}': {msg}"
    elif any(isinstance(p, int) for p in loc):
        # json decode errors report a character offset instead of a field
        message = f"Invalid request body: {msg}"
    else:
        message = f"Invalid request: {msg}"
    return JSONResponse(status_code=400, content={"message": message})


def get_auth_service(db: Session = Depends(get_session)) -> services.AuthService:
    return services.AuthService(repositories.UserRepository(db))


def get_student_service(db: Session = Depends(get_session)) -> services.StudentService:
    return services.StudentService(repositories.StudentRepository(db))


def get_user_service(db: Session = Depends(get_session)) -> services.UserService:
    return services.UserService(repositories.UserRepository(db))


# --- auth ---

@app.post('/api/auth/login', response_model=LoginOut)
def login(payload: LoginIn, auth: services.AuthService = Depends(get_auth_service)):
    """Check a username/password pair and return the user's role.

    No token or session is issued; the frontend keeps the role itself.
    """
    try:
        user = auth.login(payload.username, payload.password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return {'message': 'Login successful', 'username': user.username, 'role': user.role}


# --- students ---

@app.get('/api/students', response_model=List[StudentOut])
def list_students(svc: services.StudentService = Depends(get_student_service)):
    return svc.list_students()


@app.get('/api/students/search', response_model=List[StudentOut])
def search_students(name: str = "", svc: services.StudentService = Depends(get_student_service)):
    """Students whose name contains `name`, ignoring case.

    An empty or missing `name` returns every student.
    """
    return svc.search_by_name(name)


@app.get('/api/students/count', response_model=CountOut)
def count_students(svc: services.StudentService = Depends(get_student_service)):
    """Total number of students, used by the dashboard."""
    return {'total': svc.count_students()}


@app.get('/api/students/{student_id}', response_model=StudentOut)
def get_student(student_id: RecordId, svc: services.StudentService = Depends(get_student_service)):
    try:
        return svc.get_student(student_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post('/api/students', response_model=StudentOut, status_code=201)
def add_student(payload: StudentIn, svc: services.StudentService = Depends(get_student_service)):
    """Create a student; any `id` in the body is ignored."""
    try:
        return svc.add_student(payload)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=f"Failed to add student: {e}")


@app.put('/api/students/{student_id}', response_model=StudentOut)
def update_student(student_id: RecordId, payload: StudentIn, svc: services.StudentService = Depends(get_student_service)):
    """Overwrite name, email, course and department of a student."""
    try:
        return svc.update_student(student_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=f"Failed to update student: {e}")


@app.delete('/api/students/{student_id}', response_model=MessageOut)
def delete_student(student_id: RecordId, svc: services.StudentService = Depends(get_student_service)):
    try:
        svc.delete_student(student_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {'message': 'Student deleted successfully'}


# --- users ---

@app.get('/api/users', response_model=List[UserOut])
def list_users(svc: services.UserService = Depends(get_user_service)):
    """List every user with passwords blanked out."""
    return svc.list_users()


@app.post('/api/users', response_model=UserCreatedOut, status_code=201)
def create_user(payload: UserIn, svc: services.UserService = Depends(get_user_service)):
    """Create a user after validating username, password length and role.

    Returns 400 for the first failed validation and 409 when the
    username is taken. The password is never echoed back.
    """
    try:
        user = svc.create_user(payload.username, payload.password, payload.role)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {'message': 'User created successfully!', 'id': user.id, 'username': user.username, 'role': user.role}


@app.delete('/api/users/{user_id}', response_model=MessageOut)
def delete_user(user_id: RecordId, svc: services.UserService = Depends(get_user_service)):
    try:
        svc.delete_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {'message': 'User deleted successfully.'}


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
