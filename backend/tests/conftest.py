from pathlib import Path
import os
import pytest

# Point the app at a throwaway database before anything imports it.
TEST_DB = Path(__file__).resolve().parents[1] / "test_students.db"
if TEST_DB.exists():
    TEST_DB.unlink()
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
os.environ["SEED_DEFAULT_USERS"] = "false"


@pytest.fixture(autouse=True)
def reset_db():
    """Give every test empty `students` and `users` tables."""
    from sqlmodel import SQLModel
    from student_records.database import engine, create_db_and_tables
    SQLModel.metadata.drop_all(engine)
    create_db_and_tables()
    yield


@pytest.fixture
def session():
    from sqlmodel import Session
    from student_records.database import engine
    with Session(engine) as s:
        yield s
