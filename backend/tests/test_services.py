import pytest
from student_records import repositories, services, models
from student_records.errors import ConflictError, InvalidCredentialsError, NotFoundError, ValidationError
from student_records.schemas import StudentIn


def _data(**kw):
    base = {'name': 'Alice', 'email': 'alice@example.com', 'course': 'BCA', 'department': 'Physics'}
    base.update(kw)
    return StudentIn(**base)


def test_student_service_crud(session):
    svc = services.StudentService(repositories.StudentRepository(session))
    s = svc.add_student(_data())
    assert s.id is not None
    assert svc.get_student(s.id).email == 'alice@example.com'
    updated = svc.update_student(s.id, _data(name='Alicia'))
    assert updated.id == s.id
    assert updated.name == 'Alicia'
    assert svc.count_students() == 1
    svc.delete_student(s.id)
    assert svc.count_students() == 0
    with pytest.raises(NotFoundError):
        svc.get_student(s.id)
    with pytest.raises(NotFoundError):
        svc.delete_student(s.id)


def test_student_service_duplicate_email_keeps_session_usable(session):
    svc = services.StudentService(repositories.StudentRepository(session))
    svc.add_student(_data())
    with pytest.raises(ConflictError):
        svc.add_student(_data(name='Other'))
    assert svc.count_students() == 1
    assert [s.name for s in svc.search_by_name('')] == ['Alice']


def test_user_service_redacts_without_touching_rows(session):
    repo = repositories.UserRepository(session)
    svc = services.UserService(repo)
    u = svc.create_user('alice', 'secret', 'ADMIN')
    assert svc.list_users() == [{'id': u.id, 'username': 'alice', 'password': '', 'role': 'ADMIN'}]
    assert repo.get(u.id).password == 'secret'


def test_user_service_validation_errors(session):
    svc = services.UserService(repositories.UserRepository(session))
    with pytest.raises(ValidationError):
        svc.create_user(None, 'secret', 'USER')
    with pytest.raises(ValidationError):
        svc.create_user('bob', None, 'USER')
    with pytest.raises(ValidationError):
        svc.create_user('bob', 'secret', None)
    svc.create_user('bob', 'secret', models.Role.USER.value)
    with pytest.raises(ConflictError):
        svc.create_user('bob', 'secret', 'USER')


def test_auth_service(session):
    repo = repositories.UserRepository(session)
    services.UserService(repo).create_user('alice', 'secret', 'USER')
    auth = services.AuthService(repo)
    assert auth.login('alice', 'secret').role == 'USER'
    with pytest.raises(InvalidCredentialsError) as wrong:
        auth.login('alice', 'wrong')
    with pytest.raises(InvalidCredentialsError) as unknown:
        auth.login('nobody', 'secret')
    assert str(wrong.value) == str(unknown.value)
