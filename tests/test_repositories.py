"""
repository 계층 테스트

세션/커넥션을 mock으로 대체하고 DB 오류 -> AppError 변환을 확인
"""
import asyncio
from types import SimpleNamespace
from unittest.mock import MagicMock, AsyncMock

import asyncpg
import pytest
from sqlalchemy.exc import IntegrityError

from db.models.application import Application
from db.repositories import companies as company_repo
from db.repositories import jobs as job_repo
from db.repositories import users as user_repo
from schemas.company import CompanyCreateRequest
from schemas.job import JobCreateRequest
from utils.auth import hash_password
from utils.errors import AuthorizationError, BadRequestError, EmptyUpdateError, NotFoundError


def integrity_error() -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception("duplicate key value"))


@pytest.fixture
def db():
    """AsyncSession 대체"""
    session = MagicMock()
    session.get = AsyncMock(return_value=None)
    session.flush = AsyncMock()
    session.execute = AsyncMock(return_value=SimpleNamespace(rowcount=1))
    return session


@pytest.fixture
def conn():
    """asyncpg 커넥션 대체"""
    return SimpleNamespace(fetchrow=AsyncMock(return_value=None))


class TestCompanyRepository:

    new_company = CompanyCreateRequest(handle="c2", name="C1", description="d")

    def test_create(self, db):
        company = asyncio.run(company_repo.create_company(db, self.new_company))

        assert (company.handle, company.name) == ("c2", "C1")
        db.add.assert_called_once_with(company)

    def test_create_duplicate_handle(self, db):
        db.get.return_value = SimpleNamespace(handle="c2")

        with pytest.raises(BadRequestError, match="Duplicate company: c2"):
            asyncio.run(company_repo.create_company(db, self.new_company))
        db.add.assert_not_called()

    def test_create_duplicate_name(self, db):
        db.flush.side_effect = integrity_error()

        with pytest.raises(BadRequestError, match="Duplicate company name: C1"):
            asyncio.run(company_repo.create_company(db, self.new_company))

    def test_get_not_found(self, db):
        with pytest.raises(NotFoundError, match="No company: nope"):
            asyncio.run(company_repo.get_company(db, "nope"))

    def test_update_builds_positional_statement(self, conn):
        row = {"handle": "c1", "name": "C1", "description": "d", "num_employees": 10, "logo_url": None}
        conn.fetchrow.return_value = row

        result = asyncio.run(company_repo.update_company(conn, "c1", {"numEmployees": 10}))

        assert result == row
        sql, *params = conn.fetchrow.await_args.args
        assert '"num_employees"=$1' in sql
        assert "handle = $2" in sql
        assert params == [10, "c1"]

    def test_update_empty(self, conn):
        with pytest.raises(EmptyUpdateError):
            asyncio.run(company_repo.update_company(conn, "c1", {}))
        conn.fetchrow.assert_not_awaited()

    def test_update_duplicate_name(self, conn):
        conn.fetchrow.side_effect = asyncpg.UniqueViolationError("duplicate key value")

        with pytest.raises(BadRequestError, match="Duplicate company name: C2"):
            asyncio.run(company_repo.update_company(conn, "c1", {"name": "C2"}))

    def test_update_not_found(self, conn):
        with pytest.raises(NotFoundError, match="No company: nope"):
            asyncio.run(company_repo.update_company(conn, "nope", {"name": "x"}))

    def test_remove_not_found(self, db):
        db.execute.return_value = SimpleNamespace(rowcount=0)

        with pytest.raises(NotFoundError, match="No company: nope"):
            asyncio.run(company_repo.remove_company(db, "nope"))

    def test_remove(self, db):
        asyncio.run(company_repo.remove_company(db, "c1"))
        db.execute.assert_awaited_once()


class TestJobRepository:

    new_job = JobCreateRequest(title="J1", salary=100, equity=None, company_handle="c1")

    def test_create_unknown_company(self, db):
        with pytest.raises(NotFoundError, match="No company: c1"):
            asyncio.run(job_repo.create_job(db, self.new_job))
        db.add.assert_not_called()

    def test_create(self, db):
        db.get.return_value = SimpleNamespace(handle="c1")

        job = asyncio.run(job_repo.create_job(db, self.new_job))

        assert (job.title, job.company_handle) == ("J1", "c1")

    def test_get_not_found(self, db):
        with pytest.raises(NotFoundError, match="No job: 9"):
            asyncio.run(job_repo.get_job(db, 9))

    def test_update(self, conn):
        conn.fetchrow.return_value = {"id": 1, "title": "J2", "salary": 5, "equity": None,
                                      "company_handle": "c1"}

        asyncio.run(job_repo.update_job(conn, 1, {"title": "J2", "salary": 5}))

        sql, *params = conn.fetchrow.await_args.args
        assert '"title"=$1, "salary"=$2' in sql
        assert "id = $3" in sql
        assert params == ["J2", 5, 1]

    def test_update_not_found(self, conn):
        with pytest.raises(NotFoundError, match="No job: 9"):
            asyncio.run(job_repo.update_job(conn, 9, {"title": "x"}))

    def test_remove_not_found(self, db):
        db.execute.return_value = SimpleNamespace(rowcount=0)

        with pytest.raises(NotFoundError, match="No job: 9"):
            asyncio.run(job_repo.remove_job(db, 9))


class TestUserRepository:

    def test_authenticate(self, db):
        user = SimpleNamespace(username="u1", password=hash_password("password1"))
        db.get.return_value = user

        assert asyncio.run(user_repo.authenticate(db, "u1", "password1")) is user

    def test_authenticate_wrong_password(self, db):
        db.get.return_value = SimpleNamespace(username="u1", password=hash_password("password1"))

        with pytest.raises(AuthorizationError, match="Invalid username/password"):
            asyncio.run(user_repo.authenticate(db, "u1", "wrong"))

    def test_authenticate_unknown_user(self, db):
        with pytest.raises(AuthorizationError):
            asyncio.run(user_repo.authenticate(db, "nope", "password1"))

    def test_register_duplicate(self, db):
        db.get.return_value = SimpleNamespace(username="u1")
        data = SimpleNamespace(username="u1", password="password1", first_name="F",
                               last_name="L", email="u1@user.com")

        with pytest.raises(BadRequestError, match="Duplicate username: u1"):
            asyncio.run(user_repo.register(db, data))

    def test_update_not_found(self, conn):
        with pytest.raises(NotFoundError, match="No user: nope"):
            asyncio.run(user_repo.update_user(conn, "nope", {"firstName": "x"}))

    def test_update_maps_columns(self, conn):
        conn.fetchrow.return_value = {"username": "u1", "first_name": "A", "last_name": "B",
                                      "email": "u1@user.com", "is_admin": False}

        asyncio.run(user_repo.update_user(conn, "u1", {"firstName": "A", "lastName": "B"}))

        sql, *params = conn.fetchrow.await_args.args
        assert '"first_name"=$1, "last_name"=$2' in sql
        assert params == ["A", "B", "u1"]

    def test_remove_not_found(self, db):
        db.execute.return_value = SimpleNamespace(rowcount=0)

        with pytest.raises(NotFoundError, match="No user: nope"):
            asyncio.run(user_repo.remove_user(db, "nope"))

    def test_apply_unknown_job(self, db):
        with pytest.raises(NotFoundError, match="No job: 3"):
            asyncio.run(user_repo.apply_to_job(db, "u1", 3))

    def test_apply_unknown_user(self, db):
        db.get.side_effect = [SimpleNamespace(id=3), None]

        with pytest.raises(NotFoundError, match="No user: u1"):
            asyncio.run(user_repo.apply_to_job(db, "u1", 3))

    def test_apply_twice(self, db):
        db.get.side_effect = [SimpleNamespace(id=3), SimpleNamespace(username="u1")]
        db.flush.side_effect = integrity_error()

        with pytest.raises(BadRequestError, match="Already applied: 3"):
            asyncio.run(user_repo.apply_to_job(db, "u1", 3))

    def test_apply(self, db):
        db.get.side_effect = [SimpleNamespace(id=3), SimpleNamespace(username="u1")]

        assert asyncio.run(user_repo.apply_to_job(db, "u1", 3)) == 3
        application = db.add.call_args[0][0]
        assert isinstance(application, Application)
        assert (application.username, application.job_id) == ("u1", 3)
