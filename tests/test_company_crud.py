"""
Tests for the company CRUD layer against SQLite.
"""

import pytest

from app.core.config import settings
from app.core.exceptions import InvalidInputError, NotFoundError
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.schemas.company import CompanyCreateRequest


def company_names(companies):
    return [c["name"] for c in companies]


class TestCreate:

    def test_create(self, db_session, seed, sample_company_data):
        company = company_crud.create(db_session, CompanyCreateRequest(**sample_company_data))

        assert company == sample_company_data
        assert company_crud.get(db_session, "new")["name"] == "New"

    def test_create_without_optional_fields(self, db_session, seed):
        company = company_crud.create(
            db_session,
            CompanyCreateRequest(handle="bare", name="Bare", description="No extras")
        )

        assert company["numEmployees"] is None
        assert company["logoUrl"] is None

    def test_duplicate_handle(self, db_session, seed, sample_company_data):
        company_crud.create(db_session, CompanyCreateRequest(**sample_company_data))

        with pytest.raises(InvalidInputError, match="Duplicate company"):
            company_crud.create(db_session, CompanyCreateRequest(**sample_company_data))


class TestFindAll:

    def test_no_filter(self, db_session, seed):
        companies = company_crud.find_all(db_session)

        assert companies == [
            {"handle": "c1", "name": "C1", "description": "Desc1", "numEmployees": 1, "logoUrl": "http://c1.img"},
            {"handle": "c2", "name": "C2", "description": "Desc2", "numEmployees": 2, "logoUrl": "http://c2.img"},
            {"handle": "c3", "name": "C3", "description": "Desc3", "numEmployees": 3, "logoUrl": "http://c3.img"},
        ]

    def test_name_exact(self, db_session, seed):
        assert company_names(company_crud.find_all(db_session, {"name": "C1"})) == ["C1"]

    def test_name_exact_is_not_partial(self, db_session, seed):
        assert company_crud.find_all(db_session, {"name": "c"}) == []

    def test_name_partial_mode(self, db_session, seed, monkeypatch):
        monkeypatch.setattr(settings, "COMPANY_NAME_MATCH", "partial")

        assert company_names(company_crud.find_all(db_session, {"name": "c"})) == ["C1", "C2", "C3"]

    @pytest.mark.parametrize("name", ["%", "_", "\\"])
    def test_name_partial_wildcards_are_literal(self, db_session, seed, monkeypatch, name):
        monkeypatch.setattr(settings, "COMPANY_NAME_MATCH", "partial")

        assert company_crud.find_all(db_session, {"name": name}) == []

    def test_name_partial_matches_literal_percent(self, db_session, seed, monkeypatch):
        monkeypatch.setattr(settings, "COMPANY_NAME_MATCH", "partial")
        company_crud.create(
            db_session,
            CompanyCreateRequest(handle="pct", name="100% Fun_Co", description="Percent")
        )

        assert company_names(company_crud.find_all(db_session, {"name": "0% f"})) == ["100% Fun_Co"]
        assert company_names(company_crud.find_all(db_session, {"name": "n_c"})) == ["100% Fun_Co"]

    def test_ordered_by_name_not_handle(self, db_session, seed):
        company_crud.create(db_session, CompanyCreateRequest(handle="a0", name="Zeta", description="Last"))
        company_crud.create(db_session, CompanyCreateRequest(handle="z9", name="Alpha", description="First"))

        companies = company_crud.find_all(db_session)

        assert company_names(companies) == ["Alpha", "C1", "C2", "C3", "Zeta"]
        assert [c["handle"] for c in companies] == ["z9", "c1", "c2", "c3", "a0"]

    def test_min_employees(self, db_session, seed):
        assert company_names(company_crud.find_all(db_session, {"minEmployees": 2})) == ["C2", "C3"]

    def test_max_employees(self, db_session, seed):
        assert company_names(company_crud.find_all(db_session, {"maxEmployees": 2})) == ["C1", "C2"]

    def test_min_and_max(self, db_session, seed):
        companies = company_crud.find_all(db_session, {"minEmployees": 2, "maxEmployees": 2})
        assert company_names(companies) == ["C2"]

    def test_max_and_name(self, db_session, seed):
        companies = company_crud.find_all(db_session, {"name": "C1", "maxEmployees": 2})
        assert company_names(companies) == ["C1"]

    def test_min_and_name_no_match(self, db_session, seed):
        assert company_crud.find_all(db_session, {"name": "C1", "minEmployees": 2}) == []

    def test_min_greater_than_max(self, db_session, seed):
        with pytest.raises(InvalidInputError):
            company_crud.find_all(db_session, {"minEmployees": 5, "maxEmployees": 2})


class TestGet:

    def test_get_includes_jobs(self, db_session, seed):
        company = company_crud.get(db_session, "c1")

        assert company["handle"] == "c1"
        assert company["jobs"] == [
            {"id": seed[0], "title": "j1", "salary": 100, "equity": pytest.approx(0.1), "companyHandle": "c1"}
        ]

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "nope")


class TestUpdate:

    def test_update(self, db_session, seed):
        company = company_crud.update(db_session, "c1", {"name": "New", "numEmployees": 10, "logoUrl": None})

        assert company == {
            "handle": "c1",
            "name": "New",
            "description": "Desc1",
            "numEmployees": 10,
            "logoUrl": None,
        }

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.update(db_session, "nope", {"name": "New"})

    def test_no_data(self, db_session, seed):
        with pytest.raises(InvalidInputError):
            company_crud.update(db_session, "c1", {})


class TestRemove:

    def test_remove_cascades_to_jobs(self, db_session, seed):
        company_crud.remove(db_session, "c1")

        with pytest.raises(NotFoundError):
            company_crud.get(db_session, "c1")

        assert all(job["companyHandle"] != "c1" for job in job_crud.find_all(db_session))

    def test_not_found(self, db_session, seed):
        with pytest.raises(NotFoundError):
            company_crud.remove(db_session, "nope")
