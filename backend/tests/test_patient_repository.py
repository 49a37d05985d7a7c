"""
Tests for patient-specific filters and finders.
"""

from datetime import date

import pytest

from practice_api.repositories import PatientFilter, PatientRepository, build_filter
from practice_api.repositories.patient import years_before
from tests.conftest import ORG_A, ORG_B, patient_data


@pytest.fixture
def repo(db_session, seed_organizations, clock):
    # clock starts on 2026-03-01
    return PatientRepository(db_session, clock=clock)


def names(rows):
    return sorted(row.first_name for row in rows)


class TestYearsBefore:
    def test_regular_day(self):
        assert years_before(date(2026, 3, 1), 30) == date(1996, 3, 1)

    def test_leap_day_falls_back(self):
        assert years_before(date(2024, 2, 29), 1) == date(2023, 2, 28)


class TestAgeFilters:
    @pytest.fixture(autouse=True)
    def patients(self, repo):
        repo.create(patient_data(first_name="Thirty", date_of_birth=date(1996, 3, 1)), ORG_A)
        repo.create(patient_data(first_name="TwentyNine", date_of_birth=date(1996, 3, 2)), ORG_A)
        repo.create(patient_data(first_name="ThirtyFive", date_of_birth=date(1990, 5, 17)), ORG_A)

    def test_age_from(self, repo):
        params = build_filter(PatientFilter, {"ageFrom": "30"})
        assert names(repo.find_all(ORG_A, filter=params)) == ["Thirty", "ThirtyFive"]

    def test_age_to(self, repo):
        params = build_filter(PatientFilter, {"ageTo": "30"})
        assert names(repo.find_all(ORG_A, filter=params)) == ["Thirty", "TwentyNine"]

    def test_exact_age(self, repo):
        params = build_filter(PatientFilter, {"ageFrom": "30", "ageTo": "30"})
        assert names(repo.find_all(ORG_A, filter=params)) == ["Thirty"]

    def test_date_of_birth_range(self, repo):
        params = build_filter(
            PatientFilter, {"dateOfBirthFrom": "1991-01-01", "dateOfBirthTo": "1996-03-01"}
        )
        assert names(repo.find_all(ORG_A, filter=params)) == ["Thirty"]


class TestPatientFinders:
    def test_find_by_email(self, repo):
        repo.create(patient_data(first_name="Ana", email="ana@north.test"), ORG_A)
        repo.create(patient_data(first_name="Other", email="ana@north.test"), ORG_B)

        assert repo.find_by_email("ana@north.test", ORG_A).first_name == "Ana"
        assert repo.find_by_email("nobody@north.test", ORG_A) is None

    def test_search_patients(self, repo):
        repo.create(patient_data(first_name="Ana", last_name="Lopez"), ORG_A)
        repo.create(patient_data(first_name="Bruno", last_name="Diaz", phone="555-0101"), ORG_A)

        assert names(repo.search_patients("Lop", ORG_A)) == ["Ana"]
        assert names(repo.search_patients("0101", ORG_A)) == ["Bruno"]
        assert repo.search_patients("   ", ORG_A) == []

    def test_find_by_blood_type(self, repo):
        repo.create(patient_data(first_name="Ana", blood_type="O+"), ORG_A)
        repo.create(patient_data(first_name="Bea", blood_type="B-"), ORG_A)
        assert names(repo.find_by_blood_type("O+", ORG_A)) == ["Ana"]

    def test_statistics(self, repo):
        repo.create(patient_data(), ORG_A)
        repo.create(patient_data(), ORG_A)
        repo.create(patient_data(is_active=False), ORG_A)
        gone = repo.create(patient_data(), ORG_A)
        repo.remove(gone.id, ORG_A)

        assert repo.get_statistics(ORG_A) == {"total": 3, "active": 2, "inactive": 1}
        assert repo.get_statistics(ORG_B) == {"total": 0, "active": 0, "inactive": 0}
