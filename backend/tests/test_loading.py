"""
Tests for relation inclusion and column projection.
"""

from datetime import datetime

import pytest
from sqlalchemy import inspect as sa_inspect

from practice_api.models import Patient
from practice_api.repositories import (
    AppointmentRepository,
    HealthProfessionalRepository,
    PatientFilter,
    PatientRepository,
    TableMetadata,
    build_filter,
    build_loader_options,
)
from practice_api.services import serialize_entity
from tests.conftest import ORG_A, patient_data


@pytest.fixture
def seeded(db_session, seed_organizations):
    """A patient with one appointment with one professional."""
    patient = PatientRepository(db_session).create(
        patient_data(email="ana@north.test"), ORG_A
    )
    doctor = HealthProfessionalRepository(db_session).create(
        {"first_name": "Rosa", "last_name": "Diaz", "email": "rosa@north.test", "type": "doctor"},
        ORG_A,
    )
    start = datetime(2026, 4, 2, 10, 0)
    AppointmentRepository(db_session).create(
        {
            "patient_id": patient.id,
            "health_professional_id": doctor.id,
            "appointment_date": start,
            "start_time": start,
            "end_time": datetime(2026, 4, 2, 10, 30),
            "duration": 30,
            "appointment_type": "consultation",
        },
        ORG_A,
    )
    db_session.expunge_all()
    return patient.id


class TestBuildLoaderOptions:
    """Option construction without touching the database."""

    def test_nothing_requested(self):
        assert build_loader_options(TableMetadata.from_model(Patient)) == []

    def test_false_and_unknown_relations_skipped(self):
        meta = TableMetadata.from_model(Patient)
        assert build_loader_options(meta, {"appointments": False, "pets": True}) == []

    def test_one_option_per_relation(self):
        meta = TableMetadata.from_model(Patient)
        options = build_loader_options(meta, {"appointments": True, "medicalRecords": {"with": {}}})
        assert len(options) == 2

    def test_projection_is_single_option(self):
        meta = TableMetadata.from_model(Patient)
        options = build_loader_options(meta, None, {"firstName": True, "lastName": True})
        assert len(options) == 1

    def test_unknown_columns_only_means_no_projection(self):
        meta = TableMetadata.from_model(Patient)
        assert build_loader_options(meta, None, {"shoeSize": True}) == []


class TestRelationInclusion:
    def test_relations_not_loaded_by_default(self, db_session, seeded):
        patient = PatientRepository(db_session).find_one(seeded, ORG_A)
        assert "appointments" in sa_inspect(patient).unloaded
        assert "appointments" not in serialize_entity(patient)

    def test_include_relation(self, db_session, seeded):
        patient = PatientRepository(db_session).find_one(
            seeded, ORG_A, with_relations={"appointments": True}
        )
        data = serialize_entity(patient)
        assert len(data["appointments"]) == 1
        assert data["appointments"][0]["appointmentType"] == "consultation"
        assert "healthProfessional" not in data["appointments"][0]

    def test_nested_relation(self, db_session, seeded):
        patient = PatientRepository(db_session).find_one(
            seeded, ORG_A, with_relations={"appointments": {"with": {"healthProfessional": True}}}
        )
        data = serialize_entity(patient)
        assert data["appointments"][0]["healthProfessional"]["firstName"] == "Rosa"

    def test_nested_empty_with_includes_relation_only(self, db_session, seeded):
        patient = PatientRepository(db_session).find_one(
            seeded, ORG_A, with_relations={"appointments": {"with": {}}}
        )
        data = serialize_entity(patient)
        assert len(data["appointments"]) == 1
        assert "healthProfessional" not in data["appointments"][0]

    def test_find_all_with_filter_inclusion(self, db_session, seeded):
        params = build_filter(PatientFilter, {"with": '{"appointments": true}'})
        rows = PatientRepository(db_session).find_all(ORG_A, filter=params)
        assert len(serialize_entity(rows[0])["appointments"]) == 1


class TestColumnProjection:
    def test_include_only(self, db_session, seeded):
        patient = PatientRepository(db_session).find_one(
            seeded, ORG_A, columns={"firstName": True}
        )
        assert set(serialize_entity(patient)) == {"id", "firstName"}

    def test_exclude(self, db_session, seeded):
        patient = PatientRepository(db_session).find_one(seeded, ORG_A, columns={"email": False})
        data = serialize_entity(patient)
        assert "email" not in data
        assert data["firstName"] == "Ana"
        assert "lastName" in data

    def test_projection_with_relation(self, db_session, seeded):
        patient = PatientRepository(db_session).find_one(
            seeded,
            ORG_A,
            with_relations={"appointments": True},
            columns={"lastName": True},
        )
        data = serialize_entity(patient)
        assert data["lastName"] == "Lopez"
        assert "firstName" not in data
        assert len(data["appointments"]) == 1

    def test_find_all_projection(self, db_session, seeded):
        params = build_filter(PatientFilter, {"columns": '{"firstName": true, "email": true}'})
        rows = PatientRepository(db_session).find_all(ORG_A, filter=params)
        assert set(serialize_entity(rows[0])) == {"id", "firstName", "email"}
