"""
Tests for the generic tenant-scoped repository lifecycle.
"""

from datetime import datetime

import pytest

from practice_api.models import Patient, Sale, SaleItem
from practice_api.repositories import (
    CommonFilter,
    EntityRepository,
    Page,
    PatientFilter,
    PatientRepository,
    build_filter,
)
from practice_common.utils.exceptions import UnsupportedOperationError
from tests.conftest import ORG_A, ORG_B, USER_ID, patient_data


@pytest.fixture
def repo(db_session, seed_organizations, clock):
    return PatientRepository(db_session, clock=clock)


def names(rows):
    return [row.first_name for row in rows]


class TestCreate:
    """Insert with ownership and audit stamping."""

    def test_sets_tenant_and_audit_fields(self, repo, clock):
        patient = repo.create(patient_data(), ORG_A, USER_ID)

        assert patient.id is not None
        assert patient.organization_id == ORG_A
        assert patient.created_by == USER_ID
        assert patient.updated_by == USER_ID
        assert patient.created_at.replace(tzinfo=None) == clock.last.replace(tzinfo=None)
        assert patient.deleted_at is None

    def test_protected_fields_are_ignored(self, repo):
        patient = repo.create(
            patient_data(
                organization_id=ORG_B,
                created_by="someone-else",
                deleted_at=datetime(2020, 1, 1),
            ),
            ORG_A,
            USER_ID,
        )
        assert patient.organization_id == ORG_A
        assert patient.created_by == USER_ID
        assert patient.deleted_at is None

    def test_camel_case_keys_accepted(self, repo):
        patient = repo.create(
            {"firstName": "Luis", "lastName": "Vega", "dateOfBirth": patient_data()["date_of_birth"], "sex": "male"},
            ORG_A,
        )
        assert patient.first_name == "Luis"
        assert patient.created_by is None

    def test_unknown_keys_dropped(self, repo):
        patient = repo.create(patient_data(shoe_size=42), ORG_A)
        assert not hasattr(patient, "shoe_size")


class TestFindAll:
    """Listing with tenant scope, filters, sorting and pagination."""

    def test_tenant_isolation(self, repo):
        repo.create(patient_data(first_name="Ana"), ORG_A)
        repo.create(patient_data(first_name="Bruno"), ORG_B)

        assert names(repo.find_all(ORG_A)) == ["Ana"]
        assert names(repo.find_all(ORG_B)) == ["Bruno"]

    def test_without_tenant_lists_everything(self, repo):
        repo.create(patient_data(first_name="Ana"), ORG_A)
        repo.create(patient_data(first_name="Bruno"), ORG_B)
        assert sorted(names(repo.find_all())) == ["Ana", "Bruno"]

    def test_default_order_newest_first(self, repo):
        for name in ["First", "Second", "Third"]:
            repo.create(patient_data(first_name=name), ORG_A)
        assert names(repo.find_all(ORG_A)) == ["Third", "Second", "First"]

    def test_sort_by_column(self, repo):
        for name in ["Carla", "Ana", "Beto"]:
            repo.create(patient_data(first_name=name), ORG_A)
        params = CommonFilter(sort_by="firstName", sort_order="asc")
        assert names(repo.find_all(ORG_A, filter=params)) == ["Ana", "Beto", "Carla"]

    def test_soft_deleted_hidden_by_default(self, repo):
        kept = repo.create(patient_data(first_name="Kept"), ORG_A)
        gone = repo.create(patient_data(first_name="Gone"), ORG_A)
        repo.remove(gone.id, ORG_A, USER_ID)

        assert [p.id for p in repo.find_all(ORG_A)] == [kept.id]
        assert len(repo.find_all(ORG_A, include_deleted=True)) == 2

    def test_filter_include_deleted(self, repo):
        repo.create(patient_data(first_name="Kept"), ORG_A)
        gone = repo.create(patient_data(first_name="Gone"), ORG_A)
        repo.remove(gone.id, ORG_A)

        params = build_filter(PatientFilter, {"includeDeleted": "true"})
        assert sorted(names(repo.find_all(ORG_A, filter=params))) == ["Gone", "Kept"]

    def test_filter_include_deleted_keeps_tenant_scope(self, repo):
        repo.create(patient_data(first_name="Other"), ORG_B)
        params = CommonFilter(include_deleted=True)
        assert repo.find_all(ORG_A, filter=params) == []

    def test_search(self, repo):
        repo.create(patient_data(first_name="Ana", email="ana@north.test"), ORG_A)
        repo.create(patient_data(first_name="Bruno", phone="555-0101"), ORG_A)

        assert names(repo.find_all(ORG_A, filter=CommonFilter(search="north"))) == ["Ana"]
        assert names(repo.find_all(ORG_A, filter=CommonFilter(search=" 0101 "))) == ["Bruno"]

    def test_search_wildcards_are_literal(self, repo):
        repo.create(patient_data(first_name="Ana"), ORG_A)
        assert repo.find_all(ORG_A, filter=CommonFilter(search="%")) == []

    def test_date_range(self, repo, clock):
        repo.create(patient_data(first_name="Early"), ORG_A)
        cutoff = clock.last
        repo.create(patient_data(first_name="Late"), ORG_A)

        params = CommonFilter(date_from=cutoff.replace(tzinfo=None, microsecond=1))
        assert names(repo.find_all(ORG_A, filter=params)) == ["Late"]

        params = CommonFilter(date_to=cutoff.replace(tzinfo=None))
        assert names(repo.find_all(ORG_A, filter=params)) == ["Early"]

    def test_equality_on_declared_and_extra_fields(self, repo):
        repo.create(patient_data(first_name="Ana", blood_type="O+", city="Lima"), ORG_A)
        repo.create(patient_data(first_name="Bea", blood_type="A-", city="Lima"), ORG_A)

        params = build_filter(PatientFilter, {"bloodType": "O+"})
        assert names(repo.find_all(ORG_A, filter=params)) == ["Ana"]

        params = build_filter(PatientFilter, {"city": "Lima", "unknownThing": "x"})
        assert len(repo.find_all(ORG_A, filter=params)) == 2

    def test_boolean_equality_from_query_string(self, repo):
        repo.create(patient_data(first_name="On"), ORG_A)
        repo.create(patient_data(first_name="Off", is_active=False), ORG_A)

        params = build_filter(PatientFilter, {"isActive": "false"})
        assert names(repo.find_all(ORG_A, filter=params)) == ["Off"]

    def test_pagination_envelope(self, repo):
        for i in range(25):
            repo.create(patient_data(first_name=f"P{i:02d}"), ORG_A)

        result = repo.find_all(ORG_A, filter=CommonFilter(paginated=True, page=2, limit=10))

        assert isinstance(result, Page)
        assert result.total == 25
        assert result.page == 2
        assert result.limit == 10
        # newest first: P24..P15 on page 1, P14..P05 on page 2
        assert names(result.data) == [f"P{i:02d}" for i in range(14, 4, -1)]

    def test_last_page_partial(self, repo):
        for i in range(5):
            repo.create(patient_data(first_name=f"P{i}"), ORG_A)
        result = repo.find_all(ORG_A, filter=CommonFilter(paginated=True, page=3, limit=2))
        assert result.total == 5
        assert names(result.data) == ["P0"]

    def test_unpaginated_returns_list(self, repo):
        repo.create(patient_data(), ORG_A)
        assert isinstance(repo.find_all(ORG_A, filter=CommonFilter(limit=1)), list)

    def test_count(self, repo):
        repo.create(patient_data(sex="female"), ORG_A)
        repo.create(patient_data(sex="male"), ORG_A)
        assert repo.count(ORG_A) == 2
        assert repo.count(ORG_A, filter=PatientFilter(sex="male")) == 1


class TestFindOne:
    def test_found_in_tenant(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        assert repo.find_one(patient.id, ORG_A).id == patient.id

    def test_other_tenant_gets_none(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        assert repo.find_one(patient.id, ORG_B) is None

    def test_missing_id(self, repo):
        assert repo.find_one("does-not-exist", ORG_A) is None

    def test_soft_deleted_needs_include_deleted(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        repo.remove(patient.id, ORG_A)

        assert repo.find_one(patient.id, ORG_A) is None
        assert repo.find_one(patient.id, ORG_A, include_deleted=True).id == patient.id


class TestUpdate:
    def test_updates_fields_and_audit(self, repo, clock):
        patient = repo.create(patient_data(), ORG_A, USER_ID)

        updated = repo.update(patient.id, {"phone": "555-0199"}, ORG_A, "editor")

        assert updated.phone == "555-0199"
        assert updated.updated_by == "editor"
        assert updated.created_by == USER_ID
        assert updated.updated_at.replace(tzinfo=None) == clock.last.replace(tzinfo=None)

    def test_protected_fields_cannot_change(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        updated = repo.update(patient.id, {"organization_id": ORG_B, "id": "new-id"}, ORG_A)
        assert updated.organization_id == ORG_A
        assert updated.id == patient.id

    def test_other_tenant_gets_none(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        assert repo.update(patient.id, {"phone": "1"}, ORG_B) is None
        assert repo.find_one(patient.id, ORG_A).phone is None

    def test_soft_deleted_row_is_not_updated(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        repo.remove(patient.id, ORG_A)
        assert repo.update(patient.id, {"phone": "1"}, ORG_A) is None


class TestRemoveAndRestore:
    def test_soft_delete_stamps_marker(self, repo):
        patient = repo.create(patient_data(), ORG_A)

        result = repo.remove(patient.id, ORG_A, USER_ID)

        assert result == {"message": "Patients deleted successfully"}
        deleted = repo.find_one(patient.id, ORG_A, include_deleted=True)
        assert deleted.deleted_at is not None
        assert deleted.deleted_by == USER_ID

    def test_message_returned_even_when_nothing_matched(self, repo):
        assert repo.remove("missing", ORG_A) == {"message": "Patients deleted successfully"}

    def test_remove_in_other_tenant_leaves_row(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        repo.remove(patient.id, ORG_B)
        assert repo.find_one(patient.id, ORG_A) is not None

    def test_restore(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        repo.remove(patient.id, ORG_A, USER_ID)

        restored = repo.restore(patient.id, ORG_A, "restorer")

        assert restored.deleted_at is None
        assert restored.deleted_by is None
        assert restored.updated_by == "restorer"
        assert repo.find_one(patient.id, ORG_A) is not None

    def test_restore_live_row_is_a_no_op(self, repo):
        patient = repo.create(patient_data(), ORG_A)

        restored = repo.restore(patient.id, ORG_A, USER_ID)

        assert restored is not None
        assert restored.id == patient.id
        assert restored.deleted_at is None
        assert repo.find_one(patient.id, ORG_A) is not None

    def test_restore_missing_returns_none(self, repo):
        assert repo.restore("missing", ORG_A) is None

    def test_restore_other_tenant_returns_none(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        repo.remove(patient.id, ORG_A)
        assert repo.restore(patient.id, ORG_B) is None

    def test_restore_unsupported_without_soft_delete(self, db_session):
        lines = EntityRepository(SaleItem, db_session)
        with pytest.raises(UnsupportedOperationError) as exc_info:
            lines.restore("any-id")
        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "SaleItems does not support soft delete"

    def test_remove_without_soft_delete_is_physical(self, db_session, seed_organizations):
        sale = Sale(organization_id=ORG_A, sale_date=datetime(2026, 3, 1).date(), total_amount=10)
        sale.sale_items = [SaleItem(unit_price=10, total_price=10)]
        db_session.add(sale)
        db_session.commit()
        line_id = sale.sale_items[0].id

        lines = EntityRepository(SaleItem, db_session)
        assert lines.remove(line_id) == {"message": "SaleItems deleted successfully"}
        assert lines.find_one(line_id) is None

    def test_tenant_on_unscoped_table_raises(self, db_session):
        lines = EntityRepository(SaleItem, db_session)
        with pytest.raises(AttributeError):
            lines.find_all(ORG_A)


class TestHardDelete:
    def test_removes_row_permanently(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        repo.remove(patient.id, ORG_A)

        result = repo.hard_delete(patient.id, ORG_A)

        assert result == {"message": "Patients permanently deleted"}
        assert repo.find_one(patient.id, ORG_A, include_deleted=True) is None

    def test_other_tenant_cannot_hard_delete(self, repo):
        patient = repo.create(patient_data(), ORG_A)
        repo.hard_delete(patient.id, ORG_B)
        assert repo.find_one(patient.id, ORG_A) is not None


class TestGenericRepository:
    """EntityRepository used directly, without a subclass."""

    def test_plain_repository_on_patient(self, db_session, seed_organizations):
        repo = EntityRepository(Patient, db_session)
        patient = repo.create(patient_data(), ORG_A)
        assert repo.entity_name == "Patients"
        assert repo.model is Patient
        assert repo.session is db_session
        assert repo.find_one(patient.id, ORG_A) is not None
