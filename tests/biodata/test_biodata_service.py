from __future__ import annotations

import pytest

from employee_admin.core.enums import Gender
from employee_admin.core.exceptions import AuthorizationError, DuplicateNameError, NotFoundError, ValidationError
from fakes import audit_actions


def _payload(**overrides):
    data = {
        "full_name": "Alice Liddell",
        "email": "alice@example.com",
        "phone": "555-0100",
        "address": "1 Rabbit Hole",
        "date_of_birth": "1990-05-04",
        "gender": "Female",
        "position": "Engineer",
        "department": "R&D",
        "joining_date": "2020-01-15",
    }
    data.update(overrides)
    return data


def test_create_biodata_for_self(container, alice):
    biodata_id = container.biodata_service.create(_payload(), actor=alice)
    record = container.biodata_service.get(biodata_id, actor=alice)

    assert record.employee_id == alice.user_id
    assert record.fields.gender == Gender.FEMALE
    assert record.to_dict()["gender"] == "female"
    assert audit_actions(container) == ["BIODATA_CREATED"]


def test_one_biodata_per_employee(container, alice):
    container.biodata_service.create(_payload(), actor=alice)

    with pytest.raises(DuplicateNameError, match="Biodata already exists"):
        container.biodata_service.create(_payload(full_name="Second"), actor=alice)
    assert len(container.biodata_repo.records) == 1


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"address": ""}, "All fields are required"),
        ({"email": "not-an-email"}, "Invalid email"),
        ({"gender": "unknown"}, "Invalid gender"),
        ({"joining_date": "1980-01-01"}, "Joining date"),
    ],
)
def test_biodata_validation(container, alice, overrides, message):
    with pytest.raises(ValidationError, match=message):
        container.biodata_service.create(_payload(**overrides), actor=alice)


def test_update_is_owner_only(container, admin, alice, bob):
    biodata_id = container.biodata_service.create(_payload(), actor=alice)

    with pytest.raises(AuthorizationError):
        container.biodata_service.update(biodata_id, _payload(position="Thief"), actor=bob)

    container.biodata_service.update(biodata_id, _payload(position="Lead"), actor=alice)
    assert container.biodata_repo.get(biodata_id).fields.position == "Lead"


def test_list_for_employee_and_delete(container, admin, alice, bob):
    biodata_id = container.biodata_service.create(_payload(), actor=alice)

    assert [b.biodata_id for b in container.biodata_service.list_for_employee(alice.user_id, actor=alice)] == [
        biodata_id
    ]
    assert container.biodata_service.list_for_employee(bob.user_id, actor=bob) == []
    with pytest.raises(AuthorizationError):
        container.biodata_service.delete(biodata_id, actor=bob)

    container.biodata_service.delete(biodata_id, actor=admin)
    with pytest.raises(NotFoundError):
        container.biodata_service.get(biodata_id, actor=admin)
