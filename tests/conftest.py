from __future__ import annotations

import pytest

from employee_admin.audit.model import Actor
from employee_admin.container import wire_container
from employee_admin.core.enums import UserType
from fakes import (
    actor_for,
    add_user,
    Clock,
    FakeActivityRepo,
    FakeBiodataRepo,
    FakeHolidayRepo,
    FakeLeaveRepo,
    FakeRequestRepo,
    FakeRoleRepo,
    FakeSalaryRepo,
    FakeUserRepo,
)


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def container(clock):
    roles_repo = FakeRoleRepo(clock)
    users_repo = FakeUserRepo(roles_repo)
    return wire_container(
        users_repo=users_repo,
        roles_repo=roles_repo,
        activity_repo=FakeActivityRepo(clock),
        leaves_repo=FakeLeaveRepo(users_repo),
        biodata_repo=FakeBiodataRepo(),
        salaries_repo=FakeSalaryRepo(),
        holidays_repo=FakeHolidayRepo(),
        requests_repo=FakeRequestRepo(),
    )


@pytest.fixture
def admin(container) -> Actor:
    return actor_for(container, add_user(container, "boss", user_type=UserType.ADMIN))


@pytest.fixture
def alice(container) -> Actor:
    return actor_for(container, add_user(container, "alice"))


@pytest.fixture
def bob(container) -> Actor:
    return actor_for(container, add_user(container, "bob"))
