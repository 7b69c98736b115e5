from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

import pytest
from src.domain.services.users import UserService
from src.domain.validators import UserValidationError
from src.infrastructure.repositories.user_repository import InMemoryUserRepository
from tests.utils import create_request, update_request


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def seed_scenario(service: UserService) -> dict[str, int]:
    return {
        "A": service.create(create_request("A", "One", "a@techhive.local", "Engineering", True)),
        "B": service.create(create_request("B", "Two", "b@techhive.local", "Engineering", False)),
        "C": service.create(create_request("C", "Three", "c@techhive.local", "HR", True)),
        "D": service.create(create_request("D", "Four", "d@techhive.local", "Engineering", True)),
    }


class TestCreate:
    def test_create_assigns_id_and_persists(self, service: UserService) -> None:
        user_id = service.create(create_request())

        user = service.get_by_id(user_id)
        assert user is not None
        assert user.id == user_id
        assert user.first_name == "Ada"

    def test_create_trims_text_fields(self, service: UserService) -> None:
        user_id = service.create(
            create_request("  Ada ", " Lovelace", " ada@techhive.local ", " R&D  ", False)
        )

        user = service.get_by_id(user_id)
        assert user is not None
        assert (user.first_name, user.last_name, user.email, user.department) == (
            "Ada",
            "Lovelace",
            "ada@techhive.local",
            "R&D",
        )
        assert user.is_active is False

    def test_create_stamps_equal_utc_timestamps(self, repository: InMemoryUserRepository) -> None:
        clock = FakeClock(datetime(2024, 5, 1, 12, tzinfo=UTC))
        service = UserService(repository, clock=clock)

        user = service.get_by_id(service.create(create_request()))

        assert user is not None
        assert user.created_at == user.updated_at == clock.now
        assert user.created_at.tzinfo is UTC

    def test_ids_are_unique_across_creates(self, service: UserService) -> None:
        ids = [service.create(create_request(email=f"user{i}@techhive.local")) for i in range(25)]

        assert len(set(ids)) == 25

    @pytest.mark.parametrize("email", ["invalid-email", "@techhive.local", "ada@", "ada@techhive"])
    def test_create_with_invalid_email_creates_nothing(
        self, service: UserService, repository: InMemoryUserRepository, email: str
    ) -> None:
        with pytest.raises(UserValidationError):
            service.create(create_request(email=email))

        assert len(repository) == 0


class TestUpdate:
    def test_update_changes_fields(self, service: UserService) -> None:
        user_id = service.create(create_request("Grace", "Hopper", "grace@techhive.local", "Engineering"))

        ok = service.update(
            user_id, update_request("Grace", "Hopper", "grace@techhive.local", "Platform", False)
        )

        assert ok is True
        user = service.get_by_id(user_id)
        assert user is not None
        assert user.department == "Platform"
        assert user.is_active is False

    def test_update_trims_and_advances_updated_timestamp(self, repository: InMemoryUserRepository) -> None:
        clock = FakeClock(datetime(2024, 5, 1, 12, tzinfo=UTC))
        service = UserService(repository, clock=clock)
        user_id = service.create(create_request())
        clock.advance(minutes=10)

        service.update(user_id, update_request(" Ada ", "King", "ada@king.local ", " Math ", True))

        user = service.get_by_id(user_id)
        assert user is not None
        assert (user.first_name, user.last_name, user.email, user.department) == (
            "Ada",
            "King",
            "ada@king.local",
            "Math",
        )
        assert user.created_at == datetime(2024, 5, 1, 12, tzinfo=UTC)
        assert user.updated_at == clock.now

    def test_update_with_invalid_data_raises_and_leaves_record(self, service: UserService) -> None:
        user_id = service.create(create_request("Marie", "Curie", "marie@techhive.local", "Science"))
        before = service.get_by_id(user_id)

        with pytest.raises(UserValidationError):
            service.update(user_id, update_request("", "Curie", "marie@techhive.local", "Science"))
        with pytest.raises(UserValidationError):
            service.update(user_id, update_request("Marie", "Curie", "marie@", "Science"))

        assert service.get_by_id(user_id) == before

    def test_update_missing_user_returns_false(self, service: UserService) -> None:
        assert service.update(404, update_request()) is False

    def test_update_missing_user_with_invalid_body_is_a_validation_error(self, service: UserService) -> None:
        with pytest.raises(UserValidationError):
            service.update(404, update_request(email="broken"))


class TestDelete:
    def test_delete_removes_entry(self, service: UserService) -> None:
        user_id = service.create(create_request("Alan", "Turing", "alan@techhive.local", "AI"))

        assert service.delete(user_id) is True
        assert service.get_by_id(user_id) is None

    def test_delete_missing_returns_false(self, service: UserService) -> None:
        assert service.delete(1) is False

    def test_get_all_reflects_deletes(self, service: UserService) -> None:
        ids = seed_scenario(service)
        service.delete(ids["B"])

        assert sorted(user.first_name for user in service.get_all()) == ["A", "C", "D"]


class TestPaging:
    def test_filters_and_paginates(self, service: UserService) -> None:
        seed_scenario(service)

        page1 = service.get_paged("Engineering", True, page=1, page_size=2)
        page2 = service.get_paged("Engineering", True, page=2, page_size=2)

        assert len(page1.items) == 2
        assert all(u.department == "Engineering" and u.is_active for u in page1.items)
        assert page1.total_count == 2
        assert page2.items == ()
        assert page2.total_count == 2

    @pytest.mark.parametrize("department", ["engineering", "ENGINEERING", "EnGiNeErInG"])
    def test_department_filter_ignores_case(self, service: UserService, department: str) -> None:
        seed_scenario(service)

        expected = service.get_paged("Engineering", True).items
        actual = service.get_paged(department, True).items

        assert [u.id for u in actual] == [u.id for u in expected]

    def test_active_filter_alone(self, service: UserService) -> None:
        ids = seed_scenario(service)

        result = service.get_paged(is_active=False)

        assert [u.id for u in result.items] == [ids["B"]]
        assert result.total_count == 1

    @pytest.mark.parametrize("department", [None, "", "   "])
    def test_blank_department_does_not_filter(self, service: UserService, department: str | None) -> None:
        seed_scenario(service)

        assert service.get_paged(department).total_count == 4

    @pytest.mark.parametrize(("page", "expected"), [(0, 1), (-3, 1), (2, 2)])
    def test_page_is_normalized(self, service: UserService, page: int, expected: int) -> None:
        assert service.get_paged(page=page).page == expected

    @pytest.mark.parametrize(("page_size", "expected"), [(0, 20), (-1, 20), (501, 20), (1, 1), (500, 500)])
    def test_page_size_is_normalized(self, service: UserService, page_size: int, expected: int) -> None:
        assert service.get_paged(page_size=page_size).page_size == expected

    def test_offset_past_end_is_empty(self, service: UserService) -> None:
        seed_scenario(service)

        result = service.get_paged(page=50, page_size=10)

        assert result.items == ()
        assert result.total_count == 4
        assert result.page == 50

    @pytest.mark.parametrize(("count", "page_size"), [(23, 5), (20, 5), (7, 7), (3, 10), (1, 1)])
    def test_pages_partition_the_filtered_set(self, service: UserService, count: int, page_size: int) -> None:
        for i in range(count):
            service.create(create_request(email=f"u{i}@techhive.local", department="Ops"))
        service.create(create_request(email="other@techhive.local", department="HR"))

        pages = math.ceil(count / page_size)
        seen: list[int] = []
        for page in range(1, pages + 1):
            result = service.get_paged("ops", page=page, page_size=page_size)
            assert result.total_count == count
            seen.extend(u.id for u in result.items)

        last = service.get_paged("ops", page=pages, page_size=page_size)
        assert len(last.items) == (count % page_size or page_size)
        assert len(seen) == len(set(seen)) == count
        assert service.get_paged("ops", page=pages + 1, page_size=page_size).items == ()
