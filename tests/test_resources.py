"""Tests for the resource routers (rooms, floors, employees, visitors, vouchers, orders) and their services."""

import sqlite3
import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from app.core.errors import AppError, is_unique_violation
from app.core.security import hash_password
from app.models import User, Voucher
from app.services import crud
from app.services.orders import booked_days, quote_total
from app.services.users import (
    INACTIVE_ACCOUNT_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    MISSING_CREDENTIALS_MESSAGE,
    authenticate,
)
from app.shared.text import camel_to_snake, slugify
from support import PASSWORD, ApiTestCase

ROOM = {
    "name": "Conference Room Alpha",
    "description": "Twelve seats and a projector",
    "roomFeatures": ["projector", "wifi"],
    "price": 1500,
    "type": "office",
}


class TestRooms(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.auth_headers("root", role="admin")

    def create_room(self, **overrides) -> dict:
        response = self.client.post("/api/v1/rooms", json={**ROOM, **overrides}, headers=self.admin)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]

    def test_create_generates_slug(self) -> None:
        room = self.create_room()
        self.assertEqual(room["slug"], "conference-room-alpha")
        self.assertEqual(room["roomFeatures"], ["projector", "wifi"])

    def test_lookup_by_id_and_slug_is_public(self) -> None:
        room = self.create_room()
        by_id = self.client.get(f"/api/v1/rooms/{room['id']}")
        by_slug = self.client.get("/api/v1/rooms/slug/conference-room-alpha")
        self.assertEqual(by_id.status_code, 200)
        self.assertEqual(by_slug.json()["data"], by_id.json()["data"])
        self.assertEqual(self.client.get("/api/v1/rooms/slug/nowhere").status_code, 404)

    def test_rename_updates_slug(self) -> None:
        room = self.create_room()
        response = self.client.patch(
            f"/api/v1/rooms/{room['id']}", json={"name": "Quiet Pod"}, headers=self.admin
        )
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["data"]["slug"], "quiet-pod")

    def test_duplicate_name(self) -> None:
        self.create_room()
        response = self.client.post("/api/v1/rooms", json=ROOM, headers=self.admin)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Duplicate field value: name. Please use another value!")

    def test_list_sort_and_filter(self) -> None:
        self.create_room(name="Cheap Desk", price=100, type="coworking-space")
        self.create_room(name="Big Office", price=900)
        self.create_room(name="Mid Office", price=400)
        response = self.client.get("/api/v1/rooms", params={"sort": "-price"})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["results"], 3)
        self.assertEqual([r["price"] for r in body["data"]], [900, 400, 100])

        filtered = self.client.get("/api/v1/rooms", params={"type": "coworking-space"}).json()
        self.assertEqual([r["name"] for r in filtered["data"]], ["Cheap Desk"])

        paged = self.client.get("/api/v1/rooms", params={"sort": "price", "page": 2, "limit": 2}).json()
        self.assertEqual([r["name"] for r in paged["data"]], ["Big Office"])

    def test_invalid_sort_field(self) -> None:
        response = self.client.get("/api/v1/rooms", params={"sort": "passwordHash"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Invalid sort field: passwordHash")

    def test_unknown_floor(self) -> None:
        response = self.client.post("/api/v1/rooms", json={**ROOM, "floorId": 42}, headers=self.admin)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "No floor found with that ID")

    def test_writes_need_admin_or_owner(self) -> None:
        user = self.auth_headers("bob")
        owner = self.auth_headers("olive", role="owner")
        self.assertEqual(self.client.post("/api/v1/rooms", json=ROOM).status_code, 401)
        self.assertEqual(self.client.post("/api/v1/rooms", json=ROOM, headers=user).status_code, 403)
        self.assertEqual(self.client.post("/api/v1/rooms", json=ROOM, headers=owner).status_code, 201)

    def test_delete(self) -> None:
        room = self.create_room()
        response = self.client.delete(f"/api/v1/rooms/{room['id']}", headers=self.admin)
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f"/api/v1/rooms/{room['id']}").status_code, 404)


class TestFloorsEmployeesVisitors(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.owner = self.auth_headers("olive", role="owner")

    def test_floor_numbers_are_unique(self) -> None:
        first = self.client.post("/api/v1/floors", json={"number": 1, "name": "Ground"}, headers=self.owner)
        self.assertEqual(first.status_code, 201, first.text)
        again = self.client.post("/api/v1/floors", json={"number": 1, "name": "Lobby"}, headers=self.owner)
        self.assertEqual(again.status_code, 400)
        self.assertIn("number", again.json()["message"])

    def test_employee_lifecycle(self) -> None:
        user_id = self.create_user("erin")
        created = self.client.post(
            "/api/v1/employees",
            json={"salary": 3000, "jobdesc": "receptionist", "userId": user_id},
            headers=self.owner,
        )
        self.assertEqual(created.status_code, 201, created.text)
        employee_id = created.json()["data"]["id"]

        updated = self.client.patch(
            f"/api/v1/employees/{employee_id}", json={"salary": 3500}, headers=self.owner
        )
        self.assertEqual(updated.json()["data"]["salary"], 3500)

        listed = self.client.get("/api/v1/employees", params={"jobdesc": "receptionist"}, headers=self.owner)
        self.assertEqual(listed.json()["results"], 1)

    def test_employee_requires_existing_user(self) -> None:
        response = self.client.post(
            "/api/v1/employees",
            json={"salary": 3000, "jobdesc": "security", "userId": 999},
            headers=self.owner,
        )
        self.assertEqual(response.status_code, 404)

    def test_employee_job_description_validated(self) -> None:
        user_id = self.create_user("erin")
        response = self.client.post(
            "/api/v1/employees",
            json={"salary": 3000, "jobdesc": "astronaut", "userId": user_id},
            headers=self.owner,
        )
        self.assertEqual(response.status_code, 400)

    def test_visitors_filtered_by_room(self) -> None:
        room = self.client.post("/api/v1/rooms", json=ROOM, headers=self.owner).json()["data"]
        for name, room_id in (("Vera", room["id"]), ("Walt", None)):
            response = self.client.post(
                "/api/v1/visitors",
                json={"firstName": name, "lastName": "Guest", "email": f"{name}@example.com", "roomId": room_id},
                headers=self.owner,
            )
            self.assertEqual(response.status_code, 201, response.text)
        listed = self.client.get("/api/v1/visitors", params={"roomId": room["id"]}, headers=self.owner).json()
        self.assertEqual([v["firstName"] for v in listed["data"]], ["Vera"])
        self.assertEqual(listed["data"][0]["email"], "vera@example.com")

    def test_visitors_hidden_from_users(self) -> None:
        user = self.auth_headers("bob")
        self.assertEqual(self.client.get("/api/v1/visitors", headers=user).status_code, 403)


class TestOrders(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.auth_headers("root", role="admin")
        self.user = self.auth_headers("bob")
        self.room = self.client.post("/api/v1/rooms", json=ROOM, headers=self.admin).json()["data"]
        voucher = self.client.post(
            "/api/v1/vouchers", json={"code": "save10", "discount": 10}, headers=self.admin
        )
        self.assertEqual(voucher.status_code, 201, voucher.text)

    def booking(self, days: float = 2, start_in: timedelta = timedelta(days=1), **extra) -> dict:
        start = datetime.now(UTC) + start_in
        return {
            "roomId": self.room["id"],
            "startDate": start.isoformat(),
            "endDate": (start + timedelta(days=days)).isoformat(),
            **extra,
        }

    def test_voucher_code_is_normalized(self) -> None:
        response = self.client.get("/api/v1/vouchers/code/Save10", headers=self.user)
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["data"]["code"], "SAVE10")
        self.assertEqual(response.json()["data"]["discount"], 10)

    def test_voucher_lookup_requires_login(self) -> None:
        self.assertEqual(self.client.get("/api/v1/vouchers/code/SAVE10").status_code, 401)

    def test_order_priced_from_room_and_voucher(self) -> None:
        response = self.client.post("/api/v1/orders", json=self.booking(voucherCode="save10"), headers=self.user)
        self.assertEqual(response.status_code, 201, response.text)
        data = response.json()["data"]
        self.assertEqual(data["totalPrice"], 2700)
        self.assertIsNotNone(data["voucherId"])

    def test_partial_day_rounds_up(self) -> None:
        response = self.client.post("/api/v1/orders", json=self.booking(days=1.25), headers=self.user)
        self.assertEqual(response.json()["data"]["totalPrice"], 3000)

    def test_unknown_voucher(self) -> None:
        response = self.client.post("/api/v1/orders", json=self.booking(voucherCode="nope"), headers=self.user)
        self.assertEqual(response.status_code, 404)

    def test_start_in_past_rejected(self) -> None:
        response = self.client.post(
            "/api/v1/orders", json=self.booking(start_in=-timedelta(hours=1)), headers=self.user
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("Start date must be in the future", response.json()["message"])

    def test_end_before_start_rejected(self) -> None:
        response = self.client.post("/api/v1/orders", json=self.booking(days=-1), headers=self.user)
        self.assertEqual(response.status_code, 400)
        self.assertIn("End date must be after start date", response.json()["message"])

    def test_my_orders_only_lists_own(self) -> None:
        other = self.auth_headers("carol")
        self.client.post("/api/v1/orders", json=self.booking(), headers=self.user)
        self.client.post("/api/v1/orders", json=self.booking(), headers=other)
        mine = self.client.get("/api/v1/orders/my", headers=self.user).json()
        self.assertEqual(mine["results"], 1)
        everything = self.client.get("/api/v1/orders", headers=self.admin).json()
        self.assertEqual(everything["results"], 2)

    def test_order_management_is_restricted(self) -> None:
        self.assertEqual(self.client.get("/api/v1/orders", headers=self.user).status_code, 403)

    def test_patch_checks_combined_dates(self) -> None:
        order = self.client.post("/api/v1/orders", json=self.booking(), headers=self.user).json()["data"]
        too_late = (datetime.now(UTC) + timedelta(days=30)).isoformat()
        response = self.client.patch(
            f"/api/v1/orders/{order['id']}", json={"startDate": too_late}, headers=self.admin
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "End date must be after start date")


class TestPricing(unittest.TestCase):
    start = datetime(2026, 11, 1, 9, 0, tzinfo=UTC)

    def test_booked_days(self) -> None:
        self.assertEqual(booked_days(self.start, self.start + timedelta(days=2)), 2)
        self.assertEqual(booked_days(self.start, self.start + timedelta(days=2, minutes=1)), 3)
        self.assertEqual(booked_days(self.start, self.start + timedelta(hours=3)), 1)

    def test_quote_total(self) -> None:
        end = self.start + timedelta(days=2)
        self.assertEqual(quote_total(1500, self.start, end), 3000)
        self.assertEqual(quote_total(1500, self.start, end, discount=10), 2700)
        self.assertEqual(quote_total(99.99, self.start, self.start + timedelta(days=1), discount=15), 84.99)


class TestAuthenticate(unittest.TestCase):
    """authenticate() against a mocked session."""

    def _session_returning(self, user) -> MagicMock:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = user
        return session

    def test_missing_credentials_skip_lookup(self) -> None:
        session = MagicMock()
        with self.assertRaises(AppError) as ctx:
            authenticate(session, "bob", None)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, MISSING_CREDENTIALS_MESSAGE)
        session.query.assert_not_called()

    def test_unknown_user(self) -> None:
        with self.assertRaises(AppError) as ctx:
            authenticate(self._session_returning(None), "ghost", PASSWORD)
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, INVALID_CREDENTIALS_MESSAGE)

    def test_inactive_user(self) -> None:
        user = MagicMock(password_hash=hash_password(PASSWORD), is_active=False)
        with self.assertRaises(AppError) as ctx:
            authenticate(self._session_returning(user), "bob", PASSWORD)
        self.assertEqual(ctx.exception.message, INACTIVE_ACCOUNT_MESSAGE)

    def test_active_user(self) -> None:
        user = MagicMock(password_hash=hash_password(PASSWORD), is_active=True)
        self.assertIs(authenticate(self._session_returning(user), "bob", PASSWORD), user)


class TestText(unittest.TestCase):
    def test_slugify(self) -> None:
        self.assertEqual(slugify("Conference Room Alpha"), "conference-room-alpha")
        self.assertEqual(slugify("  Café  Zürich! "), "cafe-zurich")
        self.assertEqual(slugify("!!!"), "")

    def test_camel_to_snake(self) -> None:
        self.assertEqual(camel_to_snake("startDate"), "start_date")
        self.assertEqual(camel_to_snake("price"), "price")


class PostgresIntegrityError(Exception):
    """Stand-in for a psycopg2 error: carries the SQLSTATE as pgcode."""

    def __init__(self, message: str, pgcode: str) -> None:
        super().__init__(message)
        self.pgcode = pgcode


class TestCommitErrors(unittest.TestCase):
    """create_item() only reports duplicates for unique-constraint failures."""

    def _session_failing_with(self, message: str, pgcode: str | None = None) -> MagicMock:
        orig: Exception = sqlite3.IntegrityError(message)
        if pgcode is not None:
            orig = PostgresIntegrityError(message, pgcode)
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        session.commit.side_effect = IntegrityError("INSERT", {}, orig)
        return session

    def test_unique_failure_becomes_duplicate_error(self) -> None:
        session = self._session_failing_with("UNIQUE constraint failed: users.email")
        with self.assertRaises(AppError) as ctx:
            crud.create_item(session, User, {"username": "bob", "email": "b@x.io"}, ("username", "email"))
        self.assertEqual(ctx.exception.message, "Duplicate field value: email. Please use another value!")
        session.rollback.assert_called_once()

    def test_postgres_unique_violation_detected_by_sqlstate(self) -> None:
        session = self._session_failing_with("duplicate key value", pgcode="23505")
        with self.assertRaises(AppError):
            crud.create_item(session, Voucher, {"code": "SAVE10"}, ("code",))

    def test_not_null_failure_is_not_a_duplicate(self) -> None:
        session = self._session_failing_with("NOT NULL constraint failed: users.address")
        with self.assertRaises(IntegrityError):
            crud.create_item(session, User, {"username": "bob"}, ("username", "email"))
        session.rollback.assert_called_once()

    def test_drop_required_nulls(self) -> None:
        values = {"address": None, "birthdate": None, "first_name": "Bob", "unknown": None}
        self.assertEqual(
            crud.drop_required_nulls(User, values),
            {"birthdate": None, "first_name": "Bob", "unknown": None},
        )

    def test_postgres_not_null_violation_is_not_unique(self) -> None:
        exc = IntegrityError("INSERT", {}, PostgresIntegrityError("null value in column", "23502"))
        self.assertFalse(is_unique_violation(exc))
