"""Unit tests for roster.schemas.role: hierarchy, privilege predicate, parsing."""

import unittest

from roster.core.errors import InvalidRole
from roster.schemas.role import (
    DEFAULT_ROLE,
    ROLES,
    Role,
    is_privileged,
    parse_role,
    parse_role_or_none,
)


class TestRoleOrder(unittest.TestCase):
    """Owner > Admin > Employee > Guest is a fixed total order."""

    def test_declared_order_is_rank_order(self) -> None:
        self.assertEqual(ROLES, (Role.OWNER, Role.ADMIN, Role.EMPLOYEE, Role.GUEST))
        ranks = [r.rank for r in ROLES]
        self.assertEqual(ranks, sorted(ranks, reverse=True))

    def test_outranks(self) -> None:
        self.assertTrue(Role.OWNER.outranks(Role.ADMIN))
        self.assertTrue(Role.ADMIN.outranks(Role.EMPLOYEE))
        self.assertTrue(Role.EMPLOYEE.outranks(Role.GUEST))
        self.assertFalse(Role.GUEST.outranks(Role.GUEST))
        self.assertFalse(Role.ADMIN.outranks(Role.OWNER))

    def test_default_is_least_privileged(self) -> None:
        self.assertIs(DEFAULT_ROLE, Role.GUEST)
        self.assertEqual(DEFAULT_ROLE.rank, 0)


class TestIsPrivileged(unittest.TestCase):
    def test_owner_and_admin_are_privileged(self) -> None:
        self.assertTrue(is_privileged(Role.OWNER))
        self.assertTrue(is_privileged(Role.ADMIN))

    def test_employee_and_guest_are_not(self) -> None:
        self.assertFalse(is_privileged(Role.EMPLOYEE))
        self.assertFalse(is_privileged(Role.GUEST))


class TestParseRole(unittest.TestCase):
    def test_english_names_any_case(self) -> None:
        self.assertEqual(parse_role("owner"), Role.OWNER)
        self.assertEqual(parse_role("OWNER"), Role.OWNER)
        self.assertEqual(parse_role("Admin"), Role.ADMIN)
        self.assertEqual(parse_role(" employee "), Role.EMPLOYEE)
        self.assertEqual(parse_role("guest"), Role.GUEST)

    def test_localized_names(self) -> None:
        self.assertEqual(parse_role("Владелец"), Role.OWNER)
        self.assertEqual(parse_role("АДМИНИСТРАТОР"), Role.ADMIN)
        self.assertEqual(parse_role("сотрудник"), Role.EMPLOYEE)
        self.assertEqual(parse_role("гость"), Role.GUEST)

    def test_unknown_raises_invalid_role(self) -> None:
        for value in ("", "user", "superuser", "неизвестная"):
            with self.subTest(value=value):
                with self.assertRaises(InvalidRole):
                    parse_role(value)

    def test_lenient_parse_returns_none(self) -> None:
        self.assertIsNone(parse_role_or_none(None))
        self.assertIsNone(parse_role_or_none("nope"))
        self.assertEqual(parse_role_or_none("admin"), Role.ADMIN)

    def test_display_names(self) -> None:
        self.assertEqual(Role.OWNER.display_name, "Владелец")
        self.assertEqual(Role.GUEST.display_name, "Гость")
        self.assertEqual(str(Role.ADMIN), "Admin")


if __name__ == "__main__":
    unittest.main()
