"""Unit tests for roster.schemas.directory: clamping, string parsing, builder errors."""

import unittest

from roster.core.errors import BuilderFailed
from roster.schemas.directory import (
    DEFAULT_PAGE_NUM,
    DEFAULT_PER_PAGE,
    MAX_OFFSET,
    MAX_PER_PAGE,
    DirectoryFilter,
    build_filter,
    parse_filter,
)
from roster.schemas.role import Role


class TestBuildFilterClamps(unittest.TestCase):
    """Pagination is clamped, never rejected."""

    def test_defaults(self) -> None:
        f = build_filter()
        self.assertEqual(f.page, DEFAULT_PAGE_NUM)
        self.assertEqual(f.per_page, DEFAULT_PER_PAGE)
        self.assertIsNone(f.role)
        self.assertIsNone(f.search)
        self.assertEqual(f, DirectoryFilter())

    def test_page_below_one_becomes_one(self) -> None:
        self.assertEqual(build_filter(page=0).page, 1)
        self.assertEqual(build_filter(page=-5).page, 1)
        self.assertEqual(build_filter(page=1).page, 1)
        self.assertEqual(build_filter(page=100).page, 100)

    def test_per_page_clamp(self) -> None:
        self.assertEqual(build_filter(per_page=0).per_page, DEFAULT_PER_PAGE)
        self.assertEqual(build_filter(per_page=-1).per_page, DEFAULT_PER_PAGE)
        self.assertEqual(build_filter(per_page=5).per_page, 5)
        self.assertEqual(build_filter(per_page=100).per_page, MAX_PER_PAGE)
        self.assertEqual(build_filter(per_page=150).per_page, MAX_PER_PAGE)
        self.assertEqual(build_filter(per_page=2**31).per_page, MAX_PER_PAGE)

    def test_clamp_is_idempotent(self) -> None:
        for page, per_page in [(0, 0), (0, 150), (7, 42), (-3, 101)]:
            with self.subTest(page=page, per_page=per_page):
                once = build_filter(page=page, per_page=per_page)
                twice = build_filter(page=once.page, per_page=once.per_page)
                self.assertEqual(once, twice)

    def test_role_and_search_stored_as_is(self) -> None:
        f = build_filter(role=Role.ADMIN, search="john")
        self.assertEqual(f.role, Role.ADMIN)
        self.assertEqual(f.search, "john")
        self.assertEqual(build_filter(search="").search, "")

    def test_offset_and_page_count(self) -> None:
        f = build_filter(page=3, per_page=20)
        self.assertEqual(f.offset, 40)
        self.assertEqual(f.page_count(0), 0)
        self.assertEqual(f.page_count(20), 1)
        self.assertEqual(f.page_count(41), 3)

    def test_offset_beyond_storage(self) -> None:
        self.assertFalse(build_filter(page=1).beyond_storage)
        self.assertFalse(build_filter(page=MAX_OFFSET // 10 + 1, per_page=10).beyond_storage)
        self.assertTrue(build_filter(page=MAX_OFFSET // 10 + 2, per_page=10).beyond_storage)
        self.assertTrue(parse_filter(page="99999999999999999999").beyond_storage)

    def test_structurally_invalid_input_raises_builder_failed(self) -> None:
        with self.assertRaises(BuilderFailed):
            build_filter(page="2")  # type: ignore[arg-type]
        with self.assertRaises(BuilderFailed):
            build_filter(per_page=1.5)  # type: ignore[arg-type]
        with self.assertRaises(BuilderFailed):
            build_filter(role="wizard")  # type: ignore[arg-type]
        with self.assertRaises(BuilderFailed):
            build_filter(search=42)  # type: ignore[arg-type]


class TestParseFilter(unittest.TestCase):
    """String front door: silent fallbacks for unparsable numbers and roles."""

    def test_parses_valid_strings(self) -> None:
        f = parse_filter(page="2", per_page="25", role="admin", search=" john ")
        self.assertEqual(f.page, 2)
        self.assertEqual(f.per_page, 25)
        self.assertEqual(f.role, Role.ADMIN)
        self.assertEqual(f.search, "john")

    def test_unparsable_numbers_fall_back_to_defaults(self) -> None:
        f = parse_filter(page="abc", per_page="1e3")
        self.assertEqual(f.page, DEFAULT_PAGE_NUM)
        self.assertEqual(f.per_page, DEFAULT_PER_PAGE)

    def test_out_of_range_strings_are_clamped(self) -> None:
        f = parse_filter(page="0", per_page="500")
        self.assertEqual(f.page, 1)
        self.assertEqual(f.per_page, MAX_PER_PAGE)

    def test_unparsable_role_means_no_filter(self) -> None:
        self.assertIsNone(parse_filter(role="wizard").role)

    def test_blank_search_means_no_filter(self) -> None:
        self.assertIsNone(parse_filter(search="   ").search)


if __name__ == "__main__":
    unittest.main()
