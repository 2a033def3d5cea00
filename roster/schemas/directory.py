"""Directory filter: clamped pagination plus optional role and search constraints."""

import math

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from roster.core.errors import BuilderFailed
from roster.schemas.role import Role, parse_role_or_none

DEFAULT_PAGE_NUM = 1
DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100

# Largest OFFSET a SQL backend accepts (signed 64-bit); pages beyond it are empty.
MAX_OFFSET = 2**63 - 1


class DirectoryFilter(BaseModel):
    """
    Normalized directory query. Construct through build_filter/parse_filter,
    which clamp pagination instead of rejecting it.
    """

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=DEFAULT_PAGE_NUM, ge=1)
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1, le=MAX_PER_PAGE)
    role: Role | None = None
    search: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def beyond_storage(self) -> bool:
        """True when the page starts past any offset storage can address."""
        return self.offset > MAX_OFFSET

    def page_count(self, total: int) -> int:
        """Number of pages needed to show `total` entries (0 when empty)."""
        if total <= 0:
            return 0
        return math.ceil(total / self.per_page)


def clamp_page(page: int) -> int:
    return DEFAULT_PAGE_NUM if page < 1 else page


def clamp_per_page(per_page: int) -> int:
    if per_page < 1:
        return DEFAULT_PER_PAGE
    if per_page > MAX_PER_PAGE:
        return MAX_PER_PAGE
    return per_page


def build_filter(
    page: int = DEFAULT_PAGE_NUM,
    per_page: int = DEFAULT_PER_PAGE,
    role: Role | None = None,
    search: str | None = None,
) -> DirectoryFilter:
    """
    Build a filter applying the pagination clamps. Never fails for integer input;
    raises BuilderFailed for structurally invalid values (non-integers, a role
    that is not a Role, a non-string search).
    """
    if isinstance(page, bool) or not isinstance(page, int):
        raise BuilderFailed(f"page must be an integer, got {type(page).__name__}")
    if isinstance(per_page, bool) or not isinstance(per_page, int):
        raise BuilderFailed(f"per_page must be an integer, got {type(per_page).__name__}")
    try:
        return DirectoryFilter(
            page=clamp_page(page),
            per_page=clamp_per_page(per_page),
            role=role,
            search=search,
        )
    except ValidationError as e:
        raise BuilderFailed(f"Could not build directory filter: {e.error_count()} invalid field(s)") from e


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value.strip())
    except (TypeError, ValueError, AttributeError):
        return default


def parse_filter(
    page: str | None = None,
    per_page: str | None = None,
    role: str | None = None,
    search: str | None = None,
) -> DirectoryFilter:
    """
    Front door for string inputs (query strings, bot commands).
    Unparsable numbers fall back to defaults; an unparsable role means no role filter.
    """
    search_term = search.strip() if isinstance(search, str) else search
    return build_filter(
        page=_parse_int(page, DEFAULT_PAGE_NUM),
        per_page=_parse_int(per_page, DEFAULT_PER_PAGE),
        role=parse_role_or_none(role) if isinstance(role, str) else role,
        search=search_term or None,
    )
