import pytest

from categories_api import db
from categories_api.data_access import CategoriesDataAccess
from categories_api.services import CategoryValidator, set_icon_id, validate_name

pytestmark = pytest.mark.anyio


@pytest.mark.parametrize(
    ("raw", "formatted"),
    [("Food", "Food"), ("  Food  ", "Food"), ("\tRent\n", "Rent"), ("A B", "A B")],
)
def test_validate_name_trims_valid_names(raw, formatted) -> None:
    result = validate_name(raw)

    assert result.valid is True
    assert result.formatted == formatted
    assert result.errors == {}


@pytest.mark.parametrize("raw", ["", " ", "\t\n  "])
def test_validate_name_rejects_blank_names(raw) -> None:
    result = validate_name(raw)

    assert result.valid is False
    assert result.formatted == ""
    assert result.errors == {"name": "Category name can't be empty"}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (7, 7),
        (0, 0),
        (-5, 0),
        ("12", 12),
        (" 3 ", 3),
        ("12px", 12),
        (3.9, 3),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        (float("nan"), 0),
        ([], 0),
    ],
)
def test_set_icon_id(raw, expected) -> None:
    assert set_icon_id(raw) == expected


@pytest.mark.parametrize("raw", [5, -1, "42", "x", None, 2.5, "-7", False])
def test_set_icon_id_is_idempotent_and_non_negative(raw) -> None:
    once = set_icon_id(raw)

    assert isinstance(once, int)
    assert once >= 0
    assert set_icon_id(once) == once


async def test_validate_parent(seed_category) -> None:
    global_top = await seed_category(name="Food")
    own_top = await seed_category(name="Hobbies", user_id="u1")
    own_child = await seed_category(name="Music", user_id="u1", parent_id=own_top)
    foreign_top = await seed_category(name="Travel", user_id="u2")

    async with db.get_session_scope() as session:
        validator = CategoryValidator(CategoriesDataAccess(session))

        assert (await validator.validate_parent("-1", "u1")).valid is True
        assert (await validator.validate_parent(global_top, "u1")).valid is True
        assert (await validator.validate_parent(own_top, "u1")).valid is True

        missing = await validator.validate_parent("missing", "u1")
        assert missing.errors == {"parent_id": "Parent category doesn't exist"}

        nested = await validator.validate_parent(own_child, "u1")
        assert nested.errors == {
            "parent_id": "Categories only support one level of nesting"
        }

        foreign = await validator.validate_parent(foreign_top, "u1")
        assert foreign.errors == {"parent_id": "User does not own parent category"}


async def test_validate_parent_reports_ownership_last(seed_category) -> None:
    foreign_top = await seed_category(name="Travel", user_id="u2")
    foreign_child = await seed_category(
        name="Flights", user_id="u2", parent_id=foreign_top
    )

    async with db.get_session_scope() as session:
        validator = CategoryValidator(CategoriesDataAccess(session))
        result = await validator.validate_parent(foreign_child, "u1")

    assert result.valid is False
    assert result.errors == {"parent_id": "User does not own parent category"}


async def test_category_ownership(seed_category) -> None:
    global_id = await seed_category(name="Salary", category_type="Income")
    own_id = await seed_category(name="Coffee", user_id="u1")

    async with db.get_session_scope() as session:
        validator = CategoryValidator(CategoriesDataAccess(session))

        own = await validator.category_ownership("u1", own_id)
        assert own.valid is True
        assert own.category.id == own_id

        foreign = await validator.category_ownership("u2", own_id)
        assert foreign.valid is False
        assert foreign.category.id == own_id

        anonymous = await validator.category_ownership("", own_id)
        assert anonymous.errors == {"category": "User does not own this category"}

        missing = await validator.category_ownership("u1", "missing")
        assert missing.valid is False
        assert missing.category is None

        global_denied = await validator.category_ownership("u1", global_id)
        assert global_denied.valid is False

        global_allowed = await validator.category_ownership(
            "u1", global_id, allow_global=True
        )
        assert global_allowed.valid is True
        assert global_allowed.category.is_global is True
