"""Unit tests for query-parameter serialization.

Covers:
- Encoding of each parameter kind, including the false-flag omission
- Kind resolution from declared types and explicit Annotated tags
- Null skipping, name lower-casing and declaration order
- Dataclass request records
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, Optional

import pytest
import pytest_check
from pydantic import BaseModel

from bggapi.domain.requests import (
    CollectionRequest,
    FamilyRequest,
    ForumListRequest,
    ThingRequest,
    UserRequest,
)
from bggapi.serialization.params import (
    FieldSpec,
    ParamKind,
    field_plan,
    resolve_kind,
    serialize,
)


class MixedRequest(BaseModel):
    """Request record exercising every parameter kind."""

    Name: str | None = None
    Flag: bool = False
    MaybeFlag: bool | None = None
    Since: datetime | None = None
    Ids: list[int] | None = None
    Page: int | None = None


@pytest.mark.unit
class TestResolveKind:
    """Test kind resolution from declared types."""

    @pytest.mark.parametrize(
        ("annotation", "expected"),
        [
            (bool, ParamKind.FLAG),
            (bool | None, ParamKind.OPTIONAL_FLAG),
            (Optional[bool], ParamKind.OPTIONAL_FLAG),  # noqa: UP045
            (datetime, ParamKind.DATETIME),
            (datetime | None, ParamKind.DATETIME),
            (date | None, ParamKind.DATETIME),
            (list[int], ParamKind.INT_LIST),
            (list[int] | None, ParamKind.INT_LIST),
            (str, ParamKind.DEFAULT),
            (int | None, ParamKind.DEFAULT),
            (list[str], ParamKind.DEFAULT),
            (int | str | None, ParamKind.DEFAULT),
        ],
    )
    def test_resolve_kind(self, annotation: object, expected: ParamKind) -> None:
        """Exact type first, then the optional's underlying type, then default."""
        assert resolve_kind(annotation) == expected


@pytest.mark.unit
class TestSerializeEncodings:
    """Test the wire encoding of each parameter kind."""

    def test_false_flag_is_omitted(self) -> None:
        """A false plain flag never produces a parameter."""
        assert "flag" not in serialize(MixedRequest(Flag=False))

    def test_true_flag_is_one(self) -> None:
        """A true plain flag is sent as '1'."""
        assert serialize(MixedRequest(Flag=True))["flag"] == "1"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, "1"), (False, "0")],
    )
    def test_optional_flag_values(self, value: bool, expected: str) -> None:
        """A present optional flag is sent as '1' or '0'."""
        assert serialize(MixedRequest(MaybeFlag=value))["maybeflag"] == expected

    def test_unset_optional_flag_is_omitted(self) -> None:
        """An unset optional flag produces no parameter."""
        assert "maybeflag" not in serialize(MixedRequest())

    def test_datetime_uses_two_digit_year(self) -> None:
        """Date-times are sent as YY-MM-DD HH:MM:SS."""
        params = serialize(MixedRequest(Since=datetime(2023, 1, 5, 9, 8, 7)))

        assert params["since"] == "23-01-05 09:08:07"

    @pytest.mark.parametrize(
        ("ids", "expected"),
        [([1, 2, 3], "1,2,3"), ([42], "42"), ([3, 1, 2], "3,1,2"), ([], "")],
    )
    def test_int_list_is_comma_joined(self, ids: list[int], expected: str) -> None:
        """Integer lists are comma-joined in order; an empty list is present."""
        params = serialize(MixedRequest(Ids=ids))

        assert "ids" in params
        assert params["ids"] == expected

    def test_default_kind_uses_str(self) -> None:
        """Other types use their natural string form."""
        params = serialize(MixedRequest(Name="alice", Page=3))

        with pytest_check.check:
            assert params["name"] == "alice"
        with pytest_check.check:
            assert params["page"] == "3"

    def test_empty_string_is_sent(self) -> None:
        """An empty string is a value, not an absence."""
        assert serialize(MixedRequest(Name=""))["name"] == ""


@pytest.mark.unit
class TestSerializeStructure:
    """Test skipping, naming and ordering of parameters."""

    def test_all_null_fields_are_skipped(self) -> None:
        """Null fields never produce a parameter, whatever their kind."""
        assert serialize(MixedRequest()) == {}

    def test_names_are_lower_cased(self) -> None:
        """Parameter names are the lower-cased field names."""
        params = serialize(MixedRequest(Name="x", MaybeFlag=True, Ids=[1]))

        assert set(params) == {"name", "maybeflag", "ids"}

    def test_declaration_order_is_preserved(self) -> None:
        """Parameters come out in field declaration order."""
        params = serialize(
            MixedRequest(
                Page=2,
                Ids=[5],
                Since=datetime(2020, 2, 3, 4, 5, 6),
                MaybeFlag=False,
                Flag=True,
                Name="n",
            )
        )

        assert list(params) == ["name", "flag", "maybeflag", "since", "ids", "page"]

    def test_explicit_kind_overrides_declared_type(self) -> None:
        """An Annotated ParamKind tag wins over type-based resolution."""

        class TaggedRequest(BaseModel):
            strict: Annotated[bool | None, ParamKind.FLAG] = None
            codes: Annotated[str, ParamKind.DEFAULT] = "a"

        with pytest_check.check:
            assert field_plan(TaggedRequest) == (
                FieldSpec("strict", "strict", ParamKind.FLAG),
                FieldSpec("codes", "codes", ParamKind.DEFAULT),
            )
        with pytest_check.check:
            assert serialize(TaggedRequest(strict=False)) == {"codes": "a"}

    def test_dataclass_requests_are_supported(self) -> None:
        """Dataclass records are serialized with the same rules."""

        @dataclass(frozen=True)
        class LegacyRequest:
            ID: list[int]
            Brief: bool = False
            Own: bool | None = None
            Tag: Annotated[int, ParamKind.DEFAULT] = 7

        params = serialize(LegacyRequest(ID=[1, 2], Own=False))

        assert params == {"id": "1,2", "own": "0", "tag": "7"}

    def test_field_plan_is_cached(self) -> None:
        """The plan is computed once per class."""
        assert field_plan(MixedRequest) is field_plan(MixedRequest)

    def test_unsupported_record_raises_type_error(self) -> None:
        """Only pydantic models and dataclasses can be serialized."""
        with pytest.raises(TypeError, match="not a model or dataclass"):
            serialize(object())


@pytest.mark.unit
class TestResourceRequests:
    """Test serialization of the shipped request models."""

    def test_collection_request(self) -> None:
        """Collection filters use tri-state flags and a date-time."""
        request = CollectionRequest(
            username="alice",
            own=True,
            played=False,
            stats=True,
            brief=False,
            minrating=7,
            modifiedsince=datetime(2023, 1, 5, 9, 8, 7),
        )

        assert serialize(request) == {
            "username": "alice",
            "stats": "1",
            "own": "1",
            "played": "0",
            "minrating": "7",
            "modifiedsince": "23-01-05 09:08:07",
        }

    def test_thing_request(self) -> None:
        """Thing ids are comma-joined and false flags are omitted."""
        request = ThingRequest(id=[13, 822], stats=True, videos=False, page=2)

        assert serialize(request) == {"id": "13,822", "stats": "1", "page": "2"}

    def test_user_request(self) -> None:
        """User requests send the name and set flags only."""
        request = UserRequest(name="alice", buddies=True, hot=False)

        assert serialize(request) == {"name": "alice", "buddies": "1"}

    def test_family_request(self) -> None:
        """Family ids are plain integers."""
        assert serialize(FamilyRequest(id=3)) == {"id": "3"}

    def test_forum_list_request_defaults(self) -> None:
        """Forum list requests always carry id and type."""
        assert serialize(ForumListRequest(id=13)) == {"id": "13", "type": "thing"}
