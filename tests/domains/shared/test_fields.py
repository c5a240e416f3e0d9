"""
Tests for the per-model field registry.
"""

from datetime import date, time

import pytest
from sqlalchemy import Boolean, Date, Enum, Integer, Numeric, String, Text, Time

from app.domains.shared.fields import (
    FieldKind,
    classify,
    fields_for,
    normalize_name,
)
from app.domains.shared.query import TypeCoercionFailure
from app.domains.staff.models import Employee, Role, Shift


class TestClassify:
    """Tests for mapping column types to field kinds."""

    @pytest.mark.parametrize(
        "column_type, kind",
        [
            (String(50), FieldKind.TEXT),
            (Text(), FieldKind.TEXT),
            (Integer(), FieldKind.INTEGER),
            (Date(), FieldKind.DATE),
            (Time(), FieldKind.TIME),
            (Boolean(), FieldKind.BOOLEAN),
            (Numeric(10, 2), FieldKind.OTHER),
            (Enum("a", "b", name="letters"), FieldKind.OTHER),
        ],
    )
    def test_classify(self, column_type, kind):
        """Test that column types map to the expected field kind."""
        assert classify(column_type) is kind


class TestRegistry:
    """Tests for building and querying a registry."""

    def test_shift_fields_and_kinds(self):
        """Test that every shift column is registered with its kind."""
        registry = fields_for(Shift)
        kinds = {field.name: field.kind for field in registry.fields}
        assert kinds == {
            "id": FieldKind.INTEGER,
            "employee_id": FieldKind.INTEGER,
            "role_id": FieldKind.INTEGER,
            "start_date": FieldKind.DATE,
            "end_date": FieldKind.DATE,
            "start_time": FieldKind.TIME,
            "end_time": FieldKind.TIME,
        }

    def test_relationships_are_not_fields(self):
        """Test that relationships are not exposed as fields."""
        assert "roles" not in fields_for(Employee)
        assert "role" not in fields_for(Shift)

    def test_registry_is_cached_per_model(self):
        """Test that the registry is built once per model."""
        assert fields_for(Role) is fields_for(Role)
        assert fields_for(Role) is not fields_for(Employee)

    def test_text_fields(self):
        """Test that only text columns are listed as text fields."""
        names = [field.name for field in fields_for(Employee).text_fields]
        assert names == ["first_name", "last_name"]
        assert fields_for(Shift).text_fields == ()

    @pytest.mark.parametrize("name", ["RoleId", "roleId", "role_id", "ROLEID"])
    def test_lookup_ignores_case_and_underscores(self, name):
        """Test that field lookup ignores case and underscores."""
        field = fields_for(Shift).resolve(name)
        assert field is not None
        assert field.name == "role_id"

    def test_unknown_field_resolves_to_none(self):
        """Test that an unknown field name resolves to None."""
        assert fields_for(Shift).resolve("Salary") is None
        assert "Salary" not in fields_for(Shift)

    def test_normalize_name(self):
        """Test field name normalisation."""
        assert normalize_name("Start_Date") == "startdate"

    def test_accessor_reads_entity(self):
        """Test that a field accessor reads the value from an entity."""
        employee = Employee(first_name="Alice", last_name="Smith")
        field = fields_for(Employee).resolve("FirstName")
        assert field.accessor(employee) == "Alice"


class TestCoercion:
    """Tests for converting raw filter values."""

    def test_coerce_each_kind(self):
        """Test that raw text coerces to each field kind."""
        registry = fields_for(Shift)
        assert registry.resolve("RoleId").coerce("2") == 2
        assert registry.resolve("StartDate").coerce("2024-05-06") == date(2024, 5, 6)
        assert registry.resolve("StartTime").coerce("09:30") == time(9, 30)
        assert registry.resolve("EndTime").coerce("17:00:00") == time(17, 0)

    def test_coerce_text_is_identity(self):
        """Test that text values are passed through unchanged."""
        field = fields_for(Employee).resolve("LastName")
        assert field.coerce(" Smith ") == " Smith "

    @pytest.mark.parametrize(
        "name, raw",
        [
            ("RoleId", "two"),
            ("RoleId", "2.5"),
            ("StartDate", "06/05/2024"),
            ("StartTime", "9am"),
        ],
    )
    def test_coerce_failure(self, name, raw):
        """Test that uncoercible values raise TypeCoercionFailure."""
        field = fields_for(Shift).resolve(name)
        with pytest.raises(TypeCoercionFailure) as exc_info:
            field.coerce(raw)
        assert exc_info.value.field_name == field.name
        assert exc_info.value.raw_value == raw
