"""
Tests for enrichment_lookup.resolver.parsers

Covers message-level type name lists and the `by` field option:
pipe-separated references, wildcards, short references and invalid values.
"""

import pytest

from enrichment_lookup.errors import InvalidByOptionValueError, InvalidWildcardUsageError
from enrichment_lookup.resolver.parsers import parse_by, parse_type_names


class TestParseTypeNames:
    def test_absent_option(self):
        assert parse_type_names(None, "demo.") == []

    def test_single_qualified_name(self):
        assert parse_type_names("demo.OrderPlaced", "demo.") == ["demo.OrderPlaced"]

    def test_short_name_gets_package_prefix(self):
        assert parse_type_names("OrderPlaced", "demo.") == ["demo.OrderPlaced"]

    def test_name_from_other_package_kept(self):
        assert parse_type_names("billing.InvoiceSent", "demo.") == ["billing.InvoiceSent"]

    def test_multiple_names_trimmed_in_order(self):
        result = parse_type_names(" demo.B , A,other.C ", "demo.")
        assert result == ["demo.B", "demo.A", "other.C"]

    def test_blank_items_skipped(self):
        assert parse_type_names("demo.A,, ,", "demo.") == ["demo.A"]

    def test_duplicates_removed(self):
        assert parse_type_names("A,demo.A", "demo.") == ["demo.A"]

    def test_empty_package_prefix(self):
        assert parse_type_names("OrderPlaced", "") == ["OrderPlaced"]


class TestParseBy:
    def test_single_reference(self):
        assert parse_by("demo.TaskCreated.task_id", "task_id") == ["demo.TaskCreated"]

    def test_multiple_references(self):
        assert parse_by("foo.Bar.id|foo.Baz.id", "id") == ["foo.Bar", "foo.Baz"]

    def test_references_trimmed(self):
        assert parse_by(" foo.Bar.id | foo.Baz.id ", "id") == ["foo.Bar", "foo.Baz"]

    def test_same_type_listed_once(self):
        assert parse_by("foo.Bar.id|foo.Bar.name", "id") == ["foo.Bar"]

    def test_sole_wildcard_dropped(self):
        assert parse_by("*", "id") == []

    def test_sole_wildcard_field_reference_dropped(self):
        assert parse_by("*.order_id", "order_id") == []

    def test_short_reference_dropped(self):
        assert parse_by("name", "old_name") == []

    def test_short_reference_among_qualified(self):
        assert parse_by("name|foo.Bar.name", "old_name") == ["foo.Bar"]

    def test_sole_prefixed_wildcard_dropped(self):
        assert parse_by("*foo.Bar.id", "id") == []

    @pytest.mark.parametrize("value", [
        "*|foo.Bar.id",
        "foo.Bar.id|*",
        "*.id|foo.Bar.id",
        "*foo.Bar.id|a.B.c",
        "a.B.c|*foo.Bar.id",
    ])
    def test_wildcard_with_other_references(self, value):
        with pytest.raises(InvalidWildcardUsageError) as exc_info:
            parse_by(value, "order_id")
        assert exc_info.value.field_name == "order_id"
        assert "order_id" in str(exc_info.value)

    @pytest.mark.parametrize("value", ["", "   ", "foo.Bar.id|", "|foo.Bar.id", "a.B.c||d.E.f"])
    def test_blank_reference(self, value):
        with pytest.raises(InvalidByOptionValueError) as exc_info:
            parse_by(value, "task_id")
        assert exc_info.value.field_name == "task_id"

    def test_missing_value(self):
        with pytest.raises(InvalidByOptionValueError):
            parse_by(None, "task_id")

    def test_empty_type_part(self):
        with pytest.raises(InvalidByOptionValueError):
            parse_by(".id", "id")
