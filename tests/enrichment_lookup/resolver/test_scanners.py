"""
Tests for enrichment_lookup.resolver.scanners

Covers each scan level in isolation and the walker's priority order.
"""

import pytest

from conftest import field, message
from enrichment_lookup.descriptors.models import SchemaFile
from enrichment_lookup.errors import InvalidWildcardUsageError
from enrichment_lookup.options import EMPTY_TYPE_NAME, OptionAccessor
from enrichment_lookup.resolver.facts import ResolvedFact
from enrichment_lookup.resolver.scanners import (
    DescriptorWalker,
    FieldOptionScan,
    MessageOptionScan,
    NestedMessageScan,
    ScanContext,
    scan,
)


@pytest.fixture
def context():
    return ScanContext("demo.")


class TestMessageOptionScan:
    def test_enrichment_for(self, context):
        msg = message("OrderEnriched", enrichment_for="demo.OrderPlaced,OrderShipped")
        facts = MessageOptionScan().scan(msg, context)
        assert facts == [
            ResolvedFact("demo.OrderEnriched", "demo.OrderPlaced"),
            ResolvedFact("demo.OrderEnriched", "demo.OrderShipped"),
        ]

    def test_enrichment(self, context):
        msg = message("OrderPlaced", enrichment="OrderEnriched,billing.OrderBilling")
        facts = MessageOptionScan().scan(msg, context)
        assert facts == [
            ResolvedFact("demo.OrderEnriched", "demo.OrderPlaced"),
            ResolvedFact("billing.OrderBilling", "demo.OrderPlaced"),
        ]

    def test_both_options_contribute(self, context):
        msg = message("Hybrid", enrichment_for="demo.A", enrichment="demo.B")
        facts = MessageOptionScan().scan(msg, context)
        assert ResolvedFact("demo.Hybrid", "demo.A") in facts
        assert ResolvedFact("demo.B", "demo.Hybrid") in facts

    def test_no_options(self, context):
        assert MessageOptionScan().scan(message("Plain"), context) == []

    def test_blank_option(self, context):
        assert MessageOptionScan().scan(message("Plain", enrichment_for=" , "), context) == []

    def test_custom_option_names(self):
        accessor = OptionAccessor(enrichment_for="enriches", enrichment="enriched_by", by="from")
        msg = message("OrderEnriched", enriches="demo.OrderPlaced", enrichment_for="demo.Other")
        facts = MessageOptionScan().scan(msg, ScanContext("demo.", accessor))
        assert facts == [ResolvedFact("demo.OrderEnriched", "demo.OrderPlaced")]


class TestFieldOptionScan:
    def test_union_of_annotated_fields(self, context):
        msg = message("TaskView", fields=[
            field("task_id", by="demo.TaskCreated.task_id"),
            field("title"),
            field("closed_by", by="demo.TaskClosed.user|demo.TaskCreated.user"),
        ])
        facts = FieldOptionScan().scan(msg, context)
        assert facts == [
            ResolvedFact("demo.TaskView", "demo.TaskCreated"),
            ResolvedFact("demo.TaskView", "demo.TaskClosed"),
        ]

    def test_no_annotated_fields(self, context):
        msg = message("TaskView", fields=[field("title")])
        assert FieldOptionScan().scan(msg, context) == []

    def test_only_wildcards_claim_key_with_empty_type(self, context):
        msg = message("AnyView", fields=[field("id", by="*.id")])
        facts = FieldOptionScan().scan(msg, context)
        assert facts == [ResolvedFact("demo.AnyView", EMPTY_TYPE_NAME)]

    def test_invalid_value_propagates(self, context):
        msg = message("TaskView", fields=[field("task_id", by="*|demo.TaskCreated.task_id")])
        with pytest.raises(InvalidWildcardUsageError):
            FieldOptionScan().scan(msg, context)


class TestNestedMessageScan:
    def test_first_annotated_nested_message(self, context):
        msg = message("UserRenamed", nested=[
            message("Plain", fields=[field("x")]),
            message("Enrichment", fields=[field("old_name", by="name")]),
            message("Other", fields=[field("y", by="name")]),
        ])
        facts = NestedMessageScan().scan(msg, context)
        assert facts == [ResolvedFact("demo.UserRenamed.Enrichment", "demo.UserRenamed")]

    def test_no_nested_messages(self, context):
        assert NestedMessageScan().scan(message("UserRenamed"), context) == []

    def test_nested_without_by(self, context):
        msg = message("UserRenamed", nested=[message("Inner", fields=[field("x")])])
        assert NestedMessageScan().scan(msg, context) == []

    def test_deeper_levels_not_scanned(self, context):
        deep = message("Deep", fields=[field("x", by="name")])
        msg = message("Outer", nested=[message("Middle", nested=[deep])])
        assert NestedMessageScan().scan(msg, context) == []


class TestDescriptorWalker:
    def test_message_level_wins_over_fields(self):
        file = SchemaFile(package="demo", messages=[
            message("TaskView",
                    fields=[field("task_id", by="demo.TaskCreated.task_id")],
                    enrichment_for="demo.TaskAssigned"),
        ])
        facts = scan(file)
        assert facts.to_dict() == {"demo.TaskView": ["demo.TaskAssigned"]}

    def test_field_level_wins_over_nested(self):
        file = SchemaFile(package="demo", messages=[
            message("TaskView",
                    fields=[field("task_id", by="demo.TaskCreated.task_id")],
                    nested=[message("Inner", fields=[field("x", by="name")])]),
        ])
        assert scan(file).to_dict() == {"demo.TaskView": ["demo.TaskCreated"]}

    def test_wildcard_fields_stop_the_chain(self):
        file = SchemaFile(package="demo", messages=[
            message("AnyView",
                    fields=[field("id", by="*")],
                    nested=[message("Inner", fields=[field("x", by="name")])]),
        ])
        assert scan(file).to_dict() == {"demo.AnyView": [EMPTY_TYPE_NAME]}

    def test_nested_level_used_last(self, demo_file):
        facts = scan(demo_file)
        assert facts.get("demo.UserRenamed.Enrichment") == ["demo.UserRenamed"]

    def test_only_top_level_messages_walked(self):
        inner = message("Inner", enrichment_for="demo.A")
        file = SchemaFile(package="demo", messages=[message("Outer", nested=[inner])])
        assert not scan(file)

    def test_custom_levels(self, demo_file):
        walker = DescriptorWalker(levels=[NestedMessageScan()])
        facts = walker.walk(demo_file)
        assert facts.keys() == ["demo.UserRenamed.Enrichment"]

    def test_inputs_not_mutated(self, demo_file):
        before = demo_file.model_dump()
        scan(demo_file)
        assert demo_file.model_dump() == before
