"""
Tests for enrichment_lookup.resolver.finder

End-to-end resolution of single schema files.
"""

import pytest

from conftest import field, message
from enrichment_lookup.descriptors.models import SchemaFile
from enrichment_lookup.errors import InvalidByOptionValueError, InvalidWildcardUsageError
from enrichment_lookup.options import OptionAccessor
from enrichment_lookup.resolver.finder import EnrichmentFinder, find_enrichments


class TestFindEnrichments:
    def test_enrichment_for_declaration(self):
        file = SchemaFile(package="demo", messages=[
            message("OrderEnriched", enrichment_for="demo.OrderPlaced"),
            message("OrderPlaced"),
        ])
        assert find_enrichments(file) == {"demo.OrderEnriched": "demo.OrderPlaced"}

    def test_field_fallback(self):
        file = SchemaFile(package="demo", messages=[
            message("TaskView", fields=[
                field("task_id", by="demo.TaskCreated.task_id|demo.TaskClosed.task_id"),
            ]),
        ])
        assert find_enrichments(file) == {"demo.TaskView": "demo.TaskCreated,demo.TaskClosed"}

    def test_message_level_takes_priority(self):
        file = SchemaFile(package="demo", messages=[
            message("TaskView",
                    fields=[field("task_id", by="demo.TaskCreated.task_id")],
                    enrichment_for="demo.TaskAssigned"),
        ])
        assert find_enrichments(file) == {"demo.TaskView": "demo.TaskAssigned"}

    def test_enrichment_for_lists_all_events(self):
        file = SchemaFile(package="demo", messages=[
            message("OrderEnriched", enrichment_for="OrderPlaced,demo.OrderShipped"),
        ])
        enrichments = find_enrichments(file)
        assert set(enrichments.events_of("demo.OrderEnriched")) == {
            "demo.OrderPlaced", "demo.OrderShipped"
        }

    def test_event_side_declarations_merge_with_enrichment_side(self):
        file = SchemaFile(package="demo", messages=[
            message("OrderEnriched", enrichment_for="demo.OrderPlaced"),
            message("OrderShipped", enrichment="OrderEnriched"),
            message("OrderPlaced", enrichment="OrderEnriched"),
        ])
        assert find_enrichments(file) == {
            "demo.OrderEnriched": "demo.OrderPlaced,demo.OrderShipped"
        }

    def test_nested_enrichment(self, demo_file):
        enrichments = find_enrichments(demo_file)
        assert enrichments == {
            "demo.OrderEnriched": "demo.OrderPlaced",
            "demo.TaskView": "demo.TaskCreated,demo.TaskClosed",
            "demo.UserRenamed.Enrichment": "demo.UserRenamed",
        }

    def test_wildcard_only_enrichment_omitted(self):
        file = SchemaFile(package="demo", messages=[
            message("AnyView", fields=[field("id", by="*.id"), field("name", by="*")]),
            message("OrderEnriched", enrichment_for="demo.OrderPlaced"),
        ])
        assert find_enrichments(file) == {"demo.OrderEnriched": "demo.OrderPlaced"}

    def test_short_field_references_produce_no_event(self):
        file = SchemaFile(package="demo", messages=[
            message("LocalView", fields=[field("name", by="name")]),
        ])
        assert find_enrichments(file) == {}

    def test_file_without_annotations(self):
        file = SchemaFile(package="demo", messages=[message("A"), message("B")])
        assert find_enrichments(file) == {}

    def test_empty_package(self):
        file = SchemaFile(messages=[message("OrderEnriched", enrichment_for="OrderPlaced")])
        assert find_enrichments(file) == {"OrderEnriched": "OrderPlaced"}

    def test_invalid_wildcard_aborts_file(self):
        file = SchemaFile(package="demo", messages=[
            message("OrderEnriched", enrichment_for="demo.OrderPlaced"),
            message("TaskView", fields=[field("task_id", by="*|foo.Bar.id")]),
        ])
        with pytest.raises(InvalidWildcardUsageError):
            find_enrichments(file)

    def test_blank_by_item_aborts_file(self):
        file = SchemaFile(package="demo", messages=[
            message("TaskView", fields=[field("task_id", by="foo.Bar.id| ")]),
        ])
        with pytest.raises(InvalidByOptionValueError) as exc_info:
            find_enrichments(file)
        assert exc_info.value.field_name == "task_id"

    def test_invalid_by_ignored_when_message_level_resolves(self):
        file = SchemaFile(package="demo", messages=[
            message("TaskView",
                    fields=[field("task_id", by="*|foo.Bar.id")],
                    enrichment_for="demo.TaskAssigned"),
        ])
        assert find_enrichments(file) == {"demo.TaskView": "demo.TaskAssigned"}

    def test_custom_accessor(self):
        accessor = OptionAccessor(by="source")
        file = SchemaFile(package="demo", messages=[
            message("TaskView", fields=[field("task_id", source="demo.TaskCreated.task_id")]),
        ])
        assert EnrichmentFinder(file, accessor).find_enrichments() == {
            "demo.TaskView": "demo.TaskCreated"
        }
        assert find_enrichments(file) == {}
