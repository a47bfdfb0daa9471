"""Tests for parse stage tracing."""

import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from conftest import build_paste
from paste_parser.form import InMemoryForm, process_paste
from paste_parser.telemetry import SERVICE_NAME, add_span_exporter

PARSE_STAGES = {
    "parser.extract_fields",
    "parser.normalize",
    "parser.detect_truncation",
    "parser.resolve_network",
}


@pytest.fixture
def spans():
    exporter = InMemorySpanExporter()
    add_span_exporter(exporter)
    yield exporter
    exporter.shutdown()


class TestParseSpans:
    def test_stages_nested_under_parse(self, spans, chain_table, directory):
        process_paste(build_paste(), InMemoryForm(), chain_table, directory)

        finished = {s.name: s for s in spans.get_finished_spans()}
        assert PARSE_STAGES | {"parser.parse", "parser.apply_form"} <= set(finished)

        parse_id = finished["parser.parse"].context.span_id
        for name in PARSE_STAGES:
            assert finished[name].parent.span_id == parse_id, name
        assert finished["parser.parse"].resource.attributes["service.name"] == SERVICE_NAME

    def test_truncated_paste_is_never_applied(self, spans, truncated_sample_file, chain_table, directory):
        process_paste(truncated_sample_file, InMemoryForm(), chain_table, directory)

        finished = {s.name: s for s in spans.get_finished_spans()}
        assert "parser.apply_form" not in finished
        assert finished["parser.parse"].attributes["parse.truncated"] is True
        assert finished["parser.detect_truncation"].attributes["truncation.fields"] == ("data",)

