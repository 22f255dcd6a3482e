"""
Property-Based Tests for Record Filtering and Ordering

For any input file, only non-blank lines reach the external services, they
reach them in input order, and the sink holds exactly one translated line
per processed record.
"""

import tempfile
from datetime import datetime
from pathlib import Path

from hypothesis import given, settings, strategies as st

from relay.config import RelayConfig
from relay.orchestrator import PipelineOrchestrator
from relay.providers.factory import ClientBundle

from conftest import FakeStore, FakeSubmitter, FakeSynthesizer, FakeTranslator

line_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="\r\n"),
    max_size=20,
)
blank_text = st.sampled_from(["", " ", "\t", "  \t "])


def _run(lines):
    with tempfile.TemporaryDirectory() as tmp:
        config = RelayConfig()
        config.storage.bucket = "test-bucket"
        config.run.input_path = str(Path(tmp) / "input.txt")
        config.run.output_path = str(Path(tmp) / "translated_text.txt")
        config.run.staging_dir = tmp
        Path(config.run.input_path).write_text(
            "".join(f"{line}\n" for line in lines), encoding="utf-8"
        )
        clients = ClientBundle(
            translator=FakeTranslator(),
            synthesizer=FakeSynthesizer(),
            store=FakeStore(),
            submitter=FakeSubmitter(),
        )
        frozen = datetime(2024, 1, 2, 3, 4, 5)
        report = PipelineOrchestrator(clients, config, clock=lambda: frozen).run()
        leftovers = sorted(p.name for p in Path(tmp).iterdir())
    return clients, report, leftovers


@settings(max_examples=50, deadline=None)
@given(st.lists(st.one_of(line_text, blank_text), max_size=8))
def test_only_non_blank_lines_reach_services(lines):
    clients, report, leftovers = _run(lines)
    expected = [line for line in lines if line.strip()]

    assert report.succeeded
    assert [call[0] for call in clients.translator.calls] == expected
    assert len(clients.synthesizer.calls) == len(expected)
    assert len(clients.store.puts) == len(expected)
    assert len(clients.submitter.calls) == len(expected)
    assert report.translated_lines == [f"EN:{line}" for line in expected]
    assert report.blank_lines_skipped == len(lines) - len(expected)
    assert [o.index for o in report.outcomes] == [
        i for i, line in enumerate(lines, start=1) if line.strip()
    ]
    assert leftovers == ["input.txt"]


@settings(max_examples=30, deadline=None)
@given(st.lists(blank_text, max_size=6))
def test_blank_only_input_makes_no_calls(lines):
    clients, report, _ = _run(lines)

    assert report.succeeded
    assert clients.translator.calls == []
    assert clients.store.puts == []
    assert report.records_completed == 0
