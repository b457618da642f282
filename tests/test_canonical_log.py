import json
import time
import uuid

from llmmina.protocol.canonical_log import (
    CanonicalLogEntry,
    LogLevel,
    log_error,
    log_info,
    log_warn,
)
from llmmina.protocol.schema import AgentId, SemVer


def _entry(data=None):
    return CanonicalLogEntry.create(
        LogLevel.INFO,
        AgentId.PROOF_PROVENANCE,
        "test_module",
        "test_event",
        {"key": "value"} if data is None else data,
        "trace-123",
    )


def test_canonical_log_json():
    parsed = json.loads(_entry().to_canonical_json())
    assert parsed["level"] == "Info"
    assert parsed["agent"] == "proof_provenance"
    assert parsed["event"] == "test_event"
    assert parsed["trace_id"] == "trace-123"
    assert parsed["module"] == "test_module"
    assert parsed["data"] == {"key": "value"}
    assert parsed["version"] == {"major": 0, "minor": 1, "patch": 0}


def test_canonical_json_is_compact_and_sorted():
    text = _entry({"b": 1, "a": {"d": 2, "c": 3}}).to_canonical_json()
    assert "\n" not in text
    assert '"level":"Info"' in text
    assert '"data":{"a":{"c":3,"d":2},"b":1}' in text


def test_field_order():
    keys = list(json.loads(_entry().to_canonical_json()))
    assert keys == [
        "timestamp", "level", "agent", "module", "event", "data", "trace_id", "version",
    ]


def test_timestamp_in_milliseconds():
    before = time.time_ns() // 1_000_000
    entry = _entry()
    after = time.time_ns() // 1_000_000
    assert before <= entry.timestamp <= after
    assert entry.version == SemVer.current()


def test_unserializable_data_gives_empty_object():
    assert _entry({"x": float("nan")}).to_canonical_json() == "{}"


def test_log_info_writes_stdout(capsys):
    log_info(AgentId.CORE_RUNTIME, "mod", "started", {"n": 1})
    captured = capsys.readouterr()
    parsed = json.loads(captured.out.strip())
    assert parsed["level"] == "Info"
    assert parsed["agent"] == "core_runtime"
    assert parsed["data"] == {"n": 1}
    assert str(uuid.UUID(parsed["trace_id"])) == parsed["trace_id"]
    assert captured.err == ""


def test_log_warn_writes_stdout(capsys):
    log_warn(AgentId.SOLANA_QUERY, "mod", "slow", {})
    captured = capsys.readouterr()
    assert json.loads(captured.out.strip())["level"] == "Warn"
    assert captured.err == ""


def test_log_error_writes_stderr(capsys):
    log_error(AgentId.SOLANA_QUERY, "mod", "failed", {"reason": "x"})
    captured = capsys.readouterr()
    parsed = json.loads(captured.err.strip())
    assert parsed["level"] == "Error"
    assert parsed["event"] == "failed"
    assert captured.out == ""