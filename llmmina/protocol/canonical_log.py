"""Structured log entries every agent emits as newline-delimited JSON."""

import dataclasses
import json
import sys
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .schema import AgentId, SemVer


class LogLevel(Enum):
    ERROR = "Error"
    WARN = "Warn"
    INFO = "Info"
    DEBUG = "Debug"
    TRACE = "Trace"


def _sorted_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _sorted_value(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [_sorted_value(item) for item in value]
    return value


@dataclass(frozen=True)
class CanonicalLogEntry:
    """One structured log record."""

    timestamp: int
    level: LogLevel
    agent: AgentId
    module: str
    event: str
    data: Any
    trace_id: str
    version: SemVer

    @classmethod
    def create(
        cls,
        level: LogLevel,
        agent: AgentId,
        module: str,
        event: str,
        data: Any,
        trace_id: str,
    ) -> "CanonicalLogEntry":
        return cls(
            timestamp=time.time_ns() // 1_000_000,
            level=level,
            agent=agent,
            module=str(module),
            event=str(event),
            data=data,
            trace_id=str(trace_id),
            version=SemVer.current(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "agent": self.agent.value,
            "module": self.module,
            "event": self.event,
            "data": _sorted_value(self.data),
            "trace_id": self.trace_id,
            "version": dataclasses.asdict(self.version),
        }

    def to_canonical_json(self) -> str:
        """Compact single-line JSON; "{}" if the entry cannot be serialized."""
        try:
            return json.dumps(
                self.to_dict(), separators=(",", ":"), ensure_ascii=False, allow_nan=False
            )
        except (TypeError, ValueError):
            return "{}"


def _emit(level: LogLevel, agent: AgentId, module: str, event: str, data: Any, stream) -> None:
    entry = CanonicalLogEntry.create(level, agent, module, event, data, str(uuid.uuid4()))
    print(entry.to_canonical_json(), file=stream)


def log_info(agent: AgentId, module: str, event: str, data: Any) -> None:
    _emit(LogLevel.INFO, agent, module, event, data, sys.stdout)


def log_warn(agent: AgentId, module: str, event: str, data: Any) -> None:
    _emit(LogLevel.WARN, agent, module, event, data, sys.stdout)


def log_error(agent: AgentId, module: str, event: str, data: Any) -> None:
    _emit(LogLevel.ERROR, agent, module, event, data, sys.stderr)