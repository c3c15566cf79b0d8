"""Tests for ClosureState."""

from __future__ import annotations

import logging

import pytest

from crdswagger.errors import ErrorCodes
from crdswagger.registry.state import ClosureState
from crdswagger.types import QualifiedTypeName

A = QualifiedTypeName("org/api/v1", "A")
B = QualifiedTypeName("org/api/v1", "B")


class TestPending:
    def test_register_queues(self) -> None:
        state = ClosureState()
        assert state.register(A) is True
        assert state.pending == {A}

    def test_register_visited_is_ignored(self) -> None:
        state = ClosureState()
        state.mark_visited(A)
        assert state.register(A) is False
        assert state.pending == set()

    def test_take_pending_sorts_and_clears(self) -> None:
        state = ClosureState()
        state.register(B)
        state.register(A)
        assert state.take_pending() == [A, B]
        assert state.pending == set()

    def test_mark_visited_removes_from_pending(self) -> None:
        state = ClosureState()
        state.register(A)
        state.mark_visited(A)
        assert A in state.visited
        assert state.pending == set()


class TestEmit:
    def test_emit_stores_definition(self) -> None:
        state = ClosureState()
        assert state.emit("org.v1.A", {"type": "object"}, A) is True
        assert state.definitions == {"org.v1.A": {"type": "object"}}

    def test_key_collision_keeps_first(self, caplog: pytest.LogCaptureFixture) -> None:
        state = ClosureState()
        state.emit("org.v1.A", {"type": "object", "description": "first"}, A)
        with caplog.at_level(logging.WARNING, logger="crdswagger.registry.state"):
            assert state.emit("org.v1.A", {"type": "object", "description": "second"}, B) is False
        assert state.definitions["org.v1.A"]["description"] == "first"
        assert state.diagnostics[0].code == ErrorCodes.DEFINITION_KEY_COLLISION
        assert state.diagnostics[0].subject == str(B)
        assert ErrorCodes.DEFINITION_KEY_COLLISION in caplog.text


class TestReport:
    def test_report_records_diagnostic(self) -> None:
        state = ClosureState()
        state.report("SOME_CODE", "something odd", subject="org/api/v1/A")
        assert len(state.diagnostics) == 1
        assert state.diagnostics[0].message == "something odd"

    def test_fresh_states_share_nothing(self) -> None:
        first = ClosureState()
        first.register(A)
        first.report("X", "m")
        second = ClosureState()
        assert second.pending == set()
        assert second.diagnostics == []
