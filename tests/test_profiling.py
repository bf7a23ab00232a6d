"""Tests for lemo.profiling, the run profiling API."""

import io

import pytest

from lemo import run
from lemo.errors import ArityViolationError
from lemo.lexer import lex
from lemo.profiling import RunAccumulator, get_run_accumulator, profiled_run


class TestGetRunAccumulator:
    def test_returns_none_when_disabled(self) -> None:
        assert get_run_accumulator() is None

    def test_returns_none_outside_context(self) -> None:
        with profiled_run():
            pass
        assert get_run_accumulator() is None


class TestProfiledRun:
    def test_yields_accumulator(self) -> None:
        with profiled_run() as acc:
            assert isinstance(acc, RunAccumulator)
            assert get_run_accumulator() is acc

    def test_records_lex_call(self) -> None:
        source = "push 1 push 2 add dump"
        with profiled_run() as acc:
            lex(source)
        assert acc.lex_calls == 1
        assert acc.source_length == len(source)
        assert acc.token_count == 6
        assert acc.eval_calls == 0

    def test_records_evaluation(self) -> None:
        with profiled_run() as acc:
            run("push 1 duplicate duplicate add add dump", out=io.StringIO())
        assert acc.eval_calls == 1
        assert acc.ops_executed == 6
        assert acc.dump_count == 1
        assert acc.max_stack_depth == 3

    def test_records_failed_evaluation(self) -> None:
        with profiled_run() as acc:
            with pytest.raises(ArityViolationError):
                run("push 1 dump dump", out=io.StringIO())
        assert acc.eval_calls == 1
        assert acc.ops_executed == 2
        assert acc.dump_count == 1

    def test_max_depth_across_runs(self) -> None:
        with profiled_run() as acc:
            run("push 1 push 2 push 3", out=io.StringIO())
            run("push 1", out=io.StringIO())
        assert acc.eval_calls == 2
        assert acc.max_stack_depth == 3


class TestSummary:
    def test_empty_summary(self) -> None:
        summary = RunAccumulator().summary()
        assert summary["lex_calls"] == 0
        assert summary["eval_calls"] == 0
        assert summary["ops_executed"] == 0

    def test_summary_keys(self) -> None:
        with profiled_run() as acc:
            run("push 2 lshift dump", out=io.StringIO())
        summary = acc.summary()
        assert set(summary) == {
            "total_ms",
            "lex_calls",
            "source_length",
            "token_count",
            "eval_calls",
            "ops_executed",
            "dump_count",
            "max_stack_depth",
        }
        assert summary["dump_count"] == 1
        assert summary["total_ms"] >= 0
