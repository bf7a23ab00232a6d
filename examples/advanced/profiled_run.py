"""Collect run metrics for a batch of programs with a small stack."""

import io

from lemo import Lemo
from lemo.errors import LemoError
from lemo.profiling import profiled_run

programs = [
    "push 1 duplicate add dump",
    "push 1 " * 10 + "dump",
    "push 7 lshift lshift dump",
    "dump",
]

lemo = Lemo(stack_capacity=8)
with profiled_run() as metrics:
    for source in programs:
        out = io.StringIO()
        try:
            lemo.run(source, out=out)
        except LemoError as exc:
            print(f"{source[:24]!r:28} error: {exc}")
        else:
            print(f"{source[:24]!r:28} -> {out.getvalue().split()}")

print(metrics.summary())
