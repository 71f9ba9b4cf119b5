# src/gatherkit/engine/__init__.py
"""Engine: drives gatherers over sources.

- executor: single-pass push and pull runs with the finisher lifecycle
- partitioned: runs a parallel-capable gatherer over partitions
- stream: lazy chained operations fused into one gatherer
- clock: time source and interruptible sleep for the rate limiter
"""

from gatherkit.engine.clock import DEFAULT_CLOCK, Clock, MockClock, SystemClock
from gatherkit.engine.downstream import BufferDownstream, CallbackDownstream, CountingDownstream, ListDownstream
from gatherkit.engine.executor import PipelineRun, RunResult, iter_gatherer, run_gatherer
from gatherkit.engine.partitioned import merge_states, run_partitioned, split_partitions
from gatherkit.engine.stream import Stream

__all__ = [
    "DEFAULT_CLOCK",
    "BufferDownstream",
    "CallbackDownstream",
    "Clock",
    "CountingDownstream",
    "ListDownstream",
    "MockClock",
    "PipelineRun",
    "RunResult",
    "Stream",
    "SystemClock",
    "iter_gatherer",
    "merge_states",
    "run_gatherer",
    "run_partitioned",
    "split_partitions",
]
