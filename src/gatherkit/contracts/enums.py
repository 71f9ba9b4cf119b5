# src/gatherkit/contracts/enums.py
"""Status codes and modes shared by the executor, streams and the catalog."""

from enum import StrEnum


class ExecutorState(StrEnum):
    """Lifecycle state of a single pipeline run.

    Transitions:
        RUNNING --(source exhausted)--> STOPPING --(finisher)--> FINISHED
        RUNNING --(stop signaled)-----> STOPPING --(finisher)--> FINISHED

    A run aborted by an exception never reaches FINISHED.
    """

    RUNNING = "running"
    STOPPING = "stopping"
    FINISHED = "finished"


class RunOutcome(StrEnum):
    """Why a run left the RUNNING state.

    Values:
        EXHAUSTED: The source ran out of elements
        SHORT_CIRCUITED: The integrator or downstream signaled stop
    """

    EXHAUSTED = "exhausted"
    SHORT_CIRCUITED = "short_circuited"


class Grouping(StrEnum):
    """Order in which partial states are merged by the partitioned runner.

    LEFT folds partials left to right: ((a + b) + c) + d
    TREE merges adjacent pairs level by level: (a + b) + (c + d)

    Both must produce the same result for an associative combiner.
    """

    LEFT = "left"
    TREE = "tree"
