"""
Tick pipeline - Ordered stages with declared read/write sets.

Each stage names the context fields it reads and writes. The pipeline
checks at construction time that no stage reads a value which is only
produced later in the same tick, unless the stage declares that it wants
the previous tick's value.
"""

from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, List, TYPE_CHECKING

if TYPE_CHECKING:
    from abyssim.simulation.context import SimulationContext


# Loaded into the context by begin_tick before any stage runs
TICK_INPUTS = frozenset({"intent", "dt", "now_ms", "rng"})


class PipelineOrderError(ValueError):
    """Raised when a stage reads a value produced by a later stage."""


@dataclass(frozen=True)
class Stage:
    """One step of the tick."""
    name: str
    run: Callable[["SimulationContext"], None]
    reads: FrozenSet[str] = field(default_factory=frozenset)
    writes: FrozenSet[str] = field(default_factory=frozenset)
    # Fields intentionally read from the previous tick
    reads_previous: FrozenSet[str] = field(default_factory=frozenset)


def stage(
    name: str,
    run: Callable[["SimulationContext"], None],
    reads: Iterable[str] = (),
    writes: Iterable[str] = (),
    reads_previous: Iterable[str] = (),
) -> Stage:
    """Build a stage from plain iterables."""
    return Stage(name, run, frozenset(reads), frozenset(writes), frozenset(reads_previous))


class Pipeline:
    """Runs stages in a fixed order against one context.

    Usage:
        pipeline = Pipeline([
            stage("motion", integrator.update, reads=[...], writes=[...]),
            ...
        ])
        pipeline.run(context)
    """

    def __init__(self, stages: Iterable[Stage]):
        """Initialize and validate the stage order.

        Args:
            stages: Stages in execution order

        Raises:
            PipelineOrderError: If a stage reads a field first written by
                a later stage without declaring it in ``reads_previous``.
        """
        self._stages: List[Stage] = list(stages)
        self._validate()

    @property
    def stages(self) -> List[Stage]:
        """Stages in execution order."""
        return list(self._stages)

    @property
    def names(self) -> List[str]:
        """Stage names in execution order."""
        return [s.name for s in self._stages]

    def _validate(self) -> None:
        names = [s.name for s in self._stages]
        if len(set(names)) != len(names):
            raise PipelineOrderError(f"Duplicate stage names: {names}")

        for index, current in enumerate(self._stages):
            written_before = set().union(*(s.writes for s in self._stages[:index + 1]))
            written_after = set().union(*(s.writes for s in self._stages[index + 1:]))

            for name in current.reads:
                if name in TICK_INPUTS or name in written_before:
                    continue
                if name in written_after:
                    raise PipelineOrderError(
                        f"Stage '{current.name}' reads '{name}' before it is written; "
                        f"move the writer earlier or declare it in reads_previous"
                    )

            overlap = current.reads_previous & current.reads
            if overlap:
                raise PipelineOrderError(
                    f"Stage '{current.name}' declares {sorted(overlap)} as both "
                    f"current and previous-tick reads"
                )

    def run(self, context: "SimulationContext") -> None:
        """Run every stage once, in order.

        Args:
            context: Simulation context
        """
        for current in self._stages:
            current.run(context)
