"""Per-provider sample history and median aggregation.

The functions here are pure reducers over :class:`ProviderRecord` values:
they never mutate their inputs and always return a new record. Both the
orchestrator (probe outcomes) and the merger (passive samples) fold their
inputs through :func:`ingest`, which keeps the record invariants in one
place:

- the history holds at most ``cap`` samples, oldest evicted first (FIFO by
  insertion, not by time);
- ``latency`` is the most recently appended sample;
- ``median_latency`` is recomputed from exactly the current history and is
  ``None`` iff the history is empty.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

from ..base.dto import ProviderRecord, RecordStatus
from ..base.models import ProbeOutcome
from ..config.defaults import SAMPLE_HISTORY_CAP

Number = Union[int, float]


def median(values: Sequence[Number]) -> Optional[Number]:
    """Return the P50 of ``values``; ``None`` for an empty sequence.

    Even-sized inputs yield the mean of the two middle values, so the result
    may be fractional (``median([1, 2]) == 1.5``).
    """
    if not values:
        return None
    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[middle - 1] + ordered[middle]) / 2
    return ordered[middle]


def append_sample(samples: Sequence[int], sample: int, cap: int = SAMPLE_HISTORY_CAP) -> List[int]:
    """Return ``samples`` with ``sample`` appended, keeping the newest ``cap``."""
    if cap <= 0:
        raise ValueError("cap must be positive")
    return [*samples, sample][-cap:]


class Aggregator:
    """Folds probe outcomes and raw samples into provider records."""

    def __init__(self, cap: int = SAMPLE_HISTORY_CAP) -> None:
        if cap <= 0:
            raise ValueError("cap must be positive")
        self.cap = cap

    def add_sample(self, record: ProviderRecord, sample: int) -> ProviderRecord:
        """Append one sample to ``record`` and mark it successful.

        Any earlier failure on the record is cleared: a sample always means
        the provider answered.
        """
        if sample < 0:
            raise ValueError("latency samples must be non-negative")
        samples = append_sample(record.samples, sample, self.cap)
        return record.model_copy(
            update={
                "latency": sample,
                "samples": samples,
                "median_latency": median(samples),
                "status": RecordStatus.SUCCESS,
                "error_message": None,
                "error_type": None,
            }
        )

    def ingest(self, record: ProviderRecord, outcome: Union[ProbeOutcome, int]) -> ProviderRecord:
        """Return ``record`` updated with a probe outcome or raw sample.

        A failed outcome never enters the history: it yields an error record
        with an empty history, null latest/median, and the outcome's error
        kind and message.
        """
        if isinstance(outcome, ProbeOutcome):
            if outcome.ok:
                return self.add_sample(record, outcome.latency)  # type: ignore[arg-type]
            return record.model_copy(
                update={
                    "latency": None,
                    "samples": [],
                    "median_latency": None,
                    "status": RecordStatus.ERROR,
                    "error_message": outcome.message,
                    "error_type": outcome.error_kind,
                }
            )
        return self.add_sample(record, int(outcome))


__all__ = ["Aggregator", "median", "append_sample"]
