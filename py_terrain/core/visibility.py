"""
Target visibility reporting.

Consumers that trace lines of sight over a synthesized terrain record, for
each target, one boolean per observation sample: ``True`` when the target
was occluded in that sample. This module turns those samples into a
visibility percentage and a categorical label.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, List, Mapping, Sequence, Union

import numpy as np
import structlog

from .exceptions import InvalidParameter

logger = structlog.get_logger()


class VisibilityLabel(str, Enum):
    """How much of the observation time a target was visible."""

    NOT = "not"
    PARTIALLY = "partially"
    FULLY = "fully"


@dataclass(frozen=True)
class VisibilityReport:
    """Visibility summary for one target."""

    target: Hashable
    percentage: float
    label: VisibilityLabel
    samples: int

    @property
    def message(self) -> str:
        return f"Target {self.target} is {self.label.value} visible ({self.percentage:.1f}%)"


def visibility_percentage(occluded: Sequence[bool]) -> float:
    """
    Percentage of samples in which the target was not occluded.

    Args:
        occluded: One boolean per observation sample, True when occluded

    Returns:
        Visible share in [0, 100]
    """
    samples = np.asarray(occluded)
    if samples.ndim != 1 or samples.size == 0:
        raise InvalidParameter("occluded", "expected a non-empty 1-D sequence of booleans")
    if samples.dtype != np.bool_:
        raise InvalidParameter("occluded", f"expected booleans, got dtype {samples.dtype}")

    visible = samples.size - int(np.count_nonzero(samples))
    return 100.0 * visible / samples.size


def classify_visibility(percentage: float) -> VisibilityLabel:
    """Map a visibility percentage to its label."""
    if not 0.0 <= percentage <= 100.0:
        raise InvalidParameter("percentage", f"must be within [0, 100], got {percentage}")
    if percentage == 0.0:
        return VisibilityLabel.NOT
    if percentage == 100.0:
        return VisibilityLabel.FULLY
    return VisibilityLabel.PARTIALLY


def visibility_report(
    occlusions: Union[Mapping[Hashable, Sequence[bool]], Sequence[Sequence[bool]]],
) -> List[VisibilityReport]:
    """
    Build one report per target.

    Args:
        occlusions: Occlusion samples keyed by target id, or a sequence of
            sample sequences (targets are then numbered from 1)

    Returns:
        Reports in target order
    """
    if isinstance(occlusions, Mapping):
        items = list(occlusions.items())
    else:
        items = [(index, samples) for index, samples in enumerate(occlusions, start=1)]

    reports = []
    for target, samples in items:
        percentage = visibility_percentage(samples)
        report = VisibilityReport(
            target=target,
            percentage=percentage,
            label=classify_visibility(percentage),
            samples=len(samples),
        )
        logger.debug("Target visibility", target=target, percentage=percentage)
        reports.append(report)

    return reports
