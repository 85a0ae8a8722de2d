from enum import Enum
from dataclasses import dataclass
from typing import NamedTuple


class MigState(Enum):
    """MIG mode of a single GPU or of the whole fleet.

    TRANSITION is only produced by fleet aggregation, never read from a GPU.
    """

    ENABLED = "Enabled"
    DISABLED = "Disabled"
    TRANSITION = "Transition"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class GpuModeRecord:
    """Current and pending MIG mode reported for one GPU."""

    name: str
    current: MigState = MigState.UNKNOWN
    pending: MigState = MigState.UNKNOWN


class MigAnalysis(NamedTuple):
    """Result of analyzing a fleet snapshot."""

    capable: bool
    mode: MigState


class ReconcileAction(Enum):
    """Action taken by one reconciliation pass."""

    NONE = "none"
    ENABLE_AND_REBOOT = "enable_and_reboot"
    APPLY_PROFILE = "apply_profile"
