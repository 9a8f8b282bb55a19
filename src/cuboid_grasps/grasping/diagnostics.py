"""Define optional sinks receiving intermediate results of grasp generation for debugging."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cuboid_grasps.grasping.candidates import ScoredCandidate
    from cuboid_grasps.spatial import Pose3D


class DiagnosticsSink(Protocol):
    """Protocol for receivers of diagnostic output; they never influence generated grasps."""

    def on_poses(self, stage: str, poses: Sequence[Pose3D]) -> None:
        """Receive the poses produced by one stage of pose enumeration."""
        ...

    def on_candidate(self, candidate: ScoredCandidate) -> None:
        """Receive a scored candidate as it is emitted."""
        ...

    def on_event(self, message: str) -> None:
        """Receive a note about a recoverable condition (e.g., a skipped opening width)."""
        ...


class NullDiagnostics:
    """Diagnostics sink that discards everything."""

    def on_poses(self, stage: str, poses: Sequence[Pose3D]) -> None:
        pass

    def on_candidate(self, candidate: ScoredCandidate) -> None:
        pass

    def on_event(self, message: str) -> None:
        pass


@dataclass
class RecordingDiagnostics:
    """Diagnostics sink that keeps everything it receives, in order."""

    stages: list[tuple[str, list[Pose3D]]] = field(default_factory=list)
    candidates: list[ScoredCandidate] = field(default_factory=list)
    events: list[str] = field(default_factory=list)

    def on_poses(self, stage: str, poses: Sequence[Pose3D]) -> None:
        self.stages.append((stage, list(poses)))

    def on_candidate(self, candidate: ScoredCandidate) -> None:
        self.candidates.append(candidate)

    def on_event(self, message: str) -> None:
        self.events.append(message)

    def stage_sizes(self) -> dict[str, int]:
        """Map each recorded stage name to the number of poses it produced (last one wins)."""
        return {stage: len(poses) for stage, poses in self.stages}
