"""Tracking file dependencies and the order in which files can be resolved."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class ResolutionTracker:
    """Files waiting on dependencies and files ready to be resolved."""

    rev_dep: dict[int, set[int]] = field(default_factory=dict)
    """For each file, the files waiting on it."""
    ref_cnt: dict[int, int] = field(default_factory=dict)
    """Number of unresolved dependencies of each waiting file; never zero."""
    ready: set[int] = field(default_factory=set)
    """Files whose dependencies are all resolved."""

    def pick(self) -> int | None:
        """Take one ready file, or None if none is ready."""
        if not self.ready:
            return None
        file_id = min(self.ready)
        self.ready.remove(file_id)
        return file_id

    def pick_all(self) -> set[int]:
        """Take every ready file."""
        taken, self.ready = self.ready, set()
        return taken

    def done(self, file_id: int) -> None:
        """Mark ``file_id`` resolved, releasing the files waiting on it."""
        for waiting in self.rev_dep.pop(file_id, set()):
            self.ref_cnt[waiting] -= 1
            if self.ref_cnt[waiting] == 0:
                del self.ref_cnt[waiting]
                self.ready.add(waiting)


@dataclass
class DependencyTracker:
    """Map from each file to the files it depends on; every file is a key."""

    graph: dict[int, set[int]] = field(default_factory=dict)

    def update_dep(self, file_id: int, dep: int) -> None:
        """Record that ``file_id`` depends on ``dep``."""
        self.graph.setdefault(file_id, set()).add(dep)
        self.graph.setdefault(dep, set())

    def update_deps(self, file_id: int, deps: Iterable[int]) -> None:
        """Record that ``file_id`` depends on each of ``deps``."""
        self.graph.setdefault(file_id, set()).update(deps)

    def gen_resolved(self) -> ResolutionTracker:
        """Build a tracker in which files without dependencies are ready."""
        tracker = ResolutionTracker()
        for file_id, deps in self.graph.items():
            if not deps:
                tracker.ready.add(file_id)
                continue
            tracker.ref_cnt[file_id] = len(deps)
            for dep in deps:
                tracker.rev_dep.setdefault(dep, set()).add(file_id)
        return tracker