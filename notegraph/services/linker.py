"""In-memory bidirectional link graph over vault notes."""

from __future__ import annotations

from collections import Counter
from contextlib import contextmanager
import logging
from pathlib import PurePosixPath
import threading
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from ..models.graph import GraphData, GraphEdge, GraphNode

logger = logging.getLogger(__name__)

Edge = Tuple[str, str]


def note_name(path: str) -> str:
    """Return the wikilink name of a note: its file stem."""
    return PurePosixPath(path.replace("\\", "/")).stem


def _placeholder_path(name: str) -> str:
    return f"{name}.md"


class ReadWriteLock:
    """
    Many concurrent readers or one exclusive writer.

    Writers are preferred: once a writer is waiting, new readers queue behind
    it, so a steady stream of queries cannot starve updates. Not reentrant.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            except BaseException:
                self._waiting_writers -= 1
                self._cond.notify_all()
                raise
            self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class LinkGraph:
    """
    Maintain outgoing wikilinks per note and resolve note names to paths.

    Backlinks are computed on demand from the outgoing map. The two maps are
    guarded by independent read/write locks; when both are needed they are
    always taken in the order ``outgoing`` then ``name_to_path``.

    Name collisions resolve last-writer-wins: registering ``b/x.md`` after
    ``a/x.md`` makes ``[[x]]`` resolve to ``b/x.md`` and ``a/x.md`` is no
    longer reachable by name.
    """

    def __init__(self) -> None:
        self._outgoing: Dict[str, List[str]] = {}
        self._name_to_path: Dict[str, str] = {}
        self._outgoing_lock = ReadWriteLock()
        self._names_lock = ReadWriteLock()

    def register_note(self, path: str) -> None:
        """Map the note's name to its path."""
        name = note_name(path)
        with self._names_lock.write():
            previous = self._name_to_path.get(name)
            self._name_to_path[name] = path
        if previous is not None and previous != path:
            logger.warning(
                "Note name collision, later path wins",
                extra={"note_name": name, "previous_path": previous, "note_path": path},
            )

    def update_links(self, source_path: str, link_targets: Iterable[str]) -> None:
        """Replace the outgoing link targets of a note."""
        targets = list(link_targets)
        with self._outgoing_lock.write():
            self._outgoing[source_path] = targets

    def remove_note(self, path: str) -> None:
        """Drop a note's outgoing links and its name mapping."""
        with self._outgoing_lock.write():
            self._outgoing.pop(path, None)
        with self._names_lock.write():
            self._name_to_path.pop(note_name(path), None)

    def clear(self) -> None:
        with self._outgoing_lock.write():
            self._outgoing.clear()
        with self._names_lock.write():
            self._name_to_path.clear()

    def get_backlinks(self, path: str) -> List[str]:
        """Return source paths whose links target this note's name or path."""
        name = note_name(path)
        with self._outgoing_lock.read():
            return [
                source
                for source, targets in self._outgoing.items()
                if name in targets or path in targets
            ]

    def get_outgoing_links(self, path: str) -> List[str]:
        with self._outgoing_lock.read():
            return list(self._outgoing.get(path, ()))

    def get_all_note_names(self) -> Set[str]:
        with self._names_lock.read():
            return set(self._name_to_path)

    def resolve_link(self, name: str) -> Optional[str]:
        """Return the path registered for ``name``; ``None`` for a dangling link."""
        with self._names_lock.read():
            return self._name_to_path.get(name)

    def note_count(self) -> int:
        with self._names_lock.read():
            return len(self._name_to_path)

    def get_graph_data(self) -> GraphData:
        """Materialize every note and link target as graph nodes and edges."""
        with self._outgoing_lock.read(), self._names_lock.read():
            edges: List[Edge] = [
                (note_name(source), target)
                for source, targets in self._outgoing.items()
                for target in targets
            ]
            node_ids: Set[str] = {note_name(source) for source in self._outgoing}
            node_ids.update(target for _, target in edges)
            nodes = self._build_nodes(node_ids, Counter(target for _, target in edges))

        return GraphData(
            nodes=nodes,
            edges=[GraphEdge(source=source, target=target) for source, target in edges],
        )

    def get_local_graph(self, path: str, depth: int) -> GraphData:
        """
        Return the neighborhood within ``depth`` hops of a note, in both directions.

        Expansion pops from a stack. A name already reached is only expanded
        again when it is later reached at a strictly smaller distance, so the
        node set always covers every name within ``depth`` hops.
        """
        if depth < 0:
            raise ValueError("depth must be non-negative")

        center = note_name(path)
        best: Dict[str, int] = {}
        to_visit: List[Tuple[str, int]] = [(center, 0)]
        edges: Set[Edge] = set()

        with self._outgoing_lock.read(), self._names_lock.read():
            while to_visit:
                name, distance = to_visit.pop()
                if distance > depth:
                    continue
                seen = best.get(name)
                if seen is not None and seen <= distance:
                    continue
                best[name] = distance
                if distance == depth:
                    continue

                node_path = self._name_to_path.get(name)
                if node_path is not None:
                    for target in self._outgoing.get(node_path, ()):
                        edges.add((name, target))
                        to_visit.append((target, distance + 1))

                for source_path, targets in self._outgoing.items():
                    if name not in targets:
                        continue
                    source_name = note_name(source_path)
                    edges.add((source_name, name))
                    to_visit.append((source_name, distance + 1))

            ordered = sorted(edges)
            nodes = self._build_nodes(best, Counter(target for _, target in ordered))

        return GraphData(
            nodes=nodes,
            edges=[GraphEdge(source=source, target=target) for source, target in ordered],
        )

    def _build_nodes(self, node_ids: Iterable[str], backlink_counts: Counter) -> List[GraphNode]:
        # Caller holds the name_to_path read lock.
        return [
            GraphNode(
                id=node_id,
                label=node_id,
                path=self._name_to_path.get(node_id) or _placeholder_path(node_id),
                backlink_count=backlink_counts.get(node_id, 0),
            )
            for node_id in sorted(node_ids)
        ]


__all__ = ["LinkGraph", "ReadWriteLock", "note_name"]
