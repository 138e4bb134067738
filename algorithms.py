"""
Algorithm interfaces for shortest-path computation.

Keeps the queue contract and the engine contract separate from graph
construction and experiment wiring.
"""

from abc import ABC, abstractmethod
from typing import Hashable, List, Mapping, Optional


class PriorityQueue(ABC):
    """
    Min-priority queue over unique elements with in-place priority updates.
    """

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def contains(self, element: Hashable) -> bool:
        raise NotImplementedError

    @abstractmethod
    def push(self, element: Hashable, priority: float) -> None:
        """
        Insert a new element. Pushing an element that is already queued is
        a contract violation.
        """
        raise NotImplementedError

    @abstractmethod
    def pop(self) -> Hashable:
        """
        Remove and return the minimum-priority element.

        Raises on an empty queue.
        """
        raise NotImplementedError

    @abstractmethod
    def change_priority(self, element: Hashable, priority: float) -> bool:
        """
        Move element to its new priority in place.

        Returns:
            False if element is not queued, True otherwise.
        """
        raise NotImplementedError

    @abstractmethod
    def purge(self) -> None:
        """Drop every element."""
        raise NotImplementedError


class ShortestPathEngine(ABC):
    """
    Interface for a completed single-source shortest-path run.
    """

    @abstractmethod
    def distances(self) -> Mapping[Hashable, Optional[float]]:
        """
        Final cost from the source to every graph node.

        Returns:
            Mapping node -> cost, with None for nodes that were never reached.
        """
        raise NotImplementedError

    @abstractmethod
    def previous(self) -> Mapping[Hashable, Optional[Hashable]]:
        """
        Predecessor of every node on its shortest path (None for the source
        and for unreached nodes).
        """
        raise NotImplementedError

    @abstractmethod
    def shortest_path_to(self, destination: Hashable) -> List:
        """
        Ordered hops from the source to destination with per-hop and
        cumulative weights.
        """
        raise NotImplementedError
