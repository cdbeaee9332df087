# src/geometry/bvh.py
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union
from core.aabb import AABB
from core.interval import Interval
from core.ray import Ray
from geometry.hittable import HitRecord
from geometry.partition import PartitionBy
from geometry.surface import Surface
from materials.material import Material

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class InternalNode:
    """
    Inner node. Its left child is always the next slot of the node array;
    the right child lives at right_index.
    """
    right_index: Optional[int]
    box: AABB

    def bounding_box(self) -> AABB:
        return self.box

@dataclass(frozen=True)
class LeafNode:
    surface: Surface
    box: AABB = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "box", self.surface.bounding_box())

    def bounding_box(self) -> AABB:
        return self.box

class _Placeholder:
    """
    Slot reserved for an internal node whose right child has not been built
    yet. Only exists while a tree is under construction.
    """
    def bounding_box(self) -> AABB:
        raise AssertionError("bounding box requested from a placeholder BVH node")

    def __repr__(self) -> str:
        return "PLACEHOLDER"

PLACEHOLDER = _Placeholder()

Node = Union[InternalNode, LeafNode, _Placeholder]

class BVH:
    """
    Bounding volume hierarchy stored as a flat, pre-order array of nodes.

    Build it with BVH.build(); afterwards it is never modified and can be
    shared read-only between render workers.
    """
    def __init__(self, nodes: Iterable[Node]):
        self.nodes: Tuple[Node, ...] = tuple(nodes)

    @classmethod
    def empty(cls) -> "BVH":
        return cls(())

    @classmethod
    def build(cls, surfaces: Iterable[Surface], partition_by: PartitionBy) -> "BVH":
        """
        Build a tree over surfaces using one partitioning strategy for every
        split. The caller's sequence is copied, never reordered.
        """
        work = list(surfaces)
        if not work:
            return cls.empty()

        nodes: List[Node] = []
        _build_tree(nodes, work, 0, len(work), partition_by)

        if any(node is PLACEHOLDER for node in nodes):
            raise AssertionError("BVH construction finished with an unpatched placeholder node")

        logger.debug("built BVH over %d surfaces with %s: %d nodes",
                     len(work), partition_by, len(nodes))
        return cls(nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def bounding_box(self) -> AABB:
        if not self.nodes:
            return AABB.EMPTY
        return self.nodes[0].bounding_box()

    def leaves(self) -> List[LeafNode]:
        return [node for node in self.nodes if isinstance(node, LeafNode)]

    def hit(self, ray: Ray, interval: Interval) -> Optional[Tuple[HitRecord, Material]]:
        """
        Nearest surface hit along ray inside interval, or None.

        Depth-first with an explicit stack. Every hit shrinks the upper end
        of the search window, so boxes behind the closest hit found so far
        are skipped.
        """
        nodes = self.nodes
        if not nodes:
            return None

        count = len(nodes)
        window = Interval(interval.min, interval.max)
        closest = None
        stack = [0]
        while stack:
            i = stack.pop()
            node = nodes[i]

            if not node.bounding_box().hit(ray, window):
                continue

            if isinstance(node, InternalNode):
                if node.right_index is not None:
                    stack.append(node.right_index)
                if i + 1 < count:
                    stack.append(i + 1)
            elif isinstance(node, LeafNode):
                found = node.surface.hit(ray, window)
                if found is not None and (closest is None or found[0].t < closest[0].t):
                    closest = found
                    window = window.with_max(found[0].t)
            else:
                raise AssertionError(f"unexpected node {node!r} at index {i} during traversal")

        return closest

def _build_tree(nodes: List[Node], surfaces: List[Surface], start: int, end: int,
                partition_by: PartitionBy) -> None:
    """
    Append the pre-order subtree for surfaces[start:end] to nodes.
    """
    span = end - start

    if span == 1:
        nodes.append(LeafNode(surfaces[start]))
        return

    mid = partition_by.partition(surfaces, start, end)
    if not start < mid < end:
        raise AssertionError(f"{partition_by} split {span} surfaces with an empty side")

    if span == 2:
        left, right = LeafNode(surfaces[start]), LeafNode(surfaces[start + 1])
        nodes.append(InternalNode(len(nodes) + 2, AABB.merge(left.box, right.box)))
        nodes.append(left)
        nodes.append(right)
        return

    parent_index = len(nodes)
    nodes.append(PLACEHOLDER)

    _build_tree(nodes, surfaces, start, mid, partition_by)
    right_index = len(nodes)
    _build_tree(nodes, surfaces, mid, end, partition_by)

    nodes[parent_index] = InternalNode(
        right_index,
        AABB.merge(nodes[parent_index + 1].bounding_box(), nodes[right_index].bounding_box())
    )
