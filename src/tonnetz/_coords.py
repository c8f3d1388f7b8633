"""Lattice coordinates, node ids, and the equilateral world metric."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ._types import LatticeCoord

if TYPE_CHECKING:
    from ._types import Centroid, NodeId

PC0: int = 0  # pitch class at the origin node (C)

_SQRT3_2 = math.sqrt(3) / 2


def pc(u: int, v: int) -> int:
    """Pitch class of node (u, v): (PC0 + 7u + 4v) mod 12, never negative."""
    return (PC0 + 7 * u + 4 * v) % 12


def coord(u: int, v: int) -> LatticeCoord:
    return LatticeCoord(u, v)


def node_id(u: int, v: int) -> NodeId:
    return f"N:{u},{v}"


def parse_node_id(nid: NodeId) -> LatticeCoord:
    """Inverse of node_id()."""
    if not nid.startswith("N:"):
        raise ValueError(f"Invalid node id: {nid!r}")
    u_str, sep, v_str = nid[2:].partition(",")
    if not sep:
        raise ValueError(f"Invalid node id: {nid!r}")
    try:
        return LatticeCoord(int(u_str), int(v_str))
    except ValueError:
        raise ValueError(f"Invalid node id: {nid!r}") from None


def to_world(p: LatticeCoord | Centroid) -> tuple[float, float]:
    """Map lattice (u, v) onto the equilateral embedding."""
    return p.u + 0.5 * p.v, p.v * _SQRT3_2


def world_dist2(a: LatticeCoord | Centroid, b: LatticeCoord | Centroid) -> float:
    """Squared Euclidean distance in world space."""
    ax, ay = to_world(a)
    bx, by = to_world(b)
    dx = ax - bx
    dy = ay - by
    return dx * dx + dy * dy
