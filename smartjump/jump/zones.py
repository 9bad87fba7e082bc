"""
Jump zone compiler.

For every display and each of its four edges, this module infers which other
displays lie beyond that edge and precomputes a JumpZone per neighbour. The
adjacency test is loose: any display positioned roughly beyond an edge is a
candidate regardless of alignment or gaps. Ambiguity between several candidates on the
same edge is resolved at runtime by the scorer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from smartjump.common.settings import settings
from smartjump.common.types import EDGE_PRIORITY, Display, Edge, JumpZone, Span

__all__ = ["Topology", "zones_compute", "edgeZone_build", "target_isBeyondEdge", "topology_log"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Topology:
    """
    Compiled jump zones for one display snapshot.

    Attributes:
        displays:
            Displays the zones were compiled from.
        zones:
            display id -> edge -> zones, in insertion order.
    """

    displays: tuple[Display, ...] = ()
    zones: dict[int, dict[Edge, list[JumpZone]]] = field(default_factory=dict)

    def zones_get(self, display_id: int, edge: Edge) -> list[JumpZone]:
        """
        Get zones registered on one display edge

        Args:
            display_id: Source display id
            edge: Source edge

        Returns:
            Zones in compile order, empty if none
        """
        return self.zones.get(display_id, {}).get(edge, [])

    def zones_iterate(self) -> Iterator[JumpZone]:
        """Iterate every zone in compile order"""
        for edges in self.zones.values():
            for zone_list in edges.values():
                yield from zone_list

    def zones_count(self) -> int:
        """Total number of zones"""
        return sum(1 for _ in self.zones_iterate())

    def isEmpty(self) -> bool:
        """Check if no jumps are possible"""
        return self.zones_count() == 0

    def display_get(self, display_id: int) -> Optional[Display]:
        """Look up a display by id"""
        for display in self.displays:
            if display.id == display_id:
                return display
        return None


def target_isBeyondEdge(source: Display, target: Display, edge: Edge) -> bool:
    """
    Check if target lies beyond source's edge on the perpendicular axis

    Args:
        source: Display the cursor leaves
        target: Candidate display
        edge: Edge of source being crossed

    Returns:
        True if target is a jump candidate for this edge
    """
    tolerance = settings.ADJACENCY_TOLERANCE_PX
    if edge == Edge.RIGHT:
        return target.x >= source.right - tolerance
    if edge == Edge.LEFT:
        return target.right <= source.x + tolerance
    if edge == Edge.BOTTOM:
        return target.y >= source.bottom - tolerance
    return target.bottom <= source.y + tolerance


def edgeZone_build(source: Display, target: Display, edge: Edge) -> Optional[JumpZone]:
    """
    Build the jump zone from source's edge to target

    Args:
        source: Display the cursor leaves
        target: Candidate display
        edge: Edge of source being crossed

    Returns:
        JumpZone, or None if target is not beyond the edge
    """
    if target.id == source.id or not target_isBeyondEdge(source, target, edge):
        return None

    margin = settings.ZONE_MARGIN_PX
    inset = settings.LANDING_INSET_PX

    if edge.isSideEdge():
        source_span = Span(
            low=max(source.y, target.y - margin),
            high=min(source.bottom, target.bottom + margin),
        )
        target_span = Span(low=target.y, high=target.bottom)
        landing = target.x + inset if edge == Edge.RIGHT else target.right - inset
    else:
        source_span = Span(
            low=max(source.x, target.x - margin),
            high=min(source.right, target.right + margin),
        )
        target_span = Span(low=target.x, high=target.right)
        landing = target.y + inset if edge == Edge.BOTTOM else target.bottom - inset

    return JumpZone(
        source_id=source.id,
        edge=edge,
        target=target,
        source_span=source_span,
        target_span=target_span,
        landing=landing,
    )


def zones_compute(displays: Sequence[Display]) -> Topology:
    """
    Compile jump zones for every display edge

    Every display gets an entry for all four edges, empty when nothing lies
    beyond. Fewer than two displays yields an empty topology.

    Args:
        displays: Current displays

    Returns:
        Freshly built topology
    """
    zones: dict[int, dict[Edge, list[JumpZone]]] = {}
    for source in displays:
        edges: dict[Edge, list[JumpZone]] = {}
        for edge in EDGE_PRIORITY:
            edge_zones: list[JumpZone] = []
            for target in displays:
                zone = edgeZone_build(source, target, edge)
                if zone is not None:
                    edge_zones.append(zone)
            edges[edge] = edge_zones
        zones[source.id] = edges

    topology = Topology(displays=tuple(displays), zones=zones)
    topology_log(topology)
    return topology


def topology_log(topology: Topology) -> None:
    """Log every compiled zone at debug level"""
    logger.debug("Pre-computed %d jump zone(s):", topology.zones_count())
    for zone in topology.zones_iterate():
        logger.debug(
            "  Display %d %s edge -> Display %d (source range: %d-%d)",
            zone.source_id,
            zone.edge.value,
            zone.target.id,
            zone.source_span.low,
            zone.source_span.high,
        )
