"""
Edge/velocity scorer.

Given a cursor sample at a display edge and the compiled topology, pick the
jump zone that best matches the user's intent:

1. Zones whose target span contains the cursor's shared-axis coordinate score
   CONTAINMENT_SCORE; others score MISS_BASE_SCORE minus their distance.
2. Visible movement along the shared axis toward a zone's target center adds
   DIRECTION_BONUS, so a deliberate drag toward a neighbour beats containment.
3. The first zone with the highest score wins; a best score under
   ACCEPT_THRESHOLD means no jump.
"""

from __future__ import annotations

import logging
from typing import Optional

from smartjump.common.settings import settings
from smartjump.common.types import Edge, JumpTarget, JumpZone, Position, Velocity
from smartjump.jump.zones import Topology

__all__ = ["target_find", "zone_score", "landing_calculate"]

logger = logging.getLogger(__name__)


def zone_score(zone: JumpZone, position: Position, velocity: Velocity) -> tuple[float, bool]:
    """
    Score one candidate zone for a cursor sample

    Args:
        zone: Candidate zone
        position: Cursor position at the edge
        velocity: Instantaneous cursor velocity

    Returns:
        Tuple of (score, direction_matched)
    """
    if zone.edge.isSideEdge():
        coord = position.y
        shared_velocity = velocity.dy
    else:
        coord = position.x
        shared_velocity = velocity.dx

    span = zone.target_span
    if span.contains(coord):
        score: float = settings.CONTAINMENT_SCORE
    else:
        score = settings.MISS_BASE_SCORE - span.distance_calculate(coord)

    direction_matched = False
    if abs(shared_velocity) > settings.DIRECTION_NOISE_PX:
        center = span.center
        if (shared_velocity < 0 and center < coord) or (shared_velocity > 0 and center > coord):
            direction_matched = True
            score += settings.DIRECTION_BONUS

    return score, direction_matched


def landing_calculate(zone: JumpZone, position: Position) -> Position:
    """
    Compute where the cursor lands for a winning zone

    The perpendicular coordinate is the zone's fixed landing coordinate; the
    shared-axis coordinate is the cursor's own, clamped inside the target's
    span minus the landing inset.

    Args:
        zone: Winning zone
        position: Cursor position at the edge

    Returns:
        Landing position on the target display
    """
    inset = settings.LANDING_INSET_PX
    if zone.edge.isSideEdge():
        return Position(x=zone.landing, y=zone.target_span.clamp(position.y, inset))
    return Position(x=zone.target_span.clamp(position.x, inset), y=zone.landing)


def target_find(
    topology: Topology,
    display_id: int,
    edge: Edge,
    position: Position,
    velocity: Velocity,
) -> Optional[JumpTarget]:
    """
    Select the jump target for a cursor sample at an edge

    Args:
        topology: Compiled zones
        display_id: Display the cursor is on
        edge: Edge the cursor is at
        position: Cursor position
        velocity: Instantaneous cursor velocity

    Returns:
        JumpTarget, or None when no zone is good enough
    """
    zones = topology.zones_get(display_id, edge)
    if not zones:
        return None

    best_zone: Optional[JumpZone] = None
    best_score = float("-inf")

    for zone in zones:
        score, direction_matched = zone_score(zone, position, velocity)
        if direction_matched:
            logger.debug(
                "    Directional bonus: moving toward display %d (+%d)",
                zone.target.id,
                settings.DIRECTION_BONUS,
            )
        logger.debug(
            "    Zone -> Display %d: score=%.0f, dirMatch=%s (vel: %d, %d)",
            zone.target.id,
            score,
            direction_matched,
            velocity.dx,
            velocity.dy,
        )
        # Strict comparison: the first zone reaching the max score wins
        if score > best_score:
            best_score = score
            best_zone = zone

    if best_zone is None or best_score < settings.ACCEPT_THRESHOLD:
        return None

    return JumpTarget(
        position=landing_calculate(best_zone, position),
        display=best_zone.target,
        score=best_score,
    )
