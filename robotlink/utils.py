"""Helpers for joint-name lists, URDF joint chains and range checks."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum

logger = logging.getLogger(__name__)


class JointType(IntEnum):
    """Kinds of joint found in a robot description."""

    UNKNOWN = 0
    REVOLUTE = 1
    CONTINUOUS = 2
    PRISMATIC = 3
    FLOATING = 4
    PLANAR = 5
    FIXED = 6


@dataclass
class Joint:
    """A named joint of a given type."""

    name: str
    type: JointType = JointType.REVOLUTE


@dataclass
class Link:
    """A link with the joints and links hanging directly below it."""

    name: str
    child_joints: list[Joint] = field(default_factory=list)
    child_links: list["Link"] = field(default_factory=list)


class BranchingChainError(ValueError):
    """Raised when a joint tree branches instead of forming a single chain."""


def is_similar(lhs: Sequence[str], rhs: Sequence[str]) -> bool:
    """True if both lists hold the same members, in any order."""
    if len(lhs) != len(rhs):
        return False
    return is_same(sorted(lhs), sorted(rhs))


def is_same(lhs: Sequence[str], rhs: Sequence[str]) -> bool:
    """True if both lists hold the same members in the same order."""
    if len(lhs) != len(rhs):
        return False
    return list(lhs) == list(rhs)


def _collect_chain(link: Link, ignore_fixed: bool, joint_names: list[str]) -> None:
    found_joint = ""
    for joint in link.child_joints:
        logger.debug("  %s: type %s", joint.name, joint.type)
        if ignore_fixed and joint.type == JointType.FIXED:
            continue
        if not found_joint:
            found_joint = joint.name
            joint_names.append(found_joint)
        else:
            raise BranchingChainError(
                f"branching joints: {found_joint} and {joint.name}"
            )

    found_link = ""
    # Joints found below earlier children stay here across iterations, so any
    # further child seen after one that contributed joints counts as a branch.
    sub_joints: list[str] = []
    for child in link.child_links:
        logger.debug("  %s", child.name)
        _collect_chain(child, ignore_fixed, sub_joints)
        if not sub_joints:
            continue
        if not found_link:
            found_link = child.name
            joint_names.extend(sub_joints)
        else:
            raise BranchingChainError(
                f"branching links: {found_link} and {child.name}"
            )


def find_chain_joint_names(link: Link, ignore_fixed: bool = True) -> list[str]:
    """Return the joint names of the serial chain that starts at ``link``.

    Raises BranchingChainError if the tree below ``link`` branches.
    """
    joint_names: list[str] = []
    _collect_chain(link, ignore_fixed, joint_names)
    return joint_names


def map_insert(key: str, value: float, mappings: MutableMapping[str, float]) -> None:
    """Add ``key`` to ``mappings``; raise ValueError if it is already there."""
    if key in mappings:
        raise ValueError(f"key already present in map: {key!r}")
    mappings[key] = value


def to_map(keys: Sequence[str], values: Sequence[float]) -> dict[str, float]:
    """Pair keys with values; raise ValueError on a size mismatch or duplicate key."""
    if len(keys) != len(values):
        raise ValueError(
            f"keys size {len(keys)} does not match values size {len(values)}"
        )
    mappings: dict[str, float] = {}
    for key, value in zip(keys, values):
        map_insert(key, value, mappings)
    return mappings


def is_within_range(
    lhs: Sequence[float], rhs: Sequence[float], full_range: float
) -> bool:
    """True if every pair of values differs by no more than half ``full_range``."""
    if len(lhs) != len(rhs):
        logger.error("lhs size %d does not match rhs size %d", len(lhs), len(rhs))
        return False
    half_range = abs(full_range / 2.0)
    return all(abs(a - b) <= half_range for a, b in zip(lhs, rhs))


def is_within_range_by_keys(
    keys: Sequence[str],
    lhs: Mapping[str, float],
    rhs: Mapping[str, float],
    full_range: float,
) -> bool:
    """Compare two keyed maps over ``keys``; a key missing from either raises KeyError."""
    if len(keys) != len(rhs) or len(keys) != len(lhs):
        logger.error(
            "size mismatch: lhs %d, rhs %d, keys %d", len(lhs), len(rhs), len(keys)
        )
        return False
    half_range = abs(full_range / 2.0)
    return all(abs(lhs[key] - rhs[key]) <= half_range for key in keys)


def is_within_range_named(
    lhs_keys: Sequence[str],
    lhs_values: Sequence[float],
    rhs_keys: Sequence[str],
    rhs_values: Sequence[float],
    full_range: float,
) -> bool:
    """Compare two named value lists whose names may come in different orders."""
    if not is_similar(lhs_keys, rhs_keys):
        logger.error("key lists are not similar")
        return False
    try:
        lhs_map = to_map(lhs_keys, lhs_values)
        rhs_map = to_map(rhs_keys, rhs_values)
    except ValueError as exc:
        logger.error("%s", exc)
        return False
    return is_within_range_by_keys(lhs_keys, lhs_map, rhs_map, full_range)