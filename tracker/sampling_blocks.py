"""
Robot Tracking - Sampling Block Assembly
========================================

Partitions the joint state into named blocks for blocked (coordinate)
particle resampling.

Definitions:
------------
A sampling block definition is an ordered collection of named groups,
each mapping to an ordered list of joint names. Two spellings are
accepted, both as produced by a YAML loader:

    # mapping (insertion ordered)
    {"arm": ["j1", "j2"], "hand": ["j3"]}

    # list of single-key mappings
    [{"arm": ["j1", "j2"]}, {"hand": ["j3"]}]

Both normalize to an ordered ``dict``. Group order and the order of joints
inside a group define the sweep order of the particle filter and are
preserved end to end.

Merging:
--------
merge(A, B): groups of B whose name already exists are extended with B's
joints (appended after the existing ones); other groups of B are appended
as new groups. Inputs are never modified.

Resolution:
-----------
resolve(definition, kinematics): joint names become state indices through
``kinematics.name_to_index``. Unknown names raise; nothing is dropped.

Example:
--------
>>> assembler = SamplingBlockAssembler()
>>> merged = assembler.merge({"arm": ["j1", "j2"]},
...                          {"arm": ["j3"], "offset": ["j4"]})
>>> merged
{'arm': ['j1', 'j2', 'j3'], 'offset': ['j4']}
>>> assembler.resolve(merged, JointKinematics(["j1", "j2", "j3", "j4"]))
[[0, 1, 2], [3]]

Author: Robot Tracking Team
Date: October 2026
"""

from collections.abc import Mapping
from typing import Dict, List, Sequence, Union
import logging

from core.exceptions import ConfigurationError
from .kinematics import Kinematics

logger = logging.getLogger(__name__)

SamplingBlocksDefinition = Dict[str, List[str]]
DefinitionLike = Union[Mapping, Sequence[Mapping], None]


def _group_joints(name, joints) -> List[str]:
    if isinstance(joints, (str, bytes)) or not isinstance(joints, Sequence):
        raise ConfigurationError(
            f"Sampling block {name!r} must list joint names, got {joints!r}"
        )
    for joint in joints:
        if not isinstance(joint, str):
            raise ConfigurationError(
                f"Sampling block {name!r} contains a non-string joint name: {joint!r}"
            )
    return list(joints)


def normalize_definition(definition: DefinitionLike) -> SamplingBlocksDefinition:
    """
    Normalize a sampling block definition to an ordered dict.

    Args:
        definition: Mapping, list of mappings, or None (empty)

    Returns:
        New dict {group_name: [joint_name, ...]}; repeated group names in a
        list definition are merged in order
    """
    if definition is None:
        return {}

    if isinstance(definition, Mapping):
        groups = list(definition.items())
    elif isinstance(definition, Sequence) and not isinstance(definition, (str, bytes)):
        groups = []
        for entry in definition:
            if not isinstance(entry, Mapping):
                raise ConfigurationError(
                    f"Sampling block entries must be mappings, got {entry!r}"
                )
            groups.extend(entry.items())
    else:
        raise ConfigurationError(
            f"Invalid sampling block definition: {definition!r}"
        )

    normalized: SamplingBlocksDefinition = {}
    for name, joints in groups:
        normalized.setdefault(name, []).extend(_group_joints(name, joints))
    return normalized


class SamplingBlockAssembler:
    """Merges block definitions and resolves them to joint index blocks."""

    def merge(self,
              definition_a: DefinitionLike,
              definition_b: DefinitionLike) -> SamplingBlocksDefinition:
        """
        Merge definition B into definition A.

        Args:
            definition_a: Base definition (its group order is kept)
            definition_b: Definition whose groups extend or follow A's

        Returns:
            New merged definition
        """
        merged = normalize_definition(definition_a)

        for name, joints in normalize_definition(definition_b).items():
            if name in merged:
                merged[name].extend(joints)
            else:
                merged[name] = list(joints)

        return merged

    def resolve(self,
                definition: DefinitionLike,
                kinematics: Kinematics) -> List[List[int]]:
        """
        Map every group's joint names to joint indices.

        Args:
            definition: Sampling block definition
            kinematics: Provides ``name_to_index``

        Returns:
            One index list per group, in definition order

        Raises:
            Whatever ``kinematics.name_to_index`` raises for unknown names
        """
        return [
            [kinematics.name_to_index(joint_name) for joint_name in joints]
            for joints in normalize_definition(definition).values()
        ]

    def assemble(self,
                 kinematics: Kinematics,
                 *definitions: DefinitionLike) -> List[List[int]]:
        """
        Merge definitions left to right and resolve the result.

        Example:
            >>> blocks = assembler.assemble(kinematics,
            ...                             config["sampling_blocks"],
            ...                             config["camera_offset"]["sampling_blocks"])
        """
        merged: SamplingBlocksDefinition = {}
        for definition in definitions:
            merged = self.merge(merged, definition)

        blocks = self.resolve(merged, kinematics)

        for name, block in zip(merged, blocks):
            logger.debug(f"Sampling block {name!r}: {block}")

        return blocks
