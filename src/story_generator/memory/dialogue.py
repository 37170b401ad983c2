"""Branching dialogue tree.

A dialogue is a rooted tree: every node exclusively owns its children and
the tree is only ever extended by appending. Visibility of a node is gated
by the *presence* of world-state flags; the flag values are not consulted.
"""

import logging
import uuid
from collections.abc import Iterator, Mapping, MutableMapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from story_generator.memory.templates import dedupe_preserving_order

logger = logging.getLogger(__name__)


class DialogueType(StrEnum):
    """Kind of dialogue line."""

    STATEMENT = "Statement"
    QUESTION = "Question"
    RESPONSE = "Response"
    NARRATION = "Narration"
    ACTION = "Action"


class DialogueNode(BaseModel):
    """One line of dialogue and the responses that may follow it."""

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    speaker: str = ""
    line: str = ""
    type: DialogueType = DialogueType.STATEMENT
    children: list["DialogueNode"] = Field(default_factory=list)
    required_flags: list[str] = Field(default_factory=list)
    set_flags: list[str] = Field(default_factory=list)
    is_end_node: bool = False
    emotional_weight: int = Field(default=0, ge=-10, le=10)  # -10 hostile .. +10 warm

    @field_validator("required_flags", "set_flags", mode="before")
    @classmethod
    def _dedupe_flags(cls, v: Any) -> Any:
        """Keep flag lists ordered sets."""
        return dedupe_preserving_order(v)

    def add_response(self, response: "DialogueNode | None") -> None:
        """Append a child node unless that same node is already a child.

        Deduplication is by identity: two distinct nodes with identical
        content are both kept.
        """
        if response is None:
            return
        if any(child is response for child in self.children):
            logger.debug("Node %s already has response %s", self.id, response.id)
            return
        self.children.append(response)

    def add_response_line(
        self,
        speaker: str,
        line: str,
        dialogue_type: DialogueType = DialogueType.RESPONSE,
    ) -> "DialogueNode":
        """Create a new child node from a speaker and a line.

        Returns:
            The newly attached node.
        """
        node = DialogueNode(speaker=speaker, line=line, type=dialogue_type)
        self.add_response(node)
        return node

    def add_required_flag(self, flag: str) -> None:
        """Require a world flag to be present before this node can be shown."""
        if flag not in self.required_flags:
            self.required_flags.append(flag)

    def add_set_flag(self, flag: str) -> None:
        """Set a world flag when this node is chosen."""
        if flag not in self.set_flags:
            self.set_flags.append(flag)

    def can_be_shown(self, flags: Mapping[str, str]) -> bool:
        """Return True if every required flag is present in flags.

        Presence alone gates visibility: a flag stored as "false" still
        satisfies the requirement.
        """
        return all(flag in flags for flag in self.required_flags)

    def apply_effects(self, flags: MutableMapping[str, str]) -> None:
        """Set every flag this node declares to "true"."""
        for flag in self.set_flags:
            flags[flag] = "true"

    def get_available_responses(self, flags: Mapping[str, str]) -> list["DialogueNode"]:
        """Return the children that can be shown, in insertion order."""
        return [child for child in self.children if child.can_be_shown(flags)]

    def walk(self, depth: int = 0) -> Iterator[tuple[int, "DialogueNode"]]:
        """Pre-order depth-first walk over this node and all descendants.

        No flag filtering is applied.

        Yields:
            (depth, node) pairs, the root at the given depth.
        """
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    def find_node(self, node_id: str) -> "DialogueNode | None":
        """Find a node in this subtree by id."""
        for _, node in self.walk():
            if node.id == node_id:
                return node
        return None

    def __str__(self) -> str:
        return f'{self.speaker}: "{self.line}" [{len(self.children)} responses]'
