"""
varion.core.models - Core data models for Varion scripts.

Provides the classified-line token produced by the scanner, the mutable
ParsedNode accumulated by the parser, and the immutable NodeDefinition and
NodeGraph handed to playback runtimes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple, Union


class LineKind(Enum):
    """Classification of a logical source line."""

    HEADER = "header"
    TAG = "tag"
    DIRECTIVE = "directive"
    CHOICE = "choice"
    CONDITION = "condition"
    ACTION = "action"
    META = "meta"
    TEXT = "text"
    BLANK = "blank"


@dataclass(frozen=True)
class ClassifiedLine:
    """
    One logical source line after comment stripping.

    Attributes:
        kind: Line classification
        content: Payload after the marker (node id, tag, target, text, ...)
        raw: The original line as written
        line_number: 1-indexed source line
        label: Choice label (CHOICE only)
        target: Choice target (CHOICE only)
        condition: Inline choice condition (CHOICE only)
        key: Metadata key (META only)
        invalid: Lexically rejected HEADER or CHOICE, kept so the parser can
            resynchronise
    """

    kind: LineKind
    content: str
    raw: str
    line_number: int
    label: Optional[str] = None
    target: Optional[str] = None
    condition: Optional[str] = None
    key: Optional[str] = None
    invalid: bool = False


@dataclass(frozen=True)
class Choice:
    """A labeled option presented to the player, pointing at a target node."""

    label: str
    target: str
    condition: Optional[str] = None
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Action:
    """A command attached to a node, run by the playback runtime on entry."""

    command: str
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class NoExit:
    """The node ends the dialogue."""


@dataclass(frozen=True)
class DirectTo:
    """The node continues directly to ``target``."""

    target: str


@dataclass(frozen=True)
class ChoicesAmong:
    """The node offers ``choices`` in presentation order."""

    choices: Tuple[Choice, ...]


Exit = Union[NoExit, DirectTo, ChoicesAmong]


@dataclass(frozen=True)
class NodeDefinition:
    """
    A validated node.

    Attributes:
        id: Unique node identifier
        text: Display-text lines in source order
        tags: Tag strings
        meta: Metadata key/value pairs (e.g., ``who``)
        actions: Actions in source order
        exit: Outgoing-edge mechanism (NoExit, DirectTo or ChoicesAmong)
        line_number: Line of the node header
    """

    id: str
    text: Tuple[str, ...] = ()
    tags: frozenset = frozenset()
    meta: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    actions: Tuple[Action, ...] = ()
    exit: Exit = field(default_factory=NoExit)
    line_number: int = 0

    @property
    def next(self) -> Optional[str]:
        """Target of an explicit ``@next`` directive, if any."""
        if isinstance(self.exit, DirectTo):
            return self.exit.target
        return None

    @property
    def choices(self) -> Tuple[Choice, ...]:
        """Choices in presentation order (empty unless the node branches)."""
        if isinstance(self.exit, ChoicesAmong):
            return self.exit.choices
        return ()

    @property
    def body(self) -> str:
        """Display text joined with newlines."""
        return "\n".join(self.text)

    def targets(self) -> List[str]:
        """All node ids this node can lead to."""
        if isinstance(self.exit, DirectTo):
            return [self.exit.target]
        return [choice.target for choice in self.choices]

    def __repr__(self) -> str:
        return f"NodeDefinition(id={self.id!r}, exit={self.exit!r})"


@dataclass(frozen=True)
class NodeGraph:
    """
    The validated, immutable result of parsing a script.

    Attributes:
        nodes: Read-only mapping of node id -> NodeDefinition, in source order
        entry: ID of the first declared node
        source: Script path, when parsed from a file
    """

    nodes: Mapping[str, NodeDefinition]
    entry: str
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.nodes, MappingProxyType):
            object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    @classmethod
    def from_nodes(
        cls, nodes: List[NodeDefinition], source: Optional[str] = None
    ) -> "NodeGraph":
        """Build a graph from nodes in source order; the first is the entry."""
        if not nodes:
            raise ValueError("A NodeGraph needs at least one node")
        mapping: Dict[str, NodeDefinition] = {}
        for node in nodes:
            if node.id in mapping:
                raise ValueError(f"Duplicate node id: {node.id}")
            mapping[node.id] = node
        return cls(nodes=MappingProxyType(mapping), entry=nodes[0].id, source=source)

    @property
    def entry_node(self) -> NodeDefinition:
        return self.nodes[self.entry]

    def get(self, node_id: str) -> Optional[NodeDefinition]:
        return self.nodes.get(node_id)

    def ids(self) -> List[str]:
        """Node ids in source order."""
        return list(self.nodes)

    def __getitem__(self, node_id: str) -> NodeDefinition:
        return self.nodes[node_id]

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass
class ParsedNode:
    """
    Best-effort accumulation of one node's lines, before validation.

    Every directive and choice seen is kept so the validator can detect a
    node that declares both.
    """

    id: str
    line_number: int
    text: List[str] = field(default_factory=list)
    tags: List[Tuple[str, int]] = field(default_factory=list)
    meta: Dict[str, str] = field(default_factory=dict)
    actions: List[Action] = field(default_factory=list)
    directives: List[Tuple[str, int]] = field(default_factory=list)
    choices: List[Choice] = field(default_factory=list)

    def references(self) -> List[Tuple[str, int]]:
        """(target, line_number) for every directive and choice."""
        refs = list(self.directives)
        refs.extend((choice.target, choice.line_number) for choice in self.choices)
        return refs
