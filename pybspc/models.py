"""Typed mirror of the bspwm state tree, as emitted by `bspc`."""

from collections.abc import Iterator
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator
from pydantic.alias_generators import to_camel

__all__ = [
    "REQUIRE_ALL_FIELDS",
    "BspcError",
    "BspwmModel",
    "Client",
    "Constraints",
    "DeserializationError",
    "Desktop",
    "Focus",
    "Layer",
    "Layout",
    "Monitor",
    "Node",
    "Padding",
    "Rectangle",
    "SplitType",
    "State",
    "Tree",
]

# Validation context key: when set, every non-optional field must be present in the payload
REQUIRE_ALL_FIELDS = "require_all_fields"


class BspcError(Exception):
    """Base class for the errors raised by pybspc."""


class DeserializationError(BspcError, ValueError):
    """The output of `bspc` could not be decoded into the requested structure.

    Covers empty output, error messages printed instead of JSON, invalid
    UTF-8 and schema mismatches alike.
    """

    def __init__(
        self,
        model: str,
        payload: bytes,
        reason: str = "",
        returncode: int | None = None,
        stderr: bytes = b"",
    ) -> None:
        """Initialize the error.

        Args:
            model: Name of the structure that was requested
            payload: The raw bytes that failed to decode
            reason: Short description of the failure
            returncode: Exit status of the program, when known
            stderr: Error output of the program, when known
        """
        self.model = model
        self.payload = payload
        self.reason = reason
        self.returncode = returncode
        self.stderr = stderr
        message = f"cannot decode {model} from {len(payload)} bytes of output"
        if reason:
            message += f": {reason}"
        if returncode:
            message += f" (exit status {returncode})"
        super().__init__(message)


# Enumerations {{{


class DisplayEnum(StrEnum):
    """String enum whose `str()` is a display name, distinct from the wire literal."""

    def __str__(self) -> str:
        return DISPLAY_NAMES.get(self, self.value)

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


class Layout(DisplayEnum):
    """Desktop layout or client state."""

    TILED = "tiled"
    PSEUDO_TILED = "pseudo_tiled"
    FLOATING = "floating"
    MONOCLE = "monocle"
    FULLSCREEN = "fullscreen"


class SplitType(DisplayEnum):
    """Orientation of a split."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class Layer(DisplayEnum):
    """Stacking layer of a client."""

    BELOW = "below"
    NORMAL = "normal"
    ABOVE = "above"


DISPLAY_NAMES: dict[DisplayEnum, str] = {
    Layout.TILED: "tiled",
    Layout.PSEUDO_TILED: "pseudo-tiled",
    Layout.FLOATING: "floating",
    Layout.MONOCLE: "monocle",
    Layout.FULLSCREEN: "fullscreen",
    SplitType.VERTICAL: "vertical",
    SplitType.HORIZONTAL: "horizontal",
    Layer.BELOW: "below",
    Layer.NORMAL: "normal",
    Layer.ABOVE: "above",
}

# }}}


class BspwmModel(BaseModel):
    """Base for every bspwm structure: camelCase on the wire, frozen once built."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        validate_by_alias=True,
        validate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def check_required_fields(cls, data: Any, info: ValidationInfo) -> Any:  # noqa: ANN401
        """Reject payloads missing a non-optional field.

        Only active when decoding `bspc` output, so that `Model()` still
        builds the default (empty) value. Decoded payloads must use the wire
        (camelCase) names.
        """
        if not isinstance(data, dict) or not (info.context and info.context.get(REQUIRE_ALL_FIELDS)):
            return data
        to_alias = cls.model_config.get("alias_generator")
        missing = []
        for name, field in cls.model_fields.items():
            if field.default is None:  # optional
                continue
            alias = field.alias or (to_alias(name) if callable(to_alias) else name)
            if alias not in data:
                missing.append(alias)
        if missing:
            msg = f"{cls.__name__} is missing field(s): {', '.join(missing)}"
            raise ValueError(msg)
        return data

    def to_json(self) -> str:
        """Return the wire (camelCase JSON) form."""
        return self.model_dump_json(by_alias=True)


class Rectangle(BspwmModel):
    """A position and a size, in pixels."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


class Padding(BspwmModel):
    """Four-sided padding."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


class Constraints(BspwmModel):
    """Minimal size of a node."""

    # bspwm writes these keys in snake_case
    model_config = ConfigDict(alias_generator=None)

    min_width: int = 0
    min_height: int = 0


class Focus(BspwmModel):
    """One entry of the focus history."""

    monitor_id: int = 0
    desktop_id: int = 0
    node_id: int = 0


class Client(BspwmModel):
    """A managed window."""

    class_name: str = ""
    instance_name: str = ""
    border_width: int = 0
    state: Layout = Layout.TILED
    last_state: Layout = Layout.TILED
    layer: Layer = Layer.NORMAL
    last_layer: Layer = Layer.NORMAL
    urgent: bool = False
    shown: bool = False
    tiled_rectangle: Rectangle = Field(default_factory=Rectangle)
    floating_rectangle: Rectangle = Field(default_factory=Rectangle)


class Tree(BspwmModel):
    """Summary of a node: no split ratio, no children, no client."""

    id: int = 0
    split_type: SplitType = SplitType.VERTICAL
    vacant: bool = False
    hidden: bool = False
    sticky: bool = False
    private: bool = False
    locked: bool = False
    marked: bool = False
    presel: str | None = None
    rectangle: Rectangle = Field(default_factory=Rectangle)


class Node(Tree):
    """A node of the binary tiling tree.

    Internal nodes own exactly two children and no client. A leaf normally
    holds one client, but `client` is None for an empty receptacle leaf,
    which bspwm reports with a null client.
    """

    split_ratio: float = 0.0
    constraints: Constraints | None = None
    first_child: "Node | None" = None
    second_child: "Node | None" = None
    client: Client | None = None

    @model_validator(mode="after")
    def check_binary_split(self) -> "Node":
        if (self.first_child is None) != (self.second_child is None):
            msg = f"node {self.id} has a single child"
            raise ValueError(msg)
        return self

    @property
    def is_leaf(self) -> bool:
        """Return True if the node has no children."""
        return self.first_child is None

    @property
    def children(self) -> tuple["Node", ...]:
        """Return the children, in order (empty for a leaf)."""
        if self.first_child is None or self.second_child is None:
            return ()
        return (self.first_child, self.second_child)

    def walk(self) -> Iterator["Node"]:
        """Iterate over this node and its descendants, pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> Iterator["Node"]:
        """Iterate over the leaves, left to right."""
        return (node for node in self.walk() if node.is_leaf)

    def clients(self) -> Iterator[Client]:
        """Iterate over the clients held by the leaves."""
        return (node.client for node in self.leaves() if node.client is not None)

    def find(self, node_id: int) -> "Node | None":
        """Return the node with the given id in this subtree, if any."""
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def summary(self) -> Tree:
        """Return the lightweight form of this node."""
        return Tree.model_validate(self.model_dump(include=set(Tree.model_fields)))


Node.model_rebuild()


class Desktop(BspwmModel):
    """A virtual workspace.

    `layout` may temporarily differ from `user_layout`, e.g. when a single
    window is shown in monocle mode.
    """

    name: str = ""
    id: int = 0
    layout: Layout = Layout.TILED
    user_layout: Layout = Layout.TILED
    window_gap: int = 0
    border_width: int = 0
    focused_node_id: int = 0
    padding: Padding = Field(default_factory=Padding)
    root: Node | None = None

    @property
    def focused_node(self) -> Node | None:
        """Return the focused node, if it belongs to this desktop."""
        if self.root is None or not self.focused_node_id:
            return None
        return self.root.find(self.focused_node_id)


class Monitor(BspwmModel):
    """A physical display."""

    name: str = ""
    id: int = 0
    randr_id: int = 0
    wired: bool = False
    sticky_count: int = 0
    window_gap: int = 0
    border_width: int = 0
    focused_desktop_id: int = 0
    padding: Padding | None = None
    rectangle: Rectangle | None = None
    desktops: tuple[Desktop, ...] = ()

    @property
    def focused_desktop(self) -> Desktop | None:
        """Return the focused desktop of this monitor."""
        for desktop in self.desktops:
            if desktop.id == self.focused_desktop_id:
                return desktop
        return None

    def get_desktop(self, name: str) -> Desktop | None:
        """Return the first desktop called `name`."""
        for desktop in self.desktops:
            if desktop.name == name:
                return desktop
        return None


class State(BspwmModel):
    """Full window manager state, as returned by `bspc wm -d`."""

    focused_monitor_id: int = 0
    primary_monitor_id: int = 0
    clients_count: int = 0
    monitors: tuple[Monitor, ...] = ()
    focus_history: tuple[Focus, ...] = ()
    stacking_list: tuple[int, ...] = ()

    def _monitor_by_id(self, monitor_id: int) -> Monitor | None:
        for monitor in self.monitors:
            if monitor.id == monitor_id:
                return monitor
        return None

    @property
    def focused_monitor(self) -> Monitor | None:
        """Return the focused monitor."""
        return self._monitor_by_id(self.focused_monitor_id)

    @property
    def primary_monitor(self) -> Monitor | None:
        """Return the primary monitor, if one is set."""
        return self._monitor_by_id(self.primary_monitor_id)

    def get_monitor(self, name: str) -> Monitor | None:
        """Return the monitor called `name`."""
        for monitor in self.monitors:
            if monitor.name == name:
                return monitor
        return None
