"""pybspc - typed access to the state of the bspwm window manager.

Runs the `bspc` control program, decodes its JSON output into immutable
models (State, Monitor, Desktop, Node, Client) and provides a small query
builder to fetch a single monitor, desktop or node subtree.
"""

from .models import (
    BspcError,
    Client,
    Constraints,
    DeserializationError,
    Desktop,
    Focus,
    Layer,
    Layout,
    Monitor,
    Node,
    Padding,
    Rectangle,
    SplitType,
    State,
    Tree,
)
from .query import Domain, Query, decode, dump_state

__all__ = [
    "BspcError",
    "Client",
    "Constraints",
    "DeserializationError",
    "Desktop",
    "Domain",
    "Focus",
    "Layer",
    "Layout",
    "Monitor",
    "Node",
    "Padding",
    "Query",
    "Rectangle",
    "SplitType",
    "State",
    "Tree",
    "decode",
    "dump_state",
]
