"""Query bspwm through `bspc` and decode the answers.

`dump_state` returns the whole state (`bspc wm -d`). `Query` selects one
monitor, desktop or node and fetches its tree (`bspc query <selector> -T`):

    monitor = Query().monitor("HDMI-1").get_monitor_tree()
    node = Query().node(0x00C00003).get_node_tree()

Only the last selector set before a terminal call is used, since `bspc`
rejects more than one domain flag.
"""

__all__ = ["DUMP_ARGS", "Domain", "Query", "decode", "dump_state"]

from enum import StrEnum
from logging import Logger
from typing import TypeVar

from pydantic import ValidationError

from .logging_setup import get_logger
from .models import REQUIRE_ALL_FIELDS, BspwmModel, DeserializationError, Desktop, Monitor, Node, State
from .process import BspcResult, run_bspc

ModelT = TypeVar("ModelT", bound=BspwmModel)

DUMP_ARGS = ("wm", "-d")
QUERY_COMMAND = "query"
TREE_FLAG = "-T"


class Domain(StrEnum):
    """Selectable scopes, as `bspc query` flags."""

    MONITOR = "-m"
    DESKTOP = "-d"
    NODE = "-n"


def decode(model: type[ModelT], payload: bytes | str, *, result: BspcResult | None = None, log: Logger | None = None) -> ModelT:
    """Decode the JSON `payload` into `model`.

    Args:
        model: The structure to build
        payload: Raw program output
        result: The run that produced `payload`, attached to errors
        log: Logger to use for this operation

    Raises:
        DeserializationError: `payload` is not valid UTF-8 JSON of the expected shape.
            No coercion is done: a string id or a snake_case key is an error.
    """
    if log is None:
        log = get_logger("pybspc.query")
    raw = payload.encode() if isinstance(payload, str) else payload
    returncode = result.returncode if result else None
    stderr = result.stderr if result else b""
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        log.error("%s output is not valid UTF-8", model.__name__)
        raise DeserializationError(model.__name__, raw, "invalid UTF-8", returncode, stderr) from e
    try:
        return model.model_validate_json(text, strict=True, by_name=False, context={REQUIRE_ALL_FIELDS: True})
    except ValidationError as e:
        log.error("cannot decode %s: %d error(s), first: %s", model.__name__, e.error_count(), e.errors()[0]["msg"])
        raise DeserializationError(model.__name__, raw, str(e.errors()[0]["msg"]), returncode, stderr) from e


def dump_state(*, command: str | None = None, log: Logger | None = None) -> State:
    """Return the full window manager state.

    Args:
        command: Program to run, defaults to the configured one
        log: Logger to use for this operation
    """
    result = run_bspc(DUMP_ARGS, command=command, log=log)
    return decode(State, result.stdout, result=result, log=log)


class Query:
    """Builder for `bspc query ... -T` invocations.

    Selector methods return the builder itself so calls can be chained;
    each one replaces the previous selector.
    """

    def __init__(self, *, command: str | None = None, log: Logger | None = None) -> None:
        """Initialize the builder.

        Args:
            command: Program to run, defaults to the configured one
            log: Logger to use for this query
        """
        self.command = command
        self.log = log or get_logger("pybspc.query")
        self._selector: tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"<Query {' '.join(self.args)}>"

    @property
    def args(self) -> list[str]:
        """Return the current argument list, without the tree flag."""
        return [QUERY_COMMAND, *self._selector]

    def monitor(self, name: str) -> "Query":
        """Select the monitor matching `name`; an empty name is ignored."""
        if name:
            self._selector = (Domain.MONITOR.value, name)
        return self

    def desktop(self, name: str) -> "Query":
        """Select the desktop matching `name`; an empty name is ignored."""
        if name:
            self._selector = (Domain.DESKTOP.value, name)
        return self

    def node(self, node_id: int) -> "Query":
        """Select the node with the given id."""
        self._selector = (Domain.NODE.value, str(node_id))
        return self

    def build_args(self, domain: Domain) -> list[str]:
        """Return the arguments used to fetch a tree of `domain`.

        Falls back to the bare domain flag when no selector is set.
        """
        selector = self._selector or (domain.value,)
        return [QUERY_COMMAND, *selector, TREE_FLAG]

    def _fetch(self, domain: Domain, model: type[ModelT]) -> ModelT:
        result = run_bspc(self.build_args(domain), command=self.command, log=self.log)
        return decode(model, result.stdout, result=result, log=self.log)

    def get_monitor_tree(self) -> Monitor:
        """Return the selected (or focused) monitor."""
        return self._fetch(Domain.MONITOR, Monitor)

    def get_desktop_tree(self) -> Desktop:
        """Return the selected (or focused) desktop."""
        return self._fetch(Domain.DESKTOP, Desktop)

    def get_node_tree(self) -> Node:
        """Return the selected (or focused) node and its subtree."""
        return self._fetch(Domain.NODE, Node)
