#!/usr/bin/env python3
"""turtle_graph.py

Interpret a flat turtle command string into a directed graph of 2D points.

Key features:
- Bracket-aware tokenizer for single-character commands with optional
  numeric parameter lists, e.g. ``F(10)`` or ``S(-5,2.5)``.
- Turtle state machine with pen state and a push/pop state stack.
- Pluggable graph sink; an in-memory ``DirectedGraph`` is provided.
- Position-only runs that skip graph construction entirely.
- JSON-based run configuration and a random config generator.

Run:
  python turtle_graph.py graph "D F(10) +(90) F(10)"
  python turtle_graph.py position --config example/koch.json
  python turtle_graph.py validate example/koch.json
  python turtle_graph.py --help
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import os
import random
import sys
from collections.abc import Generator
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol, cast

log = logging.getLogger(__name__)

Point = tuple[float, float]

FULL_CIRCLE = 360.0
ZERO = 0.0


# -------------------------
# Errors / Validation
# -------------------------


class ConfigError(ValueError):
    pass


class TurtleError(ValueError):
    """Raised when a command sequence cannot be interpreted."""


class MissingParameterError(TurtleError):
    def __init__(self, kind: CommandKind, name: str) -> None:
        super().__init__(
            f"command '{kind.value}' ({kind.name}) is missing parameter '{name}'"
        )
        self.kind = kind
        self.name = name


class StackUnderflowError(TurtleError):
    pass


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    return float(x)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_bool(x: Any, path: str) -> bool:
    _require(isinstance(x, bool), f"{path} must be a boolean")
    return cast(bool, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


# -------------------------
# Geometry
# -------------------------


def to_radians(degrees: float) -> float:
    return math.radians(degrees)


def to_degrees(radians: float) -> float:
    return math.degrees(radians)


def normalize_heading(degrees: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    h = degrees % FULL_CIRCLE
    # Tiny negative inputs round up to exactly 360.0 under float modulo.
    if h >= FULL_CIRCLE:
        h -= FULL_CIRCLE
    return h


@dataclass
class Point2D:
    x: float = ZERO
    y: float = ZERO

    def set(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def set_from(self, other: Point2D) -> None:
        self.set(other.x, other.y)

    def copy(self) -> Point2D:
        return Point2D(self.x, self.y)

    def distance(self, other: Point2D) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> Point:
        return (self.x, self.y)


# -------------------------
# Command model
# -------------------------


class CommandKind(str, Enum):
    FORWARD = "F"
    FORWARD_NO_DRAW = "f"
    BACKWARD = "B"
    BACKWARD_NO_DRAW = "b"
    TURN_LEFT = "-"
    TURN_RIGHT = "+"
    SET_POSITION = "S"
    SET_HEADING = "H"
    PEN_UP = "U"
    PEN_DOWN = "D"
    STAMP_POINT = "@"
    PUSH_STATE = "["
    POP_STATE = "]"
    # Never matched by the scanner; stands for "no command here".
    INVALID = "X"


TRIGGERS: MappingProxyType[str, CommandKind] = MappingProxyType(
    {k.value: k for k in CommandKind if k is not CommandKind.INVALID}
)

PARAM_OPEN = "("
PARAM_CLOSE = ")"
PARAM_SEPARATOR = ","


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    parameters: tuple[float, ...] | None = None

    def param(self, index: int, name: str) -> float:
        if self.parameters is None or index >= len(self.parameters):
            raise MissingParameterError(self.kind, name)
        return self.parameters[index]

    @property
    def distance(self) -> float:
        return self.param(0, "distance")

    @property
    def angle(self) -> float:
        return self.param(0, "angle")

    @property
    def target(self) -> Point2D:
        return Point2D(self.param(0, "x"), self.param(1, "y"))

    def __str__(self) -> str:
        if self.parameters is None:
            return self.kind.value
        return f"{self.kind.value}({','.join(repr(p) for p in self.parameters)})"


# -------------------------
# Tokenizer
# -------------------------


def find_next_command_index(text: str, start: int = 0) -> int | None:
    """Return the index of the next trigger character at or after ``start``.

    Characters inside a ``(...)`` span are skipped so that signed parameters
    such as ``F(-10)`` are not mistaken for turn commands. Only one level of
    brackets is tracked: the first ``)`` closes the span.

    A non-empty text without any further trigger yields ``len(text)``, which
    lets the caller strip the trailing remainder. ``None`` means the text is
    empty.
    """
    within_brackets = False
    for i in range(start, len(text)):
        ch = text[i]
        if not within_brackets and ch == PARAM_OPEN:
            within_brackets = True
        elif within_brackets and ch == PARAM_CLOSE:
            within_brackets = False
        if ch in TRIGGERS and not within_brackets:
            return i
    if text:
        return len(text)
    return None


def has_next_command(text: str) -> bool:
    return find_next_command_index(text) is not None


def command_kind_for(raw: str) -> CommandKind:
    if not raw:
        return CommandKind.INVALID
    return TRIGGERS.get(raw[0], CommandKind.INVALID)


def has_parameters(raw: str) -> bool:
    return PARAM_OPEN in raw and PARAM_CLOSE in raw


def _parse_number(piece: str) -> float:
    # float() also takes digit separators and non-finite spellings
    if "_" in piece:
        raise ValueError(f"could not convert string to float: {piece!r}")
    value = float(piece)
    if not math.isfinite(value):
        raise ValueError(f"non-finite parameter: {piece!r}")
    return value


def parse_parameters(raw: str) -> tuple[float, ...] | None:
    """Parse the ``(a,b,...)`` list of a raw command token.

    Any piece that is not a finite number discards the whole list; the
    command itself still stands.
    """
    open_at = raw.find(PARAM_OPEN)
    close_at = raw.find(PARAM_CLOSE)
    if open_at < 0 or close_at < open_at:
        log.warning("discarding malformed parameter list in %r", raw)
        return None

    body = raw[open_at:close_at].replace(PARAM_OPEN, "")
    try:
        return tuple(_parse_number(piece) for piece in body.split(PARAM_SEPARATOR))
    except ValueError as e:
        log.warning("discarding malformed parameter list in %r: %s", raw, e)
        return None


def _command_at(text: str, start: int) -> tuple[Command, int]:
    """Read the command starting at or after ``start``.

    Returns the command and the index just past its raw token.
    """
    first = find_next_command_index(text, start)
    if first is None:
        return Command(CommandKind.INVALID), len(text)

    nxt = find_next_command_index(text, first + 1)
    end = len(text) if nxt is None else nxt
    raw = text[first:end]

    kind = command_kind_for(raw)
    if has_parameters(raw):
        return Command(kind, parse_parameters(raw)), end
    return Command(kind), end


def take_next_command(text: str) -> tuple[Command, str]:
    """Split the first command off ``text``.

    Returns the command and the remaining text, which starts at the next
    trigger character (or is empty).
    """
    if not text:
        return Command(CommandKind.INVALID), text
    command, end = _command_at(text, 0)
    return command, text[end:]


def tokenize(text: str) -> Generator[Command, None, None]:
    """Yield commands from ``text`` left to right.

    Trailing characters that do not start a command are consumed as a
    single ``INVALID`` command.
    """
    cursor = 0
    while cursor < len(text):
        command, cursor = _command_at(text, cursor)
        yield command


# -------------------------
# Graph sink
# -------------------------


@dataclass(eq=False)
class Vertex:
    payload: Point2D

    def __repr__(self) -> str:
        return f"Vertex({self.payload.x}, {self.payload.y})"


class GraphSink(Protocol):
    def new_vertex(self, payload: Point2D) -> Any: ...

    def add_vertex(self, vertex: Any) -> None: ...

    def add_directed_edge(self, source: Any, target: Any) -> None: ...


@dataclass
class DirectedGraph:
    """In-memory directed graph of turtle vertices.

    Vertices and edges keep insertion order. Parallel edges are kept.
    """

    vertices: list[Vertex] = field(default_factory=list)
    edges: list[tuple[Vertex, Vertex]] = field(default_factory=list)
    _adjacency: dict[Vertex, list[Vertex]] = field(
        default_factory=dict, repr=False
    )

    def new_vertex(self, payload: Point2D) -> Vertex:
        return Vertex(payload)

    def add_vertex(self, vertex: Vertex) -> None:
        if vertex in self._adjacency:
            return
        self._adjacency[vertex] = []
        self.vertices.append(vertex)

    def add_directed_edge(self, source: Vertex, target: Vertex) -> None:
        if source not in self._adjacency or target not in self._adjacency:
            raise ValueError("both edge endpoints must be added to the graph first")
        self._adjacency[source].append(target)
        self.edges.append((source, target))

    def successors(self, vertex: Vertex) -> list[Vertex]:
        return list(self._adjacency.get(vertex, ()))

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._adjacency

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def bounds(self) -> tuple[float, float, float, float]:
        if not self.vertices:
            raise ValueError("bounds() of a graph with no vertices")
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for v in self.vertices:
            x, y = v.payload.x, v.payload.y
            if x < min_x:
                min_x = x
            if x > max_x:
                max_x = x
            if y < min_y:
                min_y = y
            if y > max_y:
                max_y = y
        return (min_x, min_y, max_x, max_y)


# -------------------------
# Turtle interpreter
# -------------------------


@dataclass(frozen=True)
class StartState:
    x: float = ZERO
    y: float = ZERO
    heading_deg: float = ZERO
    pen_down: bool = True


@dataclass
class TurtleState:
    position: Point2D
    heading: float
    pen_down: bool
    previous_vertex: Any = None
    current_vertex: Any = None


@dataclass(frozen=True)
class SavedState:
    position: Point2D
    heading: float
    previous_vertex: Any
    current_vertex: Any


class Turtle:
    """Turtle state machine that emits vertices and edges into a graph sink.

    One instance serves one run at a time; ``generate_graph`` and
    ``find_final_position`` reset the state before running. Without a graph
    the turtle only tracks its position and heading.
    """

    def __init__(
        self, start: StartState | None = None, graph: GraphSink | None = None
    ) -> None:
        self.start = start if start is not None else StartState()
        # sink used by generate_graph when no graph is passed to it
        self.default_graph = graph
        self.graph = graph
        self.drawing = graph is not None
        self._stack: list[SavedState] = []
        self.state = self._initial_state()

    def _initial_state(self) -> TurtleState:
        return TurtleState(
            position=Point2D(self.start.x, self.start.y),
            heading=normalize_heading(self.start.heading_deg),
            pen_down=self.start.pen_down,
        )

    def reset(self) -> None:
        self.state = self._initial_state()
        self._stack = []

    @property
    def position(self) -> Point2D:
        return self.state.position

    @property
    def heading(self) -> float:
        return self.state.heading

    @property
    def is_pen_down(self) -> bool:
        return self.state.pen_down

    @property
    def stack_depth(self) -> int:
        return len(self._stack)

    def generate_graph(self, text: str, graph: GraphSink | None = None) -> GraphSink:
        self.reset()
        if graph is not None:
            sink: GraphSink = graph
        elif self.default_graph is not None:
            sink = self.default_graph
        else:
            sink = DirectedGraph()
        self.graph = sink
        self.drawing = True
        self.run(text)
        return sink

    def find_final_position(self, text: str) -> Point2D:
        self.reset()
        self.drawing = False
        try:
            self.run(text)
        finally:
            self.drawing = self.graph is not None
        return self.state.position.copy()

    def run(self, text: str) -> None:
        count = 0
        for command in tokenize(text):
            self.execute(command)
            count += 1
        log.debug(
            "ran %d commands; position=%r heading=%s",
            count,
            self.state.position,
            self.state.heading,
        )

    def execute(self, command: Command) -> None:
        kind = command.kind
        st = self.state
        log.debug("execute %s", command)

        if kind is CommandKind.FORWARD:
            self._move(command.distance, draw=True)
        elif kind is CommandKind.BACKWARD:
            self._move(-command.distance, draw=True)
        elif kind is CommandKind.FORWARD_NO_DRAW:
            self._move(command.distance, draw=False)
        elif kind is CommandKind.BACKWARD_NO_DRAW:
            self._move(-command.distance, draw=False)
        elif kind is CommandKind.TURN_LEFT:
            st.heading = normalize_heading(st.heading - command.angle)
        elif kind is CommandKind.TURN_RIGHT:
            st.heading = normalize_heading(st.heading + command.angle)
        elif kind is CommandKind.SET_POSITION:
            st.position.set_from(command.target)
            if st.pen_down:
                self._stamp()
                self._connect()
        elif kind is CommandKind.SET_HEADING:
            st.heading = normalize_heading(command.angle)
        elif kind is CommandKind.PEN_UP:
            st.pen_down = False
        elif kind is CommandKind.PEN_DOWN:
            st.pen_down = True
        elif kind is CommandKind.STAMP_POINT:
            self._stamp()
        elif kind is CommandKind.PUSH_STATE:
            self._stack.append(
                SavedState(
                    position=st.position.copy(),
                    heading=st.heading,
                    previous_vertex=st.previous_vertex,
                    current_vertex=st.current_vertex,
                )
            )
        elif kind is CommandKind.POP_STATE:
            if not self._stack:
                raise StackUnderflowError(
                    "pop command ']' encountered with empty stack"
                )
            saved = self._stack.pop()
            st.position = saved.position.copy()
            st.heading = saved.heading
            st.previous_vertex = saved.previous_vertex
            st.current_vertex = saved.current_vertex
        elif kind is CommandKind.INVALID:
            pass
        else:
            raise AssertionError("unreachable")

    def _move(self, distance: float, *, draw: bool) -> None:
        st = self.state
        theta = to_radians(st.heading)
        st.position.x += distance * math.cos(theta)
        st.position.y += distance * math.sin(theta)

        if not draw:
            # Break the chain so the next stamp starts a fresh segment.
            st.previous_vertex = None
            st.current_vertex = None
            return

        if st.pen_down:
            self._stamp()
            self._connect()

    def _stamp(self) -> None:
        graph = self.graph
        if not self.drawing or graph is None:
            return
        st = self.state
        vertex = graph.new_vertex(st.position.copy())
        graph.add_vertex(vertex)
        st.previous_vertex = st.current_vertex
        st.current_vertex = vertex

    def _connect(self) -> None:
        graph = self.graph
        st = self.state
        if (
            self.drawing
            and graph is not None
            and st.pen_down
            and st.previous_vertex is not None
            and st.current_vertex is not None
        ):
            graph.add_directed_edge(st.previous_vertex, st.current_vertex)


def build_graph(
    text: str, start: StartState | None = None, graph: GraphSink | None = None
) -> GraphSink:
    """Interpret ``text`` and return the graph of drawn segments."""
    return Turtle(start).generate_graph(text, graph)


def final_position(text: str, start: StartState | None = None) -> Point2D:
    """Interpret ``text`` without building a graph and return where it ends."""
    return Turtle(start).find_final_position(text)


# -------------------------
# Config parsing
# -------------------------


@dataclass(frozen=True)
class RunConfig:
    name: str
    commands: str
    start: StartState
    precision: int


def parse_config(obj: dict[str, Any]) -> RunConfig:
    obj = _as_dict(obj, "root")

    name = _as_str(obj.get("name", "Turtle graph"), "name")
    commands = _as_str(obj.get("commands", ""), "commands")

    turtle = _as_dict(obj.get("turtle", {}), "turtle")
    start_obj = _as_dict(turtle.get("start", {}), "turtle.start")
    start = StartState(
        x=_as_float(start_obj.get("x", 0), "turtle.start.x"),
        y=_as_float(start_obj.get("y", 0), "turtle.start.y"),
        heading_deg=_as_float(start_obj.get("heading", 0), "turtle.start.heading"),
        pen_down=_as_bool(turtle.get("pen_down", True), "turtle.pen_down"),
    )

    output = _as_dict(obj.get("output", {}), "output")
    precision = _as_int(output.get("precision", 3), "output.precision")
    _require(0 <= precision <= 10, "output.precision must be between 0 and 10")

    return RunConfig(name=name, commands=commands, start=start, precision=precision)


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def _ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)


def dump_json(obj: dict[str, Any], path: str) -> None:
    _ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
        f.write("\n")


# -------------------------
# Random config generator
# -------------------------


def _random_command_string(
    rng: random.Random,
    length: int,
    *,
    step: float,
    angle: float,
    p_branch: float = 0.20,
) -> str:
    """Generate a random flat command string with balanced brackets.

    Produces commands from: F, f, +, -, [, ]
    """
    parts: list[str] = ["D"]
    depth = 0

    for _ in range(length):
        r = rng.random()
        if r < p_branch and depth < 3:
            parts.append("[")
            depth += 1
            continue
        if r < p_branch * 2 and depth > 0:
            parts.append("]")
            depth -= 1
            continue

        t = rng.random()
        if t < 0.50:
            parts.append(f"F({step:g})")
        elif t < 0.55:
            parts.append(f"f({step:g})")
        elif t < 0.775:
            parts.append(f"+({angle:g})")
        else:
            parts.append(f"-({angle:g})")

    parts.extend("]" * depth)

    # two consecutive draws guarantee at least one edge
    parts.append(f"F({step:g})")
    parts.append(f"F({step:g})")

    return " ".join(parts)


def generate_random_config(seed: int | None = None) -> dict[str, Any]:
    rng = random.Random(seed)

    angle = rng.choice([15, 20, 22.5, 25, 30, 36, 45, 60, 90])
    step = rng.choice([5, 8, 10, 12, 15])
    commands = _random_command_string(
        rng, rng.randint(20, 60), step=step, angle=angle
    )

    cfg = {
        "name": "Random turtle walk",
        "commands": commands,
        "turtle": {
            "start": {"x": 0, "y": 0, "heading": 90},
            "pen_down": True,
        },
        "output": {"precision": 3},
    }

    # Internal sanity check: generated config must always parse cleanly.
    parse_config(cfg)
    return cfg


# -------------------------
# Output formatting
# -------------------------


def _fmt(x: float, precision: int) -> str:
    # Normalise -0.0 so it never prints as "-0".
    if not x:
        x = 0.0
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s or "0"


def _fmt_point(p: Point2D, precision: int) -> str:
    return f"({_fmt(p.x, precision)}, {_fmt(p.y, precision)})"


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
COMMAND STRING SYNTAX

A command string is a flat sequence of single-character commands. A command
may be followed by a parameter list "(n1,n2,...)". No separator is needed
between commands; whitespace and unknown characters are skipped.

  F(d)    forward d, drawing if the pen is down
  f(d)    forward d without drawing; breaks the current segment chain
  B(d)    backward d, drawing if the pen is down
  b(d)    backward d without drawing
  -(a)    turn left: heading -= a degrees
  +(a)    turn right: heading += a degrees
  S(x,y)  jump to (x, y), drawing if the pen is down
  H(a)    set heading to a degrees (0 = +X, 90 = +Y)
  U       pen up
  D       pen down
  @       stamp a vertex at the current position
  [       push (position, heading, last two vertices)
  ]       pop the last pushed state

A parameter list that does not parse as numbers is dropped with a warning;
a command that then lacks a required parameter is an error.

INPUT JSON SYNTAX (--config, validate)

  {
    "name": "Square",
    "commands": "D F(10) +(90) F(10) +(90) F(10) +(90) F(10)",
    "turtle": {
      "start": {"x": 0, "y": 0, "heading": 0},
      "pen_down": true
    },
    "output": {"precision": 3}
  }

  All keys are optional. A COMMANDS argument on the command line overrides
  the "commands" key.

RANDOM INPUT GENERATION (random)

  python turtle_graph.py random out.json --seed 123
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="turtle_graph.py",
        description="Interpret turtle command strings into a directed graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Log every executed command."
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    pg = sub.add_parser(
        "graph",
        help="Build the graph for a command string and print a summary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pg.add_argument("commands", nargs="?", help="Turtle command string.")
    pg.add_argument("--config", help="Path to a JSON run config.")
    pg.add_argument("--edges", action="store_true", help="List every edge.")

    pp = sub.add_parser(
        "position",
        help="Print the final turtle position without building a graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pp.add_argument("commands", nargs="?", help="Turtle command string.")
    pp.add_argument("--config", help="Path to a JSON run config.")

    pt = sub.add_parser(
        "tokens",
        help="Print the tokenized command stream.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pt.add_argument("commands", help="Turtle command string.")

    pv = sub.add_parser(
        "validate",
        help="Validate a JSON config and print a brief summary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pv.add_argument("config", help="Path to the input JSON config.")

    pr = sub.add_parser(
        "random",
        help="Generate a random JSON config for experimentation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pr.add_argument("output", help="Where to write the generated JSON file.")
    pr.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable randomness."
    )

    return p


# -------------------------
# Commands
# -------------------------


def _resolve_run(commands: str | None, config_path: str | None) -> RunConfig:
    if config_path is not None:
        cfg = parse_config(load_json(config_path))
    else:
        cfg = parse_config({})
    if commands is not None:
        cfg = RunConfig(
            name=cfg.name, commands=commands, start=cfg.start, precision=cfg.precision
        )
    _require(bool(cfg.commands), "no commands given (pass COMMANDS or --config)")
    return cfg


def cmd_graph(commands: str | None, config_path: str | None, edges: bool) -> None:
    cfg = _resolve_run(commands, config_path)
    turtle = Turtle(cfg.start)
    graph = cast(DirectedGraph, turtle.generate_graph(cfg.commands, DirectedGraph()))
    prec = cfg.precision

    print(f"name: {cfg.name}")
    print(f"vertices: {graph.vertex_count}")
    print(f"edges: {graph.edge_count}")
    print(f"final position: {_fmt_point(turtle.position, prec)}")
    print(f"final heading: {_fmt(turtle.heading, prec)}")
    if graph.vertices:
        minx, miny, maxx, maxy = graph.bounds()
        print(
            f"bounds: {_fmt(minx, prec)} {_fmt(miny, prec)} "
            f"{_fmt(maxx, prec)} {_fmt(maxy, prec)}"
        )
    if edges:
        for a, b in graph.edges:
            print(f"{_fmt_point(a.payload, prec)} -> {_fmt_point(b.payload, prec)}")


def cmd_position(commands: str | None, config_path: str | None) -> None:
    cfg = _resolve_run(commands, config_path)
    p = final_position(cfg.commands, cfg.start)
    print(f"{_fmt(p.x, cfg.precision)} {_fmt(p.y, cfg.precision)}")


def cmd_tokens(commands: str) -> None:
    for command in tokenize(commands):
        if command.kind is CommandKind.INVALID:
            continue
        print(f"{command.kind.name:<17} {command}")


def cmd_validate(config_path: str) -> None:
    cfg = parse_config(load_json(config_path))
    _require(bool(cfg.commands), "commands must be non-empty")

    print(f"name: {cfg.name}")
    print(f"command string length: {len(cfg.commands)}")
    print(
        "turtle: "
        f"start=({cfg.start.x},{cfg.start.y},{cfg.start.heading_deg}deg) "
        f"pen_down={cfg.start.pen_down}"
    )

    tokens = [c for c in tokenize(cfg.commands) if c.kind is not CommandKind.INVALID]
    graph = cast(DirectedGraph, build_graph(cfg.commands, cfg.start, DirectedGraph()))
    print(f"commands: {len(tokens)}")
    print(f"vertices: {graph.vertex_count}")
    print(f"edges: {graph.edge_count}")
    if not graph.edges:
        raise ConfigError("Config produces no edges")


def cmd_random(output_path: str, seed: int | None) -> None:
    cfg = generate_random_config(seed)
    dump_json(cfg, output_path)


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.cmd == "graph":
            cmd_graph(args.commands, args.config, args.edges)
        elif args.cmd == "position":
            cmd_position(args.commands, args.config)
        elif args.cmd == "tokens":
            cmd_tokens(args.commands)
        elif args.cmd == "validate":
            cmd_validate(args.config)
        elif args.cmd == "random":
            cmd_random(args.output, args.seed)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except TurtleError as e:
        print(f"Command error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
