"""
Parser for the line-oriented FBP notation.

Each statement is a chain of connections. Statements are separated by
newlines or commas, and ``#`` starts a comment:

    # Read a file and print it
    'file.txt' -> SOURCE Read(ReadFile)
    Read() OUT -> IN Split(SplitStr) OUT -> IN Display(Output)
    Read ERROR -> IN Display

A node is written ``Name`` or ``Name(Component)``. The component only needs
to be given once per node. Strings in single quotes are initial packets.

The parser returns a definition in the JSON interchange layout, ready for
``JsonSerializer.from_dict``. Port names are kept as written; the loader
lower-cases them.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from fbpgraph.core.errors import FbpSyntaxError

DEFAULT_GRAPH_NAME = "main"

# Names may contain hyphens, but not the "-" of an arrow.
_NAME = r"[\w.]+(?:-(?!>)[\w.]*)*"

_TOKEN_RE = re.compile(
    r"""
    (?P<comment>\#[^\n]*)
    | (?P<iip>'(?:[^'\\]|\\.)*')
    | (?P<arrow>->)
    | (?P<node>""" + _NAME + r""")\((?P<component>[^()\s]*)\)
    | (?P<word>""" + _NAME + r""")
    | (?P<sep>[,\n])
    | (?P<space>[ \t\r]+)
    | (?P<error>.)
    """,
    re.VERBOSE,
)

# (kind, value, component, line)
Token = Tuple[str, str, Optional[str], int]


def _tokenize(text: str) -> List[List[Token]]:
    """Split text into statements, each a list of tokens."""
    statements: List[List[Token]] = []
    current: List[Token] = []
    line = 1
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        if kind == "component":
            kind = "node"
        value = match.group(0)
        if kind == "error":
            raise FbpSyntaxError(f"unexpected character {value!r}", line)
        if kind == "sep":
            if current:
                statements.append(current)
                current = []
        elif kind == "iip":
            current.append(("iip", _unquote(value), None, line))
        elif kind == "node":
            current.append(("node", match.group("node"), match.group("component"), line))
        elif kind in ("arrow", "word"):
            current.append((kind, value, None, line))
        line += value.count("\n")
    if current:
        statements.append(current)
    return statements


def _unquote(literal: str) -> str:
    return re.sub(r"\\(.)", r"\1", literal[1:-1])


class _DefinitionBuilder:
    def __init__(self, name: str):
        self.name = name
        self.processes: Dict[str, Dict[str, Any]] = {}
        self.connections: List[Dict[str, Any]] = []

    def node(self, token: Token) -> str:
        kind, node_id, component, line = token
        if kind not in ("node", "word"):
            raise FbpSyntaxError(f"expected a node, got {node_id!r}", line)
        if component and node_id not in self.processes:
            self.processes[node_id] = {"component": component}
        return node_id

    def connect(self, source: Tuple[Optional[str], Any], target: Tuple[str, str]) -> None:
        # A source without a process is an initial packet.
        tgt = {"process": target[0], "port": target[1]}
        if source[0] is None:
            self.connections.append({"data": source[1], "tgt": tgt})
        else:
            self.connections.append({"src": {"process": source[0], "port": source[1]}, "tgt": tgt})

    def statement(self, tokens: List[Token]) -> None:
        segments: List[List[Token]] = [[]]
        for token in tokens:
            if token[0] == "arrow":
                segments.append([])
            else:
                segments[-1].append(token)

        line = tokens[0][3]
        if len(segments) < 2:
            raise FbpSyntaxError("statement has no connection ('->')", line)

        head = segments[0]
        if len(head) == 1 and head[0][0] == "iip":
            source = (None, head[0][1])
        elif len(head) == 2:
            source = (self.node(head[0]), _port(head[1]))
        else:
            raise FbpSyntaxError("a connection must start with 'data' or 'Node PORT'", line)

        for position, segment in enumerate(segments[1:], start=1):
            last = position == len(segments) - 1
            expected = 2 if last else 3
            if len(segment) != expected:
                shape = "PORT Node" if last else "PORT Node PORT"
                raise FbpSyntaxError(f"expected '{shape}' after '->'", line)
            target = (self.node(segment[1]), _port(segment[0]))
            self.connect(source, target)
            if not last:
                source = (target[0], _port(segment[2]))

    def build(self) -> Dict[str, Any]:
        return {
            "properties": {"name": self.name},
            "processes": self.processes,
            "connections": self.connections,
        }


def _port(token: Token) -> str:
    kind, value, _, line = token
    if kind != "word":
        raise FbpSyntaxError(f"expected a port name, got {value!r}", line)
    return value


def parse(text: str, name: str = DEFAULT_GRAPH_NAME) -> Dict[str, Any]:
    """
    Parse FBP text into a graph definition.

    Raises:
        FbpSyntaxError: If the text is not valid FBP notation.
    """
    builder = _DefinitionBuilder(name)
    for tokens in _tokenize(text):
        builder.statement(tokens)
    return builder.build()
