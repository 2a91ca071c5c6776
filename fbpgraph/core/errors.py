"""Exceptions raised when loading or saving graphs."""

from typing import Optional


class GraphError(Exception):
    """Base class for fbpgraph errors."""
    pass


class MalformedDefinition(GraphError, ValueError):
    """Raised when a graph definition cannot be turned into a Graph."""
    pass


class FbpSyntaxError(MalformedDefinition):
    """Raised by the FBP parser on text it cannot read."""
    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class IOFailure(GraphError, OSError):
    """Raised when a graph file cannot be read or written."""
    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
