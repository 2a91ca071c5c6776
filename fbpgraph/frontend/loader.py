"""
Loading graphs from JSON definitions, FBP text, and files.

Every loader builds the graph completely before handing it over. On
failure an exception is raised and the callback is never invoked:

    def ready(graph):
        print(graph.to_yuml())

    load_file("hello.fbp", ready)

The callback is optional; the loaded graph is also returned.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from fbpgraph.core.errors import IOFailure, MalformedDefinition
from fbpgraph.core.ir import Graph
from fbpgraph.core.serialization import JsonSerializer
from fbpgraph.frontend.fbp import parse as parse_fbp

logger = logging.getLogger(__name__)

FBP_EXTENSION = ".fbp"

GraphCallback = Callable[[Graph], Any]
Parser = Callable[[str], Dict[str, Any]]


def load_json(definition: Mapping[str, Any], callback: Optional[GraphCallback] = None) -> Graph:
    """
    Build a Graph from a parsed JSON definition.

    Raises:
        MalformedDefinition: If the definition is missing required fields.
    """
    graph = JsonSerializer.from_dict(definition)
    logger.info(
        "Loaded graph '%s' (%d nodes, %d edges, %d initializers)",
        graph.name, len(graph.nodes), len(graph.edges), len(graph.initializers),
    )
    if callback is not None:
        callback(graph)
    return graph


def load_fbp(text: str, callback: Optional[GraphCallback] = None, parser: Optional[Parser] = None) -> Graph:
    """
    Build a Graph from FBP text.

    Args:
        text: The FBP source.
        callback: Called with the graph once it is complete.
        parser: Turns the text into a JSON-shaped definition. Defaults to
            the bundled parser in ``fbpgraph.frontend.fbp``.
    """
    parse = parser or parse_fbp
    try:
        definition = parse(text)
    except MalformedDefinition:
        raise
    except Exception as e:
        raise MalformedDefinition(f"FBP parser failed: {e}") from e
    return load_json(definition, callback)


def load_file(path, callback: Optional[GraphCallback] = None, parser: Optional[Parser] = None) -> Graph:
    """
    Load a graph from a ``.fbp`` or JSON file.

    Raises:
        IOFailure: If the file cannot be read.
        MalformedDefinition: If its contents are not a valid graph.
    """
    path = Path(os.fspath(path))
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Reading %s failed: %s", path, e)
        raise IOFailure(f"Could not read {path}: {e}", path=path) from e

    if path.suffix == FBP_EXTENSION:
        return load_fbp(text, callback, parser)

    try:
        definition = json.loads(text)
    except ValueError as e:
        raise MalformedDefinition(f"{path} is not valid JSON: {e}") from e
    return load_json(definition, callback)
