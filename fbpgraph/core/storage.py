"""Writing graphs to disk in the JSON interchange format."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Optional

from fbpgraph.core.errors import IOFailure
from fbpgraph.core.ir import Graph
from fbpgraph.core.serialization import JsonSerializer

logger = logging.getLogger(__name__)

JSON_EXTENSION = ".json"


def save_graph(graph: Graph, path, callback: Optional[Callable[[Any], None]] = None) -> Path:
    """
    Serialize ``graph`` and write it to ``<path>.json``.

    The text goes to a temporary file next to the target which is then
    renamed over it, so the target is either fully written or untouched.
    ``callback(path)`` runs only after the rename succeeded.

    Returns:
        The path of the written file.

    Raises:
        IOFailure: If the file could not be written.
    """
    target = Path(f"{os.fspath(path)}{JSON_EXTENSION}")
    content = JsonSerializer.to_json(graph)

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, target)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        logger.debug("Saving graph '%s' to %s failed: %s", graph.name, target, e)
        raise IOFailure(f"Could not write {target}: {e}", path=target) from e

    logger.info("Saved graph '%s' to %s", graph.name, target)
    if callback is not None:
        callback(path)
    return target
