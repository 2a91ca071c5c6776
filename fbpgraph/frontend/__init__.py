"""
fbpgraph frontend modules for building graphs from definitions.

- load_json: Build a graph from a parsed JSON definition
- load_fbp: Build a graph from FBP text
- load_file: Load a .fbp or .json file
"""

from .loader import load_json, load_fbp, load_file, FBP_EXTENSION
from .fbp import parse as parse_fbp

__all__ = [
    "load_json",
    "load_fbp",
    "load_file",
    "parse_fbp",
    "FBP_EXTENSION",
]
