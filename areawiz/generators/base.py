"""Generator boundary: what the confirm/commit gate expects from a map generator.

A generator is any callable `generate(options, preview) -> GenerationResult`.
Which one runs is configured as a "module:attribute" path.
"""

import importlib
from typing import Any, Callable, NamedTuple


class GenerationResult(NamedTuple):
    graphic: str  # One text row per map row, '.' = filled cell, '#' = empty.
    build: Callable[[bool], Any]  # build(True) performs the real write.
    rooms: Any  # Opaque to the gate.


class UnsupportedMapTypeError(ValueError):
    """Raised by a generator asked for a map type it does not implement."""


def load_generator(path: str) -> Callable[[dict, bool], GenerationResult]:
    """Import the generator named by a "package.module:attribute" path.

    Raises ValueError for a malformed path; ImportError/AttributeError
    propagate unchanged when the target does not exist.
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(
            f"Generator path must look like 'package.module:function', got {path!r}."
        )
    module = importlib.import_module(module_name)
    generator = getattr(module, attr)
    if not callable(generator):
        raise ValueError(f"Generator {path!r} is not callable.")
    return generator
