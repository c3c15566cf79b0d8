"""Definition registry and the closure driver that fills it.

Usage::

    from crdswagger.registry import ClosureDriver

    state = ClosureDriver(source, mapper).run(source.known_kinds())
    state.definitions  # DefinitionKey -> output schema
"""

from __future__ import annotations

from crdswagger.registry.driver import ClosureDriver
from crdswagger.registry.state import ClosureState

__all__ = [
    "ClosureDriver",
    "ClosureState",
]
