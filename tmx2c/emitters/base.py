"""Abstract base emitter.

WHY: Every output format consumes the same TileMap model but produces
different text. A shared interface lets the driver and the CLI run any
emitter without knowing which one it is.

HOW: BaseEmitter is an ABC with two requirements — a ``name`` property
and an ``emit()`` method returning the bytes of one definition block.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``emit()``
- ``emit()`` is pure: same TileMap + identifier, same bytes
- ``emit()`` never raises for missing data; absent values emit as empty
- The caller is responsible for writing the bytes somewhere
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tmx2c.core.model import TileMap


class BaseEmitter(ABC):
    """Abstract base for all output emitters.

    To add a new output format:
    1. Create a new file in emitters/
    2. Subclass BaseEmitter
    3. Implement emit() and name
    4. Register in EMITTERS dict in emitters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'C header defines'."""

    @abstractmethod
    def emit(self, tile_map: TileMap, identifier: str) -> bytes:
        """Convert one TileMap into one block of output.

        Args:
            tile_map: The deserialized map.
            identifier: Prefix derived from the source file name,
                        e.g. ``"level1_tmx"``.

        Returns:
            The encoded block, ready to append to the output stream.
        """
