"""C preprocessor header emitter.

WHY: Game code written in C wants map metadata available at compile
time. Each map becomes a block of ``#define`` constants, prefixed with
an identifier derived from the file name so several maps can share one
header without colliding.

HOW: A Definition pairs an output name with a selector that reads one
raw text value from the TileMap. The emitter walks an ordered table of
definitions and writes one line per entry, inside a guard:

    #ifdef level1_tmx_MAP
    #define level1_tmx_Version 1.10
    #define level1_tmx_Orientation orthogonal
    #endif

RULES:
- Guard token is "<identifier>_MAP"; the block always ends with #endif,
  even when the table is empty
- One "#define <identifier>_<Name> <value>" line per table entry
- Values are written verbatim; an absent value leaves an empty token
  after the name (the separating space is kept)
- Every line ends with "\\n" so consecutive blocks concatenate cleanly
- MAP_DEFINITIONS is the default coverage; growing it is additive
- Output is UTF-8 and deterministic
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from tmx2c.core.model import TileMap
from tmx2c.emitters.base import BaseEmitter


@dataclass(frozen=True)
class Definition:
    """One table entry: output name plus the selector producing its value."""

    name: str
    selector: Callable[[TileMap], str]


MAP_DEFINITIONS: List[Definition] = [
    Definition("Version", lambda m: m.version),
    Definition("Orientation", lambda m: m.orientation),
]
"""Default coverage: the map format version and orientation."""

EXTENDED_MAP_DEFINITIONS: List[Definition] = MAP_DEFINITIONS + [
    Definition("RenderOrder", lambda m: m.render_order),
    Definition("Width", lambda m: m.width),
    Definition("Height", lambda m: m.height),
    Definition("TileWidth", lambda m: m.tile_width),
    Definition("TileHeight", lambda m: m.tile_height),
    Definition("StaggerAxis", lambda m: m.stagger_axis),
    Definition("StaggerIndex", lambda m: m.stagger_index),
    Definition("NextObjectID", lambda m: m.next_object_id),
    Definition("BackgroundColor", lambda m: m.background_color),
    Definition("TileSetCount", lambda m: str(len(m.tilesets))),
    Definition("LayerCount", lambda m: str(len(m.layers))),
    Definition("ObjectGroupCount", lambda m: str(len(m.object_groups))),
    Definition("ImageLayerCount", lambda m: str(len(m.image_layers))),
]
"""Every map-level attribute plus the size of each owned collection."""


class CHeaderEmitter(BaseEmitter):
    """Emit one guarded block of ``#define`` lines per map.

    Args:
        definitions: Ordered definition table; defaults to MAP_DEFINITIONS.
    """

    def __init__(self, definitions: Optional[Sequence[Definition]] = None) -> None:
        self.definitions: List[Definition] = list(
            MAP_DEFINITIONS if definitions is None else definitions
        )

    @property
    def name(self) -> str:
        return "C header defines"

    def emit(self, tile_map: TileMap, identifier: str) -> bytes:
        lines = ["#ifdef {}_MAP".format(identifier)]
        for definition in self.definitions:
            lines.append(
                "#define {}_{} {}".format(
                    identifier, definition.name, definition.selector(tile_map)
                )
            )
        lines.append("#endif")
        return ("\n".join(lines) + "\n").encode("utf-8")
