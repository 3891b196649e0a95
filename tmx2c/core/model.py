"""Dataclasses mirroring every construct of a Tiled TMX document.

WHY: A TMX file is a tree of XML elements (map, tileset, layer,
objectgroup, imagelayer, ...). The emitter needs a typed, navigable
form of that tree that does not depend on XML parsing details, and new
output definitions should only ever need to read fields, never walk
XML.

HOW: One dataclass per TMX element. Parents own their children through
plain fields and lists, built with ``field(default_factory=...)`` so
every instance gets its own fresh children:

  TileMap     — root: tilesets, layers, object groups, image layers
  TileSet     — images, tile offset, terrain types, tiles
  Tile        — image, animation, nested object groups
  ObjectGroup — objects (with ellipse / polygon / polyline shapes)
  Layer       — the tile grid Data block
  ImageLayer  — a single Image

RULES:
- Every attribute is raw text (str); nothing is converted to int/float/bool
- Every field defaults to its empty value ("" / [] / empty child record)
- Absent elements are never an error; they simply stay empty
- Ownership is a strict tree: no instance is shared between parents
- Records carry no behavior beyond field access
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class Property:
    """One user-defined ``<property name type value>`` triple."""

    name: str = ""
    type: str = ""
    value: str = ""


@dataclass
class PropertyBag:
    """Ordered ``<properties>`` block attachable to most records.

    RULES:
    - Document order is preserved so output stays deterministic
    """

    properties: List[Property] = field(default_factory=list)


@dataclass
class TileOffset:
    x: str = ""
    y: str = ""


@dataclass
class Terrain:
    """A terrain type with its representative tile id."""

    name: str = ""
    tile: str = ""
    properties: PropertyBag = field(default_factory=PropertyBag)


@dataclass
class TerrainTypeList:
    terrains: List[Terrain] = field(default_factory=list)


@dataclass
class Frame:
    """One step of a tile animation."""

    tile_id: str = ""
    duration: str = ""


@dataclass
class Animation:
    frames: List[Frame] = field(default_factory=list)


@dataclass
class Data:
    """A ``<data>`` block: the layer grid payload or embedded image data.

    WHY: The tile grid is stored as opaque text (csv, base64, possibly
    compressed). Decoding it is not the converter's job, so the payload
    stays undecoded text.

    RULES:
    - encoding: opaque text ("", "csv", "base64", ...)
    - payload: inner text of the element plus any children serialized
      back to markup; entities are unescaped by the XML parser
    - tiles: per-tile records, only used for tile-level image variants
    """

    encoding: str = ""
    payload: str = ""
    tiles: List[Tile] = field(default_factory=list)


@dataclass
class Image:
    format: str = ""
    id: str = ""
    source: str = ""
    trans: str = ""
    width: str = ""
    height: str = ""
    data: Data = field(default_factory=Data)


@dataclass
class Ellipse:
    """Presence-only marker: an ``<ellipse/>`` element carries no data."""


@dataclass
class Polygon:
    points: str = ""


@dataclass
class Polyline:
    points: str = ""


@dataclass
class MapObject:
    """A single ``<object>`` inside an object group.

    RULES:
    - ellipses/polygons/polylines keep one entry per child element
    - points stay as the raw "x1,y1 x2,y2 ..." string
    """

    id: str = ""
    name: str = ""
    type: str = ""
    x: str = ""
    y: str = ""
    width: str = ""
    height: str = ""
    rotation: str = ""
    gid: str = ""
    visible: str = ""
    ellipses: List[Ellipse] = field(default_factory=list)
    polygons: List[Polygon] = field(default_factory=list)
    polylines: List[Polyline] = field(default_factory=list)
    properties: PropertyBag = field(default_factory=PropertyBag)


@dataclass
class ObjectGroup:
    name: str = ""
    color: str = ""
    x: str = ""
    y: str = ""
    width: str = ""
    height: str = ""
    opacity: str = ""
    visible: str = ""
    offset_x: str = ""
    offset_y: str = ""
    draw_order: str = ""
    objects: List[MapObject] = field(default_factory=list)
    properties: PropertyBag = field(default_factory=PropertyBag)


@dataclass
class Tile:
    """A tile definition inside a tileset.

    RULES:
    - terrain: comma-separated corner indices, kept as text ("0,0,,1")
    - object_groups: collision shapes attached to this tile
    """

    id: str = ""
    terrain: str = ""
    probability: str = ""
    properties: PropertyBag = field(default_factory=PropertyBag)
    image: Image = field(default_factory=Image)
    animation: Animation = field(default_factory=Animation)
    object_groups: List[ObjectGroup] = field(default_factory=list)


@dataclass
class TileSet:
    """A ``<tileset>``, either embedded or referencing an external .tsx.

    RULES:
    - source is the external reference as written; it is never followed
    """

    firstgid: str = ""
    source: str = ""
    name: str = ""
    tile_width: str = ""
    tile_height: str = ""
    spacing: str = ""
    margin: str = ""
    tile_count: str = ""
    columns: str = ""
    properties: PropertyBag = field(default_factory=PropertyBag)
    images: List[Image] = field(default_factory=list)
    tile_offset: TileOffset = field(default_factory=TileOffset)
    terrain_types: TerrainTypeList = field(default_factory=TerrainTypeList)
    tiles: List[Tile] = field(default_factory=list)


@dataclass
class Layer:
    name: str = ""
    width: str = ""
    height: str = ""
    visible: str = ""
    opacity: str = ""
    offset_x: str = ""
    offset_y: str = ""
    properties: PropertyBag = field(default_factory=PropertyBag)
    data: Data = field(default_factory=Data)


@dataclass
class ImageLayer:
    """Holds one static image, typically a background."""

    name: str = ""
    offset_x: str = ""
    offset_y: str = ""
    x: str = ""
    y: str = ""
    width: str = ""
    height: str = ""
    opacity: str = ""
    visible: str = ""
    image: Image = field(default_factory=Image)
    properties: PropertyBag = field(default_factory=PropertyBag)


@dataclass
class TileMap:
    """The root ``<map>`` record — one per input file.

    WHY: This is what the emitter receives. It holds the map-level
    metadata plus every owned collection, so any future definition can
    be expressed as a selector over this record.

    HOW: Built in a single pass by ``tmx2c.core.reader.parse_map``,
    consumed once by an emitter, then discarded.

    RULES:
    - All attributes are raw text, "" when absent
    - Collections keep document order
    - Never mutated after deserialization
    """

    version: str = ""
    orientation: str = ""
    render_order: str = ""
    width: str = ""
    height: str = ""
    tile_width: str = ""
    tile_height: str = ""
    stagger_axis: str = ""
    stagger_index: str = ""
    next_object_id: str = ""
    background_color: str = ""
    properties: PropertyBag = field(default_factory=PropertyBag)
    tilesets: List[TileSet] = field(default_factory=list)
    layers: List[Layer] = field(default_factory=list)
    object_groups: List[ObjectGroup] = field(default_factory=list)
    image_layers: List[ImageLayer] = field(default_factory=list)
