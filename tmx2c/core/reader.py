"""Deserialize TMX documents into the TileMap model.

WHY: The emitter works on plain dataclasses, never on XML. This module
is the only place that knows how TMX elements and attributes map onto
the model, and it is deliberately forgiving: real-world maps omit most
optional elements, and newer Tiled versions add elements we do not
know about yet.

HOW: load_map() reads the whole file into memory inside a ``with``
block, then parse_map() builds an ElementTree and walks it with one
small ``_parse_*`` function per element type. Attributes are copied as
raw text via ``elem.get(name, "")``; child collections are collected
with ``findall`` in document order.

RULES:
- Unknown elements and attributes are ignored (forward compatibility)
- Missing elements leave the zero value of the model field
- I/O errors become ReadFailure, the file handle is always closed
- Non well-formed XML becomes MalformedInput, unless lenient=True, in
  which case a warning is logged and an empty TileMap is returned
- A well-formed document whose root is not <map> yields an empty TileMap
- The grid payload of <data> is kept as parsed text, never decoded
- An unknown declared encoding or nesting too deep to walk is
  malformed input too
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Tuple, Union

from tmx2c.core.errors import MalformedInput, ReadFailure
from tmx2c.core.model import (
    Animation,
    Data,
    Ellipse,
    Frame,
    Image,
    ImageLayer,
    Layer,
    MapObject,
    ObjectGroup,
    Polygon,
    Polyline,
    Property,
    PropertyBag,
    Terrain,
    TerrainTypeList,
    Tile,
    TileMap,
    TileOffset,
    TileSet,
)

logger = logging.getLogger(__name__)


def load_map(path: Union[str, Path], *, lenient: bool = False) -> TileMap:
    """Read a TMX file from disk and deserialize it.

    WHY: Map files are small, so the whole document is read in one go;
    this keeps the parse step independent from file handling.

    HOW: Opens the file in binary mode (the XML declaration decides the
    text encoding), reads everything, and hands the bytes to parse_map().

    RULES:
    - Any OSError while opening or reading raises ReadFailure
    - The handle is released on every exit path
    - Parsing rules are those of parse_map()

    Args:
        path: Path to the .tmx file, normally already absolute.
        lenient: Return an empty TileMap instead of raising MalformedInput.

    Returns:
        The populated TileMap.

    Raises:
        ReadFailure: If the file cannot be opened or read.
        MalformedInput: If the content is not well-formed (and not lenient).
    """
    source = Path(path)
    try:
        with open(source, "rb") as fh:
            content = fh.read()
    except OSError as e:
        raise ReadFailure(source, e) from e

    logger.debug("Read %d bytes from %s", len(content), source)
    return parse_map(content, source=str(source), lenient=lenient)


def parse_map(
    content: Union[bytes, str],
    *,
    source: str = "<memory>",
    lenient: bool = False,
) -> TileMap:
    """Deserialize an in-memory TMX document.

    RULES:
    - Parser errors, an unknown declared encoding and nesting too deep
      to walk all count as malformed input

    Args:
        content: The full document as bytes or text.
        source: Name used in diagnostics.
        lenient: Return an empty TileMap instead of raising MalformedInput.

    Returns:
        The populated TileMap.

    Raises:
        MalformedInput: If the content is not well-formed XML and
            lenient is False.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        return _reject(source, str(e), getattr(e, "position", None), lenient, e)
    except LookupError as e:
        # encoding declared in the XML header is unknown to the parser
        return _reject(source, str(e), None, lenient, e)

    if root.tag != "map":
        logger.warning(
            "Root element of %s is <%s>, expected <map>; emitting empty map",
            source,
            root.tag,
        )
        return TileMap()

    try:
        return _parse_tile_map(root)
    except RecursionError as e:
        return _reject(source, "elements nested too deeply", None, lenient, e)


def _reject(
    source: str,
    reason: str,
    position: Optional[Tuple[int, int]],
    lenient: bool,
    cause: Exception,
) -> TileMap:
    """Raise MalformedInput, or log and return an empty map when lenient."""
    if lenient:
        logger.warning(
            "Ignoring malformed document %s (%s); emitting empty map", source, reason
        )
        return TileMap()
    raise MalformedInput(source, reason, position) from cause


# ---------------------------------------------------------------------------
# Element mappers
# ---------------------------------------------------------------------------


def _attr(elem: ET.Element, name: str) -> str:
    return elem.get(name, "")


def _parse_tile_map(elem: ET.Element) -> TileMap:
    return TileMap(
        version=_attr(elem, "version"),
        orientation=_attr(elem, "orientation"),
        render_order=_attr(elem, "renderorder"),
        width=_attr(elem, "width"),
        height=_attr(elem, "height"),
        tile_width=_attr(elem, "tilewidth"),
        tile_height=_attr(elem, "tileheight"),
        stagger_axis=_attr(elem, "staggeraxis"),
        stagger_index=_attr(elem, "staggerindex"),
        next_object_id=_attr(elem, "nextobjectid"),
        background_color=_attr(elem, "backgroundcolor"),
        properties=_parse_properties(elem.find("properties")),
        tilesets=[_parse_tileset(e) for e in elem.findall("tileset")],
        layers=[_parse_layer(e) for e in elem.findall("layer")],
        object_groups=[_parse_object_group(e) for e in elem.findall("objectgroup")],
        image_layers=[_parse_image_layer(e) for e in elem.findall("imagelayer")],
    )


def _parse_properties(elem: Optional[ET.Element]) -> PropertyBag:
    """Map a ``<properties>`` element; None gives an empty bag."""
    if elem is None:
        return PropertyBag()
    return PropertyBag(
        properties=[
            Property(
                name=_attr(p, "name"),
                type=_attr(p, "type"),
                value=_attr(p, "value"),
            )
            for p in elem.findall("property")
        ]
    )


def _parse_tileset(elem: ET.Element) -> TileSet:
    offset = elem.find("tileoffset")
    terrain_types = elem.find("terraintypes")

    return TileSet(
        firstgid=_attr(elem, "firstgid"),
        source=_attr(elem, "source"),
        name=_attr(elem, "name"),
        tile_width=_attr(elem, "tilewidth"),
        tile_height=_attr(elem, "tileheight"),
        spacing=_attr(elem, "spacing"),
        margin=_attr(elem, "margin"),
        tile_count=_attr(elem, "tilecount"),
        columns=_attr(elem, "columns"),
        properties=_parse_properties(elem.find("properties")),
        images=[_parse_image(e) for e in elem.findall("image")],
        tile_offset=(
            TileOffset(x=_attr(offset, "x"), y=_attr(offset, "y"))
            if offset is not None
            else TileOffset()
        ),
        terrain_types=_parse_terrain_types(terrain_types),
        tiles=[_parse_tile(e) for e in elem.findall("tile")],
    )


def _parse_terrain_types(elem: Optional[ET.Element]) -> TerrainTypeList:
    if elem is None:
        return TerrainTypeList()
    return TerrainTypeList(
        terrains=[
            Terrain(
                name=_attr(t, "name"),
                tile=_attr(t, "tile"),
                properties=_parse_properties(t.find("properties")),
            )
            for t in elem.findall("terrain")
        ]
    )


def _parse_tile(elem: ET.Element) -> Tile:
    image = elem.find("image")
    animation = elem.find("animation")

    return Tile(
        id=_attr(elem, "id"),
        terrain=_attr(elem, "terrain"),
        probability=_attr(elem, "probability"),
        properties=_parse_properties(elem.find("properties")),
        image=_parse_image(image) if image is not None else Image(),
        animation=_parse_animation(animation),
        object_groups=[_parse_object_group(e) for e in elem.findall("objectgroup")],
    )


def _parse_animation(elem: Optional[ET.Element]) -> Animation:
    if elem is None:
        return Animation()
    return Animation(
        frames=[
            Frame(tile_id=_attr(f, "tileid"), duration=_attr(f, "duration"))
            for f in elem.findall("frame")
        ]
    )


def _parse_image(elem: ET.Element) -> Image:
    data = elem.find("data")
    return Image(
        format=_attr(elem, "format"),
        id=_attr(elem, "id"),
        source=_attr(elem, "source"),
        trans=_attr(elem, "trans"),
        width=_attr(elem, "width"),
        height=_attr(elem, "height"),
        data=_parse_data(data, with_tiles=True) if data is not None else Data(),
    )


def _parse_data(elem: ET.Element, *, with_tiles: bool = False) -> Data:
    """Map a ``<data>`` element, keeping its inner content undecoded.

    WHY: Layer payloads are csv, base64 (optionally compressed) or legacy
    per-tile XML. None of these is decoded here.

    HOW: The payload is the element's leading text followed by every
    child serialized back to markup (tails included).

    RULES:
    - The payload is parsed text, not the raw bytes of the file: entity
      references come back unescaped and child markup is re-serialized
      (attribute quoting and self-closing tags are normalized)
    - Per-tile records are only collected for image data (with_tiles)
    """
    payload = (elem.text or "") + "".join(
        ET.tostring(child, encoding="unicode") for child in elem
    )
    tiles: List[Tile] = []
    if with_tiles:
        tiles = [_parse_tile(e) for e in elem.findall("tile")]
    return Data(encoding=_attr(elem, "encoding"), payload=payload, tiles=tiles)


def _parse_layer(elem: ET.Element) -> Layer:
    data = elem.find("data")
    return Layer(
        name=_attr(elem, "name"),
        width=_attr(elem, "width"),
        height=_attr(elem, "height"),
        visible=_attr(elem, "visible"),
        opacity=_attr(elem, "opacity"),
        offset_x=_attr(elem, "offsetx"),
        offset_y=_attr(elem, "offsety"),
        properties=_parse_properties(elem.find("properties")),
        data=_parse_data(data) if data is not None else Data(),
    )


def _parse_object_group(elem: ET.Element) -> ObjectGroup:
    return ObjectGroup(
        name=_attr(elem, "name"),
        color=_attr(elem, "color"),
        x=_attr(elem, "x"),
        y=_attr(elem, "y"),
        width=_attr(elem, "width"),
        height=_attr(elem, "height"),
        opacity=_attr(elem, "opacity"),
        visible=_attr(elem, "visible"),
        offset_x=_attr(elem, "offsetx"),
        offset_y=_attr(elem, "offsety"),
        draw_order=_attr(elem, "draworder"),
        objects=[_parse_object(e) for e in elem.findall("object")],
        properties=_parse_properties(elem.find("properties")),
    )


def _parse_object(elem: ET.Element) -> MapObject:
    return MapObject(
        id=_attr(elem, "id"),
        name=_attr(elem, "name"),
        type=_attr(elem, "type"),
        x=_attr(elem, "x"),
        y=_attr(elem, "y"),
        width=_attr(elem, "width"),
        height=_attr(elem, "height"),
        rotation=_attr(elem, "rotation"),
        gid=_attr(elem, "gid"),
        visible=_attr(elem, "visible"),
        ellipses=[Ellipse() for _ in elem.findall("ellipse")],
        polygons=[Polygon(points=_attr(e, "points")) for e in elem.findall("polygon")],
        polylines=[Polyline(points=_attr(e, "points")) for e in elem.findall("polyline")],
        properties=_parse_properties(elem.find("properties")),
    )


def _parse_image_layer(elem: ET.Element) -> ImageLayer:
    image = elem.find("image")
    return ImageLayer(
        name=_attr(elem, "name"),
        offset_x=_attr(elem, "offsetx"),
        offset_y=_attr(elem, "offsety"),
        x=_attr(elem, "x"),
        y=_attr(elem, "y"),
        width=_attr(elem, "width"),
        height=_attr(elem, "height"),
        opacity=_attr(elem, "opacity"),
        visible=_attr(elem, "visible"),
        image=_parse_image(image) if image is not None else Image(),
        properties=_parse_properties(elem.find("properties")),
    )
