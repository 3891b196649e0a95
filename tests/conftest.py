"""Shared test fixtures for the tmx2c test suite.

WHY: Reader, emitter, driver and CLI tests all need the same sample TMX
documents. Centralizing them here keeps every module testing against
the same maps.

HOW: Module-level constants hold the documents as text. Fixtures hand
them out, and ``write_tmx`` writes a document into ``tmp_path`` and
returns its path.

RULES:
- FULL_MAP_TMX exercises every element the model knows about
- MINIMAL_MAP_TMX only sets version and orientation
- All file I/O happens under tmp_path
"""

import logging
from pathlib import Path
from typing import Callable

import pytest

FULL_MAP_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<map version="1.10" tiledversion="1.10.2" orientation="orthogonal" renderorder="right-down"
     width="4" height="3" tilewidth="16" tileheight="16" staggeraxis="y" staggerindex="odd"
     nextobjectid="7" backgroundcolor="#202040" infinite="0">
 <properties>
  <property name="music" value="level1.ogg"/>
  <property name="gravity" type="float" value="9.8"/>
 </properties>
 <tileset firstgid="1" name="terrain" tilewidth="16" tileheight="16" spacing="1" margin="2"
          tilecount="64" columns="8">
  <tileoffset x="0" y="4"/>
  <image source="terrain.png" trans="ff00ff" width="136" height="136"/>
  <terraintypes>
   <terrain name="grass" tile="3">
    <properties>
     <property name="walkable" type="bool" value="true"/>
    </properties>
   </terrain>
   <terrain name="water" tile="9"/>
  </terraintypes>
  <tile id="3" terrain="0,0,0,1" probability="0.5">
   <properties>
    <property name="solid" type="bool" value="false"/>
   </properties>
   <image source="grass.png" width="16" height="16"/>
   <animation>
    <frame tileid="3" duration="100"/>
    <frame tileid="4" duration="150"/>
   </animation>
   <objectgroup draworder="index">
    <object id="1" x="0" y="8" width="16" height="8"/>
   </objectgroup>
  </tile>
 </tileset>
 <tileset firstgid="65" source="objects.tsx"/>
 <layer name="Ground" width="4" height="3" visible="1" opacity="0.75" offsetx="2" offsety="-3">
  <properties>
   <property name="z" type="int" value="0"/>
  </properties>
  <data encoding="csv">
1,2,3,4,
5,6,7,8,
9,10,11,12
</data>
 </layer>
 <layer name="Legacy" width="2" height="1">
  <data><tile gid="1"/><tile gid="2"/></data>
 </layer>
 <objectgroup name="Actors" color="#ff0000" opacity="0.5" visible="0" offsetx="1" offsety="2"
              draworder="topdown">
  <properties>
   <property name="spawn" value="yes"/>
  </properties>
  <object id="2" name="player" type="Player" x="32" y="48" width="16" height="16" rotation="90"
          visible="1">
   <properties>
    <property name="hp" type="int" value="3"/>
   </properties>
  </object>
  <object id="3" name="pond" x="10" y="10" width="20" height="20">
   <ellipse/>
  </object>
  <object id="4" name="fence" x="0" y="0">
   <polygon points="0,0 16,0 16,16"/>
  </object>
  <object id="5" name="path" x="0" y="0">
   <polyline points="0,0 8,8 16,0"/>
  </object>
  <object id="6" gid="5" x="64" y="64"/>
 </objectgroup>
 <imagelayer name="Sky" offsetx="5" offsety="6" x="1" y="2" width="320" height="200" opacity="0.9"
             visible="1">
  <image format="png" source="sky.png" width="320" height="200">
   <data encoding="base64">iVBORw0KGgo=</data>
  </image>
  <properties>
   <property name="parallax" value="0.5"/>
  </properties>
 </imagelayer>
 <group name="unknown-to-tmx2c"/>
</map>
"""

MINIMAL_MAP_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<map version="{version}" orientation="{orientation}"/>
"""

NO_VERSION_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<map orientation="isometric" width="10" height="10"/>
"""

MALFORMED_TMX = """<?xml version="1.0" encoding="UTF-8"?>
<map version="1.0" orientation="orthogonal">
 <layer name="broken">
</map>
"""

UNKNOWN_ENCODING_TMX = """<?xml version="1.0" encoding="x-no-such-codec"?>
<map version="1.0" orientation="orthogonal"/>
"""


def minimal_map(version: str = "1.0", orientation: str = "orthogonal") -> str:
    """A map with only version and orientation set."""
    return MINIMAL_MAP_TMX.format(version=version, orientation=orientation)


def nested_tiles_map(depth: int) -> str:
    """A well-formed map whose tileset nests tile/image/data depth times."""
    return (
        '<?xml version="1.0"?><map version="1.0"><tileset>'
        + "<tile><image><data>" * depth
        + "</data></image></tile>" * depth
        + "</tileset></map>"
    )


@pytest.fixture
def full_map_tmx() -> str:
    return FULL_MAP_TMX


@pytest.fixture
def write_tmx(tmp_path) -> Callable[[str, str], Path]:
    """Factory writing a TMX document into tmp_path.

    Usage: ``path = write_tmx("level1.tmx", content)``
    """

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging() once a test finishes.

    A StreamHandler keeps the sys.stderr it was created with, and pytest
    swaps that stream per test.
    """
    yield
    logger = logging.getLogger("tmx2c")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
