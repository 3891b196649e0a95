"""tmx2c — convert Tiled TMX maps into C preprocessor headers.

WHY: Games written in C want map metadata (format version, orientation,
sizes, ...) as compile-time constants. Tiled saves maps as XML. This
package turns a batch of .tmx files into one header of guarded
``#define`` blocks, one block per map.

HOW: Three-stage pipeline — read (XML → TileMap model), emit (TileMap →
definition block), drive (per-file state machine appending blocks to a
shared output). Each stage is independently testable.

RULES:
- The TileMap model is the stable contract between reading and emitting
- Attribute values are raw text end to end; nothing is reinterpreted
- Adding an output format = one new emitter module, no core changes
"""

__version__ = "1.0.0"
