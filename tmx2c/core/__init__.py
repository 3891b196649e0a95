"""Core model, reading and batch-driving modules.

WHY: The core package holds the parts every output format shares:
the TileMap dataclasses, the TMX reader, the error types and the batch
driver.

HOW: model.py defines the data structures, reader.py builds them from
TMX documents, batch.py runs a list of files through reader and emitter
into one output stream, errors.py holds the failure types.

RULES:
- Model dataclasses are the contract — change with care
- The reader is format-agnostic: no emitter-specific logic here
"""
