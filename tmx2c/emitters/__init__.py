"""Output emitter registry.

WHY: The driver and the CLI need a single lookup to find an emitter by
name. Adding a format means one new module and one line here.

HOW: EMITTERS maps string keys to emitter *classes* (not instances).
Callers instantiate as needed: ``emitter = EMITTERS["c_header"]()``.

RULES:
- Keys are snake_case identifiers
- Values are BaseEmitter subclasses
- Every emitter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tmx2c.emitters.c_header import CHeaderEmitter

if TYPE_CHECKING:
    from tmx2c.emitters.base import BaseEmitter

EMITTERS: dict[str, type[BaseEmitter]] = {
    "c_header": CHeaderEmitter,
}

DEFAULT_EMITTER = "c_header"
