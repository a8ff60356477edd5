"""Stroke table: consonant features and the vowel-glyph vocabulary.

Every name here is the label of a stroke template in the script's
drawing. The table is loaded once, from the packaged ``strokes.yaml`` or
from the file named by ``EMONE_STROKE_TABLE``, and is read-only after.
"""

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

import yaml

from emone.types import GlyphModel

logger = logging.getLogger(__name__)

DEFAULT_TABLE_PATH = Path(__file__).with_name("strokes.yaml")


def table_path() -> Path:
    """Stroke table location: $EMONE_STROKE_TABLE, else the packaged table."""
    return Path(os.environ.get("EMONE_STROKE_TABLE", DEFAULT_TABLE_PATH)).expanduser()


@dataclass(frozen=True)
class StrokeTable:
    """Read-only lookup tables for stroke names."""
    consonants: Mapping[str, tuple[str, ...]]
    vowels: frozenset[str]
    structural: frozenset[str]

    def features(self, consonant: str | None) -> tuple[str, ...]:
        """Return the strokes composing a consonant hub (empty for no hub)."""
        if consonant is None:
            return ()
        return self.consonants.get(consonant, ())

    def has_vowel(self, name: str) -> bool:
        return name in self.vowels

    @property
    def names(self) -> frozenset[str]:
        """Every stroke name that has a template."""
        features = {f for strokes in self.consonants.values() for f in strokes}
        return frozenset(features) | self.vowels


def parse_table(data: object, source: str = "<data>") -> StrokeTable:
    """Validate raw table data (as loaded from YAML) and build a StrokeTable.

    Raises:
        ValueError: if a section is missing or has the wrong shape.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Stroke table {source} must be a mapping")

    consonants = data.get("consonants")
    if not isinstance(consonants, dict) or not consonants:
        raise ValueError(f"Stroke table {source} has no 'consonants' mapping")
    parsed: dict[str, tuple[str, ...]] = {}
    for symbol, strokes in consonants.items():
        if not isinstance(strokes, list) or not all(isinstance(s, str) for s in strokes):
            raise ValueError(
                f"Stroke table {source}: consonant {symbol!r} must list stroke names"
            )
        parsed[str(symbol)] = tuple(strokes)

    vowels = data.get("vowels")
    if not isinstance(vowels, list) or not vowels:
        raise ValueError(f"Stroke table {source} has no 'vowels' list")

    structural = data.get("structural") or []
    if not isinstance(structural, list):
        raise ValueError(f"Stroke table {source}: 'structural' must be a list")

    return StrokeTable(
        consonants=MappingProxyType(parsed),
        vowels=frozenset(str(v) for v in vowels),
        structural=frozenset(str(s) for s in structural),
    )


def load_table(path: Path) -> StrokeTable:
    """Load a stroke table from a YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    table = parse_table(data, source=str(path))
    logger.debug(
        f"Loaded stroke table {path}: {len(table.consonants)} consonants, "
        f"{len(table.vowels)} vowel strokes"
    )
    return table


TABLE = load_table(table_path())


def unresolved_strokes(
    model: GlyphModel,
    available: Iterable[str] | None = None,
    table: StrokeTable = TABLE,
) -> list[str]:
    """Return stroke names in a model that have no template.

    Structural names (``north``, ``center``, ...) are never reported.
    Each missing name is logged once as a warning, in first-seen order.

    Args:
        model: A transcribed glyph model.
        available: Names of the templates on hand. Defaults to every
            name in the stroke table.
        table: Table supplying the structural allowlist.
    """
    known = table.names if available is None else set(available)
    missing: list[str] = []
    for glyph in model.glyphs:
        for stroke in glyph.strokes:
            if stroke in known or stroke in table.structural or stroke in missing:
                continue
            logger.warning(f"Missing stroke: {stroke} (glyph at {glyph.x},{glyph.y})")
            missing.append(stroke)
    return missing
