"""Core data types for emone."""

from dataclasses import dataclass, field, fields


# --- Phonemes ---


@dataclass(frozen=True)
class Consonant:
    """A consonant phoneme, e.g. "m", "kh", "sh"."""
    symbol: str

    kind = "consonant"

    def to_dict(self) -> dict:
        return {"type": self.kind, "consonant": self.symbol}


@dataclass(frozen=True)
class Vowel:
    """A single vowel phoneme: one of e, i, y, a, o, u (or a glide w)."""
    symbol: str

    kind = "vowel"

    def to_dict(self) -> dict:
        return {"type": self.kind, "vowel": self.symbol}


@dataclass(frozen=True)
class Diphthong:
    """Two adjacent vowels fused into one event."""
    first: str
    second: str

    kind = "diphthong"

    def to_dict(self) -> dict:
        return {"type": self.kind, "first": self.first, "second": self.second}


@dataclass(frozen=True)
class Space:
    kind = "space"

    def to_dict(self) -> dict:
        return {"type": self.kind}


@dataclass(frozen=True)
class Newline:
    kind = "newline"

    def to_dict(self) -> dict:
        return {"type": self.kind}


@dataclass(frozen=True)
class Error:
    """An unparseable character. Carried downstream, never fatal."""
    message: str

    kind = "error"

    def to_dict(self) -> dict:
        return {"type": self.kind, "error": self.message}


Phoneme = Consonant | Vowel | Diphthong | Space | Newline | Error


# --- Grid slots and glyphs ---

DIRECTIONS = ("west", "north", "east", "south")

# Attributes a connector fragment may carry into a slot.
_FRAGMENT_KEYS = {"center", *DIRECTIONS}


@dataclass
class Slot:
    """A cell on the zig-zag grid, filled in while the aligner holds it open."""
    x: int
    y: int
    empty: bool = True
    center: str | None = None   # consonant hub
    north: str | None = None    # vowel attachments
    south: str | None = None
    east: str | None = None
    west: str | None = None
    errors: list[str] = field(default_factory=list)

    def merge(self, fragment: dict) -> "Slot":
        """Write a connector fragment into this slot.

        An empty fragment leaves the slot untouched; any content marks
        the slot as no longer empty.
        """
        for key, value in fragment.items():
            if key not in _FRAGMENT_KEYS:
                raise KeyError(f"Unknown slot attribute in fragment: {key!r}")
            setattr(self, key, value)
        if fragment:
            self.empty = False
        return self

    def add_error(self, message: str) -> None:
        self.errors.append(message)


@dataclass(frozen=True)
class Glyph:
    """An embellished slot: grid position plus resolved stroke names."""
    x: int
    y: int
    center: str | None = None
    north: str | None = None
    south: str | None = None
    east: str | None = None
    west: str | None = None
    errors: tuple[str, ...] = ()
    strokes: tuple[str, ...] = ()
    features: tuple[str, ...] = ()

    # Glyphs only exist for slots that held something.
    empty = False

    def to_dict(self) -> dict:
        """Serialize for JSON output, omitting unpopulated slot fields."""
        data = {"x": self.x, "y": self.y}
        for name in ("center", *DIRECTIONS):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        data["strokes"] = list(self.strokes)
        data["errors"] = list(self.errors)
        return data


@dataclass(frozen=True)
class Size:
    """Bounding extent of a glyph model in grid units."""
    x: int = 1
    y: int = 1


@dataclass(frozen=True)
class GlyphModel:
    """Output of the transcription pipeline, handed to a renderer."""
    glyphs: tuple[Glyph, ...]
    size: Size

    def to_dict(self) -> dict:
        return {
            "glyphs": [g.to_dict() for g in self.glyphs],
            "size": {"x": self.size.x, "y": self.size.y},
        }


_SLOT_FIELDS = tuple(f.name for f in fields(Slot))


def slot_fields(value: Slot | Glyph) -> dict:
    """Return the slot attributes shared by Slot and Glyph as a plain dict."""
    return {name: getattr(value, name) for name in _SLOT_FIELDS}
