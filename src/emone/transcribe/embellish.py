"""Embellisher: aligned slots -> glyphs with resolved stroke names.

Drops empty slots, expands each hub consonant into its strokes, and names
each vowel attachment ``<vowel>-<direction>-<openness>``. Where a vowel on
a hub's east or south side is mirrored on the next hub's west or north
side, a single joined stroke ``<vowel>-<direction>-<openness>-<next
openness>`` replaces both, if the script has one.
"""

from collections.abc import Iterable

from emone.strokes import TABLE, StrokeTable
from emone.types import Glyph, Slot, slot_fields

INNER = "inner"
OUTER = "outer"

# Attachments named with the hub's dental openness, then its palatal one.
_LEFT_SIDES = ("west", "north")
# Each right side with the side of the next hub that can mirror it.
_RIGHT_SIDES = (("east", "west"), ("south", "north"))


def openness(features: tuple[str, ...]) -> tuple[str, str]:
    """Return (left, right) openness for a hub with these features.

    West and north use the left value, east and south the right.
    """
    left = OUTER if "dental" in features else INNER
    right = OUTER if "palatal" in features else INNER
    return left, right


def embellish(
    slots: Iterable[Slot | Glyph],
    table: StrokeTable = TABLE,
) -> list[Glyph]:
    """Resolve stroke names for a slot sequence, left to right.

    The input is not modified. Joining a vowel into the next hub removes
    that hub's mirrored attachment before the hub itself is visited.
    Glyphs that already carry strokes are passed through as they are, so
    embellishing an embellished sequence changes nothing.
    """
    kept = [slot for slot in slots if not slot.empty]
    working = [slot_fields(slot) for slot in kept]
    features = [table.features(slot["center"]) for slot in working]

    glyphs = []
    for i, current in enumerate(working):
        if isinstance(kept[i], Glyph) and kept[i].strokes:
            glyphs.append(kept[i])
            continue
        left, right = openness(features[i])
        if i + 1 < len(working):
            following = working[i + 1]
            next_left, _ = openness(features[i + 1])
        else:
            following = None
            next_left = INNER

        vowel_strokes = []
        for side in _LEFT_SIDES:
            vowel = current[side]
            if vowel:
                vowel_strokes.append(f"{vowel}-{side}-{left}")

        for side, mirror in _RIGHT_SIDES:
            vowel = current[side]
            if not vowel:
                continue
            name = f"{vowel}-{side}-{right}"
            joined = f"{name}-{next_left}"
            if following is not None and following[mirror] == vowel and table.has_vowel(joined):
                name = joined
                following[mirror] = None
            vowel_strokes.append(name)

        glyphs.append(Glyph(
            x=current["x"],
            y=current["y"],
            center=current["center"],
            north=current["north"],
            south=current["south"],
            east=current["east"],
            west=current["west"],
            errors=tuple(current["errors"]),
            strokes=features[i] + tuple(vowel_strokes),
            features=features[i],
        ))

    return glyphs
