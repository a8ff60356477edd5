"""Glyph aligner: phonemes -> slots on the zig-zag grid.

Consonants sit on a zig-zag baseline, alternating between a high row and
a low row below it. From a high hub the baseline steps straight down to
the low hub; from a low hub it steps up and one column right. Vowels
attach to the side of a hub that faces the neighbouring hub: south and
north across a high-to-low step, east and west across a low-to-high step.
Words always begin on the high row.

Two vowels with no consonant between them get a placeholder hub ("m");
two consonants with no vowel between them get a placeholder vowel ("e")
on both facing sides.

While a slot is open, the aligner holds up to three connector fragments
that are written into a slot depending on what arrives next:

- ``vowel_connector``: into the open slot when a consonant follows.
- ``consonant_connector``: into the open slot when a vowel follows.
- ``next_connector``: into the next hub when a consonant follows.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from emone.types import Phoneme, Slot

logger = logging.getLogger(__name__)

PLACEHOLDER_CONSONANT = "m"
PLACEHOLDER_VOWEL = "e"

_PLACEHOLDER_HUB = {"center": PLACEHOLDER_CONSONANT}


class Phase(Enum):
    BEFORE_HIGH = "before high"   # start of a word
    HIGH = "high"                 # high hub free, vowel pending
    AFTER_HIGH = "after high"     # high hub holds a consonant
    LOW = "low"
    AFTER_LOW = "after low"


@dataclass(frozen=True)
class Row:
    """Geometry of one side of the zig-zag."""
    exit: str           # side of this row's hub facing the next hub
    entry: str          # side of the next hub facing back
    dx: int             # step to the next hub
    dy: int
    newline_step: int   # rows to skip when a line breaks here


HIGH_ROW = Row(exit="south", entry="north", dx=0, dy=1, newline_step=2)
LOW_ROW = Row(exit="east", entry="west", dx=1, dy=-1, newline_step=1)

_OPEN_HUB = {HIGH_ROW: Phase.HIGH, LOW_ROW: Phase.LOW}
_FILLED_HUB = {HIGH_ROW: Phase.AFTER_HIGH, LOW_ROW: Phase.AFTER_LOW}
_OTHER = {HIGH_ROW: LOW_ROW, LOW_ROW: HIGH_ROW}


class Aligner:
    """Incremental aligner: feed phonemes, then finish to collect slots."""

    def __init__(self):
        self.slots: list[Slot] = []
        self.done = False
        # Errors read while an empty slot was open, awaiting a filled one.
        self._orphaned_errors: list[str] = []
        self._begin_word(Slot(0, 0))

    # --- state bookkeeping ---

    def _open(
        self,
        phase: Phase,
        slot: Slot,
        vowel_connector: dict | None = None,
        consonant_connector: dict | None = None,
        next_connector: dict | None = None,
    ) -> None:
        self.phase = phase
        self.slot = slot
        self.vowel_connector = vowel_connector or {}
        self.consonant_connector = consonant_connector or {}
        self.next_connector = next_connector or {}

    def _begin_word(self, slot: Slot) -> None:
        self._open(Phase.BEFORE_HIGH, slot, consonant_connector=_PLACEHOLDER_HUB)

    def _fill_hub(self, row: Row, slot: Slot, consonant: str) -> None:
        slot.merge({"center": consonant})
        self._open(
            _FILLED_HUB[row],
            slot,
            vowel_connector={row.exit: PLACEHOLDER_VOWEL},
            next_connector={row.entry: PLACEHOLDER_VOWEL},
        )

    def _emit(self, slot: Slot) -> None:
        if slot.empty:
            self._orphaned_errors.extend(slot.errors)
            slot.errors = []
        elif self._orphaned_errors:
            slot.errors[:0] = self._orphaned_errors
            self._orphaned_errors = []
        self.slots.append(slot)

    def _settle_orphaned_errors(self) -> None:
        """Hand errors left on empty slots to the last filled slot.

        With no filled slot at all they stay on the final slot, which then
        counts as content so the messages reach the glyph model.
        """
        if not self._orphaned_errors:
            return
        target = next((s for s in reversed(self.slots) if not s.empty), self.slots[-1])
        target.errors.extend(self._orphaned_errors)
        target.empty = False
        self._orphaned_errors = []

    @property
    def row(self) -> Row:
        if self.phase in (Phase.LOW, Phase.AFTER_LOW):
            return LOW_ROW
        return HIGH_ROW

    @property
    def hub_free(self) -> bool:
        return self.phase in (Phase.BEFORE_HIGH, Phase.HIGH, Phase.LOW)

    def _step_from(self, row: Row) -> Slot:
        return Slot(self.slot.x + row.dx, self.slot.y + row.dy)

    def _land_stranded(self) -> None:
        """Give a hub-less slot holding a vowel tail a placeholder hub."""
        slot = self.slot
        if slot.center is None and (slot.north or slot.west):
            slot.merge(_PLACEHOLDER_HUB)

    # --- transitions ---

    def feed(self, phoneme: Phoneme) -> None:
        if self.done:
            return
        logger.debug(f"{self.phase.value}: {phoneme}")
        handler = getattr(self, f"_on_{phoneme.kind}")
        handler(phoneme)

    def _on_vowel(self, phoneme) -> None:
        vowel = phoneme.symbol
        if self.phase is Phase.BEFORE_HIGH:
            # No consonant yet: the vowel hangs above a hub still to come.
            self.slot.merge({"north": vowel})
            self._open(Phase.HIGH, self.slot, consonant_connector=_PLACEHOLDER_HUB)
            return
        row = self.row
        self._emit(self.slot.merge(self.consonant_connector).merge({row.exit: vowel}))
        self._open(
            _OPEN_HUB[_OTHER[row]],
            self._step_from(row),
            vowel_connector={row.entry: vowel},
            consonant_connector=_PLACEHOLDER_HUB,
        )

    def _on_diphthong(self, phoneme) -> None:
        row = self.row
        self._emit(self.slot.merge(self.consonant_connector).merge({row.exit: phoneme.first}))
        self._open(
            _OPEN_HUB[_OTHER[row]],
            self._step_from(row).merge({row.entry: phoneme.second}),
            consonant_connector=_PLACEHOLDER_HUB,
        )

    def _on_consonant(self, phoneme) -> None:
        row = self.row
        if self.hub_free:
            self._fill_hub(row, self.slot.merge(self.vowel_connector), phoneme.symbol)
            return
        # Consonant cluster: the placeholder vowel bridges both hubs.
        self._emit(self.slot.merge(self.vowel_connector))
        self._fill_hub(
            _OTHER[row],
            self._step_from(row).merge(self.next_connector),
            phoneme.symbol,
        )

    def _on_space(self, phoneme) -> None:
        slot = self.slot
        if self.phase is Phase.BEFORE_HIGH:
            return
        if self.phase is Phase.HIGH:
            if slot.north or slot.west:
                self._land_stranded()
                self._emit(slot)
                self._begin_word(Slot(slot.x + 1, slot.y))
            else:
                self._begin_word(slot)
        elif self.phase is Phase.AFTER_HIGH:
            self._emit(slot)
            self._begin_word(Slot(slot.x + 1, slot.y))
        elif self.phase is Phase.LOW:
            self._land_stranded()
            self._open(Phase.AFTER_LOW, slot)
        else:
            self._emit(slot)
            self._open(Phase.HIGH, Slot(slot.x + LOW_ROW.dx, slot.y + LOW_ROW.dy))

    def _on_newline(self, phoneme) -> None:
        slot = self.slot
        row = self.row
        if self.phase in (Phase.HIGH, Phase.LOW):
            self._land_stranded()
        self._emit(slot)
        self._begin_word(Slot(0, slot.y + row.newline_step))

    def _on_error(self, phoneme) -> None:
        logger.debug(f"Slot at {self.slot.x},{self.slot.y}: {phoneme.message}")
        self.slot.add_error(phoneme.message)

    def finish(self) -> list[Slot]:
        """Close the open slot and return every slot, empty ones included."""
        if not self.done:
            if self.phase in (Phase.HIGH, Phase.LOW):
                self._land_stranded()
            self._emit(self.slot)
            self._settle_orphaned_errors()
            self.done = True
        return self.slots


def align(phonemes) -> list[Slot]:
    """Lay out a phoneme sequence on the zig-zag grid."""
    aligner = Aligner()
    for phoneme in phonemes:
        aligner.feed(phoneme)
    return aligner.finish()
