"""Emonë transcription: Latin text -> glyph model for a renderer."""

import logging

from emone.transcribe.aligner import Aligner
from emone.transcribe.embellish import embellish
from emone.transcribe.lexer import Lexer, lex
from emone.transcribe.measure import canvas_extent, measure
from emone.types import GlyphModel

logger = logging.getLogger(__name__)

__all__ = ["transcribe", "lex", "embellish", "measure", "canvas_extent"]


def transcribe(text: str) -> GlyphModel:
    """Transcribe lowercase Latin text into an Emonë glyph model.

    Each phoneme goes to the aligner as soon as the lexer produces it.
    Malformed input never raises: unexpected characters are recorded in
    the ``errors`` of the glyph that was open when they were read.

    Args:
        text: Lowercased, trimmed input text.

    Returns:
        GlyphModel with the embellished glyphs and their bounding size.
    """
    if not isinstance(text, str):
        raise TypeError(f"transcribe() expects str, got {type(text).__name__}")

    lexer = Lexer()
    aligner = Aligner()
    for char in text:
        for phoneme in lexer.feed(char):
            aligner.feed(phoneme)
    for phoneme in lexer.finish():
        aligner.feed(phoneme)

    glyphs = embellish(aligner.finish())
    size = measure(glyphs)
    logger.info(f"Transcribed {len(text)} characters: {len(glyphs)} glyphs, {size.x}x{size.y}")
    return GlyphModel(glyphs=tuple(glyphs), size=size)
