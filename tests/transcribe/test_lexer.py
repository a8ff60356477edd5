"""Tests for the phoneme lexer."""

from emone.transcribe.lexer import (
    END,
    Lexer,
    LexerState,
    Mode,
    START,
    lex,
    step,
)
from emone.types import Consonant, Diphthong, Error, Newline, Space, Vowel


def _consonants(text: str) -> list[str]:
    return [p.symbol for p in lex(text)]


class TestSingleLetters:
    def test_simple_consonant(self):
        assert lex("m") == [Consonant("m")]

    def test_each_simple_consonant(self):
        for letter in "rlmvfjz":
            assert lex(letter) == [Consonant(letter)]

    def test_single_vowel(self):
        assert lex("a") == [Vowel("a")]

    def test_empty_input(self):
        assert lex("") == []

    def test_x_is_k_then_s(self):
        assert lex("x") == [Consonant("k"), Consonant("s")]

    def test_c_alone_is_k(self):
        assert lex("c") == [Consonant("k")]
        assert lex("ca") == [Consonant("k"), Vowel("a")]


class TestDigraphs:
    def test_ph_is_f(self):
        assert lex("ph") == [Consonant("f")]

    def test_bh_is_v(self):
        assert lex("bh") == [Consonant("v")]

    def test_h_digraphs(self):
        for pair in ("gh", "kh", "ch", "th", "dh"):
            assert _consonants(pair) == [pair]

    def test_other_digraphs(self):
        for pair in ("ng", "ts", "dj", "dz"):
            assert _consonants(pair) == [pair]

    def test_sch_is_sh(self):
        assert lex("sch") == [Consonant("sh")]

    def test_sc_without_h(self):
        assert lex("sc") == [Consonant("s"), Consonant("k")]
        assert lex("sca") == [Consonant("s"), Consonant("k"), Vowel("a")]

    def test_sh_is_not_a_digraph(self):
        # Only "sch" spells sh; a lone h is not a letter of the script.
        assert lex("sh") == [Consonant("s"), Error("unexpected h")]

    def test_lookahead_is_redispatched(self):
        assert lex("nk") == [Consonant("n"), Consonant("k")]
        assert lex("ta") == [Consonant("t"), Vowel("a")]

    def test_digraph_then_vowel(self):
        assert lex("kha") == [Consonant("kh"), Vowel("a")]


class TestQ:
    def test_qu_consumes_u(self):
        assert lex("qu") == [Consonant("k"), Consonant("w")]

    def test_qw_consumes_w(self):
        assert lex("qw") == [Consonant("k"), Consonant("w")]

    def test_q_before_vowel(self):
        assert lex("qa") == [Consonant("k"), Consonant("w"), Vowel("a")]

    def test_q_at_end(self):
        assert lex("q") == [Consonant("k"), Consonant("w")]

    def test_qua(self):
        assert lex("qua") == [Consonant("k"), Consonant("w"), Vowel("a")]


class TestGlides:
    def test_w_starts_as_consonant(self):
        assert lex("wa") == [Consonant("w"), Vowel("a")]

    def test_y_starts_as_consonant(self):
        assert lex("ya") == [Consonant("y"), Vowel("a")]

    def test_w_after_consonant_is_vowel(self):
        assert lex("mw") == [Consonant("m"), Vowel("w")]

    def test_glide_after_consonant_can_join_diphthong(self):
        assert lex("mwa") == [Consonant("m"), Diphthong("w", "a")]


class TestDiphthongs:
    def test_two_vowels_fuse(self):
        assert lex("ai") == [Diphthong("a", "i")]

    def test_vowel_then_w(self):
        assert lex("aw") == [Diphthong("a", "w")]

    def test_third_vowel_stands_alone(self):
        assert lex("aia") == [Diphthong("a", "i"), Vowel("a")]

    def test_vowel_then_consonant(self):
        assert lex("am") == [Vowel("a"), Consonant("m")]


class TestSeparators:
    def test_space(self):
        assert lex("a b") == [Vowel("a"), Space(), Consonant("b")]

    def test_newline(self):
        assert lex("a\nb") == [Vowel("a"), Newline(), Consonant("b")]

    def test_carriage_return_is_newline(self):
        assert lex("m\rm") == [Consonant("m"), Newline(), Consonant("m")]

    def test_whitespace_runs_collapse(self):
        assert lex("m  \n\tm") == [Consonant("m"), Space(), Consonant("m")]

    def test_whitespace_only(self):
        assert lex("   ") == [Space()]


class TestErrors:
    def test_digit_is_unexpected(self):
        assert lex("1") == [Error("unexpected 1")]

    def test_error_does_not_stop_lexing(self):
        assert lex("a1b") == [Vowel("a"), Error("unexpected 1"), Consonant("b")]

    def test_leading_tab_is_unexpected(self):
        assert lex("\tm") == [Error("unexpected \t"), Consonant("m")]

    def test_w_after_error_is_vowel(self):
        # An unexpected character counts as a consonant for the glide rule.
        assert lex("%w") == [Error("unexpected %"), Vowel("w")]


class TestStep:
    def test_digraph_letter_is_held(self):
        state, phonemes = step(START, "t")
        assert state == LexerState(Mode.DIGRAPH, "t")
        assert phonemes == []

    def test_end_flushes_held_vowel(self):
        state, phonemes = step(LexerState(Mode.MAYBE_DIPHTHONG, "o"), END)
        assert state.mode is Mode.DONE
        assert phonemes == [Vowel("o")]

    def test_done_absorbs_input(self):
        state, phonemes = step(LexerState(Mode.DONE), "m")
        assert state.mode is Mode.DONE
        assert phonemes == []


class TestLexer:
    def test_incremental_feed(self):
        lexer = Lexer()
        assert lexer.feed("p") == []
        assert lexer.feed("h") == [Consonant("f")]
        assert lexer.feed("o") == []
        assert lexer.finish() == [Vowel("o")]
        assert lexer.state.mode is Mode.DONE

    def test_finish_twice(self):
        lexer = Lexer()
        lexer.feed("m")
        lexer.finish()
        assert lexer.finish() == []
