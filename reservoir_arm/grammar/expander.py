# reservoir_arm/grammar/expander.py
"""
SYMBOL EXPANDER: From Seed to Construction String
=================================================

PURPOSE:
--------
Turns a short seed such as "A(3){BC}" into the long construction string that
drives the growth engine. The seed grammar is:

    letter      replaced by the first production rule whose search equals
                the letter, or kept as it is
    (N){...}    the block is expanded N times in place

HOW IT WORKS:
-------------
There is a single running buffer and a cursor. A letter is replaced in the
buffer and the cursor jumps past the inserted text, so one pass never
rewrites its own output:

    rules A->a, B->bb, C->BB
    "ABC"  ->  "abbBB"

A loop removes its "(N){" header and then rescans the block from the loop
start N times. Every pass starts from the result of the previous one, which
is what lets rules cascade:

    rule B->BB
    "(3){B}"  ->  "BB" -> "BBBB" -> "BBBBBBBB"

The closing "}" is removed afterwards. (0){...} removes the whole block.

SAFETY BOUND:
-------------
Self-amplifying rules (D->DD inside a loop) grow exponentially. As soon as
the buffer exceeds max_expansion_length (1000) characters, expansion stops
and the output is replaced by "The output gets too long!".
"""

import logging
from typing import List, Optional, Sequence, Tuple

from ..config import CONFIG, GrowthConfig
from .model import ParseResult, ParserError, Rule

logger = logging.getLogger(__name__)

LOOP_END = "}"


def is_symbol(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


class _TooLong(Exception):
    """Internal signal: the buffer went past the length limit."""


class SymbolExpander:
    """
    Expands seeds with a fixed table of production rules.

    Parameters:
    -----------
    rules : Sequence[Rule]
        Production rules; only rules with a single-character search string
        can ever match a symbol
    config : GrowthConfig
        Length limit and sentinel text (defaults to CONFIG)

    Examples:
    ---------
    >>> expander = SymbolExpander([Rule("A", "a"), Rule("B", "bb"), Rule("C", "BB")])
    >>> expander.parse("ABC").value
    'abbBB'
    """

    def __init__(self, rules: Sequence[Rule], config: GrowthConfig = CONFIG):
        self.rules = list(rules)
        self.config = config
        self._buffer: List[str] = []
        self._errors: List[ParserError] = []

    def replacement(self, symbol: str) -> str:
        for rule in self.rules:
            if rule.search == symbol:
                return rule.replace
        return symbol

    def parse(self, text: Optional[str]) -> ParseResult:
        """
        Expand the seed.

        Returns:
        --------
        ParseResult
            (expanded string, list of ParserError)
        """
        self._buffer = list(text or "")
        self._errors = []

        try:
            offset = self._expand(0)
            while offset < len(self._buffer):
                # stray "}" at the top level
                self._errors.append(ParserError(offset, "Unexpected end of loop: }"))
                offset = self._expand(offset + 1)
            self._check_length()
        except _TooLong:
            logger.info("Expansion stopped: output exceeds %d characters",
                        self.config.max_expansion_length)
            return ParseResult(self.config.too_long_output_text, self._errors)

        return ParseResult("".join(self._buffer), self._errors)

    def _check_length(self) -> None:
        if len(self._buffer) > self.config.max_expansion_length:
            raise _TooLong()

    def _expand(self, offset: int) -> int:
        """
        Expand from offset until the end of the buffer or a loop end.

        Returns the offset of the "}" that stopped the scan, or the buffer
        length.
        """
        buffer = self._buffer

        while offset < len(buffer):
            self._check_length()
            char = buffer[offset]

            if is_symbol(char):
                replacement = self.replacement(char)
                buffer[offset:offset + 1] = list(replacement)
                offset += len(replacement)
                continue

            header = self._loop_header(offset)
            if header is not None:
                repetitions, header_length = header
                offset = self._expand_loop(offset, repetitions, header_length)
                continue

            if char == LOOP_END:
                return offset

            self._errors.append(ParserError(offset, f"Could not understand the symbol: {char}"))
            offset += 1

        return offset

    def _loop_header(self, offset: int) -> Optional[Tuple[int, int]]:
        """(repetitions, header length) if a "(N){" header starts at offset."""
        buffer = self._buffer
        if buffer[offset] != "(":
            return None

        end = offset + 1
        while end < len(buffer) and buffer[end].isdigit():
            end += 1

        if end == offset + 1 or buffer[end:end + 2] != [")", "{"]:
            return None
        return int("".join(buffer[offset + 1:end])), end + 2 - offset

    def _expand_loop(self, offset: int, repetitions: int, header_length: int) -> int:
        """Expand one (N){...} block starting at offset; returns the offset after it."""
        buffer = self._buffer
        del buffer[offset:offset + header_length]
        loop_start = offset

        if repetitions == 0:
            end = self._find_loop_end(loop_start)
            if end is None:
                self._errors.append(ParserError(loop_start, "Loop is not closed with }"))
                del buffer[loop_start:]
                return loop_start
            del buffer[loop_start:end + 1]
            return loop_start

        end = loop_start
        for _ in range(repetitions):
            end = self._expand(loop_start)

        if end >= len(buffer):
            self._errors.append(ParserError(loop_start, "Loop is not closed with }"))
            return end

        del buffer[end]
        return end

    def _find_loop_end(self, offset: int) -> Optional[int]:
        """Offset of the "}" that closes a block starting at offset."""
        nesting = 0
        for index in range(offset, len(self._buffer)):
            char = self._buffer[index]
            if char == "{":
                nesting += 1
            elif char == LOOP_END:
                if nesting == 0:
                    return index
                nesting -= 1
        return None


def expand(seed: Optional[str], rules: Sequence[Rule],
           config: GrowthConfig = CONFIG) -> Tuple[str, List[ParserError]]:
    """
    Expand a seed with the given production rules.

    >>> expand("ab(3){B}aB", [Rule("A", "a"), Rule("B", "BB")])[0]
    'abBBBBBBBBaBB'
    """
    output, errors = SymbolExpander(rules, config).parse(seed)
    return output, errors
