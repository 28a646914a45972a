"""
Message splitting for the chat platform's size limit.

Long LLM responses are cut into segments no longer than the platform
allows, preferring natural boundaries so each message still reads well
on its own.
"""

import re
from typing import List

# Telegram rejects messages over 4096 characters
DEFAULT_MAX_LENGTH = 4000

PARAGRAPH_BREAK = "\n\n"
LINE_BREAK = "\n"
WORD_BREAK = " "
SENTENCE_END = re.compile(r"[.!?] ")


def _last_sentence_end(text: str, max_length: int) -> int:
    """Position just after the last sentence terminator that fits in the window"""
    cut = -1
    for match in SENTENCE_END.finditer(text, 0, max_length + 1):
        cut = match.start() + 1
    return cut


def find_cut_point(text: str, max_length: int) -> int:
    """
    Find where to cut ``text`` so the head fits in ``max_length``.

    Boundaries are tried in order: paragraph break, sentence end, line
    break, word break. The first kind present in the window wins.

    Returns:
        Cut index, or -1 when the window holds no boundary at all
    """
    cut = text.rfind(PARAGRAPH_BREAK, 0, max_length + len(PARAGRAPH_BREAK))
    if cut == -1:
        cut = _last_sentence_end(text, max_length)
    if cut == -1:
        cut = text.rfind(LINE_BREAK, 0, max_length + 1)
    if cut == -1:
        cut = text.rfind(WORD_BREAK, 0, max_length + 1)
    return cut


def split_message(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> List[str]:
    """
    Split text into chunks of at most ``max_length`` characters.

    Text that already fits is returned untouched as a single chunk. Longer
    text is cut at the best natural boundary in each window; a boundary in
    the first half of the window is ignored in favour of a hard cut at
    ``max_length``, which also handles single words longer than the limit.
    Chunks and the remainder are trimmed at every cut.

    Args:
        text: Message to split
        max_length: Maximum characters per chunk

    Returns:
        Ordered list of chunks ([""] for empty input)
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    if not text:
        return [""]
    if len(text) <= max_length:
        return [text]

    chunks = []
    remaining = text
    while remaining:
        if len(remaining) <= max_length:
            chunks.append(remaining)
            break

        cut = find_cut_point(remaining, max_length)
        if cut == -1 or cut < max_length / 2:
            cut = max_length

        chunk = remaining[:cut].strip()
        if chunk:
            chunks.append(chunk)
        remaining = remaining[cut:].strip()

    return chunks or [""]
