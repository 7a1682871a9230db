"""Cleanup of job description text pulled from a rendered page."""

import re

_INLINE_SPACE = re.compile(r"[ \t\f\v\xa0\u2009]+")
_BLANK_RUN = re.compile(r"\n{3,}")


def parse_jd(text: str) -> str:
    """Normalize scraped page text so its length reflects real content.

    Line endings become ``\\n``, runs of inline whitespace
    (non-breaking and thin spaces too) become one space, each line is
    trimmed, and at most one blank line is kept between paragraphs.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = (_INLINE_SPACE.sub(" ", line).strip() for line in text.split("\n"))
    return _BLANK_RUN.sub("\n\n", "\n".join(lines)).strip()
