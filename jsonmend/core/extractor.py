"""Locate the first JSON-shaped span in arbitrary text."""

from jsonmend.core.scanner import find_first_opener, scan_brackets
from jsonmend.models.span import JsonSpan


def extract(text: str) -> JsonSpan | None:
    """Find the first bracketed span in ``text``.

    Only the first '{' or '[' is considered. If it has a matching close the
    span runs through it; otherwise the span runs to the end of the text and
    is marked unterminated. Either way the span keeps the scan report, so
    the repairer knows which closers are missing without scanning again.
    """
    start = find_first_opener(text)
    if start is None:
        return None

    result = scan_brackets(text, start)
    end = result.end + 1 if result.terminated else len(text)
    return JsonSpan(start=start, end=end, text=text[start:end], scan=result)
