"""Mention detection and trimming.

Pure Python, no framework dependencies. Matching is a plain case-sensitive
substring search: a handle of "bot" matches inside "robot".
"""

# Narrower than str.strip(): form feeds and unicode spaces are kept.
_TRIM_CHARS = " \t\n\r"


def is_mentioned(text: str, handle: str) -> bool:
    """True if text contains the handle, with or without a leading "@"."""
    return f"@{handle}" in text or handle in text


def trim_mention(text: str, handle: str) -> str:
    """Return the text after the first mention of handle, whitespace-stripped.

    "@handle" is preferred over the bare handle. Text without any mention is
    returned unchanged.
    """
    for needle in (f"@{handle}", handle):
        index = text.find(needle)
        if index != -1:
            return text[index + len(needle):].strip(_TRIM_CHARS)
    return text
