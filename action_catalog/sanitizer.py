"""Allow-list filtering of free-text manifest fields."""


def sanitize(value: str) -> str:
    """Drop every character that is not a letter, a digit or whitespace.

    Whitespace is kept exactly where it was, nothing is trimmed or collapsed.
    Letters of any script survive; numeric symbols such as ``½`` or ``Ⅻ`` do not.
    """
    return "".join(
        char
        for char in value
        if char.isalpha() or char.isdecimal() or char.isspace()
    )
