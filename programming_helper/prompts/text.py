def sanitize_input(text: str, *, keep_newlines: bool = False) -> str:
    """
    Make user text safe to embed inside a double-quoted prompt section.

    Double quotes become single quotes and, unless `keep_newlines` is set,
    newlines collapse to spaces. This is cosmetic, not a security boundary.
    """
    cleaned = text.replace('"', "'")
    if not keep_newlines:
        cleaned = cleaned.replace("\n", " ")
    return cleaned
