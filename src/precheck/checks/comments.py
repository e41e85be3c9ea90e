"""Line-prefix heuristic for comment lines across file syntaxes."""

# Java/C block and line comments, shell and properties, batch, XML/HTML, LDIF-ish bang lines.
COMMENT_PREFIXES: tuple[str, ...] = ("/*", "*", "//", "#", "rem", "<!--", "!")


def is_comment_line(lower_line: str) -> bool:
    """
    Check whether a line appears to be a comment line.

    Args:
        lower_line: Line already lowercased with leading whitespace removed

    Returns:
        True if the line starts with a known comment opener
    """
    return lower_line.startswith(COMMENT_PREFIXES)
