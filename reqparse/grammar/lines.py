"""Line splitting shared by the request and header block parsers."""


def split_lines(text: str) -> list[str]:
    """Split ``text`` into lines ending at ``\\n`` with an optional ``\\r``.

    A terminating newline does not open an extra empty line, so ``""`` has no
    lines and ``"a\\n"`` has one. Unlike ``str.splitlines`` no other
    separators (form feeds, unicode line breaks) end a line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
