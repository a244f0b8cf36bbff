import re

TEACHER_SEPARATOR = " - "

# whole-token digit run: start or whitespace before, whitespace/end/")" after
_NUMBER_TOKEN = re.compile(r"(?<!\S)(\d+)(?=\s|$|\))")


def _outside_parentheses(text: str, position: int) -> bool:
    depth = text.count("(", 0, position) - text.count(")", 0, position)
    return depth <= 0


def mark_campus_numbers(text: str) -> str:
    """Prefix standalone campus numbers with `#`, e.g. `Bernal 1` -> `Bernal #1`.

    Numbers inside parentheses are period or level qualifiers and are left alone.
    """

    def repl(match: re.Match) -> str:
        if _outside_parentheses(text, match.start()):
            return f"#{match.group(1)}"
        return match.group(0)

    return _NUMBER_TOKEN.sub(repl, text)


def normalize_campus_name(raw: str) -> str:
    """
    Reduce a campus label to the key used when comparing labels across sheets.

    Examples:
        >>> normalize_campus_name("Bernal 1 - Tracey Sorrell")
        'bernal #1'
        >>> normalize_campus_name("Clark ( 3 Periods ) - Karen Pumphrey")
        'clark ( 3 periods )'
    """
    if not isinstance(raw, str) or not raw.strip():
        return ""

    name = raw.split(TEACHER_SEPARATOR, 1)[0]
    name = name.strip()
    name = mark_campus_numbers(name)
    return name.lower()
