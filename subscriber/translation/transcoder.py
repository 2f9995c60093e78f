"""
Reversible transform between delimiter markup and HTML-like tags.

Localization strings mark decorated regions with a private notation:
``§X`` opens a region tagged ``X`` and ``§!`` closes the innermost open
region. Machine translation with HTML tag handling keeps ``<X>...</X>``
boundaries intact, so text is encoded before translation and decoded
afterwards.

Both functions are total: malformed input degrades instead of raising.
A close instruction with no open region is dropped by encode, so
``decode(encode(text))`` reproduces ``text`` only when every close has a
matching open.

Usage:
    encoded = encode("§FHello§!, World!")   # "<F>Hello</F>, World!"
    decode(encoded)                         # "§FHello§!, World!"
"""

import re

DELIMITER = "§"
CLOSE_MARKER = "!"

# A closing tag carries any token; an opening tag is a single identifier.
# Closing forms are tried first so "</>>" closes a ">" region instead of
# opening a "/" one; identifiers may be any character, including "/" and "<".
_TAG_PATTERN = re.compile(r"</[^<>]+>|</.>|<(.)>", re.DOTALL)


def encode(text: str, delimiter: str = DELIMITER) -> str:
    """
    Convert delimiter markup to HTML-like tags.

    Args:
        text: Text in delimiter notation
        delimiter: Region delimiter character

    Returns:
        Text with ``<X>``/``</X>`` tags in place of the delimiter instructions
    """
    open_tags: list[str] = []
    output: list[str] = []
    i = 0
    length = len(text)

    while i < length:
        character = text[i]
        if character != delimiter or i + 1 >= length:
            output.append(character)
            i += 1
            continue

        instruction = text[i + 1]
        if instruction == CLOSE_MARKER:
            # Unmatched close: the source text is missing its opener, drop it
            if open_tags:
                output.append(f"</{open_tags.pop()}>")
        else:
            open_tags.append(instruction)
            output.append(f"<{instruction}>")
        i += 2

    return "".join(output)


def decode(text: str, delimiter: str = DELIMITER) -> str:
    """
    Convert HTML-like tags back to delimiter markup.

    Closing tags carry no information the delimiter form needs, so every
    ``</...>`` becomes a bare close instruction. Anything that is not a
    well-formed tag, including a lone ``<``, is left untouched.

    Args:
        text: Text containing ``<X>``/``</X>`` tags
        delimiter: Region delimiter character

    Returns:
        Text in delimiter notation
    """

    def _replace(match: re.Match) -> str:
        identifier = match.group(1)
        if identifier is None:
            return delimiter + CLOSE_MARKER
        return delimiter + identifier

    return _TAG_PATTERN.sub(_replace, text)
