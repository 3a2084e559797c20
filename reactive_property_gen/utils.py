"""
Utility functions for the reactive property generator.
"""

# Field prefix stripped from backing field names
FIELD_PREFIX = "_"

# Distance between an ASCII lowercase letter and its uppercase form
_ASCII_CASE_DISTANCE = 32


def _upper_first_ascii(text: str) -> str:
    """Uppercase the first character if it is an ASCII lowercase letter."""
    first = text[0]
    if "a" <= first <= "z":
        return chr(ord(first) - _ASCII_CASE_DISTANCE) + text[1:]
    return text


def derive_property_name(field_name: str) -> str:
    """Derive the public property name for a backing field.

    Examples:
        "_dateTime" -> "DateTime"
        "dateTime" -> "DateTime"
        "_DateTime" -> "DateTime"
        "_1st" -> "1st"
        "_" -> "_"
        "_ä" -> "ä"

    A field that is only the prefix is returned unchanged, since stripping it
    would leave an empty name. Only ASCII letters change case.

    Args:
        field_name: The field identifier, at least one character long

    Returns:
        The property identifier
    """
    if not field_name:
        raise ValueError("Field name must not be empty")

    name = field_name
    if name.startswith(FIELD_PREFIX) and len(name) > len(FIELD_PREFIX):
        name = name[len(FIELD_PREFIX) :]

    return _upper_first_ascii(name)
