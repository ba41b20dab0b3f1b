"""Shared utility functions for service layer."""


def escape_ilike(value: str) -> str:
    r"""
    Escape special LIKE/ILIKE characters so they match literally.

    - % matches any sequence of characters
    - _ matches any single character
    - \\ is the escape character (pass escape="\\" to ilike())
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
