"""
Name casing helpers — the variants templates get for a project name.

    names("my-lib") → name='my-lib', className='MyLib',
                      propertyName='myLib', constantName='MY_LIB',
                      fileName='my-lib'
"""

from __future__ import annotations

import re


def to_file_name(s: str) -> str:
    """kebab-case: split camel humps, lowercase, spaces/underscores → '-'.

    Slashes are kept, so nested directories stay nested.
    """
    s = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s)
    return re.sub(r"[ _]", "-", s.lower())


def to_property_name(s: str) -> str:
    """camelCase."""
    s = re.sub(
        r"([^a-zA-Z0-9])+(.)?",
        lambda m: m.group(2).upper() if m.group(2) else "",
        s,
    )
    s = re.sub(r"[^a-zA-Z\d]", "", s)
    return s[:1].lower() + s[1:]


def to_class_name(s: str) -> str:
    """PascalCase."""
    prop = to_property_name(s)
    return prop[:1].upper() + prop[1:]


def to_constant_name(s: str) -> str:
    """CONSTANT_CASE."""
    normalized = s.lower() if s.upper() == s else s
    return re.sub(r"[^a-zA-Z0-9]", "_", to_file_name(to_property_name(normalized))).upper()


def names(name: str) -> dict[str, str]:
    """All casing variants of ``name``, keyed the way templates use them."""
    return {
        "name": name,
        "className": to_class_name(name),
        "propertyName": to_property_name(name),
        "constantName": to_constant_name(name),
        "fileName": to_file_name(name),
    }
