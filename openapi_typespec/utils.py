"""
Utility functions for openapi_typespec.
"""

import re

# Words of a name, splitting on camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")


def snake_to_pascal_case(text: str) -> str:
    """Convert a schema or property name to PascalCase.

    Any character that is not a letter or digit separates words.

    Examples:
        "pet_owner" -> "PetOwner"
        "petOwner" -> "PetOwner"
        "Pet-Response.v2" -> "PetResponseV2"
        "@type" -> "Type"
    """
    return "".join(word.capitalize() for word in _WORD_PATTERN.findall(text))
