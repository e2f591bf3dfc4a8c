"""Names used in generated TypeScript.

  - component schema name -> exported constant (`User`, `user-profile` -> `user_profile`)
  - schema or operation name -> human label (`UserProfile` -> "User profile")
  - status code -> response constant (`201` -> `Response201`)
  - property name -> object key (`id`, `"content-type"`)
"""

from __future__ import annotations

import json
import re

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Reserved words that cannot be used as a `const` name
_RESERVED: frozenset[str] = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "yield", "let", "static",
    "await", "implements", "interface", "package", "private", "protected",
    "public",
})


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def generate_description(name: str) -> str:
    """Build a readable label from a camel-cased name.

    Only the first word is capitalized: 'UserProfile' -> 'User profile',
    'user.create' -> 'User create'.
    """
    words = [w for w in re.split(r"[^a-z0-9]+", _camel_to_snake(name)) if w]
    if not words:
        return name
    description = " ".join(words)
    return description[0].upper() + description[1:]


def is_identifier(name: str) -> bool:
    """Check if a name can be used as-is as a TypeScript identifier."""
    return bool(_IDENTIFIER_RE.match(name))


def component_identifier(name: str) -> str:
    """Return the exported constant name for a component schema."""
    if is_identifier(name) and name not in _RESERVED:
        return name
    ident = re.sub(r"[^A-Za-z0-9_$]", "_", name)
    if not ident or ident[0].isdigit() or ident in _RESERVED:
        ident = "_" + ident
    return ident


def property_key(name: str) -> str:
    """Render an object key, quoting it when it is not an identifier."""
    if is_identifier(name):
        return name
    return json.dumps(name)


def response_name(status_code: str) -> str:
    """Return the constant name for a response status code."""
    return "Response" + re.sub(r"[^A-Za-z0-9_$]", "_", str(status_code))
