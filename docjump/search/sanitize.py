"""
Query Sanitizer - Strip manifest punctuation from pasted coordinates.

People paste dependency coordinates straight out of Leiningen/Boot files or
deps.edn, e.g. `[ring "1.2.0"]` or `{ring/ring {:mvn/version "1.2.0"}}`.
The brackets, braces and double quotes carry no search meaning.
"""

import re

_MANIFEST_CHARS = re.compile(r'[{}\[\]"]+')


def sanitize(raw: str) -> str:
    """Remove square brackets, curly braces and double quotes from raw input."""
    return _MANIFEST_CHARS.sub("", raw)
