"""
Process-wide extraction patterns.

Patterns are compiled lazily, exactly once per credential kind, and shared
read-only across all pipeline invocations. Compiled re.Pattern objects are
safe for concurrent use.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import NamedTuple

from attestor.app.errors import PatternCompilationFailed
from attestor.app.schemas.credential import CredentialKind, spec_for


# Letters, whitespace, '&', '.', ','
NAME_CHARSET = r"[A-Za-z\s&.,]"


class KindPatterns(NamedTuple):
    identifier: re.Pattern
    legal_name: re.Pattern


def _compile(source: str) -> re.Pattern:
    try:
        return re.compile(source)
    except re.error as exc:
        raise PatternCompilationFailed(source, str(exc)) from exc


def legal_name_source(label: str, stop_keywords) -> str:
    """
    Build the legal name pattern for a label and its stop keywords.

    The capture is lazy and ends at the first line break, stop keyword or
    end of text.
    """
    terminators = ["\\n", *(re.escape(k) for k in stop_keywords), "\\Z"]
    return (
        f"{re.escape(label)}\\s*({NAME_CHARSET}+?)"
        f"(?:{'|'.join(terminators)})"
    )


@lru_cache(maxsize=None)
def patterns_for(kind: CredentialKind) -> KindPatterns:
    spec = spec_for(kind)
    return KindPatterns(
        identifier=_compile(spec.identifier_pattern),
        legal_name=_compile(
            legal_name_source(spec.name_label, spec.name_stop_keywords)
        ),
    )
