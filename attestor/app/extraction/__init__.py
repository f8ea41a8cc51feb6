from .field_extractor import extract, extract_identifier, extract_legal_name
from .patterns import KindPatterns, patterns_for

__all__ = [
    "extract",
    "extract_identifier",
    "extract_legal_name",
    "KindPatterns",
    "patterns_for",
]
