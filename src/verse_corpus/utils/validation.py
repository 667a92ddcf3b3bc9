"""
Schema validation utilities for the corpus pipeline.

Validates data at pipeline boundaries to catch interface mismatches early.
"""

from typing import Any, Dict, List


def validate_verse_record(record: Dict[str, Any]) -> List[str]:
    """
    Validate an assembled verse record.

    Expected fields:
        - reference: non-empty str
        - translations: dict of language name -> str

    Args:
        record: Record from the verse records JSON array

    Returns:
        List of error messages (empty if valid)
    """
    errors = []

    if not isinstance(record, dict):
        return ["Record must be an object"]

    reference = record.get("reference")
    if reference is None:
        errors.append("Missing reference")
    elif not isinstance(reference, str) or not reference.strip():
        errors.append("reference must be a non-empty string")

    if "translations" not in record:
        errors.append("Missing translations")
    elif not isinstance(record.get("translations"), dict):
        errors.append("translations must be a dict")
    else:
        for language, text in record["translations"].items():
            if not isinstance(text, str):
                errors.append(f"translations[{language!r}] must be a string")

    return errors
