from sqlalchemy.exc import IntegrityError

from france_geo.domain.exceptions import DuplicateKey


def raise_duplicate_key(
    error: IntegrityError, entity_type: str, unique_fields: dict
) -> None:
    """Translate a unique-constraint failure into a DuplicateKey error.

    ``unique_fields`` maps a column (or index) name fragment found in the
    driver message to a ``(label, value)`` pair. Any other integrity error is
    re-raised untouched.
    """
    msg = str(error.orig)
    for fragment, (label, value) in unique_fields.items():
        if fragment in msg:
            raise DuplicateKey(entity_type, label, value) from error
    raise error
