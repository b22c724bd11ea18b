"""
Annotation Value Parsers

Turns raw annotation strings into lists of full type names.

Message options (`enrichment_for`, `enrichment`) hold type names separated
by `VALUE_SEPARATOR`; names without a package are qualified with the
package of the declaring file.

The `by` field option holds one or more field references separated by
`PIPE_SEPARATOR`, each of the form `package.Type.field`. The type part of
every reference is a target event type, with two exceptions that produce
no target:

- the wildcard token (`*` or `*.field`), meaning the event type is not
  statically known; allowed only as the sole reference;
- a short reference without a type part (`field`), which points to a field
  of the outer message and is resolved by the nested-message scan.
"""

import logging
from typing import List, Optional

from enrichment_lookup.errors import InvalidByOptionValueError, InvalidWildcardUsageError
from enrichment_lookup.options import (
    ANY_BY_OPTION_TARGET,
    PIPE_SEPARATOR,
    PROTO_TYPE_SEPARATOR,
    VALUE_SEPARATOR,
)


logger = logging.getLogger(__name__)


def parse_type_names(raw: Optional[str], package_prefix: str) -> List[str]:
    """Parse a message option value into full type names.

    Args:
        raw: Raw option value, or None when the option is absent
        package_prefix: Prefix of the declaring file (`"demo."` or `""`)

    Returns:
        Type names in declaration order, without blanks and duplicates
    """
    if raw is None:
        return []

    result = []
    for item in raw.split(VALUE_SEPARATOR):
        type_name = item.strip()
        if not type_name:
            continue
        if PROTO_TYPE_SEPARATOR not in type_name:
            type_name = package_prefix + type_name
        if type_name not in result:
            result.append(type_name)
    return result


def _is_wildcard(reference: str) -> bool:
    # Any reference starting with `*` targets many types, `*.x` as well as malformed `*foo.x`.
    return reference.startswith(ANY_BY_OPTION_TARGET)


def parse_by(value: Optional[str], field_name: str) -> List[str]:
    """Parse a `by` field option into the full names of its event types.

    Args:
        value: Raw option value
        field_name: Name of the annotated field, used in error messages

    Returns:
        Event type names in declaration order, without duplicates.
        Empty when the value is a sole wildcard or only short references.

    Raises:
        InvalidByOptionValueError: If any reference is blank or has an empty type part
        InvalidWildcardUsageError: If a wildcard is mixed with other references
    """
    if value is None:
        raise InvalidByOptionValueError(field_name, value)

    if PIPE_SEPARATOR in value:
        references = value.split(PIPE_SEPARATOR)
    else:
        references = [value]

    result: List[str] = []
    for reference in references:
        reference = reference.strip()
        if not reference:
            raise InvalidByOptionValueError(field_name, value)

        if _is_wildcard(reference):
            if len(references) > 1:
                raise InvalidWildcardUsageError(field_name, value)
            logger.debug(f"Skipping a wildcard target of field {field_name}")
            continue

        index = reference.rfind(PROTO_TYPE_SEPARATOR)
        if index < 0:
            # Short references are resolved as fields of the outer message.
            logger.debug(f"Skipping short reference {reference!r} of field {field_name}")
            continue

        type_name = reference[:index].strip()
        if not type_name:
            raise InvalidByOptionValueError(field_name, value)
        if type_name not in result:
            result.append(type_name)

    return result
