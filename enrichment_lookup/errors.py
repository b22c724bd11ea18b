"""
Enrichment Lookup Error Hierarchy

Defines all custom exceptions raised while resolving enrichment annotations.
Resolution errors are deterministic input problems: they abort the current
schema file and are never retried.
"""

from typing import List, Optional


class EnrichmentLookupError(Exception):
    """Base exception for all enrichment lookup errors."""
    pass


class InvalidByOptionValueError(EnrichmentLookupError):
    """A `by` field option holds a blank or malformed item.

    Raised when one of the pipe-separated items of a `by` value is empty,
    or when the type part of a field reference is missing (e.g. `.id`).

    Attributes:
        field_name: Name of the field carrying the option
        value: The raw option value
    """

    def __init__(self, field_name: str, value: Optional[str] = None):
        super().__init__(
            f"The message field `{field_name}` has invalid 'by' option value "
            f"{value!r}, which must be a fully-qualified field reference."
        )
        self.field_name = field_name
        self.value = value


class InvalidWildcardUsageError(EnrichmentLookupError):
    """A wildcard target is combined with explicit targets.

    Multiple argument `by` values can not contain a wildcard reference,
    the event type must be given either with `by` or with `enrichment_for`.

    Attributes:
        field_name: Name of the field carrying the option
        value: The raw option value
    """

    def __init__(self, field_name: str, value: Optional[str] = None):
        super().__init__(
            f"Field `{field_name}` has invalid 'by' option value {value!r}. "
            "Wildcard type is not allowed with multiple arguments. "
            "Please, specify the type either with `by` or "
            "with `enrichment_for` annotation."
        )
        self.field_name = field_name
        self.value = value


class DuplicateEnrichmentError(EnrichmentLookupError):
    """The same enrichment type is declared by more than one schema file.

    Raised by the build-wide lookup when the collision policy is `error`.

    Attributes:
        key: The colliding enrichment type name
        files: Names of the schema files declaring it
    """

    def __init__(self, key: str, files: List[str]):
        super().__init__(
            f"Enrichment `{key}` is declared in more than one file: {', '.join(files)}"
        )
        self.key = key
        self.files = files


class DescriptorLoadError(EnrichmentLookupError):
    """Error reading a descriptor set document.

    Attributes:
        file_path: Path of the document, if known
        line_number: 1-based line of a YAML syntax problem, if known
        column: 1-based column of a YAML syntax problem, if known
    """

    def __init__(self, message: str, file_path: Optional[str] = None,
                 line_number: Optional[int] = None, column: Optional[int] = None):
        self.file_path = file_path
        self.line_number = line_number
        self.column = column

        error_parts = [message]
        if file_path:
            error_parts.append(f"File: {file_path}")
        if line_number is not None:
            if column is not None:
                error_parts.append(f"Line {line_number}, Column {column}")
            else:
                error_parts.append(f"Line {line_number}")

        super().__init__(" | ".join(error_parts))


class ConfigurationError(EnrichmentLookupError):
    """Error in lookup configuration.

    Raised when a configuration file is malformed, contains unknown keys
    or values outside the supported choices.
    """
    pass
