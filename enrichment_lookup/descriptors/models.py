"""
Schema Descriptor Models

Immutable, already-parsed views of proto-style schema files: messages,
their fields, their nested messages and the raw key/value annotations
attached to each of them. Instances are produced by the descriptor loader
or built directly by callers; the resolver never mutates them.

Sequences are stored as tuples and annotations as read-only mappings, so
a model cannot change after it is built.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from pydantic import BaseModel, Field, field_serializer, field_validator

from enrichment_lookup.options import PIPE_SEPARATOR, PROTO_TYPE_SEPARATOR, VALUE_SEPARATOR


def _join_list_values(value: Any, separator: str) -> Any:
    if not isinstance(value, Mapping):
        return value
    return {
        key: separator.join(item) if isinstance(item, (list, tuple)) else item
        for key, item in value.items()
    }


class _Declaration(BaseModel):
    """Common handling of the `options` annotations of a declaration."""

    options: Mapping[str, str] = Field(
        default_factory=dict, validate_default=True, description="Annotations"
    )

    @field_validator('options', mode='after')
    @classmethod
    def freeze_options(cls, v):
        return MappingProxyType(dict(v))

    @field_serializer('options')
    def serialize_options(self, options: Mapping[str, str]) -> Dict[str, str]:
        return dict(options)

    class Config:
        frozen = True


class FieldDecl(_Declaration):
    """A message field and its field-level annotations.

    Attributes:
        name: Field name as declared in the schema
        options: Annotation key to raw string value (e.g. `by`)
    """
    name: str = Field(..., min_length=1, description="Field name")

    @field_validator('options', mode='before')
    @classmethod
    def join_target_lists(cls, v):
        """Accept several `by` targets written as a list."""
        return _join_list_values(v, PIPE_SEPARATOR)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "name": "task_id",
                "options": {"by": "demo.TaskCreated.task_id|demo.TaskClosed.task_id"}
            }
        }


class MessageDecl(_Declaration):
    """A message declaration with its fields and nested messages.

    Attributes:
        name: Simple (unqualified) message name
        fields: Declared fields in declaration order
        nested: Immediate nested messages in declaration order
        options: Message annotations (e.g. `enrichment_for`, `enrichment`)
    """
    name: str = Field(..., min_length=1, description="Message name")
    fields: Tuple[FieldDecl, ...] = Field(default=(), description="Message fields")
    nested: Tuple["MessageDecl", ...] = Field(default=(), description="Nested messages")

    @field_validator('options', mode='before')
    @classmethod
    def join_type_lists(cls, v):
        """Accept several type names written as a list."""
        return _join_list_values(v, VALUE_SEPARATOR)


MessageDecl.model_rebuild()


class SchemaFile(BaseModel):
    """A schema file: a package name and its top-level messages.

    Attributes:
        name: Path of the schema file, used in logs and reports
        package: Package used to qualify the file's message names
        messages: Top-level message declarations in declaration order
    """
    name: str = Field(default="<unnamed>", description="Schema file path")
    package: str = Field(default="", description="Package name")
    messages: Tuple[MessageDecl, ...] = Field(default=(), description="Top-level messages")

    class Config:
        frozen = True

    @property
    def package_prefix(self) -> str:
        """Prefix that turns a top-level message name into its full name."""
        if not self.package:
            return ""
        return self.package + PROTO_TYPE_SEPARATOR

    def qualify(self, type_name: str) -> str:
        """Return the full name of a top-level message of this file."""
        return self.package_prefix + type_name
