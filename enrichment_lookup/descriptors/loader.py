"""
Descriptor Set Loader

Reads descriptor set documents (YAML or JSON, JSON being valid YAML)
produced by the schema compiler front end and turns them into
`SchemaFile` models. A document holds either a `files:` list or the
mapping of a single file.

Example:
    files:
      - name: demo/orders.proto
        package: demo
        messages:
          - name: OrderEnriched
            options:
              enrichment_for: demo.OrderPlaced
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import yaml
from pydantic import ValidationError

from enrichment_lookup.descriptors.models import SchemaFile
from enrichment_lookup.errors import DescriptorLoadError


logger = logging.getLogger(__name__)


def parse_descriptor_set(content: Any, source: str = "<string>") -> List[SchemaFile]:
    """Convert an already-decoded descriptor set document into models.

    Args:
        content: Decoded YAML/JSON document
        source: Name of the document used in error messages

    Returns:
        Schema files in document order

    Raises:
        DescriptorLoadError: If the document structure is invalid
    """
    if content is None:
        return []

    if isinstance(content, dict) and "files" in content:
        raw_files = content["files"] or []
    elif isinstance(content, dict):
        raw_files = [content]
    elif isinstance(content, list):
        raw_files = content
    else:
        raise DescriptorLoadError(
            f"Descriptor set must be a mapping or a list, got {type(content).__name__}",
            source,
        )

    files = []
    for index, raw in enumerate(raw_files):
        try:
            files.append(SchemaFile.model_validate(raw))
        except ValidationError as e:
            raise DescriptorLoadError(
                f"Invalid schema file descriptor at index {index}: {e}", source
            )
    return files


def parse_descriptor_string(document: str) -> List[SchemaFile]:
    """Parse a descriptor set from YAML or JSON text."""
    try:
        content = yaml.safe_load(document)
    except yaml.YAMLError as e:
        raise _syntax_error(e, None)
    return parse_descriptor_set(content)


def load_descriptor_set(file_path: Union[str, Path]) -> List[SchemaFile]:
    """Load a descriptor set document from disk.

    Args:
        file_path: Path to a `.yaml`, `.yml` or `.json` document

    Returns:
        Schema files in document order

    Raises:
        DescriptorLoadError: If the file is missing, unreadable or malformed
    """
    path = Path(file_path)
    logger.debug(f"Loading descriptor set {path}")
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise _syntax_error(e, str(path))
    except FileNotFoundError:
        raise DescriptorLoadError("Descriptor set not found", str(path))
    except PermissionError:
        raise DescriptorLoadError("Permission denied reading descriptor set", str(path))
    except UnicodeDecodeError as e:
        raise DescriptorLoadError(f"File encoding error: {e}", str(path))

    files = parse_descriptor_set(content, str(path))
    logger.debug(f"Loaded {len(files)} schema file(s) from {path}")
    return files


def load_descriptor_sets(file_paths: Iterable[Union[str, Path]]) -> List[SchemaFile]:
    """Load several descriptor sets, concatenating their files in order."""
    files: List[SchemaFile] = []
    for file_path in file_paths:
        files.extend(load_descriptor_set(file_path))
    return files


def _syntax_error(error: yaml.YAMLError, source) -> DescriptorLoadError:
    line_number = None
    column = None
    mark = getattr(error, 'problem_mark', None)
    if mark is not None:
        line_number = mark.line + 1
        column = mark.column + 1

    problem = getattr(error, 'problem', None)
    message = f"YAML parsing error: {problem or error}"
    return DescriptorLoadError(message, source, line_number, column)
