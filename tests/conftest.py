"""
Pytest configuration and fixtures for test isolation.
"""
import logging
import os

import pytest

from enrichment_lookup.descriptors.models import FieldDecl, MessageDecl, SchemaFile


@pytest.fixture(autouse=True, scope="function")
def reset_environment():
    """Reset environment variables between tests."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def isolate_config_files(tmp_path, monkeypatch):
    """Keep user and project configuration files out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("ENRICHMENT_LOOKUP_"):
            monkeypatch.delenv(name)
    yield


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers installed by the CLI logging setup."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def field(name, by=None, **options):
    if by is not None:
        options["by"] = by
    return FieldDecl(name=name, options=options)


def message(name, fields=(), nested=(), **options):
    return MessageDecl(name=name, fields=list(fields), nested=list(nested), options=options)


@pytest.fixture
def demo_file():
    """A schema file mixing all three declaration styles."""
    return SchemaFile(
        name="demo/orders.proto",
        package="demo",
        messages=[
            message("OrderPlaced"),
            message("OrderEnriched", enrichment_for="demo.OrderPlaced"),
            message("TaskView", fields=[
                field("task_id", by="demo.TaskCreated.task_id|demo.TaskClosed.task_id"),
                field("title"),
            ]),
            message("UserRenamed", nested=[
                message("Enrichment", fields=[field("old_name", by="name")]),
            ]),
        ],
    )
