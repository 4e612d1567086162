from __future__ import annotations

from typing import Annotated, get_args, get_origin

from dibox.markers import (
    Inject,
    Injected,
    extract_inject_marker,
    is_inject_annotation,
    strip_inject_annotation,
)


class Database:
    pass


def test_inject_marker_is_value_based_and_hashable() -> None:
    marker = Inject("primary")

    assert marker.tag == "primary"
    assert Inject().tag == "*"
    assert marker == Inject("primary")
    assert marker != Inject()
    assert {marker: "database"}[Inject("primary")] == "database"


def test_injected_builds_annotated_marker() -> None:
    annotation = Injected[Database]

    assert get_origin(annotation) is Annotated
    assert get_args(annotation) == (Database, Inject())


def test_injected_preserves_existing_metadata() -> None:
    annotation = Injected[Annotated[Database, "replica"]]

    assert get_args(annotation) == (Database, "replica", Inject())
    assert strip_inject_annotation(annotation) == Annotated[Database, "replica"]


def test_extract_inject_marker() -> None:
    assert extract_inject_marker(Annotated[Database, Inject("db")]) == Inject("db")
    assert extract_inject_marker(Annotated[Database, "other"]) is None
    assert extract_inject_marker(Database) is None


def test_is_inject_annotation_and_strip() -> None:
    assert is_inject_annotation(Injected[Database])
    assert not is_inject_annotation(Database)
    assert strip_inject_annotation(Injected[Database]) is Database
    assert strip_inject_annotation(Database) is Database
