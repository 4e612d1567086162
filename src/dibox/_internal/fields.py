from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Any, ClassVar, ForwardRef, get_origin

from typing_extensions import Format, evaluate_forward_ref, get_annotations

from dibox._internal.type_checks import (
    Kind,
    is_contract_type,
    is_record_type,
    strip_indirections,
)
from dibox.markers import Inject, extract_inject_marker, strip_inject_annotation

_INJECTABLE_KINDS = frozenset({Kind.CONTRACT, Kind.RECORD})
_INJECT_TAG_PATTERN = re.compile(r"\bInject(?:ed)?\b")
_CLASSVAR_PATTERN = re.compile(r"^(?:typing(?:_extensions)?\.)?ClassVar\b")
_EVALUATION_ERRORS = (NameError, AttributeError, TypeError)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Injection metadata for one annotated field of a class.

    ``unresolved_annotation`` holds the source text of an injection-tagged
    annotation that could not be evaluated; ``declared_type`` and ``kind``
    are ``None`` in that case.
    """

    name: str
    declared_type: Any
    kind: Kind | None
    marker: Inject | None
    mutable: bool
    unresolved_annotation: str | None = None

    @property
    def is_candidate(self) -> bool:
        """Return true when the container should populate this field."""
        return self.marker is not None and self.kind in _INJECTABLE_KINDS and self.mutable

    @property
    def is_unresolved_candidate(self) -> bool:
        """Return true for a tagged, mutable field whose type cannot be evaluated."""
        return self.unresolved_annotation is not None and self.mutable


def declared_kind(declared_type: Any) -> Kind | None:
    """Return ``CONTRACT`` or ``RECORD`` for injectable field types, else ``None``."""
    candidate = strip_indirections(declared_type)
    if is_contract_type(candidate):
        return Kind.CONTRACT
    if is_record_type(candidate):
        return Kind.RECORD
    return None


def is_externally_mutable(owner: type[Any], name: str) -> bool:
    """Return false for private names and read-only properties."""
    if name.startswith("_"):
        return False
    attribute = getattr(owner, name, None)
    return not (isinstance(attribute, property) and attribute.fset is None)


def evaluate_annotation(annotation: Any, owner: type[Any]) -> Any:
    """Evaluate one raw annotation in the namespace of the class declaring it.

    Raises ``NameError`` (or ``AttributeError``/``TypeError``) when the
    annotation refers to something missing at runtime.
    """
    if isinstance(annotation, str):
        module = sys.modules.get(owner.__module__)
        globalns = vars(module) if module is not None else {}
        return eval(annotation, globalns, dict(vars(owner)))  # noqa: S307
    if isinstance(annotation, ForwardRef):
        return evaluate_forward_ref(annotation, owner=owner)
    return annotation


def _annotation_text(annotation: Any) -> str:
    if isinstance(annotation, ForwardRef):
        return annotation.__forward_arg__
    if isinstance(annotation, str):
        return annotation
    return repr(annotation)


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return _CLASSVAR_PATTERN.match(annotation.strip()) is not None
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _raw_annotations(owner: type[Any]) -> dict[str, tuple[type[Any], Any]]:
    # A subclass redeclaring a field keeps the base's position.
    collected: dict[str, tuple[type[Any], Any]] = {}
    for base in reversed(owner.__mro__):
        if base is object:
            continue
        for name, annotation in get_annotations(base, format=Format.FORWARDREF).items():
            collected[name] = (base, annotation)
    return collected


def _describe_field(
    owner: type[Any],
    base: type[Any],
    name: str,
    raw: Any,
) -> FieldDescriptor | None:
    mutable = is_externally_mutable(owner, name)
    try:
        annotation = evaluate_annotation(raw, base)
        declared_type = strip_inject_annotation(annotation)
        if isinstance(declared_type, ForwardRef):
            declared_type = evaluate_annotation(declared_type, base)
    except _EVALUATION_ERRORS:
        text = _annotation_text(raw)
        if _INJECT_TAG_PATTERN.search(text) is None:
            return None
        return FieldDescriptor(
            name=name,
            declared_type=None,
            kind=None,
            marker=None,
            mutable=mutable,
            unresolved_annotation=text,
        )

    if _is_class_var(annotation):
        return None
    return FieldDescriptor(
        name=name,
        declared_type=declared_type,
        kind=declared_kind(declared_type),
        marker=extract_inject_marker(annotation),
        mutable=mutable,
    )


def field_descriptors(owner: type[Any]) -> tuple[FieldDescriptor, ...]:
    """Describe the annotated fields of a class in declaration order.

    Base class fields come first. Annotations are evaluated one at a time, so
    an untagged field naming something imported only under ``TYPE_CHECKING``
    is skipped instead of breaking the whole class. ``ClassVar`` annotations
    are skipped.
    """
    descriptors: list[FieldDescriptor] = []
    for name, (base, raw) in _raw_annotations(owner).items():
        if _is_class_var(raw):
            continue
        descriptor = _describe_field(owner, base, name, raw)
        if descriptor is not None:
            descriptors.append(descriptor)
    return tuple(descriptors)


__all__ = [
    "FieldDescriptor",
    "declared_kind",
    "evaluate_annotation",
    "field_descriptors",
    "is_externally_mutable",
]
