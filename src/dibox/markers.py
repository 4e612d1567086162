from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any, NamedTuple, TypeVar, Union, get_args, get_origin

T = TypeVar("T")
_ANNOTATED_MARKER_MIN_ARGS = 2


class Inject(NamedTuple):
    """Tag a field for container-driven injection.

    Attach ``Inject`` metadata to ``typing.Annotated``. Only the presence of
    the marker matters; ``tag`` is kept for callers that want to label fields
    and is never interpreted by the container.

    Examples:
        .. code-block:: python

            @dataclass
            class Handler:
                repository: Annotated[Repository, Inject()] = None

    """

    tag: str = "*"


if TYPE_CHECKING:
    Injected = Union[T, T]  # noqa: UP007,PYI016
    """Shorthand for ``Annotated[T, Inject()]``.

    Examples:
        .. code-block:: python

            class Handler:
                repository: Injected[Repository]
    """

else:

    class Injected:
        """Shorthand for ``Annotated[T, Inject()]``.

        Examples:
            .. code-block:: python

                class Handler:
                    repository: Injected[Repository]

        """

        def __class_getitem__(cls, item: T) -> Annotated[T, Inject]:
            if get_origin(item) is Annotated:
                args = get_args(item)
                inner = args[0]
                metadata = args[1:]
                return _build_annotated((inner, *metadata, Inject()))
            return _build_annotated((item, Inject()))


def extract_inject_marker(annotation: Any) -> Inject | None:
    """Return the ``Inject`` marker attached to an annotation, if any."""
    if get_origin(annotation) is not Annotated:
        return None
    annotation_args = get_args(annotation)
    if len(annotation_args) < _ANNOTATED_MARKER_MIN_ARGS:
        return None
    metadata = annotation_args[1:]
    return next(
        (item for item in metadata if isinstance(item, Inject)),
        None,
    )


def is_inject_annotation(annotation: Any) -> bool:
    """Return True when annotation is Annotated[..., Inject(...)]."""
    return extract_inject_marker(annotation) is not None


def strip_inject_annotation(annotation: Any) -> Any:
    """Strip the Inject marker while preserving other Annotated metadata."""
    if not is_inject_annotation(annotation):
        return annotation

    annotation_args = get_args(annotation)
    parameter_type = annotation_args[0]
    metadata = annotation_args[1:]
    filtered_metadata = tuple(item for item in metadata if not isinstance(item, Inject))
    if not filtered_metadata:
        return parameter_type
    return _build_annotated((parameter_type, *filtered_metadata))


def _build_annotated(params: tuple[object, ...]) -> Any:
    """Return Annotated[...] with a pre-built params tuple (Py 3.10+ compatible)."""
    try:
        return Annotated.__class_getitem__(params)  # type: ignore[attr-defined]
    except AttributeError:
        return Annotated.__getitem__(params)  # type: ignore[attr-defined]


__all__ = [
    "Inject",
    "Injected",
    "extract_inject_marker",
    "is_inject_annotation",
    "strip_inject_annotation",
]
