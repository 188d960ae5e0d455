"""Field translation descriptors.

A descriptor declares that a raw field (status id, department code, foreign
key, remote identifier) has a human-readable counterpart that should be
filled in at the response boundary. It is attached statically to the type,
never to an instance:

    @dataclass
    class UserView:
        status: Annotated[int, TranslateField("enum", target="status_name", enum_type=UserStatus)]
        status_name: str | None = None
        dept_code: str | None = translate_field(
            TranslateField("cache", target="dept_name", dict_key="dept")
        )
        dept_name: str | None = None
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from response_translate.core.enums import TranslateStrategy

#: Key under which a descriptor is stored in ``dataclasses.field(metadata=...)``.
TRANSLATE_METADATA_KEY = "response_translate"


@dataclass(frozen=True)
class TranslateField:
    """Translation metadata for one raw field.

    Attributes:
        strategy: Which resolver handles the field.
        target: Name of the field receiving the display value. Required; the
            raw field itself is never overwritten.
        enum_type: Enumeration for the ``ENUM`` strategy.
        dict_key: Dictionary namespace for the ``CACHE`` strategy.
        table: Table name for the ``TABLE`` strategy (``schema.table`` allowed).
        key_column: Column holding the raw code for the ``TABLE`` strategy.
        value_column: Column holding the display value for the ``TABLE`` strategy.
        remote_service: Service identifier for the ``REMOTE`` strategy.
        remote_method: Operation name for the ``REMOTE`` strategy.
        param: Free-form extra parameter handed to the remote client.
        fallback: Literal written when resolution yields nothing. Empty means
            "write the raw value".
    """

    strategy: TranslateStrategy
    target: str = ""
    enum_type: type | None = None
    dict_key: str = ""
    table: str = ""
    key_column: str = ""
    value_column: str = ""
    remote_service: str = ""
    remote_method: str = ""
    param: str = ""
    fallback: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "strategy", TranslateStrategy.coerce(self.strategy))


def translate_field(descriptor: TranslateField, default: Any = None, **kwargs: Any) -> Any:
    """Build a ``dataclasses.field`` carrying *descriptor* in its metadata."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TRANSLATE_METADATA_KEY] = descriptor
    if "default_factory" in kwargs:
        return dataclasses.field(metadata=metadata, **kwargs)
    return dataclasses.field(default=default, metadata=metadata, **kwargs)


def find_descriptor(candidates: Any) -> TranslateField | None:
    """Return the first TranslateField in *candidates*, or None."""
    for item in candidates:
        if isinstance(item, TranslateField):
            return item
    return None
