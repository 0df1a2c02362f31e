"""Template model for the projector.

Templates are authored as plain JSON-like values and parsed into a closed
set of frozen variants:

    ["key"]                                   -> SequenceOfLeafRefs
    {"total": "total"}                        -> MappingTemplate[KeyedLeaf]
    {"id": {"keyName": "issues",
            "fields": ["id"]}}                -> MappingTemplate[FieldDescriptor]
    {"-": {"keyName": "issues", ...}}         -> FieldDescriptor keyed by SPLICE

A malformed template is a programming error and raises TemplateError
while parsing, before any source data is touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

SPLICE_KEY = "-"

_DESCRIPTOR_MEMBERS = {"keyName", "fields"}


class TemplateError(ValueError):
    """Raised for malformed or unknown templates."""


class SpliceKey(Enum):
    """Descriptor key meaning "no wrapping key, this entry is the whole level"."""

    SPLICE = SPLICE_KEY


SPLICE = SpliceKey.SPLICE


@dataclass(frozen=True)
class LeafRef:
    """Path to copy from the source unchanged."""

    path: str


@dataclass(frozen=True)
class KeyedLeaf:
    """Leaf reference stored under ``key`` of a mapping template."""

    key: str
    ref: LeafRef


@dataclass(frozen=True)
class SequenceOfLeafRefs:
    """Passthrough template: the output is the resolved value itself."""

    refs: tuple[LeafRef, ...]


@dataclass(frozen=True)
class MappingTemplate:
    """Template producing a mapping, one entry per declared key."""

    entries: tuple[Union[KeyedLeaf, "FieldDescriptor"], ...]


Template = Union[SequenceOfLeafRefs, MappingTemplate]


@dataclass(frozen=True)
class FieldDescriptor:
    """Nested projection of the value found at ``lookup_path``.

    ``key`` is the output key, or SPLICE when the result replaces the
    whole level instead of being nested under a key.
    """

    key: str | SpliceKey
    fields: Template
    key_name: str | None = None

    @property
    def lookup_path(self) -> str:
        if self.key_name is not None:
            return self.key_name
        if self.key is SPLICE:
            return SPLICE_KEY
        return self.key


def parse_template(raw: Any) -> Template:
    """Parse an authored template into its variant form.

    Already-parsed templates are returned unchanged.

    Raises:
        TemplateError: If ``raw`` does not describe a valid template.
    """
    return _parse(raw, "template")


def _parse(raw: Any, where: str) -> Template:
    if isinstance(raw, (SequenceOfLeafRefs, MappingTemplate)):
        return raw
    if isinstance(raw, list):
        return _parse_sequence(raw, where)
    if isinstance(raw, dict):
        return _parse_mapping(raw, where)
    raise TemplateError(
        f"{where}: expected a list of key references or a mapping, "
        f"got {type(raw).__name__}"
    )


def _parse_sequence(raw: list, where: str) -> SequenceOfLeafRefs:
    refs = []
    for index, item in enumerate(raw):
        if not isinstance(item, str):
            raise TemplateError(
                f"{where}[{index}]: key reference must be a string, "
                f"got {type(item).__name__}"
            )
        refs.append(LeafRef(item))
    return SequenceOfLeafRefs(tuple(refs))


def _parse_mapping(raw: dict, where: str) -> MappingTemplate:
    entries: list[KeyedLeaf | FieldDescriptor] = []
    for key, value in raw.items():
        if not isinstance(key, str):
            raise TemplateError(f"{where}: keys must be strings, got {key!r}")
        entry_where = f"{where}.{key}"
        if isinstance(value, str):
            if key == SPLICE_KEY:
                raise TemplateError(
                    f"{entry_where}: '{SPLICE_KEY}' requires a field descriptor"
                )
            entries.append(KeyedLeaf(key, LeafRef(value)))
        elif isinstance(value, dict):
            entries.append(_parse_descriptor(key, value, entry_where))
        else:
            raise TemplateError(
                f"{entry_where}: expected a key reference or a field descriptor, "
                f"got {type(value).__name__}"
            )

    if len(entries) > 1 and any(
        isinstance(e, FieldDescriptor) and e.key is SPLICE for e in entries
    ):
        raise TemplateError(
            f"{where}: '{SPLICE_KEY}' must be the only entry at its level"
        )
    return MappingTemplate(tuple(entries))


def _parse_descriptor(key: str, raw: dict, where: str) -> FieldDescriptor:
    unknown = set(raw) - _DESCRIPTOR_MEMBERS
    if unknown:
        raise TemplateError(
            f"{where}: unknown descriptor members {sorted(unknown)}; "
            f"allowed: {sorted(_DESCRIPTOR_MEMBERS)}"
        )
    if "fields" not in raw:
        raise TemplateError(f"{where}: field descriptor is missing 'fields'")

    key_name = raw.get("keyName")
    if key_name is not None and not isinstance(key_name, str):
        raise TemplateError(
            f"{where}.keyName: must be a string, got {type(key_name).__name__}"
        )

    return FieldDescriptor(
        key=SPLICE if key == SPLICE_KEY else key,
        fields=_parse(raw["fields"], f"{where}.fields"),
        key_name=key_name,
    )
