"""Recursive pick/project engine for JSON responses.

project() walks a template against a source document and returns a value
shaped like the template, holding only the fields actually found. Levels
that produce nothing collapse to ABSENT instead of an empty container, so
absence propagates upward.

Pure and synchronous: inputs are only read, every call builds fresh output
containers. Leaf values found in the source are shared, not copied.
"""

import logging
from typing import Any

from jira_projector.paths import ABSENT, assign_path, resolve_path
from jira_projector.templates import (
    SPLICE,
    SPLICE_KEY,
    FieldDescriptor,
    KeyedLeaf,
    MappingTemplate,
    SequenceOfLeafRefs,
    SpliceKey,
    parse_template,
)

logger = logging.getLogger(__name__)

__all__ = ["ABSENT", "Accumulator", "collect_array", "deep_merge", "project"]


def deep_merge(base: dict, incoming: dict) -> dict:
    """Merge ``incoming`` into a copy of ``base``.

    Nested mappings are merged key by key. Any other collision is resolved
    in favour of ``incoming``; sequences are not concatenated.
    """
    merged = dict(base)
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


class Accumulator:
    """Output of a single projection level.

    Writes go through one of the named strategies:

    - replace: the level becomes the given value (passthrough, splice)
    - assign: store under one flat key
    - assign_path: store under a dotted key, nesting as needed
    - merge: deep-merge a mapping into the level

    ABSENT values are never written.
    """

    def __init__(self, sequence: bool = False):
        self._value: Any = [] if sequence else {}

    def replace(self, value: Any) -> None:
        self._value = value

    def assign(self, key: str, value: Any) -> None:
        if value is ABSENT:
            return
        self._value[key] = value

    def assign_path(self, path: str, value: Any) -> None:
        if value is ABSENT:
            return
        assign_path(self._value, path, value)

    def merge(self, mapping: dict) -> None:
        if not isinstance(self._value, dict) or not self._value:
            self._value = dict(mapping)
        else:
            self._value = deep_merge(self._value, mapping)

    def result(self) -> Any:
        """Return the accumulated value, or ABSENT if nothing was collected."""
        if self._value is ABSENT:
            return ABSENT
        if isinstance(self._value, (dict, list)) and not self._value:
            return ABSENT
        return self._value


def project(source: Any, template: Any) -> Any:
    """Project ``source`` through ``template``.

    Args:
        source: Parsed JSON document (or any sub-value of one).
        template: Raw template (list / dict) or a parsed Template.

    Returns:
        The projected value, or ABSENT when no template entry resolved.

    Raises:
        TemplateError: If ``template`` is malformed.
    """
    parsed = parse_template(template)
    if isinstance(parsed, SequenceOfLeafRefs):
        return _project_passthrough(source, parsed)
    return _project_mapping(source, parsed)


def collect_array(
    sequence: list,
    key: str | SpliceKey,
    descriptor: FieldDescriptor,
) -> dict | list:
    """Project every element of ``sequence`` through ``descriptor.fields``.

    Elements projecting to ABSENT are dropped; order is preserved. Returns
    the bare list for a SPLICE key, otherwise ``{key: collected}``.
    """
    collected = []
    for element in sequence:
        picked = project(element, descriptor.fields)
        if picked is not ABSENT:
            collected.append(picked)

    dropped = len(sequence) - len(collected)
    if dropped:
        logger.debug(
            "Dropped %d of %d elements collecting '%s'",
            dropped, len(sequence), descriptor.lookup_path,
        )

    if key is SPLICE:
        return collected
    return {key: collected}


def _project_passthrough(source: Any, template: SequenceOfLeafRefs) -> Any:
    acc = Accumulator(sequence=True)
    for ref in template.refs:
        value = resolve_path(source, ref.path)
        if value is ABSENT:
            logger.debug("Skipping unresolved path '%s'", ref.path)
            continue
        acc.replace(value)
    return acc.result()


def _project_mapping(source: Any, template: MappingTemplate) -> Any:
    acc = Accumulator()
    for entry in template.entries:
        if isinstance(entry, KeyedLeaf):
            value = resolve_path(source, entry.ref.path)
            if value is ABSENT:
                logger.debug("Skipping unresolved path '%s'", entry.ref.path)
                continue
            acc.assign_path(entry.key, value)
            continue

        value = resolve_path(source, entry.lookup_path)
        if value is ABSENT:
            logger.debug("Skipping unresolved path '%s'", entry.lookup_path)
            continue

        if isinstance(value, list):
            collected = collect_array(value, entry.key, entry)
            if entry.key is SPLICE:
                acc.replace(collected)
            else:
                acc.merge(collected)
        else:
            key = SPLICE_KEY if entry.key is SPLICE else entry.key
            acc.assign(key, project(value, entry.fields))
    return acc.result()
