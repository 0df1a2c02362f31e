"""Segmented path lookup into nested JSON documents.

Paths use dots between segments (``fields.status.name``) and accept
bracketed sequence indices (``issues[0].key``). A literal dot inside a key
is written as ``\\.``. Lookups never raise: anything that cannot be
resolved comes back as the ABSENT sentinel, which is distinct from a JSON
``null`` stored in the document.
"""

from typing import Any


class _Absent:
    """Marker for "this lookup or subtree produced no data"."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


def split_path(path: str) -> list[str]:
    """Split a path into its segments.

    Examples:
        split_path("fields.status.name") -> ["fields", "status", "name"]
        split_path("issues[0].key")      -> ["issues", "0", "key"]
        split_path("meta.gpt-3\\.5")     -> ["meta", "gpt-3.5"]

    Empty segments (``a..b``, leading or trailing dots) are dropped.
    """
    segments: list[str] = []
    buf: list[str] = []
    escaping = False

    for ch in path:
        if escaping:
            buf.append(ch)
            escaping = False
        elif ch == "\\":
            escaping = True
        elif ch in ".[]":
            segments.append("".join(buf))
            buf = []
        else:
            buf.append(ch)

    if escaping:
        # Trailing backslash is kept literally
        buf.append("\\")
    segments.append("".join(buf))
    return [s for s in segments if s != ""]


def resolve_path(value: Any, path: str) -> Any:
    """Return the value found at ``path`` inside ``value``, or ABSENT.

    An exact key match on a mapping wins over segmenting, so a key that
    itself contains dots is still reachable. Mappings are indexed by key and
    sequences by non-negative integer segment. Stepping into a scalar or a
    ``None`` midway resolves to ABSENT.
    """
    if isinstance(value, dict) and path in value:
        return value[path]

    segments = split_path(path)
    if not segments:
        return ABSENT

    current = value
    for segment in segments:
        if isinstance(current, dict):
            if segment not in current:
                return ABSENT
            current = current[segment]
        elif isinstance(current, list):
            if not (segment.isascii() and segment.isdecimal()):
                return ABSENT
            index = int(segment)
            if index >= len(current):
                return ABSENT
            current = current[index]
        else:
            return ABSENT
    return current


def assign_path(target: dict, path: str, value: Any) -> dict:
    """Set ``value`` at ``path`` inside ``target``, creating mappings as needed.

    Intermediate mappings already present in ``target`` are copied before
    being written to, so values shared with a source document are never
    mutated. Non-mapping intermediates are replaced. Returns ``target``.
    """
    segments = split_path(path)
    if not segments:
        target[path] = value
        return target

    current = target
    for segment in segments[:-1]:
        nxt = current.get(segment)
        nxt = dict(nxt) if isinstance(nxt, dict) else {}
        current[segment] = nxt
        current = nxt
    current[segments[-1]] = value
    return target
