"""Streaming patch compiler for svgstream.

Turns a newline-delimited stream of JSON patches into a live Document.
Text arrives in arbitrary chunks; a line split across two chunks is held
in a buffer until its terminating newline shows up.

Wire format, one object per line:

    {"op": "add", "path": "/root", "value": "bg"}
    {"op": "add", "path": "/viewport", "value": {"width": 500, "height": 500}}
    {"op": "add", "path": "/elements/bg", "value": {"key": "bg", "kind": "Rect", "props": {...}}}
    {"op": "replace", "path": "/elements/bg/props/fill", "value": "#ff0000"}
    {"op": "remove", "path": "/elements/bg/children/0"}

``set``, ``add`` and ``replace`` are all plain overwrite-or-create. ``add``
does not insert into sequences and ``replace`` does not require the target
to exist.

Failure handling:
    Lines that are not valid patches, or that nest deeper than
    MAX_NESTING_DEPTH, are dropped. Deep paths into an element
    that does not exist yet, or through a value that cannot be walked, are
    no-ops. Neither ever raises out of ``push``.

Determinism:
    The same ordered text always yields the same Document, however it was
    chunked across ``push`` calls. That is what makes ``replay`` valid.

Thread Safety:
    A PatchCompiler is single-stream state. Drive one instance from one
    stream at a time; use a fresh instance per stream.

"""

import copy
import json
import re
import time
from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any, Literal

from svgstream.document import Document
from svgstream.errors import PatchError
from svgstream.utils.logger import get_logger

logger = get_logger(__name__)

PatchOp = Literal["set", "add", "replace", "remove"]

WRITE_OPS: frozenset[str] = frozenset(("set", "add", "replace"))
PATCH_OPS: frozenset[str] = WRITE_OPS | {"remove"}

_ELEMENTS_PREFIX = "/elements/"
_CODE_FENCE = "```"
_INDEX = re.compile(r"[0-9]+")

# Deepest value or path a patch may carry. Anything deeper is dropped so that
# copying and serializing the document stays within the recursion limit.
MAX_NESTING_DEPTH = 64


@dataclass(frozen=True, slots=True)
class Patch:
    """A single instruction mutating the document.

    ``value`` is None for ``remove``.

    """

    op: PatchOp
    path: str
    value: Any = None

    @property
    def is_write(self) -> bool:
        """True for set/add/replace."""
        return self.op in WRITE_OPS


def parse_patch(line: str) -> Patch:
    """Parse one line of the stream into a Patch.

    Args:
        line: A single complete line (surrounding whitespace is ignored)

    Returns:
        The parsed Patch

    Raises:
        PatchError: If the line is not a JSON object with a known ``op`` and
            a string ``path``, or nests deeper than MAX_NESTING_DEPTH
    """
    try:
        raw = json.loads(line)
    except ValueError as e:
        raise PatchError("Line is not valid JSON", line) from e
    except RecursionError as e:
        raise PatchError("Line is nested too deeply", line) from e

    if not isinstance(raw, dict):
        raise PatchError("Patch must be a JSON object", line)

    op = raw.get("op")
    if op not in PATCH_OPS:
        raise PatchError(f"Unknown patch op {op!r}", line)

    path = raw.get("path")
    if not isinstance(path, str):
        raise PatchError("Patch path must be a string", line)

    if path.count("/") > MAX_NESTING_DEPTH:
        raise PatchError("Patch path is nested too deeply", line)

    value = None if op == "remove" else raw.get("value")
    if _too_deep(value):
        raise PatchError("Patch value is nested too deeply", line)

    return Patch(op=op, path=path, value=value)


def _too_deep(value: Any, limit: int = MAX_NESTING_DEPTH) -> bool:
    """True if value nests dicts or lists more than limit levels deep."""
    stack = [(value, 0)]
    while stack:
        item, depth = stack.pop()
        if isinstance(item, dict):
            children = item.values()
        elif isinstance(item, list):
            children = item
        else:
            continue
        if depth >= limit:
            return True
        stack.extend((child, depth + 1) for child in children)
    return False


@dataclass(frozen=True, slots=True)
class CompileResult:
    """Outcome of one ``push``: the fresh snapshot and the patches applied.

    Unpacks as a pair:

        >>> document, patches = compiler.push(chunk)

    Patch values are shared with the compiler; treat them as read-only.

    """

    document: Document
    patches: tuple[Patch, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        yield self.document
        yield self.patches


class PatchCompiler:
    """Incrementally compile patch lines into a Document.

    Usage:
        >>> compiler = PatchCompiler()
        >>> result = compiler.push('{"op":"add","path":"/root","value":"bg"}\\n')
        >>> result.document.root
        'bg'
        >>> result = compiler.push('{"op":"add","path":"/elem')  # held in buffer
        >>> result.patches
        ()

    """

    __slots__ = ("_buffer", "_root", "_viewport", "_elements")

    def __init__(self) -> None:
        self._buffer = ""
        self._root: Any = None
        self._viewport: Any = None
        self._elements: dict[str, Any] = {}

    @property
    def buffer(self) -> str:
        """Text received but not yet terminated by a newline."""
        return self._buffer

    def push(self, chunk: str) -> CompileResult:
        """Feed a chunk of stream text.

        Every complete line in the buffer is parsed and applied; the
        unterminated remainder is kept for the next call.

        Args:
            chunk: Any slice of the stream, possibly splitting a line

        Returns:
            CompileResult with a fresh snapshot and the patches applied by
            this call, in arrival order
        """
        self._buffer += chunk
        *lines, self._buffer = self._buffer.split("\n")
        return CompileResult(self.snapshot(), self._apply_lines(lines))

    def flush(self) -> CompileResult:
        """Process the unterminated trailing line at end of stream.

        Generators often omit the final newline. A leftover Markdown code
        fence is discarded rather than parsed.
        """
        remainder, self._buffer = self._buffer, ""
        lines = [] if remainder.strip().startswith(_CODE_FENCE) else [remainder]
        return CompileResult(self.snapshot(), self._apply_lines(lines))

    def snapshot(self) -> Document:
        """Return an independent copy of the current document."""
        return Document.from_raw(
            self._root,
            copy.deepcopy(self._viewport),
            copy.deepcopy(self._elements),
        )

    def reset(self) -> None:
        """Discard the buffer and the document under construction."""
        self._buffer = ""
        self._root = None
        self._viewport = None
        self._elements = {}

    def apply(self, patch: Patch) -> None:
        """Apply one already-parsed patch to the document.

        The value is copied, so later changes to it do not leak in.

        Raises:
            PatchError: If the value or path is nested too deeply
        """
        if patch.path.count("/") > MAX_NESTING_DEPTH or _too_deep(patch.value):
            raise PatchError("Patch is nested too deeply", patch.path)
        self._apply(replace(patch, value=copy.deepcopy(patch.value)))

    def _apply(self, patch: Patch) -> None:
        # Values come straight from json.loads and are owned by the compiler
        if patch.path == "/root":
            self._root = patch.value if patch.is_write else None
        elif patch.path == "/viewport":
            self._viewport = patch.value if patch.is_write else None
        elif patch.path.startswith(_ELEMENTS_PREFIX):
            self._apply_element(patch)
        else:
            logger.debug("Ignoring patch with unrecognized path %r", patch.path)

    def _apply_lines(self, lines: list[str]) -> tuple[Patch, ...]:
        applied: list[Patch] = []
        for line in lines:
            if not line.strip():
                continue
            try:
                patch = parse_patch(line)
            except PatchError as e:
                logger.debug("Dropped stream line: %s", e)
                continue
            self._apply(patch)
            applied.append(patch)
        return tuple(applied)

    def _apply_element(self, patch: Patch) -> None:
        parts = [p for p in patch.path.split("/") if p]
        if len(parts) < 2:
            return
        key = parts[1]

        if len(parts) == 2:
            if patch.is_write:
                self._elements[key] = patch.value
            else:
                # Children pointing at key are left dangling
                self._elements.pop(key, None)
            return

        element = self._elements.get(key)
        if element is None:
            logger.debug("Deep patch for unknown element %r ignored", key)
            return

        parent = element
        for segment in parts[2:-1]:
            parent = _step(parent, segment)
            if parent is None:
                logger.debug("Unreachable patch path %r ignored", patch.path)
                return

        last = parts[-1]
        if patch.is_write:
            _assign(parent, last, patch.value)
        else:
            _delete(parent, last)


def _index(segment: str) -> int | None:
    return int(segment) if _INDEX.fullmatch(segment) else None


def _step(container: Any, segment: str) -> Any:
    """Descend one path segment, creating a missing mapping on the way."""
    if isinstance(container, dict):
        child = container.get(segment)
        if child is None:
            child = container[segment] = {}
        return child if isinstance(child, dict | list) else None
    if isinstance(container, list):
        index = _index(segment)
        if index is None or not 0 <= index < len(container):
            return None
        child = container[index]
        if child is None:
            child = container[index] = {}
        return child if isinstance(child, dict | list) else None
    return None


def _assign(container: Any, segment: str, value: Any) -> None:
    if isinstance(container, dict):
        container[segment] = value
    elif isinstance(container, list):
        index = _index(segment)
        if index is None:
            return
        if 0 <= index < len(container):
            container[index] = value
        elif index == len(container):
            container.append(value)


def _delete(container: Any, segment: str) -> None:
    if isinstance(container, dict):
        container.pop(segment, None)
    elif isinstance(container, list):
        index = _index(segment)
        if index is not None and 0 <= index < len(container):
            del container[index]


def compile_text(raw_text: str) -> Document:
    """Compile a complete stream in one go, including a trailing partial line."""
    compiler = PatchCompiler()
    compiler.push(raw_text)
    return compiler.flush().document


def replay(
    raw_text: str,
    *,
    chunk_size: int | None = None,
    delay: float = 0.0,
) -> Iterator[CompileResult]:
    """Re-drive a fresh compiler from previously stored stream text.

    Yields one result per non-blank line (or per ``chunk_size`` characters
    when given), then a final flush result. Each intermediate snapshot
    equals what a live run produced at the same prefix of input.

    Args:
        raw_text: The stored stream text
        chunk_size: Feed fixed-size slices instead of whole lines
        delay: Seconds to sleep between steps, for animated previews

    Yields:
        CompileResult per step
    """
    compiler = PatchCompiler()

    if chunk_size is not None:
        if chunk_size <= 0:
            msg = f"chunk_size must be positive, got {chunk_size}"
            raise ValueError(msg)
        steps = [raw_text[i : i + chunk_size] for i in range(0, len(raw_text), chunk_size)]
    else:
        steps = [f"{line}\n" for line in raw_text.split("\n") if line.strip()]

    for i, step in enumerate(steps):
        if delay and i:
            time.sleep(delay)
        yield compiler.push(step)

    yield compiler.flush()


__all__ = [
    "MAX_NESTING_DEPTH",
    "PATCH_OPS",
    "CompileResult",
    "Patch",
    "PatchCompiler",
    "compile_text",
    "parse_patch",
    "replay",
]
