"""storage.py - Flat-file codec for a DecisionTree and its StringPool.

Layout (little-endian, no header or checksum):

    node_count  u32
    node_count x { kind u8, text u32, [yes u32, no u32 if kind == QUESTION] }
    pool_length u32
    pool_bytes  pool_length bytes of NUL-terminated strings
"""

from __future__ import annotations

import struct
from pathlib import Path

import numpy as np

from .config import COUNT_FORMAT, NODE_CHILDREN_FORMAT, NODE_HEAD_FORMAT, TERMINATOR
from .exceptions import FormatError, StorageError
from .logger import get_logger
from .node import NODE_DTYPE, Kind, Question
from .pool import StringPool
from .tree import DecisionTree

logger = get_logger(__name__)

MIN_NODE_SIZE = struct.calcsize(NODE_HEAD_FORMAT)


def encode(tree: DecisionTree) -> bytes:
    parts = [struct.pack(COUNT_FORMAT, tree.count)]
    for _, node in tree:
        parts.append(struct.pack(NODE_HEAD_FORMAT, node.kind, tree.pool.offset_of(node.text)))
        if isinstance(node, Question):
            parts.append(struct.pack(NODE_CHILDREN_FORMAT, node.yes, node.no))
    pool_bytes = tree.pool.to_bytes()
    parts.append(struct.pack(COUNT_FORMAT, len(pool_bytes)))
    parts.append(pool_bytes)
    return b"".join(parts)


def _unpack(fmt: str, data: bytes, offset: int, what: str) -> tuple[tuple[int, ...], int]:
    size = struct.calcsize(fmt)
    if offset + size > len(data):
        raise FormatError(
            f"truncated {what}: need {size} bytes, {len(data) - offset} left", offset
        )
    return struct.unpack_from(fmt, data, offset), offset + size


def decode(data: bytes) -> DecisionTree:
    """Parse and cross-check a serialized document."""
    (count,), pos = _unpack(COUNT_FORMAT, data, 0, "node count")
    if count == 0:
        raise FormatError("document has no root node", 0)
    if count * MIN_NODE_SIZE > len(data) - pos:
        raise FormatError(f"node count {count} exceeds the file size", 0)

    nodes = np.zeros(count, dtype=NODE_DTYPE)
    for index in range(count):
        start = pos
        (kind, text), pos = _unpack(NODE_HEAD_FORMAT, data, pos, f"node {index}")
        if kind == Kind.QUESTION:
            (yes, no), pos = _unpack(NODE_CHILDREN_FORMAT, data, pos, f"node {index} children")
            if yes >= count or no >= count:
                raise FormatError(
                    f"node {index} references child {max(yes, no)} but count is {count}", start
                )
        elif kind == Kind.ANSWER:
            yes = no = 0
        else:
            raise FormatError(f"node {index} has unknown kind {kind}", start)
        nodes[index] = (kind, text, yes, no)

    (length,), pos = _unpack(COUNT_FORMAT, data, pos, "pool length")
    end = pos + length
    if end > len(data):
        raise FormatError(f"truncated pool: declared {length} bytes, {len(data) - pos} present", pos)
    if end < len(data):
        raise FormatError(f"{len(data) - end} trailing bytes after pool", end)
    if length and data[end - 1] != TERMINATOR:
        raise FormatError("pool does not end with a terminator", end - 1)
    pool = StringPool.from_bytes(data[pos:end])

    for index in range(count):
        offset = int(nodes[index]["text"])
        if not pool.is_string_start(offset):
            raise FormatError(f"node {index} text offset {offset} is not a pooled string")
    _check_shape(nodes)
    return DecisionTree.from_table(pool, nodes)


def _check_shape(nodes: np.ndarray) -> None:
    """Reject cycles and shared children reachable from the root."""
    seen = {0}
    stack = [0]
    while stack:
        index = stack.pop()
        row = nodes[index]
        if row["kind"] != Kind.QUESTION:
            continue
        for child in (int(row["yes"]), int(row["no"])):
            if child in seen:
                raise FormatError(f"node {child} is reached more than once from the root")
            seen.add(child)
            stack.append(child)


def read(path: str | Path) -> DecisionTree:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise StorageError(path, str(e)) from e
    tree = decode(data)
    logger.info(f"[storage.read] Loaded {tree.count} nodes, {len(tree.pool)} pool bytes from {path}")
    return tree


def write(tree: DecisionTree, path: str | Path) -> None:
    path = Path(path)
    data = encode(tree)
    try:
        path.write_bytes(data)
    except OSError as e:
        raise StorageError(path, str(e)) from e
    logger.info(f"[storage.write] Wrote {tree.count} nodes ({len(data)} bytes) to {path}")
