"""Character diff computation for TwinPane.

Produces the flat, ordered ``(operation, text)`` stream consumed by the pane
builder. Python's difflib does the matching in two stages: a line-level pass
finds unchanged and wholly added/removed lines cheaply, then each replaced
block is refined character by character. A semantic cleanup pass folds short
coincidental equalities into the surrounding edit so the result reads the
way a person would describe the change.
"""

from __future__ import annotations

from difflib import SequenceMatcher
from enum import IntEnum
from typing import Iterable, NamedTuple, Optional, Union

from .config import config
from .logger import log


class Operation(IntEnum):
    """Kind of a diff operation; values follow the usual -1/0/+1 convention."""

    DELETE = -1
    EQUAL = 0
    INSERT = 1


class DiffOperation(NamedTuple):
    """One element of the diff stream."""

    operation: Operation
    text: str


OperationLike = Union[DiffOperation, tuple[int, str]]


def coerce_operation(item: OperationLike) -> DiffOperation:
    """Accept ``DiffOperation`` or a plain ``(int, str)`` pair."""
    op, text = item
    return DiffOperation(Operation(op), text)


def compute_operations(text_a: str, text_b: str, *, cleanup: Optional[bool] = None) -> list[DiffOperation]:
    """Diff two texts into an ordered operation stream - orchestrator for diff computation.

    Args:
        text_a: The original (left) text
        text_b: The modified (right) text
        cleanup: Run semantic cleanup; defaults to ``config.semantic_cleanup``

    Returns:
        Operations whose EQUAL+DELETE texts concatenate to ``text_a`` and whose
        EQUAL+INSERT texts concatenate to ``text_b``.
    """
    if cleanup is None:
        cleanup = config.semantic_cleanup

    state = _initialize_diff_state(text_a, text_b)

    for opcode in state["matcher"].get_opcodes():
        _process_opcode(opcode, state)

    operations = merge_operations(state["ops"])
    if cleanup:
        operations = cleanup_semantic(operations)

    log.debug(f"[DIFF] {len(text_a)}/{len(text_b)} chars -> {len(operations)} operations")
    return operations


def _initialize_diff_state(text_a: str, text_b: str) -> dict:
    """Initialize state for diff computation."""
    a_lines = text_a.splitlines(keepends=True)
    b_lines = text_b.splitlines(keepends=True)
    refine = len(text_a) + len(text_b) <= config.max_diff_chars
    if not refine:
        log.warning(
            f"[DIFF] Inputs total {len(text_a) + len(text_b)} chars (limit {config.max_diff_chars}), "
            "showing line-level differences only"
        )
    return {
        "ops": [],
        "matcher": SequenceMatcher(None, a_lines, b_lines, autojunk=False),
        "a_lines": a_lines,
        "b_lines": b_lines,
        "refine": refine,
    }


def _process_opcode(opcode: tuple, state: dict) -> None:
    """Process a single line-level opcode and dispatch to the matching handler."""
    tag, i1, i2, j1, j2 = opcode
    old_block = "".join(state["a_lines"][i1:i2])
    new_block = "".join(state["b_lines"][j1:j2])

    if tag == 'equal':
        state["ops"].append(DiffOperation(Operation.EQUAL, old_block))
    elif tag == 'delete':
        state["ops"].append(DiffOperation(Operation.DELETE, old_block))
    elif tag == 'insert':
        state["ops"].append(DiffOperation(Operation.INSERT, new_block))
    elif tag == 'replace':
        _handle_replace_block(old_block, new_block, state)


def _handle_replace_block(old_block: str, new_block: str, state: dict) -> None:
    """Refine a replaced run of lines into character-level operations."""
    if not state["refine"]:
        state["ops"].append(DiffOperation(Operation.DELETE, old_block))
        state["ops"].append(DiffOperation(Operation.INSERT, new_block))
        return
    state["ops"].extend(diff_characters(old_block, new_block))


def diff_characters(old_text: str, new_text: str) -> list[DiffOperation]:
    """Plain character-level diff of two strings, replace split into delete+insert."""
    ops: list[DiffOperation] = []
    matcher = SequenceMatcher(None, old_text, new_text, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            ops.append(DiffOperation(Operation.EQUAL, old_text[i1:i2]))
            continue
        if tag in ('delete', 'replace'):
            ops.append(DiffOperation(Operation.DELETE, old_text[i1:i2]))
        if tag in ('insert', 'replace'):
            ops.append(DiffOperation(Operation.INSERT, new_text[j1:j2]))
    return ops


def merge_operations(operations: Iterable[OperationLike]) -> list[DiffOperation]:
    """Normalize an operation stream.

    Drops empty texts, joins adjacent equalities, and collapses every run of
    edits between two equalities into at most one DELETE followed by one
    INSERT.
    """
    merged: list[DiffOperation] = []
    deleted: list[str] = []
    inserted: list[str] = []

    def flush_edits() -> None:
        if deleted:
            merged.append(DiffOperation(Operation.DELETE, "".join(deleted)))
            deleted.clear()
        if inserted:
            merged.append(DiffOperation(Operation.INSERT, "".join(inserted)))
            inserted.clear()

    for item in operations:
        op = coerce_operation(item)
        if not op.text:
            continue
        if op.operation is Operation.DELETE:
            deleted.append(op.text)
        elif op.operation is Operation.INSERT:
            inserted.append(op.text)
        else:
            flush_edits()
            if merged and merged[-1].operation is Operation.EQUAL:
                merged[-1] = DiffOperation(Operation.EQUAL, merged[-1].text + op.text)
            else:
                merged.append(op)
    flush_edits()
    return merged


def _edit_weight(operations: list[DiffOperation], index: int, step: int) -> int:
    """Size of the edit run next to ``operations[index]``: the larger of its deletions and insertions."""
    deleted = inserted = 0
    i = index + step
    while 0 <= i < len(operations) and operations[i].operation is not Operation.EQUAL:
        if operations[i].operation is Operation.DELETE:
            deleted += len(operations[i].text)
        else:
            inserted += len(operations[i].text)
        i += step
    return max(deleted, inserted)


def _edit_run_bounds(operations: list[DiffOperation], index: int) -> tuple[int, int]:
    """Slice covering the equality at ``index`` and the edit runs on both sides of it."""
    start = index
    while start > 0 and operations[start - 1].operation is not Operation.EQUAL:
        start -= 1
    end = index + 1
    while end < len(operations) and operations[end].operation is not Operation.EQUAL:
        end += 1
    return start, end


def cleanup_semantic(operations: Iterable[OperationLike]) -> list[DiffOperation]:
    """Fold short equalities that sit between two edits into those edits.

    An equality is folded when it is no longer than the larger side of the
    edit run before it and of the edit run after it. A fold only grows the
    runs around it, so scanning resumes at the equality just before the
    merged run and each equality is revisited only when a neighbour changed.
    """
    ops = merge_operations(operations)
    index = 0
    while index < len(ops):
        op = ops[index]
        if op.operation is not Operation.EQUAL:
            index += 1
            continue
        before = _edit_weight(ops, index, -1)
        after = _edit_weight(ops, index, 1)
        if not (before and after and len(op.text) <= min(before, after)):
            index += 1
            continue
        start, end = _edit_run_bounds(ops, index)
        folded = [DiffOperation(Operation.DELETE, op.text), DiffOperation(Operation.INSERT, op.text)]
        ops[start:end] = merge_operations(ops[start:index] + folded + ops[index + 1:end])
        index = max(start - 1, 0)
    return ops
