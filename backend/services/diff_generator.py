"""
Diff Generator Service - Line-level diffs with context compression for change review
"""

from __future__ import annotations

from typing import NamedTuple

from models.diff import ELLIPSIS, DiffLine, DiffLineType, DiffResult

DEFAULT_CONTEXT_LINES = 3
DEFAULT_NO_CHANGES_MESSAGE = "No changes detected between original and modified content."


def split_lines(content: str) -> list[str]:
    """Split on newline; an empty file has no lines at all"""
    if not content:
        return []
    return content.split("\n")


class LCSLine(NamedTuple):
    """A line matched in both texts"""

    content: str
    original_index: int  # 0-indexed
    modified_index: int  # 0-indexed


class DiffGenerator:
    """Generate reviewable line diffs between two file snapshots"""

    def __init__(
        self,
        context_lines: int = DEFAULT_CONTEXT_LINES,
        no_changes_message: str = DEFAULT_NO_CHANGES_MESSAGE,
    ):
        self.context_lines = context_lines
        self.no_changes_message = no_changes_message

    def generate_diff(
        self,
        original_content: str,
        new_content: str,
        file_path: str = "",
    ) -> DiffResult:
        """Generate structured, context-compressed diff from original and new content"""
        full_diff = self.build_full_diff(original_content, new_content)
        added = sum(1 for line in full_diff if line.type == DiffLineType.ADDED)
        removed = sum(1 for line in full_diff if line.type == DiffLineType.REMOVED)

        return DiffResult(
            file_path=file_path,
            lines=self.compress_diff(full_diff),
            added_count=added,
            removed_count=removed,
        )

    def compute_lcs(self, original: list[str], modified: list[str]) -> list[LCSLine]:
        """Longest common subsequence of lines, as matched index pairs"""
        m = len(original)
        n = len(modified)

        # dp[i][j] = LCS length of original[:i] and modified[:j]
        dp = [[0] * (n + 1) for _ in range(m + 1)]
        for i in range(1, m + 1):
            prev_row = dp[i - 1]
            row = dp[i]
            for j in range(1, n + 1):
                if original[i - 1] == modified[j - 1]:
                    row[j] = prev_row[j - 1] + 1
                else:
                    row[j] = max(prev_row[j], row[j - 1])

        lcs = []
        i, j = m, n
        while i > 0 and j > 0:
            if original[i - 1] == modified[j - 1]:
                lcs.append(LCSLine(original[i - 1], i - 1, j - 1))
                i -= 1
                j -= 1
            elif dp[i - 1][j] > dp[i][j - 1]:
                i -= 1
            else:
                # ties step the modified cursor
                j -= 1

        lcs.reverse()
        return lcs

    def build_full_diff(self, original_content: str, new_content: str) -> list[DiffLine]:
        """Uncompressed diff: every line tagged added, removed or unchanged"""
        original_lines = split_lines(original_content)
        new_lines = split_lines(new_content)

        result: list[DiffLine] = []
        orig_idx = 0
        new_idx = 0

        def flush(orig_end: int, new_end: int) -> None:
            nonlocal orig_idx, new_idx
            while orig_idx < orig_end:
                result.append(
                    DiffLine(
                        type=DiffLineType.REMOVED,
                        content=original_lines[orig_idx],
                        original_line_number=orig_idx + 1,
                    )
                )
                orig_idx += 1
            while new_idx < new_end:
                result.append(
                    DiffLine(
                        type=DiffLineType.ADDED,
                        content=new_lines[new_idx],
                        new_line_number=new_idx + 1,
                    )
                )
                new_idx += 1

        for match in self.compute_lcs(original_lines, new_lines):
            flush(match.original_index, match.modified_index)
            result.append(
                DiffLine(
                    type=DiffLineType.UNCHANGED,
                    content=match.content,
                    original_line_number=match.original_index + 1,
                    new_line_number=match.modified_index + 1,
                )
            )
            orig_idx += 1
            new_idx += 1

        flush(len(original_lines), len(new_lines))
        return result

    def compress_diff(self, full_diff: list[DiffLine]) -> list[DiffLine]:
        """Keep changes plus nearby unchanged lines, eliding the rest behind '...'"""
        if not any(line.is_change for line in full_diff):
            return [DiffLine(type=DiffLineType.CONTEXT, content=self.no_changes_message)]

        compressed: list[DiffLine] = []
        last_emitted = -1
        in_window = False
        distance = 0

        def emit(index: int, line: DiffLine) -> None:
            nonlocal last_emitted
            # Any gap after an earlier window collapses into one marker
            if last_emitted >= 0 and index > last_emitted + 1:
                compressed.append(self._ellipsis())
            compressed.append(line)
            last_emitted = index

        for index, line in enumerate(full_diff):
            if line.is_change:
                # Leading context only from lines not already shown
                start = max(last_emitted + 1, index - self.context_lines)
                for ctx_index in range(start, index):
                    emit(ctx_index, self._as_context(full_diff[ctx_index]))
                emit(index, line)
                in_window = True
                distance = 0
            elif in_window:
                distance += 1
                if distance <= self.context_lines:
                    emit(index, self._as_context(line))
                else:
                    in_window = False

        if last_emitted < len(full_diff) - 1:
            compressed.append(self._ellipsis())

        return compressed

    def render_inline(self, lines: list[DiffLine]) -> str:
        """Plain-text dual-column rendering of diff lines"""
        result_lines = []
        for line in lines:
            if line.is_ellipsis:
                result_lines.append(f"{'':>5} {'':>5} ⋮")
                continue

            old = line.original_line_number or ""
            new = line.new_line_number or ""
            if line.type == DiffLineType.ADDED:
                sign = "+"
            elif line.type == DiffLineType.REMOVED:
                sign = "-"
            else:
                sign = " "
            result_lines.append(f"{old:>5} {new:>5} {sign} {line.content}")

        return "\n".join(result_lines)

    @staticmethod
    def _as_context(line: DiffLine) -> DiffLine:
        return line.model_copy(update={"type": DiffLineType.CONTEXT})

    @staticmethod
    def _ellipsis() -> DiffLine:
        return DiffLine(type=DiffLineType.CONTEXT, content=ELLIPSIS)
