"""Read the batch input table, turning pandas failures into ``ConfigParseError``.

Parse failures carry an ``excerpt``: the offending line and its neighbours,
already formatted for the terminal (``">>   3 | bad,1,2"`` marks the line pandas
complained about). The CLI prints it under the error line.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

import pandas as pd

from .errors import ConfigParseError

# pandas reports "line N" (C engine) or "row N" (python engine)
_LINE_REF = re.compile(r"\b(?:line|row)\s+(\d+)", re.IGNORECASE)


def _failing_line(exc: Exception) -> Optional[int]:
    match = _LINE_REF.search(str(exc))
    return int(match.group(1)) if match else None


def _excerpt(path: Path, line: int, radius: int) -> list[str]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return []
    if not 1 <= line <= len(text):
        return []
    first, last = max(1, line - radius), min(len(text), line + radius)
    width = len(str(last))
    return [
        f"{'>>' if n == line else '  '} {n:>{width}} | {text[n - 1]}"
        for n in range(first, last + 1)
    ]


def read_csv_with_context(path: Path | str, context_lines: int = 2) -> pd.DataFrame:
    """Load ``path`` as a DataFrame.

    Every failure is a ``ConfigParseError`` whose ``reason`` is one of
    ``csv_missing``, ``csv_unreadable`` (I/O or non UTF-8 bytes), ``csv_empty``
    or ``csv_parse_error``. The last one adds ``line_number`` and ``excerpt``
    when pandas names the line.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigParseError(ctx={"reason": "csv_missing", "path": str(path)})
    try:
        return pd.read_csv(path)
    except pd.errors.EmptyDataError as exc:
        raise ConfigParseError(ctx={"reason": "csv_empty", "path": str(path)}, cause=exc)
    except (UnicodeDecodeError, OSError) as exc:
        raise ConfigParseError(
            ctx={"reason": "csv_unreadable", "path": str(path), "error": f"{type(exc).__name__}: {exc}"},
            cause=exc,
        )
    except pd.errors.ParserError as exc:
        ctx: dict[str, object] = {"reason": "csv_parse_error", "path": str(path), "pandas_error": str(exc)}
        line = _failing_line(exc)
        if line is not None:
            ctx["line_number"] = line
            excerpt = _excerpt(path, line, context_lines)
            if excerpt:
                ctx["excerpt"] = excerpt
        raise ConfigParseError(ctx=ctx, cause=exc)
