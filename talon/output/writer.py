# Result file writer.
#
# The result file is append-only: it is created if missing, never truncated
# and never rotated, so results accumulate across runs.

import os

from ..exceptions import OutputError
from ..utils.logging import debug

RESULT_FILE_MODE = 0o644


def append_result(path: str, text: str) -> None:
    """
    Append one line of text to the result file.

    Args:
        path: Result file path
        text: Line to append (a newline is added if missing)

    Raises:
        OutputError: If the file cannot be opened or written
    """
    if not text.endswith("\n"):
        text += "\n"
    try:
        fd = os.open(path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, RESULT_FILE_MODE)
        with os.fdopen(fd, "a", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise OutputError(f"Could not write results to {path}: {e}") from e
    debug(f"Appended result to {path}")
