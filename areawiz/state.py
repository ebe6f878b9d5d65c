"""Gate state: single source of truth passed through the confirm/commit graph."""

from enum import Enum
from typing import Any, Literal, TypedDict


class Outcome(str, Enum):
    ABORTED = "aborted"
    COMMITTED = "committed"


class GateState(TypedDict, total=False):
    answers: dict[str, Any]  # Resolved accumulator. Read-only for the gate.
    settings_confirmed: bool | None  # None until the operator is asked.
    commit_confirmed: bool | None
    preview: Any  # GenerationResult from the generation preview.
    status: Literal[
        "pending", "settings_review", "generation_preview", "aborted", "committed"
    ]
    output_path: Any  # Whatever build(True) returned.
