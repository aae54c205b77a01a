"""Task model for the to-do list.

A task is a short line of text with a completion flag and a creation stamp.
Tasks serialize to the camelCase record layout used by the local store
(``{"id", "text", "done", "createdAt"}``).
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, replace
from typing import Any, Callable, Container

from ..constants import ID_MAX_ATTEMPTS, ID_SUFFIX_LENGTH
from ..utils import _BASE36_DIGITS, _to_base36


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _random_suffix(length: int = ID_SUFFIX_LENGTH) -> str:
    return "".join(secrets.choice(_BASE36_DIGITS) for _ in range(length))


def generate_id(
    now_ms: int,
    taken: Container[str] = (),
    suffix: Callable[[], str] = _random_suffix,
) -> str:
    """Build a task id: base-36 timestamp followed by a short random suffix.

    Candidates already present in *taken* are rejected and regenerated.
    """
    stamp = _to_base36(now_ms)
    for _ in range(ID_MAX_ATTEMPTS):
        candidate = stamp + suffix()
        if candidate not in taken:
            return candidate
    raise RuntimeError(f"Could not generate a unique task id after {ID_MAX_ATTEMPTS} attempts")


def normalize_text(raw: Any) -> str:
    """Trim user input; anything that is not a string counts as blank."""
    if not isinstance(raw, str):
        return ""
    return raw.strip()


# ---------------------------------------------------------------------------
# Task dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Task:
    """A single to-do entry.

    Instances are immutable; toggling produces a new record with the same
    ``id`` and ``created_at``.
    """

    id: str
    text: str
    done: bool = False
    created_at: int = 0

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted record layout."""
        return {
            "id": self.id,
            "text": self.text,
            "done": self.done,
            "createdAt": self.created_at,
        }

    # ------------------------------------------------------------------
    # Status helpers
    # ------------------------------------------------------------------

    def toggled(self) -> "Task":
        return replace(self, done=not self.done)
