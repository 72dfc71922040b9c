"""Status payload shared by the gate checkers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

PASS = "PASS"
BLOCKED = "BLOCKED"


@dataclass
class GateResult:
    """Outcome of one gate check, printed as a single JSON line."""

    status: str
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def passed(cls, **details: Any) -> GateResult:
        return cls(PASS, details)

    @classmethod
    def blocked(cls, **details: Any) -> GateResult:
        return cls(BLOCKED, details)

    @property
    def ok(self) -> bool:
        return self.status == PASS

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, **self.details}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
