"""Residual diagnostic result schema."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Optional

Decision = Literal["reject", "fail to reject", "not evaluated"]


@dataclass(frozen=True)
class DiagnosticResult:
    test_name: str
    statistic: float
    p_value: float
    alpha: float
    decision: Decision
    null_hypothesis: str
    note: Optional[str] = None

    @classmethod
    def from_p_value(
        cls,
        test_name: str,
        statistic: float,
        p_value: float,
        *,
        alpha: float,
        null_hypothesis: str,
        note: Optional[str] = None,
    ) -> "DiagnosticResult":
        decision: Decision = "reject" if p_value < alpha else "fail to reject"
        return cls(
            test_name=test_name,
            statistic=float(statistic),
            p_value=float(p_value),
            alpha=alpha,
            decision=decision,
            null_hypothesis=null_hypothesis,
            note=note,
        )

    @classmethod
    def not_evaluated(cls, test_name: str, *, alpha: float, null_hypothesis: str, note: str) -> "DiagnosticResult":
        return cls(
            test_name=test_name,
            statistic=math.nan,
            p_value=math.nan,
            alpha=alpha,
            decision="not evaluated",
            null_hypothesis=null_hypothesis,
            note=note,
        )

    @property
    def rejected(self) -> bool:
        return self.decision == "reject"


__all__ = ["Decision", "DiagnosticResult"]
