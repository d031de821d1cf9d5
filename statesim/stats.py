"""
Born-rule goodness of fit: do sampled counts match |psi|^2?

A chi-squared test over every basis state with non-zero expected weight.
States with zero probability must never be drawn; a single hit fails the
test outright.
"""
from dataclasses import dataclass
from typing import Mapping

import numpy as np
from scipy import stats as scipy_stats

from .runtime import StateVector
from .sampler import probabilities, render_bitstring


@dataclass
class StatisticalTestResult:
    test_name: str
    passed: bool
    statistic: float
    p_value: float
    threshold: float
    detail: str = ""


def born_rule_chisquare(sv: StateVector, counts: Mapping[str, int],
                        significance: float = 0.001) -> StatisticalTestResult:
    probs = probabilities(sv)
    malformed = sorted(k for k in counts if len(k) != sv.n or set(k) - {"0", "1"})
    if malformed:
        return StatisticalTestResult("born_rule_chisquare", False, float("nan"), 0.0, significance,
                                     f"keys are not {sv.n}-bit strings: {malformed}")
    shots = sum(counts.values())
    observed = np.array([counts.get(render_bitstring(i, sv.n), 0) for i in range(sv.dim)], dtype=float)
    support = probs > 1e-12
    impossible = int(observed[~support].sum())
    if impossible:
        return StatisticalTestResult("born_rule_chisquare", False, float("inf"), 0.0, significance,
                                     f"{impossible} shots landed on zero-probability states")
    if support.sum() < 2:
        return StatisticalTestResult("born_rule_chisquare", True, 0.0, 1.0, significance,
                                     "single-outcome distribution")
    expected = probs[support] * shots
    stat, p = scipy_stats.chisquare(observed[support], expected)
    return StatisticalTestResult("born_rule_chisquare", bool(p >= significance), float(stat), float(p),
                                 significance, f"{shots} shots over {int(support.sum())} outcomes")
