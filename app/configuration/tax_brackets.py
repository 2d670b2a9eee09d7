"""Israeli purchase-tax (Mas Rechisha) schedules, 2024/2025 thresholds in NIS."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Tuple

from app.domain.schemas import TaxProfile


@dataclass(frozen=True)
class TaxBracket:
    """Marginal rate applied to the slice of price between ``min`` and ``max``."""

    min: float
    max: float
    rate: float


SINGLE_HOME_EXEMPTION_CEILING: float = 1_978_745.0

# Brackets are ordered, contiguous, and cover [0, inf).
TAX_BRACKETS: Mapping[TaxProfile, Tuple[TaxBracket, ...]] = {
    TaxProfile.SINGLE_HOME: (
        TaxBracket(0.0, SINGLE_HOME_EXEMPTION_CEILING, 0.0),
        TaxBracket(SINGLE_HOME_EXEMPTION_CEILING, 2_347_040.0, 0.035),
        TaxBracket(2_347_040.0, 6_055_070.0, 0.05),
        TaxBracket(6_055_070.0, 20_183_565.0, 0.08),
        TaxBracket(20_183_565.0, math.inf, 0.10),
    ),
    TaxProfile.INVESTOR: (
        TaxBracket(0.0, 6_055_070.0, 0.08),
        TaxBracket(6_055_070.0, math.inf, 0.10),
    ),
}
