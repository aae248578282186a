from __future__ import annotations

import math
from typing import Optional

from scipy.stats import chi2

from symseg.config.calibration import CalibrationParameters


def effective_sample_size(length: int, calibration: CalibrationParameters) -> float:
    return calibration.a * math.log(length) + calibration.b


def significance(
    max_divergence: Optional[float],
    length: int,
    alphabet_size: int,
    calibration: CalibrationParameters,
) -> float:
    """Probability that the best cut of a segment is not a chance fluctuation.

    Follows the chi-squared approximation of Grosse et al. (2002):
    ``CDF_chi2(k - 1)(N ln2 beta D) ** NEff``. A missing or zero divergence
    scores 0, as does a segment so short that ``NEff`` is not positive.
    """

    if not max_divergence or length < 2:
        return 0.0
    n_eff = effective_sample_size(length, calibration)
    if n_eff <= 0:
        return 0.0
    statistic = length * math.log(2) * calibration.beta * max_divergence
    cdf = float(chi2.cdf(statistic, df=alphabet_size - 1))
    return min(1.0, max(0.0, cdf**n_eff))


def is_significant(score: float, calibration: CalibrationParameters) -> bool:
    return score > calibration.significance_threshold
