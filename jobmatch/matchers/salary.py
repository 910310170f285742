"""Salary range comparison on a common yearly basis."""
from __future__ import annotations

from jobmatch.log import get_logger
from jobmatch.models import (
    SalaryAlignment,
    SalaryMatch,
    SalaryPeriod,
    SalaryRange,
    clamp_score,
    enum_value,
)

log = get_logger(__name__)

NEUTRAL_SCORE = 50
HOURS_PER_YEAR = 40 * 52

PERIOD_MULTIPLIERS: dict[str, int] = {
    SalaryPeriod.HOURLY.value: HOURS_PER_YEAR,
    SalaryPeriod.MONTHLY.value: 12,
    SalaryPeriod.YEARLY.value: 1,
}


def to_yearly(salary: SalaryRange) -> SalaryRange:
    multiplier = PERIOD_MULTIPLIERS.get(enum_value(salary.period), 1)
    return SalaryRange(
        min=salary.min * multiplier,
        max=salary.max * multiplier,
        currency=salary.currency,
        period=SalaryPeriod.YEARLY,
    )


def match_salary(user_range: SalaryRange | None, job_range: SalaryRange | None) -> SalaryMatch:
    if user_range is None or job_range is None:
        return SalaryMatch(
            score=NEUTRAL_SCORE,
            alignment=SalaryAlignment.UNKNOWN,
            user_range=user_range,
            job_range=job_range,
        )

    if user_range.currency != job_range.currency:
        log.debug(
            "Comparing salaries across currencies without conversion: %s vs %s",
            user_range.currency, job_range.currency,
        )

    user = to_yearly(user_range)
    job = to_yearly(job_range)

    if job.max >= user.min and job.min <= user.max:
        score, alignment = 100.0, SalaryAlignment.WITHIN
    elif job.min > user.max:
        if user.max > 0:
            score = min(100.0, 80 + (job.min - user.max) / user.max * 20)
        else:
            score = 100.0
        alignment = SalaryAlignment.ABOVE
    else:
        if user.min > 0:
            score = max(0.0, 100 - (user.min - job.max) / user.min * 100)
        else:
            score = 0.0
        alignment = SalaryAlignment.BELOW

    return SalaryMatch(
        score=clamp_score(score),
        alignment=alignment,
        user_range=user_range,
        job_range=job_range,
    )
