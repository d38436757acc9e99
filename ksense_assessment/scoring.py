from dataclasses import dataclass

from .normalize import normalize_vitals, parse_blood_pressure, to_number

HIGH_RISK_THRESHOLD = 4
FEVER_THRESHOLD = 99.6


@dataclass(frozen=True)
class RiskClassification:
    bp_score: int
    temp_score: int
    age_score: int
    is_fever: bool
    has_data_quality_issue: bool

    @property
    def total_score(self):
        return self.bp_score + self.temp_score + self.age_score

    @property
    def is_high_risk(self):
        return self.total_score >= HIGH_RISK_THRESHOLD


def systolic_category(s):
    if s < 120:
        return 1  # Normal
    if s < 130:
        return 2  # Elevated
    if s < 140:
        return 3  # Stage 1
    return 4  # Stage 2


def diastolic_category(d):
    # no 2-point tier: Elevated is defined by systolic alone
    if d < 80:
        return 1
    if d < 90:
        return 3
    return 4


def score_bp_values(bp):
    if bp is None:
        return 0
    return max(systolic_category(bp.systolic), diastolic_category(bp.diastolic))


def score_bp(bp):
    return score_bp_values(parse_blood_pressure(bp))


def score_temp(temp):
    t = to_number(temp)
    if t is None:
        return 0
    if t >= 101.0:
        return 2
    if t >= FEVER_THRESHOLD:
        return 1
    return 0


def score_age(age):
    a = to_number(age)
    if a is None:
        return 0
    if a > 65:
        return 2
    return 1


def is_fever(temp):
    t = to_number(temp)
    return t is not None and t >= FEVER_THRESHOLD


def classify(record) -> RiskClassification:
    """Score one raw patient record.

    Each field is normalized once and scored on its own, so a record with a
    malformed blood pressure still earns temperature and age points.
    """
    vitals = normalize_vitals(record)
    bp = vitals.blood_pressure
    return RiskClassification(
        bp_score=score_bp_values(bp),
        temp_score=score_temp(vitals.temperature),
        age_score=score_age(vitals.age),
        is_fever=is_fever(vitals.temperature),
        has_data_quality_issue=(
            bp is None or vitals.temperature is None or vitals.age is None
        ),
    )


def has_data_quality_issue(record):
    return classify(record).has_data_quality_issue


def total_risk_score(record):
    return classify(record).total_score
