import math
from dataclasses import dataclass
from typing import Any, Optional, NamedTuple


class BloodPressure(NamedTuple):
    systolic: float
    diastolic: float


@dataclass(frozen=True)
class NormalizedVitals:
    systolic: Optional[float]
    diastolic: Optional[float]
    temperature: Optional[float]
    age: Optional[float]

    @property
    def blood_pressure(self) -> Optional[BloodPressure]:
        if self.systolic is None or self.diastolic is None:
            return None
        return BloodPressure(self.systolic, self.diastolic)


def to_number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a measurement
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            n = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            n = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return n if math.isfinite(n) else None


def parse_blood_pressure(value: Any) -> Optional[BloodPressure]:
    """Parse ``"<systolic>/<diastolic>"``; anything else is None."""
    if not isinstance(value, str) or not value.strip():
        return None
    parts = value.split("/")
    if len(parts) != 2:
        return None
    s, d = parts[0].strip(), parts[1].strip()
    if not s or not d:
        return None
    systolic, diastolic = to_number(s), to_number(d)
    if systolic is None or diastolic is None:
        return None
    return BloodPressure(systolic, diastolic)


def normalize_vitals(record) -> NormalizedVitals:
    bp = parse_blood_pressure(record.get("blood_pressure"))
    return NormalizedVitals(
        systolic=bp.systolic if bp else None,
        diastolic=bp.diastolic if bp else None,
        temperature=to_number(record.get("temperature")),
        age=to_number(record.get("age")),
    )


def patient_id_of(record) -> Optional[str]:
    pid = record.get("patient_id") if isinstance(record, dict) else None
    if isinstance(pid, str) and pid:
        return pid
    return None
