import logging

from .normalize import patient_id_of
from .scoring import classify
from .transport import SUBMIT_POLICY

logger = logging.getLogger(__name__)


class AlertSets:
    def __init__(self):
        self.high_risk = set()
        self.fever = set()
        self.data_quality_issues = set()

    def add(self, record):
        pid = patient_id_of(record)
        if pid is None:
            logger.debug("skipping record without patient_id: %r", record)
            return None

        result = classify(record)
        if result.has_data_quality_issue:
            self.data_quality_issues.add(pid)
        if result.is_fever:
            self.fever.add(pid)
        if result.is_high_risk:
            self.high_risk.add(pid)
        return result

    def to_payload(self):
        return {
            "high_risk_patients": sorted(self.high_risk),
            "fever_patients": sorted(self.fever),
            "data_quality_issues": sorted(self.data_quality_issues),
        }

    def counts(self):
        return {k: len(v) for k, v in self.to_payload().items()}


def build_alert_sets(patients):
    alerts = AlertSets()
    for p in patients:
        alerts.add(p)
    return alerts


def submit_assessment(client, payload, policy=SUBMIT_POLICY):
    return client.post_json("/submit-assessment", payload, policy=policy)
