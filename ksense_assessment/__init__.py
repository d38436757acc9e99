from .errors import (
    AssessmentError,
    ConfigError,
    ExhaustedRetries,
    FatalHTTPError,
    TransportError,
)
from .scoring import classify, RiskClassification
from .submission import AlertSets, build_alert_sets

__version__ = "0.2.0"
