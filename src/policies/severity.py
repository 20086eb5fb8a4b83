from enum import Enum


class Severity(str, Enum):
    """Policy severity, most severe first."""
    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER.index(self) + 1


SEVERITY_ORDER = (Severity.CRITICAL, Severity.ERROR, Severity.WARNING, Severity.INFO)

# Stored severities outside the vocabulary sort after "info"
UNRANKED = len(SEVERITY_ORDER) + 1


def severity_rank(value: str) -> int:
    """critical=1, error=2, warning=3, info=4, anything else=5."""
    try:
        return Severity(value).rank
    except ValueError:
        return UNRANKED
