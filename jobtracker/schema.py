from typing import Optional

STATUS_APPLIED = "Applied"
STATUS_INTERVIEW = "Interview Scheduled"
STATUS_OFFER = "Offer Received"
STATUS_REJECTED = "Rejected"

# Menu order
STATUSES = [STATUS_APPLIED, STATUS_INTERVIEW, STATUS_OFFER, STATUS_REJECTED]
DEFAULT_STATUS = STATUS_APPLIED


def coerce_status(value: Optional[str]) -> str:
    """Map free text onto one of STATUSES, falling back to DEFAULT_STATUS.

    Matching ignores case and surrounding whitespace, so "interview scheduled"
    maps to "Interview Scheduled"; anything unrecognised becomes "Applied".
    """
    if not value:
        return DEFAULT_STATUS
    wanted = " ".join(value.strip().lower().split())
    for status in STATUSES:
        if status.lower() == wanted:
            return status
    return DEFAULT_STATUS

