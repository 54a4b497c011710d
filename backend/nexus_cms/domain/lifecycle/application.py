from typing import Dict, List

APPLICATION_STATUSES = (
    "pending",
    "reviewing",
    "shortlisted",
    "interview",
    "hired",
    "rejected",
)

STATUS_DETAILS: Dict[str, Dict[str, str]] = {
    "pending": {
        "label": "Pending",
        "color": "yellow",
        "description": "Application received, awaiting review",
    },
    "reviewing": {
        "label": "Reviewing",
        "color": "blue",
        "description": "Application under review",
    },
    "shortlisted": {
        "label": "Shortlisted",
        "color": "purple",
        "description": "Candidate shortlisted for next round",
    },
    "interview": {
        "label": "Interview",
        "color": "indigo",
        "description": "Interview scheduled or completed",
    },
    "hired": {
        "label": "Hired",
        "color": "green",
        "description": "Candidate hired",
    },
    "rejected": {
        "label": "Rejected",
        "color": "red",
        "description": "Application rejected",
    },
}

# Suggested next steps shown to reviewers. Not enforced server-side:
# any status may be set at any time by an authorized principal.
SUGGESTED_TRANSITIONS: Dict[str, List[str]] = {
    "pending": ["reviewing", "shortlisted", "rejected"],
    "reviewing": ["shortlisted", "interview", "rejected"],
    "shortlisted": ["interview", "hired", "rejected"],
    "interview": ["hired", "rejected"],
    "hired": [],
    "rejected": [],
}


def status_color(status: str) -> str:
    return STATUS_DETAILS.get(status, {}).get("color", "gray")


def status_options() -> Dict[str, dict]:
    return {
        "statuses": STATUS_DETAILS,
        "workflow": SUGGESTED_TRANSITIONS,
    }
