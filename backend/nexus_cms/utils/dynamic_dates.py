import re
from datetime import datetime, timezone
from typing import Optional

DYNAMIC_DATE_PATTERN = re.compile(
    r"""<span\s+class=['"]dynamic-date['"]>(\d{4})</span>""",
    re.IGNORECASE,
)


def refresh_dynamic_dates(content: Optional[str], year: Optional[int] = None):
    """
    Rewrite ``<span class="dynamic-date">YYYY</span>`` markers to the current year.

    Plain years outside a marker are left alone.
    """
    if not content:
        return content

    current = str(year or datetime.now(timezone.utc).year)

    def _replace(match):
        return match.group(0).replace(match.group(1), current)

    return DYNAMIC_DATE_PATTERN.sub(_replace, content)
