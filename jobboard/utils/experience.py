"""
Experience requirement parsing.

Pulls a years-of-experience range out of a job's free-text requirements,
e.g. "5+ years", "3-5 years", "minimum 2 years", so job listings can be
narrowed to an applicant's experience level.
"""

import re
from typing import Optional, Tuple

# First match wins, in this order
EXPERIENCE_PATTERNS = [
    re.compile(r"(\d+)\s*\+\s*years?"),                    # 5+ years
    re.compile(r"(\d+)\s*-\s*(\d+)\s*years?"),             # 3-5 years
    re.compile(r"(\d+)\s*to\s*(\d+)\s*years?"),            # 3 to 5 years
    re.compile(r"minimum\s*(\d+)\s*years?"),               # minimum 3 years
    re.compile(r"at\s*least\s*(\d+)\s*years?"),           # at least 3 years
    re.compile(r"(\d+)\s*years?\s*(?:of\s*)?experience"),  # 5 years experience
]


def parse_experience_range(text: Optional[str]) -> Optional[Tuple[int, Optional[int]]]:
    """
    Parse an experience range from requirements text.

    Returns:
        (min_years, max_years) where max_years is None for open-ended
        requirements, or None if no requirement is found.
    """
    if not text:
        return None

    lowered = text.lower()
    for pattern in EXPERIENCE_PATTERNS:
        match = pattern.search(lowered)
        if match:
            minimum = int(match.group(1))
            maximum = int(match.group(2)) if pattern.groups > 1 else None
            return minimum, maximum
    return None


def matches_experience(requirements: Optional[str], years: float) -> bool:
    """True if `years` satisfies the requirement (or none is stated)."""
    parsed = parse_experience_range(requirements)
    if parsed is None:
        return True

    minimum, maximum = parsed
    if maximum is not None:
        return minimum <= years <= maximum
    return years >= minimum
