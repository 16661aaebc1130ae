import semver
import re
from dataclasses import dataclass
from typing import Iterable, List

from yanker.core.exceptions import RangeParseError
from yanker.core.models import CrateVersion

# "[<low>, <high>]" with optional whitespace inside the brackets and
# around the comma. Bounds are validated by semver, not by this pattern.
_RANGE_PATTERN = (
    r"^\s*\[\s*"
    r"(?P<low>[^,\[\]\s]+)"
    r"\s*,\s*"
    r"(?P<high>[^,\[\]\s]+)"
    r"\s*\]\s*$"
)
_RANGE_RE = re.compile(_RANGE_PATTERN)


@dataclass(frozen=True)
class VersionRange:
    """Half-open version interval [low, high)."""
    low: semver.Version
    high: semver.Version

    def __contains__(self, version: semver.Version) -> bool:
        return self.low <= version < self.high

    @property
    def is_empty(self) -> bool:
        return self.low >= self.high

    def __str__(self) -> str:
        return f"[{self.low}, {self.high})"


def parse_version_range(text: str) -> VersionRange:
    """
    Parse a range argument such as "[0.1.0, 0.2.0]".

    The lower bound is inclusive and the upper bound exclusive.

    Args:
        text (str): The range argument as typed by the user.

    Returns:
        VersionRange: The parsed bounds.

    Raises:
        RangeParseError: If the text does not match the pattern or a bound
            is not a valid SemVer version.
    """
    match = _RANGE_RE.fullmatch(text)
    if not match:
        raise RangeParseError(text)

    bounds = []
    for part in ("low", "high"):
        raw = match.group(part)
        try:
            bounds.append(semver.Version.parse(raw))
        except ValueError:
            raise RangeParseError(text, f"'{raw}' is not a valid semantic version (expected MAJOR.MINOR.PATCH)")

    return VersionRange(low=bounds[0], high=bounds[1])


def validate_version(version: str) -> bool:
    """
    Validates if the given version string is a valid SemVer version.

    Args:
        version (str): The version string to validate.
    """
    try:
        semver.Version.parse(version)
        return True
    except ValueError:
        return False


def select_yankable(versions: Iterable[CrateVersion], version_range: VersionRange) -> List[str]:
    """
    Return the version strings inside the range that are not yanked yet.

    Registry order is preserved. Versions that are not valid SemVer are
    skipped.
    """
    selected: List[str] = []
    for item in versions:
        if item.yanked:
            continue
        try:
            parsed = semver.Version.parse(item.version)
        except ValueError:
            continue
        if parsed in version_range:
            selected.append(item.version)
    return selected
