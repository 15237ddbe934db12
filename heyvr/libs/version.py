"""Map a semantic version onto the increment keyword heyVR expects."""

MAJOR = "major"
MINOR = "minor"
PATCH = "patch"


def classify_version(version: str) -> str:
    """Return 'major', 'minor' or 'patch' for an x.y.z version string.

    Only the trailing components are inspected: "2.0.0" is a major release,
    "1.10.0" a minor one, anything else a patch.
    """
    if version.endswith(".0.0"):
        return MAJOR
    if version.endswith(".0"):
        return MINOR
    return PATCH
