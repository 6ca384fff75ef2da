"""Check that a release tag matches pyproject.toml and has a CHANGELOG entry."""

import re
import sys
from pathlib import Path
from typing import List

ROOT = Path(__file__).parent.parent
_VERSION_RE = re.compile(r'^version\s*=\s*"([^"]+)"', re.MULTILINE)


def find_errors(version: str, root: Path = ROOT) -> List[str]:
    errors = []

    pyproject_path = root / "pyproject.toml"
    if not pyproject_path.exists():
        errors.append(f"{pyproject_path} not found.")
    else:
        match = _VERSION_RE.search(pyproject_path.read_text(encoding="utf-8"))
        declared = match.group(1) if match else None
        if declared != version:
            errors.append(f"Tag {version} does not match pyproject.toml version {declared}.")

    changelog_path = root / "CHANGELOG.md"
    if not changelog_path.exists():
        errors.append(f"{changelog_path} not found.")
    elif f"## [{version}]" not in changelog_path.read_text(encoding="utf-8"):
        errors.append(f"CHANGELOG.md has no '## [{version}]' section.")

    return errors


def main(argv: List[str]) -> int:
    if len(argv) != 2:
        print("Usage: python scripts/check_version.py <tag>")
        return 1

    # v0.1.0 -> 0.1.0
    version = argv[1].lstrip("v")
    errors = find_errors(version)
    for error in errors:
        print(f"Error: {error}")
    if errors:
        return 1

    print(f"Version {version} consistency check passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
