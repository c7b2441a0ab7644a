"""Extraction of dependency information from source files and package manifests."""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Union


class DependencyType(enum.Enum):
    """Kind of dependency found in a file."""

    IMPORT = "import"
    PACKAGE = "package"
    INCLUDE = "include"
    USE = "use"


@dataclass(frozen=True)
class Dependency:
    """A dependency found in a file.

    ``dependency_type`` is a :class:`DependencyType`, or a free-form string
    for kinds that have no member of their own.
    """

    name: str
    dependency_type: Union[DependencyType, str]
    version: Optional[str] = None


@dataclass(frozen=True)
class OtherLanguage:
    """A language without built-in support, named by its file extension."""

    name: str


class Language(enum.Enum):
    """Programming languages with built-in dependency patterns."""

    RUST = "rust"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    JAVA = "java"
    GO = "go"
    C = "c"
    CPP = "cpp"

    @staticmethod
    def from_extension(ext: str) -> Union["Language", OtherLanguage]:
        """Detect the language of a file from its extension (without the dot)."""
        lowered = ext.lower()
        language = _EXTENSIONS.get(lowered)
        if language is None:
            return OtherLanguage(lowered)
        return language


_EXTENSIONS: dict[str, Language] = {
    "rs": Language.RUST,
    "py": Language.PYTHON,
    "js": Language.JAVASCRIPT,
    "mjs": Language.JAVASCRIPT,
    "cjs": Language.JAVASCRIPT,
    "ts": Language.TYPESCRIPT,
    "tsx": Language.TYPESCRIPT,
    "java": Language.JAVA,
    "go": Language.GO,
    "c": Language.C,
    "h": Language.C,
    "cpp": Language.CPP,
    "cc": Language.CPP,
    "cxx": Language.CPP,
    "hpp": Language.CPP,
    "hxx": Language.CPP,
}

_PatternList = list[tuple[Pattern[str], DependencyType]]


def _default_patterns() -> dict[Language, _PatternList]:
    js = [
        (re.compile(r"""^\s*import\s+.*\s+from\s+['"]([^'"]+)['"]"""), DependencyType.IMPORT),
        (
            re.compile(r"""^\s*const\s+.*\s*=\s*require\s*\(\s*['"]([^'"]+)['"]\s*\)"""),
            DependencyType.IMPORT,
        ),
        (re.compile(r"""^\s*import\s*\(\s*['"]([^'"]+)['"]\s*\)"""), DependencyType.IMPORT),
    ]
    c_family = [
        (re.compile(r"^\s*#include\s*<([^>]+)>"), DependencyType.INCLUDE),
        (re.compile(r'^\s*#include\s*"([^"]+)"'), DependencyType.INCLUDE),
    ]
    return {
        Language.RUST: [
            (re.compile(r"^\s*use\s+([a-zA-Z0-9_:]+)"), DependencyType.USE),
            (re.compile(r"^\s*extern\s+crate\s+([a-zA-Z0-9_]+)"), DependencyType.IMPORT),
        ],
        Language.PYTHON: [
            (re.compile(r"^\s*import\s+([a-zA-Z0-9_.]+)"), DependencyType.IMPORT),
            (re.compile(r"^\s*from\s+([a-zA-Z0-9_.]+)\s+import"), DependencyType.IMPORT),
        ],
        Language.JAVASCRIPT: list(js),
        Language.TYPESCRIPT: list(js),
        Language.JAVA: [
            (re.compile(r"^\s*import\s+([a-zA-Z0-9_.]+);"), DependencyType.IMPORT),
            (re.compile(r"^\s*import\s+static\s+([a-zA-Z0-9_.]+);"), DependencyType.IMPORT),
        ],
        Language.GO: [
            (re.compile(r'^\s*import\s+"([^"]+)"'), DependencyType.IMPORT),
            # Opening of a grouped import block; it carries no name of its own.
            (re.compile(r"^\s*import\s+\(\s*"), DependencyType.IMPORT),
        ],
        Language.C: list(c_family),
        Language.CPP: list(c_family),
    }


_CARGO_DEP = re.compile(r'^\s*([a-zA-Z0-9_-]+)\s*=\s*"([^"]+)"')
_REQUIREMENT = re.compile(r"^([a-zA-Z0-9_-]+)(?:==|>=|<=|~=|!=)?(.*)$")
_GO_REQUIRE = re.compile(r"^\s*require\s+(\S+)\s+(\S+)")

_COMMENT_PREFIXES = ("//", "#", "/*")


class DependencyAnalyzer:
    """Finds dependencies in file content using per-language patterns."""

    def __init__(self) -> None:
        self._patterns = _default_patterns()

    def analyze_file(
        self, content: str, language: Union[Language, OtherLanguage]
    ) -> set[Dependency]:
        """Return the dependencies declared in ``content`` for ``language``.

        Lines that look like comments (starting with ``//``, ``#`` or ``/*``
        once trimmed) are skipped. Unsupported languages yield no dependencies.
        """
        patterns = self._patterns.get(language) if isinstance(language, Language) else None
        if not patterns:
            return set()

        dependencies: set[Dependency] = set()
        for line in content.splitlines():
            if line.strip().startswith(_COMMENT_PREFIXES):
                continue
            for pattern, dep_type in patterns:
                match = pattern.search(line)
                if match is None or pattern.groups < 1:
                    continue
                name = match.group(1)
                if name is not None:
                    dependencies.add(Dependency(name, dep_type))
        return dependencies

    def analyze_manifest(self, content: str, filename: str) -> set[Dependency]:
        """Return the package dependencies declared in a manifest file.

        Supports ``Cargo.toml``, ``package.json``, ``requirements.txt`` and
        ``go.mod``; other file names yield no dependencies.
        """
        parser = {
            "Cargo.toml": _parse_cargo_toml,
            "package.json": _parse_package_json,
            "requirements.txt": _parse_requirements,
            "go.mod": _parse_go_mod,
        }.get(filename)
        if parser is None:
            return set()
        return parser(content)


def _parse_cargo_toml(content: str) -> set[Dependency]:
    dependencies: set[Dependency] = set()
    in_deps_section = False
    for line in content.splitlines():
        stripped = line.strip()
        if stripped in ("[dependencies]", "[dev-dependencies]"):
            in_deps_section = True
            continue
        if stripped.startswith("["):
            in_deps_section = False
        if in_deps_section:
            match = _CARGO_DEP.search(line)
            if match:
                dependencies.add(Dependency(match.group(1), DependencyType.PACKAGE, match.group(2)))
    return dependencies


def _parse_package_json(content: str) -> set[Dependency]:
    try:
        document = json.loads(content)
    except ValueError:
        return set()
    if not isinstance(document, dict):
        return set()

    dependencies: set[Dependency] = set()
    for section in ("dependencies", "devDependencies"):
        entries = document.get(section)
        if not isinstance(entries, dict):
            continue
        for name, version in entries.items():
            dependencies.add(
                Dependency(
                    name,
                    DependencyType.PACKAGE,
                    version if isinstance(version, str) else None,
                )
            )
    return dependencies


def _parse_requirements(content: str) -> set[Dependency]:
    dependencies: set[Dependency] = set()
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        match = _REQUIREMENT.search(stripped)
        if match:
            version = match.group(2) or None
            dependencies.add(Dependency(match.group(1), DependencyType.PACKAGE, version))
    return dependencies


def _parse_go_mod(content: str) -> set[Dependency]:
    dependencies: set[Dependency] = set()
    for line in content.splitlines():
        match = _GO_REQUIRE.search(line)
        if match:
            dependencies.add(Dependency(match.group(1), DependencyType.PACKAGE, match.group(2)))
    return dependencies