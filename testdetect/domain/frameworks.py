"""Framework registry: config filenames, binaries and default patterns."""

from dataclasses import dataclass, field

from .models import Framework


@dataclass(frozen=True)
class FrameworkDefinition:
    """Static facts used to detect one framework in a directory."""

    framework: Framework
    config_files: tuple[str, ...]
    binary_name: str
    package_keys: tuple[str, ...]
    default_patterns: tuple[str, ...] = field(default_factory=tuple)


DEFAULT_TEST_PATTERNS: tuple[str, ...] = (
    "**/*.{test,spec}.?(c|m)[jt]s?(x)",
    "**/__tests__/**/*.?(c|m)[jt]s?(x)",
)

PLAYWRIGHT_DEFAULT_TEST_MATCH: tuple[str, ...] = ("**/*.@(spec|test).?(c|m)[jt]s?(x)",)

CYPRESS_DEFAULT_SPEC_PATTERN: tuple[str, ...] = ("cypress/e2e/**/*.cy.{js,jsx,ts,tsx}",)

_SCRIPT_EXTENSIONS = ("js", "ts", "mjs", "mts", "cjs", "cts")

# vite.config.* only counts for Vitest when the file declares a test attribute
VITE_CONFIG_FILES: tuple[str, ...] = tuple(f"vite.config.{ext}" for ext in _SCRIPT_EXTENSIONS)

DENO_CONFIG_FILES: tuple[str, ...] = ("deno.json", "deno.jsonc")

PACKAGE_JSON = "package.json"

FRAMEWORK_DEFINITIONS: dict[Framework, FrameworkDefinition] = {
    Framework.VITEST: FrameworkDefinition(
        framework=Framework.VITEST,
        config_files=tuple(f"vitest.config.{ext}" for ext in _SCRIPT_EXTENSIONS)
        + VITE_CONFIG_FILES,
        binary_name="vitest",
        package_keys=("vitest",),
        default_patterns=DEFAULT_TEST_PATTERNS,
    ),
    Framework.JEST: FrameworkDefinition(
        framework=Framework.JEST,
        config_files=(
            "jest.config.js",
            "jest.config.ts",
            "jest.config.json",
            "jest.config.cjs",
            "jest.config.mjs",
            "test/jest-e2e.json",
            # only when the manifest carries a "jest" block
            PACKAGE_JSON,
        ),
        binary_name="jest",
        package_keys=("jest",),
        default_patterns=DEFAULT_TEST_PATTERNS,
    ),
    Framework.CYPRESS: FrameworkDefinition(
        framework=Framework.CYPRESS,
        config_files=("cypress.config.js", "cypress.config.ts", "cypress.json"),
        binary_name="cypress",
        package_keys=("cypress",),
        default_patterns=CYPRESS_DEFAULT_SPEC_PATTERN,
    ),
    Framework.PLAYWRIGHT: FrameworkDefinition(
        framework=Framework.PLAYWRIGHT,
        config_files=("playwright.config.js", "playwright.config.ts"),
        binary_name="playwright",
        package_keys=("@playwright/test", "playwright"),
        default_patterns=PLAYWRIGHT_DEFAULT_TEST_MATCH,
    ),
}

# Fixed per-directory priority; vitest is checked before jest.
DETECTION_ORDER: tuple[Framework, ...] = (
    Framework.VITEST,
    Framework.JEST,
    Framework.CYPRESS,
    Framework.PLAYWRIGHT,
)

E2E_FRAMEWORKS: tuple[Framework, ...] = (Framework.CYPRESS, Framework.PLAYWRIGHT)


def get_definition(framework: Framework) -> FrameworkDefinition:
    return FRAMEWORK_DEFINITIONS[framework]


def recognized_config_filenames() -> frozenset[str]:
    """Basenames whose creation, change or deletion invalidates detection."""
    names = {PACKAGE_JSON, *DENO_CONFIG_FILES}
    for definition in FRAMEWORK_DEFINITIONS.values():
        names.update(name.rsplit("/", 1)[-1] for name in definition.config_files)
    return frozenset(names)
