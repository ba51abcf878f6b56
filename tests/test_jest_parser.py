"""Tests for Jest config extraction."""

import json

from testdetect.adapters.parsing import parse_jest_config


class TestJsonConfigs:
    """jest.config.json, test/jest-e2e.json and package.json."""

    def test_jest_config_json(self):
        content = json.dumps({"testMatch": ["**/*.spec.ts"], "rootDir": "src"})
        result = parse_jest_config(content, "/proj/jest.config.json")

        assert result.patterns == ["**/*.spec.ts"]
        assert result.is_regex is False
        assert result.root_dir == "src"

    def test_nest_e2e_config(self):
        content = json.dumps(
            {
                "moduleFileExtensions": ["js", "json", "ts"],
                "rootDir": ".",
                "testEnvironment": "node",
                "testRegex": ".e2e-spec.ts$",
            }
        )
        result = parse_jest_config(content, "/proj/test/jest-e2e.json")

        assert result.patterns == [".e2e-spec.ts$"]
        assert result.is_regex is True
        assert result.root_dir == "."

    def test_package_json_jest_block(self):
        content = json.dumps(
            {
                "name": "app",
                "testMatch": ["ignored/**"],
                "jest": {"testRegex": "(/__tests__/.*|\\.spec)\\.js$"},
            }
        )
        result = parse_jest_config(content, "/proj/package.json")

        assert result.patterns == ["(/__tests__/.*|\\.spec)\\.js$"]
        assert result.is_regex is True

    def test_package_json_without_jest_block(self):
        content = json.dumps({"name": "app", "devDependencies": {"jest": "^29"}})
        assert parse_jest_config(content, "/proj/package.json") is None

    def test_roots_and_ignore_patterns(self):
        content = json.dumps(
            {
                "roots": ["<rootDir>/src", 3],
                "testPathIgnorePatterns": "/fixtures/",
            }
        )
        result = parse_jest_config(content, "/proj/jest.config.json")

        assert result.patterns == []
        assert result.roots == ["<rootDir>/src"]
        assert result.ignore_patterns == ["/fixtures/"]

    def test_empty_test_match_wins_over_test_regex(self):
        content = json.dumps({"testMatch": [], "testRegex": "foo"})
        result = parse_jest_config(content, "/proj/jest.config.json")

        assert result.patterns == []
        assert result.is_regex is False

    def test_invalid_json(self):
        assert parse_jest_config("{ testMatch: [", "/proj/jest.config.json") is None


class TestJavaScriptConfigs:
    """jest.config.js / .ts / .mjs / .cjs scanned for literals."""

    def test_test_match_array(self):
        content = """
        /** @type {import('jest').Config} */
        module.exports = {
          // testRegex: 'commented out',
          testMatch: ['**/__tests__/**/*.js', '**/?(*.)+(spec|test).js'],
        };
        """
        result = parse_jest_config(content, "/proj/jest.config.js")

        assert result.patterns == ["**/__tests__/**/*.js", "**/?(*.)+(spec|test).js"]
        assert result.is_regex is False

    def test_test_match_takes_precedence_over_test_regex(self):
        content = """
        export default {
          testRegex: '(/__tests__/.*|(\\\\.|/)(test|spec))\\\\.[jt]sx?$',
          testMatch: ['**/*.test.ts'],
        };
        """
        result = parse_jest_config(content, "/proj/jest.config.ts")

        assert result.patterns == ["**/*.test.ts"]
        assert result.is_regex is False

    def test_regex_literal(self):
        content = r"module.exports = { testRegex: /\.spec\.ts$/ };"
        result = parse_jest_config(content, "/proj/jest.config.js")

        assert result.patterns == [r"\.spec\.ts$"]
        assert result.is_regex is True

    def test_test_regex_array(self):
        content = r"module.exports = { testRegex: ['\\.unit\\.js$', '\\.int\\.js$'] };"
        result = parse_jest_config(content, "/proj/jest.config.js")

        assert result.patterns == [r"\.unit\.js$", r"\.int\.js$"]
        assert result.is_regex is True

    def test_root_dir_dirname(self):
        content = "module.exports = { rootDir: __dirname, testMatch: ['**/*.test.js'] };"
        result = parse_jest_config(content, "/proj/packages/a/jest.config.js")

        assert result.root_dir == "/proj/packages/a"

    def test_root_dir_only_still_yields_record(self):
        result = parse_jest_config("module.exports = { rootDir: 'src' };", "/proj/jest.config.js")

        assert result is not None
        assert result.patterns == []
        assert result.root_dir == "src"

    def test_roots_identifier_is_ignored(self):
        content = "const srcRoots = ['<rootDir>/src'];\nmodule.exports = { roots: srcRoots };"
        assert parse_jest_config(content, "/proj/jest.config.js") is None

    def test_roots_and_ignore_arrays(self):
        content = """
        module.exports = {
          roots: ['<rootDir>/src', '<rootDir>/test'],
          testPathIgnorePatterns: ['/node_modules/', '<rootDir>/dist/'],
        };
        """
        result = parse_jest_config(content, "/proj/jest.config.js")

        assert result.roots == ["<rootDir>/src", "<rootDir>/test"]
        assert result.ignore_patterns == ["/node_modules/", "<rootDir>/dist/"]

    def test_brackets_inside_strings(self):
        content = "module.exports = { testMatch: ['**/[a-z]*.test.js', '**/x].spec.js'] };"
        result = parse_jest_config(content, "/proj/jest.config.js")

        assert result.patterns == ["**/[a-z]*.test.js", "**/x].spec.js"]

    def test_empty_test_match_wins_over_test_regex(self):
        content = "module.exports = { testMatch: [], testRegex: 'foo' };"
        result = parse_jest_config(content, "/proj/jest.config.js")

        assert result.patterns == []
        assert result.is_regex is False

    def test_empty_test_match_alone(self):
        result = parse_jest_config("module.exports = { testMatch: [] };", "/proj/jest.config.js")

        assert result is not None
        assert result.patterns == []

    def test_nothing_recognized(self):
        content = "module.exports = require('./jest.base.config');"
        assert parse_jest_config(content, "/proj/jest.config.js") is None
