"""Tests for Vitest / Vite config extraction."""

from testdetect.adapters.parsing import has_test_attribute, parse_vitest_config


class TestParseVitestConfig:
    """include / exclude / dir inside the test block, root outside it."""

    def test_include_and_exclude(self):
        content = """
        import { defineConfig } from 'vitest/config';

        export default defineConfig({
          test: {
            include: ['src/**/*.test.ts'],
            exclude: ['**/node_modules/**', '**/e2e/**'],
            coverage: { include: ['src/**'], exclude: ['src/generated/**'] },
          },
        });
        """
        result = parse_vitest_config(content, "/proj/vitest.config.ts")

        assert result.patterns == ["src/**/*.test.ts"]
        assert result.exclude_patterns == ["**/node_modules/**", "**/e2e/**"]
        assert result.is_regex is False

    def test_coverage_include_is_not_a_test_pattern(self):
        content = """
        export default defineConfig({
          test: {
            environment: 'jsdom',
            coverage: { include: ['src/**'] },
          },
        });
        """
        assert parse_vitest_config(content, "/proj/vitest.config.ts") is None

    def test_root_outside_test_block(self):
        content = """
        export default defineConfig({
          root: 'packages/web',
          test: { include: ['**/*.spec.ts'] },
        });
        """
        result = parse_vitest_config(content, "/proj/vite.config.ts")

        assert result.root_dir == "packages/web"
        assert result.patterns == ["**/*.spec.ts"]

    def test_root_dirname(self):
        content = "export default { root: __dirname, test: { include: ['**/*.test.ts'] } };"
        result = parse_vitest_config(content, "/proj/app/vitest.config.mjs")

        assert result.root_dir == "/proj/app"

    def test_dir_only(self):
        content = "export default defineConfig({ test: { dir: 'src' } });"
        result = parse_vitest_config(content, "/proj/vitest.config.ts")

        assert result.patterns == []
        assert result.dir == "src"

    def test_assignment_form(self):
        content = """
        const config = defineConfig({});
        config.test = { include: ['a.test.ts'] };
        export default config;
        """
        result = parse_vitest_config(content, "/proj/vitest.config.js")

        assert result.patterns == ["a.test.ts"]

    def test_no_test_block(self):
        content = "export default defineConfig({ plugins: [react()] });"
        assert parse_vitest_config(content, "/proj/vite.config.ts") is None


class TestHasTestAttribute:
    """Whether a vite.config file counts as a Vitest config."""

    def test_with_test_block(self):
        content = "export default defineConfig({ plugins: [vue()], test: { globals: true } });"
        assert has_test_attribute(content, "/proj/vite.config.ts") is True

    def test_without_test_block(self):
        content = "export default defineConfig({ plugins: [vue()] });"
        assert has_test_attribute(content, "/proj/vite.config.ts") is False

    def test_commented_out(self):
        content = "export default defineConfig({\n  // test: { globals: true },\n});"
        assert has_test_attribute(content, "/proj/vite.config.ts") is False

    def test_comparison_is_not_an_attribute(self):
        content = "export default ({ mode }) => ({ define: { isTest: mode === 'test' } });"
        assert has_test_attribute(content, "/proj/vite.config.ts") is False

    def test_json_config(self):
        assert has_test_attribute('{"test": {}}', "/proj/vite.config.json") is True
        assert has_test_attribute('{"build": {}}', "/proj/vite.config.json") is False
