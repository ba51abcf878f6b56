import json

import pytest
from click.testing import CliRunner

from testdetect.cli.main import app
from tests.conftest import write_tree


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def vitest_project(tmp_path):
    return write_tree(
        tmp_path,
        {
            "vitest.config.ts": "export default defineConfig({ test: { include: ['**/*.test.ts'] } });",
            "src/a.test.ts": "",
            "src/a.ts": "",
        },
    )


@pytest.mark.integration
def test_check_reports_owner(runner, vitest_project):
    result = runner.invoke(
        app, ["--root", str(vitest_project), "check", str(vitest_project / "src/a.test.ts")]
    )
    assert result.exit_code == 0, result.output
    assert "vitest" in result.output
    assert "yes" in result.output


@pytest.mark.integration
def test_patterns_outputs_json(runner, vitest_project):
    result = runner.invoke(app, ["patterns", str(vitest_project / "vitest.config.ts")])
    assert result.exit_code == 0, result.output

    payload = json.loads(result.output)
    assert payload["patterns"] == {"patterns": ["**/*.test.ts"], "is_regex": False}
    assert payload["framework"] is None


@pytest.mark.integration
def test_patterns_with_explicit_framework(runner, tmp_path):
    write_tree(tmp_path, {"base.config.js": "module.exports = { testRegex: '\\\\.spec\\\\.js$' };"})
    result = runner.invoke(app, ["patterns", "--framework", "jest", str(tmp_path / "base.config.js")])
    assert result.exit_code == 0, result.output

    payload = json.loads(result.output)
    assert payload["framework"] == "jest"
    assert payload["patterns"]["is_regex"] is True


@pytest.mark.integration
def test_conflicts_reports_reason(runner, tmp_path):
    write_tree(
        tmp_path,
        {
            "jest.config.js": "module.exports = {};",
            "vitest.config.ts": "export default defineConfig({ test: {} });",
        },
    )
    result = runner.invoke(app, ["--root", str(tmp_path), "conflicts", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "both_default" in result.output


@pytest.mark.integration
def test_conflicts_without_both_configs(runner, tmp_path):
    write_tree(tmp_path, {"jest.config.js": "module.exports = {};"})
    result = runner.invoke(app, ["--root", str(tmp_path), "conflicts", str(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "No Jest and Vitest configs" in result.output


@pytest.mark.integration
def test_invalid_configuration_exits_with_error(runner, tmp_path):
    config_file = tmp_path / ".testdetect.toml"
    config_file.write_text("[detection\n")

    result = runner.invoke(app, ["--config", str(config_file), "patterns", str(config_file)])
    assert result.exit_code == 1


@pytest.mark.integration
def test_missing_arguments_is_usage_error(runner):
    result = runner.invoke(app, ["check"])
    assert result.exit_code == 2
