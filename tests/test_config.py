"""Tests for host configuration and exit gates."""

import asyncio

import pytest

from extension_host import (
    ConfigError,
    GuardedExitGate,
    HostExitGate,
    TestRunnerLoaderRegistry,
    ExtensionTestRunnerError,
    load_host_environment,
)
from extension_host.config import PROJECT_ROOT


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in (
        "EXTENSION_HOST_CONFIG",
        "EXTENSION_HOST_VERSION",
        "EXTENSION_HOST_BUILTIN_EXTENSIONS_PATH",
        "EXTENSION_HOST_TEST_RUNNER_KIND",
        "EXTENSION_HOST_USER_EXTENSIONS_HOME",
        "EXTENSION_HOST_EXTENSION_DEVELOPMENT_PATH",
        "EXTENSION_HOST_EXTENSION_TESTS_PATH",
        "EXTENSION_HOST_EXIT_DELAY",
    ):
        monkeypatch.delenv(name, raising=False)
    # keep load_dotenv() away from any .env in the checkout
    monkeypatch.chdir(tmp_path)


class TestLoadHostEnvironment:
    """Test load_host_environment sources and validation."""

    def test_defaults_when_file_missing(self, tmp_path):
        """A missing config file gives the defaults."""
        env = load_host_environment(str(tmp_path / "missing.yaml"))

        assert env.builtin_extensions_path == str(PROJECT_ROOT / "extensions")
        assert env.user_extensions_home is None
        assert env.extension_development_path is None
        assert env.exit_delay == 0.5

    def test_yaml_nested_section(self, tmp_path):
        """Settings may sit under an extension_host: key."""
        config = tmp_path / "host.yaml"
        config.write_text(
            "extension_host:\n"
            "  version: 1.2.0\n"
            "  user_extensions_home: /home/me/.ext\n"
            "  exit_delay: 0\n"
        )

        env = load_host_environment(str(config))

        assert env.version == "1.2.0"
        assert env.user_extensions_home == "/home/me/.ext"
        assert env.exit_delay == 0.0

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """EXTENSION_HOST_* variables win over the YAML file."""
        config = tmp_path / "host.yaml"
        config.write_text("extension_development_path: /from/yaml\n")
        monkeypatch.setenv("EXTENSION_HOST_CONFIG", str(config))
        monkeypatch.setenv("EXTENSION_HOST_EXTENSION_DEVELOPMENT_PATH", "/from/env")

        env = load_host_environment()

        assert env.extension_development_path == "/from/env"

    def test_unknown_key_rejected(self, tmp_path):
        config = tmp_path / "host.yaml"
        config.write_text("bogus: 1\n")

        with pytest.raises(ConfigError):
            load_host_environment(str(config))

    def test_bad_exit_delay(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EXTENSION_HOST_EXIT_DELAY", "soon")

        with pytest.raises(ConfigError):
            load_host_environment(str(tmp_path / "missing.yaml"))


class TestExitGates:
    """Test guarded and host exit gates."""

    def test_guarded_exit_never_terminates(self, caplog):
        """Extension exit attempts are logged and refused."""
        gate = GuardedExitGate()

        gate.exit(1)
        gate.exit()

        assert gate.attempts == 2
        assert "An extension called exit(1) and this was prevented." in caplog.text

    @pytest.mark.asyncio
    async def test_graceful_exit_is_delayed(self):
        """The host exit fires only after the flush delay."""
        codes = []
        gate = HostExitGate(terminate=codes.append, delay=0.01)

        gate.graceful_exit(1)
        assert codes == []

        await asyncio.sleep(0.05)
        assert codes == [1]
        assert gate.scheduled_code == 1


class TestRunnerLoaders:
    """Test TestRunnerLoaderRegistry lookups."""

    def test_unknown_runner_kind(self):
        registry = TestRunnerLoaderRegistry()

        with pytest.raises(ExtensionTestRunnerError):
            registry.load("node", "/tests")

    def test_custom_runner_loader(self):
        class Runner:
            def run(self, tests_root):
                return 0

        registry = TestRunnerLoaderRegistry()
        registry.register("inline", lambda path: Runner())

        assert registry.kinds() == ["inline"]
        assert registry.load("inline", "/tests").run("/tests") == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
