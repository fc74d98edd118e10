"""
Tests for the dispatcher, the post-install sequence and the provisioner pipeline.
"""

import asyncio
from typing import List

import pytest

from config.settings import Settings
from conftest import FakeRunner, FakeStrategy, make_executable
from devsetup.core.dispatcher import InstallerDispatcher
from devsetup.core.errors import InstallError, VerificationError
from devsetup.core.installers import InstallerRegistry
from devsetup.core.post_install import PostInstallSequence
from devsetup.core.provisioner import INSTALL_QUESTION, Provisioner
from devsetup.models.installation import InstallStatus, StepStatus
from devsetup.models.tool import InstallStrategy, ToolSpec


PYTHON_CHECK = ["python", "--version"]


def _passing_runner(settings: Settings) -> FakeRunner:
    """Runner whose read-back checks all succeed."""
    runner = FakeRunner()
    runner.respond(PYTHON_CHECK, output=f"Python {settings.python_version}\n")
    runner.respond(["pip", "show", settings.python_package], output=f"Name: {settings.python_package}\n")
    runner.on(["git", "clone", settings.dotfiles_repo, str(settings.clone_dir)],
              lambda: settings.clone_dir.mkdir(parents=True))
    return runner


def _registry(strategy: FakeStrategy, runner, host, settings) -> InstallerRegistry:
    return InstallerRegistry(runner, host, settings,
                             overrides={tag: strategy for tag in InstallStrategy})


# ── Dispatcher ───────────────────────────────────────────────────────


class TestDispatcher:
    def test_install_succeeds(self, runner, host, prober, settings, console, output, bin_dir):
        strategy = FakeStrategy(bin_dir)
        dispatcher = InstallerDispatcher(_registry(strategy, runner, host, settings), prober, console)

        record = asyncio.run(dispatcher.install(ToolSpec(name="jq")))

        assert record.status == InstallStatus.SUCCEEDED
        assert strategy.installed == ["jq"]
        text = output.getvalue()
        assert "Installing jq..." in text
        assert "jq installed successfully!" in text

    def test_failed_reprobe_raises(self, runner, host, prober, settings, console, bin_dir):
        strategy = FakeStrategy(bin_dir, creates=False)
        dispatcher = InstallerDispatcher(_registry(strategy, runner, host, settings), prober, console)

        with pytest.raises(InstallError) as exc_info:
            asyncio.run(dispatcher.install(ToolSpec(name="helm")))

        assert exc_info.value.tool.name == "helm"
        assert exc_info.value.cause == "post-install verification failed"


# ── Post-install sequence ────────────────────────────────────────────


class TestPostInstall:
    def test_steps_run_in_order(self, settings, console, output):
        runner = _passing_runner(settings)
        steps = asyncio.run(PostInstallSequence(runner, settings, console).run())

        assert [s.step for s in steps] == ["runtime_pin", "package_install", "repository_clone"]
        assert all(s.status == StepStatus.PASSED for s in steps)
        assert runner.calls == [
            ["asdf", "plugin-add", "python"],
            ["asdf", "install", "python", "3.9.13"],
            ["asdf", "global", "python", "3.9.13"],
            PYTHON_CHECK,
            ["pip", "install", "aws-okta-processor"],
            ["pip", "show", "aws-okta-processor"],
            ["git", "clone", settings.dotfiles_repo, str(settings.clone_dir)],
        ]
        assert f"Repository cloned to {settings.clone_dir} successfully!" in output.getvalue()

    def test_plugin_already_added_is_ignored(self, settings, console):
        runner = _passing_runner(settings)
        runner.respond(["asdf", "plugin-add", "python"], returncode=2,
                       output="Plugin named python already added")
        steps = asyncio.run(PostInstallSequence(runner, settings, console).run())
        assert len(steps) == 3

    def test_version_mismatch_is_fatal(self, settings, console):
        runner = _passing_runner(settings)
        runner.respond(PYTHON_CHECK, output="Python 3.12.1\n")

        with pytest.raises(VerificationError) as exc_info:
            asyncio.run(PostInstallSequence(runner, settings, console).run())

        assert exc_info.value.step == "runtime_pin"
        assert ["pip", "install", "aws-okta-processor"] not in runner.calls

        failed = exc_info.value.result
        assert failed.status == StepStatus.FAILED
        assert failed.output == "Python 3.12.1"
        assert failed.error.startswith("Python installation failed")

    def test_version_prefix_is_not_a_match(self, settings, console):
        settings = settings.model_copy(update={"python_version": "3.9.1"})
        runner = _passing_runner(settings)
        runner.respond(PYTHON_CHECK, output="Python 3.9.13\n")

        with pytest.raises(VerificationError) as exc_info:
            asyncio.run(PostInstallSequence(runner, settings, console).run())

        assert exc_info.value.step == "runtime_pin"

    def test_package_failure_prevents_clone(self, settings, console):
        runner = _passing_runner(settings)
        runner.respond(["pip", "show", "aws-okta-processor"], returncode=1,
                       output="WARNING: Package(s) not found: aws-okta-processor")

        with pytest.raises(VerificationError) as exc_info:
            asyncio.run(PostInstallSequence(runner, settings, console).run())

        assert exc_info.value.step == "package_install"
        assert exc_info.value.result.status == StepStatus.FAILED
        assert not any(call[:2] == ["git", "clone"] for call in runner.calls)
        assert not settings.clone_dir.exists()

    def test_missing_clone_dir_is_fatal(self, settings, console):
        runner = _passing_runner(settings)
        runner.hooks.clear()

        with pytest.raises(VerificationError) as exc_info:
            asyncio.run(PostInstallSequence(runner, settings, console).run())

        assert exc_info.value.step == "repository_clone"


# ── Provisioner ──────────────────────────────────────────────────────


class _Prompt:
    def __init__(self, answer: bool, events: List[str]):
        self.answer = answer
        self.events = events
        self.questions: List[str] = []

    def __call__(self, question: str) -> bool:
        self.events.append("prompt")
        self.questions.append(question)
        return self.answer


def _provisioner(catalog, answer, bin_dir, host, prober, settings, console, events=None, creates=True):
    events = events if events is not None else []
    runner = _passing_runner(settings)
    strategy = FakeStrategy(bin_dir, creates=creates, events=events)
    prompt = _Prompt(answer, events)
    provisioner = Provisioner(
        catalog,
        prober,
        InstallerDispatcher(_registry(strategy, runner, host, settings), prober, console),
        PostInstallSequence(runner, settings, console),
        console,
        ask=prompt
    )
    return provisioner, strategy, prompt, runner


class TestProvisioner:
    def test_nothing_missing_skips_prompt(self, bin_dir, host, prober, settings, console, output):
        catalog = [ToolSpec(name="kubectl"), ToolSpec(name="jq")]
        for tool in catalog:
            make_executable(bin_dir, tool.name, f"{tool.name} 1.0")
        provisioner, strategy, prompt, runner = _provisioner(
            catalog, False, bin_dir, host, prober, settings, console)

        summary = asyncio.run(provisioner.run())

        assert prompt.questions == []
        assert strategy.installed == []
        assert [s.step for s in summary.steps] == ["runtime_pin", "package_install", "repository_clone"]
        assert "All software is installed." in output.getvalue()
        assert "All tasks completed successfully!" in output.getvalue()

    def test_decline_installs_nothing(self, bin_dir, host, prober, settings, console, output):
        catalog = [ToolSpec(name="kubectl"), ToolSpec(name="jq")]
        provisioner, strategy, prompt, runner = _provisioner(
            catalog, False, bin_dir, host, prober, settings, console)

        summary = asyncio.run(provisioner.run())

        assert summary.declined
        assert prompt.questions == [INSTALL_QUESTION]
        assert strategy.installed == []
        assert runner.calls == []
        assert "Skipping installation." in output.getvalue()

    def test_first_failure_stops_the_run(self, bin_dir, host, prober, settings, console):
        catalog = [ToolSpec(name="kubectl"), ToolSpec(name="helm"), ToolSpec(name="jq")]
        provisioner, strategy, prompt, runner = _provisioner(
            catalog, True, bin_dir, host, prober, settings, console, creates=False)

        with pytest.raises(InstallError) as exc_info:
            asyncio.run(provisioner.run())

        assert exc_info.value.tool.name == "kubectl"
        assert strategy.installed == ["kubectl"]
        assert runner.calls == []

    def test_one_present_one_missing(self, bin_dir, host, prober, settings, console, output):
        events: List[str] = []
        make_executable(bin_dir, "a", "a 2.0")
        catalog = [ToolSpec(name="a"), ToolSpec(name="b")]
        provisioner, strategy, prompt, runner = _provisioner(
            catalog, True, bin_dir, host, prober, settings, console, events=events)

        summary = asyncio.run(provisioner.run())

        assert events == ["prompt", "install:b"]
        assert summary.installed == ["b"]
        assert not summary.declined
        assert runner.calls[0] == ["asdf", "plugin-add", "python"]
        assert runner.calls[-1][:2] == ["git", "clone"]

        text = output.getvalue()
        assert "a is installed: a 2.0" in text
        assert "b is not installed." in text
        assert "- b" in text
        assert text.index("b installed successfully!") < text.index("All tasks completed successfully!")

    def test_assume_yes_skips_prompt(self, bin_dir, host, prober, settings, console):
        catalog = [ToolSpec(name="jq")]
        runner = _passing_runner(settings)
        strategy = FakeStrategy(bin_dir)

        def refuse(question):
            raise AssertionError("prompt should not be shown")

        provisioner = Provisioner(
            catalog,
            prober,
            InstallerDispatcher(_registry(strategy, runner, host, settings), prober, console),
            PostInstallSequence(runner, settings, console),
            console,
            assume_yes=True,
            ask=refuse
        )
        summary = asyncio.run(provisioner.run())
        assert summary.installed == ["jq"]
