"""Unit tests for toolchain version detection."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from scalaboot.config import ProbeConfig
from scalaboot.toolchain import (
    PROBE_SPECS,
    BuildToolVersions,
    ToolchainDetector,
    ToolchainVersions,
    detect,
    detect_all,
)
from scalaboot.toolchain.specs import get_probe_spec


def completed(stdout="", stderr="", returncode=0):
    return MagicMock(stdout=stdout, stderr=stderr, returncode=returncode)


class TestProbeSpecs:
    """Test probe specifications."""

    def test_all_tools_have_specs(self):
        """java, scala and sbt should all be probed."""
        assert set(PROBE_SPECS) == {"java", "scala", "sbt"}

    def test_sbt_collects_all_versions(self):
        """sbt reports two versions, so every match is collected."""
        assert get_probe_spec("sbt").collect == "all"
        assert get_probe_spec("java").collect == "first"

    def test_unknown_tool(self):
        """Should raise ValueError for unknown tools."""
        with pytest.raises(ValueError, match="not supported"):
            get_probe_spec("gradle")


class TestDetect:
    """Test single-version detection."""

    @patch("subprocess.run")
    def test_java_version_from_stderr(self, mock_run):
        """Should extract the version from the first stderr line."""
        mock_run.return_value = completed(
            stderr='openjdk version "21.0.2" 2024-01-16\n'
            "OpenJDK Runtime Environment Temurin-21.0.2+13 (build 21.0.2+13)\n"
        )

        assert detect("java", "-version") == "21.0.2"
        mock_run.assert_called_once()
        assert mock_run.call_args[0][0] == ["java", "-version"]

    @patch("subprocess.run")
    def test_first_match_wins(self, mock_run):
        """Should use the first version-like substring."""
        mock_run.return_value = completed(
            stderr="Scala code runner version 2.13.12 -- Copyright 2002-2023, LAMP/EPFL 1.2.3"
        )

        assert detect("scala", "-version") == "2.13.12"

    @patch("subprocess.run")
    def test_only_first_line_is_searched(self, mock_run):
        """Versions on later lines are ignored."""
        mock_run.return_value = completed(stderr="no version here\nversion 3.3.1\n")

        assert detect("scala", "-version") == ""

    @patch("subprocess.run")
    def test_stdout_used_when_stderr_empty(self, mock_run):
        """Scala 3 prints its version on stdout."""
        mock_run.return_value = completed(stdout="Scala version (default): 3.3.1\n")

        assert detect("scala", "-version") == "3.3.1"

    @patch("subprocess.run")
    def test_stdout_used_when_stderr_has_only_warnings(self, mock_run):
        """JVM warnings on stderr do not hide the version on stdout."""
        mock_run.return_value = completed(
            stderr="Picked up JAVA_TOOL_OPTIONS: -Xmx2g\n",
            stdout="Scala version (default): 3.3.1\n",
        )

        assert detect("scala", "-version") == "3.3.1"

    @patch("subprocess.run")
    def test_no_version_in_output(self, mock_run):
        """Should return empty string when output has no version."""
        mock_run.return_value = completed(stderr="command not understood")

        assert detect("java", "-version") == ""

    @patch("subprocess.run")
    def test_missing_executable(self, mock_run):
        """A missing tool is not an error."""
        mock_run.side_effect = FileNotFoundError("java")

        assert detect("java", "-version") == ""

    @patch("subprocess.run")
    def test_abnormal_exit(self, mock_run):
        """A failing tool yields an empty version."""
        mock_run.return_value = completed(stderr="java 21.0.2 crashed", returncode=1)

        assert detect("java", "-version") == ""

    @patch("subprocess.run")
    def test_timeout(self, mock_run):
        """A probe that times out yields an empty version."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="sbt", timeout=1)

        assert detect("sbt", "-version", timeout=1) == ""


class TestDetectAll:
    """Test multi-version detection."""

    @patch("subprocess.run")
    def test_sbt_versions_in_order(self, mock_run):
        """Should collect every version in order of appearance."""
        mock_run.return_value = completed(
            stdout="sbt version in this project: 1.9.8\nsbt script version: 1.9.9\n"
        )

        assert detect_all("sbt", "-version") == ["1.9.8", "1.9.9"]

    @patch("subprocess.run")
    def test_warning_on_stderr_versions_on_stdout(self, mock_run):
        """Versions on stdout are found when stderr carries a JVM warning."""
        mock_run.return_value = completed(
            stderr="[warn] JAVA_HOME /opt/jdk/17.0.9 is not the default java\n",
            stdout="sbt version in this project: 1.9.8\nsbt script version: 1.9.9\n",
        )

        assert detect_all("sbt", "-version") == ["1.9.8", "1.9.9"]

    @patch("subprocess.run")
    def test_missing_build_tool(self, mock_run):
        """A missing build tool yields no versions."""
        mock_run.side_effect = FileNotFoundError("sbt")

        assert detect_all("sbt", "-version") == []


class TestBuildToolVersions:
    """Test mapping sbt matches to system/project versions."""

    def test_two_matches(self):
        versions = BuildToolVersions.from_matches(["1.9.8", "1.9.9"])
        assert versions.project == "1.9.8"
        assert versions.system == "1.9.9"

    def test_single_match_is_system(self):
        versions = BuildToolVersions.from_matches(["1.9.9"])
        assert versions.system == "1.9.9"
        assert versions.project == ""

    def test_no_matches(self):
        assert BuildToolVersions.from_matches([]) == BuildToolVersions()


class TestToolchainDetector:
    """Test the full toolchain probe."""

    def test_detect_toolchain(self):
        """Should probe each tool with its configured executable."""
        outputs = {
            "java": completed(stderr='openjdk version "17.0.9" 2023-10-17\n'),
            "/opt/scala/bin/scala": completed(
                stderr="Scala code runner version 2.13.12 -- Copyright\n"
            ),
            "sbt": completed(
                stdout="sbt version in this project: 1.9.8\nsbt script version: 1.9.9\n"
            ),
        }

        def fake_run(cmd, **kwargs):
            return outputs[cmd[0]]

        detector = ToolchainDetector(ProbeConfig(scala="/opt/scala/bin/scala"))
        with patch("subprocess.run", side_effect=fake_run):
            versions = detector.detect_toolchain()

        assert versions == ToolchainVersions(
            primary_runtime_version="17.0.9",
            language_version="2.13.12",
            build_tool_versions=BuildToolVersions(system="1.9.9", project="1.9.8"),
        )

    def test_nothing_installed(self):
        """Every field is empty when no tool exists."""
        detector = ToolchainDetector()
        with patch("subprocess.run", side_effect=FileNotFoundError()):
            versions = detector.detect_toolchain()

        assert versions == ToolchainVersions()
        assert "java=-" in repr(versions)

    def test_probe_timeout_is_passed(self):
        """Configured timeout reaches subprocess.run."""
        detector = ToolchainDetector(ProbeConfig(timeout_seconds=3.0))
        with patch("subprocess.run", return_value=completed()) as mock_run:
            detector.probe("java")

        assert mock_run.call_args.kwargs["timeout"] == 3.0

    def test_check_prerequisites(self):
        """Should report availability for every probed tool."""
        with patch("shutil.which", side_effect=lambda cmd: "/usr/bin/java" if cmd == "java" else None):
            prereqs = ToolchainDetector().check_prerequisites()

        assert prereqs == {"java": True, "scala": False, "sbt": False}
