"""Tests for parsing nvidia-smi MIG query output."""

from unittest.mock import MagicMock

import pytest

from nvidia_migmanager.config import Settings
from nvidia_migmanager.errors import CommandExecutionError, CommandFailedError
from nvidia_migmanager.models.mig import GpuModeRecord, MigState
from nvidia_migmanager.services.command_runner import CommandRunner
from nvidia_migmanager.services.commands import CommandPurpose, build_command_table
from nvidia_migmanager.services.mode_analyzer import aggregate_mode
from nvidia_migmanager.services.gpu_state_reader import (
    GpuStateReader,
    parse_mode,
    parse_query_output,
)

A100 = "NVIDIA A100-SXM4-40GB"


class TestParseMode:
    """Test mapping of mode strings."""

    def test_enabled_and_disabled_map_exactly(self):
        assert parse_mode("Enabled") == MigState.ENABLED
        assert parse_mode("Disabled") == MigState.DISABLED

    @pytest.mark.parametrize("value", ["[N/A]", "enabled", " Enabled", "Enabled ", "Transition", ""])
    def test_other_values_are_unknown(self, value):
        """Anything but the exact strings is UNKNOWN, never TRANSITION."""
        assert parse_mode(value) == MigState.UNKNOWN


class TestParseQueryOutput:
    """Test parsing of whole query output."""

    def test_parses_one_record_per_line(self):
        output = f"{A100}, Disabled, Enabled\n{A100}, Enabled, Enabled\n"

        records = parse_query_output(output)

        assert records == [
            GpuModeRecord(A100, MigState.DISABLED, MigState.ENABLED),
            GpuModeRecord(A100, MigState.ENABLED, MigState.ENABLED),
        ]

    def test_empty_output(self):
        assert parse_query_output("") == []

    def test_non_mig_gpu_is_unknown(self):
        """GPUs without MIG support report [N/A]."""
        records = parse_query_output("Tesla T4, [N/A], [N/A]\n")

        assert records == [GpuModeRecord("Tesla T4", MigState.UNKNOWN, MigState.UNKNOWN)]

    def test_malformed_lines_are_skipped(self):
        """Lines without exactly three fields don't affect valid lines."""
        output = "\n".join([
            "No devices were found",
            f"{A100}, Disabled, Disabled",
            f"{A100}, Disabled",
            f"{A100}, Disabled, Disabled, extra",
            "",
            f"{A100}, Disabled, Disabled",
        ])

        records = parse_query_output(output)

        assert len(records) == 2
        assert all(r.current == MigState.DISABLED for r in records)
        assert aggregate_mode(records) == MigState.DISABLED

    def test_fields_must_be_separated_by_comma_space(self):
        """Without the space the line has one field and is skipped."""
        assert parse_query_output(f"{A100},Enabled,Enabled") == []


class TestGpuStateReader:
    """Test querying through the command runner."""

    def setup_method(self):
        self.commands = build_command_table(Settings())
        self.runner = MagicMock(spec=CommandRunner)

    def test_query_runs_gpu_query_command(self):
        self.runner.run_spec.return_value = f"{A100}, Enabled, Enabled\n"
        reader = GpuStateReader(self.runner, self.commands)

        records = reader.query()

        self.runner.run_spec.assert_called_once_with(self.commands[CommandPurpose.QUERY_GPUS])
        assert records == [GpuModeRecord(A100, MigState.ENABLED, MigState.ENABLED)]

    def test_query_is_not_cached(self):
        self.runner.run_spec.side_effect = [
            f"{A100}, Disabled, Disabled\n",
            f"{A100}, Disabled, Enabled\n",
        ]
        reader = GpuStateReader(self.runner, self.commands)

        first = reader.query()
        second = reader.query()

        assert first[0].pending == MigState.DISABLED
        assert second[0].pending == MigState.ENABLED
        assert self.runner.run_spec.call_count == 2

    def test_query_propagates_command_failure(self):
        self.runner.run_spec.side_effect = CommandFailedError("nvidia-smi", 9, "NVML error")
        reader = GpuStateReader(self.runner, self.commands)

        with pytest.raises(CommandFailedError):
            reader.query()

    def test_query_propagates_execution_failure(self):
        self.runner.run_spec.side_effect = CommandExecutionError(
            ["nvidia-smi"], FileNotFoundError(2, "No such file or directory")
        )
        reader = GpuStateReader(self.runner, self.commands)

        with pytest.raises(CommandExecutionError):
            reader.query()
