"""
Tests for the cli module.

This module contains tests for argument parsing, the interactive menu and
batch execution.
"""

import pytest
from bestfit.cli import build_config, create_parser, main, prompt_positive_int, run_menu
from bestfit.simulator import BestFitSimulator


def scripted(*answers):
    answers = iter(answers)
    return lambda prompt: next(answers)


class TestParser:
    """Test cases for create_parser."""

    def test_defaults(self):
        """Test default argument values."""
        args = create_parser().parse_args([])

        assert args.partitions is None
        assert args.partitions_csv is None
        assert args.operations is None
        assert args.log_level == "INFO"
        assert args.debug is False

    def test_partition_sources_are_exclusive(self):
        """Test --partitions and --partitions-csv cannot be combined."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--partitions", "10", "--partitions-csv", "p.csv"])


class TestPrompts:
    """Test cases for the interactive prompts."""

    def test_prompt_positive_int_retries(self, capsys):
        """Test invalid sizes are re-prompted."""
        value = prompt_positive_int("size: ", scripted("0", "-2", "abc", "7"))

        assert value == 7
        assert capsys.readouterr().out.count("Invalid size. Try again.") == 3

    def test_build_config_prompts_for_partitions(self):
        """Test partitions are asked for when not given on the command line."""
        args = create_parser().parse_args(["--debug"])

        config = build_config(args, scripted("2", "100", "0", "50"))

        assert config.partition_sizes == [100, 50]
        assert config.debug is True

    def test_build_config_from_csv(self, tmp_path):
        """Test partitions are read from a CSV file."""
        path = tmp_path / "partitions.csv"
        path.write_text("size\n10\n20\n", encoding="utf-8")
        args = create_parser().parse_args(["--partitions-csv", str(path)])

        assert build_config(args).partition_sizes == [10, 20]


class TestMenu:
    """Test cases for run_menu."""

    def test_menu_session(self, capsys):
        """Test add, deallocate, status and exit from the menu."""
        simulator = BestFitSimulator([100, 50, 30])

        run_menu(simulator, scripted("1", "40", "1", "200", "2", "1", "2", "9", "3", "4"))

        out = capsys.readouterr().out
        assert "Job 1 allocated to Partition 2 (Best Fit)." in out
        assert "No available partition for Job 2 → Added to waiting queue." in out
        assert "Job 1 deallocated from Partition 2" in out
        assert "Job not found." in out
        assert "Waiting Queue: [Job 2 (200)]" in out
        assert "Deallocated Jobs: [Job 1]" in out

    def test_menu_non_numeric_job_number(self, capsys):
        """Test a non-numeric job number is reported as not found."""
        simulator = BestFitSimulator([10])

        run_menu(simulator, scripted("2", "x", "4"))

        assert "Job not found." in capsys.readouterr().out


class TestMain:
    """Test cases for main."""

    def test_batch_run(self, tmp_path, capsys):
        """Test a batch of operations is replayed and the status printed."""
        ops = tmp_path / "ops.csv"
        ops.write_text("op,value\nalloc,5\nalloc,5\ndealloc,1\nalloc,0\n", encoding="utf-8")

        code = main(["--partitions", "5", "--operations", str(ops)])

        captured = capsys.readouterr()
        assert code == 0
        assert "Job 1 allocated to Partition 1 (Best Fit)." in captured.out
        assert "No available partition for Job 2 → Added to waiting queue." in captured.out
        assert "Waiting Job 2 allocated to Partition 1." in captured.out
        assert "Memory Utilization: 100.00 %" in captured.out
        assert "Invalid job size" in captured.err

    def test_invalid_partition_size(self, capsys):
        """Test an invalid partition size exits with an error."""
        code = main(["--partitions", "100,-5", "--operations", "unused.csv"])

        assert code == 1
        assert "Invalid partition size" in capsys.readouterr().err

    def test_missing_operations_file(self, tmp_path, capsys):
        """Test a missing operations file exits with an error."""
        code = main(["--partitions", "10", "--operations", str(tmp_path / "missing.csv")])

        assert code == 1
        assert "CSV file not found" in capsys.readouterr().err
