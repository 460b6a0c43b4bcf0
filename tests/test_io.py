"""
Tests for the io module.

This module contains unit tests for CSV loading and status rendering.
"""

import pytest
from bestfit.io import pretty_print_status, read_operations_csv, read_partition_sizes_csv
from bestfit.simulator import BestFitSimulator


class TestReadPartitionSizes:
    """Test cases for read_partition_sizes_csv."""

    def test_read_sizes(self, tmp_path):
        """Test sizes are read in file order."""
        path = tmp_path / "partitions.csv"
        path.write_text("size\n100\n50\n30\n", encoding="utf-8")

        assert read_partition_sizes_csv(str(path)) == [100, 50, 30]

    def test_missing_file(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_partition_sizes_csv(str(tmp_path / "missing.csv"))

    def test_missing_column(self, tmp_path):
        """Test a CSV without the size column raises ValueError."""
        path = tmp_path / "partitions.csv"
        path.write_text("capacity\n100\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Missing required column"):
            read_partition_sizes_csv(str(path))

    def test_invalid_value(self, tmp_path):
        """Test a non-numeric size raises ValueError."""
        path = tmp_path / "partitions.csv"
        path.write_text("size\nbig\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid data"):
            read_partition_sizes_csv(str(path))


class TestReadOperations:
    """Test cases for read_operations_csv."""

    def test_read_operations(self, tmp_path):
        """Test operations are parsed in order."""
        path = tmp_path / "ops.csv"
        path.write_text("op,value\nalloc,40\nALLOC,25\ndealloc,1\nstatus,\n", encoding="utf-8")

        assert read_operations_csv(str(path)) == [
            ("alloc", 40),
            ("alloc", 25),
            ("dealloc", 1),
            ("status", None),
        ]

    def test_unknown_operation(self, tmp_path):
        """Test an unknown operation is rejected."""
        path = tmp_path / "ops.csv"
        path.write_text("op,value\ncompact,1\n", encoding="utf-8")

        with pytest.raises(ValueError, match="unknown operation"):
            read_operations_csv(str(path))

    def test_missing_value(self, tmp_path):
        """Test alloc without a value is rejected."""
        path = tmp_path / "ops.csv"
        path.write_text("op,value\nalloc,\n", encoding="utf-8")

        with pytest.raises(ValueError, match="missing value"):
            read_operations_csv(str(path))


class TestPrettyPrintStatus:
    """Test cases for pretty_print_status."""

    def test_empty_status(self):
        """Test the status of a fresh simulator."""
        output = pretty_print_status(BestFitSimulator([100, 50]).snapshot())

        assert "Part. ID" in output
        assert "Int.Fragment" in output
        assert "Total: 0" in output
        assert "Waiting Queue: None" in output
        assert "Deallocated Jobs: None" in output
        assert "Average Internal Fragmentation: 0.00" in output
        assert "Memory Utilization: 0.00 %" in output

    def test_status_rows(self):
        """Test used and free partitions are rendered."""
        simulator = BestFitSimulator([100, 50, 30])
        simulator.submit_job(40)
        simulator.submit_job(200)

        lines = pretty_print_status(simulator.snapshot()).split("\n")

        used = next(line for line in lines if line.startswith("2 "))
        free = next(line for line in lines if line.startswith("1 "))
        assert used.split() == ["2", "50", "USED", "1", "40", "10"]
        assert free.split() == ["1", "100", "FREE", "FREE", "FREE", "0"]

        output = "\n".join(lines)
        assert "Total: 10" in output
        assert "Waiting Queue: [Job 2 (200)]" in output
        assert "Average Internal Fragmentation: 10.00" in output
        assert "Memory Utilization: 26.67 %" in output

    def test_status_deallocated_jobs(self):
        """Test deallocated jobs are listed in order."""
        simulator = BestFitSimulator([100, 50])
        simulator.submit_job(40)
        simulator.submit_job(90)
        simulator.deallocate(2)
        simulator.deallocate(1)

        output = pretty_print_status(simulator.snapshot())

        assert "Deallocated Jobs: [Job 2] [Job 1]" in output
