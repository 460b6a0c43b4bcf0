"""
Input/Output operations for the best-fit simulation.

This module handles reading partition sizes and batch operations from CSV
files and rendering the simulator snapshot as a console status table.
"""

import csv
from typing import List, Optional, Tuple

OPERATIONS = ("alloc", "dealloc", "status")

COLUMN_WIDTHS = (12, 12, 12, 12, 12, 18)
COLUMN_SPACE = 2


def read_partition_sizes_csv(path: str) -> List[int]:
    """
    Read partition sizes from a CSV file.

    Expected CSV format with header: size
    Rows are returned in file order, which becomes partition ids 1..N.

    Args:
        path: Path to the CSV file

    Returns:
        List[int]: Partition sizes in file order
    """
    sizes = []

    try:
        with open(path, 'r', newline='', encoding='utf-8') as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                sizes.append(int(row['size']))

    except FileNotFoundError:
        raise FileNotFoundError(f"CSV file not found: {path}")
    except KeyError as e:
        raise ValueError(f"Missing required column in CSV: {e}")
    except ValueError as e:
        raise ValueError(f"Invalid data in CSV file: {e}")

    return sizes


def read_operations_csv(path: str) -> List[Tuple[str, Optional[int]]]:
    """
    Read a batch of operations from a CSV file.

    Expected CSV format with header: op,value
    where op is one of alloc (value = job size), dealloc (value = job
    number) or status (value ignored).

    Args:
        path: Path to the CSV file

    Returns:
        List of (op, value) tuples in file order
    """
    operations = []

    try:
        with open(path, 'r', newline='', encoding='utf-8') as csvfile:
            reader = csv.DictReader(csvfile)
            for line, row in enumerate(reader, start=2):
                op = row['op'].strip().lower()
                if op not in OPERATIONS:
                    raise ValueError(f"unknown operation {op!r} on line {line}")

                raw_value = (row.get('value') or '').strip()
                if op == "status":
                    operations.append((op, None))
                    continue
                if not raw_value:
                    raise ValueError(f"missing value for {op!r} on line {line}")
                operations.append((op, int(raw_value)))

    except FileNotFoundError:
        raise FileNotFoundError(f"CSV file not found: {path}")
    except KeyError as e:
        raise ValueError(f"Missing required column in CSV: {e}")
    except ValueError as e:
        raise ValueError(f"Invalid data in CSV file: {e}")

    return operations


def pretty_print_status(snapshot: dict) -> str:
    """
    Generate the status table for a simulator snapshot.

    Args:
        snapshot: Dictionary returned by BestFitSimulator.snapshot()

    Returns:
        str: Formatted status string
    """
    table_width = sum(COLUMN_WIDTHS) + (len(COLUMN_WIDTHS) - 1) * COLUMN_SPACE
    gap = " " * COLUMN_SPACE

    def row(*cells):
        padded = [f"{str(cell):<{width}}" for cell, width in zip(cells, COLUMN_WIDTHS)]
        return gap.join(padded).rstrip()

    lines = [""]
    lines.append("=" * table_width)
    lines.append(row("Part. ID", "Size", "Status", "Job No.", "Job Size", "Int.Fragment"))
    lines.append("-" * table_width)

    for entry in snapshot['partitions']:
        if entry['free']:
            lines.append(row(entry['id'], entry['size'], "FREE", "FREE", "FREE", 0))
        else:
            lines.append(row(
                entry['id'], entry['size'], "USED",
                entry['job_number'], entry['job_size'], entry['internal_fragment'],
            ))

    lines.append("-" * table_width)
    indent = " " * (sum(COLUMN_WIDTHS[:-1]) + (len(COLUMN_WIDTHS) - 1) * COLUMN_SPACE)
    lines.append(f"{indent}Total: {snapshot['total_fragmentation']}")
    lines.append("=" * table_width)

    # Waiting queue
    lines.append("")
    if snapshot['waiting_queue']:
        waiting = " ".join(f"[Job {job['job_number']} ({job['job_size']})]" for job in snapshot['waiting_queue'])
    else:
        waiting = "None"
    lines.append(f"Waiting Queue: {waiting}")

    # Deallocated jobs
    if snapshot['deallocated_jobs']:
        deallocated = " ".join(f"[Job {job['job_number']}]" for job in snapshot['deallocated_jobs'])
    else:
        deallocated = "None"
    lines.append(f"Deallocated Jobs: {deallocated}")

    lines.append(f"Average Internal Fragmentation: {snapshot['avg_fragmentation']:.2f}")
    lines.append(f"Memory Utilization: {snapshot['utilization']:.2f} %")
    lines.append("=" * table_width)

    return "\n".join(lines)
