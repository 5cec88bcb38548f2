"""
Pytest configuration file.
Contains fixtures that are available to all tests.
"""
import csv

import pytest

from csv_merger.config import MergeOptions
from csv_merger.records import dataset_from_rows


def _write_csv(path, header, rows, delimiter=","):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, delimiter=delimiter)
        writer.writerow(header)
        writer.writerows(rows)
    return path


@pytest.fixture
def write_csv():
    """Write a CSV file from a header and row lists"""
    return _write_csv


@pytest.fixture
def make_dataset():
    """Build a Dataset from a header and row tuples"""
    def _make(header, *rows, name=""):
        return dataset_from_rows([dict(zip(header, r)) for r in rows], header=header, name=name)
    return _make


@pytest.fixture
def username_options():
    """Options keyed on the Username column"""
    return MergeOptions(key_columns=["Username"])


@pytest.fixture
def users_csv(tmp_path):
    """Users file with departments"""
    return _write_csv(
        tmp_path / "users.csv",
        ["Username", "Dept"],
        [["a", "IT"], ["b", "HR"], ["c", "Sales"]],
    )


@pytest.fixture
def emails_csv(tmp_path):
    """Emails file missing user 'b' and carrying an extra user 'd'"""
    return _write_csv(
        tmp_path / "emails.csv",
        ["Username", "Email"],
        [["a", "a@x"], ["c", "c@x"], ["d", "d@x"]],
    )
