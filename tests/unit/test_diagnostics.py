"""
Unit tests for duplicate and missing-key diagnostics.
"""
import logging

import pytest

from csv_merger.diagnostics import missing_key_report, missing_key_warnings, report_warnings
from csv_merger.errors import DuplicateKeyWarning, MissingKeyWarning
from csv_merger.indexing import build_index
from csv_merger.merging import cross_reference


@pytest.fixture
def three_way_result(make_dataset):
    datasets = [
        make_dataset(["Id", "A"], ("1", "a1")),
        make_dataset(["Id", "B"], ("1", "b1"), ("2", "b2")),
        make_dataset(["Id", "C"], ("1", "c1")),
    ]
    return cross_reference([build_index(d, i, ["Id"])[0] for i, d in enumerate(datasets)])


@pytest.mark.unit
class TestMissingKeyWarnings:

    def test_found_and_missing_are_one_based(self, three_way_result):
        warnings = missing_key_warnings(three_way_result)
        assert warnings == [MissingKeyWarning(key=("2",), found_in=(2,), missing_from=(1, 3))]

    def test_two_datasets_key_only_in_second(self, make_dataset):
        datasets = [
            make_dataset(["Id", "A"], ("1", "a1")),
            make_dataset(["Id", "B"], ("1", "b1"), ("2", "b2")),
        ]
        result = cross_reference([build_index(d, i, ["Id"])[0] for i, d in enumerate(datasets)])
        warning, = missing_key_warnings(result)
        assert warning.found_in == (2,)
        assert warning.missing_from == (1,)

    def test_message_names_key_and_datasets(self):
        warning = MissingKeyWarning(key=("b", "x"), found_in=(1,), missing_from=(2, 3))
        assert "'b, x'" in warning.message
        assert "Found in dataset(s): 1" in warning.message
        assert "Missing from: 2, 3" in warning.message


@pytest.mark.unit
class TestReporting:

    def test_report_warnings_logs_each_warning(self, caplog):
        warnings = [
            DuplicateKeyWarning(dataset=1, key=("dup",)),
            MissingKeyWarning(key=("b",), found_in=(1,), missing_from=(2,)),
        ]
        with caplog.at_level(logging.WARNING, logger="csv_merger.diagnostics"):
            assert report_warnings(warnings) == 2
        assert [r.levelno for r in caplog.records] == [logging.WARNING, logging.WARNING]
        assert "dataset 1: dup" in caplog.records[0].getMessage()

    def test_missing_key_report_uses_encoded_keys(self, three_way_result):
        report = missing_key_report(three_way_result, "|")
        assert report == {"2": {"found_in": [2], "missing_from": [1, 3]}}
