"""
Unit tests for reading and writing datasets.
"""
import io
import math

import pandas as pd
import pytest

from csv_merger.io_utils import (
    from_records,
    load_datasets,
    read_delimited,
    to_dataframe,
    write_delimited,
)
from csv_merger.records import dataset_from_rows


@pytest.mark.unit
class TestReadDelimited:

    def test_reads_header_and_rows(self, users_csv):
        dataset = read_delimited(str(users_csv))
        assert dataset.header == ("Username", "Dept")
        assert dataset.rows[1] == {"Username": "b", "Dept": "HR"}
        assert dataset.name == "users.csv"

    def test_custom_delimiter(self, tmp_path, write_csv):
        path = write_csv(tmp_path / "semi.csv", ["Id", "Note"], [["1", "a,b"]], delimiter=";")
        dataset = read_delimited(path, delimiter=";")
        assert dataset.rows[0]["Note"] == "a,b"

    def test_reads_open_handle(self):
        handle = io.StringIO("Id,Value\n1,x\n")
        dataset = read_delimited(handle)
        assert dataset.rows == ({"Id": "1", "Value": "x"},)

    def test_short_rows_leave_cells_absent(self, tmp_path):
        path = tmp_path / "short.csv"
        path.write_text("Id,A,B\n1,x\n", encoding="utf-8")
        dataset = read_delimited(path)
        assert dataset.rows[0]["B"] is None

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            read_delimited(tmp_path / "nope.csv")

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            read_delimited(None)


@pytest.mark.unit
class TestFromRecords:

    def test_dataframe_values_become_text(self):
        df = pd.DataFrame({"Id": [1, 2], "Score": [1.5, math.nan]})
        dataset = from_records(df)
        assert dataset.header == ("Id", "Score")
        assert dataset.rows[0] == {"Id": "1", "Score": "1.5"}
        assert dataset.rows[1]["Score"] is None

    def test_empty_dataframe_keeps_header(self):
        dataset = from_records(pd.DataFrame(columns=["Id", "Email"]))
        assert dataset.header == ("Id", "Email")
        assert len(dataset) == 0

    def test_sequence_of_mappings(self):
        dataset = from_records([{"Id": "1", "A": "x"}, {"Id": "2", "B": "y"}])
        assert dataset.header == ("Id", "A", "B")

    def test_rejects_non_mapping_rows(self):
        with pytest.raises(ValueError):
            from_records([["1", "x"]])


@pytest.mark.unit
class TestLoadDatasets:

    def test_paths_and_objects_are_exclusive(self, users_csv):
        with pytest.raises(ValueError, match="not both"):
            load_datasets(paths=[users_csv], objects=[[{"Id": "1"}]])

    def test_requires_some_input(self):
        with pytest.raises(ValueError):
            load_datasets()

    def test_requires_two_datasets(self, users_csv):
        with pytest.raises(ValueError, match="two datasets"):
            load_datasets(paths=[users_csv])

    def test_objects_are_named_by_position(self):
        datasets = load_datasets(objects=[[{"Id": "1"}], [{"Id": "2"}]])
        assert [d.name for d in datasets] == ["object 1", "object 2"]


@pytest.mark.unit
class TestWriting:

    def test_written_file_reads_back(self, tmp_path):
        path = tmp_path / "out.tsv"
        write_delimited(["Id", "A"], [{"Id": "1", "A": ""}], path, delimiter="\t")
        assert path.read_text(encoding="utf-8").splitlines() == ["Id\tA", "1\t"]
        assert read_delimited(path, delimiter="\t").rows == ({"Id": "1", "A": ""},)

    def test_to_dataframe_keeps_column_order(self):
        df = to_dataframe(["B", "A"], [{"A": "1", "B": "2"}])
        assert list(df.columns) == ["B", "A"]
        assert df.iloc[0]["B"] == "2"

    def test_dataset_from_rows_rejects_repeated_header(self):
        with pytest.raises(ValueError):
            dataset_from_rows([], header=["Id", "Id"])

    def test_stream_output_uses_plain_newlines(self):
        handle = io.StringIO()
        write_delimited(["Id"], [{"Id": "1"}], handle)
        assert handle.getvalue() == "Id\n1\n"
