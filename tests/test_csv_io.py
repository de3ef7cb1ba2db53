import pytest

from hyperlayer.csv_io import get_dims_csv, read_csv, write_csv_columns, write_csv_records


def test_columns_round_trip(tmp_path):
    path = tmp_path / "table.csv"
    columns = [[0.0, 0.5, 1.0], [101325.0, 9.5e4, 8.75e4], [-1.25, 3.0e-7, 2.0]]
    write_csv_columns(path, columns)
    result = read_csv(path)
    assert len(result) == 3
    for read_column, column in zip(result, columns):
        assert read_column == pytest.approx(column, rel=1e-6)


def test_written_format(tmp_path):
    path = tmp_path / "table.csv"
    write_csv_columns(path, [[1.0], [0.25]])
    assert path.read_text(encoding="utf-8") == "1.000000e+00, 2.500000e-01\n"


def test_dims_of_written_table(tmp_path):
    path = tmp_path / "table.csv"
    write_csv_columns(path, [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0]])
    assert get_dims_csv(path) == (4, 2)


def test_read_plain_table(tmp_path):
    path = tmp_path / "plain.csv"
    path.write_text("1,2\n3,4\n5,6\n", encoding="utf-8")
    assert read_csv(path) == [[1.0, 3.0, 5.0], [2.0, 4.0, 6.0]]


def test_records_round_trip(tmp_path):
    path = tmp_path / "records.csv"
    data = [float(value) for value in range(12)]
    write_csv_records(path, data, 3, 4)
    columns = read_csv(path)
    assert columns == [data[0::3], data[1::3], data[2::3]]


def test_records_with_selected_fields(tmp_path):
    path = tmp_path / "records.csv"
    data = [float(value) for value in range(12)]
    write_csv_records(path, data, 3, 4, [2, 0])
    assert read_csv(path) == [data[2::3], data[0::3]]


def test_inconsistent_columns_rejected(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("1,2\n3\n", encoding="utf-8")
    with pytest.raises(ValueError):
        get_dims_csv(path)
    with pytest.raises(ValueError):
        read_csv(path)


def test_empty_file_rejected(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        get_dims_csv(path)


def test_unequal_columns_rejected(tmp_path):
    with pytest.raises(ValueError):
        write_csv_columns(tmp_path / "x.csv", [[1.0, 2.0], [3.0]])
    with pytest.raises(ValueError):
        write_csv_columns(tmp_path / "x.csv", [])


def test_short_record_data_rejected(tmp_path):
    with pytest.raises(ValueError):
        write_csv_records(tmp_path / "x.csv", [1.0, 2.0], 3, 1)
    with pytest.raises(ValueError):
        write_csv_records(tmp_path / "x.csv", [1.0, 2.0], 2, 1, [0, 1, 0])