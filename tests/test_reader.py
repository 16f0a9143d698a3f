import io

import pytest

from dlxcover.reader import (read_csr, read_matrix, read_matrix_file,
                             MalformedInputError, MatrixIOError)


def test_csr_layout():
    csr, width = read_csr(io.StringIO("101\n010\n"))
    assert width == 3
    assert csr.num_rows == 2
    assert list(csr.col_ind) == [0, 2, 1]
    assert list(csr.row_ptr) == [0, 2, 3]
    assert list(csr.row(0)) == [0, 2]


def test_last_row_without_newline():
    csr, width = read_csr(io.StringIO("10\n01"))
    assert csr.num_rows == 2
    assert list(csr.row(1)) == [1]


def test_ragged_rows_take_widest():
    m = read_matrix(io.StringIO("1\n0001\n01\n"))
    assert m.num_columns == 4
    assert m.num_rows == 3
    assert m.row_columns(1) == [3]
    assert m.tags == [0, 1, 2]


def test_blank_lines_are_empty_rows():
    m = read_matrix(io.StringIO("\n11\n"))
    assert m.num_rows == 2
    assert m.row_nodes(0) == []


def test_empty_input():
    m = read_matrix(io.StringIO(""))
    assert m.num_rows == 0
    assert m.num_columns == 0


def test_binary_stream():
    m = read_matrix(io.BytesIO(b"0010110\n1001001\n"))
    assert m.num_columns == 7
    assert m.row_columns(0) == [2, 4, 5]


def test_malformed_input():
    with pytest.raises(MalformedInputError) as excinfo:
        read_matrix(io.StringIO("101\n1x1\n"))
    err = excinfo.value
    assert (err.char, err.line, err.column) == ("x", 2, 2)


def test_carriage_return_is_malformed():
    with pytest.raises(MalformedInputError):
        read_matrix(io.StringIO("10\r\n"))


class BrokenStream():
    def read(self, size=-1):
        raise OSError("device went away")


def test_io_error():
    with pytest.raises(MatrixIOError):
        read_matrix(BrokenStream())


def test_missing_file(tmp_path):
    with pytest.raises(MatrixIOError):
        read_matrix_file(tmp_path / "missing.txt")


def test_read_file(tmp_path):
    path = tmp_path / "knuth.txt"
    path.write_text("0010110\n1001001\n0110010\n1001000\n0100001\n0001101\n")
    m = read_matrix_file(path)
    assert m.num_rows == 6
    result = m.solve(solver="dlx")
    assert sorted(r.row for r in result.solutions[0]) == [0, 3, 4]
