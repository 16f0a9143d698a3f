import pytest

import dlxcover

# Knuth's example from "Dancing Links": columns A-G and six rows.  The only
# exact cover is rows 0, 3, and 4.
KNUTH_ROWS = [
    "CEF",
    "ADG",
    "BCF",
    "AD",
    "BG",
    "DEG",
]


@pytest.fixture()
def knuth():
    return dlxcover.Matrix.from_rows(7, KNUTH_ROWS, column_ids="ABCDEFG")


@pytest.fixture()
def three_columns():
    #############################################
    # Every way of splitting {0, 1, 2} into     #
    # intervals:                                #
    #                                           #
    #   {0} {1} {2}   {0,1} {2}   {0} {1,2}     #
    #   {0,1,2}                                 #
    #############################################
    rows = [[0], [1], [2], [0, 1], [1, 2], [0, 1, 2]]
    solutions = [
        frozenset([0, 1, 2]),
        frozenset([3, 2]),
        frozenset([0, 4]),
        frozenset([5]),
    ]
    return dlxcover.Matrix.from_rows(3, rows), solutions
