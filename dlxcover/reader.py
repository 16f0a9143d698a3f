#########################################
# Read a binary matrix written as lines #
# of 0s and 1s into a dlxcover matrix   #
#########################################

import logging
import numpy as np
from dlxcover.core import DLXError, Matrix

logger = logging.getLogger(__name__)

# Characters read per call to stream.read.
CHUNK_SIZE = 65536


class ReadError(DLXError):
    'A matrix could not be read.'


class MalformedInputError(ReadError):
    'The input contains a character other than 0, 1, or newline.'

    def __init__(self, char, line, column):
        self.char = char
        self.line = line
        self.column = column
        msg = 'invalid character %r at line %d, column %d' % \
            (char, line, column)
        super().__init__(msg)


class MatrixIOError(ReadError):
    'The input stream could not be read.'

    def __init__(self, err):
        self.err = err
        super().__init__('failed to read matrix: %s' % err)


class BinaryCSR(object):
    '''Compressed sparse row form of a binary matrix.  Every stored value is
    a 1, so only the column indices are kept.  Row i's column indices are
    col_ind[row_ptr[i]:row_ptr[i+1]].'''

    def __init__(self, col_ind, row_ptr):
        self.col_ind = np.asarray(col_ind, dtype=np.intp)
        self.row_ptr = np.asarray(row_ptr, dtype=np.intp)

    @property
    def num_rows(self):
        'Number of rows.'
        return len(self.row_ptr) - 1

    def row(self, i):
        'Return the column indices of row i.'
        return self.col_ind[self.row_ptr[i]:self.row_ptr[i + 1]]

    def to_matrix(self, num_columns):
        '''Build a Matrix with num_columns columns whose rows are tagged with
        their ordinals.'''
        matrix = Matrix(num_columns)
        for i in range(self.num_rows):
            cols = [int(c) for c in self.row(i)]
            nodes = matrix.make_row(i, len(cols))
            matrix.attach_row(nodes, cols)
        return matrix


def read_csr(stream):
    '''Read a binary matrix from a text or binary stream.  Each character is
    0 or 1, and each newline ends a row.  A final row need not end in a
    newline.  Rows narrower than the widest row are padded with 0s.
    Return the matrix as a BinaryCSR along with the width of the widest
    row.'''
    col_ind = []
    row_ptr = [0]
    width = 0           # Widest row so far
    col = 0             # Width of the current row so far
    line = 1
    at_line_start = True
    while True:
        try:
            chunk = stream.read(CHUNK_SIZE)
        except (OSError, UnicodeDecodeError) as err:
            raise MatrixIOError(err) from err
        if not chunk:
            break
        if isinstance(chunk, bytes):
            chunk = chunk.decode('latin-1')
        for ch in chunk:
            if ch == '1':
                col_ind.append(col)
                col += 1
                at_line_start = False
            elif ch == '0':
                col += 1
                at_line_start = False
            elif ch == '\n':
                row_ptr.append(len(col_ind))
                width = max(width, col)
                col = 0
                line += 1
                at_line_start = True
            else:
                raise MalformedInputError(ch, line, col + 1)

    # End of input right after a newline adds no row.
    if not at_line_start:
        row_ptr.append(len(col_ind))
        width = max(width, col)
    return BinaryCSR(col_ind, row_ptr), width


def read_matrix(stream):
    'Read a binary matrix from a stream and return it as a Matrix.'
    csr, width = read_csr(stream)
    matrix = csr.to_matrix(width)
    logger.debug('Read %s', matrix)
    return matrix


def read_matrix_file(path):
    'Read a binary matrix from the named file and return it as a Matrix.'
    try:
        with open(path, 'rb') as f:
            return read_matrix(f)
    except OSError as err:
        raise MatrixIOError(err) from err
