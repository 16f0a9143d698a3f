####################################
# Dancing Links matrix: node rings #
# and reversible cover/uncover     #
####################################

import dlxcover
import logging
import os
import shlex
import numpy as np

logger = logging.getLogger(__name__)

# Arena slot of the root node.  Slots 1..n hold the column headers and all
# later slots hold body nodes, row by row.
ROOT = 0


class DLXError(Exception):
    'Base class for all dlxcover errors.'


class UnknownColumnError(DLXError):
    'A row referenced a column that does not exist.'

    def __init__(self, column_id):
        self.bad_column = column_id
        msg = 'No column with id %r exists in the matrix' % (column_id,)
        super().__init__(msg)


class DuplicateColumnError(DLXError):
    'A supposedly new column already exists.'

    def __init__(self, column_id, row=None):
        self.bad_column = column_id
        if row is None:
            msg = 'Column id %r appears more than once in the matrix' % \
                (column_id,)
        else:
            msg = 'Column id %r appears more than once in row %d' % \
                (column_id, row)
        super().__init__(msg)


class RowSelectionError(DLXError):
    'A row could not be forced into or released from the solution.'

    def __init__(self, row, msg):
        self.row = row
        super().__init__(msg)


class AlreadySelectedError(RowSelectionError):
    'A row to force has already been removed from the matrix.'

    def __init__(self, row):
        super().__init__(row, 'Row %d has already been removed from the '
                         'matrix and cannot be selected' % row)


class NotSelectedError(RowSelectionError):
    'A row to release was never forced.'

    def __init__(self, row):
        super().__init__(row, 'Row %d is not a forced row' % row)


class SelectionOrderError(RowSelectionError):
    'Forced rows were released out of order.'

    def __init__(self, row, last):
        self.last = last
        super().__init__(row, 'Row %d must be released before row %d' %
                         (last, row))


class CorruptMatrixError(DLXError):
    'The links of a matrix are inconsistent.'


class UnknownSolverError(DLXError, ValueError):
    'A solver name is not recognized.'

    def __init__(self, name):
        self.bad_solver = name
        super().__init__('"%s" is not a recognized dlxcover solver' % name)


def _env_params():
    '''Parse the key=value pairs in the DLXCOVER_PARAMS environment variable
    into a dictionary of solver keyword arguments.  A bare key maps to True.'''
    params = {}
    var_params = os.getenv('DLXCOVER_PARAMS')
    if var_params is None:
        return params
    for t in shlex.split(var_params):
        try:
            # Parse "key=value" into a key and a value.
            eq = t.index('=')
            k, v = t[:eq], t[eq+1:]

            # Attempt to convert value to a number.
            try:
                v = int(v)
            except ValueError:
                try:
                    v = float(v)
                except ValueError:
                    pass
        except ValueError:
            k, v = t, True
        params[k] = v
    return params


class Matrix(object):
    '''A sparse 0/1 matrix stored as circular doubly-linked rings.

    Every node lives in an arena of parallel lists (left, right, up, down,
    column, row) and is addressed by its index.  Slot 0 is the root, whose
    left-right ring links all active column headers.  Column header h owns
    the vertical ring of column h and a live-node count.'''

    def __init__(self, num_columns, column_ids=None):
        '''Link num_columns column headers into a ring anchored by the root,
        in input order.  Column ids default to the column ordinals.'''
        if num_columns < 0:
            raise ValueError('a matrix cannot have %d columns' % num_columns)
        if column_ids is None:
            column_ids = range(num_columns)
        column_ids = list(column_ids)
        if len(column_ids) != num_columns:
            raise ValueError('%d column id(s) were provided for %d column(s)' %
                             (len(column_ids), num_columns))
        self._col_index = {}
        for c, cid in enumerate(column_ids):
            if cid in self._col_index:
                raise DuplicateColumnError(cid)
            self._col_index[cid] = c + 1
        self.ids = column_ids

        # With zero columns the root simply links to itself.  Each header's
        # vertical ring holds only the header.
        n = num_columns + 1
        self.left = [(h - 1) % n for h in range(n)]
        self.right = [(h + 1) % n for h in range(n)]
        self.up = list(range(n))
        self.down = list(range(n))
        self.column = list(range(n))
        self.row = [-1]*n
        self.count = [0]*n      # Body nodes per column, header excluded
        self.tags = []          # Opaque caller tag of each row
        self.row_off = [n]      # row_off[i]:row_off[i+1] are row i's nodes
        self._forced = []       # Stack of forced row ordinals

    @classmethod
    def from_rows(cls, num_columns, rows, column_ids=None, tags=None):
        '''Build a matrix from a sequence of rows, each an iterable of column
        ids.  Rows are tagged with their ordinals unless tags are given.'''
        matrix = cls(num_columns, column_ids)
        rows = list(rows)
        if tags is None:
            tags = range(len(rows))
        tags = list(tags)
        if len(tags) != len(rows):
            raise ValueError('%d tag(s) were provided for %d row(s)' %
                             (len(tags), len(rows)))
        for tag, cols in zip(tags, rows):
            matrix.add_row(tag, cols)
        logger.debug('Built %s', matrix)
        return matrix

    @classmethod
    def from_dense(cls, array, column_ids=None, tags=None):
        'Build a matrix from a two-dimensional array-like of 0s and 1s.'
        dense = np.asarray(array)
        if dense.ndim != 2:
            raise ValueError('expected a two-dimensional array but got %d '
                             'dimension(s)' % dense.ndim)
        if not np.isin(dense, (0, 1)).all():
            raise ValueError('a binary matrix may contain only 0s and 1s')
        num_columns = dense.shape[1]
        if column_ids is None:
            column_ids = range(num_columns)
        column_ids = list(column_ids)
        if len(column_ids) != num_columns:
            raise ValueError('%d column id(s) were provided for %d column(s)' %
                             (len(column_ids), num_columns))
        rows = [[column_ids[c] for c in np.flatnonzero(r)] for r in dense]
        return cls.from_rows(num_columns, rows, column_ids, tags)

    def __str__(self):
        'Return a short description of the matrix.'
        return 'Matrix with %d row(s), %d column(s), and %d node(s)' % \
            (self.num_rows, self.num_columns, len(self.left) - self.row_off[0])

    @property
    def num_columns(self):
        'Number of columns, covered or not.'
        return len(self.ids)

    @property
    def num_rows(self):
        'Number of rows, including empty ones.'
        return len(self.tags)

    def header(self, column_id):
        'Return the header slot of the column with the given id.'
        try:
            return self._col_index[column_id]
        except (KeyError, TypeError):
            raise UnknownColumnError(column_id) from None

    def column_id(self, node):
        'Return the id of the column a node belongs to.'
        return self.ids[self.column[node] - 1]

    def row_tag(self, node):
        'Return the tag of the row a node belongs to, or None for no node.'
        if node is None:
            return None
        return self.tags[self.row[node]]

    def row_index(self, node):
        'Return the ordinal of the row a node belongs to.'
        return self.row[node]

    def row_nodes(self, i):
        'Return the slots of row i, left to right.'
        return list(range(self.row_off[i], self.row_off[i + 1]))

    def row_columns(self, i):
        'Return the ids of the columns in which row i has a 1.'
        return [self.column_id(x) for x in self.row_nodes(i)]

    def make_row(self, tag, width):
        '''Allocate width nodes for a new row, link them into a left-right
        ring in order, and stamp them with the row.  Return their slots.'''
        if self._forced:
            raise ValueError('rows cannot be added while rows are forced')
        if width < 0:
            raise ValueError('a row cannot have %d nodes' % width)
        i = len(self.tags)
        start = len(self.left)
        self.tags.append(tag)
        for j in range(width):
            x = start + j
            self.left.append(start + (j - 1) % width)
            self.right.append(start + (j + 1) % width)
            self.up.append(x)
            self.down.append(x)
            self.column.append(None)
            self.row.append(i)
        self.row_off.append(start + width)
        return list(range(start, start + width))

    def _append_to_column(self, x, h):
        'Insert node x at the bottom of column h and count it.'
        self.column[x] = h
        self.up[x] = self.up[h]
        self.down[x] = h
        self._insert_ud(x)
        self.count[h] += 1

    def attach_row(self, nodes, columns):
        '''Append each node of an already linked row to the bottom of the
        parallel column in columns (a list of column ids).'''
        if self._forced:
            raise ValueError('rows cannot be attached while rows are forced')
        nodes = list(nodes)
        columns = list(columns)
        if len(nodes) != len(columns):
            raise ValueError('%d column(s) were provided for %d node(s)' %
                             (len(columns), len(nodes)))
        headers = [self.header(cid) for cid in columns]
        for x, h in zip(nodes, headers):
            self._append_to_column(x, h)

    def add_row(self, tag, columns):
        '''Add a row with a 1 in each of the given columns, in order.  Return
        the row's ordinal.'''
        if self._forced:
            raise ValueError('rows cannot be added while rows are forced')
        columns = list(columns)
        seen = set()
        for cid in columns:
            self.header(cid)
            if cid in seen:
                raise DuplicateColumnError(cid, len(self.tags))
            seen.add(cid)
        nodes = self.make_row(tag, len(columns))
        self.attach_row(nodes, columns)
        return len(self.tags) - 1

    def _remove_lr(self, x):
        # x keeps its own links so that _insert_lr can put it back.
        left, right = self.left, self.right
        right[left[x]] = right[x]
        left[right[x]] = left[x]

    def _remove_ud(self, x):
        up, down = self.up, self.down
        down[up[x]] = down[x]
        up[down[x]] = up[x]

    def _insert_lr(self, x):
        self.right[self.left[x]] = x
        self.left[self.right[x]] = x

    def _insert_ud(self, x):
        self.down[self.up[x]] = x
        self.up[self.down[x]] = x

    def is_removed(self, x):
        'Return True if node x has been removed from its column.'
        # A node is never half in its ring, so one side suffices.
        return self.down[self.up[x]] != x

    def _is_removed_lr(self, x):
        return self.right[self.left[x]] != x

    def cover(self, h):
        '''Remove column h from the header ring, then remove every row with
        a 1 in column h from all other columns.'''
        right, down, column, count = \
            self.right, self.down, self.column, self.count
        self._remove_lr(h)
        i = down[h]
        while i != h:
            j = right[i]
            while j != i:
                self._remove_ud(j)
                count[column[j]] -= 1
                j = right[j]
            i = down[i]

    def uncover(self, h):
        '''Undo cover(h).  Calls must be made in exact reverse order of the
        corresponding cover calls.'''
        left, up, column, count = self.left, self.up, self.column, self.count
        # Both loops run opposite to those in cover.
        i = up[h]
        while i != h:
            j = left[i]
            while j != i:
                count[column[j]] += 1
                self._insert_ud(j)
                j = left[j]
            i = up[i]
        self._insert_lr(h)

    def cover_other_columns(self, x):
        'Cover the column of every node in the row of x except x itself.'
        right, column = self.right, self.column
        j = right[x]
        while j != x:
            self.cover(column[j])
            j = right[j]

    def uncover_other_columns(self, x):
        'Undo cover_other_columns(x).'
        left, column = self.left, self.column
        j = left[x]
        while j != x:
            self.uncover(column[j])
            j = left[j]

    def choose_column(self):
        '''Return the active column with the fewest nodes, the first one
        from the root on ties, or None if every column is covered.'''
        right, count = self.right, self.count
        best = None
        h = right[ROOT]
        while h != ROOT:
            if best is None or count[h] < count[best]:
                best = h
            h = right[h]
        return best

    def _first_node(self, i):
        if i < 0 or i >= len(self.tags):
            raise IndexError('row %d is out of range' % i)
        x = self.row_off[i]
        if x == self.row_off[i + 1]:
            raise ValueError('row %d is empty and cannot be selected' % i)
        return x

    def is_available(self, i):
        '''Return True if row i can still be chosen: all of its nodes are in
        their columns and all of those columns are uncovered.'''
        for x in self.row_nodes(i):
            if self.is_removed(x) or self._is_removed_lr(self.column[x]):
                return False
        return True

    def force_row(self, i):
        '''Cover every column that row i covers so that row i is part of
        every solution found afterwards.'''
        x = self._first_node(i)
        if i in self._forced or not self.is_available(i):
            raise AlreadySelectedError(i)
        self.cover(self.column[x])
        self.cover_other_columns(x)
        self._forced.append(i)
        logger.debug('Forced row %d (%r)', i, self.tags[i])

    def unselect_row(self, i):
        '''Undo force_row(i).  Forced rows must be released in exact reverse
        order.'''
        x = self._first_node(i)
        if i not in self._forced:
            raise NotSelectedError(i)
        if self._forced[-1] != i:
            raise SelectionOrderError(i, self._forced[-1])
        self.uncover_other_columns(x)
        self.uncover(self.column[x])
        self._forced.pop()
        logger.debug('Released row %d (%r)', i, self.tags[i])

    def forced_rows(self):
        'Return the forced rows, oldest first.'
        return list(self._forced)

    def active_columns(self):
        'Return the ids of all uncovered columns in header-ring order.'
        ids = []
        h = self.right[ROOT]
        while h != ROOT:
            ids.append(self.ids[h - 1])
            h = self.right[h]
        return ids

    def column_count(self, column_id):
        'Return the number of nodes currently in a column.'
        return self.count[self.header(column_id)]

    def column_rows(self, column_id):
        'Return the ordinals of the rows currently in a column, top to bottom.'
        h = self.header(column_id)
        rows = []
        x = self.down[h]
        while x != h:
            rows.append(self.row[x])
            x = self.down[x]
        return rows

    def snapshot(self):
        'Return a copy of every link and count.'
        return (list(self.left), list(self.right), list(self.up),
                list(self.down), list(self.count))

    def validate(self):
        '''Raise CorruptMatrixError unless the header ring, every active
        column's vertical ring, and every count are consistent.'''
        limit = len(self.left) + 1
        seen = 0
        h = self.right[ROOT]
        while h != ROOT:
            seen += 1
            if seen > limit or not 0 < h <= self.num_columns:
                raise CorruptMatrixError('the header ring is broken')
            if self.left[self.right[h]] != h:
                raise CorruptMatrixError('header %r has inconsistent '
                                         'left-right links' % self.ids[h - 1])
            nodes = 0
            x = self.down[h]
            while x != h:
                nodes += 1
                if nodes > limit:
                    raise CorruptMatrixError('column %r never returns to '
                                             'its header' % self.ids[h - 1])
                if self.up[self.down[x]] != x or self.column[x] != h:
                    raise CorruptMatrixError('node %d of column %r has '
                                             'inconsistent links' %
                                             (x, self.ids[h - 1]))
                if self.left[self.right[x]] != x:
                    raise CorruptMatrixError('node %d of row %d has '
                                             'inconsistent links' %
                                             (x, self.row[x]))
                x = self.down[x]
            if nodes != self.count[h]:
                raise CorruptMatrixError('column %r counts %d node(s) but '
                                         'holds %d' %
                                         (self.ids[h - 1], self.count[h],
                                          nodes))
            h = self.right[h]

    def solve(self, solver=None, *args, **kwargs):
        'Find exact covers of the matrix.'
        # Keyword arguments override DLXCOVER_PARAMS.
        all_kwargs = _env_params()
        all_kwargs.update(**kwargs)
        solve_func = dlxcover.solve
        if solver is not None:
            solve_func = dlxcover._name_to_solver(solver)
        return solve_func(self, *args, **all_kwargs)
