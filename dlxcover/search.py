#####################################
# Knuth's Algorithm X over a        #
# Dancing Links matrix              #
#####################################

import enum
import logging
import sys
import time
from dlxcover.core import DLXError, ROOT

logger = logging.getLogger(__name__)


class SolutionOverflowError(DLXError):
    'A solution needed more rows than the solution buffer allows.'

    def __init__(self, max_depth):
        self.max_depth = max_depth
        super().__init__('a solution needs more than %d row(s)' % max_depth)


class Outcome(enum.Enum):
    'How a search ended.'
    FOUND = 'found'
    NOT_FOUND = 'not found'
    CANCELLED = 'cancelled'


class SolutionRow(object):
    '''A row selected for a solution, the "primary" column it was selected
    to cover, and the number of rows that could cover that column at the
    time.  Forced rows were not chosen by the search.'''

    def __init__(self, node=None, column_id=None, num_choices=0,
                 row=None, tag=None, forced=False):
        self.node = node
        self.column_id = column_id
        self.num_choices = num_choices
        self.row = row
        self.tag = tag
        self.forced = forced

    def __repr__(self):
        return ('SolutionRow(row=%r, tag=%r, column_id=%r, '
                'num_choices=%r%s)' %
                (self.row, self.tag, self.column_id, self.num_choices,
                 ', forced=True' if self.forced else ''))


class SearchContext(object):
    '''Mutable state shared by every frame of a search: the number of
    solutions still wanted, cancellation, and one SolutionRow per depth.'''

    def __init__(self, remaining=1, timeout=None, max_depth=None,
                 on_solution=None):
        self.remaining = remaining      # Solutions still wanted
        self.deadline = None            # time.monotonic() cutoff
        if timeout is not None:
            self.deadline = time.monotonic() + timeout
        self.max_depth = max_depth      # Bound on the solution buffer
        self.on_solution = on_solution  # Called with each solution path
        self.cancelled = False
        self.overflowed = False
        self.solution = []              # One SolutionRow per depth
        self.found = 0                  # Solutions found so far
        self.nodes = 0                  # Search-tree nodes visited

    def slot(self, k):
        'Return the solution record for depth k, growing the buffer.'
        while len(self.solution) <= k:
            self.solution.append(SolutionRow())
        return self.solution[k]

    def stopped(self):
        '''Return True once the search should unwind, either because enough
        solutions were found or because it was cancelled.'''
        if self.remaining == 0 or self.cancelled or self.overflowed:
            return True
        if self.deadline is not None and time.monotonic() >= self.deadline:
            self.cancelled = True
        return self.cancelled

    def cancel(self):
        'Ask a running search to unwind at its next check.'
        self.cancelled = True

    def path(self, matrix, length):
        'Return copies of the first length solution records.'
        rows = []
        for s in self.solution[:length]:
            rows.append(SolutionRow(s.node, s.column_id, s.num_choices,
                                    matrix.row_index(s.node),
                                    matrix.row_tag(s.node)))
        return rows

    def outcome(self):
        'Classify the state left by the last search.'
        if self.remaining == 0:
            return Outcome.FOUND
        if self.cancelled:
            return Outcome.CANCELLED
        return Outcome.NOT_FOUND


def _search(matrix, ctx, k):
    '''Search for exact covers of the active part of matrix, having already
    chosen k rows.  Return the length of the solution that used up the
    budget, or 0.'''
    ctx.nodes += 1

    # An empty header ring means every column is covered.
    if matrix.right[ROOT] == ROOT:
        ctx.remaining -= 1
        ctx.found += 1
        if ctx.on_solution is not None:
            ctx.on_solution(ctx.path(matrix, k))
        return k
    if ctx.max_depth is not None and k >= ctx.max_depth:
        ctx.overflowed = True
        return 0

    # A column with no rows ends this branch; the loop below never runs.
    col = matrix.choose_column()
    slot = ctx.slot(k)
    slot.column_id = matrix.column_id(col)
    slot.num_choices = matrix.count[col]
    matrix.cover(col)

    n = 0
    down = matrix.down
    i = down[col]
    while i != col:
        slot.node = i
        matrix.cover_other_columns(i)
        n = _search(matrix, ctx, k + 1)
        matrix.uncover_other_columns(i)
        # Stopping here keeps slot.node on the row that succeeded.
        if ctx.stopped():
            break
        i = down[i]

    matrix.uncover(col)
    if ctx.remaining != 0:
        n = 0
    return n


def exact_cover(matrix, context):
    '''Find the context.remaining-th exact cover of matrix and return its
    length, or 0 if not that many exist.  context.remaining is decremented
    once per solution found.  The matrix is restored before returning.

    A zero-column matrix has one solution of length 0, so a return value of
    0 is ambiguous; check context.outcome() or the column count.'''
    if context.remaining < 1:
        raise ValueError('the number of solutions to look for must be '
                         'positive, not %d' % context.remaining)

    # Recursion goes at most one level per column.
    depth = len(matrix.active_columns()) + 1000
    if sys.getrecursionlimit() < depth:
        sys.setrecursionlimit(depth)

    start = context.nodes
    n = _search(matrix, context, 0)
    logger.debug('Visited %d search node(s); %d solution(s) found so far, '
                 '%d still wanted', context.nodes - start, context.found,
                 context.remaining)
    if context.overflowed:
        raise SolutionOverflowError(context.max_depth)
    return n
