#######################################
# Use Dancing Links to enumerate the  #
# exact covers of a dlxcover matrix   #
#######################################

import datetime
import logging
import sys
from dlxcover import solver
from dlxcover.search import SearchContext, exact_cover, Outcome
from dlxcover.solver import forced_solution_rows

logger = logging.getLogger(__name__)


class DLXResult(solver.Result):
    'Add Dancing Links-specific fields to a Result.'

    def __init__(self):
        super().__init__()
        self.remaining = None
        self.nodes = None
        self.outcome = None

    def _repr_dict(self):
        ret = super()._repr_dict()
        ret["remaining"] = self.remaining
        ret["search nodes"] = self.nodes
        ret["outcome"] = self.outcome
        return ret

    def _str_dict(self):
        ret = super()._str_dict()
        ret["search nodes"] = self.nodes
        if self.outcome is not None:
            ret["outcome"] = self.outcome.value
        return ret


def solve(matrix, num_solutions=1, timeout=None, max_depth=None):
    '''Find up to num_solutions exact covers of matrix, or all of them if
    num_solutions is None.  Rows already forced into the matrix lead every
    solution.'''
    if num_solutions is None:
        budget = sys.maxsize
    elif num_solutions < 1:
        raise ValueError('num_solutions must be positive, not %r' %
                         num_solutions)
    else:
        budget = int(num_solutions)
    forced = forced_solution_rows(matrix)
    solutions = []

    def record(path):
        solutions.append(forced + path)

    ctx = SearchContext(budget, timeout=timeout, max_depth=max_depth,
                        on_solution=record)
    stime1 = datetime.datetime.now()
    exact_cover(matrix, ctx)
    stime2 = datetime.datetime.now()
    logger.debug('Found %d solution(s) in %s', len(solutions), stime2 - stime1)

    ret = DLXResult()
    ret.num_rows = matrix.num_rows
    ret.num_columns = matrix.num_columns
    ret.solutions = solutions
    ret.solver_times = (stime1, stime2)
    ret.remaining = ctx.remaining
    ret.nodes = ctx.nodes
    ret.outcome = ctx.outcome()
    ret.complete = ret.outcome == Outcome.NOT_FOUND
    return ret
