######################################
# Use the Z3 Theorem Prover to solve #
# classically for the exact covers   #
# of a dlxcover matrix               #
######################################

import datetime
import logging
import sys
import z3
from dlxcover import solver
from dlxcover.search import SolutionRow
from dlxcover.solver import forced_solution_rows

logger = logging.getLogger(__name__)


class Z3Result(solver.Result):
    'Add Z3-specific fields to a Result.'

    def __init__(self):
        super().__init__()
        self.reason_unknown = None


def solve(matrix, num_solutions=1, timeout=None):
    '''Find up to num_solutions exact covers of matrix, or all of them if
    num_solutions is None, by expressing each column as a pseudo-Boolean
    constraint in Z3.  Rows already forced into the matrix are required in
    every solution and lead it.

    Z3 has no notion of the order in which rows were chosen, so the
    num_choices of each non-forced SolutionRow is None.'''
    if num_solutions is None:
        num_solutions = sys.maxsize
    elif num_solutions < 1:
        raise ValueError('num_solutions must be positive, not %r' %
                         num_solutions)

    # Constrain one 0/1 variable per row.  Empty rows cover nothing and are
    # never selected.
    s = z3.Solver()
    if timeout is not None:
        s.set('timeout', max(1, int(timeout*1000)))
    rvars = [z3.Int('r%d' % i) for i in range(matrix.num_rows)]
    col_rows = {cid: [] for cid in matrix.ids}
    for i, v in enumerate(rvars):
        cols = matrix.row_columns(i)
        if len(cols) == 0:
            s.add(v == 0)
            continue
        s.add(v >= 0, v <= 1)
        for cid in cols:
            col_rows[cid].append(v)

    # Select exactly one row per column.
    for cid, vs in col_rows.items():
        if len(vs) == 0:
            s.add(z3.BoolVal(False))
        else:
            s.add(z3.Sum(vs) == 1)

    # Require the forced rows.
    forced = forced_solution_rows(matrix)
    for r in forced:
        s.add(rvars[r.row] == 1)
    forced_set = {r.row for r in forced}

    # Enumerate solutions, blocking each one once it is found.
    solutions = []
    complete = False
    stime1 = datetime.datetime.now()
    while len(solutions) < num_solutions:
        status = s.check()
        if status == z3.unsat:
            complete = True
            break
        if status != z3.sat:
            logger.debug('Z3 gave up: %s', s.reason_unknown())
            break
        model = s.model()
        chosen = [i for i, v in enumerate(rvars)
                  if model.eval(v, model_completion=True).as_long() == 1]
        soln = list(forced)
        for i in chosen:
            if i in forced_set:
                continue
            x = matrix.row_off[i]
            cid = matrix.column_id(x)
            soln.append(SolutionRow(x, cid, None, i, matrix.tags[i]))
        solutions.append(soln)
        if len(chosen) == 0:
            # The empty cover of a zero-column matrix is its only cover.
            complete = True
            break
        s.add(z3.Or([rvars[i] == 0 for i in chosen]))
    stime2 = datetime.datetime.now()
    logger.debug('Found %d solution(s) in %s', len(solutions), stime2 - stime1)

    ret = Z3Result()
    ret.num_rows = matrix.num_rows
    ret.num_columns = matrix.num_columns
    ret.solutions = solutions
    ret.solver_times = (stime1, stime2)
    ret.complete = complete
    if not complete and len(solutions) < num_solutions:
        ret.reason_unknown = s.reason_unknown()
    return ret
