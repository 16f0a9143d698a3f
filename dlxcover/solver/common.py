#########################################
# Define classes and functions that are #
# common across multiple solvers        #
#########################################

from collections import Counter
from dlxcover.search import SolutionRow


def forced_solution_rows(matrix):
    'Return a SolutionRow for each row forced into the matrix, oldest first.'
    rows = []
    for i in matrix.forced_rows():
        x = matrix.row_off[i]
        rows.append(SolutionRow(x, matrix.column_id(x), 1, i,
                                matrix.tags[i], forced=True))
    return rows


def check_cover(matrix, rows):
    '''Return True if the given row ordinals put exactly one 1 in every
    column of the matrix.  Forced rows and covered columns are ignored;
    the check is against the matrix as constructed.'''
    hits = Counter()
    for i in rows:
        hits.update(matrix.row_columns(i))
    return all(hits[cid] == 1 for cid in matrix.ids) and \
        len(hits) == matrix.num_columns


class Result():
    'Encapsulate solver results and related data.'

    def __init__(self):
        self.num_rows = None
        self.num_columns = None
        self.solutions = None
        self.complete = None
        self.solver_times = None

    def row_sets(self):
        'Return each solution as a frozenset of row ordinals.'
        return [frozenset(r.row for r in soln) for soln in self.solutions]

    def _repr_dict(self):
        'Return a dictionary for use internally by __repr__.'
        ret = {}
        if self.num_rows is not None:
            ret["number of rows"] = self.num_rows
        if self.num_columns is not None:
            ret["number of columns"] = self.num_columns
        if self.solutions is not None:
            ret["solutions"] = self.solutions
        if self.complete is not None:
            ret["complete"] = self.complete
        if self.solver_times:
            ret["solver times"] = self.solver_times
        return ret

    def __repr__(self):
        ret = self._repr_dict()
        return 'dlxcover.solver.Result(%s)' % str(ret)

    def _str_dict(self):
        'Return a dictionary for use internally by __str__.'
        ret = {}
        if self.num_rows is not None:
            ret["number of rows"] = self.num_rows
        if self.num_columns is not None:
            ret["number of columns"] = self.num_columns
        if self.solutions:
            ret["top solution"] = [r.row for r in self.solutions[0]]
        if self.solutions is not None:
            ret["number of solutions"] = len(self.solutions)
        if self.solver_times:
            ret["solver times"] = \
                (self.solver_times[0].strftime("%Y-%m-%d %H:%M:%S.%f"),
                 self.solver_times[1].strftime("%Y-%m-%d %H:%M:%S.%f"))
        return ret

    def __str__(self):
        ret = self._str_dict()
        return str(ret)
