# Load the core dlxcover functionality.
from dlxcover.core import *
from dlxcover.search import *
import os


def _name_to_solver(name):
    '''Map a solver name to an appropriate solve function.  Raise an
    UnknownSolverError (a ValueError) if the name is not recognized.'''
    if name == 'dlx':
        import dlxcover.solver.dlx
        return dlxcover.solver.dlx.solve
    elif name == 'z3':
        import dlxcover.solver.z3
        return dlxcover.solver.z3.solve
    else:
        raise UnknownSolverError(name)


# Load a solver based on the setting of the DLXCOVER_SOLVER environment
# variable.
_solver_name = os.getenv('DLXCOVER_SOLVER')
if _solver_name is None:
    _solver_name = 'dlx'
solve = _name_to_solver(_solver_name)


def solver_name():
    'Return the name of the solver being used.'
    return _solver_name
