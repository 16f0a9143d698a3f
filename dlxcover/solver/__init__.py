from dlxcover.solver.common import *
