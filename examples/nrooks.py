#! /usr/bin/env python

###################################
# Count the placements of n rooks #
# on an nxn board with dlxcover   #
###################################

import dlxcover
import sys

# Read the number of rooks from the command line.
if len(sys.argv) < 2:
    sys.exit('Usage: %s <#rooks>' % sys.argv[0])
n = int(sys.argv[1])

# Each square is a row that covers its rank and its file.  Exactly one rook
# lies in each rank and in each file.
idxs = range(1, n + 1)
ranks = ['R%d' % r for r in idxs]
files = ['F%d' % c for c in idxs]
matrix = dlxcover.Matrix(2*n, ranks + files)
for r in idxs:
    for c in idxs:
        matrix.add_row((r, c), ['R%d' % r, 'F%d' % c])

# Enumerate every placement and draw the first one.
result = matrix.solve(num_solutions=None)
print('%d placement(s) of %d rook(s)' % (len(result.solutions), n))
rooks = {r.tag for r in result.solutions[0]}
for r in idxs:
    for c in idxs:
        if (r, c) in rooks:
            print('* ', end='')
        else:
            print('- ', end='')
    print('')
