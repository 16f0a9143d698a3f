#! /usr/bin/env python

###################################
# Solve a Sudoku puzzle by exact  #
# cover, forcing the given digits #
###################################

import dlxcover

puzzle = ['53..7....',
          '6..195...',
          '.98....6.',
          '8...6...3',
          '4..8.3..1',
          '7...2...6',
          '.6....28.',
          '...419..5',
          '....8..79']

# One column per cell, per (row, digit), per (column, digit), and per
# (box, digit).  One matrix row per (row, column, digit) placement.
columns = ([('cell', r, c) for r in range(9) for c in range(9)] +
           [('row', r, d) for r in range(9) for d in range(1, 10)] +
           [('col', c, d) for c in range(9) for d in range(1, 10)] +
           [('box', b, d) for b in range(9) for d in range(1, 10)])
matrix = dlxcover.Matrix(len(columns), columns)
placement = {}
for r in range(9):
    for c in range(9):
        b = 3*(r//3) + c//3
        for d in range(1, 10):
            placement[(r, c, d)] = matrix.add_row(
                (r, c, d),
                [('cell', r, c), ('row', r, d), ('col', c, d), ('box', b, d)])

# Force the given digits into the solution.
for r, line in enumerate(puzzle):
    for c, ch in enumerate(line):
        if ch != '.':
            matrix.force_row(placement[(r, c, int(ch))])

# Solve and print the grid.
result = matrix.solve()
grid = [['.']*9 for _ in range(9)]
for row in result.solutions[0]:
    r, c, d = row.tag
    grid[r][c] = str(d)
for line in grid:
    print(' '.join(line))
