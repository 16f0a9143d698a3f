###################################
# Command-line driver: read a 0/1 #
# matrix and print exact covers   #
###################################

import argparse
import logging
import sys
import dlxcover
from dlxcover.reader import read_matrix, read_matrix_file, ReadError


def parse_args(argv=None):
    'Parse the command line.'
    parser = argparse.ArgumentParser(
        description='Solve an exact cover problem given as lines of 0s and '
        '1s, one line per row.  Print the 0-based row numbers of each '
        'solution found.')
    parser.add_argument('file', nargs='?', default='-',
                        help='matrix file (default: standard input)')
    count = parser.add_mutually_exclusive_group()
    count.add_argument('-n', '--num-solutions', type=int, default=1,
                       metavar='N', help='number of solutions to print '
                       '(default: 1)')
    count.add_argument('-a', '--all', action='store_true',
                       help='print every solution')
    parser.add_argument('-f', '--force', type=int, action='append',
                        default=[], metavar='ROW',
                        help='require a row in every solution (repeatable)')
    parser.add_argument('-s', '--solver', default=None,
                        help='solver to use: dlx or z3 (default: '
                        '$DLXCOVER_SOLVER or dlx)')
    parser.add_argument('-t', '--timeout', type=float, default=None,
                        metavar='SECONDS', help='give up after this long')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='log progress to standard error')
    args = parser.parse_args(argv)
    if not args.all and args.num_solutions < 1:
        parser.error('the number of solutions must be positive')
    return args


def main(argv=None):
    'Read a matrix, solve it, and print its dimensions and solutions.'
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    # Read the matrix.
    try:
        if args.file == '-':
            matrix = read_matrix(sys.stdin.buffer)
        else:
            matrix = read_matrix_file(args.file)
    except ReadError as err:
        sys.exit('invalid input: %s' % err)
    except MemoryError:
        sys.exit('memory allocation error')
    print('Dimensions: [%d, %d]' % (matrix.num_rows, matrix.num_columns))

    # Pre-select any rows the user requires.
    for r in args.force:
        try:
            matrix.force_row(r)
        except (dlxcover.RowSelectionError, IndexError, ValueError) as err:
            sys.exit('cannot force row %d: %s' % (r, err))

    # Solve and output the solutions.
    num = None if args.all else args.num_solutions
    try:
        result = matrix.solve(args.solver, num_solutions=num,
                              timeout=args.timeout)
    except dlxcover.UnknownSolverError as err:
        sys.exit(str(err))
    if len(result.solutions) == 0:
        if not result.complete:
            sys.exit('timed out before finding a solution')
        sys.exit('no solution found')
    for soln in result.solutions:
        print(','.join(['%d' % r.row for r in soln]))
    return 0
