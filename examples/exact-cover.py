#! /usr/bin/env python

########################################
# Solve the following exact cover      #
# problem with dlxcover:               #
#                                      #
# Given a set E = {a,b,c,d,e,f,g}      #
# and the following subsets of E       #
#                                      #
#   S1 = {b,c,e,f}                     #
#   S2 = {a,d,e}                       #
#   S3 = {a,d,e,g}                     #
#   S4 = {a,g,f}                       #
#   S5 = {c,f}                         #
#   S6 = {b,g}                         #
#                                      #
# find a subset of {S1,S2,S3,S4,S5,S6} #
# such that each element of E appears  #
# exactly once.                        #
########################################

import dlxcover

subsets = {'S1': 'bcef',
           'S2': 'ade',
           'S3': 'adeg',
           'S4': 'agf',
           'S5': 'cf',
           'S6': 'bg'}
matrix = dlxcover.Matrix.from_rows(7, subsets.values(),
                                   column_ids='abcdefg',
                                   tags=subsets.keys())
result = matrix.solve(num_solutions=None)
for soln in result.solutions:
    print('Exact cover: %s' % ' '.join(sorted([r.tag for r in soln])))
