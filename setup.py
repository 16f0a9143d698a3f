####################
# Install dlxcover #
####################

import setuptools

long_description = ('dlxcover solves the exact cover problem with Donald '
                    "Knuth's Dancing Links algorithm: given a binary matrix, "
                    'find every subset of rows that puts exactly one 1 in '
                    'each column.  Rows can be forced into the solution '
                    'before searching, and a Z3-based solver is provided '
                    'for cross-checking.')

setuptools.setup(
    name='dlxcover',
    version='1.0.0',
    description='Exact cover by Dancing Links',
    long_description=long_description,
    long_description_content_type='text/markdown',
    classifiers=[
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Development Status :: 4 - Beta',
        'License :: OSI Approved',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers'],
    keywords=[
        'exact cover',
        'dancing links',
        'algorithm x',
        'constraint satisfaction',
        'combinatorial search'],
    python_requires='>=3.8',
    install_requires=[
        'numpy >= 1.20',
        'z3-solver >= 4.8',
    ],
    extras_require={
        'test': ['pytest'],
    },
    packages=setuptools.find_packages(exclude=['tests', 'examples']),
    scripts=['bin/dlxsolve'])
