import importlib

import pytest

import dlxcover
import dlxcover.solver.dlx
import dlxcover.solver.z3
from dlxcover.core import _env_params
from dlxcover.solver import check_cover


@pytest.mark.parametrize("solver", ["dlx", "z3"])
def test_knuth(solver, knuth):
    result = knuth.solve(solver=solver, num_solutions=2)
    assert result.row_sets() == [frozenset([0, 3, 4])]
    assert result.complete
    assert check_cover(knuth, [r.row for r in result.solutions[0]])


@pytest.mark.parametrize("solver", ["dlx", "z3"])
def test_all_solutions(solver, three_columns):
    m, expected = three_columns
    result = m.solve(solver=solver, num_solutions=None)
    assert sorted(result.row_sets(), key=sorted) == \
        sorted(expected, key=sorted)
    assert result.complete


@pytest.mark.parametrize("solver", ["dlx", "z3"])
def test_limit(solver, three_columns):
    m, expected = three_columns
    result = m.solve(solver=solver, num_solutions=2)
    assert len(result.solutions) == 2
    assert set(result.row_sets()) <= set(expected)


@pytest.mark.parametrize("solver", ["dlx", "z3"])
def test_forced_rows_lead(solver, three_columns):
    m, expected = three_columns
    m.force_row(2)
    result = m.solve(solver=solver, num_solutions=None)
    m.unselect_row(2)
    assert sorted(result.row_sets(), key=sorted) == \
        sorted([s for s in expected if 2 in s], key=sorted)
    for soln in result.solutions:
        assert soln[0].row == 2 and soln[0].forced
        assert all(not r.forced for r in soln[1:])


@pytest.mark.parametrize("solver", ["dlx", "z3"])
def test_empty_matrix(solver):
    result = dlxcover.Matrix(0).solve(solver=solver, num_solutions=3)
    assert result.solutions == [[]]


@pytest.mark.parametrize("solver", ["dlx", "z3"])
def test_no_solution(solver):
    m = dlxcover.Matrix.from_rows(3, [[0, 1], [1, 2]])
    result = m.solve(solver=solver)
    assert result.solutions == []
    assert result.complete


def test_dlx_result_fields(knuth):
    result = knuth.solve(solver="dlx", num_solutions=4)
    assert result.remaining == 3
    assert result.nodes > 0
    assert result.outcome == dlxcover.Outcome.NOT_FOUND
    assert result.num_rows == 6 and result.num_columns == 7
    assert "number of solutions" in str(result)
    soln = result.solutions[0]
    assert [(r.row, r.column_id, r.num_choices) for r in soln] == \
        [(3, "A", 2), (0, "E", 1), (4, "B", 1)]


def test_solvers_agree_on_tags():
    rows = {"S1": "bcef", "S2": "ade", "S3": "adeg",
            "S4": "agf", "S5": "cf", "S6": "bg"}
    m = dlxcover.Matrix.from_rows(7, rows.values(), column_ids="abcdefg",
                                  tags=rows.keys())
    tags = {}
    for solver in ("dlx", "z3"):
        result = m.solve(solver=solver, num_solutions=None)
        tags[solver] = sorted(sorted(r.tag for r in s)
                              for s in result.solutions)
    assert tags["dlx"] == tags["z3"] == [["S2", "S5", "S6"]]


def test_unknown_solver(knuth):
    with pytest.raises(dlxcover.UnknownSolverError):
        knuth.solve(solver="annealer")
    with pytest.raises(ValueError):
        dlxcover._name_to_solver("annealer")


def test_params_from_environment(monkeypatch, three_columns):
    m, _ = three_columns
    monkeypatch.setenv("DLXCOVER_PARAMS", "num_solutions=3")
    assert len(m.solve(solver="dlx").solutions) == 3
    # Keyword arguments win over the environment.
    assert len(m.solve(solver="dlx", num_solutions=1).solutions) == 1


@pytest.mark.parametrize("solver", ["dlx", "z3"])
@pytest.mark.parametrize("num", [0, -1])
def test_nonpositive_num_solutions(solver, num, knuth):
    before = knuth.snapshot()
    with pytest.raises(ValueError):
        knuth.solve(solver=solver, num_solutions=num)
    assert knuth.snapshot() == before


def test_z3_has_no_choice_counts(three_columns):
    m, _ = three_columns
    m.force_row(0)
    result = m.solve(solver="z3", num_solutions=None)
    m.unselect_row(0)
    for soln in result.solutions:
        assert soln[0].num_choices == 1
        assert all(r.num_choices is None for r in soln[1:])


@pytest.fixture()
def reload_dlxcover(monkeypatch):
    'Reload dlxcover after changing DLXCOVER_SOLVER, then restore it.'
    def reload(name):
        monkeypatch.setenv("DLXCOVER_SOLVER", name)
        importlib.reload(dlxcover)
    yield reload
    monkeypatch.undo()
    importlib.reload(dlxcover)


def test_solver_from_environment(reload_dlxcover, knuth):
    reload_dlxcover("z3")
    assert dlxcover.solver_name() == "z3"
    result = knuth.solve()
    assert isinstance(result, dlxcover.solver.z3.Z3Result)
    assert result.row_sets() == [frozenset([0, 3, 4])]

    reload_dlxcover("dlx")
    assert dlxcover.solver_name() == "dlx"
    assert isinstance(knuth.solve(), dlxcover.solver.dlx.DLXResult)


def test_unknown_solver_from_environment(reload_dlxcover):
    with pytest.raises(dlxcover.UnknownSolverError):
        reload_dlxcover("annealer")


def test_env_params(monkeypatch):
    monkeypatch.delenv("DLXCOVER_PARAMS", raising=False)
    assert _env_params() == {}
    monkeypatch.setenv("DLXCOVER_PARAMS",
                       "num_solutions=3 timeout=0.5 verbose name='a b'")
    assert _env_params() == {"num_solutions": 3, "timeout": 0.5,
                             "verbose": True, "name": "a b"}


def test_check_cover(knuth):
    assert check_cover(knuth, [0, 3, 4])
    assert not check_cover(knuth, [0, 3])
    assert not check_cover(knuth, [0, 1, 3, 4])


if __name__ == "__main__":
    pytest.main(["-v", __file__])
