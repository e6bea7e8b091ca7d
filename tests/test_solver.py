import pytest

from vector_rig.core.errors import ConfigurationError, DegenerateSystemError
from vector_rig.core.solver import ConstraintSolver


def test_residual():
    assert ConstraintSolver.residual((4.0, 2.0), -1.0, (1.0, 2.0)) == (5.0, 4.0)


def test_solve_pair_reference_configuration():
    # a2=(2,3), a3=(3,1), r = b - k1*a1 with b=(4,2), k1=-1
    k2, k3 = ConstraintSolver.solve_pair((2.0, 3.0), (3.0, 1.0), (5.0, 4.0))
    assert k2 == pytest.approx(1.0)
    assert k3 == pytest.approx(1.0)


def test_solve_pair_satisfies_system():
    a, c, r = (0.3, -1.7), (2.2, 0.4), (-5.0, 9.5)
    ka, kc = ConstraintSolver.solve_pair(a, c, r)
    assert ka * a[0] + kc * c[0] == pytest.approx(r[0])
    assert ka * a[1] + kc * c[1] == pytest.approx(r[1])


@pytest.mark.parametrize("c", [(2.0, 4.0), (-0.5, -1.0), (1.0, 2.0)])
def test_parallel_directions_are_degenerate(c):
    with pytest.raises(DegenerateSystemError) as info:
        ConstraintSolver.solve_pair((1.0, 2.0), c, (1.0, 1.0))
    assert info.value.det == pytest.approx(0.0)


def test_nearly_parallel_is_degenerate_regardless_of_length():
    a = (1e6, 2e6)
    c = (1e6, 2e6 + 1e-6)
    with pytest.raises(DegenerateSystemError):
        ConstraintSolver.solve_pair(a, c, (1.0, 0.0))


def test_short_but_independent_vectors_are_solved():
    ka, kc = ConstraintSolver.solve_pair((1e-6, 0.0), (0.0, 1e-6), (1.0, 2.0))
    assert ka == pytest.approx(1e6)
    assert kc == pytest.approx(2e6)


def test_point_on_line():
    k, constrained, foot = ConstraintSolver.solve_point_on_line((3.0, 2.0), (5.0, 1.0))
    assert k == pytest.approx(17.0 / 13.0)
    assert constrained == pytest.approx((51.0 / 13.0, 34.0 / 13.0))
    assert foot == pytest.approx((51.0 / 13.0, 0.0))


def test_point_on_line_rejects_zero_direction():
    with pytest.raises(ConfigurationError):
        ConstraintSolver.solve_point_on_line((0.0, 0.0), (5.0, 1.0))
