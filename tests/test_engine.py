import math

import numpy as np
import pytest

from vector_rig.core.engine import (
    ActiveIndex,
    LinearCombinationEngine,
    evaluate_line_constraint,
)
from vector_rig.core.errors import ConfigurationError, DegenerateSystemError
from vector_rig.core.scene import SceneConfig

ORIGIN = (960.0, 540.0)
SCALE = 100.0
A1, A2, A3, B = (1.0, 2.0), (2.0, 3.0), (3.0, 1.0), (4.0, 2.0)


@pytest.fixture
def engine():
    return LinearCombinationEngine.configure(A1, A2, A3, B, origin=ORIGIN, scale=SCALE)


def _assert_invariant(engine, result, tol=1e-9):
    x, y = result.combination()
    bx, by = engine.target
    assert x == pytest.approx(bx, rel=tol, abs=tol)
    assert y == pytest.approx(by, rel=tol, abs=tol)


def test_reference_scenario_active_a1(engine):
    # k1 = -1  ->  (-1, -2) in vector space  ->  (860, 740) on screen
    result = engine.evaluate(1, (860.0, 740.0))

    assert result.active is ActiveIndex.A1
    assert result.k1 == pytest.approx(-1.0)
    assert result.k2 == pytest.approx(1.0)
    assert result.k3 == pytest.approx(1.0)
    assert result.pos1 == pytest.approx((860.0, 740.0))
    assert result.pos2 == pytest.approx((1160.0, 240.0))
    assert result.pos3 == pytest.approx((1260.0, 440.0))
    _assert_invariant(engine, result)


def test_reference_scenario_active_a3(engine):
    result = engine.evaluate(ActiveIndex.A3, (1260.0, 440.0))

    assert result.k1 == pytest.approx(-1.0)
    assert result.k2 == pytest.approx(1.0)
    assert result.k3 == pytest.approx(1.0)


def test_active_point_is_projected_onto_its_direction(engine):
    # (1, 0) in vector space is off the a1 line; only its a1 component counts.
    result = engine.evaluate(1, (1060.0, 540.0))
    assert result.k1 == pytest.approx(1.0 / 5.0)
    vx = (result.pos1[0] - ORIGIN[0]) / SCALE
    vy = (ORIGIN[1] - result.pos1[1]) / SCALE
    assert vx * A1[1] - vy * A1[0] == pytest.approx(0.0, abs=1e-12)
    _assert_invariant(engine, result)


def test_inputs_are_not_mutated(engine):
    pos = [860.0, 740.0]
    engine.evaluate(1, pos)
    assert pos == [860.0, 740.0]
    assert engine.directions == (A1, A2, A3)


def test_evaluation_is_stateless(engine):
    first = engine.evaluate(2, (1000.0, 500.0))
    engine.evaluate(3, (100.0, 900.0))
    engine.evaluate(1, (-40.0, 12.0))
    again = engine.evaluate(2, (1000.0, 500.0))
    assert again == first


def test_invariant_holds_for_random_configurations():
    rng = np.random.default_rng(7)
    checked = 0
    for _ in range(200):
        dirs = rng.uniform(-5.0, 5.0, size=(3, 2))
        b = rng.uniform(-5.0, 5.0, size=2)
        eng = LinearCombinationEngine(*map(tuple, dirs), tuple(b), origin=ORIGIN, scale=SCALE)
        degenerate = set(eng.degenerate_slots())
        for slot in ActiveIndex:
            pos = tuple(rng.uniform(0.0, 1920.0, size=2))
            if slot in degenerate:
                with pytest.raises(DegenerateSystemError):
                    eng.evaluate(slot, pos)
                continue
            j, k = (i for i in (1, 2, 3) if i != slot)
            dj, dk = dirs[j - 1], dirs[k - 1]
            sin = abs(dj[0] * dk[1] - dj[1] * dk[0]) / (np.linalg.norm(dj) * np.linalg.norm(dk))
            if sin < 1e-3:
                continue
            result = eng.evaluate(slot, pos)
            combo = np.asarray(result.weights) @ dirs
            assert np.allclose(combo, b, rtol=1e-9, atol=1e-9)
            checked += 1
    assert checked > 400


@pytest.mark.parametrize("first,second", [(1, 2), (1, 3), (2, 1), (2, 3), (3, 1), (3, 2)])
def test_switching_active_slot_keeps_weights(engine, first, second):
    start = engine.evaluate(first, (700.0, 300.0))
    switched = engine.evaluate(second, start.position(second))
    assert switched.weights == pytest.approx(start.weights, rel=1e-9, abs=1e-9)


def test_degenerate_pair_is_reported():
    eng = LinearCombinationEngine((1.0, 2.0), (2.0, 4.0), (3.0, 1.0), B, origin=ORIGIN, scale=SCALE)

    with pytest.raises(DegenerateSystemError) as info:
        eng.evaluate(3, (1260.0, 440.0))
    assert info.value.pair == (1, 2)
    assert "a1" in str(info.value) and "a2" in str(info.value)

    # the other active choices still solve
    result = eng.evaluate(1, (860.0, 740.0))
    assert all(math.isfinite(k) for k in result.weights)
    assert eng.degenerate_slots() == [ActiveIndex.A3]


def test_try_evaluate_returns_message_instead_of_raising():
    eng = LinearCombinationEngine((1.0, 2.0), (2.0, 4.0), (3.0, 1.0), B)
    result, err = eng.try_evaluate(3, (0.0, 0.0))
    assert result is None
    assert err.startswith("no solution")

    result, err = eng.try_evaluate(1, (0.0, 0.0))
    assert err is None
    assert result is not None


@pytest.mark.parametrize("bad", [0, 4, -1, "x", None, 1.7, 2.0, True])
def test_invalid_active_index(engine, bad):
    with pytest.raises(ValueError):
        engine.evaluate(bad, (0.0, 0.0))


@pytest.mark.parametrize("zero_slot", [0, 1, 2])
def test_zero_direction_rejected_at_configure(zero_slot):
    dirs = [A1, A2, A3]
    dirs[zero_slot] = (0.0, 0.0)
    with pytest.raises(ConfigurationError):
        LinearCombinationEngine.configure(*dirs, B)


def test_zero_scale_rejected():
    with pytest.raises(ConfigurationError):
        LinearCombinationEngine(A1, A2, A3, B, scale=0)


@pytest.mark.parametrize("scale", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_scale_rejected(scale):
    with pytest.raises(ConfigurationError):
        LinearCombinationEngine.configure(A1, A2, A3, B, scale=scale)


@pytest.mark.parametrize("bad", [(1.0,), (1.0, 2.0, 3.0), (), "12", 5.0])
@pytest.mark.parametrize("position", [0, 1, 2, 3])
def test_vector_arity_rejected(bad, position):
    vectors = [A1, A2, A3, B]
    vectors[position] = bad
    with pytest.raises(ConfigurationError):
        LinearCombinationEngine.configure(*vectors)


@pytest.mark.parametrize("bad", [(math.nan, 1.0), (1.0, math.inf), (-math.inf, 0.0)])
@pytest.mark.parametrize("position", [0, 1, 2, 3])
def test_non_finite_vector_rejected(bad, position):
    vectors = [A1, A2, A3, B]
    vectors[position] = bad
    with pytest.raises(ConfigurationError):
        LinearCombinationEngine.configure(*vectors)


def test_non_finite_origin_rejected():
    with pytest.raises(ConfigurationError):
        LinearCombinationEngine.configure(A1, A2, A3, B, origin=(math.nan, 0.0))


def test_numpy_vectors_accepted():
    eng = LinearCombinationEngine.configure(np.array(A1), np.array(A2), np.array(A3), np.array(B))
    assert eng.directions[0] == (1.0, 2.0)
    assert isinstance(eng.target[0], float)


def test_numpy_integer_active_index(engine):
    assert engine.evaluate(np.int64(1), (860.0, 740.0)).active is ActiveIndex.A1


@pytest.mark.parametrize("scale", [0, 0.0, math.nan, math.inf])
def test_bad_scale_override_rejected(engine, scale):
    with pytest.raises(ConfigurationError):
        engine.evaluate(1, (0.0, 0.0), scale=scale)
    with pytest.raises(ConfigurationError):
        engine.evaluate_line_constraint((3.0, 2.0), (0.0, 0.0), scale=scale)
    with pytest.raises(ConfigurationError):
        engine.positions_for_weights((1.0, 1.0, 1.0), scale=scale)
    with pytest.raises(ConfigurationError):
        evaluate_line_constraint((3.0, 2.0), (0.0, 0.0), (0.0, 0.0), scale)


def test_bad_origin_override_rejected(engine):
    with pytest.raises(ConfigurationError):
        engine.evaluate(1, (0.0, 0.0), origin=(1.0,))


def test_mapping_override_per_call(engine):
    # same vector-space point under an identity mapping
    result = engine.evaluate(1, (-1.0, 2.0), origin=(0.0, 0.0), scale=1.0)
    assert result.k1 == pytest.approx(-1.0)
    assert result.pos2 == pytest.approx((2.0, -3.0))


def test_as_dict(engine):
    data = engine.evaluate(1, (860.0, 740.0)).as_dict()
    assert set(data) == {"active", "k1", "k2", "k3", "pos1", "pos2", "pos3"}
    assert data["active"] == 1


def test_from_scene_uses_scene_mapping():
    eng = LinearCombinationEngine.from_scene(SceneConfig())
    assert eng.origin == ORIGIN
    assert eng.scale == SCALE
    positions = eng.positions_for_weights((-1.0, 1.0, 1.0))
    assert positions[0] == pytest.approx((860.0, 740.0))


def test_line_constraint_scenario():
    # (5, 1) in vector space under the identity-with-flip mapping
    res = evaluate_line_constraint((3.0, 2.0), (5.0, -1.0), (0.0, 0.0), 1.0)
    assert res.k == pytest.approx(17.0 / 13.0)
    assert res.constrained_pos == pytest.approx((51.0 / 13.0, -34.0 / 13.0))
    assert res.foot_pos == pytest.approx((51.0 / 13.0, 0.0))


def test_line_constraint_through_engine_mapping(engine):
    res = engine.evaluate_line_constraint((3.0, 2.0), (960.0 + 500.0, 540.0 - 100.0))
    assert res.k == pytest.approx(17.0 / 13.0)
    assert res.constrained_pos == pytest.approx((960.0 + 5100.0 / 13.0, 540.0 - 3400.0 / 13.0))
    assert res.foot_pos[1] == pytest.approx(540.0)
    assert set(res.as_dict()) == {"k", "constrained_pos", "foot_pos"}


def test_line_constraint_zero_direction():
    with pytest.raises(ConfigurationError):
        evaluate_line_constraint((0.0, 0.0), (1.0, 1.0), (0.0, 0.0), 1.0)
