import pytest

from motion_sim.core.forces import (
    kinetic_friction,
    static_friction_limit,
    quadratic_drag,
    net_force,
)
from motion_sim.core.analytic import (
    quadratic_drag_position,
    quadratic_drag_velocity,
    terminal_velocity,
)
from motion_sim.types import MotionConfig


def test_friction_magnitudes():
    """F_k = μ m g = 0.1 · 5 · 9.81 = 4.905 N,  F_s,max = 1.2 · F_k = 5.886 N."""
    cfg = MotionConfig(force=75.0, mass=5.0, friction_coeff=0.1)
    assert kinetic_friction(cfg) == pytest.approx(4.905)
    assert static_friction_limit(cfg) == pytest.approx(5.886)
    assert static_friction_limit(cfg, multiplier=1.0) == pytest.approx(kinetic_friction(cfg))


def test_quadratic_drag_sign_follows_velocity():
    cfg = MotionConfig(force=0.0, mass=1.0, drag_coeff=0.02)
    assert quadratic_drag(cfg, 10.0) == pytest.approx(2.0)
    assert quadratic_drag(cfg, -10.0) == pytest.approx(-2.0)
    assert quadratic_drag(cfg, 0.0) == 0.0


def test_net_force_cases():
    cfg = MotionConfig(force=75.0, mass=5.0, friction_coeff=0.1, drag_coeff=0.015)
    # Breaking free from rest
    assert net_force(cfg, 0.0) == pytest.approx(75.0 - 4.905)
    # Moving forward: friction and drag both oppose
    assert net_force(cfg, 20.0) == pytest.approx(75.0 - 4.905 - 0.015 * 400)
    # Moving backward: friction and drag both push forward
    assert net_force(cfg, -20.0) == pytest.approx(75.0 + 4.905 + 0.015 * 400)


def test_net_force_locked_ignores_drag():
    """Below the rest threshold, a held body feels no net force even with drag and force nonzero."""
    cfg = MotionConfig(force=5.0, mass=5.0, friction_coeff=0.5, drag_coeff=0.2)
    assert net_force(cfg, 0.0005) == 0.0


def test_closed_form_consistency():
    """
    dx/dt from the closed form equals the closed-form velocity, and
    v(t) approaches the terminal velocity √(F_net/k).
    """
    cfg = MotionConfig(force=75.0, mass=5.0, friction_coeff=0.1, drag_coeff=0.015)
    t, h = 4.0, 1e-5
    dxdt = (quadratic_drag_position(t + h, cfg) - quadratic_drag_position(t - h, cfg)) / (2 * h)
    assert dxdt == pytest.approx(quadratic_drag_velocity(t, cfg), rel=1e-6)
    assert quadratic_drag_velocity(200.0, cfg) == pytest.approx(terminal_velocity(cfg), rel=1e-9)


def test_closed_form_without_drag():
    """k = 0: x = ½ a t², v = a t with a = (F - μ m g)/m."""
    cfg = MotionConfig(force=20.0, mass=2.0, friction_coeff=0.0)
    assert quadratic_drag_position(3.0, cfg) == pytest.approx(0.5 * 10.0 * 9.0)
    assert quadratic_drag_velocity(3.0, cfg) == pytest.approx(30.0)
    assert terminal_velocity(cfg) == float("inf")


def test_closed_form_when_friction_wins():
    cfg = MotionConfig(force=1.0, mass=10.0, friction_coeff=0.5, drag_coeff=0.01)
    assert quadratic_drag_position(5.0, cfg) == 0.0
    assert terminal_velocity(cfg) == 0.0
