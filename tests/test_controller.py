import pytest

from motion_sim.config import DEFAULT_GLOBAL_CONFIG, DEFAULT_MOTION_CONFIG
from motion_sim.controller import SimulationController, SimulationStatus
from motion_sim.core.invariants import state_violations
from motion_sim.errors import ConfigError, SimulationStateError
from motion_sim.profiler import Profiler
from motion_sim.ticks import ManualTickSource
from motion_sim.types import GlobalConfig, MotionConfig, ObjectSpec, ObjectStatus

# 1/64 s frames keep glide positions and elapsed time exact in binary
FRAME_MS = 1000 / 64


def glide(oid: str, v0: float) -> ObjectSpec:
    """Frictionless, force-free object moving at constant v0."""
    return ObjectSpec(id=oid, config=MotionConfig(force=0.0, mass=1.0, initial_velocity=v0))


def glide_controller(**kwargs) -> tuple[SimulationController, ManualTickSource]:
    ticks = ManualTickSource(frame_interval_ms=FRAME_MS)
    controller = SimulationController(
        specs=[glide("fast", 40.0), glide("slow", 20.0)],
        global_config=GlobalConfig(track_length=50.0, time_scale=1.0),
        tick_source=ticks,
        **kwargs,
    )
    return controller, ticks


def test_initial_state_is_idle_and_fresh():
    controller = SimulationController()
    assert controller.status is SimulationStatus.IDLE
    assert [s.id for s in controller.states] == ["pink", "blue", "green"]
    for s in controller.states:
        assert s.position == 0.0
        assert s.velocity == DEFAULT_MOTION_CONFIG.initial_velocity
        assert s.trail == ()
        assert not s.finished
        assert s.status is ObjectStatus.LOCKED


def test_tick_outside_running_is_a_noop():
    controller = SimulationController()
    snap = controller.tick(1000.0)
    assert snap.status is SimulationStatus.IDLE
    assert snap.elapsed == 0.0
    assert all(s.position == 0.0 for s in snap.objects)


def test_first_running_tick_only_sets_baseline():
    controller = SimulationController()
    received = []
    controller.subscribe(received.append)
    controller.start()

    snap = controller.tick(5000.0)
    assert snap.tick == 0
    assert snap.elapsed == 0.0
    assert all(s.position == 0.0 for s in snap.objects)
    assert received == [snap], "A zero-dt tick still publishes a snapshot"

    snap = controller.tick(5016.0)
    assert snap.tick == 1
    assert snap.elapsed == pytest.approx(0.016)
    assert all(s.velocity > 0.0 for s in snap.objects)


def test_pause_resume_has_no_catch_up_step():
    controller = SimulationController()
    controller.start()
    controller.tick(0.0)
    controller.tick(16.0)
    controller.tick(32.0)
    assert controller.elapsed == pytest.approx(0.032)

    controller.pause()
    assert controller.status is SimulationStatus.PAUSED
    before = controller.snapshot()
    controller.tick(5000.0)
    assert controller.snapshot() == before, "Paused ticks must not move anything"

    controller.resume()
    controller.tick(6000.0)
    assert controller.elapsed == pytest.approx(0.032)
    controller.tick(6016.0)
    assert controller.elapsed == pytest.approx(0.048)


def test_illegal_commands_raise():
    controller = SimulationController()
    with pytest.raises(SimulationStateError):
        controller.pause()
    with pytest.raises(SimulationStateError):
        controller.resume()
    controller.start()
    with pytest.raises(SimulationStateError):
        controller.start()
    with pytest.raises(SimulationStateError):
        controller.resume()


def test_config_is_frozen_outside_idle():
    controller = SimulationController()
    controller.start()
    with pytest.raises(SimulationStateError):
        controller.update_motion_config("pink", force=10.0)
    with pytest.raises(SimulationStateError):
        controller.set_track_length(100.0)
    with pytest.raises(SimulationStateError):
        controller.set_global_config(GlobalConfig(track_length=100.0, time_scale=1.0))

    # time scale may change in any state
    controller.set_time_scale(2.5)
    assert controller.global_config.time_scale == 2.5
    controller.tick(0.0)
    controller.tick(100.0)
    assert controller.elapsed == pytest.approx(0.25)


def test_idle_config_edit_rebuilds_state():
    controller = SimulationController()
    cfg = controller.update_motion_config("blue", initial_velocity=12.0, mass=10.0)
    assert cfg.mass == 10.0
    assert controller.spec("blue").config == cfg
    assert controller.state("blue").velocity == 12.0
    assert controller.state("blue").status is ObjectStatus.MOVING
    assert controller.state("pink").velocity == 0.0


def test_out_of_range_config_rejected_and_not_applied():
    controller = SimulationController()
    with pytest.raises(ConfigError):
        controller.update_motion_config("pink", mass=0.0)
    with pytest.raises(ConfigError):
        controller.update_motion_config("pink", drag_coeff=0.5)
    with pytest.raises(ConfigError):
        controller.update_motion_config("pink", not_a_field=1.0)
    with pytest.raises(ConfigError):
        controller.set_track_length(5.0)
    with pytest.raises(ConfigError):
        controller.set_time_scale(float("nan"))
    assert controller.spec("pink").config == DEFAULT_MOTION_CONFIG
    assert controller.global_config == DEFAULT_GLOBAL_CONFIG


@pytest.mark.parametrize("value", ["5", True, None, [5.0]])
def test_non_numeric_config_rejected(value):
    """Numeric strings and bools never reach the integrator."""
    controller = SimulationController()
    with pytest.raises(ConfigError):
        controller.update_motion_config("pink", mass=value)
    with pytest.raises(ConfigError):
        controller.set_time_scale(value)
    with pytest.raises(ConfigError):
        SimulationController(global_config=GlobalConfig(track_length=value, time_scale=1.0))
    assert controller.spec("pink").config == DEFAULT_MOTION_CONFIG
    assert controller.global_config == DEFAULT_GLOBAL_CONFIG


def test_invalid_construction_rejected():
    with pytest.raises(ConfigError):
        SimulationController(specs=[])
    with pytest.raises(ConfigError):
        SimulationController(specs=[glide("a", 1.0), glide("a", 2.0)])
    with pytest.raises(ConfigError):
        SimulationController(specs=[ObjectSpec(id="a", config=MotionConfig(force=2000.0, mass=5.0))])
    with pytest.raises(ConfigError):
        SimulationController(global_config=GlobalConfig(track_length=300.0, time_scale=0.0))


def test_finishes_one_tick_after_last_object():
    """
    fast: 40 m/s → 50 m after 80 ticks of 1/64 s (1.25 s)
    slow: 20 m/s → 50 m after 160 ticks (2.5 s)
    Frame 1 only arms the clock, so slow flips on frame 161 and the
    controller reports FINISHED on frame 162.
    """
    controller, ticks = glide_controller()
    published = []
    controller.subscribe(published.append)
    controller.start()

    ticks.run_frames(81)
    snap = controller.snapshot()
    assert snap.get("fast").finished
    assert snap.get("fast").position == 50.0
    assert not snap.get("slow").finished
    assert snap.status is SimulationStatus.RUNNING

    ticks.run_frames(79)
    assert controller.status is SimulationStatus.RUNNING
    assert controller.state("slow").position == 49.6875

    ticks.run_frames(1)
    snap = published[-1]
    assert snap.tick == 160
    assert all(s.finished for s in snap.objects)
    assert snap.status is SimulationStatus.RUNNING, "The flipping tick is still RUNNING"
    assert ticks.pending == 1

    ticks.run_frames(1)
    snap = published[-1]
    assert len(published) == 162
    assert snap.status is SimulationStatus.FINISHED
    assert snap.tick == 160
    assert snap.elapsed == 2.5
    assert all(s.finished and s.velocity == 0.0 and s.acceleration == 0.0 for s in snap.objects)
    assert ticks.pending == 0, "Finishing must stop scheduling ticks"

    ticks.run_frames(5)
    assert len(published) == 162


def test_single_object_finishes_on_following_tick():
    """v0 = 20 m/s, L = 50 m: flips on tick 160, FINISHED is published by the next frame."""
    ticks = ManualTickSource(frame_interval_ms=FRAME_MS)
    controller = SimulationController(
        specs=[glide("solo", 20.0)],
        global_config=GlobalConfig(track_length=50.0, time_scale=1.0),
        tick_source=ticks,
    )
    published = []
    controller.subscribe(published.append)
    controller.start()
    ticks.run_until(lambda: controller.status is SimulationStatus.FINISHED)

    last_two = [(s.tick, s.get("solo").finished, s.status) for s in published[-2:]]
    assert last_two == [
        (160, True, SimulationStatus.RUNNING),
        (160, True, SimulationStatus.FINISHED),
    ]


def test_finish_is_detected_after_pause_and_resume():
    """Pausing between the flip and the following tick still ends in FINISHED on the re-arming tick."""
    controller, ticks = glide_controller()
    controller.start()
    ticks.run_frames(161)
    assert all(s.finished for s in controller.states)
    controller.pause()
    controller.resume()
    ticks.run_frames(1)
    assert controller.status is SimulationStatus.FINISHED
    assert controller.elapsed == 2.5


def test_finished_objects_stay_frozen():
    controller, ticks = glide_controller()
    controller.start()
    ticks.run_frames(81)
    frozen = controller.state("fast")
    ticks.run_frames(40)
    assert controller.state("fast") is frozen
    assert frozen.status is ObjectStatus.FINISHED


def test_toggle_cycle():
    controller, ticks = glide_controller()
    controller.toggle()
    assert controller.status is SimulationStatus.RUNNING
    ticks.run_frames(10)
    controller.toggle()
    assert controller.status is SimulationStatus.PAUSED
    assert ticks.pending == 0
    controller.toggle()
    assert controller.status is SimulationStatus.RUNNING
    ticks.run_until(lambda: controller.status is SimulationStatus.FINISHED)

    controller.toggle()
    assert controller.status is SimulationStatus.RUNNING
    assert controller.elapsed == 0.0
    for s in controller.states:
        assert s.position == 0.0 and s.trail == () and not s.finished


@pytest.mark.parametrize("frames", [0, 5, 200])
def test_reset_from_any_state(frames):
    controller, ticks = glide_controller()
    controller.start()
    ticks.run_frames(frames)
    if controller.status is SimulationStatus.RUNNING and frames:
        controller.pause()

    controller.reset()
    assert controller.status is SimulationStatus.IDLE
    assert controller.elapsed == 0.0
    assert ticks.pending == 0
    assert controller.state("fast").velocity == 40.0
    assert controller.state("slow").velocity == 20.0
    for s in controller.states:
        assert s.position == 0.0 and s.trail == () and not s.finished


def test_reset_to_defaults_only_when_idle():
    controller = SimulationController()
    controller.update_motion_config("pink", force=300.0)
    controller.set_track_length(500.0)
    controller.start()
    with pytest.raises(SimulationStateError):
        controller.reset_to_defaults()
    controller.reset()
    controller.reset_to_defaults()
    assert controller.global_config == DEFAULT_GLOBAL_CONFIG
    assert all(s.config == DEFAULT_MOTION_CONFIG for s in controller.specs)


def test_invariants_hold_over_calibrated_run():
    """Default lab at 60 fps: every snapshot satisfies the state invariants; finish near 7.55 s."""
    ticks = ManualTickSource(frame_interval_ms=1000 / 60)
    controller = SimulationController(tick_source=ticks)
    problems = []

    def check(snap):
        for s in snap.objects:
            problems.extend(state_violations(s, snap.track_length))

    controller.subscribe(check)
    controller.start()
    ticks.run_until(lambda: controller.status is SimulationStatus.FINISHED, max_frames=2000)

    assert problems == []
    print("finished at", controller.elapsed)
    assert 7.3 < controller.elapsed < 7.8
    assert all(s.position == 300.0 for s in controller.states)


def test_runs_are_deterministic():
    snaps = []
    for _ in range(2):
        ticks = ManualTickSource(frame_interval_ms=1000 / 60)
        controller = SimulationController(tick_source=ticks)
        controller.start()
        ticks.run_frames(300)
        snaps.append(controller.snapshot())
    assert snaps[0] == snaps[1]


def test_unsubscribe():
    controller, ticks = glide_controller()
    received = []
    unsubscribe = controller.subscribe(received.append)
    controller.start()
    ticks.run_frames(3)
    unsubscribe()
    ticks.run_frames(3)
    assert len(received) == 3


def test_profiler_records_tick_phases():
    prof = Profiler()
    controller, ticks = glide_controller(profiler=prof)
    controller.start()
    ticks.run_frames(10)
    summary = prof.stats.summary()
    assert summary["clock"]["n"] == 10
    assert summary["integrate"]["n"] == 9
    assert summary["trails"]["n"] == 9
