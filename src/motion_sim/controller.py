# MIT License (see LICENSE)
"""
The simulation controller and its state machine.

SimulationController owns all mutable simulation state. It manages:
- The tracked objects (ObjectSpec) and their per-object MotionConfig.
- The lab-wide GlobalConfig (track length, time scale).
- A four-state machine: IDLE, RUNNING, PAUSED, FINISHED.
- The per-tick pipeline:
    1. Clock: host timestamp → scaled dt (0 on the first tick after arming).
    2. Completion check: if every object finished on an earlier tick, the
       controller moves to FINISHED and skips steps 3 and 4.
    3. Integration of every unfinished object.
    4. Trail update for every integrated object.
    5. Publication of an immutable Snapshot to subscribers.

Transitions:
    IDLE     → RUNNING   start()
    RUNNING  → PAUSED    pause()
    PAUSED   → RUNNING   resume()
    RUNNING  → FINISHED  automatic, on the tick after every object has finished
    FINISHED → RUNNING   toggle() (full reset first)
    any      → IDLE      reset()

Mutability windows:
    MotionConfig and track_length can change only while IDLE. time_scale can
    change at any time, since it only scales future deltas.

Structure:
    - User creates a SimulationController, optionally with a TickSource.
    - User calls start(); the tick source then drives tick() every frame.
    - Renderers subscribe() and receive a Snapshot after each tick.
"""
from __future__ import annotations
import logging
from collections.abc import Callable, Sequence
from contextlib import nullcontext
from dataclasses import dataclass, field, replace
from enum import Enum

from .clock import SimulationClock
from .config import (
    DEFAULT_GLOBAL_CONFIG,
    DEFAULT_MOTION_CONFIG,
    DEFAULT_OBJECTS,
    check_range,
    validate_global_config,
    validate_motion_config,
)
from .constants import GRAVITY, STATIC_FRICTION_MULTIPLIER
from .core.integrators import integrate
from .errors import ConfigError, SimulationStateError
from .profiler import Profiler
from .ticks import TickSource
from .trail import TrailBuffer
from .types import GlobalConfig, MotionConfig, ObjectSpec, ObjectState

logger = logging.getLogger(__name__)


class SimulationStatus(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    FINISHED = "FINISHED"


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable view of the simulation after a tick.

    Attributes:
        status: Controller state when the snapshot was taken.
        elapsed: Accumulated simulation time in seconds.
        tick: Number of integrating ticks since the last reset.
        track_length: Finish line distance in meters.
        objects: Object states in stable (insertion) order.
    """
    status: SimulationStatus
    elapsed: float
    tick: int
    track_length: float
    objects: tuple[ObjectState, ...]

    def get(self, object_id: str) -> ObjectState:
        """State of the object with the given id."""
        for s in self.objects:
            if s.id == object_id:
                return s
        raise KeyError(object_id)


SnapshotCallback = Callable[[Snapshot], None]


@dataclass(eq=False)
class SimulationController:
    """
    Owner of the object states and the IDLE/RUNNING/PAUSED/FINISHED machine.

    Attributes:
        specs: Tracked objects with their initial motion configs. Ids must be unique.
        global_config: Track length and time scale.
        gravity: Gravitational acceleration in m/s² (default: 9.81).
        static_friction_multiplier: Ratio μs/μk (default: 1.2).
        tick_source: Optional host frame scheduler. Without one, the caller
                     drives the simulation by calling tick() directly.
        profiler: Optional Profiler timing the clock/integrate/trails phases.
    """
    specs: Sequence[ObjectSpec] = DEFAULT_OBJECTS
    global_config: GlobalConfig = DEFAULT_GLOBAL_CONFIG
    gravity: float = GRAVITY
    static_friction_multiplier: float = STATIC_FRICTION_MULTIPLIER
    tick_source: TickSource | None = None
    profiler: Profiler | None = None

    # Internal state
    elapsed: float = field(default=0.0, init=False)
    tick_count: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        """Validate configuration and build the initial (IDLE) object states."""
        if not self.specs:
            raise ConfigError("At least one object is required")

        self._specs: dict[str, ObjectSpec] = {}
        for spec in self.specs:
            if spec.id in self._specs:
                raise ConfigError(f"Duplicate object id: {spec.id!r}")
            validate_motion_config(spec.config)
            self._specs[spec.id] = spec
        validate_global_config(self.global_config)
        self.specs = tuple(self._specs.values())

        self._status = SimulationStatus.IDLE
        self._clock = SimulationClock(self.global_config.time_scale)
        self._trails = {oid: TrailBuffer() for oid in self._specs}
        self._states: dict[str, ObjectState] = {}
        self._handle: int | None = None
        self._subscribers: list[SnapshotCallback] = []
        self._rebuild_states()

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def status(self) -> SimulationStatus:
        return self._status

    @property
    def states(self) -> tuple[ObjectState, ...]:
        """Current object states in stable order."""
        return tuple(self._states.values())

    def state(self, object_id: str) -> ObjectState:
        return self._states[object_id]

    def spec(self, object_id: str) -> ObjectSpec:
        return self._specs[object_id]

    def snapshot(self) -> Snapshot:
        return Snapshot(
            status=self._status,
            elapsed=self.elapsed,
            tick=self.tick_count,
            track_length=self.global_config.track_length,
            objects=self.states,
        )

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """
        Register a callback receiving every published Snapshot.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """IDLE → RUNNING."""
        self._require(SimulationStatus.IDLE, "start")
        for spec in self.specs:
            validate_motion_config(spec.config)
        validate_global_config(self.global_config)
        self._enter_running()

    def pause(self) -> None:
        """RUNNING → PAUSED. Stops scheduling ticks and drops the clock baseline."""
        self._require(SimulationStatus.RUNNING, "pause")
        self._cancel()
        self._clock.clear()
        self._set_status(SimulationStatus.PAUSED)

    def resume(self) -> None:
        """PAUSED → RUNNING. The first tick after resuming only re-arms the clock."""
        self._require(SimulationStatus.PAUSED, "resume")
        self._enter_running()

    def toggle(self) -> None:
        """
        Single-button control.

        IDLE/PAUSED → RUNNING, RUNNING → PAUSED, FINISHED → reset, then RUNNING.
        """
        if self._status is SimulationStatus.IDLE:
            self.start()
        elif self._status is SimulationStatus.PAUSED:
            self.resume()
        elif self._status is SimulationStatus.RUNNING:
            self.pause()
        else:
            self.reset()
            self.start()

    def reset(self) -> None:
        """
        Any state → IDLE.

        Rebuilds every object from its current config: position 0, velocity
        equal to the initial velocity, empty trail, not finished. Elapsed
        time is zeroed.
        """
        self._cancel()
        self._clock.clear()
        self.elapsed = 0.0
        self.tick_count = 0
        self._rebuild_states()
        self._set_status(SimulationStatus.IDLE)
        self._publish()

    def reset_to_defaults(self) -> None:
        """Restore the default global config and default motion config for every object (IDLE only)."""
        self._require(SimulationStatus.IDLE, "reset to defaults")
        self.global_config = DEFAULT_GLOBAL_CONFIG
        self._clock.time_scale = DEFAULT_GLOBAL_CONFIG.time_scale
        for oid, spec in self._specs.items():
            self._specs[oid] = replace(spec, config=DEFAULT_MOTION_CONFIG)
        self.specs = tuple(self._specs.values())
        self._rebuild_states()
        self._publish()

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_motion_config(self, object_id: str, config: MotionConfig) -> None:
        """
        Replace an object's MotionConfig (IDLE only).

        The object's state is rebuilt immediately, so its velocity reflects
        the new initial velocity.

        Raises:
            KeyError: Unknown object id.
            ConfigError: A field is out of range.
            SimulationStateError: The controller is not IDLE.
        """
        spec = self._specs[object_id]
        self._require(SimulationStatus.IDLE, f"change config of {object_id!r}")
        validate_motion_config(config)
        spec = replace(spec, config=config)
        self._specs[object_id] = spec
        self.specs = tuple(self._specs.values())
        self._trails[object_id].clear()
        self._states[object_id] = ObjectState.initial(spec)

    def update_motion_config(self, object_id: str, **changes: float) -> MotionConfig:
        """Change individual MotionConfig fields of one object (IDLE only). Returns the new config."""
        try:
            config = replace(self._specs[object_id].config, **changes)
        except TypeError as exc:
            raise ConfigError(str(exc)) from None
        self.set_motion_config(object_id, config)
        return config

    def set_track_length(self, track_length: float) -> None:
        """Change the shared finish distance (IDLE only)."""
        self._require(SimulationStatus.IDLE, "change track length")
        value = check_range("track_length", track_length)
        self.global_config = replace(self.global_config, track_length=value)

    def set_time_scale(self, time_scale: float) -> None:
        """Change simulation seconds per real second. Allowed in any state."""
        value = check_range("time_scale", time_scale)
        self.global_config = replace(self.global_config, time_scale=value)
        self._clock.time_scale = value

    def set_global_config(self, config: GlobalConfig) -> None:
        """Apply a whole GlobalConfig; a track length change still requires IDLE."""
        validate_global_config(config)
        if config.track_length != self.global_config.track_length:
            self._require(SimulationStatus.IDLE, "change track length")
        self.global_config = config
        self._clock.time_scale = config.time_scale

    # -------------------------------------------------------------------------
    # Tick pipeline
    # -------------------------------------------------------------------------

    def tick(self, timestamp: float) -> Snapshot:
        """
        Advance the simulation for one host frame.

        Outside RUNNING this only clears the clock baseline. While RUNNING,
        a zero dt (first tick after arming) publishes a snapshot without
        moving anything. The tick after the last object finishes moves the
        controller to FINISHED without integrating or advancing elapsed time.

        Args:
            timestamp: Host time in milliseconds, monotonically increasing.

        Returns:
            The snapshot after this tick.
        """
        if self._status is not SimulationStatus.RUNNING:
            self._clock.clear()
            return self.snapshot()

        prof = self.profiler
        with prof.section("clock") if prof else nullcontext():
            dt = self._clock.advance(timestamp)

        # Completion is seen on the tick after the last object finished
        if all(s.finished for s in self._states.values()):
            self._cancel()
            self._clock.clear()
            self._set_status(SimulationStatus.FINISHED)
        elif dt > 0:
            track_length = self.global_config.track_length
            active = []
            with prof.section("integrate") if prof else nullcontext():
                for oid, state in self._states.items():
                    if state.finished:
                        continue
                    new_state = integrate(
                        state, dt, track_length, self.gravity, self.static_friction_multiplier
                    )
                    if new_state.finished:
                        logger.debug("%s finished at t=%.3fs", oid, self.elapsed + dt)
                    self._states[oid] = new_state
                    active.append(oid)

            with prof.section("trails") if prof else nullcontext():
                for oid in active:
                    state = self._states[oid]
                    trail = self._trails[oid].push(state.position)
                    self._states[oid] = replace(state, trail=trail)

            self.elapsed += dt
            self.tick_count += 1

        snap = self.snapshot()
        self._publish(snap)
        return snap

    def _on_tick(self, timestamp: float) -> None:
        """Tick source callback: run one tick and keep the frame loop alive while RUNNING."""
        self._handle = None
        self.tick(timestamp)
        if self._status is SimulationStatus.RUNNING:
            self._schedule()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _rebuild_states(self) -> None:
        for trail in self._trails.values():
            trail.clear()
        self._states = {oid: ObjectState.initial(spec) for oid, spec in self._specs.items()}

    def _enter_running(self) -> None:
        self._clock.clear()
        self._set_status(SimulationStatus.RUNNING)
        self._schedule()

    def _schedule(self) -> None:
        if self.tick_source is not None and self._handle is None:
            self._handle = self.tick_source.request_next_tick(self._on_tick)

    def _cancel(self) -> None:
        if self.tick_source is not None and self._handle is not None:
            self.tick_source.cancel_tick(self._handle)
        self._handle = None

    def _require(self, status: SimulationStatus, action: str) -> None:
        if self._status is not status:
            raise SimulationStateError(
                f"Cannot {action} while {self._status.value}; requires {status.value}"
            )

    def _set_status(self, status: SimulationStatus) -> None:
        if status is not self._status:
            logger.info("simulation %s -> %s", self._status.value, status.value)
            self._status = status

    def _publish(self, snap: Snapshot | None = None) -> None:
        snap = snap or self.snapshot()
        for callback in list(self._subscribers):
            callback(snap)
