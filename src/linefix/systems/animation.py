from linefix.events.bus import (EVENT_TICK, EventBus, EVENT_ANIMATION_START, EVENT_ANIMATION_COMPLETE,
                                EVENT_LINE_SHIFTED, EVENT_MERGE_RESOLVED, EVENT_TILE_SPAWNED,
                                EVENT_GAME_RESET)
from linefix.components.animation_shift import ShiftAnimation
from linefix.components.animation_merge import MergeAnimation
from linefix.components.animation_spawn import SpawnAnimation
from linefix.components.floating_score import FloatingScore
from linefix.components.duration import Duration
from linefix.constants import SHIFT_DURATION, MERGE_DURATION
from linefix.factories.animation_factory import AnimationFactory
from linefix.systems.session_utils import get_or_create_turn_state
from esper import World

TURN_ANIMATIONS = (ShiftAnimation, MergeAnimation, SpawnAnimation)


class AnimationSystem:
    """Times the presentation of a finished turn.

    The engine state is already final when these animations start. While any
    shift, merge or spawn animation is running the turn is "in flight" and
    the TurnSystem refuses new commands; floating score markers do not block.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.factory = AnimationFactory(world)
        self._merge_start = 0.0
        self._spawn_delay = 0.0
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_LINE_SHIFTED, self.on_line_shifted)
        event_bus.subscribe(EVENT_MERGE_RESOLVED, self.on_merge_resolved)
        event_bus.subscribe(EVENT_TILE_SPAWNED, self.on_tile_spawned)
        event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    @property
    def busy(self) -> bool:
        return any(list(self.world.get_component(kind)) for kind in TURN_ANIMATIONS)

    def on_line_shifted(self, sender, **kwargs):
        moves = kwargs.get('moves') or []
        self._merge_start = SHIFT_DURATION if moves else 0.0
        self._spawn_delay = self._merge_start
        if moves:
            self.factory.create_shift_group(moves)
            self._mark_in_flight()
            self.event_bus.emit(EVENT_ANIMATION_START, kind='shift', items=moves)

    def on_merge_resolved(self, sender, **kwargs):
        events = kwargs.get('events') or []
        if not events:
            return
        self.factory.create_merge_group(events, start_delay=self._merge_start)
        chain_count = kwargs.get('chain_count', max(event.chain for event in events))
        self._spawn_delay = self._merge_start + chain_count * MERGE_DURATION
        # One marker per merged cell showing the rank it finally reached.
        final_rank = {}
        for event in events:
            final_rank[event.target] = event.rank
        self.factory.create_floating_scores(list(final_rank.items()))
        self._mark_in_flight()
        self.event_bus.emit(EVENT_ANIMATION_START, kind='merge', items=events)

    def on_tile_spawned(self, sender, **kwargs):
        pos = kwargs.get('position')
        rank = kwargs.get('rank')
        if pos is None or rank is None:
            return
        self.factory.create_spawn(pos, rank, delay=self._spawn_delay)
        self._mark_in_flight()
        self.event_bus.emit(EVENT_ANIMATION_START, kind='spawn', items=[pos])

    def on_game_reset(self, sender, **kwargs):
        for kind in TURN_ANIMATIONS + (FloatingScore,):
            for ent, _ in list(self.world.get_component(kind)):
                self.world.delete_entity(ent, immediate=True)
        self._merge_start = 0.0
        self._spawn_delay = 0.0
        get_or_create_turn_state(self.world).in_flight = False

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        had_turn_animations = self.busy
        # Shift progression
        for ent, shift in list(self.world.get_component(ShiftAnimation)):
            d = self.world.component_for_entity(ent, Duration)
            shift.linear = min(1.0, shift.linear + dt / d.value)
        # Merge progression (waits for its chain round's delay)
        for ent, merge in list(self.world.get_component(MergeAnimation)):
            if merge.delay > 0.0:
                merge.delay -= dt
                if merge.delay > 0.0:
                    continue
            d = self.world.component_for_entity(ent, Duration)
            merge.linear = min(1.0, merge.linear + dt / d.value)
        # Spawn progression
        for ent, spawn in list(self.world.get_component(SpawnAnimation)):
            if spawn.delay > 0.0:
                spawn.delay -= dt
                if spawn.delay > 0.0:
                    continue
            d = self.world.component_for_entity(ent, Duration)
            spawn.scale = min(1.0, spawn.scale + dt / d.value)
        # Floating score markers expire on their own.
        for ent, marker in list(self.world.get_component(FloatingScore)):
            marker.age += dt
            if marker.age >= self.world.component_for_entity(ent, Duration).value:
                self.world.delete_entity(ent, immediate=True)

        if not had_turn_animations:
            return
        shifts = list(self.world.get_component(ShiftAnimation))
        merges = list(self.world.get_component(MergeAnimation))
        spawns = list(self.world.get_component(SpawnAnimation))
        if (all(s.linear >= 1.0 for _, s in shifts)
                and all(m.linear >= 1.0 for _, m in merges)
                and all(s.scale >= 1.0 for _, s in spawns)):
            for ent, _ in shifts + merges + spawns:
                self.world.delete_entity(ent, immediate=True)
            get_or_create_turn_state(self.world).in_flight = False
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='turn', items=[])

    def _mark_in_flight(self):
        get_or_create_turn_state(self.world).in_flight = True
