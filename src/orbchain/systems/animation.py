from typing import List

from esper import World

from orbchain.components.animation_detonation import DetonationAnimation
from orbchain.components.duration import Duration
from orbchain.constants import WAVE_INTERVAL
from orbchain.events.bus import (
    EventBus,
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_CASCADE_STEP,
    EVENT_GAME_RESET,
    EVENT_TICK,
)
from orbchain.utils.session import get_or_create_display_board


class AnimationSystem:
    """Spreads an already computed wave log over wall-clock time.

    Each wave is its own entity (DetonationAnimation + Duration). Waves play strictly
    one after another; the board snapshot attached to a wave is shown when it finishes.
    Pacing only affects what is displayed, never the simulation result.
    """
    def __init__(self, world: World, event_bus: EventBus, *, wave_interval: float = WAVE_INTERVAL):
        self.world = world
        self.event_bus = event_bus
        self.wave_interval = wave_interval
        self._queue: List[int] = []
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_ANIMATION_START, self.on_animation_start)
        event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    @property
    def busy(self) -> bool:
        return bool(self._queue)

    def on_animation_start(self, sender, **kwargs):
        kind = kwargs.get('kind')
        if kind != 'detonation':
            return
        source = kwargs.get('source', 'local')
        frames = list(kwargs.get('frames') or [])
        if not frames:
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind=kind, source=source)
            return
        was_idle = not self._queue
        last = len(frames)
        for depth, (wave, board) in enumerate(frames, start=1):
            ent = self.world.create_entity()
            self.world.add_component(ent, DetonationAnimation(
                wave=wave, board=board, source=source, depth=depth, final=depth == last,
            ))
            self.world.add_component(ent, Duration(self.wave_interval))
            self._queue.append(ent)
        if was_idle:
            self._show_head()

    def on_tick(self, sender, **kwargs):
        if not self._queue:
            return
        dt = kwargs.get('dt', 1/60)
        ent = self._queue[0]
        anim = self.world.component_for_entity(ent, DetonationAnimation)
        duration = self.world.component_for_entity(ent, Duration)
        anim.progress += dt / duration.value if duration.value > 0 else 1.0
        if anim.progress < 1.0:
            return
        self._queue.pop(0)
        self._delete_animation_entity(ent)
        display = get_or_create_display_board(self.world)
        display.board = anim.board
        display.exploding = ()
        self.event_bus.emit(
            EVENT_CASCADE_STEP,
            depth=anim.depth,
            positions=list(anim.wave.origins),
            source=anim.source,
        )
        self._show_head()
        if anim.final:
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='detonation', source=anim.source)

    def on_game_reset(self, sender, **kwargs):
        for ent in self._queue:
            self._delete_animation_entity(ent)
        self._queue.clear()
        get_or_create_display_board(self.world).exploding = ()

    def _show_head(self):
        if not self._queue:
            return
        anim = self.world.component_for_entity(self._queue[0], DetonationAnimation)
        get_or_create_display_board(self.world).exploding = anim.wave.origins

    def _delete_animation_entity(self, ent: int):
        """Remove animation and duration components, then the entity itself."""
        for comp_type in (DetonationAnimation, Duration):
            if self.world.has_component(ent, comp_type):
                self.world.remove_component(ent, comp_type)
        if self.world.entity_exists(ent):
            self.world.delete_entity(ent, immediate=True)
