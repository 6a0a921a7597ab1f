import sys, os
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
import logging
from orbchain.events.bus import (
    EventBus, EVENT_TICK, EVENT_MOVE_REQUEST, EVENT_CASCADE_STEP, EVENT_MOVE_RESOLVED, EVENT_TURN_ADVANCED,
    EVENT_MOVE_REJECTED,
)
from orbchain.systems.animation import AnimationSystem
from orbchain.systems.move_system import MoveSystem
from orbchain.systems.turn_system import TurnSystem
from orbchain.systems.outcome_system import OutcomeSystem
from orbchain.utils.session import current_state

logging.basicConfig(level=logging.DEBUG)

def drive(bus, ticks):
    for _ in range(ticks):
        bus.emit(EVENT_TICK, dt=0.05)

def dump(board):
    for row in range(board.rows):
        print(' '.join(
            f"{c.count}{c.owner.value[0] if c.owner else '.'}"
            for c in (board.cell(row, col) for col in range(board.cols))
        ))

from orbchain.world import create_world
bus = EventBus()
world = create_world(player_count=2)
AnimationSystem(world, bus, wave_interval=0.1)
MoveSystem(world, bus)
TurnSystem(world, bus)
OutcomeSystem(world, bus)

received = []
for ev in [EVENT_CASCADE_STEP, EVENT_MOVE_RESOLVED, EVENT_TURN_ADVANCED, EVENT_MOVE_REJECTED]:
    bus.subscribe(ev, lambda s, _ev=ev, **k: received.append((_ev, k.get('depth'), k.get('reason'))))

# Red fills the top-left corner twice, blue plays elsewhere in between.
for row, col in [(0, 0), (8, 5), (0, 0), (8, 4)]:
    bus.emit(EVENT_MOVE_REQUEST, row=row, col=col)
    print('after request', (row, col), 'animating', current_state(world).is_animating)
    drive(bus, 10)

state = current_state(world)
print('moves', state.move_count, 'current', state.current_player.name, 'events', received)
dump(state.board)
