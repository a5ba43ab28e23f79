"""
Battle system package.
- models.py (Creature, Move, phases & sides)
- mechanics.py (type matchups, accuracy, crits, damage resolution)
- ai.py (opponent move policy)
- scheduler.py (cancellable timer queue)
- session.py (mutable session + published snapshots)
- engine.py (turn executor & match state machine)
- render.py (HP bars, panels, log)
"""
from .engine import BattleEngine, EngineTimings
from .scheduler import Scheduler, RealtimeScheduler
from .session import SessionSnapshot
__all__ = ["BattleEngine","EngineTimings","Scheduler","RealtimeScheduler","SessionSnapshot"]
