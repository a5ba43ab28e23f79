import random
from collections import deque

import pytest

from pokeduel.battle.engine import BattleEngine, EngineTimings
from pokeduel.battle.models import Creature, Move, Sprites
from pokeduel.battle.scheduler import Scheduler
from pokeduel.data.roster import load_roster


class ScriptedRng:
    """Random source replaying queued draws.

    Once a queue runs dry: random() -> 0.5 (hits anything with accuracy >= 50,
    never crits), randint(a, b) -> b (variance 1.00), choice(seq) -> seq[0].
    """

    def __init__(self, randoms=(), ints=(), choices=()):
        self.randoms = deque(randoms)
        self.ints = deque(ints)
        self.choices = deque(choices)
        self.calls = []

    def random(self):
        self.calls.append("random")
        return self.randoms.popleft() if self.randoms else 0.5

    def randint(self, a, b):
        self.calls.append("randint")
        return self.ints.popleft() if self.ints else b

    def choice(self, seq):
        self.calls.append("choice")
        if self.choices:
            pick = self.choices.popleft()
            assert pick in seq, f"scripted choice {pick!r} not offered"
            return pick
        return seq[0]


def make_creature(cid, name, type_="normal", max_hp=100, moves=None, speed=10):
    moves = moves or [Move(name="Tackle", type="normal", power=15, accuracy=100)]
    return Creature(id=cid, name=name, type=type_, max_hp=max_hp, speed=speed,
                    sprites=Sprites(front=f"{name}-f.png", back=f"{name}-b.png"),
                    moves=tuple(moves))


@pytest.fixture
def roster():
    return load_roster()


@pytest.fixture
def by_name(roster):
    def _get(name):
        for c in roster:
            if c.name == name:
                return c
        raise KeyError(name)
    return _get


@pytest.fixture
def scripted():
    return ScriptedRng


@pytest.fixture
def creature():
    return make_creature


@pytest.fixture
def engine_factory():
    def _make(roster=None, rng=None, policy=None, timings=None):
        return BattleEngine(roster if roster is not None else load_roster(),
                            scheduler=Scheduler(),
                            rng=rng if rng is not None else random.Random(0),
                            policy=policy,
                            timings=timings or EngineTimings())
    return _make
