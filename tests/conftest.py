"""Shared fixtures for engine and integration tests."""

from collections.abc import Sequence

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from light_duel.db.models import Base
from light_duel.engine.dice import Dice
from light_duel.engine.match import MatchEngine
from light_duel.engine.rules import CLASSIC_RULES, STUN_RULES


class ScriptedDice(Dice):
    """Dice that return queued rolls and CPU choices.

    Rolls are consumed in call order (player roll, then CPU roll). Choices
    are move names. With an empty queue, rolls fall back to a seeded random
    source and choices pick the first affordable move.
    """

    def __init__(self, rolls: Sequence[int] = (), choices: Sequence[str] = ()) -> None:
        super().__init__(seed=0)
        self.rolls = list(rolls)
        self.choices = list(choices)
        self.roll_calls = 0

    def roll(self, min_roll: int, max_roll: int) -> int:
        self.roll_calls += 1
        if self.rolls:
            value = self.rolls.pop(0)
            assert min_roll <= value <= max_roll, f"scripted roll {value} outside {min_roll}-{max_roll}"
            return value
        return super().roll(min_roll, max_roll)

    def choice(self, seq):
        if self.choices:
            name = self.choices.pop(0)
            for item in seq:
                if item.name == name:
                    return item
            raise AssertionError(f"scripted choice {name} is not available")
        return seq[0]


@pytest.fixture
def dice() -> ScriptedDice:
    """Scripted dice with empty queues."""
    return ScriptedDice()


@pytest.fixture
def match(dice: ScriptedDice) -> MatchEngine:
    """Stun-rules match; the CPU opens with Power Strike."""
    return MatchEngine(rules=STUN_RULES, dice=dice)


@pytest.fixture
def classic_match(dice: ScriptedDice) -> MatchEngine:
    """Classic-rules match; the CPU opens with Power Strike."""
    return MatchEngine(rules=CLASSIC_RULES, dice=dice)


@pytest.fixture
async def async_engine():
    """Create async SQLite in-memory engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine):
    """Create async session for testing with automatic rollback."""
    async_session_factory = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_dice():
    """Factory for ScriptedDice with custom queues."""
    return ScriptedDice
