"""Demonstration roster used when no stored players exist."""

from __future__ import annotations

from typing import Callable, List

from flagroster.config import AgeGroup, Role
from flagroster.models import CoverageStats, PasserStats, Player, SkillStats


SeedProvider = Callable[[], List[Player]]


def _avatar(seed: int) -> str:
    return f"https://picsum.photos/200/200?random={seed}"


def default_seed_players() -> List[Player]:
    return [
        Player(
            player_id="1",
            name="Leo Carter",
            number=12,
            age_group=AgeGroup.U12,
            avatar=_avatar(1),
            roles=[Role.QB, Role.S],
            stats={
                Role.QB: PasserStats(
                    pass_attempts=150,
                    pass_completions=98,
                    pass_yards=1250,
                    pass_tds=18,
                    interceptions_thrown=4,
                    sacks_taken=2,
                ),
                Role.S: CoverageStats(
                    flag_pull_attempts=15,
                    flag_pull_successes=12,
                    interceptions_caught=2,
                    pass_deflections=5,
                ),
            },
        ),
        Player(
            player_id="2",
            name="Maya Brooks",
            number=88,
            age_group=AgeGroup.U10,
            avatar=_avatar(2),
            roles=[Role.WR, Role.CB],
            stats={
                Role.WR: SkillStats(
                    targets=60,
                    catches=45,
                    receiving_yards=680,
                    receiving_tds=8,
                    rushing_yards=120,
                    rushing_tds=1,
                ),
                Role.CB: CoverageStats(
                    flag_pull_attempts=25,
                    flag_pull_successes=20,
                    interceptions_caught=3,
                    pass_deflections=8,
                    defensive_tds=1,
                ),
            },
        ),
        Player(
            player_id="3",
            name="Sam Ortiz",
            number=52,
            age_group=AgeGroup.U12,
            avatar=_avatar(3),
            roles=[Role.LB],
            stats={
                Role.LB: CoverageStats(
                    flag_pull_attempts=40,
                    flag_pull_successes=35,
                    interceptions_caught=3,
                    pass_deflections=8,
                    sacks_made=5,
                    defensive_tds=1,
                ),
            },
        ),
        Player(
            player_id="4",
            name="Noah Kim",
            number=21,
            age_group=AgeGroup.U8,
            avatar=_avatar(4),
            roles=[Role.CB],
            stats={
                Role.CB: CoverageStats(
                    flag_pull_attempts=25,
                    flag_pull_successes=20,
                    interceptions_caught=5,
                    pass_deflections=12,
                    defensive_tds=2,
                ),
            },
        ),
        Player(
            player_id="5",
            name="Eli Grant",
            number=26,
            age_group=AgeGroup.U6,
            avatar=_avatar(5),
            roles=[Role.RB, Role.RUSH],
            stats={
                Role.RB: SkillStats(
                    targets=20,
                    catches=15,
                    receiving_yards=120,
                    receiving_tds=1,
                    rushing_yards=450,
                    rushing_tds=5,
                ),
                Role.RUSH: CoverageStats(
                    flag_pull_attempts=10,
                    flag_pull_successes=5,
                    pass_deflections=2,
                    sacks_made=8,
                ),
            },
        ),
    ]


def empty_roster() -> List[Player]:
    return []
