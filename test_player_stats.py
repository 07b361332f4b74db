#!/usr/bin/env python3
"""
Test suite for player statistics aggregation.

This test suite covers:
- Incremental stats updates for newly saved matches
- Full recalculation and its agreement with incremental updates
- Filtered stats, recent form, streaks and leaderboard ordering
"""

import random
import unittest
from datetime import datetime, timedelta, timezone

from models.match import CourtSurface, GameSet, Match, MatchType, Team
from models.player import Player, PlayerStats
from stats.player_stats import DateRangeFilter, PlayerStatsAggregator, SortCriteria

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_match(team1, team2, scores, winner=0, days_ago=0, match_type=MatchType.SINGLES,
               surface=CourtSurface.HARD):
    """Build a match from player lists and (team1, team2[, tb1, tb2]) set tuples."""
    return Match(
        user_id="user-1",
        match_type=match_type,
        teams=[Team(players=[p.snapshot() for p in team1]), Team(players=[p.snapshot() for p in team2])],
        sets=[GameSet(*score) for score in scores],
        winner_team_index=winner,
        surface=surface,
        timestamp=NOW - timedelta(days=days_ago)
    )


class TestPlayerStatsAggregator(unittest.TestCase):
    """Test cases for PlayerStatsAggregator."""

    def setUp(self):
        self.alice = Player(name="Alice")
        self.bob = Player(name="Bob")
        self.carol = Player(name="Carol")
        self.dave = Player(name="Dave")
        self.players = [self.alice, self.bob, self.carol, self.dave]

        self.matches = [
            make_match([self.alice], [self.bob], [(6, 4), (6, 3)], winner=0, days_ago=1),
            make_match([self.bob], [self.carol], [(4, 6), (7, 6, 7, 4), (6, 2)], winner=0, days_ago=3,
                       surface=CourtSurface.CLAY),
            make_match([self.alice, self.carol], [self.bob, self.dave], [(3, 6), (2, 6)], winner=1,
                       days_ago=10, match_type=MatchType.DOUBLES),
            make_match([self.carol], [self.alice], [(7, 5), (6, 4)], winner=0, days_ago=40),
            make_match([self.dave], [self.alice], [(6, 1)], winner=None, days_ago=2)
        ]

    def fresh_players(self):
        return [Player(name=p.name, id=p.id) for p in self.players]

    def test_apply_match(self):
        match = self.matches[1]
        updated = PlayerStatsAggregator.apply_match(self.players, match)

        self.assertEqual({p.name for p in updated}, {"Bob", "Carol"})
        self.assertEqual(self.bob.stats, PlayerStats(1, 1, 2, 1, 17, 14))
        self.assertEqual(self.carol.stats, PlayerStats(1, 0, 1, 2, 14, 17))

    def test_apply_match_without_winner_is_skipped(self):
        self.assertEqual(PlayerStatsAggregator.apply_match(self.players, self.matches[4]), [])
        self.assertEqual(self.dave.stats, PlayerStats())

    def test_apply_match_matches_players_by_name(self):
        """Stats go to the record with the same normalized name, whatever its id."""
        renamed = Player(name="  ALICE ")
        PlayerStatsAggregator.apply_match([renamed], self.matches[0])
        self.assertEqual(renamed.stats.matches_won, 1)

    def test_apply_match_skips_unknown_players(self):
        with self.assertLogs('stats.player_stats', level='WARNING'):
            updated = PlayerStatsAggregator.apply_match([self.alice], self.matches[0])
        self.assertEqual(updated, [self.alice])

    def test_recalculate_equals_incremental_updates_in_any_order(self):
        recalculated = self.fresh_players()
        PlayerStatsAggregator.recalculate(recalculated, self.matches)
        expected = {p.id: p.stats for p in recalculated}

        rng = random.Random(7)
        for _ in range(5):
            shuffled = list(self.matches)
            rng.shuffle(shuffled)
            incremental = self.fresh_players()
            for match in shuffled:
                PlayerStatsAggregator.apply_match(incremental, match)
            self.assertEqual({p.id: p.stats for p in incremental}, expected)

    def test_recalculate_is_idempotent(self):
        PlayerStatsAggregator.recalculate(self.players, self.matches)
        first = {p.id: PlayerStats(**vars(p.stats)) for p in self.players}
        PlayerStatsAggregator.recalculate(self.players, self.matches)
        self.assertEqual({p.id: p.stats for p in self.players}, first)

        self.assertEqual(self.alice.stats.matches_played, 3)
        self.assertEqual(self.alice.stats.matches_won, 1)
        self.assertEqual(self.dave.stats.matches_played, 1)

    def test_matches_for_player(self):
        matches = PlayerStatsAggregator.matches_for_player(self.alice, self.matches)
        self.assertEqual(len(matches), 4)
        self.assertEqual(matches[0].timestamp, NOW - timedelta(days=1))

    def test_filtered_stats(self):
        clay = PlayerStatsAggregator.filtered_stats(self.carol, self.matches, surface=CourtSurface.CLAY)
        self.assertEqual(clay.matches_played, 1)

        doubles = PlayerStatsAggregator.filtered_stats(self.alice, self.matches, match_type=MatchType.DOUBLES)
        self.assertEqual(doubles, PlayerStats(1, 0, 0, 2, 5, 12))

        last_month = PlayerStatsAggregator.filtered_stats(self.alice, self.matches,
                                                          date_range=DateRangeFilter.LAST_MONTH, now=NOW)
        self.assertEqual(last_month.matches_played, 3)

        last_week = PlayerStatsAggregator.filtered_stats(self.alice, self.matches,
                                                         date_range=DateRangeFilter.LAST_WEEK, now=NOW)
        self.assertEqual(last_week.matches_played, 2)

    def test_date_range_interval(self):
        self.assertIsNone(DateRangeFilter.ALL.interval(NOW))
        start, end = DateRangeFilter.LAST_YEAR.interval(NOW)
        self.assertEqual(start, datetime(2023, 6, 1, 12, 0, tzinfo=timezone.utc))
        self.assertEqual(end, NOW)

    def test_recent_form_and_win_streak(self):
        self.assertAlmostEqual(PlayerStatsAggregator.recent_form(self.alice, self.matches, 2), 50.0)
        self.assertEqual(PlayerStatsAggregator.recent_form(Player(name="Nobody"), self.matches), 0.0)

        self.assertEqual(PlayerStatsAggregator.win_streak(self.bob, self.matches), 0)
        self.assertEqual(PlayerStatsAggregator.win_streak(self.carol, self.matches), 0)
        streaker = Player(name="Bob")
        wins = [make_match([streaker], [self.dave], [(6, 0)], days_ago=d) for d in (1, 2, 3)]
        losses = [make_match([streaker], [self.dave], [(0, 6)], winner=1, days_ago=4)]
        self.assertEqual(PlayerStatsAggregator.win_streak(streaker, wins + losses), 3)

    def test_sort_players(self):
        PlayerStatsAggregator.recalculate(self.players, self.matches)
        newcomer = Player(name="Aaron")

        ranked = PlayerStatsAggregator.sort_players(self.players + [newcomer], SortCriteria.WIN_PERCENTAGE)
        self.assertEqual(ranked[-1], newcomer)

        by_played = PlayerStatsAggregator.sort_players(self.players, SortCriteria.MATCHES_PLAYED)
        self.assertEqual(by_played[0].stats.matches_played, 3)
        self.assertEqual([p.name for p in by_played[:3]], ["Alice", "Bob", "Carol"])

        self.assertEqual(PlayerStatsAggregator.player_rank(self.alice, by_played), 1)
        self.assertIsNone(PlayerStatsAggregator.player_rank(newcomer, by_played))

    def test_top_performers(self):
        PlayerStatsAggregator.recalculate(self.players, self.matches)
        top = PlayerStatsAggregator.top_performers(self.players, min_matches=3, limit=5)
        self.assertEqual([p.name for p in top], ["Bob", "Alice", "Carol"])
        self.assertEqual(len(PlayerStatsAggregator.top_performers(self.players, min_matches=3, limit=1)), 1)

    def test_surface_and_type_counts(self):
        surfaces = PlayerStatsAggregator.surface_statistics(self.matches)
        self.assertEqual(surfaces[0], (CourtSurface.HARD, 4))
        self.assertIn((CourtSurface.CLAY, 1), surfaces)

        types = PlayerStatsAggregator.match_type_statistics(self.matches)
        self.assertEqual(types, [(MatchType.SINGLES, 4), (MatchType.DOUBLES, 1)])


if __name__ == '__main__':
    unittest.main()
