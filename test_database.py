#!/usr/bin/env python3
"""
Test suite for the sqlite store and configuration handling.

This test suite covers:
- Database initialization and table creation
- Configuration loading, merging and fallback
- Player and match persistence per account
- Store error wrapping
"""

import os
import shutil
import sqlite3
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import yaml

from config.config_manager import ConfigManager
from database.database_manager import DatabaseManager
from database.errors import StoreError
from database.sqlite_store import SQLiteStore
from database.store import MatchStore
from models.match import CourtSurface, GameSet, Match, MatchType, Team
from models.player import Player, PlayerStats


class TestConfigManager(unittest.TestCase):
    """Test cases for ConfigManager."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.test_config_path = os.path.join(self.test_dir, "test_config.yaml")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_partial_config_is_merged_over_defaults(self):
        with open(self.test_config_path, 'w') as f:
            yaml.dump({'statistics': {'recent_form_matches': 10}, 'store': {'account_id': 'club'}}, f)

        config = ConfigManager.load_config(self.test_config_path)
        self.assertEqual(config['statistics']['recent_form_matches'], 10)
        self.assertEqual(config['statistics']['top_performers_limit'], 5)
        self.assertEqual(config['store']['account_id'], 'club')
        self.assertEqual(config['store']['backend'], 'sqlite')
        self.assertEqual(config['duplicates']['match_window_seconds'], 3600)

    def test_missing_file_falls_back_to_defaults(self):
        with self.assertLogs('config.config_manager', level='WARNING'):
            config = ConfigManager.load_config(os.path.join(self.test_dir, "nonexistent.yaml"))
        self.assertEqual(config, ConfigManager.get_default_config())

    def test_invalid_yaml_falls_back_to_defaults(self):
        with open(self.test_config_path, 'w') as f:
            f.write("statistics: [unclosed\n")

        with self.assertLogs('config.config_manager', level='WARNING'):
            config = ConfigManager.load_config(self.test_config_path)
        self.assertEqual(config['database']['path'], 'tennis_tracker.db')

    def test_defaults_are_not_shared(self):
        config = ConfigManager.get_default_config()
        config['statistics']['recent_form_matches'] = 99
        self.assertEqual(ConfigManager.get_default_config()['statistics']['recent_form_matches'], 5)


class TestSQLiteStore(unittest.TestCase):
    """Test cases for SQLiteStore over DatabaseManager."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.test_db_path = os.path.join(self.test_dir, "test_tennis.db")
        self.test_config_path = os.path.join(self.test_dir, "test_config.yaml")

        self.test_config = {
            'database': {'path': self.test_db_path},
            'store': {'backend': 'sqlite', 'account_id': 'local'}
        }
        with open(self.test_config_path, 'w') as f:
            yaml.dump(self.test_config, f)

        self.db = DatabaseManager(config_file=self.test_config_path)
        self.store = SQLiteStore(self.db, "local")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir)

    def make_match(self, first, second, minutes_ago=0):
        return Match(
            user_id="local",
            match_type=MatchType.SINGLES,
            teams=[Team(players=[first.snapshot()]), Team(players=[second.snapshot()])],
            sets=[GameSet(6, 4), GameSet(7, 6, 7, 2)],
            winner_team_index=0,
            surface=CourtSurface.GRASS,
            notes="Club final",
            timestamp=datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago)
        )

    def test_database_initialization(self):
        """Test database initialization and table creation."""
        self.assertEqual(self.db.db_path, self.test_db_path)
        with sqlite3.connect(self.test_db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = [row[0] for row in cursor.fetchall()]
            self.assertIn('players', tables)
            self.assertIn('matches', tables)

            cursor.execute("SELECT name FROM sqlite_master WHERE type='index'")
            indexes = [row[0] for row in cursor.fetchall()]
            self.assertIn('idx_players_name', indexes)
            self.assertIn('idx_matches_account_time', indexes)

    def test_store_satisfies_protocol(self):
        self.assertIsInstance(self.store, MatchStore)

    def test_player_round_trip(self):
        player = Player(name="Alice", stats=PlayerStats(3, 2, 6, 3, 40, 31))
        self.store.save_player(player)

        player.stats.matches_played = 4
        self.store.save_player(player)

        players = self.store.fetch_players()
        self.assertEqual(len(players), 1)
        self.assertEqual(players[0].id, player.id)
        self.assertEqual(players[0].stats, PlayerStats(4, 2, 6, 3, 40, 31))

    def test_delete_player(self):
        player = Player(name="Alice")
        self.store.save_player(player)
        self.store.delete_player(player.id)
        self.assertEqual(self.store.fetch_players(), [])
        # deleting again is harmless
        self.store.delete_player(player.id)

    def test_match_round_trip_and_order(self):
        alice, bob = Player(name="Alice"), Player(name="Bob")
        older = self.make_match(alice, bob, minutes_ago=90)
        newer = self.make_match(bob, alice, minutes_ago=5)
        self.store.save_match(older)
        self.store.save_match(newer)

        matches = self.store.fetch_matches()
        self.assertEqual([m.id for m in matches], [newer.id, older.id])
        self.assertEqual(matches[1].score_string, "6-4, 7-6 (7-2)")
        self.assertEqual(matches[1].surface, CourtSurface.GRASS)
        self.assertEqual(matches[1].notes, "Club final")
        self.assertEqual(matches[1].timestamp, older.timestamp)

        self.assertEqual([m.id for m in self.store.fetch_recent_matches(1)], [newer.id])

    def test_saving_a_match_again_overwrites_it(self):
        alice, bob = Player(name="Alice"), Player(name="Bob")
        match = self.make_match(alice, bob)
        self.store.save_match(match)
        self.store.save_match(match.with_teams([match.teams[1], match.teams[0]]))

        matches = self.store.fetch_matches()
        self.assertEqual(len(matches), 1)
        self.assertEqual(matches[0].teams[0].players[0].name, "Bob")

    def test_accounts_are_isolated(self):
        other = SQLiteStore(self.db, "someone-else")
        other.save_player(Player(name="Alice"))
        other.save_match(self.make_match(Player(name="Alice"), Player(name="Bob")))

        self.assertEqual(self.store.fetch_players(), [])
        self.assertEqual(self.store.fetch_matches(), [])
        self.assertEqual(self.db.get_database_stats("someone-else"), {'players': 1, 'matches': 1})
        self.assertEqual(self.db.get_database_stats(), {'players': 1, 'matches': 1})

    def test_corrupt_match_document_raises_store_error(self):
        with sqlite3.connect(self.test_db_path) as conn:
            conn.execute("""
                INSERT INTO matches (id, account_id, match_timestamp, match_type, document)
                VALUES ('broken', 'local', '2024-01-01', 'singles', '{not json')
            """)
            conn.commit()

        with self.assertRaises(StoreError):
            self.store.fetch_matches()

    def test_sqlite_errors_become_store_errors(self):
        with patch('database.database_manager.sqlite3.connect') as connect:
            connect.return_value.cursor.return_value.execute.side_effect = sqlite3.OperationalError("locked")
            with self.assertRaises(StoreError):
                self.store.fetch_players()
            connect.return_value.rollback.assert_called_once()


if __name__ == '__main__':
    unittest.main()
