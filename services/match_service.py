"""
Match service
=============

Purpose:
- Validate a match form and save the match with its players.
- Keep player statistics current: incremental update on save, full recalculation on demand.
- Maintenance: duplicate player consolidation and duplicate match detection.

Key rule:
- Each top-level operation runs to completion before another one reads the
  same records. The service holds no state between calls; everything is
  fetched fresh from the injected store.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from config.config_manager import ConfigManager
from database.auth import RemoteAuthProvider, StaticAuthProvider
from database.database_manager import DatabaseManager
from database.errors import InvalidMatchDataError
from database.remote_store import RemoteStore
from database.sqlite_store import SQLiteStore
from database.store import AuthProvider, MatchStore
from models.head_to_head import HeadToHeadRecord
from models.match import CourtSurface, Match, MatchType, Team
from models.player import Player
from scoring.match_form import MatchForm, compute_validation_errors
from stats.consolidation import ConsolidationResult, DuplicateMatchDetector, DuplicatePlayerConsolidator
from stats.head_to_head import HeadToHeadAggregator
from stats.player_stats import DateRangeFilter, PlayerStatsAggregator, SortCriteria
from utils.name_utils import NameUtils
from utils.text_utils import TextUtils

logger = logging.getLogger(__name__)


class MatchService:
    """Application-facing operations over an injected store."""

    def __init__(self, store: MatchStore, auth_provider: AuthProvider,
                 config: Optional[Dict[str, Any]] = None):
        self.store = store
        self.auth_provider = auth_provider
        self.config = config or ConfigManager.get_default_config()

    # Saving matches

    def validate(self, form: MatchForm) -> List[str]:
        return compute_validation_errors(form)

    def save_match(self, form: MatchForm) -> Match:
        """
        Validate the form and save the match.

        Raises:
            InvalidMatchDataError: the form does not validate; the error list is on .errors
            StoreError: the match was not (completely) saved
        """
        errors = self.validate(form)
        if errors:
            logger.info(f"Match not saved, {len(errors)} validation error(s)")
            raise InvalidMatchDataError(f"Match form is invalid: {'; '.join(errors)}", errors)

        user_id = self.auth_provider.authenticate()
        players = self.store.fetch_players()

        created: List[Player] = []
        team1 = Team(players=[self._resolve_player(name, players, created).snapshot()
                              for name in form.team1_players_filtered if TextUtils.clean_text(name)])
        team2 = Team(players=[self._resolve_player(name, players, created).snapshot()
                              for name in form.team2_players_filtered if TextUtils.clean_text(name)])

        match = Match(
            user_id=user_id,
            match_type=form.match_type,
            teams=[team1, team2],
            sets=form.parsed_sets(),
            winner_team_index=form.winner_team_index,
            location=TextUtils.optional_text(form.location),
            surface=form.surface,
            notes=TextUtils.optional_text(form.notes)
        )

        self.check_match_data(match)
        for player in created:
            self.store.save_player(player)
            logger.info(f"Created new player: '{player.name}'")

        self._persist(match, players)
        return match

    def save_prepared_match(self, match: Match) -> Match:
        """Save an already-built match and update the stats of its players."""
        self._persist(match, self.store.fetch_players())
        return match

    @staticmethod
    def check_match_data(match: Match) -> None:
        """Raise InvalidMatchDataError unless the match can be persisted."""
        errors = []
        if len(match.teams) != 2 or any(not team.players for team in match.teams):
            errors.append("Match must have two teams with players")
        if not match.sets:
            errors.append("Match must have at least one set")
        if any(game_set.team1_games == game_set.team2_games for game_set in match.sets):
            errors.append("Sets cannot be tied")
        if errors:
            raise InvalidMatchDataError(f"Invalid match data: {'; '.join(errors)}", errors)

    def _persist(self, match: Match, players: List[Player]) -> None:
        self.check_match_data(match)
        logger.info(f"Saving match {match.id}: {match.teams[0].display_name} vs "
                    f"{match.teams[1].display_name}, {match.score_string}")

        self.store.save_match(match)

        for player in PlayerStatsAggregator.apply_match(players, match):
            self.store.save_player(player)
            logger.info(f"Updated {player.name}: {player.stats.matches_won}/{player.stats.matches_played} matches")

    def create_or_get_player(self, name: str, players: Optional[List[Player]] = None) -> Player:
        """
        Find a player by normalized name or create and save a new one.
        A newly created player is appended to players when a list is given.
        """
        if players is None:
            players = self.store.fetch_players()

        created: List[Player] = []
        player = self._resolve_player(name, players, created)
        if created:
            self.store.save_player(player)
            logger.info(f"Created new player: '{player.name}'")
        return player

    @staticmethod
    def _resolve_player(name: str, players: List[Player], created: List[Player]) -> Player:
        """Existing player with the same normalized name, or a new unsaved one added to players and created."""
        trimmed = TextUtils.clean_text(name)
        for player in players:
            if NameUtils.names_match(player.name, trimmed):
                return player

        player = Player(name=trimmed)
        players.append(player)
        created.append(player)
        return player

    # Statistics

    def recalculate_all_player_stats(self) -> List[Player]:
        """Reset and rebuild every player's stats from the full match history."""
        logger.info("Starting player statistics recalculation...")
        players = self.store.fetch_players()
        matches = self.store.fetch_matches()
        logger.info(f"Found {len(players)} players and {len(matches)} matches")

        PlayerStatsAggregator.recalculate(players, matches)

        for player in players:
            self.store.save_player(player)
            logger.debug(f"Updated {player.name}: {player.stats.matches_won}/{player.stats.matches_played} matches")

        logger.info("Player statistics recalculation completed")
        return players

    def head_to_head(self, player: Player) -> List[HeadToHeadRecord]:
        return HeadToHeadAggregator.head_to_head(player, self.store.fetch_matches())

    def leaderboard(self, criteria: SortCriteria = SortCriteria.WIN_PERCENTAGE, search_text: str = "",
                    match_type: Optional[MatchType] = None, surface: Optional[CourtSurface] = None,
                    date_range: DateRangeFilter = DateRangeFilter.ALL,
                    now: Optional[datetime] = None) -> List[Player]:
        """
        Players filtered and ordered for display.

        With a match type, surface or date range filter the stats are
        recomputed over the matching matches and players without any are dropped.
        """
        players = self.store.fetch_players()
        matches = self.store.fetch_matches()

        query = NameUtils.normalize(search_text)
        if query:
            players = [player for player in players if query in player.normalized_name]

        if match_type is not None or surface is not None or date_range is not DateRangeFilter.ALL:
            filtered = []
            for player in players:
                stats = PlayerStatsAggregator.filtered_stats(player, matches, match_type, surface,
                                                             date_range, now)
                if stats.matches_played > 0:
                    filtered.append(Player(name=player.name, id=player.id, stats=stats))
            players = filtered

        return PlayerStatsAggregator.sort_players(
            players, criteria, matches, self.config['statistics']['recent_form_matches']
        )

    def top_performers(self) -> List[Player]:
        statistics = self.config['statistics']
        return PlayerStatsAggregator.top_performers(
            self.store.fetch_players(),
            min_matches=statistics['top_performers_min_matches'],
            limit=statistics['top_performers_limit']
        )

    # Match queries

    def fetch_recent_matches(self, limit: int = 10) -> List[Match]:
        return self.store.fetch_recent_matches(limit)

    def matches_for_player(self, player: Player) -> List[Match]:
        return PlayerStatsAggregator.matches_for_player(player, self.store.fetch_matches())

    def search_matches(self, query: str) -> List[Match]:
        """Matches whose player names, location or notes contain the query (case-insensitive)."""
        matches = self.store.fetch_matches()
        needle = NameUtils.normalize(query)
        if not needle:
            return matches

        def contains(text: Optional[str]) -> bool:
            return bool(text) and needle in text.casefold()

        return [match for match in matches
                if any(contains(player.name) for team in match.teams for player in team.players)
                or contains(match.location) or contains(match.notes)]

    def filter_matches(self, match_type: Optional[MatchType] = None, surface: Optional[CourtSurface] = None,
                       date_range: DateRangeFilter = DateRangeFilter.ALL,
                       now: Optional[datetime] = None) -> List[Match]:
        interval = date_range.interval(now)
        result = []
        for match in self.store.fetch_matches():
            if match_type is not None and match.match_type != match_type:
                continue
            if surface is not None and match.surface != surface:
                continue
            if interval is not None and not interval[0] <= match.timestamp <= interval[1]:
                continue
            result.append(match)
        return result

    # Maintenance

    def consolidate_duplicate_players(self) -> ConsolidationResult:
        return DuplicatePlayerConsolidator(self.store).consolidate()

    def detect_duplicate_matches(self) -> List[Tuple[Match, Match]]:
        window = self.config['duplicates']['match_window_seconds']
        return DuplicateMatchDetector.detect(self.store.fetch_matches(), window)


def create_match_service(config_file: str = "config.yaml",
                         db_path: Optional[str] = None) -> Tuple[MatchService, Optional[DatabaseManager]]:
    """
    Build a MatchService for the configured store backend.

    Returns:
        (service, database manager or None for the remote backend)
    """
    config = ConfigManager.load_config(config_file)
    store_config = config['store']

    if store_config['backend'] == 'remote':
        remote = config['remote']
        auth_provider = RemoteAuthProvider(remote['auth_url'], remote.get('api_key', ''),
                                           timeout=remote['timeout'])
        store = RemoteStore(remote['base_url'], auth_provider, session=auth_provider.session,
                            timeout=remote['timeout'])
        logger.info(f"Using remote store at {remote['base_url']}")
        return MatchService(store, auth_provider, config), None

    db_manager = DatabaseManager(db_path, config_file)
    auth_provider = StaticAuthProvider(store_config['account_id'])
    store = SQLiteStore(db_manager, auth_provider.authenticate())
    logger.info(f"Using sqlite store at {db_manager.db_path}")
    return MatchService(store, auth_provider, config), db_manager

