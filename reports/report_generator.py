"""
Report generator for the tennis tracker.
"""

import os
import logging
from typing import Any, Dict, Optional

import pandas as pd

from config.config_manager import ConfigManager
from database.store import MatchStore
from models.player import Player
from stats.head_to_head import HeadToHeadAggregator
from stats.player_stats import PlayerStatsAggregator, SortCriteria

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Generates CSV reports from the players and matches in a store."""

    def __init__(self, store: MatchStore, config: Optional[Dict[str, Any]] = None):
        self.store = store
        self.config = config or ConfigManager.get_default_config()

    def generate_leaderboard_report(self, output_file: str = "leaderboard_report.csv",
                                    criteria: SortCriteria = SortCriteria.WIN_PERCENTAGE) -> int:
        """
        Generate the leaderboard ordered by the given criteria.
        Returns the number of players in the report.
        """
        players = self.store.fetch_players()
        if not players:
            logger.warning("No players found for leaderboard report")
            return 0

        matches = self.store.fetch_matches()
        recent_form_matches = self.config['statistics']['recent_form_matches']
        ranked = PlayerStatsAggregator.sort_players(players, criteria, matches, recent_form_matches)

        data = []
        for rank, player in enumerate(ranked, 1):
            stats = player.stats
            data.append({
                'Rank': rank,
                'Player': player.name,
                'Matches Played': stats.matches_played,
                'Matches Won': stats.matches_won,
                'Matches Lost': stats.matches_lost,
                'Win %': f'{stats.win_percentage:.1f}',
                'Sets Won': stats.sets_won,
                'Sets Lost': stats.sets_lost,
                'Set Win %': f'{stats.set_win_percentage:.1f}',
                'Games Won': stats.games_won,
                'Games Lost': stats.games_lost,
                'Recent Form %': f'{PlayerStatsAggregator.recent_form(player, matches, recent_form_matches):.1f}',
                'Win Streak': PlayerStatsAggregator.win_streak(player, matches)
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated leaderboard report with {len(data)} players: {output_file}")
        return len(data)

    def generate_head_to_head_report(self, player: Player, output_file: str = None) -> int:
        """Generate the head-to-head records of one player against every opponent."""
        if output_file is None:
            output_file = f"head_to_head_{self._safe_name(player.name)}_report.csv"

        records = HeadToHeadAggregator.head_to_head(player, self.store.fetch_matches())
        if not records:
            logger.warning(f"No head-to-head records found for player: {player.name}")
            return 0

        data = [{
            'Player': player.name,
            'Opponent': record.opponent.name,
            'Wins': record.wins,
            'Losses': record.losses,
            'Matches': record.total_matches,
            'Win %': f'{record.win_percentage:.1f}',
            'Record': record.record_string
        } for record in records]

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated head-to-head report for {player.name}: {output_file}")
        return len(data)

    def generate_match_history_report(self, output_file: str = "match_history_report.csv") -> int:
        """Generate the list of all matches, most recent first."""
        matches = self.store.fetch_matches()
        if not matches:
            logger.warning("No matches found for match history report")
            return 0

        data = []
        for match in sorted(matches, key=lambda match: match.timestamp, reverse=True):
            winner = match.winner_team
            data.append({
                'Date': match.timestamp.isoformat(),
                'Type': match.match_type.display_name,
                'Team 1': match.teams[0].display_name,
                'Team 2': match.teams[1].display_name,
                'Score': match.score_string,
                'Winner': winner.display_name if winner else '',
                'Surface': match.surface.display_name if match.surface else '',
                'Location': match.location or '',
                'Notes': match.notes or ''
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated match history report with {len(data)} matches: {output_file}")
        return len(data)

    def generate_statistics_report(self, output_file: str = "statistics_report.csv") -> int:
        """Generate overall counts by match type and surface plus the top performers."""
        players = self.store.fetch_players()
        matches = self.store.fetch_matches()

        if not players and not matches:
            logger.warning("No data found for statistics report")
            return 0

        total_matches = len(matches)
        data = [
            {'Category': 'Overall', 'Subcategory': 'Total Players', 'Count': len(players), 'Percentage': 'N/A'},
            {'Category': 'Overall', 'Subcategory': 'Total Matches', 'Count': total_matches, 'Percentage': '100%'}
        ]

        for match_type, count in PlayerStatsAggregator.match_type_statistics(matches):
            percentage = (count / total_matches * 100) if total_matches > 0 else 0
            data.append({
                'Category': 'Match Type',
                'Subcategory': match_type.display_name,
                'Count': count,
                'Percentage': f'{percentage:.1f}%'
            })

        for surface, count in PlayerStatsAggregator.surface_statistics(matches):
            percentage = (count / total_matches * 100) if total_matches > 0 else 0
            data.append({
                'Category': 'Surface',
                'Subcategory': surface.display_name,
                'Count': count,
                'Percentage': f'{percentage:.1f}%'
            })

        statistics = self.config['statistics']
        top = PlayerStatsAggregator.top_performers(
            players, statistics['top_performers_min_matches'], statistics['top_performers_limit']
        )
        for player in top:
            data.append({
                'Category': 'Top Performer',
                'Subcategory': player.name,
                'Count': player.stats.matches_played,
                'Percentage': f'{player.stats.win_percentage:.1f}%'
            })

        df = pd.DataFrame(data)
        df.to_csv(output_file, index=False, encoding='utf-8')

        logger.info(f"Generated statistics report: {output_file}")
        return len(data)

    def generate_all_reports(self, output_directory: str = None) -> Dict[str, int]:
        """Generate all available reports in the specified directory."""
        output_directory = output_directory or self.config['reports']['output_directory']
        os.makedirs(output_directory, exist_ok=True)

        report_results = {}

        report_results['leaderboard'] = self.generate_leaderboard_report(
            os.path.join(output_directory, "leaderboard_report.csv"))

        report_results['match_history'] = self.generate_match_history_report(
            os.path.join(output_directory, "match_history_report.csv"))

        for player in self.store.fetch_players():
            safe_name = self._safe_name(player.name)
            report_file = os.path.join(output_directory, f"head_to_head_{safe_name}_report.csv")
            report_results[f'head_to_head_{safe_name}'] = self.generate_head_to_head_report(player, report_file)

        report_results['statistics'] = self.generate_statistics_report(
            os.path.join(output_directory, "statistics_report.csv"))

        logger.info(f"Generated all reports in directory: {output_directory}")
        return report_results

    @staticmethod
    def _safe_name(name: str) -> str:
        """Sanitize a player name for use in a filename."""
        safe = "".join(c for c in name if c.isalnum() or c in (' ', '-', '_')).strip()
        return safe.replace(' ', '_').lower() or 'player'
