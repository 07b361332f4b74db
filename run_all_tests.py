#!/usr/bin/env python3
"""
Test runner script for the tennis tracker.

Usage:
    python run_all_tests.py [all | quick | <category> | help]
"""

import os
import sys
import time
import unittest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# category -> (test module, description)
TEST_CATEGORIES = {
    'scoring': ('test_scoring', "set, match and form validation, live winner"),
    'models': ('test_models', "players, sets, teams and match documents"),
    'stats': ('test_player_stats', "stats aggregation, filters and leaderboard"),
    'headtohead': ('test_head_to_head', "head-to-head records"),
    'consolidation': ('test_consolidation', "duplicate players and duplicate matches"),
    'database': ('test_database', "sqlite store and configuration"),
    'remote': ('test_remote_store', "remote document store and sign-in"),
    'service': ('test_match_service', "match service operations"),
    'reports': ('test_reports', "CSV reports"),
}


def run_suite(module_names, verbosity=2):
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    for module_name in module_names:
        suite.addTests(loader.loadTestsFromName(module_name))

    print(f"Running {suite.countTestCases()} test cases...")
    print("-" * 80)
    start_time = time.time()
    result = unittest.TextTestRunner(verbosity=verbosity, stream=sys.stdout).run(suite)

    print("-" * 80)
    print(f"Tests run: {result.testsRun}, failures: {len(result.failures)}, "
          f"errors: {len(result.errors)}, skipped: {len(result.skipped)}, "
          f"duration: {time.time() - start_time:.2f}s")
    return 0 if result.wasSuccessful() else 1


def print_usage():
    print("Usage: python run_all_tests.py [command]")
    print()
    print("  all            - Run all tests (default)")
    print("  quick          - Run the scoring tests only")
    for category, (_, description) in TEST_CATEGORIES.items():
        print(f"  {category:<14} - {description}")
    print("  help           - Show this help message")


def main():
    command = sys.argv[1].lower() if len(sys.argv) > 1 else 'all'

    if command == 'all':
        return run_suite([module for module, _ in TEST_CATEGORIES.values()])
    if command == 'quick':
        command = 'scoring'
    if command in TEST_CATEGORIES:
        return run_suite([TEST_CATEGORIES[command][0]])
    if command == 'help':
        print_usage()
        return 0

    print(f"Unknown command: {command}")
    print_usage()
    return 1


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nTest run interrupted by user.")
        sys.exit(1)
