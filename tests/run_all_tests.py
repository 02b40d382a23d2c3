#!/usr/bin/env python3
"""
Test runner for the Capital Quiz.
Runs all unit and integration tests and prints a summary report.
"""
import unittest
import sys
import time
from pathlib import Path

# Tests import their fixtures as tests.test_fixtures
sys.path.insert(0, str(Path(__file__).parent.parent))

TEST_MODULES = [
    'tests.test_question_bank',
    'tests.test_quiz_session',
    'tests.test_quiz_engine',
    'tests.test_quiz_controller',
    'tests.test_config_manager',
    'tests.test_image_resolver',
    'tests.test_display',
    'tests.test_app',
    'tests.test_packaging',
]

CATEGORIES = {
    'unit': [
        'tests.test_question_bank',
        'tests.test_quiz_session',
        'tests.test_config_manager',
        'tests.test_image_resolver',
        'tests.test_display',
        'tests.test_packaging',
    ],
    'timer': ['tests.test_quiz_engine'],
    'controller': ['tests.test_quiz_controller'],
    'app': ['tests.test_app'],
}


def run_test_suite():
    """Run the complete test suite and generate report."""
    print("=" * 70)
    print("Capital Quiz - Test Suite")
    print("=" * 70)

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module_name in TEST_MODULES:
        try:
            suite.addTest(loader.loadTestsFromName(module_name))
            print(f"✓ Loaded tests from {module_name}")
        except Exception as e:
            print(f"✗ Failed to load {module_name}: {e}")

    print("\n" + "=" * 70)
    print("Running Tests...")
    print("=" * 70)

    runner = unittest.TextTestRunner(
        verbosity=2,
        stream=sys.stdout,
        buffer=True
    )

    start_time = time.time()
    result = runner.run(suite)
    end_time = time.time()

    print("\n" + "=" * 70)
    print("Test Summary Report")
    print("=" * 70)

    total_tests = result.testsRun
    failures = len(result.failures)
    errors = len(result.errors)
    skipped = len(result.skipped)
    passed = total_tests - failures - errors - skipped

    print(f"Total Tests Run: {total_tests}")
    print(f"Passed: {passed}")
    print(f"Failed: {failures}")
    print(f"Errors: {errors}")
    print(f"Skipped: {skipped}")
    print(f"Success Rate: {(passed/total_tests)*100:.1f}%" if total_tests > 0 else "N/A")
    print(f"Execution Time: {end_time - start_time:.2f} seconds")

    if failures:
        print("\n" + "-" * 50)
        print("FAILURES:")
        print("-" * 50)
        for test, traceback in result.failures:
            print(f"\n{test}:")
            print(traceback)

    if errors:
        print("\n" + "-" * 50)
        print("ERRORS:")
        print("-" * 50)
        for test, traceback in result.errors:
            print(f"\n{test}:")
            print(traceback)

    print("\n" + "=" * 70)

    return failures == 0 and errors == 0


def run_specific_test_category(category):
    """Run tests for a specific category."""
    if category not in CATEGORIES:
        print(f"Unknown category: {category}")
        print(f"Available categories: {', '.join(CATEGORIES.keys())}")
        return False

    print(f"Running {category} tests...")

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for module_name in CATEGORIES[category]:
        try:
            suite.addTest(loader.loadTestsFromName(module_name))
        except Exception as e:
            print(f"Failed to load {module_name}: {e}")
            return False

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return len(result.failures) == 0 and len(result.errors) == 0


if __name__ == '__main__':
    if len(sys.argv) > 1:
        success = run_specific_test_category(sys.argv[1])
    else:
        success = run_test_suite()

    sys.exit(0 if success else 1)
