"""
Checks on the packaging metadata in pyproject.toml.
"""
import re
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent


class TestPackaging(unittest.TestCase):
    """Test cases for pyproject.toml."""

    def setUp(self):
        self.pyproject = (PROJECT_ROOT / "pyproject.toml").read_text(encoding='utf-8')

    def test_declared_packages_exist(self):
        match = re.search(r'^packages = \[(.*)\]$', self.pyproject, re.MULTILINE)
        self.assertIsNotNone(match)
        for name in re.findall(r'"([^"]+)"', match.group(1)):
            with self.subTest(package=name):
                self.assertTrue((PROJECT_ROOT / name / "quiz_session.py").is_file())

    def test_readme_is_not_a_requirements_document(self):
        match = re.search(r'^readme = "([^"]+)"$', self.pyproject, re.MULTILINE)
        if match is None:
            return
        self.assertTrue(match.group(1).upper().startswith("README"))
        self.assertTrue((PROJECT_ROOT / match.group(1)).is_file())


if __name__ == '__main__':
    unittest.main()
