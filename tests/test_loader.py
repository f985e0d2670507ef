"""
Tests for the Data Loader
=========================
"""

from pathlib import Path

import pytest

from argonego.argumentation import Criterion, Item, Rating
from argonego.errors import PreferenceFileError
from argonego.runtime import load_items, load_preferences


DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def write(tmp_path, text, name="prefs.txt"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestItems:
    """Test the item catalog file."""

    def test_sample_catalog(self):
        items = load_items(str(DATA_DIR / "items.txt"))
        assert [it.name for it in items] == ["ICED", "ICEP", "E", "H", "HYB"]
        assert items[2].description == "Electric engine"

    def test_comments_and_blank_lines(self, tmp_path):
        path = write(tmp_path, "# catalog\n\nA;first item\n  B;second item  \n", "items.txt")
        assert [(it.name, it.description) for it in load_items(path)] == [
            ("A", "first item"),
            ("B", "second item"),
        ]

    def test_bad_line(self, tmp_path):
        """The offending line number is reported."""
        path = write(tmp_path, "A;first item\nB second item\n", "items.txt")
        with pytest.raises(PreferenceFileError) as exc_info:
            load_items(path)
        assert exc_info.value.line == 2
        assert "line 2" in str(exc_info.value)

    def test_duplicate_name(self, tmp_path):
        path = write(tmp_path, "A;first item\nA;again\n", "items.txt")
        with pytest.raises(PreferenceFileError) as exc_info:
            load_items(path)
        assert exc_info.value.line == 2

    def test_negated_name_rejected(self, tmp_path):
        """A name starting with "not " would read as a negative argument."""
        path = write(tmp_path, "A;first item\nnot B;second item\n", "items.txt")
        with pytest.raises(PreferenceFileError) as exc_info:
            load_items(path)
        assert exc_info.value.line == 2
        assert "not B" in exc_info.value.reason

    def test_name_containing_not_is_kept(self, tmp_path):
        path = write(tmp_path, "knot;tied\nnotebook;laptop\n", "items.txt")
        assert [it.name for it in load_items(path)] == ["knot", "notebook"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(PreferenceFileError) as exc_info:
            load_items(str(tmp_path / "nowhere.txt"))
        assert exc_info.value.line == 0


class TestPreferences:
    """Test preference files."""

    def test_sample_preferences(self):
        items = load_items(str(DATA_DIR / "items.txt"))
        prefs = load_preferences(str(DATA_DIR / "preferences1.txt"), items)

        assert prefs.criteria[0] == Criterion.COST
        assert prefs.criteria[-1] == Criterion.POWER
        assert prefs.rate(items[0], Criterion.COST) == Rating.VERY_GOOD
        assert prefs.best(items).name == "ICED"

    def test_whitespace_is_ignored(self, tmp_path, items, item_a):
        path = write(tmp_path, "Power\t>  Cost\nA : Power = GOOD ,Cost=BAD\n")
        prefs = load_preferences(path, items)
        assert prefs.criteria == (Criterion.POWER, Criterion.COST)
        assert prefs.rate(item_a, Criterion.COST) == Rating.BAD

    def test_unrated_item_scores_zero(self, tmp_path, items, item_b):
        path = write(tmp_path, "Power > Cost\nA: Power=GOOD, Cost=BAD\n")
        assert load_preferences(path, items).score(item_b) == 0

    @pytest.mark.parametrize("text, line", [
        ("Power > Speed\n", 1),
        ("Power > Cost > Power\n", 1),
        ("Power > Cost\nCost > Power\n", 2),
        ("Power > Cost\nZ: Power=GOOD, Cost=BAD\n", 2),
        ("Power > Cost\nA: Power=GOOD\n", 2),
        ("Power > Cost\nA: Power=GOOD, Power=BAD\n", 2),
        ("Power > Cost\nA: Power=GOOD, Noise=BAD\n", 2),
        ("Power > Cost\n\nA: Power=GREAT, Cost=BAD\n", 3),
        ("Power > Cost\nA: Power-GOOD, Cost=BAD\n", 2),
        ("Power > Cost\nA Power=GOOD, Cost=BAD\n", 2),
    ])
    def test_errors_report_line(self, tmp_path, items, text, line):
        """Every problem is reported with its line number."""
        with pytest.raises(PreferenceFileError) as exc_info:
            load_preferences(write(tmp_path, text), items)
        assert exc_info.value.line == line

    def test_error_message(self, tmp_path, items):
        path = write(tmp_path, "Power > Cost\nA: Power=GOOD, Power=BAD\n")
        with pytest.raises(PreferenceFileError) as exc_info:
            load_preferences(path, items)
        assert "graded twice" in exc_info.value.reason
        assert exc_info.value.path == path

    def test_only_given_items_are_rated(self, tmp_path):
        path = write(tmp_path, "Power > Cost\nX: Power=GOOD, Cost=GOOD\n")
        prefs = load_preferences(path, [Item("X")])
        assert prefs.score(Item("X")) == 6
        assert prefs.items() == [Item("X")]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
