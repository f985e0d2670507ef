"""
Data Loader
===========

Reads the item catalog and the negotiators' preference files.

Items file, one item per line:

    ICED;Internal combustion engine with diesel
    E;Electric engine

Preference file:

    # Criteria, most important first
    Cost > Consumption > Durability > Environment > Noise

    # One line per item, one rating per ranked criterion
    ICED: Cost=VERY_GOOD, Consumption=GOOD, Durability=VERY_GOOD, Environment=VERY_BAD, Noise=BAD

Spaces and tabs are removed before a preference line is parsed; blank
lines and lines starting with "#" are ignored. Any problem raises
PreferenceFileError carrying the 1-based line number.
"""

from pathlib import Path
from typing import List, Sequence

from ..argumentation.argument import NEGATION_PREFIX
from ..argumentation.catalog import Criterion, CriterionRating, Item, Rating
from ..argumentation.preferences import Preferences
from ..errors import PreferenceFileError


def _read_lines(path: str) -> List[str]:
    file_path = Path(path)
    if not file_path.is_file():
        raise PreferenceFileError(str(path), 0, "File not found")
    with open(file_path, encoding="utf-8") as f:
        return f.read().splitlines()


def load_items(path: str) -> List[Item]:
    """
    Load the item catalog.

    Raises:
        PreferenceFileError: If the file is missing, a line is not
            "Name;Description", a name appears twice, or a name
            starts with "not " (it would read as a negated claim)
    """
    items: List[Item] = []
    names = set()

    for number, raw in enumerate(_read_lines(path), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        fields = line.split(";")
        if len(fields) != 2 or not fields[0]:
            raise PreferenceFileError(path, number, f"Expected \"Name;Description\", got {line!r}")

        name, description = fields[0].strip(), fields[1].strip()
        if name in names:
            raise PreferenceFileError(path, number, f"Item {name!r} is listed twice")
        if name.startswith(NEGATION_PREFIX):
            raise PreferenceFileError(path, number, f"Item name {name!r} cannot start with {NEGATION_PREFIX!r}")

        names.add(name)
        items.append(Item(name=name, description=description))

    return items


def load_preferences(path: str, items: Sequence[Item]) -> Preferences:
    """
    Load one negotiator's preferences.

    Args:
        path: Preference file
        items: Items the file may rate

    Raises:
        PreferenceFileError: On the first problem found
    """
    criteria: List[Criterion] = []
    ratings: List[CriterionRating] = []
    ranked = False

    for number, raw in enumerate(_read_lines(path), start=1):
        line = raw.replace(" ", "").replace("\t", "")
        if not line or line.startswith("#"):
            continue

        # Criteria ranking
        if ">" in line:
            if ranked:
                raise PreferenceFileError(path, number, "Criteria are ranked more than once")
            ranked = True
            for label in line.split(">"):
                criterion = Criterion.find(label)
                if criterion is None:
                    raise PreferenceFileError(path, number, f"Criterion {label!r} was not recognized")
                if criterion in criteria:
                    raise PreferenceFileError(path, number, f"Criterion {label!r} is ranked twice")
                criteria.append(criterion)
            continue

        # Item evaluation
        elements = line.split(":")
        if len(elements) != 2:
            raise PreferenceFileError(path, number, "Expected \"ItemName: Crit=VALUE,...\"")

        item_name, values = elements
        item = next((it for it in items if it.name == item_name), None)
        if item is None:
            raise PreferenceFileError(path, number, f"Item {item_name!r} was not recognized")

        pairs = values.split(",")
        if len(pairs) != len(criteria):
            raise PreferenceFileError(
                path, number,
                f"Item {item_name!r} has {len(pairs)} criterion values, expected {len(criteria)}",
            )

        graded = set()
        for position, pair in enumerate(pairs, start=1):
            parts = pair.split("=")
            if len(parts) != 2:
                raise PreferenceFileError(
                    path, number, f"Item {item_name!r} has a syntax error at criterion value {position}"
                )

            criterion = Criterion.find(parts[0])
            if criterion is None or criterion not in criteria:
                raise PreferenceFileError(
                    path, number, f"Criterion {parts[0]!r} in item {item_name!r} was not recognized"
                )
            if criterion in graded:
                raise PreferenceFileError(
                    path, number, f"Criterion {parts[0]!r} in item {item_name!r} was graded twice"
                )
            graded.add(criterion)

            rating = Rating.find(parts[1])
            if rating is None:
                raise PreferenceFileError(
                    path, number, f"Value {parts[1]!r} in item {item_name!r} was not recognized"
                )
            ratings.append(CriterionRating(item, criterion, rating))

    return Preferences(criteria, ratings)
