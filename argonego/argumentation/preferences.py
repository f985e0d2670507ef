"""
Preference Model
================

Each negotiator ranks the criteria (most important first) and rates every
item on every ranked criterion. From that it derives:

    importance(c) = N - rank(c)       (0 if c is not ranked)
    score(item)   = sum(rating.value * importance(criterion))

An item is acceptable when it is in the top 10% of a reference set.

Preferences are built once (loaded from a file or randomized) and never
mutated afterwards.
"""

import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .catalog import Criterion, CriterionRating, Item, Rating


class Preferences:
    """
    Ranked criteria plus a set of CriterionRating facts.

    Example:
        prefs = Preferences(
            criteria=[Criterion.POWER, Criterion.COST],
            ratings=[CriterionRating(a, Criterion.POWER, Rating.GOOD), ...],
        )
        prefs.score(a)
    """

    def __init__(
        self,
        criteria: Sequence[Criterion],
        ratings: Iterable[CriterionRating] = (),
    ):
        if len(set(criteria)) != len(criteria):
            raise ValueError(f"Criteria must be unique, got {list(criteria)}")

        self._criteria: Tuple[Criterion, ...] = tuple(criteria)
        self._ratings: Tuple[CriterionRating, ...] = tuple(ratings)
        self._index: Dict[Tuple[Item, Criterion], Rating] = {}
        for fact in self._ratings:
            self._index.setdefault((fact.item, fact.criterion), fact.rating)

    @classmethod
    def randomized(cls, items: Iterable[Item], rng: random.Random) -> "Preferences":
        """Shuffle the whole criterion catalog and rate every item at random."""
        criteria = list(Criterion)
        rng.shuffle(criteria)
        ratings = [
            CriterionRating(item, criterion, rng.choice(list(Rating)))
            for item in items
            for criterion in criteria
        ]
        return cls(criteria, ratings)

    @property
    def criteria(self) -> Tuple[Criterion, ...]:
        return self._criteria

    @property
    def ratings(self) -> Tuple[CriterionRating, ...]:
        return self._ratings

    def items(self) -> List[Item]:
        """Rated items, in the order their first fact was recorded."""
        seen: List[Item] = []
        for fact in self._ratings:
            if fact.item not in seen:
                seen.append(fact.item)
        return seen

    # ============================================================
    # SCORING
    # ============================================================

    def rate(self, item: Item, criterion: Criterion) -> Optional[Rating]:
        return self._index.get((item, criterion))

    def importance(self, criterion: Criterion) -> int:
        if criterion not in self._criteria:
            return 0
        return len(self._criteria) - self._criteria.index(criterion)

    def score(self, item: Item) -> int:
        return sum(
            fact.rating.value * self.importance(fact.criterion)
            for fact in self._ratings
            if fact.item == item
        )

    def best(self, candidates: Iterable[Item]) -> Optional[Item]:
        """Highest scoring candidate; the first one wins ties."""
        best_item = None
        best_score = 0
        for item in candidates:
            score = self.score(item)
            if best_item is None or score > best_score:
                best_item = item
                best_score = score
        return best_item

    def is_acceptable(self, item: Item, reference: Iterable[Item]) -> bool:
        """
        Is `item` in the top 10% of `reference`?

        The threshold is the score found ceil(n / 10) places from the top of
        the reference scores. An empty reference set accepts nothing.
        """
        scores = sorted(self.score(it) for it in reference)
        if not scores:
            return False

        top = min(-(-len(scores) // 10), len(scores))
        threshold = scores[len(scores) - top]
        return self.score(item) >= threshold

    # ============================================================
    # CRITERIA ORDERING
    # ============================================================

    def better_criterion(self, a: Criterion, b: Criterion) -> bool:
        """Is `a` strictly more important than `b`?"""
        return self.importance(a) > self.importance(b)

    def best_criterion_except(self, excluded: Iterable[Criterion]) -> Optional[Criterion]:
        excluded = set(excluded)
        for criterion in self._criteria:
            if criterion not in excluded:
                return criterion
        return None

    def describe(self) -> str:
        """Printable rendering (not a preference file)."""
        lines = ["--- PREFERENCES ---", " > ".join(c.label for c in self._criteria)]
        for item in self.items():
            lines.append("")
            lines.append(f"{item.name}:")
            for criterion in self._criteria:
                rating = self.rate(item, criterion)
                lines.append(f"\t{criterion.label} = {rating.label if rating else '?'}")
        lines.append("-------------------")
        return "\n".join(lines)
