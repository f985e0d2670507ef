"""
Negotiation Graph
=================

One ProposalNode per proposed item. Under each proposal hangs a linear
chain of arguments, each attacking the one before it:

    Proposal: A
        A <= Power=GOOD                       (defends A)
        not A <= Cost=BAD, Cost > Power       (attacks the defence)
        A <= Noise=GOOD, Noise > Cost         (attacks the attack)

Winning alternates down the chain: the deepest node always wins, and a
proposal wins when the head of its chain wins.
"""

from typing import Iterable, Iterator, List, Optional

from .argument import Argument, ComparativePremise, EvaluativePremise
from .catalog import NEGATIVE_RATINGS, POSITIVE_RATINGS, Item
from .preferences import Preferences
from ..errors import ArgumentRejectedError


class ArgumentNode:
    """An argument and the single node attacking it (if any)."""

    def __init__(self, argument: Argument):
        self.argument = argument
        self.attacked_by: Optional["ArgumentNode"] = None

    def is_winning(self) -> bool:
        # Count the attackers below this node; an even count means it wins
        winning = True
        node = self.attacked_by
        while node is not None:
            winning = not winning
            node = node.attacked_by
        return winning


class ProposalNode:
    """Root of one chain: the proposal of `item`."""

    def __init__(self, item: Item, initiated_by_self: bool):
        self.item = item
        self.initiated_by_self = initiated_by_self
        self.defended_by: Optional[ArgumentNode] = None

    def chain(self) -> Iterator[ArgumentNode]:
        node = self.defended_by
        while node is not None:
            yield node
            node = node.attacked_by

    def leaf(self) -> Optional[ArgumentNode]:
        last = None
        for node in self.chain():
            last = node
        return last

    def is_winning(self) -> bool:
        if self.defended_by is None:
            return False
        return self.defended_by.is_winning()

    def can_add(self, argument: Argument) -> bool:
        leaf = self.leaf()
        if leaf is None:
            return True
        if not all(argument.stronger_than(node.argument) for node in self.chain()):
            return False
        return argument.attacks(leaf.argument)

    def add(self, argument: Argument) -> ArgumentNode:
        node = ArgumentNode(argument)
        leaf = self.leaf()
        if leaf is None:
            self.defended_by = node
        else:
            leaf.attacked_by = node
        return node


class NegotiationGraph:
    """
    All proposals and argument chains of the current round.

    Owned by a single negotiator and rebuilt at the start of every round.
    Use clone() to simulate a move without touching the real graph.
    """

    def __init__(self):
        self._proposals: List[ProposalNode] = []

    def proposal(self, item: Item) -> Optional[ProposalNode]:
        for proposal in self._proposals:
            if proposal.item == item:
                return proposal
        return None

    # ============================================================
    # PROPOSALS
    # ============================================================

    def _add_proposal(self, item: Item, initiated_by_self: bool) -> ProposalNode:
        if self.proposal(item) is not None:
            raise ArgumentRejectedError(f"Item {item.name!r} has already been proposed")
        proposal = ProposalNode(item, initiated_by_self)
        self._proposals.append(proposal)
        return proposal

    def initiate_proposal(self, item: Item) -> ProposalNode:
        """Register a proposal made by the graph's owner."""
        return self._add_proposal(item, True)

    def receive_proposal(self, item: Item) -> ProposalNode:
        """Register a proposal made by the peer."""
        return self._add_proposal(item, False)

    def proposed_items(self) -> List[Item]:
        return [proposal.item for proposal in self._proposals]

    def items_proposed_by_peer(self) -> List[Item]:
        return [p.item for p in self._proposals if not p.initiated_by_self]

    def is_winning(self, item: Item) -> bool:
        proposal = self.proposal(item)
        return proposal is not None and proposal.is_winning()

    def leaf(self, item: Item) -> Optional[Argument]:
        """Deepest argument on the item's chain, if any."""
        proposal = self.proposal(item)
        if proposal is None:
            return None
        node = proposal.leaf()
        return node.argument if node else None

    # ============================================================
    # ARGUMENTS
    # ============================================================

    def can_add(self, argument: Argument) -> bool:
        """
        Can `argument` become the new leaf of its item's chain?

        An undefended proposal accepts any argument. Otherwise the argument
        must be stronger than every argument already on the chain and must
        attack the current leaf.
        """
        proposal = self.proposal(argument.item)
        if proposal is None:
            return False
        return proposal.can_add(argument)

    def add(self, argument: Argument) -> None:
        """Append `argument` as the new leaf. Callers validate with can_add first."""
        proposal = self.proposal(argument.item)
        if proposal is None:
            raise ArgumentRejectedError(f"No proposal for item {argument.item.name!r}")
        proposal.add(argument)

    def clone(self) -> "NegotiationGraph":
        """Deep copy of every proposal and chain; no node is shared."""
        cloned = NegotiationGraph()
        for proposal in self._proposals:
            copy = cloned._add_proposal(proposal.item, proposal.initiated_by_self)
            for node in proposal.chain():
                copy.add(node.argument)
        return cloned

    def generate_best_argument(
        self,
        item: Item,
        preferences: Preferences,
        known_items: Iterable[Item],
    ) -> Optional[Argument]:
        """
        Build the next argument on `item`'s chain, or None.

        The argument defends the item when it is acceptable against
        `known_items` and attacks it otherwise. When the chain already has a
        leaf, criteria are tried from most to least important until one is
        less important than the leaf's criterion. An undefended proposal is
        only ever defended, never attacked.
        """
        proposal = self.proposal(item)
        if proposal is None:
            return None

        polarity = preferences.is_acceptable(item, known_items)
        eligible = POSITIVE_RATINGS if polarity else NEGATIVE_RATINGS
        excluded = []

        leaf = proposal.leaf()
        if leaf is not None:
            leaf_criterion = leaf.argument.evaluative.criterion
            while True:
                criterion = preferences.best_criterion_except(excluded)
                if criterion is None:
                    break
                if preferences.better_criterion(leaf_criterion, criterion):
                    break

                rating = preferences.rate(item, criterion)
                if rating in eligible:
                    candidate = Argument(
                        item=item,
                        polarity=polarity,
                        evaluative=EvaluativePremise(criterion, rating),
                        comparative=ComparativePremise(criterion, leaf_criterion),
                    )
                    if proposal.can_add(candidate):
                        return candidate
                excluded.append(criterion)

        elif polarity:
            while True:
                criterion = preferences.best_criterion_except(excluded)
                if criterion is None:
                    break
                rating = preferences.rate(item, criterion)
                if rating in eligible:
                    return Argument(item, True, EvaluativePremise(criterion, rating))
                excluded.append(criterion)

        return None

    def describe(self) -> str:
        lines = ["-- NEGOTIATION GRAPH --"]
        for proposal in self._proposals:
            lines.append(f"Proposal: {proposal.item.name}")
            for depth, node in enumerate(proposal.chain(), start=1):
                lines.append("\t" * depth + node.argument.to_payload())
        lines.append("-----------------------")
        return "\n".join(lines)
