"""
Runtime - The Session Shell
===========================

This is THE SHELL - the entrypoint that wraps the entire system.

It provides:
- Session setup (items, preferences, channel, agents, tracer)
- Two ways to drive the agents:
    sequential  one atomic reaction at a time, round-robin, deterministic
    threaded    one thread per agent, each blocking on its own inbox
- A CLI for demo, threaded and batch runs

Run methods:
    argonego --mode demo --config config.yaml
    argonego --mode threaded --config config.yaml
    argonego --mode batch --count 20 --seed 1
"""

import argparse
import random
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence
from uuid import uuid4

from langsmith import traceable

from .config import Config, RunConfig, load_config
from .loader import load_items, load_preferences
from ..agents.mediator import Mediator
from ..agents.negotiator import Negotiator
from ..argumentation.catalog import Item
from ..argumentation.preferences import Preferences
from ..evaluation.judge import Judgment, NegotiationJudge
from ..evaluation.tracer import NegotiationTracer
from ..transport.channel import LocalChannel


# ============================================================================
# Session Result
# ============================================================================

@dataclass
class SessionResult:
    """Outcome of one negotiation session."""
    session_id: str
    selected: List[Item] = field(default_factory=list)
    cancelled: bool = False
    finished: bool = False
    rounds: int = 0
    steps: int = 0
    messages: int = 0
    violations: int = 0
    errors: int = 0

    # Timing
    start_time: Optional[float] = None
    end_time: Optional[float] = None

    def duration_ms(self) -> float:
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time) * 1000
        return 0.0


# ============================================================================
# Negotiation Runtime
# ============================================================================

class NegotiationRuntime:
    """
    Builds and runs one negotiation session.

    Items and preferences normally come from the files named in the
    config; tests may inject them directly. Without preference files every
    negotiator gets randomized preferences drawn from the seeded RNG.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        items: Optional[Sequence[Item]] = None,
        preferences: Optional[Dict[str, Preferences]] = None,
    ):
        self.config = config or Config.default()
        self._injected_items = list(items) if items is not None else None
        self._injected_preferences = preferences
        self._initialized = False

        self.session_id = str(uuid4())
        self.rng: Optional[random.Random] = None
        self.items: List[Item] = []
        self.preferences: Dict[str, Preferences] = {}
        self.channel: Optional[LocalChannel] = None
        self.mediator: Optional[Mediator] = None
        self.negotiators: List[Negotiator] = []
        self.tracer = NegotiationTracer()

    @property
    def verbose(self) -> bool:
        return self.config.run.verbose

    def _log(self, text: str) -> None:
        if self.verbose:
            print(f"[Runtime] {text}")

    def initialize(self) -> None:
        """
        Load data and wire the agents together.

        Raises:
            PreferenceFileError: If the item or a preference file cannot be loaded
            ValueError: If the configuration does not describe two negotiators
                with items to negotiate
        """
        if self._initialized:
            return

        self._log("Initializing...")
        run = self.config.run
        names = self.config.agents.negotiators
        if len(names) != 2 or names[0] == names[1]:
            raise ValueError(f"Exactly two distinct negotiators are required, got {names}")

        self.rng = random.Random(run.seed)

        # Items
        if self._injected_items is not None:
            self.items = list(self._injected_items)
        elif self.config.data.items_path:
            self.items = load_items(self.config.data.items_path)
            self._log(f"Loaded {len(self.items)} items from {self.config.data.items_path}")
        else:
            raise ValueError("No items to negotiate: set data.items_path")

        # Preferences
        if self._injected_preferences is not None:
            self.preferences = dict(self._injected_preferences)
        elif self.config.data.preference_paths:
            paths = self.config.data.preference_paths
            if len(paths) != len(names):
                raise ValueError(f"Expected {len(names)} preference files, got {len(paths)}")
            self.preferences = {
                name: load_preferences(path, self.items) for name, path in zip(names, paths)
            }
            self._log("Preferences loaded")
        else:
            self.preferences = {
                name: Preferences.randomized(self.items, self.rng) for name in names
            }
            self._log("Preferences randomized")

        # Channel and agents
        self.channel = LocalChannel()
        mediator_name = self.config.agents.mediator
        self.channel.register(mediator_name, role="mediator")
        for name in names:
            self.channel.register(name, role="negotiator")

        self.mediator = Mediator(
            mediator_name,
            self.items,
            self.channel.discover("negotiator"),
            channel=self.channel,
            rng=self.rng,
            verbose=self.verbose,
            session_id=self.session_id,
        )
        self.negotiators = [
            Negotiator(
                name,
                self.preferences[name],
                self.items,
                peer=names[1 - i],
                mediator=mediator_name,
                channel=self.channel,
                verbose=self.verbose,
                session_id=self.session_id,
            )
            for i, name in enumerate(names)
        ]

        # Tracing
        self.tracer.start_trace(self.session_id)
        self.channel.subscribe(self.tracer.message_logger(self.session_id))

        self._initialized = True
        self._log("Ready")

    @traceable(name="negotiation_session", run_type="chain")
    def run(self) -> SessionResult:
        """
        Run the session in the configured mode.

        Sent to LangSmith as one run when LANGSMITH_TRACING is set.
        """
        self.initialize()
        if self.config.run.mode == "threaded":
            return self.run_threaded()
        return self.run_sequential()

    def run_sequential(self) -> SessionResult:
        """
        Round-robin: every agent gets one step per pass.

        Stops when the mediator is finished, when nobody can act, or after
        max_steps reactions.
        """
        self.initialize()
        result = SessionResult(session_id=self.session_id, start_time=time.time())
        max_steps = self.config.run.max_steps
        agents = [self.mediator, *self.negotiators]

        steps = 0
        while not self.mediator.finished and steps < max_steps:
            progressed = False
            for agent in agents:
                if steps >= max_steps:
                    break
                if agent.step():
                    steps += 1
                    progressed = True
            if not progressed:
                self._log("No agent can act, stopping")
                break

        # Let the negotiators consume what is left (e.g. a CANCEL notice)
        while steps < max_steps and any([n.step() for n in self.negotiators]):
            steps += 1

        if steps >= max_steps and not self.mediator.finished:
            self._log(f"Stopped after {max_steps} steps")

        result.steps = steps
        return self._finish(result)

    def run_threaded(self) -> SessionResult:
        """
        One thread per agent, each blocking on its inbox.

        The channel is closed once the mediator is finished; the
        negotiators then drain their inboxes and stop.
        """
        self.initialize()
        result = SessionResult(session_id=self.session_id, start_time=time.time())

        threads = [
            threading.Thread(target=negotiator.run, name=negotiator.name, daemon=True)
            for negotiator in self.negotiators
        ]
        mediator_thread = threading.Thread(target=self.mediator.run, name=self.mediator.name, daemon=True)

        for thread in threads:
            thread.start()
        mediator_thread.start()

        mediator_thread.join()
        self.channel.close()
        for thread in threads:
            thread.join()

        result.steps = sum(n.fsm.transitions for n in self.negotiators)
        return self._finish(result)

    def _finish(self, result: SessionResult) -> SessionResult:
        result.end_time = time.time()
        result.selected = list(self.mediator.selected)
        result.cancelled = self.mediator.cancelled
        result.finished = self.mediator.finished
        result.rounds = self.mediator.rounds
        result.messages = len(self.channel.history())
        result.violations = sum(n.violations for n in self.negotiators)
        result.errors = sum(n.errors for n in self.negotiators)

        self.tracer.log_outcome(
            self.session_id,
            selected=[item.name for item in result.selected],
            cancelled=result.cancelled,
            rounds=result.rounds,
            reason=None if result.finished else "step limit reached",
        )
        return result

    def judge(self, result: SessionResult) -> List[Judgment]:
        """Rule-based evaluation of a finished session."""
        return NegotiationJudge().evaluate(
            pool_size=len(self.items),
            rounds=self.mediator.history,
            cancelled=result.cancelled,
            preferences=self.preferences,
            messages=result.messages,
            violations=result.violations,
            errors=result.errors,
        )

    def shutdown(self) -> None:
        """Clean shutdown."""
        self._log("Shutting down...")
        if self.channel is not None:
            self.channel.close()
        self.tracer.end_trace(self.session_id)
        self._initialized = False


# ============================================================================
# CLI Entrypoints
# ============================================================================

def run_demo(runtime: NegotiationRuntime) -> SessionResult:
    """Run a single session and print its summary."""
    mode = runtime.config.run.mode
    print("=" * 50)
    print(f"DEMO MODE ({mode})")
    print("=" * 50 + "\n")

    runtime.initialize()
    if runtime.verbose:
        for name, prefs in runtime.preferences.items():
            print(f"[{name}]\n{prefs.describe()}\n")

    result = runtime.run()
    judge = NegotiationJudge()
    judgments = runtime.judge(result)

    print("\n" + "=" * 50)
    print("SUMMARY")
    print("=" * 50)
    print(f"Session: {result.session_id}")
    print(f"Selected: {', '.join(item.name for item in result.selected) or 'none'}")
    print(f"Cancelled: {'Yes' if result.cancelled else 'No'}")
    print(f"Rounds: {result.rounds}")
    print(f"Messages: {result.messages}")
    print(f"Duration: {result.duration_ms():.2f}ms")
    print(judge.summary(judgments))
    print("=" * 50)
    return result


def run_batch(config: Config, count: int, items: Optional[Sequence[Item]] = None) -> List[SessionResult]:
    """Run `count` sessions with randomized preferences for evaluation."""
    print("=" * 50)
    print(f"BATCH MODE ({count} negotiations)")
    print("=" * 50 + "\n")

    base_seed = config.run.seed if config.run.seed is not None else 0
    judge = NegotiationJudge()
    results = []
    scores = []

    for i in range(count):
        session_config = replace(
            config,
            data=replace(config.data, preference_paths=[]),
            run=replace(config.run, seed=base_seed + i, verbose=False),
        )
        runtime = NegotiationRuntime(session_config, items=items)
        try:
            result = runtime.run()
            judgments = runtime.judge(result)
        finally:
            runtime.shutdown()

        results.append(result)
        scores.append(judge.overall_score(judgments))

        if config.run.verbose:
            status = "✗" if result.cancelled else "✓"
            print(f"  [{i+1}] {status} {len(result.selected)} items in {result.rounds} rounds ({result.messages} messages)")

    # Summary
    completed = sum(1 for r in results if r.finished and not r.cancelled)
    cancelled = sum(1 for r in results if r.cancelled)
    avg_rounds = sum(r.rounds for r in results) / len(results) if results else 0
    avg_score = sum(scores) / len(scores) if scores else 0

    print("\n" + "=" * 50)
    print("BATCH SUMMARY")
    print("=" * 50)
    print(f"Total: {count}")
    print(f"Completed: {completed}")
    print(f"Cancelled: {cancelled}")
    print(f"Avg Rounds: {avg_rounds:.1f}")
    print(f"Avg Score: {avg_score:.2f}")
    print("=" * 50)
    return results


def main(argv: Optional[Sequence[str]] = None):
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Argumentation-based mediated negotiation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  argonego --mode demo --config config.yaml      # Sequential session
  argonego --mode threaded --config config.yaml  # One thread per agent
  argonego --mode batch --count 20 --seed 1      # Randomized preferences
"""
    )

    parser.add_argument("--mode", choices=["demo", "threaded", "batch"], default="demo",
                        help="demo=sequential session, threaded=one thread per agent, batch=evaluation")
    parser.add_argument("--config", type=str, default="config.yaml", help="Config file path")
    parser.add_argument("--count", type=int, default=10, help="Batch count")
    parser.add_argument("--seed", type=int, help="Random seed (overrides the config)")
    parser.add_argument("--quiet", action="store_true")

    args = parser.parse_args(argv)

    config = load_config(args.config)
    run = config.run
    config.run = RunConfig(
        mode="threaded" if args.mode == "threaded" else "sequential",
        seed=args.seed if args.seed is not None else run.seed,
        max_steps=run.max_steps,
        verbose=run.verbose and not args.quiet,
    )

    if args.mode == "batch":
        run_batch(config, args.count)
        return

    runtime = NegotiationRuntime(config)
    try:
        run_demo(runtime)
    finally:
        runtime.shutdown()


if __name__ == "__main__":
    main()
