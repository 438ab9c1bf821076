"""
Runtime - The Shell
===================

This is THE SHELL - the entrypoint that wraps the entire system.

This file provides:
- Config loading and generator selection
- CLI for one-off negotiations
- An offline demo mode that needs no API key

Run methods:
    python -m licensing_negotiation.runtime.runner --mode demo
    python -m licensing_negotiation.runtime.runner --mode llm --config config.yaml
"""

import argparse
import asyncio
import sys
from dataclasses import dataclass
from typing import Optional

from ..agents.gemini import GeminiTextGenerator
from ..agents.generator import LLMProposalGenerator, ProposalGenerator
from ..agents.strategies import RuleBasedProposalGenerator
from ..context.song import SongProfile, build_negotiation_context
from ..evaluation.judge import SettlementJudge
from ..evaluation.tracer import NegotiationTracer
from ..orchestration.graph import NegotiationResult, run_negotiation
from ..protocol.errors import NegotiationError, ParseError
from .config import Config, load_config


# ============================================================================
# Runtime Configuration
# ============================================================================

@dataclass
class RuntimeConfig:
    """Runtime configuration (how to run, not what to negotiate)."""
    mode: str = "demo"              # demo, llm
    config_path: Optional[str] = None
    verbose: bool = True
    evaluate: bool = False

    # CLI overrides
    description: Optional[str] = None
    monthly_listeners: Optional[int] = None
    max_rounds: Optional[int] = None


# ============================================================================
# Runtime
# ============================================================================

class NegotiationRuntime:
    """
    Owns configuration and wiring for negotiations.

    Everything a negotiation needs is built here and passed down
    explicitly; nothing lives at module level.
    """

    def __init__(self, config: RuntimeConfig):
        self.runtime_config = config
        self.system_config: Optional[Config] = None
        self.tracer = NegotiationTracer()
        self._initialized = False

    def initialize(self) -> None:
        """Initialize the runtime."""
        if self._initialized:
            return

        if self.runtime_config.verbose:
            print(f"[Runtime] Initializing ({self.runtime_config.mode} mode)...")

        self.system_config = load_config(self.runtime_config.config_path)

        if self.runtime_config.max_rounds is not None:
            self.system_config.negotiation.max_rounds = self.runtime_config.max_rounds
        self.system_config.validate()

        self._initialized = True
        if self.runtime_config.verbose:
            print("[Runtime] Ready\n")

    def create_generator(self) -> ProposalGenerator:
        """Pick the proposal generator for the configured mode."""
        if self.runtime_config.mode == "llm":
            llm = self.system_config.llm
            return LLMProposalGenerator(
                GeminiTextGenerator(model=llm.model, temperature=llm.temperature)
            )

        demo = self.system_config.demo
        return RuleBasedProposalGenerator(anchors=demo.anchors, concession=demo.concession)

    def build_context(self) -> str:
        song = self.system_config.song
        profile = SongProfile(
            description=self.runtime_config.description or song.description,
            monthly_listeners=(
                self.runtime_config.monthly_listeners
                if self.runtime_config.monthly_listeners is not None
                else song.monthly_listeners
            ),
            title=song.title,
            artist=song.artist,
        )
        return build_negotiation_context(profile)

    async def run(self) -> NegotiationResult:
        """Run one negotiation with the configured generator."""
        if not self._initialized:
            self.initialize()

        context = self.build_context()
        negotiation = self.system_config.negotiation
        limits = self.system_config.limits

        if self.runtime_config.verbose:
            print("[Negotiation] Starting")
            print(f"  Context: {context}")
            print(f"  Max rounds: {negotiation.max_rounds}, tolerance: {negotiation.tolerance}")
            print()

        return await run_negotiation(
            context,
            generator=self.create_generator(),
            max_rounds=negotiation.max_rounds,
            tolerance=negotiation.tolerance,
            call_timeout_seconds=limits.call_timeout_seconds,
            deadline_seconds=limits.deadline_seconds,
            tracer=self.tracer,
            verbose=self.runtime_config.verbose,
        )

    def shutdown(self) -> None:
        """Clean shutdown."""
        if self.runtime_config.verbose:
            print("[Runtime] Shutting down...")
        self._initialized = False


# ============================================================================
# CLI Entrypoint
# ============================================================================

def print_summary(result: NegotiationResult) -> None:
    print("\n" + "=" * 50)
    print("SUMMARY")
    print("=" * 50)
    print(f"Session: {result.session_id}")
    print(f"Converged: {'Yes' if result.converged else 'No (best effort)'}")
    print(f"Rounds: {result.rounds}")
    print(f"Licensing Cost: ${result.settlement.licensing_cost}")
    print(f"Royalties Percent: {result.settlement.royalties_percent}%")
    print(f"Duration: {result.duration_ms:.2f}ms")
    print("=" * 50)


def main(argv=None) -> int:
    """CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Licensing terms negotiation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  negotiate-license --mode demo                      # Rule-based, no API key
  negotiate-license --mode llm --config config.yaml  # Gemini-backed roles
  negotiate-license --description "Lo-fi beat" --listeners 25000
""",
    )

    parser.add_argument("--mode", choices=["demo", "llm"], default="demo",
                        help="demo=rule-based roles, llm=Gemini roles (needs GOOGLE_API_KEY)")
    parser.add_argument("--config", type=str, help="Config file path")
    parser.add_argument("--description", type=str, help="Song description")
    parser.add_argument("--listeners", type=int, help="Monthly listeners")
    parser.add_argument("--max-rounds", type=int, help="Override the round budget")
    parser.add_argument("--evaluate", action="store_true", help="Print a judge summary")
    parser.add_argument("--quiet", action="store_true")

    args = parser.parse_args(argv)

    config = RuntimeConfig(
        mode=args.mode,
        config_path=args.config,
        verbose=not args.quiet,
        evaluate=args.evaluate,
        description=args.description,
        monthly_listeners=args.listeners,
        max_rounds=args.max_rounds,
    )
    runtime = NegotiationRuntime(config)

    try:
        runtime.initialize()
        result = asyncio.run(runtime.run())
    except ParseError as exc:
        print(f"[Error] Could not parse proposal: {exc}", file=sys.stderr)
        print(f"[Error] Cleaned response was: {exc.cleaned}", file=sys.stderr)
        return 1
    except NegotiationError as exc:
        print(f"[Error] {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"[Error] {exc}", file=sys.stderr)
        return 1
    finally:
        runtime.shutdown()

    print_summary(result)

    if config.evaluate:
        judge = SettlementJudge(max_rounds=runtime.system_config.negotiation.max_rounds)
        print()
        print(judge.summary(judge.evaluate(result)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
