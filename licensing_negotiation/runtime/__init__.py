"""
RUNTIME - Shell Layer
=====================

Question this layer answers:
"How is it started?"

Run methods:
    negotiate-license --mode demo     # Rule-based roles (no API key)
    negotiate-license --mode llm      # Gemini roles

What the runtime does:
- Load configuration
- Choose the proposal generator
- Build the shared context
- Print results

What the runtime does NOT do:
- Decide proposals (that's agents)
- Manage rounds (that's orchestration)
"""

from .config import Config, load_config
from .runner import NegotiationRuntime, RuntimeConfig, main

__all__ = ["Config", "load_config", "NegotiationRuntime", "RuntimeConfig", "main"]
