"""
transport - Agent Communication
===============================

Question this layer answers:
"How do messages move between agents?"

- Agent Cards: who is reachable, in which role (AgentCard)
- Discovery: finding agents by role (AgentRegistry)
- Delivery: FIFO inbox per address (LocalChannel)

Transport is intentionally separate from negotiation logic.

Transport does NOT:
- Know negotiation state
- Parse payloads
- Decide when a session ends
"""

from .channel import AgentCard, AgentRegistry, LocalChannel

__all__ = ["AgentCard", "AgentRegistry", "LocalChannel"]
