"""
runtime - Session Shell
=======================

Question this layer answers:
"How is a session configured and run?"

Run methods:
    argonego --mode demo                      # sequential, deterministic
    argonego --mode threaded                  # one thread per agent
    argonego --mode batch --count 20          # randomized preferences

Programmatic:

```python
runtime = NegotiationRuntime(load_config("config.yaml"))
result = runtime.run()
runtime.shutdown()
```

The runtime does NOT:
- Decide moves (that's coordination)
- Know the payload grammar (that's protocol)
"""

from .config import AgentsConfig, Config, DataConfig, RunConfig, load_config
from .loader import load_items, load_preferences
from .runner import NegotiationRuntime, SessionResult, main

__all__ = [
    "AgentsConfig",
    "Config",
    "DataConfig",
    "RunConfig",
    "load_config",
    "load_items",
    "load_preferences",
    "NegotiationRuntime",
    "SessionResult",
    "main",
]
