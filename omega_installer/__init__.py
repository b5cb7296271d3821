"""OMEGA toolchain installer (state-driven, resumable).

Core design goals:
- One build strategy, chosen from the recipe's declared build prerequisites
- Declarative install layout (required vs optional sources)
- Never clobber an existing omega.toml
- Post-install smoke test of the installed compiler
- Centralized logging
"""

__all__ = []
