"""Arch Linux auto-installer (Python-first, stage-driven).

Core design goals:
- Strictly ordered, fail-fast stages
- Operator decisions staged on the target disk before the chroot transition
- Credentials kept in memory only
- Durable intent records before every destructive action
- Centralized logging
"""

__all__ = []
