"""
Task subsystem.

Components:
- models.py: data structures (TaskGroup, TaskList, Task, BoardState, Category)
- board.py: the Board and its cascade/atomic operations
- projections.py: incomplete counts and date grouping
- expansion.py: expand/collapse flags
- dates.py: D/M/YYYY helpers
- ids.py: monotonic id allocation
"""
