"""
Task subsystem.

Components:
- task_models.py: task variants (ToDo, Deadline, Event) and their record form
- task_list.py: ordered in-memory collection with 1-based positions
- task_store.py: flat-file mirror (load at startup, append/rewrite after changes)
"""
