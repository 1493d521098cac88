"""
Command core.

Components:
- instructions.py: classify a raw line into an Instruction
- parser.py: validate a line and extract the task / position / keyword it names
- errors.py: typed failures raised by the above and by storage
- state.py: AppState, the per-session task list + store
"""
