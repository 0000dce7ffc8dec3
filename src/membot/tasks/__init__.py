"""
Task subsystem.

Components:
- task_models.py: data structures (Task variants, TaskKind, TaskStatus)
- task_store.py: in-memory positional store + query/update helpers
- task_codec.py: line codec for the task file (base64 fields, " | " separated)
- task_file.py: reading/writing the task file on disk
"""
