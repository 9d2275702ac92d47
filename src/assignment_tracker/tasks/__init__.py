"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskInput, enums, OpResult) + (de)serialization
- dates.py: strict due-date parsing and calendar-day arithmetic
- lifecycle.py: status transitions and time-on-task accounting
- categorize.py: urgency buckets, deadline labels, ordering, board views
- task_store.py: JSON file storage
- task_api.py: collection-level commands used by the rest of the app
- task_scheduler.py: periodic refresh loop
"""
