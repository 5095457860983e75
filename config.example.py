# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting without opening the source.
"""

ENV_VARS = {
    # App / logging
    "TASKLIST_APP_NAME": "App display name (default: tasklist).",
    "TASKLIST_LOG_LEVEL": "Console logging level (default: WARNING). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TASKLIST_DATA_DIR": "Local data directory (default: .local/tasklist).",
    "TASKLIST_TASKS_PATH": "Task file path (default: <data_dir>/tasks.txt).",
    "TASKLIST_LOG_DIR": "Directory for tasklist.log (default: <data_dir>).",
    # Behaviour
    "TASKLIST_SAVE_ON_EXIT": "Write the task file when the session ends (default: true).",
}
