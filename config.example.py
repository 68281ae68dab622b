# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "DAYBOOK_APP_NAME": "App display name (default: daybook).",
    "DAYBOOK_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Connectors
    "DAYBOOK_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Board behavior
    "DAYBOOK_PRUNE_EMPTY": (
        "Delete a list when its last task is deleted, and the date group when its last list goes "
        "(true/false, default: true). With false, lists and groups are only removed explicitly."
    ),
    # Paths (gitignored)
    "DAYBOOK_DATA_DIR": "Local data directory for the store and logs (default: .local/daybook).",
    "DAYBOOK_STORE_DB_PATH": (
        "SQLite slot store path (default: <data_dir>/daybook.sqlite3). "
        "Use :memory: for a throwaway session."
    ),
}
