from decouple import config


def _optional_int(value):
    """Cast helper for settings that may be left unset."""
    if value is None or str(value).strip() == "":
        return None
    return int(value)


# History Configuration
# Default number of entries returned by the most-recent-first history view
HISTORY_LIMIT = config('PLAYQUEUE_HISTORY_LIMIT', default=50, cast=int)

# Shuffle Configuration
# Seed for the shuffle random source; unset means nondeterministic
SHUFFLE_SEED = config('PLAYQUEUE_SHUFFLE_SEED', default=None, cast=_optional_int)

# Logging Configuration
LOG_LEVEL = config('PLAYQUEUE_LOG_LEVEL', default="INFO")
LOG_FILE = config('PLAYQUEUE_LOG_FILE', default=None)

# Database Configuration
DB_NAME = config('DB_NAME', default='mt.db')
