from physio.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
USERS_FILE = DATA_DIR / 'users.json'
CONTENT_FILE = DATA_DIR / 'content.json'

__all__ = ['DATA_DIR', 'USERS_FILE', 'CONTENT_FILE']
