# newsdesk/utils/paths.py
from pathlib import Path

# project root (newsdesk/)
BASE_DIR = Path(__file__).resolve().parents[2]

# config and environment
CONFIG_PATH = BASE_DIR / 'config.yml'
ENV_DIR     = BASE_DIR / '.env'

# local storage used when no remote store is configured
DATA_DIR = BASE_DIR / 'data'
LOCAL_DB = DATA_DIR / 'local_storage.duckdb'
