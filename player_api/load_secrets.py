import os
import pathlib
from dotenv import load_dotenv

load_dotenv()

db_backend = os.getenv("DB_BACKEND", "sqlite")
user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST", "localhost")
port = os.getenv("DB_PORT", "5432")
db_name = os.getenv("DB_NAME")
db_pool_size = int(os.getenv("DB_POOL_SIZE", "20"))
db_max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "20"))
db_echo = os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")
sqlite_path = os.getenv(
    "SQLITE_PATH", str(pathlib.Path(__file__).parents[1] / "players.sqlite3")
)
seed_players_on_startup = os.getenv("SEED_DEFAULT_PLAYERS", "false").lower() in ("1", "true", "yes")
log_level = os.getenv("LOG_LEVEL", "INFO").upper()

if __name__ == "__main__":
    print(db_backend, user, host, port, db_name, db_pool_size, db_max_overflow, sqlite_path, seed_players_on_startup, log_level)
