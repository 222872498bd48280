import os

# Server
BIND_HOST = os.getenv("BIND_HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
RELOAD = os.getenv("RELOAD", "false").lower() in ("1", "true", "yes")

# Client
HOST = os.getenv("HOST", "localhost")
MAX_PORT = 65535

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

ROOM_ID_MIN = 1000
ROOM_ID_MAX = 9999
ROOM_ID_LENGTH = 4
