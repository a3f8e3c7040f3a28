import os
from dotenv import load_dotenv

load_dotenv()

# External OpenSSL program used by the subprocess path
OPENSSL_BIN = os.getenv("CSRGEN_OPENSSL_BIN", "openssl")

# Archive destination; empty means "resolve the user's downloads folder"
DOWNLOAD_DIR = os.getenv("CSRGEN_DOWNLOAD_DIR", "")
# Parent directory for per-invocation OpenSSL working dirs (empty: system temp)
WORK_DIR = os.getenv("CSRGEN_WORK_DIR", "")
AUTO_SAVE = os.getenv("CSRGEN_AUTO_SAVE", "true").lower() == "true"

LOG_LEVEL = os.getenv("CSRGEN_LOG_LEVEL", "INFO").upper()

# Form defaults
DEFAULT_KEY_SIZE = os.getenv("CSRGEN_DEFAULT_KEY_SIZE", "2048")
DEFAULT_HASH = os.getenv("CSRGEN_DEFAULT_HASH", "sha256")

KEY_SIZES = ("2048", "4096")
HASH_ALGORITHMS = ("sha256", "sha384", "sha512")
