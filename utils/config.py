import os

# ==== catalog ====
# base URL of the remote collection API; the collection route is appended to this
CATALOG_BASE_URL = os.getenv("CATALOG_BASE_URL", "https://api.artic.edu/api/v1").rstrip("/")
