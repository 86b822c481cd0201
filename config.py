"""
Configuration constants for the sheet data server.
Centralizes the spreadsheet defaults and the partition layout.
"""
from typing import Final

# Default spreadsheet / sheet (overridable via environment, see env_loader)
DEFAULT_SPREADSHEET_ID: Final[str] = "1IbHBh5SACa505qLB6eNZEARwRofDme_p1NmyRCL7xPA"
DEFAULT_SHEET_NAME: Final[str] = "DB"

# Read-only access is enough: nothing is ever written back
SCOPES: Final[list[str]] = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
]

# Partition layout (partition -> cell range, role).
# Order matters: ranges are requested and returned in this order.
PARTITION_LAYOUT: Final[list[tuple[str, str, str]]] = [
    ("normals", "A4:A", "list"),
    ("newbies", "B4:B", "list"),
    ("leaders", "C4:C", "list"),
    ("filter_pairs", "G4:H40", "pair"),
]

# List partitions summed into total_items
LIST_PARTITIONS: Final[tuple[str, ...]] = ("normals", "newbies", "leaders")

# Server
SERVER_NAME: Final[str] = "sheet-data"
DEFAULT_PORT: Final[int] = 8080
ALLOWED_HOSTS: Final[list[str]] = [
    "localhost:8080",
    "127.0.0.1:8080",
]
