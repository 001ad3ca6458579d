"""
Client Orbit — Configuration: source URLs, timeouts, column mapping, demo data.
"""
import os

# ---------------------------------------------------------------------------
# Sources (override with CLIENT_ORBIT_* env vars for deployment)
# ---------------------------------------------------------------------------
SHEET_URL = os.environ.get(
    "CLIENT_ORBIT_SHEET_URL",
    "https://docs.google.com/spreadsheets/d/1CWGM9vw2CllskVpekbX3XQ7y9Hdyh70SaJjEstkACvM/export?format=csv&gid=0",
)
PROXY_URL = os.environ.get("CLIENT_ORBIT_PROXY_URL", "https://api.allorigins.win/get")
PROXY_URL_PARAM = "url"

# Deadline applied to each network stage (primary, proxy) separately
FETCH_TIMEOUT_SECONDS = float(os.environ.get("CLIENT_ORBIT_FETCH_TIMEOUT", "10"))

# ---------------------------------------------------------------------------
# Column mapping from spreadsheet headers → ClientRecord attributes
# ---------------------------------------------------------------------------
COLUMN_MAP = {
    "Client Name": "name",
    "Total Items": "item_count",
    "Total Prices": "total_value",
    "Status": "status",
    "Email": "email",
}

# ---------------------------------------------------------------------------
# Status canonicalization (order matters, first matching bucket wins)
# ---------------------------------------------------------------------------
STATUS_BUCKETS = [
    ("active", ("active", "completed")),
    ("pending", ("pending", "in progress")),
]

UNKNOWN_STATUS_LABEL = "Unknown"

# ---------------------------------------------------------------------------
# Chart defaults
# ---------------------------------------------------------------------------
CHART_SERIES_LIMIT = 10
CHART_LABEL_LENGTH = 10

# ---------------------------------------------------------------------------
# Demo records: shown when neither the sheet nor the proxy is reachable
# ---------------------------------------------------------------------------
FALLBACK_ROWS = [
    {
        "Client Name": "TechCorp Solutions",
        "Total Items": "25",
        "Total Prices": "$12,500",
        "Status": "Active",
        "Email": "contact@techcorp.com",
    },
    {
        "Client Name": "Digital Innovations Ltd",
        "Total Items": "18",
        "Total Prices": "$8,750",
        "Status": "Completed",
        "Email": "admin@digitalinnovations.com",
    },
    {
        "Client Name": "Future Systems Inc",
        "Total Items": "42",
        "Total Prices": "$21,000",
        "Status": "In Progress",
        "Email": "info@futuresystems.com",
    },
    {
        "Client Name": "Cyber Solutions",
        "Total Items": "33",
        "Total Prices": "$16,800",
        "Status": "Active",
        "Email": "hello@cybersolutions.com",
    },
    {
        "Client Name": "Quantum Enterprises",
        "Total Items": "15",
        "Total Prices": "$7,200",
        "Status": "Pending",
        "Email": "contact@quantum.com",
    },
]
