"""Sheet fetching, parsing, and normalization. The store lives in .store."""
from .errors import SourceError, NetworkError, ProxyEnvelopeError, EmptySourceError
from .schemas import CanonicalStatus, ClientRecord, DataSnapshot, SnapshotSource
from .normalize import normalize_currency, normalize_integer, normalize_status, normalize_frame
from .parser import parse_csv_text
from .fetcher import SourceFetcher, SourceText
from .loader import LoadResult, load_records, fallback_records
