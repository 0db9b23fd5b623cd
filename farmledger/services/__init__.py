from .store import RecordStore
from .storage import BlobStore
from .lookups import LookupService
from .dashboard import build_dashboard
