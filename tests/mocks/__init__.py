from .mock_store import MockInventoryStore
from .mock_transport import RecordingTransport
