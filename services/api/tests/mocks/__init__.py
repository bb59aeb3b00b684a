from .hasher import FakeHasher, AsyncHasherAdapter
from .traces import DummySpanContext, DummySpan, DummyTraceProvider
from .repositories import InMemoryUserRepository
