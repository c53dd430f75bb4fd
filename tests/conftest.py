"""
Test bootstrap:
- Shared key pairs and network fixtures
- Keep STELLAR_NETWORK_PASSPHRASE from leaking into tests
"""
import pytest

from stellar_codec import KeyPair, Network


@pytest.fixture(autouse=True)
def _clean_network_env(monkeypatch):
    monkeypatch.delenv("STELLAR_NETWORK_PASSPHRASE", raising=False)


@pytest.fixture
def testnet():
    """Test network settings."""
    return Network.testnet()


@pytest.fixture
def fake_keypair():
    """Provide a deterministic key pair for testing."""
    # Use a deterministic seed for consistent test results
    return KeyPair.from_raw_ed25519_seed(bytes(range(32)))


@pytest.fixture
def other_keypair():
    """Second deterministic key pair, distinct from fake_keypair."""
    return KeyPair.from_raw_ed25519_seed(bytes(range(32, 64)))
