"""
Network settings.

A Stellar network is identified by its passphrase; the network id mixed into
every transaction hash is the SHA-256 of that passphrase.
"""

from __future__ import annotations
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .codec.hashes import sha256_bytes

logger = logging.getLogger(__name__)

PUBLIC_NETWORK_PASSPHRASE = "Public Global Stellar Network ; September 2015"
TESTNET_NETWORK_PASSPHRASE = "Test SDF Network ; September 2015"
FUTURENET_NETWORK_PASSPHRASE = "Test SDF Future Network ; October 2022"

ENV_PASSPHRASE = "STELLAR_NETWORK_PASSPHRASE"


class Network(BaseModel):
    """
    Network passphrase holder.

    Example:
        >>> Network.testnet().network_id.hex()[:8]
        'cee0302d'
    """
    passphrase: str = Field(alias="networkPassphrase", description="Network passphrase")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("passphrase")
    @classmethod
    def validate_passphrase(cls, v: str) -> str:
        if not v:
            raise ValueError("Network passphrase must not be empty")
        return v

    @property
    def network_id(self) -> bytes:
        """SHA-256 of the passphrase (32 bytes)."""
        return sha256_bytes(self.passphrase.encode("utf-8"))

    @classmethod
    def public(cls) -> Network:
        return cls(passphrase=PUBLIC_NETWORK_PASSPHRASE)

    @classmethod
    def testnet(cls) -> Network:
        return cls(passphrase=TESTNET_NETWORK_PASSPHRASE)

    @classmethod
    def futurenet(cls) -> Network:
        return cls(passphrase=FUTURENET_NETWORK_PASSPHRASE)

    @classmethod
    def from_env(cls, default: Optional[str] = TESTNET_NETWORK_PASSPHRASE) -> Network:
        """
        Read the passphrase from ``STELLAR_NETWORK_PASSPHRASE``.

        Args:
            default: Passphrase used when the variable is unset

        Raises:
            ValueError: If neither the variable nor a default is available
        """
        passphrase = os.environ.get(ENV_PASSPHRASE) or default
        if not passphrase:
            raise ValueError(f"{ENV_PASSPHRASE} is not set")
        logger.debug("Using network passphrase %r", passphrase)
        return cls(passphrase=passphrase)

    def to_dict(self) -> Dict[str, Any]:
        return {"networkPassphrase": self.passphrase}
